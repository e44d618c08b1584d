"""
Error types raised by the Elasticsearch facade.
"""

from typing import List, Sequence


class ElasticFacadeError(Exception):
    """Base class for all facade errors."""


class NotAcknowledgedError(ElasticFacadeError):
    """Index creation was not acknowledged by the cluster."""

    def __init__(self, index: str):
        super().__init__(f"not acknowledged: {index}")
        self.index = index


class TooManyHitsError(ElasticFacadeError):
    """A lookup expected a single document but matched several."""

    def __init__(self, index: str, total: int):
        super().__init__(f"too many hits in {index}: {total}")
        self.index = index
        self.total = total


class EmptyInputError(ElasticFacadeError):
    """An operation was called with nothing to send."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: empty input")
        self.operation = operation


class EmptyResultError(ElasticFacadeError):
    """A search matched zero documents."""

    def __init__(self, index: str):
        super().__init__(f"empty result in {index}")
        self.index = index


class EmptyResponseError(ElasticFacadeError):
    """The engine answered without the expected payload."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: empty response")
        self.operation = operation


class OperationError(ElasticFacadeError):
    """
    Transport or protocol failure tagged with the operation that raised it.

    The cause is chained as ``__cause__`` on construction, so errors that
    are collected rather than raised keep the original traceback too.
    """

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause
        self.__cause__ = cause


class FetchError(OperationError):
    """A scroll page could not be fetched."""


class EnumerationCancelled(ElasticFacadeError):
    """Enumeration stopped because cancellation was requested."""


class EnumerationError(ElasticFacadeError):
    """
    One or more failures collected during a scroll enumeration.

    ``errors`` keeps them in the order they happened. An enumeration that
    finishes with no errors does not raise at all.
    """

    def __init__(self, errors: Sequence[BaseException]):
        if not errors:
            raise ValueError("EnumerationError needs at least one error")
        self.errors: List[BaseException] = list(errors)
        if len(self.errors) == 1:
            message = f"1 error occurred: {self.errors[0]}"
        else:
            details = "; ".join(str(e) for e in self.errors)
            message = f"{len(self.errors)} errors occurred: {details}"
        super().__init__(message)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
