"""
Capabilities a document type implements to be persisted by the facade.
"""

from typing import Any, Callable, Dict, Protocol, runtime_checkable


@runtime_checkable
class IDProvider(Protocol):
    def id(self) -> str:
        ...


@runtime_checkable
class IndexNameProvider(Protocol):
    def index_name(self) -> str:
        ...

    def to_dict(self) -> Dict[str, Any]:
        ...


@runtime_checkable
class IndexNameAndIDProvider(IDProvider, IndexNameProvider, Protocol):
    """A document that knows both its identity and its target index."""


# Receives the raw _source bytes, the 1-based ordinal, the server-reported
# total and whether this is the final item of the current page.
ItemHandler = Callable[[bytes, int, int, bool], None]
