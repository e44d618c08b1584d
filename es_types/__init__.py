"""
Type definitions for the Elasticsearch facade.
"""

from .primitives import (
    SortOrder,
    FieldSort,
    SearchParameters,
    SearchResponse,
    Backoff,
    BulkProcessorParameters,
)

from .providers import (
    IDProvider,
    IndexNameProvider,
    IndexNameAndIDProvider,
    ItemHandler,
)

from .errors import (
    ElasticFacadeError,
    NotAcknowledgedError,
    TooManyHitsError,
    EmptyInputError,
    EmptyResultError,
    EmptyResponseError,
    OperationError,
    FetchError,
    EnumerationCancelled,
    EnumerationError,
)

__all__ = [
    # Primitives
    "SortOrder",
    "FieldSort",
    "SearchParameters",
    "SearchResponse",
    "Backoff",
    "BulkProcessorParameters",
    # Providers
    "IDProvider",
    "IndexNameProvider",
    "IndexNameAndIDProvider",
    "ItemHandler",
    # Errors
    "ElasticFacadeError",
    "NotAcknowledgedError",
    "TooManyHitsError",
    "EmptyInputError",
    "EmptyResultError",
    "EmptyResponseError",
    "OperationError",
    "FetchError",
    "EnumerationCancelled",
    "EnumerationError",
]
