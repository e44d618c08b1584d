"""
Utility functions for the Elasticsearch facade.
"""

from .connection import (
    ElasticSession,
    RetryPolicy,
    build_client_params,
    create_session,
    connect,
    test_connection,
)
from .validation import (
    validate_index_pattern,
    validate_size,
    clamp_value,
)
from .query_builder import (
    build_term_query,
    build_sort,
    build_most_recent_sort,
    build_put_mapping_body,
    parse_body,
)
from .response_parser import (
    as_dict,
    parse_hits,
    parse_total_hits,
    source_bytes,
    decode_source,
)
from .catalog import match_indices

__all__ = [
    # Connection
    "ElasticSession",
    "RetryPolicy",
    "build_client_params",
    "create_session",
    "connect",
    "test_connection",
    # Validation
    "validate_index_pattern",
    "validate_size",
    "clamp_value",
    # Query building
    "build_term_query",
    "build_sort",
    "build_most_recent_sort",
    "build_put_mapping_body",
    "parse_body",
    # Response parsing
    "as_dict",
    "parse_hits",
    "parse_total_hits",
    "source_bytes",
    "decode_source",
    # Catalog
    "match_indices",
]
