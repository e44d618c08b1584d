"""
Primitive tools for low-level Elasticsearch operations.
"""

from .search import (
    search,
    search_with_dsl,
    unmarshal_one,
    unmarshal_most_recent,
    unmarshal_unique,
    count,
)
from .scroll import open_scroll, scroll_next, clear_scroll
from .enumerate import enumerate_items
from .documents import (
    do_index,
    do_create,
    do_index_with_name_provider,
    marshal_with_name_and_id_provider,
)
from .indices import (
    index_exists,
    create_index,
    ensure_index_with_mapping,
    put_mapping,
    flush_index,
)
from .catalog import fetch_catalog, get_indices
from .bulk import BulkProcessor, run_bulk_processor, bulk_index

__all__ = [
    # Search operations
    "search",
    "search_with_dsl",
    "unmarshal_one",
    "unmarshal_most_recent",
    "unmarshal_unique",
    "count",
    # Scroll operations
    "open_scroll",
    "scroll_next",
    "clear_scroll",
    "enumerate_items",
    # Document operations
    "do_index",
    "do_create",
    "do_index_with_name_provider",
    "marshal_with_name_and_id_provider",
    # Index operations
    "index_exists",
    "create_index",
    "ensure_index_with_mapping",
    "put_mapping",
    "flush_index",
    "fetch_catalog",
    "get_indices",
    # Bulk operations
    "BulkProcessor",
    "run_bulk_processor",
    "bulk_index",
]
