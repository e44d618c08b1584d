"""
Primitive scroll cursor operations for Elasticsearch.
"""

import logging
from typing import Any, Dict, List, Optional

from config.environments import get_scroll_config
from es_types.errors import FetchError, OperationError
from es_types.primitives import SearchResponse
from utils.connection import ElasticSession
from utils.query_builder import build_sort
from utils.response_parser import as_dict
from utils.validation import validate_index_pattern, validate_size


logger = logging.getLogger(__name__)


def open_scroll(
    session: ElasticSession,
    index: str,
    query: Dict[str, Any],
    sort: Optional[List[Any]] = None,
    size: Optional[int] = None,
    keep_alive: Optional[str] = None,
) -> SearchResponse:
    """
    Open a scroll cursor and fetch its first page.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to scroll through
        query: Elasticsearch Query DSL query
        sort: FieldSort objects or raw sort clauses
        size: Page size (defaults to ELASTIC_SCROLL_SIZE)
        keep_alive: Cursor keep-alive, e.g. "1m"

    Returns:
        First page, carrying the cursor id in scroll_id

    Raises:
        FetchError: If the cursor could not be opened
    """
    validate_index_pattern(index)
    defaults = get_scroll_config()

    kwargs: Dict[str, Any] = {
        "index": index,
        "query": query,
        "size": validate_size(size or defaults["size"]),
        "scroll": keep_alive or defaults["keep_alive"],
    }
    sort_clauses = build_sort(sort)
    if sort_clauses:
        kwargs["sort"] = sort_clauses

    try:
        response = as_dict(session.client.search(**kwargs))
    except Exception as e:
        raise FetchError("open_scroll", e) from e

    page = SearchResponse.from_dict(response)
    logger.debug("scroll opened on %s: total=%d", index, page.total)
    return page


def scroll_next(
    session: ElasticSession,
    scroll_id: str,
    keep_alive: Optional[str] = None,
) -> SearchResponse:
    """
    Continue scrolling through search results.

    Args:
        session: Shared Elasticsearch session
        scroll_id: Cursor id from the previous page
        keep_alive: Cursor keep-alive, e.g. "1m"

    Returns:
        Next page; an empty hits list marks the end of the stream

    Raises:
        FetchError: If the page could not be fetched
    """
    try:
        response = as_dict(session.client.scroll(
            scroll_id=scroll_id,
            scroll=keep_alive or get_scroll_config()["keep_alive"],
        ))
    except Exception as e:
        raise FetchError("scroll", e) from e

    return SearchResponse.from_dict(response)


def clear_scroll(session: ElasticSession, scroll_id: Optional[str]) -> None:
    """
    Release a scroll cursor on the server.

    Releasing a cursor that was never opened is a no-op.

    Raises:
        OperationError: If the server refused to clear the cursor
    """
    if not scroll_id:
        return

    try:
        session.client.clear_scroll(scroll_id=scroll_id)
    except Exception as e:
        raise OperationError("clear_scroll", e) from e

    logger.debug("scroll released")
