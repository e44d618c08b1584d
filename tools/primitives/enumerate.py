"""
Scroll-based enumeration of every document matching a query.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from es_types.errors import (
    EnumerationCancelled,
    EnumerationError,
    FetchError,
    OperationError,
)
from es_types.providers import ItemHandler
from tools.primitives.scroll import clear_scroll, open_scroll, scroll_next
from utils.connection import ElasticSession
from utils.response_parser import source_bytes


logger = logging.getLogger(__name__)


def enumerate_items(
    session: ElasticSession,
    index: str,
    query: Dict[str, Any],
    on_item: ItemHandler,
    sort: Optional[List[Any]] = None,
    cancel: Optional[threading.Event] = None,
    page_size: Optional[int] = None,
    keep_alive: Optional[str] = None,
) -> None:
    """
    Present every document matching a query to a handler, page by page.

    Documents arrive in server order, each exactly once. The handler gets
    the raw _source bytes, a 1-based ordinal, the server-reported total
    and a flag set on the last document of each page, which callers use
    to batch commits.

    Enumeration stops at the end of the stream, at the first failed page
    fetch and at the first handler failure. The cursor is released on every
    exit path. ``cancel`` is checked once per page; when it is set, no
    further page is fetched and EnumerationCancelled is raised.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to enumerate
        query: Elasticsearch Query DSL query
        on_item: Handler called per document; raising marks a failure
        sort: Optional FieldSort objects or raw sort clauses
        cancel: Event another thread sets to request cancellation
        page_size: Documents per page
        keep_alive: Cursor keep-alive, e.g. "1m"

    Raises:
        EnumerationError: Carrying every fetch, handler and release failure
        EnumerationCancelled: If cancellation was requested
    """
    try:
        page = open_scroll(session, index, query, sort=sort, size=page_size, keep_alive=keep_alive)
    except FetchError as e:
        raise EnumerationError([e]) from e

    errors: List[BaseException] = []
    scroll_id = page.scroll_id
    ordinal = 0

    try:
        while not errors:
            hits = page.hits
            if not hits:
                break

            last = len(hits) - 1
            for position, hit in enumerate(hits):
                ordinal += 1
                try:
                    on_item(source_bytes(hit), ordinal, page.total, position == last)
                except Exception as e:
                    errors.append(OperationError("on_item", e))
                    break

            if cancel is not None and cancel.is_set():
                logger.debug("enumeration of %s cancelled after %d items", index, ordinal)
                _release_quietly(session, scroll_id)
                scroll_id = None
                raise EnumerationCancelled(f"enumeration of {index} cancelled")

            if errors:
                break

            try:
                page = scroll_next(session, scroll_id, keep_alive=keep_alive)
            except FetchError as e:
                errors.append(e)
                break

            # Only the newest cursor id is live
            if page.scroll_id:
                scroll_id = page.scroll_id
    except BaseException:
        _release_quietly(session, scroll_id)
        raise

    try:
        clear_scroll(session, scroll_id)
    except OperationError as e:
        logger.warning("failed to release scroll on %s: %s", index, e)
        errors.append(e)

    logger.debug("enumerated %d items from %s with %d errors", ordinal, index, len(errors))

    if errors:
        raise EnumerationError(errors)


def _release_quietly(session: ElasticSession, scroll_id: Optional[str]) -> None:
    try:
        clear_scroll(session, scroll_id)
    except OperationError as e:
        logger.warning("failed to release scroll: %s", e)
