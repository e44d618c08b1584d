"""
Primitive search operations for Elasticsearch.
"""

from typing import Any, Callable, Dict, Optional, Union

from es_types.errors import (
    EmptyResponseError,
    EmptyResultError,
    OperationError,
    TooManyHitsError,
)
from es_types.primitives import SearchParameters, SearchResponse
from utils.connection import ElasticSession
from utils.query_builder import build_most_recent_sort, parse_body
from utils.response_parser import as_dict, decode_source, parse_hits, parse_total_hits
from utils.validation import validate_index_pattern


Target = Optional[Callable[[Dict[str, Any]], Any]]


def search(session: ElasticSession, params: SearchParameters) -> SearchResponse:
    """
    Execute a paged search.

    Args:
        session: Shared Elasticsearch session
        params: Index, query, offset, page size, sort and search_after

    Returns:
        SearchResponse with search results

    Raises:
        ValueError: If the index pattern is invalid
        OperationError: If Elasticsearch query fails
    """
    validate_index_pattern(params.index)

    try:
        response = as_dict(session.client.search(index=params.index, body=params.to_body()))
    except Exception as e:
        raise OperationError("search", e) from e

    return SearchResponse.from_dict(response)


def search_with_dsl(
    session: ElasticSession,
    index: str,
    query: Union[str, Dict[str, Any]],
) -> SearchResponse:
    """
    Execute a search whose whole body is supplied as Query DSL.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to search
        query: Complete search body, as a JSON string or dict

    Raises:
        OperationError: If Elasticsearch query fails
        EmptyResponseError: If the engine returned no body
    """
    validate_index_pattern(index)
    body = parse_body(query)

    try:
        response = as_dict(session.client.search(index=index, body=body))
    except Exception as e:
        raise OperationError("search_with_dsl", e) from e

    if not response:
        raise EmptyResponseError("search_with_dsl")

    return SearchResponse.from_dict(response)


def _search_first(
    session: ElasticSession,
    operation: str,
    index: str,
    query: Dict[str, Any],
    size: int = 1,
    sort: Optional[list] = None,
) -> Dict[str, Any]:
    validate_index_pattern(index)

    kwargs: Dict[str, Any] = {"index": index, "query": query, "size": size}
    if sort:
        kwargs["sort"] = sort

    try:
        response = as_dict(session.client.search(**kwargs))
    except Exception as e:
        raise OperationError(operation, e) from e

    # Zero hits never reaches decoding
    if parse_total_hits(response) == 0 or not parse_hits(response):
        raise EmptyResultError(index)

    return response


def unmarshal_one(
    session: ElasticSession,
    index: str,
    query: Dict[str, Any],
    target: Target = None,
) -> Any:
    """
    Fetch the first document matching a query.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to search
        query: Elasticsearch Query DSL query
        target: Optional callable building a result from the _source dict

    Returns:
        Decoded document

    Raises:
        EmptyResultError: If nothing matched
        OperationError: If the search or the decode fails
    """
    response = _search_first(session, "unmarshal_one", index, query)
    try:
        return decode_source(parse_hits(response)[0], target)
    except Exception as e:
        raise OperationError("unmarshal_one decode", e) from e


def unmarshal_most_recent(
    session: ElasticSession,
    index: str,
    query: Dict[str, Any],
    timestamp_field: str,
    target: Target = None,
) -> Any:
    """
    Fetch the newest document matching a query.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to search
        query: Elasticsearch Query DSL query
        timestamp_field: Field to sort on, newest first
        target: Optional callable building a result from the _source dict

    Raises:
        EmptyResultError: If nothing matched
        OperationError: If the search or the decode fails
    """
    response = _search_first(
        session,
        "unmarshal_most_recent",
        index,
        query,
        sort=build_most_recent_sort(timestamp_field),
    )
    try:
        return decode_source(parse_hits(response)[0], target)
    except Exception as e:
        raise OperationError("unmarshal_most_recent decode", e) from e


def unmarshal_unique(
    session: ElasticSession,
    index: str,
    query: Dict[str, Any],
    target: Target = None,
) -> Any:
    """
    Fetch the single document matching a query.

    Raises:
        EmptyResultError: If nothing matched
        TooManyHitsError: If more than one document matched
    """
    response = _search_first(session, "unmarshal_unique", index, query, size=2)

    total = parse_total_hits(response)
    if total > 1 or len(parse_hits(response)) > 1:
        raise TooManyHitsError(index, max(total, len(parse_hits(response))))

    try:
        return decode_source(parse_hits(response)[0], target)
    except Exception as e:
        raise OperationError("unmarshal_unique decode", e) from e


def count(
    session: ElasticSession,
    index: str,
    query: Union[str, Dict[str, Any], None] = None,
) -> int:
    """
    Count documents matching a query.

    Args:
        session: Shared Elasticsearch session
        index: Index pattern to count in
        query: Count body ({"query": ...}) as a JSON string or dict;
            all documents are counted if omitted

    Raises:
        OperationError: If the count fails
        EmptyResponseError: If the response carries no count
    """
    validate_index_pattern(index)
    body = parse_body(query)

    try:
        if body:
            response = as_dict(session.client.count(index=index, body=body))
        else:
            response = as_dict(session.client.count(index=index))
    except Exception as e:
        raise OperationError("count", e) from e

    if not response or "count" not in response:
        raise EmptyResponseError("count")

    return int(response["count"])
