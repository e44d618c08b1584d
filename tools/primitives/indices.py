"""
Primitive index management operations for Elasticsearch.
"""

import logging
from typing import Any, Dict, Optional, Union

from es_types.errors import NotAcknowledgedError, OperationError
from utils.connection import ElasticSession
from utils.query_builder import build_put_mapping_body, parse_body
from utils.response_parser import as_dict
from utils.validation import validate_index_pattern


logger = logging.getLogger(__name__)


def index_exists(session: ElasticSession, index: str) -> bool:
    """
    Check if an index (or any index matching a pattern) exists.

    Raises:
        OperationError: If the existence check fails
    """
    validate_index_pattern(index)

    try:
        return bool(session.client.indices.exists(index=index))
    except Exception as e:
        raise OperationError("index_exists", e) from e


def create_index(
    session: ElasticSession,
    index: str,
    body: Optional[Union[str, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """
    Create an index, optionally with settings and mappings.

    Args:
        session: Shared Elasticsearch session
        index: Index name
        body: Create-index body (settings/mappings) as a JSON string or dict

    Returns:
        Raw create-index response

    Raises:
        OperationError: If creation fails
    """
    validate_index_pattern(index)
    parsed = parse_body(body)

    try:
        if parsed:
            response = as_dict(session.client.indices.create(index=index, body=parsed))
        else:
            response = as_dict(session.client.indices.create(index=index))
    except Exception as e:
        raise OperationError("create_index", e) from e

    logger.debug("created index %s", index)
    return response


def ensure_index_with_mapping(
    session: ElasticSession,
    index: str,
    mapping: Union[str, Dict[str, Any]],
) -> None:
    """
    Create an index with the given body unless it already exists.

    Raises:
        OperationError: If the existence check or creation fails
        NotAcknowledgedError: If the cluster did not acknowledge creation
    """
    if index_exists(session, index):
        return

    response = create_index(session, index, mapping)
    if not response.get("acknowledged", False):
        raise NotAcknowledgedError(index)


def put_mapping(
    session: ElasticSession,
    index: str,
    root: str,
    key: str,
    value_type: str,
) -> None:
    """
    Declare one field on an existing index.

    Args:
        session: Shared Elasticsearch session
        index: Target index
        root: Object field the key is nested under, "" for top level
        key: Field name
        value_type: Elasticsearch field type

    Raises:
        OperationError: If the mapping update fails
    """
    validate_index_pattern(index)
    body = build_put_mapping_body(root, key, value_type)

    try:
        session.client.indices.put_mapping(index=index, body=body)
    except Exception as e:
        raise OperationError("put_mapping", e) from e


def flush_index(session: ElasticSession, index: str) -> None:
    """Flush an index to durable storage."""
    validate_index_pattern(index)

    try:
        session.client.indices.flush(index=index)
    except Exception as e:
        raise OperationError("flush", e) from e
