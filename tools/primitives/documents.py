"""
Primitive document write operations for Elasticsearch.
"""

import logging
from typing import Any, Dict, Mapping

from es_types.errors import EmptyInputError, OperationError
from es_types.providers import IndexNameAndIDProvider, IndexNameProvider
from utils.connection import ElasticSession
from utils.validation import validate_index_pattern


logger = logging.getLogger(__name__)


def _index_each(
    session: ElasticSession,
    operation: str,
    index: str,
    data: Mapping[str, Dict[str, Any]],
    **extra: Any,
) -> None:
    if not data:
        raise EmptyInputError(operation)
    validate_index_pattern(index)

    for doc_id, body in data.items():
        try:
            session.client.index(index=index, id=doc_id, document=body, **extra)
        except Exception as e:
            raise OperationError(f"{operation} [{doc_id}]", e) from e

    logger.debug("%s: wrote %d documents to %s", operation, len(data), index)


def do_index(session: ElasticSession, index: str, data: Mapping[str, Dict[str, Any]]) -> None:
    """
    Index documents by id, replacing any existing version.

    Args:
        session: Shared Elasticsearch session
        index: Target index
        data: Mapping of document id to document body

    Raises:
        EmptyInputError: If data is empty
        OperationError: On the first document that fails
    """
    _index_each(session, "do_index", index, data)


def do_create(session: ElasticSession, index: str, data: Mapping[str, Dict[str, Any]]) -> None:
    """
    Create documents by id; an id that already exists is a failure.

    Raises:
        EmptyInputError: If data is empty
        OperationError: On the first document that fails
    """
    _index_each(session, "do_create", index, data, op_type="create")


def do_index_with_name_provider(
    session: ElasticSession,
    data: Mapping[str, IndexNameProvider],
) -> None:
    """
    Index documents that each name their own target index.

    Args:
        session: Shared Elasticsearch session
        data: Mapping of document id to a document providing index_name()

    Raises:
        EmptyInputError: If data is empty
        OperationError: On the first document that fails
    """
    if not data:
        raise EmptyInputError("do_index_with_name_provider")

    for doc_id, doc in data.items():
        try:
            session.client.index(index=doc.index_name(), id=doc_id, document=doc.to_dict())
        except Exception as e:
            raise OperationError(f"do_index_with_name_provider [{doc_id}]", e) from e


def marshal_with_name_and_id_provider(session: ElasticSession, doc: IndexNameAndIDProvider) -> None:
    """Index a single document under its own id and index name."""
    try:
        session.client.index(index=doc.index_name(), id=doc.id(), document=doc.to_dict())
    except Exception as e:
        raise OperationError("marshal_with_name_and_id_provider", e) from e
