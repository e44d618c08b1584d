"""
Unit tests for index management operations.
"""

import pytest

from es_types.errors import NotAcknowledgedError, OperationError
from tools.primitives.indices import (
    create_index,
    ensure_index_with_mapping,
    flush_index,
    index_exists,
    put_mapping,
)


MAPPING = '{"mappings": {"properties": {"height": {"type": "long"}}}}'


class TestEnsureIndex:
    """Test cases for ensure_index_with_mapping."""

    def test_existing_index_is_left_alone(self, session, mock_elasticsearch):
        ensure_index_with_mapping(session, "blocks-0", MAPPING)

        mock_elasticsearch.indices.exists.assert_called_once_with(index="blocks-0")
        mock_elasticsearch.indices.create.assert_not_called()

    def test_missing_index_is_created_with_mapping(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.exists.return_value = False

        ensure_index_with_mapping(session, "blocks-0", MAPPING)

        mock_elasticsearch.indices.create.assert_called_once_with(
            index="blocks-0",
            body={"mappings": {"properties": {"height": {"type": "long"}}}},
        )

    def test_not_acknowledged(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.exists.return_value = False
        mock_elasticsearch.indices.create.return_value = {"acknowledged": False}

        with pytest.raises(NotAcknowledgedError):
            ensure_index_with_mapping(session, "blocks-0", MAPPING)

    def test_exists_failure(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.exists.side_effect = Exception("forbidden")

        with pytest.raises(OperationError, match="index_exists"):
            ensure_index_with_mapping(session, "blocks-0", MAPPING)


class TestIndexOperations:
    """Test cases for the remaining index operations."""

    def test_index_exists(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.exists.return_value = False

        assert index_exists(session, "blocks-0") is False

    def test_create_index_without_body(self, session, mock_elasticsearch):
        response = create_index(session, "blocks-1")

        mock_elasticsearch.indices.create.assert_called_once_with(index="blocks-1")
        assert response["acknowledged"] is True

    def test_create_index_error(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.create.side_effect = Exception("resource_already_exists_exception")

        with pytest.raises(OperationError, match="create_index"):
            create_index(session, "blocks-1")

    def test_put_mapping_top_level(self, session, mock_elasticsearch):
        put_mapping(session, "blocks-0", "", "miner", "keyword")

        mock_elasticsearch.indices.put_mapping.assert_called_once_with(
            index="blocks-0",
            body={"properties": {"miner": {"type": "keyword"}}},
        )

    def test_put_mapping_nested(self, session, mock_elasticsearch):
        put_mapping(session, "blocks-0", "attr", "color", "keyword")

        body = mock_elasticsearch.indices.put_mapping.call_args[1]["body"]
        assert body == {
            "properties": {"attr": {"properties": {"color": {"type": "keyword"}}}}
        }

    def test_flush(self, session, mock_elasticsearch):
        flush_index(session, "blocks-0")

        mock_elasticsearch.indices.flush.assert_called_once_with(index="blocks-0")

    def test_flush_error(self, session, mock_elasticsearch):
        mock_elasticsearch.indices.flush.side_effect = Exception("closed")

        with pytest.raises(OperationError) as exc_info:
            flush_index(session, "blocks-0")

        assert exc_info.value.operation == "flush"
