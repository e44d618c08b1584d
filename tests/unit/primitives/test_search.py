"""
Unit tests for primitive search operations.
"""

import pytest
from dataclasses import dataclass

from conftest import make_hit, make_page
from es_types.errors import (
    EmptyResponseError,
    EmptyResultError,
    OperationError,
    TooManyHitsError,
)
from es_types.primitives import FieldSort, SearchParameters, SearchResponse, SortOrder
from tools.primitives.search import (
    count,
    search,
    search_with_dsl,
    unmarshal_most_recent,
    unmarshal_one,
    unmarshal_unique,
)


@dataclass
class Block:
    height: int

    @classmethod
    def from_dict(cls, data):
        return cls(height=data["height"])


class TestSearch:
    """Test cases for search and search_with_dsl."""

    def test_search_basic_query(self, session, mock_elasticsearch):
        result = search(session, SearchParameters(index="blocks-*", page_size=10))

        assert isinstance(result, SearchResponse)
        assert result.took == 2
        assert result.total == 100
        assert len(result.hits) == 1

        call_args = mock_elasticsearch.search.call_args
        assert call_args[1]["index"] == "blocks-*"
        assert call_args[1]["body"]["size"] == 10

    def test_search_with_pagination_and_sort(self, session, mock_elasticsearch):
        params = SearchParameters(
            index="blocks-*",
            query={"term": {"miner": "abc"}},
            from_=20,
            page_size=50,
            sort=[FieldSort("height", SortOrder.DESC)],
            search_after=[1000],
        )

        search(session, params)

        body = mock_elasticsearch.search.call_args[1]["body"]
        assert body["from"] == 20
        assert body["size"] == 50
        assert body["sort"] == [{"height": {"order": "desc"}}]
        assert body["search_after"] == [1000]

    def test_search_without_page_size_uses_engine_default(self, session, mock_elasticsearch):
        search(session, SearchParameters(index="blocks-*"))

        body = mock_elasticsearch.search.call_args[1]["body"]
        assert "size" not in body

    def test_search_invalid_index_pattern(self, session):
        with pytest.raises(ValueError, match="Index pattern cannot be empty"):
            search(session, SearchParameters(index=""))

    def test_search_elasticsearch_error(self, session, mock_elasticsearch):
        mock_elasticsearch.search.side_effect = Exception("Connection failed")

        with pytest.raises(OperationError, match="search: Connection failed"):
            search(session, SearchParameters(index="blocks-*"))

    def test_search_with_dsl_string(self, session, mock_elasticsearch):
        search_with_dsl(session, "blocks-*", '{"query": {"match_all": {}}, "size": 3}')

        body = mock_elasticsearch.search.call_args[1]["body"]
        assert body == {"query": {"match_all": {}}, "size": 3}

    def test_search_with_dsl_empty_response(self, session, mock_elasticsearch):
        mock_elasticsearch.search.return_value = {}

        with pytest.raises(EmptyResponseError):
            search_with_dsl(session, "blocks-*", {"query": {"match_all": {}}})


class TestUnmarshal:
    """Test cases for the single-document lookups."""

    def test_unmarshal_one_returns_source(self, session):
        doc = unmarshal_one(session, "blocks-*", {"match_all": {}})

        assert doc["height"] == 42

    def test_unmarshal_one_into_target(self, session, mock_elasticsearch):
        doc = unmarshal_one(session, "blocks-*", {"match_all": {}}, target=Block.from_dict)

        assert doc == Block(height=42)
        assert mock_elasticsearch.search.call_args[1]["size"] == 1

    def test_unmarshal_one_empty_result(self, session, mock_elasticsearch):
        mock_elasticsearch.search.return_value = make_page([], total=0)
        target_calls = []

        with pytest.raises(EmptyResultError):
            unmarshal_one(session, "blocks-*", {"match_all": {}}, target=target_calls.append)

        # Nothing was decoded
        assert target_calls == []

    def test_unmarshal_one_decode_error(self, session):
        with pytest.raises(OperationError, match="decode"):
            unmarshal_one(session, "blocks-*", {"match_all": {}}, target=lambda d: d["missing"])

    def test_unmarshal_most_recent_sorts_descending(self, session, mock_elasticsearch):
        doc = unmarshal_most_recent(session, "blocks-*", {"match_all": {}}, "@timestamp")

        kwargs = mock_elasticsearch.search.call_args[1]
        assert kwargs["sort"] == [{"@timestamp": {"order": "desc"}}]
        assert kwargs["size"] == 1
        assert doc["@timestamp"] == "2024-01-15T10:30:00Z"

    def test_unmarshal_most_recent_empty_result(self, session, mock_elasticsearch):
        mock_elasticsearch.search.return_value = make_page([], total=0)

        with pytest.raises(EmptyResultError):
            unmarshal_most_recent(session, "blocks-*", {"match_all": {}}, "@timestamp")

    def test_unmarshal_unique_single_hit(self, session, mock_elasticsearch):
        mock_elasticsearch.search.return_value = make_page([make_hit("1", {"height": 7})], total=1)

        assert unmarshal_unique(session, "blocks-*", {"match_all": {}}) == {"height": 7}

    def test_unmarshal_unique_too_many_hits(self, session, mock_elasticsearch):
        mock_elasticsearch.search.return_value = make_page(
            [make_hit("1", {"height": 7}), make_hit("2", {"height": 8})], total=2
        )

        with pytest.raises(TooManyHitsError) as exc_info:
            unmarshal_unique(session, "blocks-*", {"match_all": {}})

        assert exc_info.value.total == 2


class TestCount:
    """Test cases for count."""

    def test_count_all(self, session, mock_elasticsearch):
        assert count(session, "blocks-*") == 7
        mock_elasticsearch.count.assert_called_once_with(index="blocks-*")

    def test_count_with_json_query(self, session, mock_elasticsearch):
        count(session, "blocks-*", '{"query": {"term": {"miner": "abc"}}}')

        mock_elasticsearch.count.assert_called_once_with(
            index="blocks-*", body={"query": {"term": {"miner": "abc"}}}
        )

    def test_count_empty_response(self, session, mock_elasticsearch):
        mock_elasticsearch.count.return_value = {}

        with pytest.raises(EmptyResponseError):
            count(session, "blocks-*")

    def test_count_error(self, session, mock_elasticsearch):
        mock_elasticsearch.count.side_effect = Exception("boom")

        with pytest.raises(OperationError) as exc_info:
            count(session, "blocks-*")

        assert exc_info.value.operation == "count"
