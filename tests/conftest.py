"""
Pytest configuration and fixtures for Elasticsearch facade tests.
"""

import pytest
import os
import sys
from unittest.mock import Mock
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from utils.connection import ElasticSession  # noqa: E402


def make_hit(doc_id: str, source: Dict[str, Any], index: str = "blocks-0") -> Dict[str, Any]:
    return {"_index": index, "_id": doc_id, "_source": source}


def make_page(
    hits: List[Dict[str, Any]],
    total: int,
    scroll_id: Optional[str] = None,
) -> Dict[str, Any]:
    page: Dict[str, Any] = {
        "took": 2,
        "timed_out": False,
        "hits": {"total": {"value": total, "relation": "eq"}, "hits": hits},
    }
    if scroll_id is not None:
        page["_scroll_id"] = scroll_id
    return page


@pytest.fixture
def mock_elasticsearch():
    """Mock Elasticsearch client for testing."""
    mock_es = Mock()

    # Mock search response
    mock_es.search.return_value = make_page(
        [make_hit("1", {"height": 42, "@timestamp": "2024-01-15T10:30:00Z"})],
        total=100,
    )

    mock_es.count.return_value = {"count": 7}
    mock_es.info.return_value = {"version": {"number": "8.13.0"}}
    mock_es.clear_scroll.return_value = {"succeeded": True, "num_freed": 1}
    mock_es.indices.exists.return_value = True
    mock_es.indices.create.return_value = {"acknowledged": True, "index": "blocks-0"}

    return mock_es


@pytest.fixture
def session(mock_elasticsearch):
    """Session wrapping the mock client."""
    return ElasticSession(
        endpoint="http://localhost:9200",
        client=mock_elasticsearch,
        username="elastic",
        password="changeme",
    )


@pytest.fixture
def test_elasticsearch_config():
    """Test connection configuration."""
    return {
        "url": "http://localhost:9200/",
        "username": "elastic",
        "password": "changeme",
        "api_key": None,
        "timeout_ms": 5000,
        "verify_certs": False,
        "ca_certs": None,
        "sniff": False,
        "healthcheck_interval": 10.0,
        "max_retries": 5,
        "backoff_initial": 0.128,
        "backoff_max": 0.513,
    }
