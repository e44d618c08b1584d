"""
FastMCP server exposing read-side Elasticsearch operations.

Tools:
- health: Check cluster connectivity
- search_documents: Paged search with raw Query DSL
- count_documents: Count documents matching a query
- list_indices: Discover <prefix>-<n> indices from the catalog
- get_most_recent: Newest document matching a term
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP
from dotenv import load_dotenv

from config import get_log_level
from es_types import EmptyResultError, FieldSort, SearchParameters, SortOrder
from tools import ElasticClient
from utils import build_term_query, connect
from utils.validation import validate_size


logger = logging.getLogger(__name__)


class ElasticTools:
    """Tool implementations bound to one client."""

    def __init__(self, client: ElasticClient):
        self.client = client

    def health(self) -> Dict[str, Any]:
        """Check Elasticsearch connectivity."""
        connected = self.client.ping()
        return {
            "overall_status": "healthy" if connected else "degraded",
            "services": {
                "elasticsearch": {
                    "service": "elasticsearch",
                    "connected": connected,
                    "endpoint": self.client.session.endpoint,
                },
            },
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def search_documents(
        self,
        index: str,
        query: Dict[str, Any],
        size: int = 100,
        from_offset: int = 0,
        sort_field: Optional[str] = None,
        descending: bool = False,
    ) -> Dict[str, Any]:
        """
        Search an index with raw Elasticsearch Query DSL.

        Args:
            index: Index name or pattern (e.g., "blocks-*")
            query: Elasticsearch Query DSL query
            size: Number of results (1-10000)
            from_offset: Pagination offset
            sort_field: Optional field to sort on
            descending: Sort newest/largest first

        Returns:
            Total hit count and the matching documents
        """
        sort = []
        if sort_field:
            sort.append(FieldSort(sort_field, SortOrder.DESC if descending else SortOrder.ASC))

        response = self.client.search(SearchParameters(
            index=index,
            query=query,
            from_=max(0, from_offset),
            page_size=validate_size(size),
            sort=sort,
        ))
        return {
            "took": response.took,
            "timed_out": response.timed_out,
            "total": response.total,
            "hits": response.hits,
        }

    def count_documents(self, index: str, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Count documents in an index, optionally filtered by a query."""
        body = {"query": query} if query else None
        return {"index": index, "count": self.client.count(index, body)}

    def list_indices(self, prefixes: List[str]) -> Dict[str, List[str]]:
        """
        List indices named <prefix>-<number> for each prefix.

        Prefixes with no matching index are left out of the result.
        """
        return self.client.get_indices(prefixes)

    def get_most_recent(
        self,
        index: str,
        field: str,
        value: str,
        timestamp_field: str = "@timestamp",
    ) -> Dict[str, Any]:
        """
        Fetch the newest document whose field equals value.

        Returns found=False instead of failing when nothing matches.
        """
        try:
            document = self.client.unmarshal_most_recent(
                index, build_term_query(field, value), timestamp_field
            )
        except EmptyResultError:
            return {"found": False, "document": None}
        return {"found": True, "document": document}


def build_server(client: ElasticClient) -> FastMCP:
    """
    Create the MCP server with every tool bound to one client.

    Args:
        client: Facade over the process-wide session
    """
    mcp = FastMCP("elastic-facade")
    tools = ElasticTools(client)

    registered = (
        tools.health,
        tools.search_documents,
        tools.count_documents,
        tools.list_indices,
        tools.get_most_recent,
    )
    for tool in registered:
        mcp.tool()(tool)

    logger.debug("registered %d tools", len(registered))
    return mcp


def main() -> None:
    load_dotenv()
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = connect()
    build_server(ElasticClient(session)).run()


if __name__ == "__main__":
    main()
