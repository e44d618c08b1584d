"""
Primitive layer type definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from enum import Enum


class SortOrder(str, Enum):
    """Sort order for queries."""
    ASC = "asc"
    DESC = "desc"


@dataclass
class FieldSort:
    """Sort on a single field."""
    field: str
    order: SortOrder = SortOrder.ASC

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an Elasticsearch sort clause."""
        return {self.field: {"order": SortOrder(self.order).value}}


@dataclass
class SearchParameters:
    """Required and optional parameters for a paged search."""
    index: str
    query: Dict[str, Any] = field(default_factory=lambda: {"match_all": {}})
    from_: int = 0
    page_size: int = 0
    sort: List[FieldSort] = field(default_factory=list)
    search_after: List[Any] = field(default_factory=list)

    def to_body(self) -> Dict[str, Any]:
        """Convert to an Elasticsearch search body."""
        body: Dict[str, Any] = {
            "query": self.query,
            "from": self.from_,
        }

        # Zero page size leaves the engine default in place
        if self.page_size:
            body["size"] = self.page_size
        if self.sort:
            body["sort"] = [s.to_dict() for s in self.sort]
        if self.search_after:
            body["search_after"] = list(self.search_after)

        return body


@dataclass
class SearchResponse:
    """Elasticsearch search or scroll response."""
    took: int
    timed_out: bool
    total: int
    hits: List[Dict[str, Any]]
    aggregations: Optional[Dict[str, Any]] = None
    scroll_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResponse":
        """Create from Elasticsearch response dict."""
        hits_data = data.get("hits", {})
        total = hits_data.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return cls(
            took=data.get("took", 0),
            timed_out=data.get("timed_out", False),
            total=total,
            hits=list(hits_data.get("hits", [])),
            aggregations=data.get("aggregations"),
            scroll_id=data.get("_scroll_id"),
        )


@dataclass(frozen=True)
class Backoff:
    """Exponential backoff used for retrying bulk chunks."""
    initial: float = 0.128
    maximum: float = 0.513
    max_retries: int = 3


@dataclass
class BulkProcessorParameters:
    """Required and optional parameters for running a bulk processor."""
    name: str
    workers: int = 1
    bulk_actions: int = 1000
    bulk_size: int = 5 * 1024 * 1024
    flush_interval: float = 30.0
    backoff: Backoff = field(default_factory=Backoff)
    # before(name, n_actions) and after(name, ok_count, errors)
    before: Optional[Callable[[str, int], None]] = None
    after: Optional[Callable[[str, int, List[Dict[str, Any]]], None]] = None
