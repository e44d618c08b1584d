"""
Response parsing utilities for Elasticsearch.
"""

import json
from typing import Any, Callable, Dict, List, Optional


def parse_hits(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Extract hits from search response.

    Args:
        response: Elasticsearch response

    Returns:
        List of hit documents
    """
    return response.get("hits", {}).get("hits", [])


def parse_total_hits(response: Dict[str, Any]) -> int:
    """
    Extract the total hit count, which may be a dict on 7.x+ clusters.

    Args:
        response: Elasticsearch response

    Returns:
        Total hits reported by the server (possibly a lower bound)
    """
    total = response.get("hits", {}).get("total", 0)
    if isinstance(total, dict):
        return total.get("value", 0)
    return total or 0


def source_bytes(hit: Dict[str, Any]) -> bytes:
    """Serialize a hit's _source back into raw JSON bytes."""
    return json.dumps(hit.get("_source", {}), separators=(",", ":")).encode("utf-8")


def decode_source(
    hit: Dict[str, Any],
    target: Optional[Callable[[Dict[str, Any]], Any]] = None,
) -> Any:
    """
    Decode a hit's _source, optionally into a caller-supplied type.

    Args:
        hit: Search hit
        target: Callable taking the source dict, e.g. a from_dict
            classmethod. The dict is returned as-is if omitted.
    """
    source = hit.get("_source", {})
    if target is None:
        return source
    return target(source)


def as_dict(response: Any) -> Dict[str, Any]:
    """Unwrap an ApiResponse into its decoded body."""
    if response is None:
        return {}
    return getattr(response, "body", response)
