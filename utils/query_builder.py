"""
Query and request body building utilities for Elasticsearch.
"""

import json
from typing import Dict, Any, List, Optional, Sequence, Union

from es_types.primitives import FieldSort, SortOrder


def build_term_query(
    field: str,
    value: Union[str, int, bool],
    use_keyword: bool = False,
) -> Dict[str, Any]:
    """
    Build a term query for exact matching.

    Args:
        field: Field name
        value: Value to match
        use_keyword: Whether to append .keyword for text fields

    Returns:
        Term query dict
    """
    if use_keyword and isinstance(value, str):
        field = f"{field}.keyword"

    return {"term": {field: value}}


def build_sort(sort: Optional[Sequence[Union[FieldSort, Dict[str, Any]]]]) -> Optional[List[Dict[str, Any]]]:
    """
    Normalize sort criteria into Elasticsearch sort clauses.

    FieldSort objects and raw clause dicts may be mixed.
    """
    if not sort:
        return None
    return [s.to_dict() if isinstance(s, FieldSort) else s for s in sort]


def build_most_recent_sort(timestamp_field: str) -> List[Dict[str, Any]]:
    """Sort clause for newest-first by a timestamp field."""
    return [FieldSort(timestamp_field, SortOrder.DESC).to_dict()]


def parse_body(body: Union[str, bytes, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Accept a request body as a JSON string or an already decoded dict.

    Raises:
        ValueError: If a string body is not a JSON object
    """
    if body is None or body == "" or body == b"":
        return {}
    if isinstance(body, (str, bytes)):
        decoded = json.loads(body)
        if not isinstance(decoded, dict):
            raise ValueError("Request body must be a JSON object")
        return decoded
    return dict(body)


def build_put_mapping_body(root: str, key: str, value_type: str) -> Dict[str, Any]:
    """
    Build a put-mapping body declaring one field.

    Args:
        root: Optional object field the key is nested under ("" for top level)
        key: Field name
        value_type: Elasticsearch field type, e.g. "keyword"

    Returns:
        Mapping body with a properties section
    """
    field_def = {key: {"type": value_type}}

    if root:
        return {"properties": {root: {"properties": field_def}}}
    return {"properties": field_def}
