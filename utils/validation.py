"""
Input validation utilities.
"""

import re
from typing import Any


def validate_index_pattern(pattern: str) -> None:
    """
    Validate an Elasticsearch index name or pattern.

    Args:
        pattern: Index pattern to validate

    Raises:
        ValueError: If pattern is invalid
    """
    if not pattern:
        raise ValueError("Index pattern cannot be empty")

    if pattern.startswith("_"):
        raise ValueError("Index pattern cannot start with underscore")

    # Commas allow addressing several indices at once
    invalid_chars = re.findall(r'[^a-zA-Z0-9\-_.*,]', pattern)
    if invalid_chars:
        raise ValueError(f"Invalid characters in index pattern: {invalid_chars}")


def validate_size(size: int, max_size: int = 10000) -> int:
    """
    Validate and clamp a page size.

    Returns:
        Valid size value
    """
    return clamp_value(size, min_value=1, max_value=max_size)


def clamp_value(value: Any, min_value: Any, max_value: Any) -> Any:
    """Clamp a value between min and max."""
    return max(min_value, min(value, max_value))
