"""
Configuration management for the Elasticsearch facade.
"""

from .environments import (
    get_elasticsearch_config,
    get_scroll_config,
    get_bulk_config,
    get_log_level,
)

__all__ = [
    "get_elasticsearch_config",
    "get_scroll_config",
    "get_bulk_config",
    "get_log_level",
]
