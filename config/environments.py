"""
Environment configuration management.
"""

import os
from typing import Dict, Any, Optional


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ELASTIC_<name>, falling back to ELASTICSEARCH_<name>."""
    return os.getenv(f"ELASTIC_{name}", os.getenv(f"ELASTICSEARCH_{name}", default))


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_elasticsearch_config() -> Dict[str, Any]:
    """
    Get Elasticsearch connection configuration.

    Values are read from the environment on every call.

    Returns:
        Elasticsearch configuration dictionary
    """
    return {
        "url": _env("URL", "http://localhost:9200"),
        "username": _env("USERNAME"),
        "password": _env("PASSWORD"),
        "api_key": _env("API_KEY"),
        "timeout_ms": int(_env("TIMEOUT", "30000")),
        "verify_certs": _env_bool("VERIFY_CERTS", True),
        "ca_certs": _env("CA_CERTS"),
        "sniff": _env_bool("SNIFF", False),
        "healthcheck_interval": float(_env("HEALTHCHECK_INTERVAL", "60")),
        "max_retries": int(_env("MAX_RETRIES", "3")),
        "backoff_initial": float(_env("BACKOFF_INITIAL", "0.128")),
        "backoff_max": float(_env("BACKOFF_MAX", "0.513")),
    }


def get_scroll_config() -> Dict[str, Any]:
    """
    Get scroll cursor defaults.

    Returns:
        Dictionary with keep_alive and page size
    """
    return {
        "keep_alive": _env("SCROLL_KEEPALIVE", "1m"),
        "size": int(_env("SCROLL_SIZE", "100")),
    }


def get_bulk_config() -> Dict[str, Any]:
    """Get default bulk processor knobs."""
    return {
        "workers": int(_env("BULK_WORKERS", "1")),
        "bulk_actions": int(_env("BULK_ACTIONS", "1000")),
        "bulk_size": int(_env("BULK_SIZE", str(5 * 1024 * 1024))),
        "flush_interval": float(_env("BULK_FLUSH_INTERVAL", "30")),
    }


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
