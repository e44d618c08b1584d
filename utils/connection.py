"""
Elasticsearch connection management.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from elasticsearch import Elasticsearch

from config.environments import get_elasticsearch_config
from es_types.errors import OperationError
from utils.response_parser import as_dict


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff for transient transport failures."""
    max_retries: int = 3
    initial_backoff: float = 0.128
    max_backoff: float = 0.513


@dataclass(frozen=True)
class ElasticSession:
    """
    Connection state shared by every operation.

    Built once at process start and passed to callers explicitly. Nothing
    on it is mutated after construction, so concurrent callers can share it.
    """
    endpoint: str
    client: Elasticsearch
    username: Optional[str] = None
    password: Optional[str] = None
    retry: RetryPolicy = RetryPolicy()
    healthcheck_interval: float = 60.0
    sniff: bool = False
    timeout: float = 30.0

    @property
    def auth(self) -> Optional[tuple]:
        """Basic auth pair, or None when no credentials are configured."""
        if self.username and self.password:
            return (self.username, self.password)
        return None


def build_client_params(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate facade configuration into Elasticsearch client arguments.

    Args:
        config: Dictionary as returned by get_elasticsearch_config()

    Returns:
        Keyword arguments for the Elasticsearch constructor
    """
    params: Dict[str, Any] = {
        "hosts": [config["url"]],
        "request_timeout": config["timeout_ms"] / 1000.0,
        "verify_certs": config.get("verify_certs", True),
        "max_retries": config.get("max_retries", 3),
        "retry_on_timeout": True,
        "dead_node_backoff_factor": config.get("backoff_initial", 0.128),
        "max_dead_node_backoff": config.get("backoff_max", 0.513),
    }

    # Add CA certificates if provided
    if config.get("ca_certs"):
        params["ca_certs"] = config["ca_certs"]

    # Topology discovery, re-run at most once per health-check interval
    if config.get("sniff"):
        params["sniff_on_start"] = True
        params["sniff_on_node_failure"] = True
        params["min_delay_between_sniffing"] = config.get("healthcheck_interval", 60.0)

    # Add authentication
    if config.get("api_key"):
        params["api_key"] = config["api_key"]
    elif config.get("username") and config.get("password"):
        params["basic_auth"] = (config["username"], config["password"])

    return params


def create_session(config: Optional[Dict[str, Any]] = None) -> ElasticSession:
    """
    Create a session without contacting the cluster.

    Args:
        config: Connection configuration (read from the environment if omitted)

    Returns:
        Configured ElasticSession
    """
    if config is None:
        config = get_elasticsearch_config()

    client = Elasticsearch(**build_client_params(config))

    return ElasticSession(
        endpoint=config["url"].rstrip("/"),
        client=client,
        username=config.get("username"),
        password=config.get("password"),
        retry=RetryPolicy(
            max_retries=config.get("max_retries", 3),
            initial_backoff=config.get("backoff_initial", 0.128),
            max_backoff=config.get("backoff_max", 0.513),
        ),
        healthcheck_interval=config.get("healthcheck_interval", 60.0),
        sniff=config.get("sniff", False),
        timeout=config["timeout_ms"] / 1000.0,
    )


def connect(config: Optional[Dict[str, Any]] = None) -> ElasticSession:
    """
    Create a session and verify the cluster answers.

    Raises:
        OperationError: If the cluster cannot be reached
    """
    session = create_session(config)

    try:
        info = as_dict(session.client.info())
    except Exception as e:
        raise OperationError("ping", e) from e

    logger.debug(
        "elasticsearch client created: endpoint=%s version=%s",
        session.endpoint,
        info.get("version", {}).get("number", "unknown"),
    )
    return session


def test_connection(session: ElasticSession) -> bool:
    """
    Test Elasticsearch connection using a low-privilege operation.

    Args:
        session: Session to check

    Returns:
        True if connection successful
    """
    es = session.client
    try:
        # ping() requires cluster:monitor, a size-0 search does not
        response = es.search(
            index="*",
            size=0,
            query={"match_all": {}},
            timeout="5s",
        )
        return "hits" in response

    except Exception as e:
        logger.debug("search probe failed, trying count: %s", e)
        try:
            response = es.count(index="*")
            return "count" in response
        except Exception as e:
            logger.warning("elasticsearch unreachable at %s: %s", session.endpoint, e)
            return False
