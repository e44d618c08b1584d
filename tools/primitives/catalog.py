"""
Index name discovery through the plain-text _cat/indices endpoint.
"""

import logging
from typing import Dict, List, Optional, Sequence

import httpx

from es_types.errors import OperationError
from utils.catalog import match_indices
from utils.connection import ElasticSession


logger = logging.getLogger(__name__)

CATALOG_PATH = "/_cat/indices?v&s=index"


def fetch_catalog(session: ElasticSession, client: Optional[httpx.Client] = None) -> List[str]:
    """
    Fetch the index catalog as text lines, sorted by index name.

    Args:
        session: Shared Elasticsearch session (endpoint and credentials)
        client: Optional httpx client to reuse

    Returns:
        Catalog lines, header included

    Raises:
        httpx.HTTPError: If the request fails
    """
    url = f"{session.endpoint}{CATALOG_PATH}"

    if client is not None:
        response = client.get(url, auth=session.auth)
    else:
        with httpx.Client(timeout=session.timeout) as http:
            response = http.get(url, auth=session.auth)

    response.raise_for_status()
    lines = response.text.splitlines()
    logger.debug("fetched %d catalog lines from %s", len(lines), session.endpoint)
    return lines


def get_indices(
    session: ElasticSession,
    prefixes: Sequence[str],
    client: Optional[httpx.Client] = None,
) -> Dict[str, List[str]]:
    """
    Map each prefix to the <prefix>-<n> indices present in the cluster.

    Prefixes without matches are omitted.

    Args:
        session: Shared Elasticsearch session
        prefixes: Index name prefixes
        client: Optional httpx client to reuse

    Returns:
        Mapping of prefix to index names in catalog order

    Raises:
        OperationError: If the catalog cannot be fetched
    """
    try:
        lines = fetch_catalog(session, client)
    except Exception as e:
        raise OperationError("get_indices", e) from e

    return match_indices(lines, prefixes)
