"""
Parsing of the plain-text index catalog (_cat/indices).
"""

import logging
import re
from typing import Dict, Iterable, List, Sequence


logger = logging.getLogger(__name__)


def match_indices(lines: Sequence[str], prefixes: Iterable[str]) -> Dict[str, List[str]]:
    """
    Collect index names of the form <prefix>-<digits> from catalog lines.

    Each prefix is used as a regular expression fragment. A prefix that
    does not compile contributes no matches, and prefixes without any
    match are left out of the result.

    Args:
        lines: Catalog text split into lines, in catalog order
        prefixes: Index name prefixes to look for

    Returns:
        Mapping of prefix to matching index names, in catalog order
    """
    result: Dict[str, List[str]] = {}

    for prefix in prefixes:
        try:
            pattern = re.compile(r"\s" + prefix + r"-(\d)*\s")
        except re.error as e:
            logger.debug("skipping index prefix %r: %s", prefix, e)
            continue

        for line in lines:
            # Pad so a name in the first or last column still has whitespace around it
            match = pattern.search(f" {line} ")
            if match:
                result.setdefault(prefix, []).append(match.group(0).strip())

    return result
