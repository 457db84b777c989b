from __future__ import annotations

"""
Query Resolution Service.

Turns a raw query typed by the user into a SearchQuery: a start directory
plus the fragments left to match. Prefixes decide where the search begins:

    ~/us/kj     -> home directory, fragments ['us', 'kj']
    /us/kj      -> filesystem root of the start path
    ../../tf    -> two directories above the start path
    C:\\us\\kj  -> root of drive C
"""

import logging
import os
import re
from typing import List

from fuzzypath.domain.constants import QUERY_SEPARATORS
from fuzzypath.domain.errors import InvalidQueryError
from fuzzypath.domain.models import SearchQuery
from fuzzypath.infra.fs import normalize_path, root_of

logger = logging.getLogger(__name__)

_SPLIT_RX = re.compile(r"[\\/]+")
_DRIVE_RX = re.compile(r"^[A-Za-z]:[\\/]")

HOME_MARKER = "~"
PARENT_MARKER = ".."
CURRENT_MARKER = "."


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_query(raw_query: str, start_path: str = "") -> SearchQuery:
    """
    Normalize a raw query into a start directory and fragment list.

    Args:
        raw_query: Query as typed, e.g. '../tf/sd'.
        start_path: Directory relative queries start from; empty means the
                    current working directory.

    Returns:
        SearchQuery: Resolved start path and fragments.

    Raises:
        InvalidQueryError: If no fragment is left to match.
    """
    query = (raw_query or "").strip()
    start = normalize_path(start_path, fallback=os.getcwd())
    bits = split_query(query)

    if query.startswith(HOME_MARKER):
        start = os.path.expanduser(HOME_MARKER)
        head = bits[0][len(HOME_MARKER):] if bits else ""
        bits = ([head] if head else []) + bits[1:]

    elif query.startswith(QUERY_SEPARATORS):
        start = root_of(start)

    elif _DRIVE_RX.match(query):
        start = bits[0] + os.sep
        bits = bits[1:]

    else:
        bits = [b for b in bits if b != CURRENT_MARKER]
        climbs = 0
        while bits and bits[0] == PARENT_MARKER:
            climbs += 1
            bits = bits[1:]
        if climbs:
            start = os.path.abspath(os.path.join(start, *([os.pardir] * climbs)))

    fragments = [b for b in bits if b != CURRENT_MARKER]
    if not fragments:
        raise InvalidQueryError(f"Query '{raw_query}' has nothing to match.")

    logger.debug(f"Resolved query '{raw_query}' -> start={start}, fragments={fragments}")
    return SearchQuery(start_path=start, fragments=tuple(fragments))


def split_query(query: str) -> List[str]:
    """Split on both separator styles, dropping empty pieces."""
    return [b for b in _SPLIT_RX.split(query) if b]
