from __future__ import annotations

"""
Search Orchestrator.

Entry points of the search core. ``find_paths`` is the plain operation on a
normalized (start path, fragments) pair; ``run_search`` wraps it into a
SearchReport, and ``search`` drives it from a validated configuration
dictionary.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional, Sequence

from fuzzypath.core.search.expander import TreeExpander
from fuzzypath.domain.constants import DEFAULT_BRANCHING_CAP, DEFAULT_MAX_RESULTS
from fuzzypath.domain.models import SearchQuery, SearchReport, SearchResult

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_paths(
        start_path: str,
        fragments: Sequence[str],
        max_results: int = DEFAULT_MAX_RESULTS,
        *,
        branching_cap: int = DEFAULT_BRANCHING_CAP,
        max_workers: int = 1,
        timeout: Optional[float] = None,
        cancellation_event: Optional[threading.Event] = None,
        sort_results: bool = False,
) -> List[SearchResult]:
    """
    Find the paths below ``start_path`` that fit the fragment sequence.

    The output is truncated to the first ``max_results`` entries in
    traversal order, which is not necessarily the highest total weight.
    Pass ``sort_results=True`` to sort by total weight before truncation.

    Args:
        start_path: Directory to start from; empty means the current directory.
        fragments: One query fragment per directory level.
        max_results: Maximum number of results returned.
        branching_cap: Maximum survivors expanded at any node.
        max_workers: Threads used to list each level.
        timeout: Seconds before outstanding branches are abandoned.
        cancellation_event: External abort signal.
        sort_results: Sort all results by total weight (stable) before truncating.

    Returns:
        List[SearchResult]: Possibly empty, never raises on filesystem errors.
    """
    query = SearchQuery(start_path=start_path or os.getcwd(), fragments=tuple(fragments))
    report = run_search(
        query,
        max_results=max_results,
        branching_cap=branching_cap,
        max_workers=max_workers,
        timeout=timeout,
        cancellation_event=cancellation_event,
        sort_results=sort_results,
    )
    return report.results


def run_search(
        query: SearchQuery,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        branching_cap: int = DEFAULT_BRANCHING_CAP,
        max_workers: int = 1,
        timeout: Optional[float] = None,
        cancellation_event: Optional[threading.Event] = None,
        sort_results: bool = False,
) -> SearchReport:
    """
    Execute a search and collect traversal statistics.

    Args:
        query: Normalized query.
        max_results: Maximum number of results kept.
        branching_cap: Maximum survivors expanded at any node.
        max_workers: Threads used to list each level.
        timeout: Seconds before outstanding branches are abandoned.
        cancellation_event: External abort signal.
        sort_results: Sort by total weight before truncating.

    Returns:
        SearchReport: Results plus cancellation flag and counters.
    """
    fragments = [f for f in query.fragments if f]
    if len(fragments) != len(query.fragments) or not fragments:
        logger.warning(f"Query {list(query.fragments)!r} contains empty fragments; nothing can match.")
        return SearchReport(query=query)

    logger.info(f"Searching '{'/'.join(fragments)}' from: {query.start_path}")

    expander = TreeExpander(
        fragments,
        branching_cap=branching_cap,
        max_workers=max_workers,
        cancellation_event=cancellation_event,
        timeout=timeout,
    )
    results = expander.expand(query.start_path)

    if sort_results:
        results = sorted(results, key=lambda r: r.total_weight, reverse=True)

    limit = max(0, int(max_results))
    truncated = results[:limit]

    logger.info(
        f"Search finished: {len(results)} found, {len(truncated)} kept, "
        f"{expander.visited} dirs listed, {expander.pruned} pruned."
    )

    return SearchReport(
        query=query,
        results=truncated,
        cancelled=expander.cancelled,
        visited=expander.visited,
        pruned=expander.pruned,
    )


def search(query: SearchQuery, config: Dict[str, Any],
           cancellation_event: Optional[threading.Event] = None) -> SearchReport:
    """
    Run a search using the tuning values of a validated configuration.

    Args:
        query: Normalized query.
        config: Output of ``validate_config``.
        cancellation_event: External abort signal.

    Returns:
        SearchReport: The search outcome.
    """
    timeout = config.get("timeout") or None
    return run_search(
        query,
        max_results=config.get("max_results", DEFAULT_MAX_RESULTS),
        branching_cap=config.get("branching_cap", DEFAULT_BRANCHING_CAP),
        max_workers=config.get("max_workers", 1),
        timeout=timeout,
        cancellation_event=cancellation_event,
        sort_results=bool(config.get("sort_results", False)),
    )
