from __future__ import annotations

"""
Search Domain Data Models.

Defines the value objects that flow through the search engine: graded names,
pending traversal frames, final results and the aggregated report returned
to the interface layer.
"""

import functools
from dataclasses import dataclass, field
from typing import Any, List, Tuple

# -----------------------------------------------------------------------------
# RANKING MODELS
# -----------------------------------------------------------------------------

@functools.total_ordering
@dataclass(frozen=True, eq=False)
class WeightedName:
    """
    A filesystem entry name paired with its fitness against one fragment.

    Equality, hashing and ordering look at ``weight`` only. Two entries with
    different names but the same weight compare equal. Ranking relies on
    this: sorting by the weight key keeps equally weighted names in their
    original listing order.

    Attributes:
        name: Entry name (no directory component).
        weight: Non-negative fitness score, 0 meaning no viable match.
    """
    name: str
    weight: int

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, WeightedName):
            return NotImplemented
        return self.weight == other.weight

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, WeightedName):
            return NotImplemented
        return self.weight < other.weight

    def __hash__(self) -> int:
        return hash(self.weight)


# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchQuery:
    """
    Normalized query handed to the search core.

    Attributes:
        start_path: Absolute directory the search starts from.
        fragments: Ordered, non-empty fragments, one per directory level.
    """
    start_path: str
    fragments: Tuple[str, ...]


@dataclass(frozen=True)
class Candidate:
    """
    A pending node of the tree expansion.

    Attributes:
        full_path: Materialized path of the directory to list next.
        accumulated_weight: Sum of the per-level weights leading here.
        depth: Index of the fragment to match inside ``full_path``.
    """
    full_path: str
    accumulated_weight: int
    depth: int


@dataclass(frozen=True)
class SearchResult:
    """
    A matched leaf of the search tree.

    Attributes:
        full_path: Path of the matched file or directory.
        total_weight: Accrued fitness across every query level.
    """
    full_path: str
    total_weight: int


@dataclass(frozen=True)
class SearchReport:
    """
    Outcome of a complete search, as consumed by the CLI.

    Attributes:
        query: The normalized query that was searched.
        results: Results in output order, already truncated.
        cancelled: True if a timeout or cancellation signal cut the search short.
        visited: Number of directories listed.
        pruned: Number of directories whose listing failed.
    """
    query: SearchQuery
    results: List[SearchResult] = field(default_factory=list)
    cancelled: bool = False
    visited: int = 0
    pruned: int = 0

    @property
    def ok(self) -> bool:
        return bool(self.results)
