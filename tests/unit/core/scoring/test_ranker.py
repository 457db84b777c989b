from __future__ import annotations

"""
Unit tests for the Candidate Ranking Service.

Verifies descending order, threshold filtering and sort stability.
"""

from fuzzypath.core.scoring.ranker import rank_by_fitness
from fuzzypath.domain.models import WeightedName


def test_rank_orders_best_first() -> None:
    """Higher fitness comes first; non-matching names are dropped."""
    ranked = rank_by_fitness("sd", ["alllcasedir", "Zone", "SimpleDir"])

    assert [wn.name for wn in ranked] == ["SimpleDir", "alllcasedir"]
    assert [wn.weight for wn in ranked] == [8, 2]


def test_rank_respects_threshold() -> None:
    """Only names at or above the threshold survive."""
    ranked = rank_by_fitness("sd", ["alllcasedir", "SimpleDir"], threshold=3)

    assert [wn.name for wn in ranked] == ["SimpleDir"]
    assert all(wn.weight >= 3 for wn in ranked)


def test_rank_is_stable_for_ties() -> None:
    """Equally weighted names keep their input order."""
    names = ["ab", "ac", "ad", "ae"]
    ranked = rank_by_fitness("a", names)

    assert len({wn.weight for wn in ranked}) == 1
    assert [wn.name for wn in ranked] == names


def test_rank_mixed_ties_preserve_relative_order() -> None:
    """Stability holds inside each weight bucket of a mixed list."""
    ranked = rank_by_fitness("d", ["xd", "Dz", "yd", "Dw"])

    assert [wn.name for wn in ranked] == ["Dz", "Dw", "xd", "yd"]


def test_rank_empty_input() -> None:
    """No haystacks, no results."""
    assert rank_by_fitness("sd", []) == []


def test_rank_returns_weighted_names() -> None:
    """Entries are WeightedName instances sorted non-increasing."""
    ranked = rank_by_fitness("f", ["File.txt", "leaf", "fox", "Fa"])

    assert all(isinstance(wn, WeightedName) for wn in ranked)
    weights = [wn.weight for wn in ranked]
    assert weights == sorted(weights, reverse=True)
