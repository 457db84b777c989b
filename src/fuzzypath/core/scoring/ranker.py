from __future__ import annotations

"""
Candidate Ranking Service.

Grades a batch of entry names against one query fragment and orders the
survivors from best to worst fit.
"""

from typing import Iterable, List

from fuzzypath.core.scoring.fitness import score_fitness
from fuzzypath.domain.constants import DEFAULT_FITNESS_THRESHOLD
from fuzzypath.domain.models import WeightedName


def rank_by_fitness(
        needle: str,
        haystacks: Iterable[str],
        threshold: int = DEFAULT_FITNESS_THRESHOLD,
) -> List[WeightedName]:
    """
    Score every haystack and return the qualifying ones, best first.

    The sort is stable: names with equal weight keep their input order.

    Args:
        needle: Query fragment to match.
        haystacks: Candidate entry names.
        threshold: Minimum weight a name needs to be kept.

    Returns:
        List[WeightedName]: Names with ``weight >= threshold``, descending.
    """
    graded = [WeightedName(name=h, weight=score_fitness(needle, h)) for h in haystacks]

    # Filter before sorting to skip unnecessary comparisons
    graded = [wn for wn in graded if wn.weight >= threshold]

    graded.sort(key=lambda wn: wn.weight, reverse=True)
    return graded
