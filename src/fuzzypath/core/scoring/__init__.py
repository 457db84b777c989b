from __future__ import annotations

from .fitness import score_fitness
from .ranker import rank_by_fitness

__all__ = [
    "score_fitness",
    "rank_by_fitness",
]
