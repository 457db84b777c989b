from __future__ import annotations

"""
Fitness Scoring Engine.

A deliberately simple approach to fuzzy string matching, based on intent
rather than edit distance. A name only qualifies if every query character
appears in it, in order. Among qualifying names, consecutive runs, word
starts and upper-case letters (camel humps) are rewarded.
"""

from collections import deque
from typing import Deque, List, Optional

from fuzzypath.domain.constants import BOUNDARY_SENTINEL

# -----------------------------------------------------------------------------
# POINT TABLE
# -----------------------------------------------------------------------------

BASE_POINTS = 1
UPPER_CASE_BONUS = 2
STRONG_UPPER_BONUS = 1
CONSECUTIVE_BONUS = 1
BOUNDARY_BONUS = 1


# ==============================================================================
# PUBLIC API
# ==============================================================================

def score_fitness(needle: str, haystack: str) -> int:
    """
    Grade how well a query fragment fits a candidate name.

    Needle characters are checked off in order as they are found in the
    haystack. Each hit pushes its points on a stack. If a character that
    was already checked off shows up again with a better grade, the newer
    grade replaces the top of the stack. This lets 'mstf' prefer the 'S' of
    'Marcus_Stuff' over the earlier lower-case 's'.

    Args:
        needle: The typed query fragment.
        haystack: The entry name being judged.

    Returns:
        int: 0 if the needle is not a case-insensitive subsequence of the
             haystack (or is empty), otherwise the summed grade.
    """
    if not needle:
        return 0

    pending: Deque[str] = deque(needle)
    grades: List[int] = []

    since_last_match = 0
    prev = BOUNDARY_SENTINEL
    last_match: Optional[str] = None

    for hc in haystack:
        hcl = hc.lower()
        head = pending[0]

        if hcl == head.lower():
            grades.append(_grade(hc, prev, since_last_match))
            last_match = pending.popleft()
            since_last_match = 0

        elif last_match is not None and hcl == last_match.lower():
            grade = _grade(hc, prev, since_last_match)
            if hc.isupper() and head.isupper():
                grade += STRONG_UPPER_BONUS
            if grade > grades[-1]:
                grades[-1] = grade
            since_last_match = 0

        else:
            since_last_match += 1

        prev = hc

        if not pending:
            break

    if pending:
        return 0

    return sum(grades)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _grade(hc: str, prev: str, since_last_match: int) -> int:
    """Points for a single matching haystack character."""
    grade = BASE_POINTS
    if hc.isupper():
        grade += UPPER_CASE_BONUS
    if since_last_match == 0:
        grade += CONSECUTIVE_BONUS
    if not prev.isalnum():
        grade += BOUNDARY_BONUS
    return grade
