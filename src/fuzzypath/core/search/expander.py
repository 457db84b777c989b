from __future__ import annotations

"""
Tree Expansion Engine.

Walks the filesystem one query fragment per depth level. At every node the
listing is pre-filtered with a glob, ranked, and cut down to the branching
cap before anything below it is visited. Intermediate levels only consider
directories; the final level (past the first) also considers files.

The traversal keeps an explicit frontier of Candidate frames and expands a
whole level at a time. Each level's children are concatenated in frontier
order, so the output is identical to a depth-first walk that visits
survivors best-first. Frames of one level are independent, which allows
them to be listed on a thread pool without changing the result order.
"""

import contextlib
import logging
import os
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import ContextManager, List, NamedTuple, Optional, Sequence

from fuzzypath.core.scoring.ranker import rank_by_fitness
from fuzzypath.domain.constants import DEFAULT_BRANCHING_CAP
from fuzzypath.domain.errors import FilesystemAccessError
from fuzzypath.domain.models import Candidate, SearchResult, WeightedName
from fuzzypath.infra.fs import build_glob_pattern, scan_entry_names

logger = logging.getLogger(__name__)


class _FrameOutcome(NamedTuple):
    """What expanding a single frame produced."""
    children: List[Candidate]
    results: List[SearchResult]
    listed: bool
    failed: bool


_SKIPPED = _FrameOutcome(children=[], results=[], listed=False, failed=False)


class TreeExpander:
    """
    Expands a fragment sequence into weighted filesystem paths.

    One instance serves one search. Counters describing the traversal are
    available after ``expand`` returns.

    Attributes:
        visited: Directories listed successfully.
        pruned: Directories whose listing failed.
        cancelled: True if the search stopped before the frontier emptied.
    """

    def __init__(
            self,
            fragments: Sequence[str],
            branching_cap: int = DEFAULT_BRANCHING_CAP,
            max_workers: int = 1,
            cancellation_event: Optional[threading.Event] = None,
            timeout: Optional[float] = None,
    ) -> None:
        """
        Args:
            fragments: Ordered query fragments, one per directory level.
            branching_cap: Maximum survivors expanded at any node.
            max_workers: Threads used to list a level; 1 lists sequentially.
            cancellation_event: External abort signal.
            timeout: Seconds after which outstanding frames are abandoned.
        """
        self._fragments = tuple(fragments)
        self._last = len(self._fragments) - 1
        self._cap = max(1, int(branching_cap))
        self._max_workers = max(1, int(max_workers))
        self._cancellation_event = cancellation_event
        self._timeout = timeout if timeout and timeout > 0 else None
        self._deadline: Optional[float] = None

        self.visited = 0
        self.pruned = 0
        self.cancelled = False

    # ==========================================================================
    # PUBLIC API
    # ==========================================================================

    def expand(self, start_path: str) -> List[SearchResult]:
        """
        Run the expansion from ``start_path`` at depth 0.

        Args:
            start_path: Directory matched against the first fragment.

        Returns:
            List[SearchResult]: Results in branch-visitation order. Partial if
                                the search was cancelled.
        """
        if not self._fragments:
            return []

        if self._timeout is not None:
            self._deadline = time.monotonic() + self._timeout

        frontier: List[Candidate] = [Candidate(full_path=start_path, accumulated_weight=0, depth=0)]
        results: List[SearchResult] = []

        with self._executor_scope() as executor:
            while frontier:
                if self._should_stop():
                    self.cancelled = True
                    break

                depth = frontier[0].depth
                outcomes = self._expand_level(frontier, executor)

                next_frontier: List[Candidate] = []
                for outcome in outcomes:
                    next_frontier.extend(outcome.children)
                    results.extend(outcome.results)
                    if outcome.listed:
                        self.visited += 1
                    if outcome.failed:
                        self.pruned += 1
                    if not outcome.listed and not outcome.failed:
                        self.cancelled = True

                logger.debug(
                    f"Level {depth} ('{self._fragments[depth]}'): {len(frontier)} nodes, "
                    f"{len(next_frontier)} to expand, {len(results)} results so far"
                )
                frontier = next_frontier

        if self.cancelled:
            logger.warning(f"Search interrupted; returning {len(results)} partial results.")

        return results

    # ==========================================================================
    # PRIVATE HELPERS (SCHEDULING)
    # ==========================================================================

    def _executor_scope(self) -> ContextManager[Optional[Executor]]:
        """Provide a thread pool only when parallel listing was requested."""
        if self._max_workers > 1:
            return ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="ExpanderWorker",
            )
        return contextlib.nullcontext()

    def _expand_level(
            self,
            frontier: List[Candidate],
            executor: Optional[Executor],
    ) -> List[_FrameOutcome]:
        """Expand every frame of one level, preserving frontier order."""
        if executor is None or len(frontier) == 1:
            return [self._expand_frame(frame) for frame in frontier]

        # map() yields in submission order, never completion order
        return list(executor.map(self._expand_frame, frontier))

    def _should_stop(self) -> bool:
        """Check the cancellation signal and the deadline."""
        if self._cancellation_event is not None and self._cancellation_event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return False

    # ==========================================================================
    # PRIVATE HELPERS (NODE EXPANSION)
    # ==========================================================================

    def _expand_frame(self, frame: Candidate) -> _FrameOutcome:
        """
        List, rank and prune one node.

        A final-level frame emits results; any other frame emits children
        for the next level. Listing failures prune the node silently.
        """
        if self._should_stop():
            return _SKIPPED

        fragment = self._fragments[frame.depth]
        is_final = frame.depth == self._last

        # A lone fragment only ever matches directories
        include_files = is_final and frame.depth > 0

        try:
            names = scan_entry_names(
                frame.full_path,
                build_glob_pattern(fragment),
                dirs=True,
                files=include_files,
            )
        except FilesystemAccessError as e:
            logger.debug(f"Pruned branch: {e}")
            return _FrameOutcome(children=[], results=[], listed=False, failed=True)

        survivors = self._select_survivors(fragment, names)

        if is_final:
            results = [
                SearchResult(
                    full_path=os.path.join(frame.full_path, wn.name),
                    total_weight=frame.accumulated_weight + wn.weight,
                )
                for wn in survivors
            ]
            return _FrameOutcome(children=[], results=results, listed=True, failed=False)

        children = [
            Candidate(
                full_path=os.path.join(frame.full_path, wn.name),
                accumulated_weight=frame.accumulated_weight + wn.weight,
                depth=frame.depth + 1,
            )
            for wn in survivors
        ]
        return _FrameOutcome(children=children, results=[], listed=True, failed=False)

    def _select_survivors(self, fragment: str, names: List[str]) -> List[WeightedName]:
        """Rank names and keep the best ``cap`` with a positive weight."""
        if not names:
            return []
        graded = rank_by_fitness(fragment, names)
        return [wn for wn in graded if wn.weight > 0][:self._cap]
