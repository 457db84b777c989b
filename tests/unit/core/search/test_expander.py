from __future__ import annotations

"""
Unit tests for the Tree Expansion Engine.

Verifies:
1. Directory-only listing for a lone fragment, files at deeper final levels.
2. Branching cap enforcement at every node.
3. Weight accumulation and branch-visitation ordering.
4. Silent pruning of unreadable branches.
5. Parallel listing and cancellation.
"""

import itertools
import os
import threading
from pathlib import Path
from typing import List
from unittest.mock import patch

from fuzzypath.core.search.expander import TreeExpander
from fuzzypath.domain.errors import FilesystemAccessError
from fuzzypath.infra.fs import scan_entry_names


def _names(paths: List[str]) -> List[str]:
    return [os.path.basename(p) for p in paths]


# -----------------------------------------------------------------------------
# LEVEL SEMANTICS
# -----------------------------------------------------------------------------

def test_single_fragment_matches_directories_only(tmp_path: Path) -> None:
    """TC-01: A lone fragment never returns files."""
    (tmp_path / "dat").mkdir()
    (tmp_path / "data.txt").write_text("x", encoding="utf-8")

    results = TreeExpander(["da"]).expand(str(tmp_path))

    assert _names([r.full_path for r in results]) == ["dat"]


def test_final_level_includes_files_and_directories(workspace: Path) -> None:
    """TC-01: The last of several fragments ranks files and folders together."""
    results = TreeExpander(["tf", "i"]).expand(str(workspace))
    names = _names([r.full_path for r in results])

    assert "File.txt" in names
    assert "SimpleDir" in names
    assert "Zone" not in names


def test_intermediate_levels_skip_files(tmp_path: Path) -> None:
    """TC-01: Files never act as intermediate nodes."""
    (tmp_path / "docs.txt").write_text("x", encoding="utf-8")
    (tmp_path / "docs" / "readme").mkdir(parents=True)

    results = TreeExpander(["do", "re"]).expand(str(tmp_path))

    assert [r.full_path for r in results] == [os.path.join(str(tmp_path), "docs", "readme")]


def test_weights_accumulate_across_levels(workspace: Path) -> None:
    """TC-02: Total weight is the sum of every level's fitness."""
    results = TreeExpander(["tf", "sd"]).expand(str(workspace))

    # TestFolders (9) + SimpleDir (8), TestFolders (9) + alllcasedir (2)
    assert [r.total_weight for r in results] == [17, 11]


# -----------------------------------------------------------------------------
# BRANCHING CAP
# -----------------------------------------------------------------------------

def test_cap_limits_survivors_per_node(wide_tree: Path) -> None:
    """TC-03: Ten plausible matches are cut down to the default cap of six."""
    results = TreeExpander(["d"]).expand(str(wide_tree))

    assert len(results) == 6


def test_cap_limits_expansion_below_each_node(wide_tree: Path) -> None:
    """TC-03: Only capped survivors are descended into."""
    expander = TreeExpander(["d", "n"], branching_cap=3)
    results = expander.expand(str(wide_tree))

    # 1 root listing + 3 expanded children
    assert expander.visited == 4
    # Each child offers 'notes' and 'notes.txt'
    assert len(results) == 6
    assert len({os.path.dirname(r.full_path) for r in results}) == 3


def test_cap_is_never_below_one(workspace: Path) -> None:
    """TC-03: A non-positive cap still explores the best candidate."""
    results = TreeExpander(["tf"], branching_cap=0).expand(str(workspace))

    assert len(results) == 1


# -----------------------------------------------------------------------------
# ORDERING
# -----------------------------------------------------------------------------

def test_results_follow_branch_order(tmp_path: Path) -> None:
    """TC-04: Results are grouped by ancestor rank, not sorted globally."""
    (tmp_path / "Ab" / "zzx").mkdir(parents=True)   # 7 + 1 = 8
    (tmp_path / "a_b" / "X").mkdir(parents=True)    # 5 + 5 = 10

    results = TreeExpander(["ab", "x"]).expand(str(tmp_path))

    assert _names([r.full_path for r in results]) == ["zzx", "X"]
    assert [r.total_weight for r in results] == [8, 10]


# -----------------------------------------------------------------------------
# FAILURE SEMANTICS
# -----------------------------------------------------------------------------

def test_missing_start_directory_yields_nothing(tmp_path: Path) -> None:
    """TC-05: An unusable start path is not an error."""
    expander = TreeExpander(["a"])

    assert expander.expand(str(tmp_path / "missing")) == []
    assert expander.pruned == 1


def test_unreadable_branch_is_pruned_silently(tmp_path: Path) -> None:
    """TC-05: A failing listing drops that subtree only."""
    (tmp_path / "Alpha" / "Target").mkdir(parents=True)
    (tmp_path / "Apex" / "Target").mkdir(parents=True)
    locked = os.path.join(str(tmp_path), "Alpha")

    def flaky_scan(directory, pattern, **kwargs):
        if directory == locked:
            raise FilesystemAccessError(directory, "Permission denied")
        return scan_entry_names(directory, pattern, **kwargs)

    with patch("fuzzypath.core.search.expander.scan_entry_names", side_effect=flaky_scan):
        expander = TreeExpander(["a", "t"])
        results = expander.expand(str(tmp_path))

    assert [r.full_path for r in results] == [os.path.join(str(tmp_path), "Apex", "Target")]
    assert expander.pruned == 1
    assert expander.cancelled is False


def test_empty_fragment_list_yields_nothing(tmp_path: Path) -> None:
    """TC-05: Nothing to match, nothing returned."""
    assert TreeExpander([]).expand(str(tmp_path)) == []


# -----------------------------------------------------------------------------
# CONCURRENCY AND CANCELLATION
# -----------------------------------------------------------------------------

def test_parallel_listing_matches_sequential(wide_tree: Path) -> None:
    """TC-06: Thread-pool expansion reproduces the sequential order exactly."""
    sequential = TreeExpander(["d", "n"]).expand(str(wide_tree))
    parallel = TreeExpander(["d", "n"], max_workers=4).expand(str(wide_tree))

    assert parallel == sequential


def test_cancellation_before_start(workspace: Path) -> None:
    """TC-07: A set event stops the search before any listing."""
    event = threading.Event()
    event.set()
    expander = TreeExpander(["tf", "sd"], cancellation_event=event)

    assert expander.expand(str(workspace)) == []
    assert expander.cancelled is True
    assert expander.visited == 0


def test_cancellation_between_levels(workspace: Path) -> None:
    """TC-07: Signalling during a level keeps partial work and stops descent."""
    event = threading.Event()

    def scan_then_cancel(directory, pattern, **kwargs):
        names = scan_entry_names(directory, pattern, **kwargs)
        event.set()
        return names

    with patch("fuzzypath.core.search.expander.scan_entry_names", side_effect=scan_then_cancel):
        expander = TreeExpander(["tf", "sd"], cancellation_event=event)
        results = expander.expand(str(workspace))

    assert results == []
    assert expander.visited == 1
    assert expander.cancelled is True


def test_expired_timeout_stops_search(workspace: Path) -> None:
    """TC-07: Once the deadline passes, outstanding frames are abandoned."""
    with patch("fuzzypath.core.search.expander.time.monotonic", side_effect=itertools.count(0.0, 100.0)):
        expander = TreeExpander(["tf", "sd"], timeout=1.0)
        results = expander.expand(str(workspace))

    assert results == []
    assert expander.cancelled is True
