from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared directory layouts used by the search tests.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """
    Create the reference layout searched by the scenario tests.

    Structure:
    /workspace
      /TestFolders
        /SimpleDir
        /alllcasedir
        /Misc
        /Zone
        File.txt
        FileTwo.txt
    """
    root = tmp_path / "workspace"
    folders = root / "TestFolders"
    for name in ("SimpleDir", "alllcasedir", "Misc", "Zone"):
        (folders / name).mkdir(parents=True)

    (folders / "File.txt").write_text("one", encoding="utf-8")
    (folders / "FileTwo.txt").write_text("two", encoding="utf-8")

    return root


@pytest.fixture
def wide_tree(tmp_path: Path) -> Path:
    """
    Create a directory with ten plausible matches for 'd', each holding a
    'notes' subdirectory and a 'notes.txt' file.
    """
    root = tmp_path / "wide"
    for i in range(10):
        sub = root / f"dir{i}"
        (sub / "notes").mkdir(parents=True)
        (sub / "notes.txt").write_text("x", encoding="utf-8")
    return root
