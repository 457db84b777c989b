from __future__ import annotations

from .engine import find_paths, run_search, search
from .expander import TreeExpander

__all__ = [
    "find_paths",
    "run_search",
    "search",
    "TreeExpander",
]
