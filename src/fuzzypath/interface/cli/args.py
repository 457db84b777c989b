from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from fuzzypath import __version__

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the fuzzypath CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="fuzzypath",
        description=(
            "Expand an abbreviated path query such as 'us/kj/md' into matching "
            "paths, best guesses first."
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    p.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Path query: fragments separated by '/' or '\\'. Accepts ~, /, .. and X:\\ prefixes.",
    )

    # --- Search Scope ---
    p.add_argument(
        "-s", "--start",
        dest="start_path",
        default=None,
        help="Directory relative queries start from (default: current directory).",
    )
    p.add_argument(
        "-n", "--max-results",
        dest="max_results",
        type=int,
        default=None,
        help="Maximum number of paths printed.",
    )
    p.add_argument(
        "--cap",
        dest="branching_cap",
        type=int,
        default=None,
        help="Maximum candidates expanded per directory level.",
    )

    # --- Execution ---
    p.add_argument(
        "-w", "--workers",
        dest="max_workers",
        type=int,
        default=None,
        help="Threads used to list directories of the same level.",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abandon the search after this many seconds and print what was found.",
    )

    # --- Output ---
    p.add_argument(
        "--sort",
        dest="sort_results",
        action="store_true",
        help="Order all matches by total weight instead of traversal order.",
    )
    p.add_argument(
        "--weights",
        dest="show_weights",
        action="store_true",
        help="Prefix every path with its fitness weight.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full search report as JSON.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the saved configuration file.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective settings as the new defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--log",
        dest="log_default",
        action="store_true",
        help="Write diagnostics to the rotating log in the user data directory.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Values left at their argparse default (None/False) are omitted so
    they do not mask saved settings.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("start_path", "max_results", "branching_cap", "max_workers", "timeout"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value

    if args.sort_results:
        overrides["sort_results"] = True
    if args.show_weights:
        overrides["show_weights"] = True
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
