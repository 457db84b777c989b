from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration merging
(defaults, saved file, flags), logging bootstrap, query resolution, search
execution, and result rendering. Paths go to stdout, one per line, so the
command composes with shell functions such as `cd "$(fuzzypath us/kj)"`.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fuzzypath.core.search.engine import search
from fuzzypath.core.services.resolver import resolve_query
from fuzzypath.core.services.validator import validate_config
from fuzzypath.domain.config import get_default_config, load_config, save_config
from fuzzypath.domain.errors import InvalidQueryError
from fuzzypath.domain.models import SearchReport
from fuzzypath.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from fuzzypath.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 if something matched, 1 if nothing did, 2 on usage errors.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 3. Map, merge and validate command-line overrides
    overrides = cli_args.args_to_overrides(args)
    clean_conf, warnings = validate_config(_merge_config(base_conf, overrides), strict=False)

    # 4. Logging bootstrap (stderr only, stdout is reserved for paths)
    log_file = args.log_file or (get_default_log_path() if args.log_default else None)
    logging_conf = LoggingConfig.from_settings(clean_conf, log_file=log_file)
    configure_logging(logging_conf, force=True)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        if save_config(clean_conf):
            logger.info("Settings saved as new defaults.")

    if not args.query:
        if args.save_config:
            return EXIT_OK
        parser.print_usage(sys.stderr)
        print("ERROR: a path query is required.", file=sys.stderr)
        return EXIT_USAGE

    # 5. Query resolution and pre-flight verification of where it starts
    try:
        query = resolve_query(args.query, clean_conf["start_path"])
    except InvalidQueryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    if not os.path.isdir(query.start_path):
        msg = f"Start directory does not exist: {query.start_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    # 6. Search execution phase
    try:
        report = search(query, clean_conf)
    except KeyboardInterrupt:
        print("Search interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    # 7. Output rendering phase
    if args.json_output:
        print(json.dumps(_report_to_dict(report), ensure_ascii=False, indent=2))
    else:
        _print_paths(report, show_weights=clean_conf["show_weights"])

    return EXIT_OK if report.ok else EXIT_NO_MATCH

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only keys known to the base configuration are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_paths(report: SearchReport, show_weights: bool) -> None:
    """Print one result per line, optionally prefixed by its weight."""
    for result in report.results:
        if show_weights:
            print(f"{result.total_weight}\t{result.full_path}")
        else:
            print(result.full_path)

    if report.cancelled:
        print("WARNING: search timed out, results may be incomplete.", file=sys.stderr)


def _report_to_dict(report: SearchReport) -> Dict[str, Any]:
    """Serialize a report, adding the derived ``ok`` flag."""
    payload = asdict(report)
    payload["query"]["fragments"] = list(report.query.fragments)
    payload["ok"] = report.ok
    return payload


if __name__ == "__main__":
    sys.exit(main())
