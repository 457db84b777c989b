from __future__ import annotations

"""
Logging Sinks.

Factories for the handlers fed by the queue listener. Every handler created
here is marked as owned so a later reconfiguration removes exactly what this
package installed and leaves pytest's or a host application's handlers alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO

_HANDLER_TAG_ATTR: str = "_fuzzypath_handler"


# ==============================================================================
# OWNERSHIP
# ==============================================================================

def _own(handler: logging.Handler) -> logging.Handler:
    """Mark ``handler`` as installed by fuzzypath and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_owned(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def _create_console_handler(level: int, fmt: str, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Stream handler bound to stderr as it is at call time.

    Args:
        level: Numeric threshold.
        fmt: Record format.
        stream: Explicit stream, mainly for tests.

    Returns:
        logging.Handler: Owned console handler.
    """
    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter(fmt))
    return _own(sh)


def _create_rotating_file_handler(
        log_file: str,
        level: int,
        fmt: str,
        datefmt: str,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its folder first.

    A file that cannot be opened is reported once on stderr and skipped;
    the search still runs with console diagnostics only.

    Returns:
        Optional[RotatingFileHandler]: Owned handler, or None on I/O failure.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        if not os.path.isdir(parent):
            os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"fuzzypath: WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    _own(fh)
    return fh
