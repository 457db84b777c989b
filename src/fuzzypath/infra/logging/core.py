from __future__ import annotations

"""
Logging Lifecycle.

Installs a single QueueHandler on the root logger and drains it on a
QueueListener thread, so expander workers never block on file I/O. The
CLI reconfigures once per invocation (``force=True``) after the final log
level is known; everything else calls ``configure_logging`` idempotently.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from fuzzypath.infra.fs import get_user_data_dir
from fuzzypath.infra.logging.config import LoggingConfig
from fuzzypath.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_owned,
    _own,
)

_CONFIGURED_FLAG_ATTR: str = "_fuzzypath_configured"
_QUEUE_LISTENER_ATTR: str = "_fuzzypath_queue_listener"

LOG_DIR_NAME = "logs"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "fuzzypath.log") -> str:
    """Conventional log file location inside the user data directory."""
    return os.path.join(get_user_data_dir(), LOG_DIR_NAME, file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route root logger records through a queue to the configured sinks.

    Args:
        cfg: Sinks, level and formats.
        force: Replace a previous configuration instead of keeping it.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    reset_logging()
    level = cfg.level_no
    root.setLevel(level)

    try:
        sinks = _build_sinks(cfg, level)
        if sinks:
            _attach_queue(root, sinks)
    except (OSError, ValueError, TypeError) as e:
        _attach_fallback(root, e)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def reset_logging() -> None:
    """Stop our listener and detach every handler this package installed."""
    root = logging.getLogger()

    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if _is_owned(h):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    """Named logger under the root configured above."""
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _build_sinks(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(_create_console_handler(level, cfg.terminal_fmt))
    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file, level, cfg.file_fmt, cfg.datefmt, cfg.max_bytes, cfg.backup_count
        )
        if fh is not None:
            sinks.append(fh)
    return sinks


def _attach_queue(root: logging.Logger, sinks: List[logging.Handler]) -> None:
    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(_own(QueueHandler(records)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)

    # Drain whatever is still queued when the interpreter exits
    atexit.register(_stop_listener, listener)


def _attach_fallback(root: logging.Logger, error: Exception) -> None:
    """Plain synchronous stderr output when the queue cannot be set up."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("fuzzypath: %(levelname)s: %(message)s"))
    root.addHandler(_own(sh))
    root.warning(f"Logging setup failed ({error}); using plain stderr output.")


def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop ``listener`` unless it was never started or is already stopped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
