from __future__ import annotations

"""
Logging Configuration Model.

A frozen description of where diagnostics go for one CLI run. Paths are
the product of the tool, so the console sink always targets stderr and
never competes with them on stdout.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

_FALLBACK_LEVEL = logging.WARNING


@dataclass(frozen=True)
class LoggingConfig:
    """
    Sinks and formats for the logging subsystem.

    Attributes:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL or WARN).
        console: Mirror records to stderr.
        log_file: Optional rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the live one.
        console_fmt: Terminal format at INFO and above.
        debug_console_fmt: Terminal format when tracing, with thread and logger.
        file_fmt: Log file format.
        datefmt: Timestamp format for the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "fuzzypath: %(levelname)s: %(message)s"
    debug_console_fmt: str = "fuzzypath: %(levelname)s [%(threadName)s] %(name)s: %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_no(self) -> int:
        """Numeric level; unknown names degrade to WARNING."""
        value = logging.getLevelName(str(self.level or "").strip().upper())
        return value if isinstance(value, int) else _FALLBACK_LEVEL

    @property
    def terminal_fmt(self) -> str:
        """Console format matching the verbosity."""
        return self.debug_console_fmt if self.level_no <= logging.DEBUG else self.console_fmt

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], log_file: Optional[str] = None) -> LoggingConfig:
        """
        Build the logging setup from a validated search configuration.

        Args:
            settings: Output of ``validate_config``.
            log_file: Optional path given on the command line.

        Returns:
            LoggingConfig: Console plus optional file sink.
        """
        return cls(level=str(settings.get("log_level", "WARNING")), console=True, log_file=log_file)
