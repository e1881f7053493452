from __future__ import annotations

"""
Logging Configuration.

The CLI only ever chooses a verbosity and an optional log file; formats are
fixed module constants shared by every handler the subsystem creates.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(threadName)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Quiet by default: analysis progress is INFO, only problems reach the terminal
CLI_LEVEL = "WARNING"
CLI_DEBUG_LEVEL = "DEBUG"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging bootstrap.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Mirror records to stderr.
        log_file: Rotating log file path, None to skip file output.
        max_bytes: Rotation threshold per segment.
        backup_count: Rotated segments kept on disk.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        return cls(level=CLI_DEBUG_LEVEL if debug else CLI_LEVEL, console=True, log_file=log_file)

    @property
    def level_number(self) -> int:
        name = str(self.level or "").strip().upper()
        value = logging.getLevelName(name) if name else None
        return value if isinstance(value, int) else logging.INFO
