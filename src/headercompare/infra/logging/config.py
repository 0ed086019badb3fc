from __future__ import annotations

"""
Logging Configuration Model.

A single frozen dataclass describing where run logs go: stderr for the
operator and, with --log-file, a small rotating file kept next to the run.
"""

import logging
from dataclasses import dataclass
from typing import Optional

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings for one CLI invocation.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Emit records on stderr.
        log_file: Optional path of a rotating run log.
        max_bytes: Rollover threshold of the run log.
        backup_count: Rotated run logs to keep.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    @property
    def level_number(self) -> int:
        name = str(self.level or "").strip().upper()
        return getattr(logging, name) if name in _LEVEL_NAMES else logging.INFO
