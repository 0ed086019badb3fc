from __future__ import annotations

"""
Handler Construction.

Builds the console and run-log handlers owned by the queue listener. Every
handler created here is tagged so reconfiguration removes only our own,
leaving pytest's capture handlers and any host handlers in place.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List

from headercompare.infra.logging.config import LoggingConfig

_MANAGED_ATTR: str = "_headercompare_handler"


def tag(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _MANAGED_ATTR, True)
    return handler


def is_managed(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _MANAGED_ATTR, False))


def build_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the output handlers requested by cfg.

    A run log that cannot be opened is reported on stderr and skipped; the
    comparison itself does not depend on it.
    """
    level = cfg.level_number
    handlers: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        handlers.append(tag(sh))

    if cfg.log_file:
        try:
            parent = os.path.dirname(os.path.abspath(cfg.log_file))
            os.makedirs(parent, exist_ok=True)
            fh = RotatingFileHandler(
                cfg.log_file,
                maxBytes=cfg.max_bytes,
                backupCount=cfg.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            sys.stderr.write(f"WARNING: Cannot open run log '{cfg.log_file}': {e}\n")
        else:
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(cfg.file_fmt))
            handlers.append(tag(fh))

    return handlers
