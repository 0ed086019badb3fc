from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. Records flow
through a QueueHandler on the root logger into a QueueListener that owns the
real console and file handlers, so log I/O stays off the comparison path.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from headercompare.infra.logging.config import LoggingConfig
from headercompare.infra.logging.handlers import build_handlers, is_managed, tag

_CONFIGURED_FLAG_ATTR: str = "_headercompare_configured"
_QUEUE_LISTENER_ATTR: str = "_headercompare_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, unless force is given.

    Args:
        cfg: Where and how verbosely the run logs.
        force: Replace handlers installed by an earlier call.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    root.setLevel(cfg.level_number)

    _remove_our_handlers(root)
    _stop_existing_listener(root)

    outputs = build_handlers(cfg)
    if not outputs:
        return root

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    listener = QueueListener(log_queue, *outputs, respect_handler_level=True)
    listener.start()

    root.addHandler(tag(QueueHandler(log_queue)))

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    atexit.register(_safe_stop_listener, listener)

    return root


def shutdown_logging() -> None:
    """Flush pending records and detach our handlers from the root logger."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if is_managed(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating a listener that was already stopped.

    QueueListener.stop() fails on a second call because its thread has been
    joined and cleared, which happens when shutdown_logging() ran before the
    atexit hook.
    """
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
