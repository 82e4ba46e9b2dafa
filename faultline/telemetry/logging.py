"""
Faultline — Structured Logging

All platform logging via structlog. ServerLog is the platform logger that
raised errors are reported to; the stdlib fallback channel is what remains
when no ServerLog is reachable.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TYPE_CHECKING, Any

import structlog

from faultline.primitives.common import Facility, LogEntry, Priority

if TYPE_CHECKING:
    from faultline.config import LoggingConfig


# ─── Priority → level mapping ────────────────────────────────────

_LEVEL_METHODS: dict[str, str] = {
    Priority.DEBUG: "debug",
    Priority.INFO: "info",
    Priority.WARN: "warning",
    "warning": "warning",
    Priority.ERROR: "error",
    Priority.FATAL: "critical",
    "critical": "critical",
}


class ServerLog:
    """
    The platform's structured logger.

    Every entry is bound with its facility; the entry's priority selects
    the level. Unknown priorities log at error so that nothing reported by
    an error path is lost.
    """

    def __init__(self, name: str = "faultline", **context: Any) -> None:
        self._name = name
        self._context = context

    @property
    def name(self) -> str:
        return self._name

    def _for_facility(self, facility: str) -> Any:
        return structlog.get_logger(self._name, facility=facility, **self._context)

    def log(self, entry: LogEntry) -> None:
        method = _LEVEL_METHODS.get(entry.priority.lower(), "error")
        bound = self._for_facility(entry.facility)
        getattr(bound, method)(
            entry.message,
            priority=entry.priority,
            caller_level=entry.caller_level,
        )

    def emit(
        self,
        message: str,
        facility: str = Facility.SYSTEM,
        priority: str = Priority.INFO,
    ) -> None:
        """Convenience for callers that don't hold a LogEntry."""
        self.log(LogEntry(message=message, facility=facility, priority=priority))


# ─── Last-resort channel ─────────────────────────────────────────
# Resolved once per channel name and kept for the life of the process.

_fallback_loggers: dict[str, logging.Logger] = {}
_fallback_lock = threading.Lock()


def get_fallback_logger(channel: str = "faultline.system") -> logging.Logger:
    """Lazily resolve (and cache) the stdlib logger behind the fallback channel."""
    handle = _fallback_loggers.get(channel)
    if handle is not None:
        return handle
    with _fallback_lock:
        handle = _fallback_loggers.get(channel)
        if handle is None:
            handle = logging.getLogger(channel)
            _fallback_loggers[channel] = handle
    return handle


def setup_logging(config: LoggingConfig, instance_id: str = "") -> None:
    """
    Configure structured logging for the entire application.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if instance_id:
        structlog.contextvars.bind_contextvars(instance_id=instance_id)

    renderer: Any
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # foreign_pre_chain lets plain stdlib records (the fallback channel)
    # pass through the same renderer as structlog events
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
