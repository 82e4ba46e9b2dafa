"""
Faultline — Log Routing for Raised Errors

Each throw produces at most one log entry. The directive passed with the
throw decides which:

  DEFAULT (no directive)      → standard entry → fallback chain
  None / empty mapping        → nothing is logged
  LogDirective / mapping      → standard entry with the given fields
                                replaced; an explicit ServerLog sink gets
                                it directly, anything else goes through
                                the fallback chain

Fallback chain: the platform logger registered in the context registry,
else the last-resort stdlib channel (message text only, DEBUG level).

No failure in here may escape into the caller's error path.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from faultline.context import ContextRegistry, get_context
from faultline.primitives.common import Facility, LogEntry, Priority
from faultline.telemetry.logging import ServerLog, get_fallback_logger

logger = structlog.get_logger()


class _Default(enum.Enum):
    DEFAULT = "default"


# Marker for "no log directive was given"; distinct from None (= suppress)
DEFAULT = _Default.DEFAULT


@dataclass(frozen=True)
class LogDirective:
    """Per-throw logging overrides. Unset fields keep the standard value."""

    message: str | None = None
    facility: str | None = None
    priority: str | None = None
    sink: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> LogDirective:
        """Accepts `logger` as an alias of `sink`; unknown keys are ignored."""
        sink = raw.get("sink", raw.get("logger"))
        return cls(
            message=raw.get("message"),
            facility=raw.get("facility"),
            priority=raw.get("priority"),
            sink=sink,
        )


class LoggingRouter:
    """Routes the log entry of a raised error to exactly one destination."""

    def __init__(
        self,
        registry: ContextRegistry | None = None,
        fallback_channel: str = "faultline.system",
        log_key: str = "log",
        log_prefix: str = "Exception: ",
        facility: str = Facility.SYSTEM,
        priority: str = Priority.ERROR,
        caller_level: int = 1,
    ) -> None:
        self._registry = registry
        self._fallback_channel = fallback_channel
        self._log_key = log_key
        self._log_prefix = log_prefix
        self._facility = str(facility)
        self._priority = str(priority)
        self._caller_level = caller_level
        self._logger = logger.bind(system="faultline", component="router")

    @property
    def registry(self) -> ContextRegistry:
        # Resolved per call so that a router built before the process
        # registry was swapped out still sees the current one.
        return self._registry if self._registry is not None else get_context()

    @property
    def fallback_channel(self) -> str:
        return self._fallback_channel

    def standard_entry(self, rendered: str) -> LogEntry:
        return LogEntry(
            message=f"{self._log_prefix}{rendered}",
            facility=self._facility,
            priority=self._priority,
            caller_level=self._caller_level,
        )

    def route(self, rendered: str, directive: Any = DEFAULT) -> LogEntry | None:
        """
        Log the rendered message according to `directive`.

        Returns the entry that was handed to a logger, or None when logging
        was suppressed.
        """
        if directive is DEFAULT:
            entry = self.standard_entry(rendered)
            self._dispatch(entry)
            return entry

        if directive is None:
            return None
        if isinstance(directive, Mapping):
            if not directive:
                return None
            directive = LogDirective.from_mapping(directive)
        elif not isinstance(directive, LogDirective):
            # Anything else is a caller bug; still log rather than lose it
            self._logger.debug("unknown_log_directive", directive_type=type(directive).__name__)
            directive = LogDirective()

        try:
            entry = self.standard_entry(rendered).with_overrides(
                message=directive.message,
                facility=directive.facility,
                priority=directive.priority,
            )
        except Exception as exc:
            self._logger.debug("log_override_rejected", error=str(exc))
            entry = self.standard_entry(rendered)

        if isinstance(directive.sink, ServerLog):
            try:
                directive.sink.log(entry)
                return entry
            except Exception as exc:
                self._logger.debug("explicit_sink_failed", error=str(exc))
                self._fallback(entry)
                return entry

        self._dispatch(entry)
        return entry

    # ─── Fallback chain ──────────────────────────────────────────

    def resolve_platform_logger(self) -> Any | None:
        """The registered platform logger, or None when it can't be reached."""
        try:
            return self.registry.lookup(self._log_key)
        except Exception:
            return None

    def _dispatch(self, entry: LogEntry) -> None:
        platform_logger = self.resolve_platform_logger()
        if platform_logger is None:
            self._fallback(entry)
            return
        try:
            platform_logger.log(entry)
        except Exception as exc:
            self._logger.debug("platform_logger_failed", error=str(exc))
            self._fallback(entry)

    def _fallback(self, entry: LogEntry) -> None:
        get_fallback_logger(self._fallback_channel).debug(entry.message)
