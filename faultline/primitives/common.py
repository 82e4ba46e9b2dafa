"""
Faultline — Common Primitives

Shared enums and base models used by the error pipeline and its loggers.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


# ─── Enums ────────────────────────────────────────────────────────


class Facility(enum.StrEnum):
    """Which platform log stream an entry belongs to."""

    SYSTEM = "system"
    APPLICATION = "application"
    AUDIT = "audit"
    AUTH = "auth"
    MONITOR = "monitor"


class Priority(enum.StrEnum):
    """Severity of a log entry. Values double as level names."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


# ─── Base Model ───────────────────────────────────────────────────


class FaultlineBaseModel(BaseModel):
    """Base model for all Faultline primitives."""

    model_config = {"populate_by_name": True, "from_attributes": True}


# ─── Log Entry ────────────────────────────────────────────────────


class LogEntry(FaultlineBaseModel):
    """
    One structured log record as handed to a platform logger.

    Facility and priority are plain strings so that callers may use
    site-specific facilities without extending the enums.
    """

    message: str
    facility: str = Facility.SYSTEM
    priority: str = Priority.ERROR
    caller_level: int = Field(default=1, ge=0)

    def with_overrides(
        self,
        message: str | None = None,
        facility: str | None = None,
        priority: str | None = None,
    ) -> LogEntry:
        """Copy of this entry with only the supplied fields replaced."""
        update: dict[str, str] = {}
        if message is not None:
            update["message"] = message
        if facility is not None:
            update["facility"] = str(facility)
        if priority is not None:
            update["priority"] = str(priority)
        return self.model_copy(update=update)
