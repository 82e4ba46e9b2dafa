"""
Faultline — Shared Primitives

Enums and models shared by the error pipeline and the platform loggers.
"""

from faultline.primitives.common import (
    Facility,
    FaultlineBaseModel,
    LogEntry,
    Priority,
)

__all__ = [
    "Facility",
    "FaultlineBaseModel",
    "LogEntry",
    "Priority",
]
