"""
Faultline — Structured Error Reporting

One way to raise, carry, aggregate, translate, and log application errors.
"""

from faultline.context import (
    ContextKeyError,
    ContextNotInitialisedError,
    ContextRegistry,
    get_context,
)
from faultline.errors import (
    DEFAULT,
    LogDirective,
    MessageCodeError,
    PlatformError,
    install,
)
from faultline.primitives.common import Facility, LogEntry, Priority
from faultline.telemetry.logging import ServerLog

__all__ = [
    "ContextKeyError",
    "ContextNotInitialisedError",
    "ContextRegistry",
    "DEFAULT",
    "Facility",
    "LogDirective",
    "LogEntry",
    "MessageCodeError",
    "PlatformError",
    "Priority",
    "ServerLog",
    "get_context",
    "install",
]
