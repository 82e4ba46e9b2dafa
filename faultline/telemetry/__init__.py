"""
Faultline — Observability Infrastructure

Structured logging for the platform and its last-resort fallback channel.
"""

from faultline.telemetry.logging import ServerLog, get_fallback_logger, setup_logging

__all__ = ["ServerLog", "get_fallback_logger", "setup_logging"]
