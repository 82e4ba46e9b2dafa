"""
Faultline — Error Pipeline

Raising, rendering, and logging of structured platform errors.
"""

from faultline.errors.children import (
    ErrorChild,
    TextChild,
    aggregate_children,
    as_child,
    coerce_children,
)
from faultline.errors.exception import MessageCodeError, PlatformError
from faultline.errors.params import normalize_key, normalize_params
from faultline.errors.renderer import MessageRenderer, untranslated_message
from faultline.errors.router import DEFAULT, LogDirective, LoggingRouter
from faultline.errors.runtime import ErrorRuntime, active_runtime, build_runtime, install

__all__ = [
    "DEFAULT",
    "ErrorChild",
    "ErrorRuntime",
    "LogDirective",
    "LoggingRouter",
    "MessageCodeError",
    "MessageRenderer",
    "PlatformError",
    "TextChild",
    "active_runtime",
    "aggregate_children",
    "as_child",
    "build_runtime",
    "coerce_children",
    "install",
    "normalize_key",
    "normalize_params",
    "untranslated_message",
]
