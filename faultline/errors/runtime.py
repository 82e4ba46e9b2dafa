"""
Faultline — Active Error Runtime

The renderer and router that PlatformError.throw uses when the caller
doesn't pass its own. Servers call install() once during start-up; until
then a default runtime (no translations, process context registry) is in
effect.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from faultline.config import FaultlineConfig
from faultline.context import ContextRegistry
from faultline.errors.renderer import MessageRenderer
from faultline.errors.router import LoggingRouter
from faultline.i18n import Translator, load_catalog

logger = structlog.get_logger()


@dataclass(frozen=True)
class ErrorRuntime:
    renderer: MessageRenderer
    router: LoggingRouter


def build_runtime(
    config: FaultlineConfig | None = None,
    translator: Translator | None = None,
    registry: ContextRegistry | None = None,
) -> ErrorRuntime:
    """
    Assemble a renderer and router from configuration.

    An explicit translator takes precedence over the configured catalog.
    """
    config = config or FaultlineConfig()
    errors = config.errors

    if translator is None and config.i18n.catalog_path:
        translator = load_catalog(config.i18n.catalog_path)

    renderer = MessageRenderer(translator=translator, errval_key=errors.errval_key)
    router = LoggingRouter(
        registry=registry,
        fallback_channel=errors.fallback_channel,
        log_key=errors.registry_log_key,
        log_prefix=errors.log_prefix,
        facility=errors.default_facility,
        priority=errors.default_priority,
        caller_level=errors.caller_level,
    )
    return ErrorRuntime(renderer=renderer, router=router)


_runtime: ErrorRuntime | None = None
_runtime_lock = threading.Lock()


def install(
    config: FaultlineConfig | None = None,
    translator: Translator | None = None,
    registry: ContextRegistry | None = None,
) -> ErrorRuntime:
    """Build a runtime and make it the process default."""
    global _runtime
    runtime = build_runtime(config, translator=translator, registry=registry)
    with _runtime_lock:
        _runtime = runtime
    logger.info(
        "error_runtime_installed",
        system="faultline",
        translator=type(runtime.renderer.translator).__name__,
        fallback_channel=runtime.router.fallback_channel,
    )
    return runtime


def use(runtime: ErrorRuntime) -> None:
    """Make an already-built runtime the process default."""
    global _runtime
    with _runtime_lock:
        _runtime = runtime


def active_runtime() -> ErrorRuntime:
    global _runtime
    runtime = _runtime
    if runtime is not None:
        return runtime
    with _runtime_lock:
        if _runtime is None:
            _runtime = build_runtime()
        return _runtime


def reset() -> None:
    """Forget the installed runtime; the next throw builds a default one."""
    global _runtime
    with _runtime_lock:
        _runtime = None
