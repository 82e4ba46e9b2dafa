"""
Faultline — Context Registry

Process-wide lookup of shared service handles (the platform logger among
them). Until the hosting server has initialised the registry every lookup
fails with ContextNotInitialisedError; error-path callers are expected to
treat that as "not available" rather than let it escape.
"""

from __future__ import annotations

import threading
from typing import Any


class ContextError(RuntimeError):
    """Base for all context registry failures."""


class ContextNotInitialisedError(ContextError):
    """The registry was queried before the server finished start-up."""


class ContextKeyError(ContextError, KeyError):
    """No handle is registered under the requested key."""


class ContextRegistry:
    """
    Named handles shared across the process.

    The registry becomes usable once initialise() has been called; set()
    on its own does not initialise it, so partially wired start-up code
    cannot leak half-configured handles to readers.
    """

    def __init__(self) -> None:
        self._handles: dict[str, Any] = {}
        self._initialised = False
        self._lock = threading.Lock()

    @property
    def initialised(self) -> bool:
        return self._initialised

    def initialise(self, **handles: Any) -> None:
        """Register the given handles and open the registry for lookups."""
        with self._lock:
            self._handles.update(handles)
            self._initialised = True

    def set(self, key: str, handle: Any) -> None:
        with self._lock:
            self._handles[key] = handle

    def lookup(self, key: str) -> Any:
        if not self._initialised:
            raise ContextNotInitialisedError(
                f"context registry not initialised (lookup of {key!r})"
            )
        try:
            return self._handles[key]
        except KeyError:
            raise ContextKeyError(key) from None

    def has(self, key: str) -> bool:
        return self._initialised and key in self._handles

    def reset(self) -> None:
        """Drop all handles and return to the uninitialised state."""
        with self._lock:
            self._handles.clear()
            self._initialised = False


_process_context = ContextRegistry()


def get_context() -> ContextRegistry:
    """The process-wide registry instance."""
    return _process_context


def ctx(key: str) -> Any:
    """Shorthand for get_context().lookup(key)."""
    return _process_context.lookup(key)
