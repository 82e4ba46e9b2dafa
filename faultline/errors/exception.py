"""
Faultline — Platform Error

The one exception type every subsystem raises for application errors.

    PlatformError.throw(
        "I18N_FAULTLINE_FILE_MISSING",
        params={"FILENAME": path},       # shown as __FILENAME__
        children=[cause],                # folded into __ERRVAL__
        errno=2,                         # passed through untouched
    )

    try:
        ...
    except PlatformError as exc:
        if exc.message_code() == "I18N_FAULTLINE_FILE_MISSING":
            ...
        exc.rethrow()                    # same instance, logged once only

throw() renders the message, logs it exactly once (see router.py for the
`log=` directive), then raises the error object itself so handlers keep
structured access to code, params, children and errno.
"""

from __future__ import annotations

import sys
import types
from collections.abc import Callable, Iterable, Mapping
from typing import Any, NoReturn

import structlog

from faultline.errors.children import Child, coerce_children
from faultline.errors.renderer import MessageRenderer
from faultline.errors.router import DEFAULT
from faultline.errors.runtime import ErrorRuntime, active_runtime
from faultline.telemetry.logging import get_fallback_logger

logger = structlog.get_logger()


class MessageCodeError(ValueError):
    """
    A PlatformError was constructed without a usable message code.

    Severity: fatal to the raising call. The code is the identity of the
    error; it is never defaulted.
    """


class _throw_or_rethrow:
    """
    `throw` on the class constructs and raises a new error; `throw` on an
    instance re-raises that instance unchanged.
    """

    def __init__(self, func: Callable[..., NoReturn]) -> None:
        self._func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Any, owner: type) -> Callable[..., NoReturn]:
        if instance is not None:
            return lambda *args, **kwargs: instance.rethrow()
        return types.MethodType(self._func, owner)


class PlatformError(Exception):
    """
    Structured application error: message code, params, children, errno.

    The rendered message is computed once, from a copy of the params, and
    cached; str() and full_message() may be called any number of times.
    """

    FIELDS = ("code", "errno", "children", "params")

    def __init__(
        self,
        code: str,
        *,
        params: Mapping[str, Any] | None = None,
        children: Iterable[Any] | None = None,
        child: Any = None,
        errno: int | str | None = None,
        renderer: MessageRenderer | None = None,
    ) -> None:
        if not isinstance(code, str) or not code.strip():
            raise MessageCodeError(f"message code must be a non-empty string, got {code!r}")
        if params is not None and not isinstance(params, Mapping):
            raise TypeError(f"params must be a mapping, got {type(params).__name__}")
        super().__init__(code)
        self._code = code
        self._raw_params: Mapping[str, Any] = types.MappingProxyType(dict(params or {}))
        self._children: tuple[Child, ...] = coerce_children(children, child)
        self._errno = errno
        self._renderer = renderer
        self._params: Mapping[str, Any] | None = None
        self._message: str | None = None

    # ─── Accessors ───────────────────────────────────────────────

    @property
    def code(self) -> str:
        return self._code

    def message_code(self) -> str:
        """The untranslated, unmodified message code."""
        return self._code

    @property
    def errno(self) -> int | str | None:
        return self._errno

    @property
    def children(self) -> tuple[Child, ...]:
        return self._children

    @property
    def raw_params(self) -> Mapping[str, Any]:
        """Parameters exactly as the raiser passed them."""
        return self._raw_params

    @property
    def params(self) -> Mapping[str, Any]:
        """Rendered parameters: bracketed keys, child text under __ERRVAL__."""
        self._render()
        assert self._params is not None
        return self._params

    @classmethod
    def fields(cls) -> tuple[str, ...]:
        return cls.FIELDS

    # ─── Rendering ───────────────────────────────────────────────

    def _render(self) -> None:
        if self._message is not None:
            return
        renderer = self._renderer if self._renderer is not None else active_runtime().renderer
        try:
            prepared = renderer.prepare(self._raw_params, self._children)
            message = renderer.render(self._code, prepared)
        except Exception as exc:
            # Last resort: the bare code is still a correct identity
            logger.debug(
                "error_render_failed",
                system="faultline",
                code=self._code,
                error=str(exc),
            )
            prepared = {}
            message = self._code
        self._params = types.MappingProxyType(prepared)
        self._message = message

    def full_message(self) -> str:
        self._render()
        assert self._message is not None
        return self._message

    def __str__(self) -> str:
        return self.full_message()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._code!r}, params={dict(self._raw_params)!r})"

    # ─── Raise / catch ───────────────────────────────────────────

    @_throw_or_rethrow
    def throw(
        cls,
        code: str | PlatformError,
        *,
        params: Mapping[str, Any] | None = None,
        children: Iterable[Any] | None = None,
        child: Any = None,
        errno: int | str | None = None,
        log: Any = DEFAULT,
        runtime: ErrorRuntime | None = None,
    ) -> NoReturn:
        """
        Construct, log, and raise.

        `log` omitted logs the standard entry; `log=None` logs nothing;
        a LogDirective or mapping overrides message/facility/priority and
        may name an explicit ServerLog sink. Passing an existing
        PlatformError as `code` re-raises it untouched.
        """
        if isinstance(code, PlatformError):
            code.rethrow()

        runtime = runtime or active_runtime()
        error = cls(
            code,
            params=params,
            children=children,
            child=child,
            errno=errno,
            renderer=runtime.renderer,
        )
        rendered = error.full_message()

        try:
            runtime.router.route(rendered, log)
        except Exception:
            get_fallback_logger(runtime.router.fallback_channel).debug(rendered)

        raise error

    def rethrow(self) -> NoReturn:
        """Raise this same instance again. Nothing is re-rendered or re-logged."""
        raise self

    @classmethod
    def caught(cls, exc: BaseException | None = None) -> PlatformError | None:
        """
        `exc` (default: the exception being handled) if it is one of ours.

        Handlers use this to tell platform errors apart from arbitrary
        failures, which they typically re-raise untouched.
        """
        if exc is None:
            exc = sys.exc_info()[1]
        return exc if isinstance(exc, cls) else None
