"""
Faultline — Message Rendering

Turns a message code plus parameters into the text that reaches logs and
top-level handlers:
  1. Prepare — fold child errors into ERRVAL, bracket every key
  2. Translate — a catalog hit is final (the catalog consumed the params)
  3. Otherwise — the raw code followed by ", KEY => value" per parameter,
     keys in sorted order

The output depends only on the code and the parameter contents, never on
insertion order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from faultline.errors.children import aggregate_children
from faultline.errors.params import normalize_key, normalize_params
from faultline.i18n import NullTranslator, Translator

logger = structlog.get_logger()


def untranslated_message(code: str, params: Mapping[str, Any]) -> str:
    """The code with a sorted `, KEY => value` trailer (no trailer when empty)."""
    if not params:
        return code
    trailer = "".join(f", {key} => {params[key]}" for key in sorted(params))
    return f"{code}{trailer}"


class MessageRenderer:
    """
    Renders message codes through a translator.

    A translator that raises is treated exactly like one that found
    nothing; rendering runs on error paths and must not fail itself.
    """

    def __init__(
        self,
        translator: Translator | None = None,
        errval_key: str = "ERRVAL",
    ) -> None:
        self._translator: Translator = translator if translator is not None else NullTranslator()
        self._errval_key = normalize_key(errval_key)
        self._logger = logger.bind(system="faultline", component="renderer")

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def errval_key(self) -> str:
        """The bracketed params key holding aggregated child text."""
        return self._errval_key

    def prepare(
        self,
        params: Mapping[str, Any] | None,
        children: Iterable[Any] | None = None,
    ) -> dict[str, Any]:
        """
        Normalised params with child text merged in. Never mutates `params`.

        Keys are bracketed before children are folded in, so an ERRVAL the
        caller supplied (in any spelling) is appended to, not overwritten.
        """
        return aggregate_children(
            normalize_params(params),
            children,
            key=self._errval_key,
        )

    def translate(self, code: str, params: Mapping[str, Any]) -> str | None:
        """The translated text, or None when the catalog has no entry."""
        try:
            translated = self._translator.translate(code, dict(params))
        except Exception as exc:
            self._logger.debug("translation_failed", code=code, error=str(exc))
            return None
        if not isinstance(translated, str) or translated == code:
            return None
        return translated

    def render(self, code: str, params: Mapping[str, Any] | None = None) -> str:
        """Render `code` with already-prepared `params`."""
        prepared = params or {}
        translated = self.translate(code, prepared)
        if translated is not None:
            return translated
        return untranslated_message(code, prepared)
