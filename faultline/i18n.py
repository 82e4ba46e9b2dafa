"""
Faultline — Translation Lookup

The renderer only relies on one contract: translate(code, params) returns a
localised, fully interpolated string, or returns `code` itself when no
translation exists. There is no separate "not found" channel.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog
import yaml

logger = structlog.get_logger()


@runtime_checkable
class Translator(Protocol):
    def translate(self, code: str, params: Mapping[str, Any]) -> str: ...


class NullTranslator:
    """Never translates. Every code renders through the untranslated path."""

    def translate(self, code: str, params: Mapping[str, Any]) -> str:
        return code


class CatalogTranslator:
    """
    In-memory catalog of message templates keyed by message code.

    Templates reference parameters by their bracketed name, e.g.
    "File __FILENAME__ is missing". Placeholders with no matching
    parameter are left as they are.
    """

    def __init__(self, catalog: Mapping[str, str] | None = None) -> None:
        self._catalog: dict[str, str] = dict(catalog or {})

    def __len__(self) -> int:
        return len(self._catalog)

    def __contains__(self, code: object) -> bool:
        return code in self._catalog

    def add(self, code: str, template: str) -> None:
        self._catalog[code] = template

    def translate(self, code: str, params: Mapping[str, Any]) -> str:
        template = self._catalog.get(code)
        if template is None:
            return code

        if not params:
            return template

        # One pass over the exact param names, longest first, so that
        # __A__B__ is not consumed as __A__ and values are never rescanned
        names = sorted((str(k) for k in params if str(k)), key=len, reverse=True)
        if not names:
            return template
        pattern = re.compile("|".join(re.escape(name) for name in names))
        lookup = {str(k): v for k, v in params.items()}
        return pattern.sub(lambda m: str(lookup[m.group(0)]), template)


def load_catalog(path: str | Path) -> CatalogTranslator:
    """
    Load a YAML catalog of `CODE: template` pairs.

    Non-string entries are skipped with a warning; a missing file raises
    FileNotFoundError, as a deployment that names a catalog must ship it.
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Message catalog not found: {catalog_path}")

    with open(catalog_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Message catalog must be a mapping: {catalog_path}")

    catalog: dict[str, str] = {}
    for code, template in raw.items():
        if not isinstance(template, str):
            logger.warning(
                "catalog_entry_skipped",
                system="faultline",
                code=str(code),
                reason="template is not a string",
            )
            continue
        catalog[str(code)] = template

    logger.info("catalog_loaded", system="faultline", path=str(catalog_path), entries=len(catalog))
    return CatalogTranslator(catalog)
