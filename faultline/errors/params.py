"""
Faultline — Parameter Normalisation

Every parameter shown to a user or written to a log is keyed as __NAME__,
whatever the caller passed: leading and trailing underscore runs are
stripped, the name is upper-cased, then wrapped in exactly two underscores
on each side.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def normalize_key(key: str) -> str:
    """
    >>> normalize_key("filename")
    '__FILENAME__'
    >>> normalize_key("__X_")
    '__X__'
    """
    return f"__{str(key).strip('_').upper()}__"


def normalize_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Return a new mapping with every key in the bracket convention.

    Keys are visited in sorted order, so when two raw keys collapse onto the
    same bracketed name the one sorting last wins. Values are untouched and
    the input is never mutated, which makes the operation safe to repeat:
    normalising an already-normalised mapping yields an equal mapping.
    """
    if not params:
        return {}
    normalized: dict[str, Any] = {}
    for key in sorted(params, key=str):
        normalized[normalize_key(key)] = params[key]
    return normalized
