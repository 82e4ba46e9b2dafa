"""
Faultline — Child Error Aggregation

A raised error may carry the errors that caused it. Their text is folded
into a single parameter (ERRVAL by default) so that it shows up in the
parent's rendered message and log entry.

Children are tagged on the way in: ErrorChild for structured platform
errors, TextChild for anything else. Both expose rendered_form().
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from faultline.errors.exception import PlatformError


@dataclass(frozen=True, slots=True)
class ErrorChild:
    error: PlatformError

    def rendered_form(self) -> str:
        return self.error.full_message()


@dataclass(frozen=True, slots=True)
class TextChild:
    text: str

    def rendered_form(self) -> str:
        return self.text


Child = Union[ErrorChild, TextChild]


def as_child(value: Any) -> Child | None:
    """
    Tag a raw child value. Falsy values (None, "", empty containers) are
    dropped by returning None.
    """
    from faultline.errors.exception import PlatformError

    if isinstance(value, (ErrorChild, TextChild)):
        return value
    if not value:
        return None
    if isinstance(value, PlatformError):
        return ErrorChild(value)
    if isinstance(value, BaseException):
        text = str(value)
        return TextChild(text) if text else None
    return TextChild(str(value))


def coerce_children(
    children: Iterable[Any] | None = None,
    child: Any = None,
) -> tuple[Child, ...]:
    """
    Build the ordered, tagged child sequence.

    The singular `child` is folded in after `children`, so both spellings
    end up in the same place and are treated alike.
    """
    raw: list[Any] = []
    if children:
        if isinstance(children, (str, bytes, BaseException)):
            raw.append(children)
        else:
            raw.extend(children)
    if child is not None:
        raw.append(child)

    tagged: list[Child] = []
    for value in raw:
        item = as_child(value)
        if item is not None:
            tagged.append(item)
    return tuple(tagged)


def aggregate_children(
    params: Mapping[str, Any] | None,
    children: Iterable[Any] | None,
    key: str = "ERRVAL",
) -> dict[str, Any]:
    """
    Return a copy of `params` with the children's rendered text appended
    under `key`.

    Empty children and children that render to an empty string add neither
    text nor separator. A non-empty value already under `key` is kept and
    separated from the new text by one space.
    """
    merged: dict[str, Any] = dict(params or {})
    for value in children or ():
        item = as_child(value)
        if item is None:
            continue
        text = item.rendered_form()
        if not text:
            continue
        existing = merged.get(key)
        merged[key] = f"{existing} {text}" if existing else text
    return merged
