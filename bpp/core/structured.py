"""Helpers for working with the untyped JSON that arrives through inputs.

The ``keys`` input and version files are user-authored JSON. These helpers
narrow them at the boundary so the rest of the code can rely on plain
``dict[str, object]`` shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value from a mapping.

    Whitespace is preserved; only an empty string or a non-string counts as missing.
    """
    value = table.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value

