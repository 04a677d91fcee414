"""Typed accessors for parsed TOML tables.

`tomllib` hands back plain `dict[str, Any]`; these helpers validate each value
at the boundary so the config dataclasses only ever see the types they declare.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table, or None when missing or not a table."""
    value = table.get(key)
    if is_str_dict(value):
        return value
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a non-empty string value, stripped of surrounding whitespace."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Get a list of non-empty strings.

    Returns None if the key is missing, is not a list, or holds anything other
    than strings.
    """
    value = table.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    out: list[str] = []
    for item in items:
        if not isinstance(item, str) or not item.strip():
            return None
        out.append(item.strip())
    return out
