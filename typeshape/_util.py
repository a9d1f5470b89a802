"""Shared helpers for schema modules.

Holds the ``MISSING`` sentinel (an absent object key, distinct from an
explicit ``None``) and the type naming used in issue messages.
"""

from __future__ import annotations

import datetime as _dt
import math
from collections.abc import Mapping
from typing import Any


class _Missing:
    """Marker for a value that is not there at all."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def is_number(value: Any) -> bool:
    """True for ints and floats, never for bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def is_sequence(value: Any) -> bool:
    """Lists and tuples count as arrays; strings and bytes do not."""
    return isinstance(value, (list, tuple))


def type_name(value: Any) -> str:
    """Name a runtime value the way issue messages describe it."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_nan(value):
        return "NaN"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (_dt.datetime, _dt.date)):
        return "date"
    if is_sequence(value):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def format_path(path: tuple[str | int, ...]) -> str:
    """Render a path as ``a.0.b``; the root renders empty."""
    return ".".join(str(p) for p in path)
