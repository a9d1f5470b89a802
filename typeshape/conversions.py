"""Deterministic pre-conversions used by the ``coerce`` schemas.

Each function maps any input to the target type.  They never raise for
bad input: ``to_number`` returns NaN and ``to_date`` returns None, and
the validation engine turns those into ``invalid_number`` /
``invalid_date`` issues.

Note the boolean rule: it is truthiness, not a parse.  ``"false"`` and
``"0"`` are non-empty strings and therefore coerce to ``True``.
"""

from __future__ import annotations

import datetime as _dt
import json
import math
import re
from collections.abc import Mapping
from typing import Any

from ._util import MISSING, is_nan, is_number, is_sequence

EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_PREFIXED_RE = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_BASES = {"x": 16, "o": 8, "b": 2}
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------


def _number_to_string(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if value is MISSING:
        return "undefined"
    if is_number(value):
        return _number_to_string(value)
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if is_sequence(value):
        return ",".join(
            "" if item is None or item is MISSING else to_string(item)
            for item in value
        )
    if isinstance(value, Mapping):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------


def _parse_number(text: str) -> int | float:
    text = text.strip()
    if not text:
        return 0
    if text in _INFINITIES:
        return _INFINITIES[text]
    m = _PREFIXED_RE.fullmatch(text)
    if m:
        try:
            return int(m.group(2), _BASES[m.group(1).lower()])
        except ValueError:
            return math.nan
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return math.nan


def to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return 1 if value else 0
    if is_number(value):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        return _parse_number(value)
    if isinstance(value, _dt.datetime):
        return int(_as_aware(value).timestamp() * 1000)
    return math.nan


# ---------------------------------------------------------------------------
# Boolean
# ---------------------------------------------------------------------------


def to_boolean(value: Any) -> bool:
    if value is MISSING or value is None:
        return False
    if is_nan(value):
        return False
    return bool(value)


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------


def _as_aware(value: _dt.datetime) -> _dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=_dt.timezone.utc)
    return value


def to_date(value: Any) -> _dt.datetime | None:
    if isinstance(value, _dt.datetime):
        return _as_aware(value)
    if isinstance(value, _dt.date):
        return _dt.datetime(value.year, value.month, value.day, tzinfo=_dt.timezone.utc)
    if is_number(value):
        if is_nan(value) or math.isinf(value):
            return None
        try:
            return EPOCH + _dt.timedelta(milliseconds=value)
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _as_aware(_dt.datetime.fromisoformat(text))
        except ValueError:
            return None
    return None
