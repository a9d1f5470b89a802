"""Literal, optional, nullable, union and enum schemas."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ._util import is_number
from .base import Schema, ensure_schema
from .issues import SchemaDefinitionError

LiteralValue = str | int | float | bool | None


@dataclass(frozen=True, kw_only=True)
class LiteralSchema(Schema):
    _kind_key = "Literal"

    value: LiteralValue

    @property
    def literal_type(self) -> str:
        """JSON type name of the captured constant."""
        if self.value is None:
            return "null"
        if isinstance(self.value, bool):
            return "boolean"
        if is_number(self.value):
            return "number"
        return "string"


@dataclass(frozen=True, kw_only=True)
class OptionalSchema(Schema):
    """Accepts ``MISSING``; anything else goes to ``inner``."""

    _kind_key = "Optional"

    inner: Schema

    def unwrap(self) -> Schema:
        return self.inner


@dataclass(frozen=True, kw_only=True)
class NullableSchema(Schema):
    """Accepts ``None``; anything else goes to ``inner``."""

    _kind_key = "Nullable"

    inner: Schema

    def unwrap(self) -> Schema:
        return self.inner


@dataclass(frozen=True, kw_only=True)
class UnionSchema(Schema):
    """Tries ``options`` in order and keeps the first success."""

    _kind_key = "Union"

    options: tuple[Schema, ...]


def literal(value: LiteralValue) -> LiteralSchema:
    if value is not None and not isinstance(value, (str, int, float, bool)):
        raise SchemaDefinitionError(
            f"Literal values must be str, int, float, bool or None, "
            f"got {type(value).__name__}"
        )
    if isinstance(value, float) and math.isnan(value):
        raise SchemaDefinitionError("NaN cannot be used as a literal")
    return LiteralSchema(value=value)


def optional(inner: Schema) -> OptionalSchema:
    return OptionalSchema(inner=ensure_schema(inner, "optional() argument"))


def nullable(inner: Schema) -> NullableSchema:
    return NullableSchema(inner=ensure_schema(inner, "nullable() argument"))


def union(*options: Schema) -> UnionSchema:
    if not options:
        raise SchemaDefinitionError("union() needs at least one candidate")
    for i, option in enumerate(options):
        ensure_schema(option, f"union() candidate {i}")
    return UnionSchema(options=tuple(options))


def enum_(values: Iterable[Any]) -> UnionSchema:
    """Union of literals, e.g. ``enum_(["admin", "user"])``."""
    values = list(values)
    if not values:
        raise SchemaDefinitionError("enum() needs at least one value")
    return union(*(literal(v) for v in values))
