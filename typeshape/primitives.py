"""Primitive schemas: string, number, boolean, null, undefined, unknown, any."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from .base import Schema
from .issues import SchemaDefinitionError


@dataclass(frozen=True, kw_only=True)
class StringSchema(Schema):
    _kind_key = "String"

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    def min(self, length: int) -> StringSchema:
        return replace(self, min_length=length)

    def max(self, length: int) -> StringSchema:
        return replace(self, max_length=length)

    def regex(self, pattern: str) -> StringSchema:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise SchemaDefinitionError(f"Invalid pattern {pattern!r}: {exc}") from exc
        return replace(self, pattern=pattern)


@dataclass(frozen=True, kw_only=True)
class NumberSchema(Schema):
    _kind_key = "Number"

    minimum: float | None = None
    maximum: float | None = None
    finite_only: bool = False
    integer_only: bool = False

    def min(self, value: float) -> NumberSchema:
        return replace(self, minimum=value)

    def max(self, value: float) -> NumberSchema:
        return replace(self, maximum=value)

    def finite(self) -> NumberSchema:
        """Reject positive and negative infinity."""
        return replace(self, finite_only=True)

    def integer(self) -> NumberSchema:
        """Reject values with a fractional part."""
        return replace(self, integer_only=True)


@dataclass(frozen=True, kw_only=True)
class BooleanSchema(Schema):
    _kind_key = "Boolean"


@dataclass(frozen=True, kw_only=True)
class NullSchema(Schema):
    _kind_key = "Null"


@dataclass(frozen=True, kw_only=True)
class UndefinedSchema(Schema):
    """Accepts only ``MISSING``."""

    _kind_key = "Undefined"


@dataclass(frozen=True, kw_only=True)
class UnknownSchema(Schema):
    _kind_key = "Unknown"


@dataclass(frozen=True, kw_only=True)
class AnySchema(Schema):
    _kind_key = "Any"


def string() -> StringSchema:
    return StringSchema()


def number() -> NumberSchema:
    return NumberSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def null() -> NullSchema:
    return NullSchema()


def undefined() -> UndefinedSchema:
    """Match only an explicit ``MISSING`` value.

    Inside an object this does not make a key optional.  An absent key is
    reported as ``missing_field`` unless the property schema is
    ``optional(...)``; use ``optional(undefined())`` for a key that must
    be left out.
    """
    return UndefinedSchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def any_() -> AnySchema:
    return AnySchema()
