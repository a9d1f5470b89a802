"""Coercing schemas: convert the raw input first, then validate it.

    >>> from typeshape import coerce
    >>> coerce.number().parse("0x10")
    16

The conversion rules live in ``typeshape.conversions``.  Be aware that
``coerce.boolean()`` applies truthiness rather than parsing text:
``coerce.boolean().parse("false")`` is ``True``.  Only empty strings,
zero, NaN, ``None``, ``MISSING`` and empty containers become ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import Schema
from .primitives import BooleanSchema, NumberSchema, StringSchema


@dataclass(frozen=True, kw_only=True)
class CoerceStringSchema(StringSchema):
    _kind_key = "CoerceString"


@dataclass(frozen=True, kw_only=True)
class CoerceNumberSchema(NumberSchema):
    _kind_key = "CoerceNumber"


@dataclass(frozen=True, kw_only=True)
class CoerceBooleanSchema(BooleanSchema):
    _kind_key = "CoerceBoolean"


@dataclass(frozen=True, kw_only=True)
class CoerceDateSchema(Schema):
    """Produces timezone-aware ``datetime`` values (UTC unless given)."""

    _kind_key = "CoerceDate"


def string() -> CoerceStringSchema:
    return CoerceStringSchema()


def number() -> CoerceNumberSchema:
    return CoerceNumberSchema()


def boolean() -> CoerceBooleanSchema:
    return CoerceBooleanSchema()


def date() -> CoerceDateSchema:
    """Coerce to a timezone-aware ``datetime``.

    Aware datetimes pass through untouched.  Two inputs are normalised
    rather than returned as given: a naive ``datetime`` gets UTC attached,
    and a plain ``date`` becomes a ``datetime`` at UTC midnight.  Strings
    are parsed as ISO 8601 and numbers are epoch milliseconds.
    """
    return CoerceDateSchema()
