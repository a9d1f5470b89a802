"""Object, array and record schemas, plus the object algebra.

``pick``, ``omit``, ``partial`` and ``extend`` build new object schemas
from an existing one.  They never touch the receiver, keep property
insertion order (new keys from ``extend`` go at the end), and carry the
description and unknown-key policy over unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from . import config
from .base import Schema, ensure_schema
from .combinators import optional
from .issues import SchemaDefinitionError
from .kinds import SchemaKind, kind_of
from .primitives import string

log = logging.getLogger(__name__)

UNKNOWN_KEY_POLICIES = config.UNKNOWN_KEY_POLICIES


def _key_list(keys: Iterable[str] | str) -> list[str]:
    if isinstance(keys, str):
        return [keys]
    return list(keys)


@dataclass(frozen=True, kw_only=True)
class ObjectSchema(Schema):
    _kind_key = "Object"

    shape: Mapping[str, Schema]
    unknown_keys: str = "strip"

    def __post_init__(self) -> None:
        super().__post_init__()
        frozen: dict[str, Schema] = {}
        for key, prop in self.shape.items():
            if not isinstance(key, str):
                raise SchemaDefinitionError(
                    f"Object property names must be strings, got {key!r}"
                )
            frozen[key] = ensure_schema(prop, f"Property {key!r}")
        object.__setattr__(self, "shape", MappingProxyType(frozen))
        if self.unknown_keys not in UNKNOWN_KEY_POLICIES:
            raise SchemaDefinitionError(
                f"unknown_keys must be one of {UNKNOWN_KEY_POLICIES}, "
                f"got {self.unknown_keys!r}"
            )

    def keys(self) -> list[str]:
        return list(self.shape)

    def shape_of(self, key: str) -> Schema:
        try:
            return self.shape[key]
        except KeyError:
            raise SchemaDefinitionError(f"Object has no property {key!r}") from None

    # -- unknown-key policy -------------------------------------------------

    def strict(self) -> ObjectSchema:
        """Report unknown input keys as an ``unrecognized_keys`` issue."""
        return replace(self, unknown_keys="strict")

    def passthrough(self) -> ObjectSchema:
        """Keep unknown input keys in the output unvalidated."""
        return replace(self, unknown_keys="passthrough")

    def strip(self) -> ObjectSchema:
        """Ignore unknown input keys and drop them from the output."""
        return replace(self, unknown_keys="strip")

    # -- object algebra -----------------------------------------------------

    def _check_known(self, keys: list[str], op: str) -> None:
        unknown = [k for k in keys if k not in self.shape]
        if unknown:
            raise SchemaDefinitionError(
                f"Cannot {op} unknown key(s) {unknown}; "
                f"object has {self.keys()}"
            )

    def pick(self, keys: Iterable[str] | str) -> ObjectSchema:
        wanted = _key_list(keys)
        self._check_known(wanted, "pick")
        return replace(
            self, shape={k: v for k, v in self.shape.items() if k in wanted}
        )

    def omit(self, keys: Iterable[str] | str) -> ObjectSchema:
        dropped = _key_list(keys)
        self._check_known(dropped, "omit")
        return replace(
            self, shape={k: v for k, v in self.shape.items() if k not in dropped}
        )

    def partial(self) -> ObjectSchema:
        """Make every property optional; already-optional ones stay as is."""
        return replace(self, shape={
            k: v if kind_of(v) is SchemaKind.OPTIONAL else optional(v)
            for k, v in self.shape.items()
        })

    def extend(self, props: Mapping[str, Schema]) -> ObjectSchema:
        """Merge *props* in; on a clash the incoming definition wins."""
        overridden = [k for k in props if k in self.shape]
        if overridden:
            log.debug("extend() overriding properties %s", overridden)
        return replace(self, shape={**self.shape, **props})


@dataclass(frozen=True, kw_only=True)
class ArraySchema(Schema):
    _kind_key = "Array"

    item: Schema


@dataclass(frozen=True, kw_only=True)
class RecordSchema(Schema):
    """Mapping with arbitrary keys; every key and value is checked."""

    _kind_key = "Record"

    key: Schema
    value: Schema


def object_(
    shape: Mapping[str, Schema] | None = None,
    *,
    unknown_keys: str | None = None,
) -> ObjectSchema:
    """Object schema with the given properties, in the given order.

    *unknown_keys* defaults to ``config.DEFAULT_UNKNOWN_KEYS``.
    """
    return ObjectSchema(
        shape=dict(shape or {}),
        unknown_keys=unknown_keys or config.DEFAULT_UNKNOWN_KEYS,
    )


def array(item: Schema) -> ArraySchema:
    return ArraySchema(item=ensure_schema(item, "array() item"))


def record(key: Schema, value: Schema | None = None) -> RecordSchema:
    """``record(value)`` is shorthand for ``record(string(), value)``."""
    if value is None:
        key, value = string(), key
    return RecordSchema(
        key=ensure_schema(key, "record() key"),
        value=ensure_schema(value, "record() value"),
    )
