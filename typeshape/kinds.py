"""Stable kind tags for schema nodes.

Every node is stamped at construction with a tag fetched from one
process-wide registry keyed by fixed strings.  Dispatch (JSON-Schema
conversion, the validation engine, object algebra) reads the tag and
never looks at ``type(node).__name__``, so renaming or wrapping the
implementation classes cannot change how a node is treated.

The registry is filled once at import from the closed ``SchemaKind``
enumeration and is read-only afterwards.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any

KIND_ATTR = "__typeshape_kind__"
"""Attribute name under which nodes carry their tag."""


class SchemaKind(str, Enum):
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    NULL = "Null"
    UNDEFINED = "Undefined"
    UNKNOWN = "Unknown"
    ANY = "Any"
    OBJECT = "Object"
    ARRAY = "Array"
    RECORD = "Record"
    LITERAL = "Literal"
    OPTIONAL = "Optional"
    NULLABLE = "Nullable"
    UNION = "Union"
    COERCE_STRING = "CoerceString"
    COERCE_NUMBER = "CoerceNumber"
    COERCE_BOOLEAN = "CoerceBoolean"
    COERCE_DATE = "CoerceDate"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_REGISTRY: MappingProxyType[str, SchemaKind] = MappingProxyType(
    {kind.value: kind for kind in SchemaKind}
)


def lookup_kind(key: str) -> SchemaKind:
    """Fetch the tag registered under *key*.

    Raises ``KeyError`` for keys that were never registered; that is a
    construction bug in a node class, not a runtime condition.
    """
    try:
        return _REGISTRY[key]
    except KeyError:
        raise KeyError(f"No schema kind registered under {key!r}") from None


def registered_kinds() -> list[str]:
    """All registry keys, in declaration order."""
    return list(_REGISTRY)


def kind_of(node: Any) -> SchemaKind | None:
    """Return the tag stamped on *node*, or None if it has no valid tag."""
    tag = getattr(node, KIND_ATTR, None)
    if isinstance(tag, SchemaKind) and _REGISTRY.get(tag.value) is tag:
        return tag
    return None


COERCE_KINDS: frozenset[SchemaKind] = frozenset({
    SchemaKind.COERCE_STRING,
    SchemaKind.COERCE_NUMBER,
    SchemaKind.COERCE_BOOLEAN,
    SchemaKind.COERCE_DATE,
})
