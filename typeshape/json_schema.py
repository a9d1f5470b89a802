"""Bridge between schema nodes and JSON-Schema documents.

``to_json_schema`` dispatches on the node's kind tag only.  A node
without a registered tag raises ``UnknownSchemaKindError`` instead of
quietly producing ``{}``, which would read as "accept anything".

``from_json_schema`` is a best-effort inverse for the subset that
``to_json_schema`` emits.  Keywords it does not understand are skipped
(and logged at DEBUG), so newer documents still load.

Coercing schemas are emitted as their *target* type: JSON-Schema
describes the validated output, not the raw input.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from .base import Schema
from .combinators import enum_, literal, nullable, optional, union
from .containers import array, object_, record
from .issues import SchemaDefinitionError, UnknownSchemaKindError
from .kinds import SchemaKind, kind_of
from .primitives import boolean, null, number, string, unknown

log = logging.getLogger(__name__)

JSONSchema = dict[str, Any]


# ---------------------------------------------------------------------------
# Schema -> JSON-Schema
# ---------------------------------------------------------------------------


def _emit_string(node: Any) -> JSONSchema:
    doc: JSONSchema = {"type": "string"}
    if node.min_length is not None:
        doc["minLength"] = node.min_length
    if node.max_length is not None:
        doc["maxLength"] = node.max_length
    if node.pattern is not None:
        doc["pattern"] = node.pattern
    return doc


def _emit_number(node: Any) -> JSONSchema:
    doc: JSONSchema = {"type": "integer" if node.integer_only else "number"}
    if node.minimum is not None and math.isfinite(node.minimum):
        doc["minimum"] = node.minimum
    if node.maximum is not None and math.isfinite(node.maximum):
        doc["maximum"] = node.maximum
    return doc


def _emit_object(node: Any) -> JSONSchema:
    properties: JSONSchema = {}
    required: list[str] = []
    for key, prop in node.shape.items():
        properties[key] = to_json_schema(prop)
        if kind_of(prop) is not SchemaKind.OPTIONAL:
            required.append(key)
    doc: JSONSchema = {"type": "object", "properties": properties}
    if required:
        doc["required"] = required
    if node.unknown_keys == "strict":
        doc["additionalProperties"] = False
    elif node.unknown_keys == "passthrough":
        doc["additionalProperties"] = True
    return doc


def _emit_record(node: Any) -> JSONSchema:
    doc: JSONSchema = {
        "type": "object",
        "additionalProperties": to_json_schema(node.value),
    }
    key_doc = to_json_schema(node.key)
    if key_doc != {"type": "string"}:
        doc["propertyNames"] = key_doc
    return doc


def _emit_literal(node: Any) -> JSONSchema:
    return {"const": node.value, "type": node.literal_type}


def _emit_nullable(node: Any) -> JSONSchema:
    return {"anyOf": [to_json_schema(node.inner), {"type": "null"}]}


_EMITTERS: dict[SchemaKind, Callable[[Any], JSONSchema]] = {
    SchemaKind.STRING: _emit_string,
    SchemaKind.NUMBER: _emit_number,
    SchemaKind.BOOLEAN: lambda node: {"type": "boolean"},
    SchemaKind.NULL: lambda node: {"type": "null"},
    # JSON has no "undefined"; the empty schema is the closest fit.
    SchemaKind.UNDEFINED: lambda node: {},
    SchemaKind.UNKNOWN: lambda node: {},
    SchemaKind.ANY: lambda node: {},
    SchemaKind.OBJECT: _emit_object,
    SchemaKind.ARRAY: lambda node: {"type": "array", "items": to_json_schema(node.item)},
    SchemaKind.RECORD: _emit_record,
    SchemaKind.LITERAL: _emit_literal,
    # Optionality is expressed by the parent's "required" list.
    SchemaKind.OPTIONAL: lambda node: dict(to_json_schema(node.inner)),
    SchemaKind.NULLABLE: _emit_nullable,
    SchemaKind.UNION: lambda node: {"anyOf": [to_json_schema(o) for o in node.options]},
    SchemaKind.COERCE_STRING: _emit_string,
    SchemaKind.COERCE_NUMBER: _emit_number,
    SchemaKind.COERCE_BOOLEAN: lambda node: {"type": "boolean"},
    SchemaKind.COERCE_DATE: lambda node: {"type": "string", "format": "date-time"},
}


def to_json_schema(node: Schema) -> JSONSchema:
    """Convert a schema node to a JSON-Schema document.

    Descriptions are copied verbatim.  Objects list every non-optional
    property under ``required``; records use ``additionalProperties``;
    nullable and union schemas become ``anyOf``.

    Raises ``UnknownSchemaKindError`` for nodes without a registered tag.
    """
    kind = kind_of(node)
    emitter = _EMITTERS.get(kind) if kind is not None else None
    if emitter is None:
        log.error("Cannot convert %r: unknown schema kind", type(node).__name__)
        raise UnknownSchemaKindError(node)
    doc = emitter(node)
    description = getattr(node, "description", None)
    if description:
        doc["description"] = description
    return doc


# ---------------------------------------------------------------------------
# JSON-Schema -> Schema
# ---------------------------------------------------------------------------

_KNOWN_KEYWORDS = frozenset({
    "type", "description", "const", "enum", "anyOf", "oneOf",
    "properties", "required", "additionalProperties", "propertyNames",
    "items", "minLength", "maxLength", "pattern", "minimum", "maximum",
    "format",
})


def _is_null_doc(doc: Any) -> bool:
    return isinstance(doc, Mapping) and doc.get("type") == "null"


def _from_any_of(members: list[Any]) -> Schema:
    if len(members) == 2:
        nulls = [m for m in members if _is_null_doc(m)]
        if len(nulls) == 1:
            other = members[1] if _is_null_doc(members[0]) else members[0]
            return nullable(from_json_schema(other))
    if not members:
        raise SchemaDefinitionError("anyOf/oneOf must list at least one schema")
    return union(*(from_json_schema(m) for m in members))


def _from_type_list(doc: Mapping[str, Any], types: list[Any]) -> Schema:
    narrowed = [{**doc, "type": t} for t in types]
    for member in narrowed:
        member.pop("description", None)
    return _from_any_of(narrowed)


def _from_string(doc: Mapping[str, Any]) -> Schema:
    node = string()
    if isinstance(doc.get("minLength"), int):
        node = node.min(doc["minLength"])
    if isinstance(doc.get("maxLength"), int):
        node = node.max(doc["maxLength"])
    if isinstance(doc.get("pattern"), str):
        node = node.regex(doc["pattern"])
    return node


def _from_number(doc: Mapping[str, Any]) -> Schema:
    node = number()
    if doc.get("type") == "integer":
        node = node.integer()
    if isinstance(doc.get("minimum"), (int, float)):
        node = node.min(doc["minimum"])
    if isinstance(doc.get("maximum"), (int, float)):
        node = node.max(doc["maximum"])
    return node


def _from_array(doc: Mapping[str, Any]) -> Schema:
    items = doc.get("items")
    if isinstance(items, Mapping):
        return array(from_json_schema(items))
    return array(unknown())


def _from_object(doc: Mapping[str, Any]) -> Schema:
    properties = doc.get("properties")
    extra = doc.get("additionalProperties")

    if not isinstance(properties, Mapping):
        value = from_json_schema(extra) if isinstance(extra, Mapping) else unknown()
        names = doc.get("propertyNames")
        key = from_json_schema(names) if isinstance(names, Mapping) else string()
        return record(key, value)

    required = doc.get("required") or []
    if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
        raise SchemaDefinitionError(
            f"'required' must be a list of property names, got {required!r}"
        )
    required = set(required)
    missing = required.difference(properties)
    if missing:
        log.debug("Ignoring required names without properties: %s", sorted(missing))

    shape: dict[str, Schema] = {}
    for key, prop_doc in properties.items():
        prop = from_json_schema(prop_doc)
        shape[key] = prop if key in required else optional(prop)

    if extra is False:
        policy = "strict"
    elif extra is True:
        policy = "passthrough"
    else:
        if isinstance(extra, Mapping):
            log.debug("Ignoring additionalProperties schema next to properties")
        policy = "strip"
    return object_(shape, unknown_keys=policy)


_BUILDERS: dict[str, Callable[[Mapping[str, Any]], Schema]] = {
    "string": _from_string,
    "number": _from_number,
    "integer": _from_number,
    "boolean": lambda doc: boolean(),
    "null": lambda doc: null(),
    "array": _from_array,
    "object": _from_object,
}


def _build(doc: Mapping[str, Any]) -> Schema:
    if "const" in doc:
        return literal(doc["const"])
    if isinstance(doc.get("anyOf"), list):
        return _from_any_of(doc["anyOf"])
    if isinstance(doc.get("oneOf"), list):
        return _from_any_of(doc["oneOf"])
    if isinstance(doc.get("enum"), list):
        return enum_(doc["enum"])

    json_type = doc.get("type")
    if json_type is not None and not isinstance(json_type, (str, list)):
        raise SchemaDefinitionError(
            f"'type' must be a string or a list of strings, got {json_type!r}"
        )
    if isinstance(json_type, list):
        return _from_type_list(doc, json_type)
    if json_type is None:
        if "properties" in doc or isinstance(doc.get("additionalProperties"), Mapping):
            json_type = "object"
        elif "items" in doc:
            json_type = "array"
        else:
            return unknown()

    builder = _BUILDERS.get(json_type)
    if builder is None:
        log.warning("Unrecognised JSON-Schema type %r, accepting any value", json_type)
        return unknown()
    return builder(doc)


def from_json_schema(doc: Mapping[str, Any] | bool) -> Schema:
    """Rebuild a schema node from a JSON-Schema document.

    ``enum`` becomes a union of literals, ``anyOf`` with one
    ``{"type": "null"}`` member becomes ``nullable``, ``const`` becomes a
    literal, and object properties missing from ``required`` become
    optional.  Documents with no recognised keyword accept any value.
    """
    if doc is True:
        return unknown()
    if not isinstance(doc, Mapping):
        raise SchemaDefinitionError(
            f"JSON-Schema document must be a mapping, got {type(doc).__name__}"
        )

    ignored = sorted(k for k in doc if k not in _KNOWN_KEYWORDS)
    if ignored:
        log.debug("Ignoring JSON-Schema keywords %s", ignored)

    node = _build(doc)
    description = doc.get("description")
    if isinstance(description, str) and description:
        node = node.describe(description)
    return node
