"""typeshape: declarative runtime schemas with JSON-Schema conversion.

Build a schema tree, validate values against it, and convert it to and
from JSON-Schema documents::

    from typeshape import s

    User = s.object({
        "name": s.string().describe("Full name"),
        "age": s.coerce.number(),
        "role": s.enum(["admin", "user"]),
        "nickname": s.optional(s.string()),
    })

    User.parse({"name": "Ada", "age": "36", "role": "admin"})
    s.to_json_schema(User)
"""

from types import SimpleNamespace
from typing import Any

from . import coerce
from ._util import MISSING
from .base import Schema
from .combinators import (
    LiteralSchema,
    NullableSchema,
    OptionalSchema,
    UnionSchema,
    enum_,
    literal,
    nullable,
    optional,
    union,
)
from .containers import ArraySchema, ObjectSchema, RecordSchema, array, object_, record
from .issues import (
    Issue,
    IssueCode,
    Outcome,
    SafeParseResult,
    SchemaDefinitionError,
    TypeshapeError,
    UnknownSchemaKindError,
    ValidationError,
    failure,
    success,
)
from .json_schema import JSONSchema, from_json_schema, to_json_schema
from .kinds import SchemaKind, kind_of
from .primitives import (
    AnySchema,
    BooleanSchema,
    NullSchema,
    NumberSchema,
    StringSchema,
    UndefinedSchema,
    UnknownSchema,
    any_,
    boolean,
    null,
    number,
    string,
    undefined,
    unknown,
)

__version__ = "0.3.0"


def validate(schema: Schema, value: Any) -> Outcome:
    """Validate without raising; returns the value or the issues."""
    return schema.validate(value)


def parse(schema: Schema, value: Any) -> Any:
    """Validate and return the value, raising ``ValidationError`` on failure."""
    return schema.parse(value)


def safe_parse(schema: Schema, value: Any) -> SafeParseResult:
    return schema.safe_parse(value)


s = SimpleNamespace(
    string=string,
    number=number,
    boolean=boolean,
    null=null,
    undefined=undefined,
    unknown=unknown,
    any=any_,
    object=object_,
    array=array,
    record=record,
    literal=literal,
    optional=optional,
    nullable=nullable,
    union=union,
    enum=enum_,
    coerce=coerce,
    to_json_schema=to_json_schema,
    from_json_schema=from_json_schema,
    validate=validate,
    parse=parse,
    safe_parse=safe_parse,
)
"""Builder namespace: ``s.object({...})``, ``s.coerce.date()`` and so on."""

__all__ = [
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "Issue",
    "IssueCode",
    "JSONSchema",
    "LiteralSchema",
    "MISSING",
    "NullSchema",
    "NullableSchema",
    "NumberSchema",
    "ObjectSchema",
    "OptionalSchema",
    "Outcome",
    "RecordSchema",
    "SafeParseResult",
    "Schema",
    "SchemaDefinitionError",
    "SchemaKind",
    "StringSchema",
    "TypeshapeError",
    "UndefinedSchema",
    "UnionSchema",
    "UnknownSchema",
    "UnknownSchemaKindError",
    "ValidationError",
    "any_",
    "array",
    "boolean",
    "coerce",
    "enum_",
    "failure",
    "from_json_schema",
    "kind_of",
    "literal",
    "null",
    "nullable",
    "number",
    "object_",
    "optional",
    "parse",
    "record",
    "s",
    "safe_parse",
    "string",
    "success",
    "to_json_schema",
    "undefined",
    "union",
    "unknown",
    "validate",
]
