"""Validation engine.

A recursive depth-first walk over a schema tree.  ``run`` dispatches on
the node's kind tag through ``_VALIDATORS``; each validator returns an
``Outcome`` and never raises for bad input.  Containers keep going after
a failing field or element so one call reports every problem, and issues
come out in schema traversal order.
"""

from __future__ import annotations

import datetime as _dt
import logging
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from . import conversions
from ._util import MISSING, format_path, is_nan, is_number, is_sequence, type_name
from .issues import (
    Issue,
    IssueCode,
    Outcome,
    Path,
    UnknownSchemaKindError,
    failure,
    issue,
    success,
)
from .kinds import SchemaKind, kind_of

log = logging.getLogger(__name__)

Validator = Callable[[Any, Any, Path], Outcome]


def run(node: Any, value: Any, path: Path = ()) -> Outcome:
    """Validate *value* against *node*, reporting issues under *path*."""
    kind = kind_of(node)
    validator = _VALIDATORS.get(kind) if kind is not None else None
    if validator is None:
        log.error(
            "Refusing to validate untagged schema node %r", type(node).__name__,
            extra={"schema_path": format_path(path)},
        )
        raise UnknownSchemaKindError(node)
    return validator(node, value, path)


def _invalid_type(path: Path, expected: str, value: Any) -> Outcome:
    return failure([issue(
        path,
        f"Expected {expected}, got {type_name(value)}",
        IssueCode.INVALID_TYPE,
    )])


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def _check_string(node: Any, value: Any, path: Path) -> Outcome:
    if not isinstance(value, str):
        return _invalid_type(path, "string", value)
    problems: list[Issue] = []
    if node.min_length is not None and len(value) < node.min_length:
        problems.append(issue(
            path,
            f"String must be at least {node.min_length} characters",
            IssueCode.TOO_SMALL,
        ))
    if node.max_length is not None and len(value) > node.max_length:
        problems.append(issue(
            path,
            f"String must be at most {node.max_length} characters",
            IssueCode.TOO_BIG,
        ))
    if node.pattern is not None and re.search(node.pattern, value) is None:
        problems.append(issue(
            path,
            f"String does not match pattern {node.pattern!r}",
            IssueCode.INVALID_VALUE,
        ))
    return failure(problems) if problems else success(value)


def _check_number(node: Any, value: Any, path: Path) -> Outcome:
    if not is_number(value) or is_nan(value):
        return _invalid_type(path, "number", value)
    problems: list[Issue] = []
    if node.finite_only and math.isinf(value):
        problems.append(issue(path, "Number must be finite", IssueCode.NOT_FINITE))
    if node.integer_only and not (
        isinstance(value, int) or (math.isfinite(value) and value.is_integer())
    ):
        problems.append(issue(path, f"Expected integer, got {value}", IssueCode.INVALID_TYPE))
    if node.minimum is not None and value < node.minimum:
        problems.append(issue(
            path, f"Number must be >= {node.minimum}", IssueCode.TOO_SMALL,
        ))
    if node.maximum is not None and value > node.maximum:
        problems.append(issue(
            path, f"Number must be <= {node.maximum}", IssueCode.TOO_BIG,
        ))
    return failure(problems) if problems else success(value)


def _check_boolean(node: Any, value: Any, path: Path) -> Outcome:
    if not isinstance(value, bool):
        return _invalid_type(path, "boolean", value)
    return success(value)


def _check_null(node: Any, value: Any, path: Path) -> Outcome:
    if value is not None:
        return _invalid_type(path, "null", value)
    return success(value)


def _check_undefined(node: Any, value: Any, path: Path) -> Outcome:
    if value is not MISSING:
        return _invalid_type(path, "undefined", value)
    return success(value)


def _accept(node: Any, value: Any, path: Path) -> Outcome:
    return success(value)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


def _check_object(node: Any, value: Any, path: Path) -> Outcome:
    if not isinstance(value, Mapping):
        return _invalid_type(path, "object", value)

    problems: list[Issue] = []
    output: dict[str, Any] = {}
    for key, prop in node.shape.items():
        if key not in value:
            if kind_of(prop) is SchemaKind.OPTIONAL:
                continue
            problems.append(issue(
                (*path, key), f"Missing required field {key!r}", IssueCode.MISSING_FIELD,
            ))
            continue
        result = run(prop, value[key], (*path, key))
        if result.success:
            output[key] = result.value
        else:
            problems.extend(result.issues)

    extra = [k for k in value if k not in node.shape]
    if extra and node.unknown_keys == "strict":
        problems.append(issue(
            path,
            "Unrecognized key(s): " + ", ".join(repr(k) for k in extra),
            IssueCode.UNRECOGNIZED_KEYS,
        ))
    elif extra and node.unknown_keys == "passthrough":
        for k in extra:
            output[k] = value[k]

    return failure(problems) if problems else success(output)


def _check_array(node: Any, value: Any, path: Path) -> Outcome:
    if not is_sequence(value):
        return _invalid_type(path, "array", value)
    problems: list[Issue] = []
    output: list[Any] = []
    for index, item in enumerate(value):
        result = run(node.item, item, (*path, index))
        if result.success:
            output.append(result.value)
        else:
            problems.extend(result.issues)
    if isinstance(value, tuple):
        return failure(problems) if problems else success(tuple(output))
    return failure(problems) if problems else success(output)


def _check_record(node: Any, value: Any, path: Path) -> Outcome:
    if not isinstance(value, Mapping):
        return _invalid_type(path, "object", value)
    problems: list[Issue] = []
    output: dict[Any, Any] = {}
    for key, item in value.items():
        where = (*path, key)
        key_result = run(node.key, key, where)
        value_result = run(node.value, item, where)
        problems.extend(key_result.issues)
        problems.extend(value_result.issues)
        if key_result.success and value_result.success:
            output[key_result.value] = value_result.value
    return failure(problems) if problems else success(output)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def literal_matches(expected: Any, value: Any) -> bool:
    """Value equality that keeps ``True`` and ``1`` apart."""
    if isinstance(expected, bool) or isinstance(value, bool):
        return isinstance(expected, bool) and isinstance(value, bool) and expected is value
    if expected is None:
        return value is None
    if is_number(expected):
        return is_number(value) and value == expected
    return type(value) is type(expected) and value == expected


def _check_literal(node: Any, value: Any, path: Path) -> Outcome:
    if not literal_matches(node.value, value):
        return failure([issue(
            path,
            f"Expected literal {node.value!r}, got {value!r}",
            IssueCode.INVALID_VALUE,
        )])
    return success(value)


def _check_optional(node: Any, value: Any, path: Path) -> Outcome:
    if value is MISSING:
        return success(value)
    return run(node.inner, value, path)


def _check_nullable(node: Any, value: Any, path: Path) -> Outcome:
    if value is None:
        return success(value)
    return run(node.inner, value, path)


def _check_union(node: Any, value: Any, path: Path) -> Outcome:
    attempts: list[tuple[Issue, ...]] = []
    for option in node.options:
        result = run(option, value, path)
        if result.success:
            return result
        attempts.append(result.issues)
    return failure([issue(
        path,
        f"No union variant matched ({len(attempts)} tried)",
        IssueCode.NO_UNION_VARIANT_MATCHED,
        details=tuple(attempts),
    )])


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _coerce_string(node: Any, value: Any, path: Path) -> Outcome:
    return _check_string(node, conversions.to_string(value), path)


def _coerce_number(node: Any, value: Any, path: Path) -> Outcome:
    converted = conversions.to_number(value)
    if is_nan(converted):
        return failure([issue(
            path,
            f"Cannot coerce {type_name(value)} {value!r} to a number",
            IssueCode.INVALID_NUMBER,
        )])
    return _check_number(node, converted, path)


def _coerce_boolean(node: Any, value: Any, path: Path) -> Outcome:
    return success(conversions.to_boolean(value))


def _coerce_date(node: Any, value: Any, path: Path) -> Outcome:
    converted = conversions.to_date(value)
    if not isinstance(converted, _dt.datetime):
        return failure([issue(
            path,
            f"Cannot coerce {type_name(value)} {value!r} to a date",
            IssueCode.INVALID_DATE,
        )])
    return success(converted)


_VALIDATORS: dict[SchemaKind, Validator] = {
    SchemaKind.STRING: _check_string,
    SchemaKind.NUMBER: _check_number,
    SchemaKind.BOOLEAN: _check_boolean,
    SchemaKind.NULL: _check_null,
    SchemaKind.UNDEFINED: _check_undefined,
    SchemaKind.UNKNOWN: _accept,
    SchemaKind.ANY: _accept,
    SchemaKind.OBJECT: _check_object,
    SchemaKind.ARRAY: _check_array,
    SchemaKind.RECORD: _check_record,
    SchemaKind.LITERAL: _check_literal,
    SchemaKind.OPTIONAL: _check_optional,
    SchemaKind.NULLABLE: _check_nullable,
    SchemaKind.UNION: _check_union,
    SchemaKind.COERCE_STRING: _coerce_string,
    SchemaKind.COERCE_NUMBER: _coerce_number,
    SchemaKind.COERCE_BOOLEAN: _coerce_boolean,
    SchemaKind.COERCE_DATE: _coerce_date,
}
