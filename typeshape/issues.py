"""Issue and outcome model.

Every schema's validation entry point returns an ``Outcome``: either a
value or a non-empty, ordered tuple of ``Issue`` records.  Raising is a
convenience layered on top (``Schema.parse`` / ``ValidationError``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from ._util import format_path

T = TypeVar("T")

Path = tuple[str | int, ...]


class IssueCode(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_TYPE = "invalid_type"
    INVALID_VALUE = "invalid_value"
    INVALID_NUMBER = "invalid_number"
    INVALID_DATE = "invalid_date"
    NO_UNION_VARIANT_MATCHED = "no_union_variant_matched"
    UNKNOWN_SCHEMA_KIND = "unknown_schema_kind"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    NOT_FINITE = "not_finite"
    UNRECOGNIZED_KEYS = "unrecognized_keys"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Issue:
    """A single path-qualified validation failure."""

    path: Path
    message: str
    code: IssueCode
    details: tuple[tuple[Issue, ...], ...] = field(default=(), compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "message": self.message,
            "code": self.code.value,
        }

    def __str__(self) -> str:
        where = format_path(self.path)
        return f"[{where}]: {self.message}" if where else self.message


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success value or failure issues; never both."""

    value: Any = None
    issues: tuple[Issue, ...] = ()

    @property
    def success(self) -> bool:
        return not self.issues

    def unwrap(self) -> T:
        """Return the value, or raise ``ValidationError`` with every issue."""
        if self.issues:
            raise ValidationError(self.issues)
        return self.value


def success(value: T) -> Outcome[T]:
    return Outcome(value=value)


def failure(issues: list[Issue] | tuple[Issue, ...]) -> Outcome[Any]:
    if not issues:
        raise ValueError("A failed outcome needs at least one issue")
    return Outcome(issues=tuple(issues))


def issue(
    path: Path,
    message: str,
    code: IssueCode,
    details: tuple[tuple[Issue, ...], ...] = (),
) -> Issue:
    return Issue(path=tuple(path), message=message, code=code, details=details)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ValidationError(Exception):
    """Raised by ``parse`` when validation fails.

    Carries every issue found in the call, not just the first one.
    ``error_kind`` is a stable marker so callers can tell validation
    failures apart from unrelated errors without reading the message.
    """

    error_kind = "validation_error"

    def __init__(self, issues: list[Issue] | tuple[Issue, ...]):
        self.issues: tuple[Issue, ...] = tuple(issues)
        super().__init__("\n".join(str(i) for i in self.issues))

    def to_dict(self) -> dict[str, Any]:
        """Shape suitable for a structured 4xx response body."""
        return {
            "error": self.error_kind,
            "issues": [i.to_dict() for i in self.issues],
        }


class TypeshapeError(Exception):
    """Base class for programmer errors (bad schema construction or use)."""


class SchemaDefinitionError(TypeshapeError, ValueError):
    """A schema was built or transformed with invalid arguments."""


class UnknownSchemaKindError(TypeshapeError, TypeError):
    """A node carries no kind tag, or one that is not registered."""

    code = IssueCode.UNKNOWN_SCHEMA_KIND

    def __init__(self, node: Any):
        self.node = node
        super().__init__(
            f"unknown schema kind: {type(node).__name__} has no registered kind tag"
        )


@dataclass(frozen=True)
class SafeParseResult(Generic[T]):
    """Result of ``safe_parse``: data on success, the error otherwise."""

    success: bool
    data: Any = None
    error: ValidationError | None = None
