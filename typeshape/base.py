"""Base class shared by every schema node.

Nodes are frozen dataclasses.  Builder methods (``describe``,
``optional``, refinements, object algebra) return a new node through
``dataclasses.replace``; nothing is ever mutated after construction, so
one schema can be shared by any number of threads validating at once.

Each concrete class names the registry key of its kind in ``_kind_key``;
``__post_init__`` stamps the registered tag onto the instance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from . import engine
from .issues import (
    Outcome,
    Path,
    SafeParseResult,
    SchemaDefinitionError,
    UnknownSchemaKindError,
    ValidationError,
)
from .kinds import KIND_ATTR, SchemaKind, kind_of, lookup_kind

if TYPE_CHECKING:
    from .combinators import NullableSchema, OptionalSchema


def ensure_schema(node: Any, role: str) -> Any:
    """Reject children that are not tagged schema nodes."""
    if kind_of(node) is None:
        raise SchemaDefinitionError(
            f"{role} must be a schema, got {type(node).__name__}"
        )
    return node


@dataclass(frozen=True, kw_only=True)
class Schema:
    description: str | None = None

    def __post_init__(self) -> None:
        key = getattr(type(self), "_kind_key", None)
        if key is None:
            raise SchemaDefinitionError(
                f"{type(self).__name__} does not declare a schema kind"
            )
        object.__setattr__(self, KIND_ATTR, lookup_kind(key))

    def kind(self) -> SchemaKind:
        tag = kind_of(self)
        if tag is None:
            raise UnknownSchemaKindError(self)
        return tag

    # -- validation ---------------------------------------------------------

    def validate(self, value: Any, path: Path = ()) -> Outcome:
        """Validate without raising; issues are reported under *path*."""
        return engine.run(self, value, tuple(path))

    def parse(self, value: Any) -> Any:
        """Return the validated value or raise ``ValidationError``."""
        return self.validate(value).unwrap()

    def safe_parse(self, value: Any) -> SafeParseResult:
        outcome = self.validate(value)
        if outcome.success:
            return SafeParseResult(success=True, data=outcome.value)
        return SafeParseResult(success=False, error=ValidationError(outcome.issues))

    # -- builders -----------------------------------------------------------

    def describe(self, description: str) -> Any:
        return replace(self, description=description)

    def optional(self) -> OptionalSchema:
        from .combinators import optional

        return optional(self)

    def nullable(self) -> NullableSchema:
        from .combinators import nullable

        return nullable(self)
