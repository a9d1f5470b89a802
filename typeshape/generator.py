"""Schema generator: infer a schema from an example value.

Given a concrete example (say, a captured request body), the generator
builds a schema that accepts it.  Pair it with ``loader.write_schema``
to get a starting document instead of writing one by hand.

Type inference rules:
- ``str`` -> ``string()``
- ``bool`` -> ``boolean()`` (checked before int since bool is an int subclass)
- ``int`` -> ``number().integer()``
- ``float`` -> ``number()``
- ``None`` -> ``null()``
- ``dict`` -> ``object_()`` with every observed key required
- ``list`` -> ``array()`` of the element schema; distinct element shapes
  become a union, an empty list becomes ``array(unknown())``
- anything else -> ``unknown()``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .base import Schema
from .combinators import union
from .containers import array, object_
from .json_schema import to_json_schema
from .primitives import boolean, null, number, string, unknown

log = logging.getLogger(__name__)


def _infer_items(items: list[Any] | tuple[Any, ...]) -> Schema:
    if not items:
        return unknown()

    distinct: list[Schema] = []
    seen: list[dict[str, Any]] = []
    for item in items:
        candidate = infer_schema(item)
        doc = to_json_schema(candidate)
        if doc not in seen:
            seen.append(doc)
            distinct.append(candidate)

    if len(distinct) == 1:
        return distinct[0]
    return union(*distinct)


def infer_schema(example: Any) -> Schema:
    """Build a schema that accepts *example*."""
    if isinstance(example, str):
        return string()
    if isinstance(example, bool):
        return boolean()
    if isinstance(example, int):
        return number().integer()
    if isinstance(example, float):
        return number()
    if example is None:
        return null()
    if isinstance(example, Mapping):
        return object_(
            {str(key): infer_schema(value) for key, value in example.items()},
            unknown_keys="strip",
        )
    if isinstance(example, (list, tuple)):
        return array(_infer_items(example))

    log.debug("No inference rule for %s, using unknown()", type(example).__name__)
    return unknown()
