"""Schema documents on disk.

Named schemas are JSON-Schema documents stored as YAML or JSON files in
a schema directory (``config.SCHEMAS_DIR`` unless one is passed in).

Resolution order for ``load_schema(name)``:

1. ``{dir}/{name}.yaml``
2. ``{dir}/{name}.yml``
3. ``{dir}/{name}.json``

A document may declare ``extends: <other name>`` at its root.  The base
must describe an object; the document's own properties are merged onto
it with ``ObjectSchema.extend`` (the extension wins on conflicts), and
its description, if any, replaces the base's.

Loaded schemas are cached per resolved file path.  Schema nodes are
immutable, so the cached node itself is handed out.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from . import config
from .base import Schema
from .issues import SchemaDefinitionError
from .json_schema import from_json_schema, to_json_schema
from .kinds import SchemaKind, kind_of

log = logging.getLogger(__name__)

SCHEMA_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")

# ---------------------------------------------------------------------------
# Thread-safe cache
# ---------------------------------------------------------------------------

_cache: dict[Path, Schema] = {}
_cache_lock: threading.Lock = threading.Lock()

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_document(path: Path | str) -> Any:
    """Read a YAML or JSON file with explicit UTF-8 encoding.

    YAML is a superset of JSON, so one parser handles both.
    """
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def _schema_dir(directory: Path | str | None) -> Path:
    return Path(directory) if directory is not None else config.SCHEMAS_DIR


def _resolve_path(directory: Path, name: str) -> Path:
    for suffix in SCHEMA_SUFFIXES:
        candidate = directory / f"{name}{suffix}"
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(
        f"No schema named {name!r} in {directory} "
        f"(tried {', '.join(SCHEMA_SUFFIXES)})"
    )


def _build_schema(path: Path, seen: tuple[Path, ...] = ()) -> Schema:
    """Build the schema stored at *path*; ``extends`` names resolve beside it."""
    if path in seen:
        chain = " -> ".join(p.stem for p in (*seen, path))
        raise SchemaDefinitionError(f"Circular extends chain: {chain}")
    doc = load_document(path)
    if not isinstance(doc, Mapping):
        raise SchemaDefinitionError(f"Schema at {path} did not parse to a mapping")

    base_name = doc.get("extends")
    body = {k: v for k, v in doc.items() if k != "extends"}
    schema = from_json_schema(body)
    log.debug("Loaded schema from %s", path)

    if base_name is None:
        return schema

    base_path = _resolve_path(path.parent, str(base_name)).resolve()
    base = _build_schema(base_path, (*seen, path))
    if kind_of(base) is not SchemaKind.OBJECT or kind_of(schema) is not SchemaKind.OBJECT:
        raise SchemaDefinitionError(
            f"Schema {path.stem!r} extends {base_name!r}, but both must describe objects"
        )
    merged = base.extend(schema.shape)
    if schema.description:
        merged = merged.describe(schema.description)
    return merged


def _load_cached(path: Path) -> Schema:
    resolved = path.resolve()
    with _cache_lock:
        if resolved in _cache:
            return _cache[resolved]

    # --- Build outside the lock (I/O) ------------------------------------
    schema = _build_schema(resolved)

    with _cache_lock:
        _cache.setdefault(resolved, schema)
        return _cache[resolved]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_schema(name: str, directory: Path | str | None = None) -> Schema:
    """Load (and cache) the named schema from *directory*.

    Raises ``FileNotFoundError`` if no file matches and
    ``SchemaDefinitionError`` for malformed documents or bad ``extends``.
    """
    return _load_cached(_resolve_path(_schema_dir(directory), name))


def load_schema_file(path: Path | str) -> Schema:
    """Load the schema stored in exactly this file.

    Unlike ``load_schema`` there is no suffix search: ``user.json`` is
    read even when ``user.yaml`` sits next to it.  ``extends`` names are
    still resolved by name in the file's directory.
    """
    path = Path(path)
    if path.suffix not in SCHEMA_SUFFIXES:
        raise SchemaDefinitionError(
            f"Unsupported schema file {path.name!r}; expected one of {SCHEMA_SUFFIXES}"
        )
    if not path.is_file():
        raise FileNotFoundError(f"Schema file not found: {path}")
    return _load_cached(path)


def list_schemas(directory: Path | str | None = None) -> list[str]:
    """Names of all schema documents in *directory*, sorted."""
    root = _schema_dir(directory)
    if not root.is_dir():
        return []
    return sorted({
        path.stem
        for path in root.iterdir()
        if path.is_file() and path.suffix in SCHEMA_SUFFIXES
    })


def write_schema(schema: Schema, path: Path | str) -> None:
    """Write a schema's JSON-Schema document to *path*.

    ``.json`` files get indented JSON, anything else YAML.  Both keep
    key order so property order survives the trip.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = to_json_schema(schema)
    with open(path, "w", encoding="utf-8") as fh:
        if path.suffix == ".json":
            json.dump(doc, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
            return
        yaml.safe_dump(
            doc,
            fh,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )


def clear_cache() -> None:
    """Drop all cached schemas.  Intended for testing."""
    with _cache_lock:
        _cache.clear()
