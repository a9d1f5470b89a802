"""Logging setup for the typeshape command-line tool.

Library modules only create loggers (``logging.getLogger(__name__)``);
handlers are installed here, by the CLI, or by the host application.

Records may carry schema context through ``extra=``; the names in
``CONTEXT_FIELDS`` are copied into both output formats:

    log.debug("validated", extra={"schema_kind": "Object", "issue_count": 2})
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

CONTEXT_FIELDS = ("schema_kind", "schema_path", "issue_count")


def _context(record: logging.LogRecord) -> dict:
    return {name: getattr(record, name) for name in CONTEXT_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, keys sorted.

    Always has ``ts`` (UTC, millisecond precision), ``level``, ``logger``
    and ``msg``; adds any context fields and ``exc`` for exceptions.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True, default=str)


class HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname} {record.name}: {record.getMessage()}"
        context = _context(record)
        if context:
            line += " (" + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    known = logging.getLevelNamesMapping()
    try:
        return known[level.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level!r}; expected one of {', '.join(sorted(known))}"
        ) from None


def setup_logging(
    *,
    level: int | str = logging.WARNING,
    log_file: Path | str | None = None,
    json_format: bool = False,
    stream: TextIO | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> list[logging.Handler]:
    """Replace the root logger's handlers and return the new ones.

    Console output goes to *stream* (stderr by default) as JSON or human
    lines.  With *log_file*, a rotating file handler is added as well;
    it always writes JSON.  Raises ``ValueError`` for unknown level names.
    """
    resolved = _coerce_level(level)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(resolved)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(JSONFormatter() if json_format else HumanFormatter())
    handlers: list[logging.Handler] = [console]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
        )
        rotating.setFormatter(JSONFormatter())
        handlers.append(rotating)

    for handler in handlers:
        root.addHandler(handler)
    return handlers
