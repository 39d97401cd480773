"""
Structured JSON logging for the external object connector.

Every log line is one JSON object::

    {"ts": ..., "level": "WARNING", "logger": "connector.mapping.diagnostics",
     "message": "source_attribute_missing", "entity": "B2C_Address",
     "document_id": "home", "source_attribute": "zip", ...}

Messages are snake_case event names; details travel in ``extra``.  The
fields bound through ``LogContext`` (which catalog, which entity, which
source document) are added to every line emitted while they are bound.

Package entrypoints (``init_engine_from_url``, ``get_active_catalog``) call
``configure_logging()``; the first call wins.  The level defaults to
``$CONNECTOR_LOG_LEVEL`` or INFO.
"""

__all__ = [
    "LOG_LEVEL_ENV",
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import os
import sys
import threading
from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, Iterator

LOG_LEVEL_ENV = "CONNECTOR_LOG_LEVEL"

_LOGGER_PREFIX = "connector"


# ---------------------------------------------------------------------------
# Per-document context
# ---------------------------------------------------------------------------

_EMPTY: Mapping[str, str] = MappingProxyType({})

_context: ContextVar[Mapping[str, str]] = ContextVar("connector_log_context", default=_EMPTY)


class LogContext:
    """
    Fields describing the unit of work currently being logged.

    ``catalog``      -- name of the mapping catalog being loaded.
    ``entity``       -- external object the current row belongs to.
    ``document_id``  -- external id of the source document being mapped.

    Backed by a single ContextVar, so each thread and each asyncio task sees
    its own values.
    """

    FIELDS = ("catalog", "entity", "document_id")

    @classmethod
    def _merged(cls, fields: dict[str, str | None]) -> Mapping[str, str]:
        unknown = set(fields) - set(cls.FIELDS)
        if unknown:
            raise ValueError(f"Unknown log context field(s): {', '.join(sorted(unknown))}")
        current = dict(_context.get())
        current.update({k: v for k, v in fields.items() if v is not None})
        return MappingProxyType(current)

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set context fields; None values leave the field unchanged."""
        _context.set(cls._merged(fields))

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[None]:
        """Set fields for the duration of a ``with`` block, then restore."""
        token = _context.set(cls._merged(fields))
        try:
            yield
        finally:
            _context.reset(token)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_context.get())

    @classmethod
    def clear(cls) -> None:
        _context.set(_EMPTY)


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    # UUID, Decimal and anything else without a JSON form
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    """Error type, message, code, and the attributes a ConnectorError carries."""
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_"):
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``connector`` namespace, e.g. ``connector.mapping.engine``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    *,
    level: int | None = None,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``connector`` logger.

    Only the first call has an effect until ``reset_logging()``.

    Args:
        level: Logger level.  Defaults to ``$CONNECTOR_LOG_LEVEL`` or INFO.
        stream: Stream for the default handler.  Defaults to stderr.
        handler: Use this handler instead of a StreamHandler.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

        connector_logger = logging.getLogger(_LOGGER_PREFIX)
        connector_logger.setLevel(level if level is not None else _level_from_env())
        connector_logger.propagate = False

        if handler is None:
            handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        connector_logger.addHandler(handler)


def reset_logging() -> None:
    """Undo ``configure_logging``. For tests."""
    global _configured
    with _lock:
        _configured = False
        connector_logger = logging.getLogger(_LOGGER_PREFIX)
        connector_logger.handlers.clear()
        connector_logger.setLevel(logging.NOTSET)
        connector_logger.propagate = True
