"""
Structured lookup over a semi-structured (JSON-like) source document.

``SourceDocument.lookup`` never raises for a missing attribute: it returns a
``LookupResult`` that is either ``Present`` (wrapping a typed ``FieldValue``)
or ``ABSENT``.  Type problems surface later, when a typed accessor is called
on a present value, as ``AttributeTypeMismatchError``.  Callers can therefore
tell "not there" from "there but wrong" without catching anything.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from connector_kernel.exceptions import (
    AttributeTypeMismatchError,
    MalformedDocumentError,
)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, (float, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


# -----------------------------------------------------------------------------
# Typed value accessor
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldValue:
    """A value found at ``path``, readable as one of the record value types."""

    path: str
    raw: Any

    def _mismatch(self, expected: str) -> AttributeTypeMismatchError:
        return AttributeTypeMismatchError(self.path, expected, _type_name(self.raw))

    def as_boolean(self) -> bool:
        if isinstance(self.raw, bool):
            return self.raw
        raise self._mismatch("boolean")

    def as_integer(self) -> int:
        value = self.raw
        if isinstance(value, bool):
            raise self._mismatch("integer")
        if isinstance(value, int):
            return value
        if isinstance(value, (float, Decimal)):
            try:
                d = Decimal(str(value)) if isinstance(value, float) else value
                if d == d.to_integral_value():
                    return int(d)
            except (InvalidOperation, ValueError, OverflowError):
                pass
        raise self._mismatch("integer")

    def as_decimal(self) -> Decimal:
        value = self.raw
        if isinstance(value, bool):
            raise self._mismatch("decimal")
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (int, float)):
            # str() keeps the shortest repr of a float (0.1 -> "0.1")
            return Decimal(str(value))
        raise self._mismatch("decimal")

    def as_string(self) -> str:
        value = self.raw
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        raise self._mismatch("string")


# -----------------------------------------------------------------------------
# Lookup result (option type)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Present:
    """Lookup found a non-null value."""

    value: FieldValue


class _Absent:
    """Lookup found nothing at the path."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

LookupResult = Union[Present, _Absent]


# -----------------------------------------------------------------------------
# Document
# -----------------------------------------------------------------------------


def _get_nested(data: Any, path: str) -> Any:
    """
    Follow a dot-separated path into dicts and lists. Returns ABSENT if missing.

    Segments are matched exactly.  An empty segment never matches, and list
    segments must be non-negative decimal indices.
    """
    for key in path.split("."):
        if not key:
            return ABSENT
        if isinstance(data, list):
            if not (key.isascii() and key.isdigit()):
                return ABSENT
            index = int(key)
            if index >= len(data):
                return ABSENT
            data = data[index]
        elif isinstance(data, dict) and key in data:
            data = data[key]
        else:
            return ABSENT
    return data


class SourceDocument:
    """Read-only structured lookup over one JSON object."""

    def __init__(self, data: dict[str, Any]):
        if not isinstance(data, dict):
            raise MalformedDocumentError(f"expected a JSON object, got {_type_name(data)}")
        self._data = data

    @classmethod
    def from_json(cls, text: str | bytes) -> SourceDocument:
        """Parse a JSON payload. Numbers with a fraction become Decimal."""
        try:
            data = json.loads(text, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise MalformedDocumentError(str(exc)) from exc
        return cls(data)

    @property
    def data(self) -> dict[str, Any]:
        return self._data

    def lookup(self, path: str) -> LookupResult:
        """
        Look up ``path`` in the document.

        A missing key, an out-of-range index, or a JSON null is ABSENT.
        """
        if path in self._data:
            found = self._data[path]
        else:
            found = _get_nested(self._data, path)
        if found is ABSENT or found is None:
            return ABSENT
        return Present(FieldValue(path=path, raw=found))

    def to_json(self) -> str:
        """Full-document serialisation for diagnostics."""
        return json.dumps(self._data, sort_keys=True, separators=(",", ":"), default=str)

    def __repr__(self) -> str:
        return f"SourceDocument({self.to_json()})"
