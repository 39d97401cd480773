"""
Diagnostics emitted by the record mapper for absent source attributes.

The mapper receives a sink instead of logging directly, so mapping stays a
function of its inputs plus this explicit side channel.  Any callable
taking a ``MissingAttributeDiagnostic`` is a sink.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from connector_kernel.logging_config import get_logger

logger = get_logger("mapping.diagnostics")


@dataclass(frozen=True)
class MissingAttributeDiagnostic:
    """A mapped source attribute was absent from one document."""

    source_attribute: str
    target_attribute: str
    document_snapshot: str  # Full document serialisation
    context: str  # Caller-supplied identifier (e.g. entity or request id)


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives one diagnostic per absent attribute."""

    def __call__(self, diagnostic: MissingAttributeDiagnostic) -> None:
        ...


class LoggingDiagnosticsSink:
    """Default sink: one structured WARNING line per absent attribute."""

    def __call__(self, diagnostic: MissingAttributeDiagnostic) -> None:
        logger.warning(
            "source_attribute_missing",
            extra={
                "source_attribute": diagnostic.source_attribute,
                "target_attribute": diagnostic.target_attribute,
                "document": diagnostic.document_snapshot,
                "context": diagnostic.context,
            },
        )


class CollectingDiagnosticsSink:
    """In-memory sink; keeps every diagnostic for later inspection."""

    def __init__(self) -> None:
        self._diagnostics: list[MissingAttributeDiagnostic] = []

    def __call__(self, diagnostic: MissingAttributeDiagnostic) -> None:
        self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> tuple[MissingAttributeDiagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def missing_attributes(self) -> tuple[str, ...]:
        return tuple(d.source_attribute for d in self._diagnostics)

    def clear(self) -> None:
        self._diagnostics.clear()

    def __len__(self) -> int:
        return len(self._diagnostics)


_default_sink: DiagnosticsSink = LoggingDiagnosticsSink()


def resolve_sink(sink: DiagnosticsSink | None) -> DiagnosticsSink:
    """The given sink, or the shared logging sink when None."""
    return sink if sink is not None else _default_sink
