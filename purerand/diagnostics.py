"""Non-fatal diagnostics raised during generation."""
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from purerand.config import settings


logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Protocol for diagnostic sinks."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Emit a diagnostic event."""
        ...


class LoggingDiagnosticSink:
    """Default sink that logs diagnostic events."""

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        """Log diagnostic event."""
        logger.warning("DIAGNOSTIC %s: %s", event_name, data)


@dataclass
class RangeSwappedEvent:
    """range_swapped event: a ranged call received from_ > to."""

    operation: str  # "next_ranged_u32" | "next_ranged_u64" | ...
    requested_from: int
    requested_to: int
    seed: int  # seed of the generator the call was made on

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for emission."""
        data: dict[str, Any] = {
            "operation": self.operation,
            "requested_from": self.requested_from,
            "requested_to": self.requested_to,
        }
        if settings.debug:
            data["seed"] = self.seed
        return data


class DiagnosticService:
    """Service for emitting generation diagnostics."""

    def __init__(self, sink: DiagnosticSink | None = None):
        self._sink = sink or LoggingDiagnosticSink()
        self._sink_errors = 0  # Counter for sink failures

    @property
    def sink(self) -> DiagnosticSink:
        return self._sink

    def set_sink(self, sink: DiagnosticSink) -> None:
        """Set the diagnostic sink (useful for testing)."""
        self._sink = sink

    @property
    def sink_errors(self) -> int:
        return self._sink_errors

    def _safe_emit(self, event_name: str, data: dict[str, Any]) -> None:
        """
        Emit event with exception safety.

        Sink failures MUST NOT break generation calls.
        """
        try:
            self._sink.emit(event_name, data)
        except Exception as e:
            self._sink_errors += 1
            logger.warning(
                "Diagnostic sink error (count=%d): %s - %s",
                self._sink_errors,
                event_name,
                str(e),
            )

    def emit_range_swapped(self, event: RangeSwappedEvent) -> None:
        """Emit range_swapped event unless disabled in settings."""
        if not settings.emit_range_swap_diagnostics:
            return
        self._safe_emit("range_swapped", event.to_dict())


# Global instance
diagnostic_service = DiagnosticService()
