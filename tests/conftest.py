"""Pytest fixtures for purerand tests."""
from typing import Any, Generator

import pytest

from purerand.config import settings
from purerand.diagnostics import diagnostic_service


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (large audit runs)"
    )


class RecordingDiagnosticSink:
    """Diagnostic sink that keeps every emitted event for assertions."""

    def __init__(self):
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event_name: str, data: dict[str, Any]) -> None:
        self.events.append((event_name, data))

    def get_events(self, event_name: str) -> list[dict[str, Any]]:
        """Return payloads of all events with the given name."""
        return [data for name, data in self.events if name == event_name]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def recording_sink() -> Generator[RecordingDiagnosticSink, None, None]:
    """Swap the global diagnostic sink for a recording one."""
    sink = RecordingDiagnosticSink()
    original_sink = diagnostic_service.sink
    diagnostic_service.set_sink(sink)

    yield sink

    diagnostic_service.set_sink(original_sink)
    sink.clear()


@pytest.fixture
def debug_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable debug diagnostics for a single test."""
    monkeypatch.setattr(settings, "debug", True)
