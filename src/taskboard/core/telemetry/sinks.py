"""
Telemetry sinks.

A sink receives fully built TelemetryEvents one at a time. Sinks may be
called from the emitter's worker thread, so each one guards its own state.
"""

import csv
import logging
import threading
from pathlib import Path
from typing import Protocol

from taskboard.core.telemetry.models import TelemetryEvent

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "ts_iso",
    "session_id",
    "request_id",
    "task_code",
    "step",
    "outcome",
    "ms",
    "http_status",
    "js_mode",
]


class TelemetrySink(Protocol):
    def write(self, event: TelemetryEvent) -> None: ...


class CsvSink:
    """Append events to a CSV file, writing the header on first use.

    Example:
        >>> sink = CsvSink(Path("data/metrics.csv"))
        >>> sink.write(event)
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def write(self, event: TelemetryEvent) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            new_file = not self.path.exists() or self.path.stat().st_size == 0
            with self.path.open("a", encoding="utf-8", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
                if new_file:
                    writer.writeheader()
                writer.writerow(event.to_row())


class LogSink:
    """Write each event as a single structured log record."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.log = log or logger
        self.level = level

    def write(self, event: TelemetryEvent) -> None:
        self.log.log(
            self.level,
            "telemetry action=%s outcome=%s status=%d mode=%s ms=%d req=%s session=%s",
            event.action.value,
            event.outcome.value,
            event.status,
            event.mode.value,
            event.elapsed_ms,
            event.request_id,
            event.session,
            extra={"telemetry": event.model_dump(mode="json")},
        )


class MemorySink:
    """Keep events in memory, in emission order."""

    def __init__(self) -> None:
        self._events: list[TelemetryEvent] = []
        self._lock = threading.Lock()

    def write(self, event: TelemetryEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[TelemetryEvent]:
        """Snapshot of the events recorded so far."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
