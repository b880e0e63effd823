"""
Telemetry emitter.

Request handlers call emit() and move on; a daemon worker thread drains
the queue into the configured sinks. A sink that raises is logged and
skipped, so telemetry never changes what a request returns.

Example:
    >>> sink = MemorySink()
    >>> emitter = TelemetryEmitter([sink])
    >>> emitter.emit(event)
    >>> emitter.flush()
    >>> len(sink.events)
    1
"""

from __future__ import annotations

import logging
import queue
import threading
import uuid
from collections.abc import Iterable
from pathlib import Path

from taskboard.core.config.models import TelemetryConfig
from taskboard.core.telemetry.models import TelemetryEvent
from taskboard.core.telemetry.sinks import CsvSink, LogSink, TelemetrySink

logger = logging.getLogger(__name__)


def generate_request_id() -> str:
    """Return a fresh, collision-resistant request identifier."""
    return f"r_{uuid.uuid4().hex}"


class TelemetryEmitter:
    """Fan telemetry events out to sinks, inline or from a worker thread."""

    def __init__(
        self,
        sinks: Iterable[TelemetrySink],
        *,
        background: bool = True,
        enabled: bool = True,
        max_queue_size: int = 10000,
    ) -> None:
        """Initialize the emitter.

        Args:
            sinks: Destinations for every event
            background: Write from a worker thread (True) or inline (False)
            enabled: When False, emit() discards events
            max_queue_size: Events buffered before new ones are dropped
        """
        self.sinks = list(sinks)
        self.background = background
        self.enabled = enabled
        self._queue: queue.Queue[TelemetryEvent | None] = queue.Queue(maxsize=max_queue_size)
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._closed = False

    def emit(self, event: TelemetryEvent) -> None:
        """Record one event without blocking the caller."""
        if not self.enabled or self._closed:
            return
        if not self.background:
            self._deliver(event)
            return

        self._ensure_worker()
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            # Sinks have fallen behind; never block the request.
            logger.warning("Telemetry queue full, dropping event %s", event.request_id)

    def flush(self) -> None:
        """Block until every queued event has been handed to the sinks."""
        if self._worker is not None and self._worker.is_alive():
            self._queue.join()

    def close(self) -> None:
        """Flush pending events and stop the worker thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            worker = self._worker
        if worker is not None and worker.is_alive():
            self._queue.put(None)
            worker.join()

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None:
                self._worker = threading.Thread(
                    target=self._run, name="telemetry-writer", daemon=True
                )
                self._worker.start()

    def _run(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is None:
                    return
                self._deliver(event)
            finally:
                self._queue.task_done()

    def _deliver(self, event: TelemetryEvent) -> None:
        for sink in self.sinks:
            try:
                sink.write(event)
            except Exception:
                logger.exception(
                    "Telemetry sink %s failed for request %s",
                    type(sink).__name__,
                    event.request_id,
                )


def build_emitter(config: TelemetryConfig, base_dir: Path | None = None) -> TelemetryEmitter:
    """Create an emitter with the sinks named in the telemetry config.

    Args:
        config: Telemetry section of the loaded configuration
        base_dir: Directory a relative csv_path is resolved against (defaults to cwd)
    """
    sinks: list[TelemetrySink] = []
    if config.csv_path:
        csv_path = Path(config.csv_path)
        if not csv_path.is_absolute():
            csv_path = (base_dir or Path.cwd()) / csv_path
        sinks.append(CsvSink(csv_path))
    if config.log_events:
        sinks.append(LogSink())
    return TelemetryEmitter(sinks, background=config.background, enabled=config.enabled)
