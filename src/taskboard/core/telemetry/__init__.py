"""
Per-request telemetry.

One TelemetryEvent is recorded for every mutating request (and for
filtered list reads). Events flow through a TelemetryEmitter to one or
more sinks.
"""

from taskboard.core.telemetry.emitter import (
    TelemetryEmitter,
    build_emitter,
    generate_request_id,
)
from taskboard.core.telemetry.models import Action, ClientMode, Outcome, TelemetryEvent
from taskboard.core.telemetry.sinks import CsvSink, LogSink, MemorySink, TelemetrySink

__all__ = [
    "Action",
    "ClientMode",
    "CsvSink",
    "LogSink",
    "MemorySink",
    "Outcome",
    "TelemetryEmitter",
    "TelemetryEvent",
    "TelemetrySink",
    "build_emitter",
    "generate_request_id",
]
