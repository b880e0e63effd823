"""
Telemetry data models.

Defines the enums shared by the dispatcher and the telemetry sinks, and
the TelemetryEvent record itself.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ANONYMOUS_SESSION = "anon"


class Action(str, Enum):
    """What the request tried to do."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    FILTER = "filter"

    @property
    def task_code(self) -> str:
        """Code used in the metrics CSV (e.g. ``T1_add``)."""
        return _TASK_CODES[self]


_TASK_CODES = {
    Action.ADD: "T1_add",
    Action.EDIT: "T3_edit",
    Action.DELETE: "T4_delete",
    Action.FILTER: "T5_filter",
}


class Outcome(str, Enum):
    """Whether the attempt succeeded."""

    SUCCESS = "success"
    ERROR = "error"


class ClientMode(str, Enum):
    """Client capability tier, as recorded in telemetry."""

    ENHANCED = "htmx"
    STANDARD = "standard"

    @property
    def is_enhanced(self) -> bool:
        return self is ClientMode.ENHANCED


class TelemetryEvent(BaseModel):
    """One structured record describing a single request attempt."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event was recorded (UTC)",
    )
    session: str = Field(default=ANONYMOUS_SESSION, description="Session identifier")
    request_id: str = Field(..., min_length=1, description="Per-request identifier")
    action: Action
    step: str = Field(default="submit", description="Step within the action")
    outcome: Outcome
    elapsed_ms: int = Field(..., ge=0, description="Handler wall-clock time")
    status: int = Field(..., ge=100, le=599, description="HTTP status sent")
    mode: ClientMode

    model_config = ConfigDict(frozen=True)

    def to_row(self) -> dict[str, str | int]:
        """Flatten into the metrics CSV column layout."""
        return {
            "ts_iso": self.timestamp.isoformat(),
            "session_id": self.session,
            "request_id": self.request_id,
            "task_code": self.action.task_code,
            "step": self.step,
            "outcome": self.outcome.value,
            "ms": self.elapsed_ms,
            "http_status": self.status,
            "js_mode": self.mode.value,
        }
