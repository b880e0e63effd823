"""
Configuration data models for taskboard.

These models define the structure of .taskboard.json and
~/.config/taskboard/config.json files, with validation via Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerConfig(BaseModel):
    """
    HTTP server settings.

    Used by `taskboard serve` when starting uvicorn.
    """
    host: str = Field(
        default="127.0.0.1",
        description="Interface to bind to"
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on"
    )


class ClientConfig(BaseModel):
    """
    How requests identify the client.

    The enhancement header selects fragment responses; the session cookie
    only labels telemetry events.
    """
    enhancement_header: str = Field(
        default="HX-Request",
        min_length=1,
        description="Request header whose value 'true' selects enhanced (htmx) mode"
    )
    session_cookie: str = Field(
        default="session_id",
        min_length=1,
        description="Cookie carrying the session identifier recorded in telemetry"
    )


class TelemetryConfig(BaseModel):
    """
    Per-request telemetry settings.

    Events are written to a CSV file and/or the application log by a
    background worker so a slow sink never delays a response.
    """
    enabled: bool = Field(
        default=True,
        description="Record telemetry events at all"
    )
    csv_path: Optional[str] = Field(
        default="data/metrics.csv",
        description="CSV file events are appended to (None disables the CSV sink)"
    )
    log_events: bool = Field(
        default=True,
        description="Also write each event to the application log"
    )
    background: bool = Field(
        default=True,
        description="Write events from a worker thread instead of inline"
    )

    @field_validator("csv_path", mode="before")
    @classmethod
    def blank_path_disables(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty path as 'no CSV sink'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ValidationConfig(BaseModel):
    """
    Input validation policy switches.

    Creating a task always requires a non-blank title. Edits through
    PATCH historically skip that check; enable validate_edits to apply it.
    """
    validate_edits: bool = Field(
        default=False,
        description="Reject blank titles on PATCH /tasks/{id}"
    )


class TaskboardConfig(BaseModel):
    """
    Top-level taskboard configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = TaskboardConfig(server=ServerConfig(port=9000))
        >>> config.server.port
        9000
        >>> config.client.enhancement_header
        'HX-Request'
    """
    server: ServerConfig = Field(
        default_factory=ServerConfig,
        description="HTTP server settings"
    )
    client: ClientConfig = Field(
        default_factory=ClientConfig,
        description="Client capability and session detection"
    )
    telemetry: TelemetryConfig = Field(
        default_factory=TelemetryConfig,
        description="Telemetry sinks"
    )
    validation: ValidationConfig = Field(
        default_factory=ValidationConfig,
        description="Validation policy switches"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,  # Validate on field assignment
    )
