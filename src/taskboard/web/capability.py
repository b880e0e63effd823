"""
Client capability detection.

The request's capability mode is classified exactly once, when the
RequestContext is built, and the same value drives both the response
shape and the telemetry record.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass, field

from fastapi import Request

from taskboard.core.config.models import TaskboardConfig
from taskboard.core.telemetry.emitter import generate_request_id
from taskboard.core.telemetry.models import ANONYMOUS_SESSION, ClientMode

ENHANCEMENT_HEADER = "HX-Request"


def classify_mode(headers: Mapping[str, str], header_name: str = ENHANCEMENT_HEADER) -> ClientMode:
    """
    Classify a request as enhanced or standard.

    Enhanced only when the header is present with the value "true"
    (any case). Absence or any other value means standard.

    Example:
        >>> classify_mode({"HX-Request": "TRUE"})
        <ClientMode.ENHANCED: 'htmx'>
        >>> classify_mode({"HX-Request": "1"})
        <ClientMode.STANDARD: 'standard'>
    """
    value = headers.get(header_name)
    if value is not None and value.lower() == "true":
        return ClientMode.ENHANCED
    return ClientMode.STANDARD


@dataclass(frozen=True)
class RequestContext:
    """Per-request facts captured at handler entry."""

    mode: ClientMode
    session: str = ANONYMOUS_SESSION
    request_id: str = field(default_factory=generate_request_id)
    started: float = field(default_factory=time.perf_counter)

    @property
    def enhanced(self) -> bool:
        return self.mode.is_enhanced

    def elapsed_ms(self) -> int:
        """Whole milliseconds since the handler was entered."""
        return max(0, int((time.perf_counter() - self.started) * 1000))


def request_context(request: Request) -> RequestContext:
    """FastAPI dependency building the RequestContext for a request."""
    config: TaskboardConfig = request.app.state.config
    return RequestContext(
        mode=classify_mode(request.headers, config.client.enhancement_header),
        session=request.cookies.get(config.client.session_cookie) or ANONYMOUS_SESSION,
    )
