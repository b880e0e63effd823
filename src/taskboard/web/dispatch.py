"""
Progressive-enhancement response dispatch.

Mutating routes describe what happened as an ActionResult; the Dispatcher
turns it into a response according to the client's capability mode and
records exactly one telemetry event for the attempt:

    mode      outcome   response
    --------  --------  ------------------------------------------------
    enhanced  success   201 (add) / 200 (edit, delete): fragment + status
    enhanced  error     400: status element only, with HX-Reswap: none
    standard  success   302 to the list page, or 200 page when page_view set
    standard  error     302 to the error redirect (``?error=<code>``)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from fastapi import status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from taskboard.core.telemetry.emitter import TelemetryEmitter
from taskboard.core.telemetry.models import Action, Outcome, TelemetryEvent
from taskboard.web.capability import RequestContext
from taskboard.web.render import STATUS_VIEW, Renderer

LIST_URL = "/tasks"

ENHANCED_SUCCESS_STATUS = {
    Action.ADD: status.HTTP_201_CREATED,
    Action.EDIT: status.HTTP_200_OK,
    Action.DELETE: status.HTTP_200_OK,
}


def with_error(url: str, code: str) -> str:
    """Append an ``error`` flag to a redirect target."""
    return f"{url}?{urlencode({'error': code})}"


@dataclass(frozen=True)
class ActionResult:
    """
    What a mutating route did, independent of how it will be answered.

    Attributes:
        outcome: success or error
        message: Human-readable text for the status element
        fragment: View rendered ahead of the status element (enhanced success)
        context: Data for fragment and page_view
        page_view: Standard-mode success renders this view with 200 instead of redirecting
        redirect_to: Standard-mode success redirect target
        error_redirect: Standard-mode error redirect target
    """

    outcome: Outcome
    message: str
    fragment: str | None = None
    context: Mapping[str, Any] = field(default_factory=dict)
    page_view: str | None = None
    redirect_to: str = LIST_URL
    error_redirect: str = with_error(LIST_URL, "required")

    @classmethod
    def success(cls, message: str, **kwargs: Any) -> "ActionResult":
        return cls(outcome=Outcome.SUCCESS, message=message, **kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: Any) -> "ActionResult":
        return cls(outcome=Outcome.ERROR, message=message, **kwargs)


class Dispatcher:
    """Select the response shape for each request and record telemetry.

    Example:
        >>> dispatcher = Dispatcher(renderer, emitter)
        >>> response = dispatcher.dispatch(ctx, Action.ADD, ActionResult.success("Added."))
    """

    def __init__(self, renderer: Renderer, emitter: TelemetryEmitter) -> None:
        self.renderer = renderer
        self.emitter = emitter

    def dispatch(self, ctx: RequestContext, action: Action, result: ActionResult) -> Response:
        """Build the response for a mutating request and record the attempt."""
        if result.outcome is Outcome.SUCCESS:
            response = self._success(ctx, action, result)
        else:
            response = self._error(ctx, result)
        self._record(ctx, action, result.outcome, response.status_code)
        return response

    def record_read(
        self, ctx: RequestContext, action: Action, status_code: int = status.HTTP_200_OK
    ) -> None:
        """Record a read request that is worth measuring (filtered lists)."""
        self._record(ctx, action, Outcome.SUCCESS, status_code)

    def status_fragment(self, message: str, *, error: bool = False) -> str:
        """Render the out-of-band status element."""
        return self.renderer.render(STATUS_VIEW, {"message": message, "error": error})

    def _success(self, ctx: RequestContext, action: Action, result: ActionResult) -> Response:
        if ctx.enhanced:
            body = ""
            if result.fragment is not None:
                body = self.renderer.render(result.fragment, result.context)
            body += self.status_fragment(result.message)
            return HTMLResponse(body, status_code=ENHANCED_SUCCESS_STATUS[action])

        if result.page_view is not None:
            return HTMLResponse(self.renderer.render(result.page_view, result.context))
        return RedirectResponse(result.redirect_to, status_code=status.HTTP_302_FOUND)

    def _error(self, ctx: RequestContext, result: ActionResult) -> Response:
        if ctx.enhanced:
            return HTMLResponse(
                self.status_fragment(result.message, error=True),
                status_code=status.HTTP_400_BAD_REQUEST,
                headers={"HX-Reswap": "none"},
            )
        return RedirectResponse(result.error_redirect, status_code=status.HTTP_302_FOUND)

    def _record(self, ctx: RequestContext, action: Action, outcome: Outcome, status_code: int) -> None:
        self.emitter.emit(
            TelemetryEvent(
                session=ctx.session,
                request_id=ctx.request_id,
                action=action,
                outcome=outcome,
                elapsed_ms=ctx.elapsed_ms(),
                status=status_code,
                mode=ctx.mode,
            )
        )
