"""
Tests for the progressive-enhancement Dispatcher.

Covers each cell of the (mode, outcome) decision table and the telemetry
event recorded alongside it.
"""

import pytest

from taskboard.core.tasks.models import Task
from taskboard.core.telemetry.models import Action, ClientMode, Outcome
from taskboard.web.capability import RequestContext
from taskboard.web.dispatch import ActionResult, Dispatcher, with_error
from taskboard.web.render import ITEM_VIEW, VIEWS, Renderer


@pytest.fixture
def dispatcher(emitter) -> Dispatcher:
    renderer = Renderer()
    renderer.preload(VIEWS)
    return Dispatcher(renderer, emitter)


ENHANCED = RequestContext(mode=ClientMode.ENHANCED, session="s1", request_id="r_enh")
STANDARD = RequestContext(mode=ClientMode.STANDARD, request_id="r_std")

TASK = Task(id=4, title="Buy milk")


class TestEnhancedSuccess:
    """Enhanced clients get fragments on success."""

    @pytest.mark.parametrize(
        "action,expected", [(Action.ADD, 201), (Action.EDIT, 200), (Action.DELETE, 200)]
    )
    def test_status_per_action(self, dispatcher, action, expected) -> None:
        """Test 201 for add, 200 for edit and delete."""
        response = dispatcher.dispatch(ENHANCED, action, ActionResult.success("Done."))
        assert response.status_code == expected

    def test_fragment_plus_status(self, dispatcher) -> None:
        """Test that the fragment precedes the out-of-band status element."""
        result = ActionResult.success("Added.", fragment=ITEM_VIEW, context={"task": TASK})
        body = dispatcher.dispatch(ENHANCED, Action.ADD, result).body.decode()
        assert body.index('id="task-4"') < body.index('id="status"')
        assert 'hx-swap-oob="true"' in body
        assert "Added." in body

    def test_no_fragment_sends_status_only(self, dispatcher) -> None:
        """Test the delete shape: only the status element."""
        body = dispatcher.dispatch(
            ENHANCED, Action.DELETE, ActionResult.success("Task deleted.")
        ).body.decode()
        assert "<li" not in body
        assert "Task deleted." in body


class TestEnhancedError:
    """Enhanced clients get a 400 status element on error."""

    def test_error_fragment(self, dispatcher) -> None:
        """Test 400 with only the alert element."""
        result = ActionResult.error("Title is required.", fragment=ITEM_VIEW, context={"task": TASK})
        response = dispatcher.dispatch(ENHANCED, Action.ADD, result)
        body = response.body.decode()
        assert response.status_code == 400
        assert 'role="alert"' in body
        assert "Title is required." in body
        assert "task-4" not in body
        assert response.headers["HX-Reswap"] == "none"


class TestStandard:
    """Standard clients get redirects (or a page) instead of fragments."""

    def test_success_redirects_to_list(self, dispatcher) -> None:
        """Test 302 to the list page."""
        response = dispatcher.dispatch(STANDARD, Action.ADD, ActionResult.success("Added."))
        assert response.status_code == 302
        assert response.headers["location"] == "/tasks"

    def test_success_page_view(self, dispatcher) -> None:
        """Test that page_view renders with 200 instead of redirecting."""
        result = ActionResult.success(
            "Updated.", fragment=ITEM_VIEW, context={"task": TASK}, page_view=ITEM_VIEW
        )
        response = dispatcher.dispatch(STANDARD, Action.EDIT, result)
        body = response.body.decode()
        assert response.status_code == 200
        assert 'id="task-4"' in body
        assert 'id="status"' not in body

    def test_error_redirects_with_flag(self, dispatcher) -> None:
        """Test 302 to the error redirect."""
        response = dispatcher.dispatch(STANDARD, Action.ADD, ActionResult.error("Required."))
        assert response.status_code == 302
        assert response.headers["location"] == "/tasks?error=required"

    def test_custom_error_redirect(self, dispatcher) -> None:
        """Test that routes can choose where errors go."""
        result = ActionResult.error("Required.", error_redirect=with_error("/tasks/4/edit", "required"))
        response = dispatcher.dispatch(STANDARD, Action.EDIT, result)
        assert response.headers["location"] == "/tasks/4/edit?error=required"


class TestTelemetry:
    """Every dispatch records exactly one event."""

    @pytest.mark.parametrize("ctx", [ENHANCED, STANDARD])
    @pytest.mark.parametrize("outcome", [Outcome.SUCCESS, Outcome.ERROR])
    def test_one_event_per_dispatch(self, dispatcher, sink, ctx, outcome) -> None:
        """Test that each branch records one matching event."""
        result = ActionResult(outcome=outcome, message="m")
        response = dispatcher.dispatch(ctx, Action.ADD, result)

        assert len(sink.events) == 1
        event = sink.events[0]
        assert event.outcome is outcome
        assert event.mode is ctx.mode
        assert event.status == response.status_code
        assert event.request_id == ctx.request_id
        assert event.session == ctx.session
        assert event.action is Action.ADD
        assert event.step == "submit"
        assert event.elapsed_ms >= 0

    def test_record_read(self, dispatcher, sink) -> None:
        """Test that record_read logs a successful read."""
        dispatcher.record_read(STANDARD, Action.FILTER)
        assert [(e.action, e.outcome, e.status) for e in sink.events] == [
            (Action.FILTER, Outcome.SUCCESS, 200)
        ]
