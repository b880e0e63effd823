"""
Task routes.

Provides the task list and its mutating endpoints:
- GET   /tasks               - Full list page, optionally filtered by ?query=
- POST  /tasks               - Add a task
- POST  /tasks/{id}/delete   - Delete a task (missing ids are a no-op)
- GET   /tasks/{id}/edit     - Edit form (fragment, or full page for plain browsers)
- PATCH /tasks/{id}          - Save an inline edit
- POST  /tasks/{id}/edit     - Save an edit from the plain-browser form
- GET   /tasks/{id}/view     - Item view (cancels an inline edit)

Mutating routes hand an ActionResult to the Dispatcher, which picks
between fragment and redirect responses and records telemetry.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, Response

from taskboard.core.config.models import TaskboardConfig
from taskboard.core.tasks.filtering import filter_tasks
from taskboard.core.tasks.models import Task, TaskNotFoundError
from taskboard.core.tasks.store import TaskStore
from taskboard.core.tasks.validation import TITLE_REQUIRED, validate_title
from taskboard.core.telemetry.models import Action
from taskboard.web.capability import RequestContext, request_context
from taskboard.web.dispatch import LIST_URL, ActionResult, Dispatcher, with_error
from taskboard.web.render import (
    EDIT_FORM_VIEW,
    EDIT_PAGE_VIEW,
    INDEX_VIEW,
    ITEM_VIEW,
    Renderer,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_MESSAGES = {
    TITLE_REQUIRED: "Title is required. Please enter at least one character.",
}


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def get_renderer(request: Request) -> Renderer:
    return request.app.state.renderer


def get_config(request: Request) -> TaskboardConfig:
    return request.app.state.config


def parse_task_id(raw: str) -> int | None:
    """Parse a path segment as a task id, or None unless it is plain ASCII digits."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)


def _require_task(store: TaskStore, raw_id: str) -> Task:
    task_id = parse_task_id(raw_id)
    if task_id is None:
        raise TaskNotFoundError(raw_id)
    return store.get(task_id)


def _edit_url(task: Task) -> str:
    return f"{LIST_URL}/{task.id}/edit"


@router.get("/tasks", response_class=HTMLResponse)
def list_tasks(
    query: str = "",
    error: str | None = None,
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    renderer: Renderer = Depends(get_renderer),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> HTMLResponse:
    """Render the full list page.

    Only filtered reads are recorded in telemetry; a plain listing is not.
    """
    tasks = filter_tasks(store.list(), query)
    response = HTMLResponse(
        renderer.render(
            INDEX_VIEW,
            {
                "title": "Tasks",
                "tasks": tasks,
                "query": query,
                "error": ERROR_MESSAGES.get(error or ""),
            },
        )
    )
    if query:
        dispatcher.record_read(ctx, Action.FILTER, response.status_code)
    return response


@router.post("/tasks")
def create_task(
    title: str = Form(""),
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    """Add a task."""
    validation = validate_title(title)
    if not validation.ok:
        return dispatcher.dispatch(
            ctx,
            Action.ADD,
            ActionResult.error(
                ERROR_MESSAGES[TITLE_REQUIRED],
                error_redirect=with_error(LIST_URL, TITLE_REQUIRED),
            ),
        )

    task = store.create(validation.title)
    logger.info("Task %d added (%s)", task.id, ctx.mode.value)
    return dispatcher.dispatch(
        ctx,
        Action.ADD,
        ActionResult.success(
            f'Task "{task.title}" added successfully.',
            fragment=ITEM_VIEW,
            context={"task": task},
        ),
    )


@router.post("/tasks/{task_id}/delete")
def delete_task(
    task_id: str,
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    """Delete a task.

    Deleting an unknown id succeeds as a no-op with its own message. The
    enhanced response carries no main content, so the swap removes the item.
    """
    parsed = parse_task_id(task_id)
    removed = parsed is not None and store.delete(parsed)
    message = "Task deleted." if removed else "Task was already removed."
    return dispatcher.dispatch(ctx, Action.DELETE, ActionResult.success(message))


@router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
def edit_form(
    task_id: str,
    error: str | None = None,
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Show the edit form: a fragment for htmx, a full page otherwise."""
    task = _require_task(store, task_id)
    if ctx.enhanced:
        return HTMLResponse(renderer.render(EDIT_FORM_VIEW, {"task": task}))
    return HTMLResponse(
        renderer.render(
            EDIT_PAGE_VIEW,
            {
                "title": "Edit task",
                "task": task,
                "error": ERROR_MESSAGES.get(error or ""),
            },
        )
    )


def _save_edit(
    ctx: RequestContext,
    store: TaskStore,
    dispatcher: Dispatcher,
    task: Task,
    title: str,
    *,
    validate: bool,
    page_view: str | None,
) -> Response:
    validation = validate_title(title)
    if validate and not validation.ok:
        return dispatcher.dispatch(
            ctx,
            Action.EDIT,
            ActionResult.error(
                ERROR_MESSAGES[TITLE_REQUIRED],
                error_redirect=with_error(_edit_url(task), TITLE_REQUIRED),
            ),
        )

    # Without validation a blank title is stored as submitted (trimmed).
    updated = store.update(task.id, validation.title or "")
    if updated is None:
        raise TaskNotFoundError(task.id)
    return dispatcher.dispatch(
        ctx,
        Action.EDIT,
        ActionResult.success(
            "Task updated.",
            fragment=ITEM_VIEW,
            context={"task": updated},
            page_view=page_view,
        ),
    )


@router.patch("/tasks/{task_id}")
def update_task(
    task_id: str,
    title: str = Form(""),
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    dispatcher: Dispatcher = Depends(get_dispatcher),
    config: TaskboardConfig = Depends(get_config),
) -> Response:
    """Save an inline edit and return the updated item view."""
    task = _require_task(store, task_id)
    return _save_edit(
        ctx,
        store,
        dispatcher,
        task,
        title,
        validate=config.validation.validate_edits,
        page_view=ITEM_VIEW,
    )


@router.post("/tasks/{task_id}/edit")
def submit_edit(
    task_id: str,
    title: str = Form(""),
    ctx: RequestContext = Depends(request_context),
    store: TaskStore = Depends(get_store),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> Response:
    """Save an edit posted by the plain-browser form (always validated)."""
    task = _require_task(store, task_id)
    return _save_edit(ctx, store, dispatcher, task, title, validate=True, page_view=None)


@router.get("/tasks/{task_id}/view", response_class=HTMLResponse)
def view_task(
    task_id: str,
    store: TaskStore = Depends(get_store),
    renderer: Renderer = Depends(get_renderer),
) -> HTMLResponse:
    """Return the item view, used to cancel an inline edit."""
    task = _require_task(store, task_id)
    return HTMLResponse(renderer.render(ITEM_VIEW, {"task": task}))
