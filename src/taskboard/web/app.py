"""
FastAPI application setup for taskboard.

create_app() wires an explicitly owned TaskStore, the Renderer, the
telemetry emitter and the Dispatcher onto app.state and registers routes.
All views are resolved here, so a template problem fails at startup.
"""

import logging
import traceback
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from taskboard import __version__
from taskboard.core.config.loader import load_config
from taskboard.core.config.models import TaskboardConfig
from taskboard.core.tasks.models import TaskNotFoundError
from taskboard.core.tasks.store import TaskStore
from taskboard.core.telemetry.emitter import TelemetryEmitter, build_emitter
from taskboard.web.dispatch import LIST_URL, Dispatcher
from taskboard.web.render import SERVER_ERROR_VIEW, VIEWS, Renderer
from taskboard.web.routes import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting taskboard %s", __version__)
    yield
    logger.info("Shutting down taskboard, flushing telemetry...")
    app.state.emitter.close()


def create_app(
    config: TaskboardConfig | None = None,
    *,
    store: TaskStore | None = None,
    emitter: TelemetryEmitter | None = None,
    renderer: Renderer | None = None,
) -> FastAPI:
    """
    Build the taskboard application.

    Args:
        config: Loaded configuration (defaults to load_config())
        store: Task store to serve (defaults to a new, empty store)
        emitter: Telemetry emitter (defaults to one built from config.telemetry)
        renderer: Template renderer (defaults to the packaged templates)

    Returns:
        Configured FastAPI app

    Raises:
        TemplateConfigError: If any view cannot be loaded
    """
    config = config or load_config()
    renderer = renderer or Renderer()
    renderer.preload(VIEWS)
    emitter = emitter or build_emitter(config.telemetry)

    app = FastAPI(
        title="Taskboard",
        description="Progressively enhanced task list",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store if store is not None else TaskStore()
    app.state.renderer = renderer
    app.state.emitter = emitter
    app.state.dispatcher = Dispatcher(renderer, emitter)

    app.include_router(tasks.router, tags=["tasks"])

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """Send visitors to the task list."""
        return RedirectResponse(LIST_URL, status_code=status.HTTP_302_FOUND)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> PlainTextResponse:
        """Answer unknown task ids with a plain 404, outside the fragment/redirect protocol."""
        logger.info(
            "HTTP 404 on %s %s: %s", request.method, request.url.path, exc
        )
        return PlainTextResponse("Task not found", status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        """
        Handle all uncaught exceptions.

        Logs the full exception with traceback, but returns a plain HTML
        error page without internal details.
        """
        logger.error(
            "Unhandled exception on %s %s: %s\n%s",
            request.method,
            request.url.path,
            str(exc),
            traceback.format_exc(),
        )
        return HTMLResponse(
            renderer.render(SERVER_ERROR_VIEW, {"title": "Something went wrong"}),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return app
