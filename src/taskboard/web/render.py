"""
Template rendering.

Every view the application can render is listed in VIEWS and resolved
when the app is built, so a missing or broken template stops startup
instead of failing a request later.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

INDEX_VIEW = "tasks/index.html"
EDIT_PAGE_VIEW = "tasks/edit.html"
ITEM_VIEW = "tasks/_item.html"
EDIT_FORM_VIEW = "tasks/_edit.html"
STATUS_VIEW = "tasks/_status.html"
SERVER_ERROR_VIEW = "errors/500.html"

VIEWS = (
    INDEX_VIEW,
    EDIT_PAGE_VIEW,
    ITEM_VIEW,
    EDIT_FORM_VIEW,
    STATUS_VIEW,
    SERVER_ERROR_VIEW,
)


class TemplateConfigError(RuntimeError):
    """Raised when a view cannot be resolved to a usable template.

    Attributes:
        view: The view name that failed
    """

    def __init__(self, view: str, reason: str) -> None:
        self.view = view
        super().__init__(f"Cannot load view '{view}': {reason}")


class Renderer:
    """Render named views with a data context into HTML strings.

    Example:
        >>> renderer = Renderer()
        >>> renderer.preload()
        >>> renderer.render(STATUS_VIEW, {"message": "Saved."})
        '<div id="status" ...>Saved.</div>'
    """

    def __init__(self, template_dir: Path = TEMPLATES_DIR) -> None:
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._templates: dict[str, Template] = {}

    def preload(self, views: Iterable[str] = VIEWS) -> None:
        """Resolve and compile views up front.

        Raises:
            TemplateConfigError: If any view is missing or fails to compile
        """
        for view in views:
            self._templates[view] = self._load(view)
        logger.debug("Loaded %d views from %s", len(self._templates), self.template_dir)

    def render(self, view: str, context: Mapping[str, Any] | None = None) -> str:
        """Render a view.

        The context is copied before rendering and is never modified.

        Raises:
            TemplateConfigError: If the view was not preloaded and cannot be loaded
        """
        template = self._templates.get(view)
        if template is None:
            template = self._templates[view] = self._load(view)
        return template.render(dict(context or {}))

    def _load(self, view: str) -> Template:
        try:
            return self.env.get_template(view)
        except TemplateError as e:
            raise TemplateConfigError(view, str(e)) from e
