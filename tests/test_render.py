"""Tests for the template Renderer."""

import pytest

from taskboard.core.tasks.models import Task
from taskboard.web.render import (
    EDIT_FORM_VIEW,
    INDEX_VIEW,
    ITEM_VIEW,
    STATUS_VIEW,
    VIEWS,
    Renderer,
    TemplateConfigError,
)


@pytest.fixture
def renderer() -> Renderer:
    renderer = Renderer()
    renderer.preload(VIEWS)
    return renderer


class TestPreload:
    """Tests for startup resolution of views."""

    def test_all_packaged_views_load(self, renderer: Renderer) -> None:
        """Test that every view the app uses exists."""
        for view in VIEWS:
            assert view in renderer._templates

    def test_unknown_view_fails_fast(self) -> None:
        """Test that a missing view raises TemplateConfigError."""
        with pytest.raises(TemplateConfigError) as exc_info:
            Renderer().preload(["tasks/missing.html"])
        assert exc_info.value.view == "tasks/missing.html"

    def test_broken_template_fails_fast(self, tmp_path) -> None:
        """Test that a template with a syntax error is a configuration error."""
        (tmp_path / "broken.html").write_text("{% if %}")
        with pytest.raises(TemplateConfigError):
            Renderer(tmp_path).preload(["broken.html"])

    def test_render_unknown_view_raises(self, renderer: Renderer) -> None:
        """Test that rendering an unknown view is a configuration error."""
        with pytest.raises(TemplateConfigError):
            renderer.render("nope.html", {})


class TestRender:
    """Tests for rendering views."""

    def test_item_fragment(self, renderer: Renderer) -> None:
        """Test the item fragment's container, triggers and confirmation."""
        html = renderer.render(ITEM_VIEW, {"task": Task(id=7, title="Buy milk")})
        assert 'id="task-7"' in html
        assert 'hx-get="/tasks/7/edit"' in html
        assert 'hx-post="/tasks/7/delete"' in html
        assert "hx-confirm=" in html
        assert "delete 'Buy milk'?" in html

    def test_titles_are_escaped(self, renderer: Renderer) -> None:
        """Test that markup in titles is escaped."""
        html = renderer.render(ITEM_VIEW, {"task": Task(id=1, title="<script>x</script>")})
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html

    def test_apostrophe_in_title_is_escaped(self, renderer: Renderer) -> None:
        """Test that a quote inside the title cannot close the confirm text."""
        html = renderer.render(ITEM_VIEW, {"task": Task(id=2, title="Bob's list")})
        assert "delete 'Bob&#39;s list'?" in html

    def test_status_element(self, renderer: Renderer) -> None:
        """Test the out-of-band status element for success and error."""
        ok = renderer.render(STATUS_VIEW, {"message": "Saved.", "error": False})
        err = renderer.render(STATUS_VIEW, {"message": "Nope.", "error": True})
        assert 'id="status"' in ok and 'hx-swap-oob="true"' in ok and "Saved." in ok
        assert 'role="alert"' in err and "Nope." in err

    def test_edit_form_targets_patch(self, renderer: Renderer) -> None:
        """Test that the inline edit form patches and can cancel."""
        html = renderer.render(EDIT_FORM_VIEW, {"task": Task(id=3, title="x")})
        assert 'hx-patch="/tasks/3"' in html
        assert 'hx-get="/tasks/3/view"' in html

    def test_does_not_mutate_context(self, renderer: Renderer) -> None:
        """Test that the caller's context is left untouched."""
        context = {"title": "Tasks", "tasks": [Task(id=1, title="a")], "query": "", "error": None}
        before = dict(context)
        renderer.render(INDEX_VIEW, context)
        assert context == before

    def test_deterministic(self, renderer: Renderer) -> None:
        """Test that equal inputs give equal output."""
        context = {"title": "Tasks", "tasks": [Task(id=1, title="a")], "query": "", "error": None}
        assert renderer.render(INDEX_VIEW, context) == renderer.render(INDEX_VIEW, context)

    def test_pages_swap_validation_errors(self, renderer: Renderer) -> None:
        """Test that full pages tell htmx to swap 400 responses."""
        context = {"title": "Tasks", "tasks": [], "query": "", "error": None}
        html = renderer.render(INDEX_VIEW, context)
        assert "htmx:beforeSwap" in html
        assert "evt.detail.xhr.status === 400" in html
        assert "evt.detail.shouldSwap = true" in html
