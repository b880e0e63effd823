"""
HTTP layer for taskboard.

Builds the FastAPI application, decides per request between fragment
and full-page responses, and renders markup through Jinja2 templates.
"""

from taskboard.web.app import create_app

__all__ = ["create_app"]
