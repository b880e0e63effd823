"""
Taskboard - progressively enhanced task manager.

A server-rendered task list that answers htmx clients with HTML fragments
and plain browsers with POST-redirect-GET navigation, recording one
telemetry event per mutating request.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from taskboard.core.config.models import TaskboardConfig
from taskboard.core.tasks.models import Task

__all__ = ["TaskboardConfig", "Task", "__version__"]
