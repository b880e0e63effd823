"""
Task storage and input policy.

Provides the Task model, the lock-guarded in-memory TaskStore, title
validation and read-side filtering.
"""

from taskboard.core.tasks.filtering import filter_tasks
from taskboard.core.tasks.models import Task, TaskNotFoundError
from taskboard.core.tasks.store import TaskStore
from taskboard.core.tasks.validation import TitleValidation, validate_title

__all__ = [
    "Task",
    "TaskNotFoundError",
    "TaskStore",
    "TitleValidation",
    "filter_tasks",
    "validate_title",
]
