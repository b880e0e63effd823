"""
Task data model.

Tasks are immutable snapshots: an update produces a new Task with the
same id, which the store swaps into the original slot.
"""

from pydantic import BaseModel, ConfigDict, Field


class TaskNotFoundError(LookupError):
    """
    Raised when a route addresses a task id the store does not hold.

    Attributes:
        task_id: The id (or raw path segment) that was requested
    """

    def __init__(self, task_id: int | str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class Task(BaseModel):
    """A single entry in the task list."""

    id: int = Field(..., ge=1, description="Store-assigned id, never reused")
    title: str = Field(..., description="Display title")
    completed: bool = Field(default=False, description="Reserved for completion toggling")

    model_config = ConfigDict(frozen=True)

    @property
    def dom_id(self) -> str:
        """Element id of the task's list item."""
        return f"task-{self.id}"

    def with_title(self, title: str) -> "Task":
        """Return a copy of this task carrying a new title."""
        return self.model_copy(update={"title": title})
