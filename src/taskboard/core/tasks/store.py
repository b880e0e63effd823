"""
In-memory task store.

The store is owned by the web application (see create_app) and shared by
every request handler. All reads and writes go through a single lock so
concurrent requests cannot interleave an id assignment, observe a
half-applied update, or reorder the collection.

Example:
    >>> store = TaskStore()
    >>> task = store.create("Buy milk")
    >>> store.find(task.id).title
    'Buy milk'
    >>> store.delete(task.id)
    True
    >>> store.delete(task.id)
    False
"""

import itertools
import logging
import threading
from collections.abc import Iterable

from taskboard.core.tasks.models import Task, TaskNotFoundError

logger = logging.getLogger(__name__)


class TaskStore:
    """Ordered, lock-guarded collection of tasks keyed by id.

    Ids come from a monotonic counter and are never handed out twice,
    even after the task holding one is deleted.
    """

    def __init__(self, titles: Iterable[str] = ()) -> None:
        """Initialize the store.

        Args:
            titles: Optional titles to seed the store with, in order
        """
        self._lock = threading.Lock()
        # dict preserves insertion order; replacing a value keeps its slot
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        for title in titles:
            self.create(title)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def list(self) -> list[Task]:
        """Return all tasks in insertion order as a new list."""
        with self._lock:
            return list(self._tasks.values())

    def find(self, task_id: int) -> Task | None:
        """Return the task with this id, or None."""
        with self._lock:
            return self._tasks.get(task_id)

    def get(self, task_id: int) -> Task:
        """Return the task with this id.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def create(self, title: str) -> Task:
        """Append a new task and return it.

        Args:
            title: Already-validated, non-blank title
        """
        with self._lock:
            task = Task(id=next(self._ids), title=title)
            self._tasks[task.id] = task
        logger.debug("Created task %d", task.id)
        return task

    def update(self, task_id: int, title: str) -> Task | None:
        """Replace a task's title in place.

        Returns:
            The updated task, or None if the id is unknown
        """
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None
            updated = current.with_title(title)
            self._tasks[task_id] = updated
        logger.debug("Updated task %d", task_id)
        return updated

    def delete(self, task_id: int) -> bool:
        """Remove a task.

        Returns:
            True if the task existed and was removed, False otherwise
        """
        with self._lock:
            removed = self._tasks.pop(task_id, None) is not None
        if removed:
            logger.debug("Deleted task %d", task_id)
        return removed
