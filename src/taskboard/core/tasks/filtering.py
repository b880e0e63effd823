"""Read-side task filtering."""

from collections.abc import Iterable

from taskboard.core.tasks.models import Task


def filter_tasks(tasks: Iterable[Task], query: str | None) -> list[Task]:
    """
    Keep tasks whose title contains the query, ignoring case.

    A missing or empty query keeps everything. Order is preserved.
    """
    needle = (query or "").lower()
    if not needle:
        return list(tasks)
    return [task for task in tasks if needle in task.title.lower()]
