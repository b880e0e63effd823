"""Tests for filter_tasks()."""

from taskboard.core.tasks.filtering import filter_tasks
from taskboard.core.tasks.models import Task

TASKS = [
    Task(id=1, title="Write report"),
    Task(id=2, title="write code"),
    Task(id=3, title="Buy milk"),
]


class TestFilterTasks:
    """Tests for case-insensitive substring filtering."""

    def test_case_insensitive_match_preserves_order(self) -> None:
        """Test that 'write' matches both write tasks in order."""
        result = filter_tasks(TASKS, "write")
        assert [t.id for t in result] == [1, 2]

    def test_uppercase_query(self) -> None:
        """Test that the query's case doesn't matter either."""
        assert [t.id for t in filter_tasks(TASKS, "MILK")] == [3]

    def test_empty_query_returns_all(self) -> None:
        """Test that an empty or missing query keeps everything."""
        assert filter_tasks(TASKS, "") == TASKS
        assert filter_tasks(TASKS, None) == TASKS

    def test_no_match(self) -> None:
        """Test that an unmatched query returns nothing."""
        assert filter_tasks(TASKS, "zzz") == []

    def test_matches_per_character(self) -> None:
        """Test that 'ss' does not match a title spelled with a sharp s."""
        tasks = [Task(id=1, title="Straße fegen")]
        assert filter_tasks(tasks, "ss") == []
        assert filter_tasks(tasks, "STRASSE") == []
        assert filter_tasks(tasks, "STRAßE") == tasks
