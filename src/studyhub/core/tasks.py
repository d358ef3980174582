"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum

from .rounding import percentage
from .time_range import Window, parse_instant


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Task:
    """A to-do item."""

    id: str
    title: str
    created_at: datetime
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    description: str = ""
    due_date: datetime | None = None
    category: str | None = None
    user_id: str = ""

    def matches(self, query: str) -> bool:
        """Case-insensitive search over title and description."""
        needle = query.lower()
        return needle in self.title.lower() or needle in (self.description or "").lower()

    @classmethod
    def from_record(cls, data: dict, tz: tzinfo | None = None) -> "Task":
        """Create Task from a tasks row."""
        due = data.get("due_date")
        try:
            priority = Priority(data.get("priority") or "medium")
        except ValueError:
            priority = Priority.MEDIUM
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            created_at=parse_instant(data["created_at"], tz),
            completed=bool(data.get("completed", False)),
            priority=priority,
            description=data.get("description") or "",
            due_date=parse_instant(due, tz) if due else None,
            category=data.get("category"),
            user_id=data.get("user_id", ""),
        )


@dataclass(frozen=True)
class DailyTaskCompletion:
    """Tasks created on one date, and how many of those are done."""

    date: date
    completed: int = 0
    total: int = 0

    @property
    def percentage(self) -> int:
        return percentage(self.completed, self.total)


@dataclass(frozen=True)
class CompletionSeries:
    series: tuple[DailyTaskCompletion, ...]
    completion_rate: int


def completion_rate(tasks: list[Task]) -> int:
    """Percentage of all given tasks that are completed, 0 with no tasks."""
    done = sum(1 for t in tasks if t.completed)
    return percentage(done, len(tasks))


def build_completion_series(tasks: list[Task], window: Window) -> CompletionSeries:
    """
    Build a gap-free per-day completed/total series across the window.

    Tasks created outside the window's dates are ignored for the series,
    but the completion rate covers every task supplied.
    Pure function - no I/O.
    """
    counts = {day: [0, 0] for day in window.dates()}

    for task in tasks:
        day = task.created_at.date()
        if not window.contains_date(day):
            continue
        bucket = counts[day]
        bucket[1] += 1
        if task.completed:
            bucket[0] += 1

    series = tuple(
        DailyTaskCompletion(date=day, completed=done, total=total)
        for day, (done, total) in sorted(counts.items())
    )
    return CompletionSeries(series=series, completion_rate=completion_rate(tasks))


def filter_tasks(
    tasks: list[Task],
    search: str | None = None,
    completed: bool | None = None,
    priority: Priority | None = None,
) -> list[Task]:
    """
    Filter tasks by completion status, priority and search text.

    A None criterion matches everything. Pure function - no I/O.
    """
    return [
        t
        for t in tasks
        if (completed is None or t.completed == completed)
        and (priority is None or t.priority == priority)
        and (not search or t.matches(search))
    ]
