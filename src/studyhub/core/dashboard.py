"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass

from .sessions import DailyFocus, FocusSession, SessionSummary, aggregate_sessions, daily_focus_series
from .tasks import CompletionSeries, Task, build_completion_series
from .time_range import Window


@dataclass(frozen=True)
class DashboardData:
    """Everything the analytics view shows for one window."""

    window: Window
    sessions: tuple[FocusSession, ...]
    summary: SessionSummary
    completions: CompletionSeries
    daily_focus: tuple[DailyFocus, ...]

    @property
    def completion_rate(self) -> int:
        return self.completions.completion_rate


def assemble_dashboard(
    sessions: list[FocusSession],
    tasks: list[Task],
    window: Window,
) -> DashboardData:
    """
    Assemble dashboard data from raw sessions and tasks.

    Pure function - no I/O. The sessions are kept so export rows can be
    built from the same snapshot the summary was computed from.
    """
    sessions = tuple(sessions)
    return DashboardData(
        window=window,
        sessions=sessions,
        summary=aggregate_sessions(sessions, window),
        completions=build_completion_series(tasks, window),
        daily_focus=daily_focus_series(sessions, window),
    )
