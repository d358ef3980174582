"""Functional core - pure analytics logic with no I/O."""

from .time_range import InvalidSelector, TimeRange, Window, add_months, resolve_window
from .sessions import (
    NO_DATA,
    UNCATEGORIZED,
    CategoryShare,
    DailyFocus,
    FocusSession,
    SessionSummary,
    aggregate_sessions,
    daily_focus_series,
    format_minutes,
)
from .tasks import (
    CompletionSeries,
    DailyTaskCompletion,
    Priority,
    Task,
    build_completion_series,
    filter_tasks,
)
from .calendar import CalendarDay, CalendarEvent, build_month_grid, shift_month
from .dashboard import DashboardData, assemble_dashboard

__all__ = [
    # Time ranges
    "InvalidSelector",
    "TimeRange",
    "Window",
    "add_months",
    "resolve_window",
    # Sessions
    "NO_DATA",
    "UNCATEGORIZED",
    "CategoryShare",
    "DailyFocus",
    "FocusSession",
    "SessionSummary",
    "aggregate_sessions",
    "daily_focus_series",
    "format_minutes",
    # Tasks
    "CompletionSeries",
    "DailyTaskCompletion",
    "Priority",
    "Task",
    "build_completion_series",
    "filter_tasks",
    # Calendar
    "CalendarDay",
    "CalendarEvent",
    "build_month_grid",
    "shift_month",
    # Dashboard
    "DashboardData",
    "assemble_dashboard",
]
