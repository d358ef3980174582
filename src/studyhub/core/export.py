"""Spreadsheet row mapping for analytics export - no file encoding here."""

from datetime import date

from .sessions import FocusSession
from .tasks import DailyTaskCompletion

SESSION_COLUMNS = [
    "Date",
    "Start Time",
    "End Time",
    "Duration (minutes)",
    "Mode",
    "Category",
    "Status",
]
COMPLETION_COLUMNS = ["Date", "Tasks Completed", "Total Tasks", "Percentage"]


def session_row(session: FocusSession) -> dict:
    return {
        "Date": session.start_time.date().isoformat(),
        "Start Time": session.start_time.strftime("%H:%M:%S"),
        "End Time": session.end_time.strftime("%H:%M:%S") if session.end_time else "",
        "Duration (minutes)": session.minutes,
        "Mode": session.mode,
        "Category": session.category_label,
        "Status": "Completed" if session.is_completed else "Not Completed",
    }


def session_rows(sessions: list[FocusSession]) -> list[dict]:
    """One human-readable row per focus session, in the order given."""
    return [session_row(s) for s in sessions]


def completion_rows(series: list[DailyTaskCompletion]) -> list[dict]:
    """One row per day with a derived completion percentage."""
    return [
        {
            "Date": entry.date.isoformat(),
            "Tasks Completed": entry.completed,
            "Total Tasks": entry.total,
            "Percentage": entry.percentage,
        }
        for entry in series
    ]


def export_filename(today: date) -> str:
    return f"studyhub-analytics-{today.isoformat()}"
