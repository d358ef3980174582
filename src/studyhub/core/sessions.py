"""Pure focus-session analytics - no I/O dependencies."""

import math
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from .rounding import percentage, round_half_up
from .time_range import Window, parse_instant

UNCATEGORIZED = "Uncategorized"
NO_DATA = "No data"

# Sunday-first, matching the calendar grid's column order.
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def normalize_category(category: str | None) -> str:
    """Fold an absent or blank category into the Uncategorized label."""
    if category is None or not str(category).strip():
        return UNCATEGORIZED
    return str(category)


def weekday_name(instant: datetime | date) -> str:
    return WEEKDAYS[(instant.weekday() + 1) % 7]


@dataclass(frozen=True)
class FocusSession:
    """A completed or abandoned timer run."""

    id: str
    start_time: datetime
    end_time: datetime | None
    duration: int | float | None
    mode: str = "work"
    is_completed: bool = False
    category: str | None = None
    user_id: str = ""

    @property
    def minutes(self) -> int | float:
        """Recorded duration, with missing or invalid values counted as 0."""
        value = self.duration
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0
        if not math.isfinite(value) or value < 0:
            return 0
        return value

    @property
    def category_label(self) -> str:
        return normalize_category(self.category)

    @classmethod
    def from_record(cls, data: dict, tz: tzinfo | None = None) -> "FocusSession":
        """Create FocusSession from a pomodoro_sessions row."""
        end = data.get("end_time")
        return cls(
            id=str(data["id"]),
            start_time=parse_instant(data["start_time"], tz),
            end_time=parse_instant(end, tz) if end else None,
            duration=data.get("duration"),
            mode=data.get("mode") or "work",
            is_completed=bool(data.get("is_completed", False)),
            category=data.get("category"),
            user_id=data.get("user_id", ""),
        )


@dataclass(frozen=True)
class CategoryShare:
    """One category's slice of the focus time."""

    category: str
    minutes: int | float
    percentage: int


@dataclass(frozen=True)
class DailyFocus:
    """Focus minutes started on one calendar date."""

    date: date
    minutes: int | float


@dataclass(frozen=True)
class SessionSummary:
    """Aggregated focus metrics for a window."""

    total_minutes: int | float
    average_daily_minutes: int
    most_productive_weekday: str
    category_distribution: tuple[CategoryShare, ...]


def total_minutes(sessions: list[FocusSession]) -> int | float:
    return sum(s.minutes for s in sessions)


def category_distribution(sessions: list[FocusSession]) -> tuple[CategoryShare, ...]:
    """
    Group focus minutes by category, largest first.

    Categories with equal minutes keep the order they were first seen in.
    Pure function - no I/O.
    """
    by_category: dict[str, int | float] = {}
    for session in sessions:
        label = session.category_label
        by_category[label] = by_category.get(label, 0) + session.minutes

    grand_total = sum(by_category.values())
    shares = [
        CategoryShare(category=label, minutes=minutes, percentage=percentage(minutes, grand_total))
        for label, minutes in by_category.items()
    ]
    # sorted() is stable
    return tuple(sorted(shares, key=lambda share: share.minutes, reverse=True))


def most_productive_weekday(sessions: list[FocusSession]) -> str:
    """
    Weekday with the most focus minutes, or NO_DATA.

    Ties go to the earliest weekday, Sunday first.
    """
    by_weekday = dict.fromkeys(WEEKDAYS, 0)
    for session in sessions:
        by_weekday[weekday_name(session.start_time)] += session.minutes

    best_day, best_minutes = NO_DATA, 0
    for day in WEEKDAYS:
        if by_weekday[day] > best_minutes:
            best_day, best_minutes = day, by_weekday[day]
    return best_day


def daily_focus_series(sessions: list[FocusSession], window: Window) -> tuple[DailyFocus, ...]:
    """Focus minutes per date across the window, zero-filled."""
    by_date = dict.fromkeys(window.dates(), 0)
    for session in sessions:
        day = session.start_time.date()
        if window.contains_date(day):
            by_date[day] += session.minutes
    return tuple(DailyFocus(date=day, minutes=minutes) for day, minutes in by_date.items())


def aggregate_sessions(sessions: list[FocusSession], window: Window) -> SessionSummary:
    """
    Reduce focus sessions into summary metrics for a window.

    Sessions are expected to be pre-filtered to the window by the store;
    they are not filtered again here. Pure function - no I/O.
    """
    total = total_minutes(sessions)
    return SessionSummary(
        total_minutes=total,
        average_daily_minutes=round_half_up(total / window.range_days),
        most_productive_weekday=most_productive_weekday(sessions),
        category_distribution=category_distribution(sessions),
    )


def format_minutes(minutes: int | float) -> str:
    """Format a minute count as e.g. '1h 30m'."""
    whole = int(minutes)
    hours, mins = divmod(whole, 60)
    return f"{hours}h {mins}m"
