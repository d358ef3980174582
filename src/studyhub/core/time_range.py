"""Pure time-range logic - no I/O dependencies."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum


class InvalidSelector(ValueError):
    """Raised when a range selector is not one of daily/weekly/monthly."""

    pass


class TimeRange(Enum):
    """Named analytics range."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "TimeRange | str") -> "TimeRange":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidSelector(f"Unknown time range: {value!r}") from None


# Fixed averaging convention, not the exact elapsed days.
RANGE_DAYS = {
    TimeRange.DAILY: 1,
    TimeRange.WEEKLY: 7,
    TimeRange.MONTHLY: 30,
}


@dataclass(frozen=True)
class Window:
    """A closed instant range anchored at "now"."""

    start: datetime
    end: datetime
    time_range: TimeRange

    @property
    def range_days(self) -> int:
        return RANGE_DAYS[self.time_range]

    def dates(self) -> list[date]:
        """Every calendar date from start's date through end's date."""
        first, last = self.start.date(), self.end.date()
        return [first + timedelta(days=i) for i in range((last - first).days + 1)]

    def contains_date(self, day: date) -> bool:
        return self.start.date() <= day <= self.end.date()


def parse_instant(value: str, tz: tzinfo | None = None) -> datetime:
    """Parse an ISO-8601 timestamp, converting it into `tz` when given.

    Naive timestamps are taken to already be in `tz`.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if tz is None:
        return parsed
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def parse_date(value: str) -> date:
    """Parse a calendar date, ignoring any time-of-day suffix."""
    return date.fromisoformat(value.strip().split("T")[0][:10])


def add_months(day: date, months: int) -> date:
    """
    Shift a date by a signed number of calendar months.

    The day-of-month is clamped to the length of the target month,
    so Jan 31 + 1 month is Feb 28 (or 29).
    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def resolve_window(selector: TimeRange | str, now: datetime) -> Window:
    """
    Resolve a range selector into a concrete window ending at `now`.

    Pure function - no I/O. Raises InvalidSelector for unknown selectors.
    """
    time_range = TimeRange.parse(selector)

    if time_range is TimeRange.DAILY:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    elif time_range is TimeRange.WEEKLY:
        start = now - timedelta(days=7)
    else:
        # datetime is a date subclass, add_months keeps the time of day
        start = add_months(now, -1)

    return Window(start=start, end=now, time_range=time_range)
