"""Pure calendar domain logic - no I/O dependencies."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from .time_range import add_months, parse_date

GRID_CELLS = 42  # 6 weeks x 7 days


@dataclass(frozen=True)
class CalendarEvent:
    """A scheduled event spanning one or more whole dates."""

    id: str
    title: str
    start_date: date
    end_date: date | None = None
    description: str = ""
    is_all_day: bool = False
    category: str = ""
    user_id: str = ""

    def __post_init__(self):
        if self.end_date is None:
            object.__setattr__(self, "end_date", self.start_date)
        elif self.end_date < self.start_date:
            raise ValueError(
                f"Event {self.id!r} ends ({self.end_date}) before it starts ({self.start_date})"
            )

    def occurs_on(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @classmethod
    def from_record(cls, data: dict) -> "CalendarEvent":
        """Create CalendarEvent from an events row."""
        start = parse_date(data["start_date"])
        end = data.get("end_date")
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            start_date=start,
            end_date=parse_date(end) if end else None,
            description=data.get("description") or "",
            is_all_day=bool(data.get("is_all_day", False)),
            category=data.get("category") or "",
            user_id=data.get("user_id", ""),
        )


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid."""

    date: date
    is_current_month: bool
    events: tuple[CalendarEvent, ...] = ()

    def visible_events(self, limit: int) -> tuple[tuple[CalendarEvent, ...], int]:
        """First `limit` events plus the count of the ones left out."""
        shown = self.events[: max(limit, 0)]
        return shown, len(self.events) - len(shown)


def events_on(events: list[CalendarEvent], day: date) -> tuple[CalendarEvent, ...]:
    """Events overlapping a date, in the order given."""
    return tuple(e for e in events if e.occurs_on(day))


def month_bounds(reference: date) -> tuple[date, date]:
    """First and last date of the reference date's month."""
    last = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last)


def leading_days(first_of_month: date) -> int:
    """Cells before the 1st in a Sunday-first week (0 = Sunday)."""
    return (first_of_month.weekday() + 1) % 7


def build_month_grid(reference: date, events: list[CalendarEvent]) -> tuple[CalendarDay, ...]:
    """
    Lay out the reference month as a fixed 6-week grid.

    Cells before the 1st come from the end of the previous month and
    cells after the last day from the start of the next, always giving
    42 cells. Each cell carries every event overlapping its date.
    Pure function - no I/O.
    """
    first, last = month_bounds(reference)
    grid_start = first - timedelta(days=leading_days(first))

    days = []
    for offset in range(GRID_CELLS):
        day = grid_start + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=day,
                is_current_month=first <= day <= last,
                events=events_on(events, day),
            )
        )
    return tuple(days)


def shift_month(reference: date, months: int) -> date:
    """Move the reference date by a signed number of months (+1 next, -1 previous)."""
    return add_months(reference, months)
