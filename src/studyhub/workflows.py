"""Shared workflow layer between the CLI and the record store.

Each compile_* function fetches records through a RecordStore, hands the
snapshots to the pure core and returns the resulting view-model.
"""

import csv
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from .adapters.json_store import JsonFileStore
from .adapters.supabase_api import SupabaseAdapter
from .config import Config
from .core.calendar import CalendarDay, build_month_grid, shift_month
from .core.dashboard import DashboardData, assemble_dashboard
from .core.export import (
    COMPLETION_COLUMNS,
    SESSION_COLUMNS,
    completion_rows,
    export_filename,
    session_rows,
)
from .core.time_range import TimeRange, resolve_window
from .ports.record_store import FetchError, RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthView:
    """A month grid and the month it was built for."""

    reference: date
    days: tuple[CalendarDay, ...]


def get_store(config: Config) -> RecordStore:
    """Pick the record store from config: a JSON snapshot if set, else Supabase."""
    if config.data_file:
        return JsonFileStore(config.data_file, tz=config.tz())
    return SupabaseAdapter(config)


def require_owner(config: Config) -> str:
    if not config.user_id:
        raise FetchError("No USER_ID configured in studyhub.conf")
    return config.user_id


def compile_dashboard(
    store: RecordStore,
    owner: str,
    time_range: TimeRange | str,
    now: datetime,
) -> DashboardData:
    """Fetch sessions and tasks for the range and assemble the dashboard.

    The window is resolved before fetching so an invalid selector fails
    without touching the store.
    """
    window = resolve_window(time_range, now)
    sessions = store.list_sessions(owner, start=window.start)
    tasks = store.list_tasks(owner)
    logger.debug(
        f"Dashboard {window.time_range.value}: {len(sessions)} sessions, {len(tasks)} tasks"
    )
    return assemble_dashboard(sessions, tasks, window)


def compile_month(
    store: RecordStore,
    owner: str,
    reference: date,
    offset: int = 0,
) -> MonthView:
    """Fetch events and lay out the month `offset` months from `reference`."""
    target = shift_month(reference, offset)
    events = store.list_events(owner)
    return MonthView(reference=target, days=build_month_grid(target, events))


def write_csv(path: Path, columns: list[str], rows: list[dict]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
    return path


def export_dashboard(data: DashboardData, output_dir: Path, today: date) -> list[Path]:
    """Write focus sessions and task completions as two CSV files."""
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = export_filename(today)
    return [
        write_csv(output_dir / f"{stem}-focus.csv", SESSION_COLUMNS, session_rows(data.sessions)),
        write_csv(
            output_dir / f"{stem}-tasks.csv",
            COMPLETION_COLUMNS,
            completion_rows(data.completions.series),
        ),
    ]
