"""File-based record store adapter."""

import json
import logging
from datetime import datetime, tzinfo
from pathlib import Path

from studyhub.core.calendar import CalendarEvent
from studyhub.core.sessions import FocusSession
from studyhub.core.tasks import Task
from studyhub.ports.record_store import FetchError

from .supabase_api import EVENTS_TABLE, SESSIONS_TABLE, TASKS_TABLE, parse_rows

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    JSON snapshot record store.

    Implements RecordStore protocol. The file holds one list per table:
    {"pomodoro_sessions": [...], "tasks": [...], "events": [...]}.
    """

    def __init__(self, path: Path | str, tz: tzinfo | None = None):
        self.path = Path(path).expanduser()
        self.tz = tz

    def _rows(self, table: str, owner: str) -> list[dict]:
        try:
            data = json.loads(self.path.read_text())
        except OSError as e:
            raise FetchError(f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise FetchError(f"Invalid JSON in {self.path}: {e}") from e

        rows = (data.get(table) if isinstance(data, dict) else None) or []
        if not isinstance(rows, list):
            raise FetchError(f"Expected a list of {table} in {self.path}, got {type(rows).__name__}")
        owned = [r for r in rows if isinstance(r, dict) and r.get("user_id") == owner]
        logger.debug(f"Read {len(owned)} {table} rows from {self.path}")
        return owned

    def list_sessions(self, owner: str, start: datetime | None = None) -> list[FocusSession]:
        """Read focus sessions, newest first."""
        sessions = parse_rows(
            self._rows(SESSIONS_TABLE, owner),
            lambda r: FocusSession.from_record(r, self.tz),
            "session",
        )
        if start is not None:
            sessions = [s for s in sessions if s.start_time >= start]
        return sorted(sessions, key=lambda s: s.start_time, reverse=True)

    def list_tasks(self, owner: str) -> list[Task]:
        """Read all tasks, newest first."""
        tasks = parse_rows(
            self._rows(TASKS_TABLE, owner),
            lambda r: Task.from_record(r, self.tz),
            "task",
        )
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    def list_events(self, owner: str) -> list[CalendarEvent]:
        """Read all calendar events."""
        return parse_rows(self._rows(EVENTS_TABLE, owner), CalendarEvent.from_record, "event")
