"""Supabase adapter - PostgREST HTTP client for record fetching."""

import logging
from datetime import datetime
from typing import Callable, TypeVar

import requests

from studyhub.config import Config, load_config
from studyhub.core.calendar import CalendarEvent
from studyhub.core.sessions import FocusSession
from studyhub.core.tasks import Task
from studyhub.ports.record_store import FetchError

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
SESSIONS_TABLE = "pomodoro_sessions"
TASKS_TABLE = "tasks"
EVENTS_TABLE = "events"

T = TypeVar("T")


def parse_rows(rows: list[dict], parse: Callable[[dict], T], kind: str) -> list[T]:
    """Parse rows, skipping (and logging) any that are malformed."""
    records = []
    for row in rows:
        try:
            records.append(parse(row))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            row_id = row.get("id", "?") if isinstance(row, dict) else "?"
            logger.warning(f"Skipping malformed {kind} {row_id}: {e}")
    return records


class SupabaseAdapter:
    """
    Supabase REST adapter.

    Implements RecordStore protocol. Builds PostgREST queries and parses
    rows into core records. No business logic - just I/O.
    """

    def __init__(
        self,
        config: Config | None = None,
        session: requests.Session | None = None,
        timeout: int = 30,
    ):
        self.config = config or load_config()
        if not self.config.supabase_url or not self.config.supabase_key:
            raise FetchError("Missing Supabase credentials. Add them to config/studyhub.conf")
        self.tz = self.config.tz()
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        token = self.config.access_token or self.config.supabase_key
        return {
            "apikey": self.config.supabase_key,
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

    def _select(self, table: str, params: dict[str, str]) -> list[dict]:
        """Run a select query against a table."""
        url = f"{self.config.supabase_url}{REST_PATH}/{table}"
        try:
            resp = self._session.get(
                url,
                params={"select": "*", **params},
                headers=self._headers(),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            rows = resp.json()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {table}: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {table}: {e}") from e

        if not isinstance(rows, list):
            raise FetchError(f"Unexpected response from {table}: {rows!r}")
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    def list_sessions(self, owner: str, start: datetime | None = None) -> list[FocusSession]:
        """Fetch focus sessions, newest first."""
        params = {"user_id": f"eq.{owner}", "order": "start_time.desc"}
        if start is not None:
            params["start_time"] = f"gte.{start.isoformat()}"
        rows = self._select(SESSIONS_TABLE, params)
        return parse_rows(rows, lambda r: FocusSession.from_record(r, self.tz), "session")

    def list_tasks(self, owner: str) -> list[Task]:
        """Fetch all tasks, newest first."""
        rows = self._select(TASKS_TABLE, {"user_id": f"eq.{owner}", "order": "created_at.desc"})
        return parse_rows(rows, lambda r: Task.from_record(r, self.tz), "task")

    def list_events(self, owner: str) -> list[CalendarEvent]:
        """Fetch all calendar events."""
        rows = self._select(EVENTS_TABLE, {"user_id": f"eq.{owner}"})
        return parse_rows(rows, CalendarEvent.from_record, "event")
