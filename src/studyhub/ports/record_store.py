"""Record store interface."""

from datetime import datetime
from typing import Protocol

from studyhub.core.calendar import CalendarEvent
from studyhub.core.sessions import FocusSession
from studyhub.core.tasks import Task


class FetchError(Exception):
    """Raised when the record store is unreachable or returns an error."""

    pass


class RecordStore(Protocol):
    """Interface for reading a user's records from any backend."""

    def list_sessions(self, owner: str, start: datetime | None = None) -> list[FocusSession]:
        """Fetch focus sessions, optionally only those starting at or after `start`."""
        ...

    def list_tasks(self, owner: str) -> list[Task]:
        """Fetch all tasks."""
        ...

    def list_events(self, owner: str) -> list[CalendarEvent]:
        """Fetch all calendar events."""
        ...
