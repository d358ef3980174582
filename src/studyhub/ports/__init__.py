"""Ports - interfaces/protocols for external dependencies."""

from .record_store import FetchError, RecordStore

__all__ = [
    "FetchError",
    "RecordStore",
]
