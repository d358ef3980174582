"""Adapters - I/O implementations of ports."""

from .supabase_api import SupabaseAdapter
from .json_store import JsonFileStore

__all__ = [
    "SupabaseAdapter",
    "JsonFileStore",
]
