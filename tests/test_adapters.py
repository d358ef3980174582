"""Tests for the record store adapters."""

import json
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from studyhub.adapters.json_store import JsonFileStore
from studyhub.adapters.supabase_api import SupabaseAdapter, parse_rows
from studyhub.config import Config
from studyhub.core.sessions import FocusSession
from studyhub.ports.record_store import FetchError


@pytest.fixture
def config():
    return Config(
        supabase_url="https://project.supabase.co",
        supabase_key="anon-key",
        user_id="u1",
        timezone="UTC",
    )


@pytest.fixture
def records():
    return {
        "pomodoro_sessions": [
            {
                "id": "s1",
                "start_time": "2025-01-14T09:00:00Z",
                "end_time": "2025-01-14T09:25:00Z",
                "duration": 25,
                "mode": "work",
                "is_completed": True,
                "category": "Math",
                "user_id": "u1",
            },
            {
                "id": "s2",
                "start_time": "2025-01-15T09:00:00Z",
                "duration": 50,
                "category": None,
                "user_id": "u1",
            },
            {"id": "s3", "start_time": "2025-01-15T09:00:00Z", "duration": 5, "user_id": "someone-else"},
        ],
        "tasks": [
            {"id": "t1", "title": "Read", "created_at": "2025-01-14T08:00:00Z", "completed": True, "user_id": "u1"},
            {"id": "t2", "title": "Write", "created_at": "2025-01-15T08:00:00Z", "user_id": "u1"},
        ],
        "events": [
            {"id": "e1", "title": "Exam", "start_date": "2025-01-20", "end_date": "2025-01-21", "user_id": "u1"},
            {"id": "e2", "title": "Backwards", "start_date": "2025-01-20", "end_date": "2025-01-19", "user_id": "u1"},
        ],
    }


def mock_response(payload, status: int = 200):
    resp = MagicMock()
    resp.json.return_value = payload
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


class TestParseRows:
    def test_skips_malformed_rows(self, caplog):
        rows = [
            {"id": "ok", "start_time": "2025-01-14T09:00:00"},
            {"id": "bad"},
            {"id": "worse", "start_time": "not a date"},
        ]
        parsed = parse_rows(rows, FocusSession.from_record, "session")
        assert [s.id for s in parsed] == ["ok"]
        assert "Skipping malformed session bad" in caplog.text

    def test_non_dict_row_is_skipped(self, caplog):
        rows = ["oops", {"id": "ok", "start_time": "2025-01-14T09:00:00"}]
        parsed = parse_rows(rows, FocusSession.from_record, "session")
        assert [s.id for s in parsed] == ["ok"]
        assert "Skipping malformed session ?" in caplog.text


class TestSupabaseAdapter:
    def test_requires_credentials(self):
        with pytest.raises(FetchError, match="Missing Supabase credentials"):
            SupabaseAdapter(Config())

    def test_list_sessions_builds_query(self, config, records):
        session = MagicMock()
        session.get.return_value = mock_response(records["pomodoro_sessions"][:2])
        adapter = SupabaseAdapter(config, session=session)

        start = datetime(2025, 1, 8, 18, 0, tzinfo=timezone.utc)
        sessions = adapter.list_sessions("u1", start=start)

        url = session.get.call_args[0][0]
        kwargs = session.get.call_args[1]
        assert url == "https://project.supabase.co/rest/v1/pomodoro_sessions"
        assert kwargs["params"]["user_id"] == "eq.u1"
        assert kwargs["params"]["start_time"] == "gte.2025-01-08T18:00:00+00:00"
        assert kwargs["params"]["order"] == "start_time.desc"
        assert kwargs["headers"]["apikey"] == "anon-key"
        assert kwargs["headers"]["Authorization"] == "Bearer anon-key"

        assert [s.id for s in sessions] == ["s1", "s2"]
        assert sessions[0].start_time.tzinfo is not None

    def test_list_sessions_without_start(self, config):
        session = MagicMock()
        session.get.return_value = mock_response([])
        SupabaseAdapter(config, session=session).list_sessions("u1")
        assert "start_time" not in session.get.call_args[1]["params"]

    def test_access_token_used_as_bearer(self, config):
        config.access_token = "user-jwt"
        session = MagicMock()
        session.get.return_value = mock_response([])
        SupabaseAdapter(config, session=session).list_tasks("u1")
        assert session.get.call_args[1]["headers"]["Authorization"] == "Bearer user-jwt"

    def test_list_tasks(self, config, records):
        session = MagicMock()
        session.get.return_value = mock_response(records["tasks"])
        tasks = SupabaseAdapter(config, session=session).list_tasks("u1")
        assert [t.id for t in tasks] == ["t1", "t2"]
        assert session.get.call_args[0][0].endswith("/rest/v1/tasks")

    def test_list_events_skips_invalid(self, config, records):
        session = MagicMock()
        session.get.return_value = mock_response(records["events"])
        events = SupabaseAdapter(config, session=session).list_events("u1")
        assert [e.id for e in events] == ["e1"]
        assert events[0].end_date == date(2025, 1, 21)

    def test_http_error_raises_fetch_error(self, config):
        session = MagicMock()
        session.get.return_value = mock_response({"message": "nope"}, status=401)
        with pytest.raises(FetchError, match="tasks"):
            SupabaseAdapter(config, session=session).list_tasks("u1")

    def test_connection_error_raises_fetch_error(self, config):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(FetchError, match="unreachable"):
            SupabaseAdapter(config, session=session).list_events("u1")

    def test_non_list_payload_raises_fetch_error(self, config):
        session = MagicMock()
        session.get.return_value = mock_response({"unexpected": True})
        with pytest.raises(FetchError):
            SupabaseAdapter(config, session=session).list_tasks("u1")


class TestJsonFileStore:
    @pytest.fixture
    def store(self, tmp_path, records):
        path = tmp_path / "records.json"
        path.write_text(json.dumps(records))
        return JsonFileStore(path, tz=timezone.utc)

    def test_list_sessions_filters_owner_and_orders_newest_first(self, store):
        assert [s.id for s in store.list_sessions("u1")] == ["s2", "s1"]

    def test_list_sessions_start_filter(self, store):
        start = datetime(2025, 1, 15, 0, 0, tzinfo=timezone.utc)
        assert [s.id for s in store.list_sessions("u1", start=start)] == ["s2"]

    def test_list_tasks(self, store):
        assert [t.id for t in store.list_tasks("u1")] == ["t2", "t1"]

    def test_list_events(self, store):
        assert [e.id for e in store.list_events("u1")] == ["e1"]

    def test_unknown_owner(self, store):
        assert store.list_tasks("nobody") == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FetchError, match="Cannot read"):
            JsonFileStore(tmp_path / "missing.json").list_tasks("u1")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(FetchError, match="Invalid JSON"):
            JsonFileStore(path).list_events("u1")

    def test_null_table_is_empty(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"tasks": None}))
        assert JsonFileStore(path).list_tasks("u1") == []

    def test_non_list_table_raises_fetch_error(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"tasks": {"id": "t1"}}))
        with pytest.raises(FetchError, match="Expected a list of tasks"):
            JsonFileStore(path).list_tasks("u1")

    def test_infinite_duration_loads_as_zero_minutes(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(
            '{"pomodoro_sessions": ['
            '{"id": "s1", "start_time": "2025-01-14T09:00:00+00:00", "duration": Infinity, "user_id": "u1"},'
            '{"id": "s2", "start_time": "2025-01-14T10:00:00+00:00", "duration": 30, "user_id": "u1"}]}'
        )
        sessions = JsonFileStore(path, tz=timezone.utc).list_sessions("u1")
        assert sorted(s.minutes for s in sessions) == [0, 30]
