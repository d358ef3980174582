"""Configuration management for StudyHub."""

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

STUDYHUB_HOME = Path(os.environ.get("STUDYHUB_HOME", Path.home() / "studyhub"))
CONFIG_FILE = STUDYHUB_HOME / "config" / "studyhub.conf"


@dataclass
class Config:
    """StudyHub configuration."""

    supabase_url: str = ""
    supabase_key: str = ""
    access_token: str = ""
    user_id: str = ""
    timezone: str = "UTC"
    default_range: str = "weekly"
    # JSON snapshot to read instead of the remote store
    data_file: str = ""
    events_per_day: int = 2

    def tz(self) -> tzinfo:
        """Configured time zone, falling back to UTC if unknown."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using UTC")
            return timezone.utc


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from studyhub.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "supabase_url":
                config.supabase_url = value.rstrip("/")
            case "supabase_key":
                config.supabase_key = value
            case "access_token":
                config.access_token = value
            case "user_id":
                config.user_id = value
            case "timezone":
                config.timezone = value
            case "default_range":
                config.default_range = value.lower()
            case "data_file":
                config.data_file = value
            case "events_per_day":
                try:
                    config.events_per_day = int(value)
                except ValueError:
                    logger.warning(f"Invalid EVENTS_PER_DAY value: {value!r}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
