"""Callboard configuration via pydantic-settings."""

from __future__ import annotations

from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class CallboardSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///callboard.db"
    echo_sql: bool = False
    app_title: str = "Callboard"
    log_level: str = "INFO"

    # Google OAuth app credentials (used for the refresh-token flow)
    google_client_id: str = ""
    google_client_secret: str = ""
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_calendar_api_url: str = "https://www.googleapis.com/calendar/v3"
    google_http_timeout_seconds: float = 30.0

    # Rehearsal and agenda times are stored as wall-clock times in this zone.
    calendar_timezone: str = "America/Chicago"

    model_config = {"env_prefix": "CB_", "env_file": ".env", "extra": "ignore"}

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.calendar_timezone)

    @property
    def google_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)


settings = CallboardSettings()
