"""Google Calendar v3 client - event creation for push-sync."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..config import CallboardSettings, settings

GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"


class CalendarAPIError(Exception):
    """Raised when the Calendar API rejects a request."""

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


class GoogleCalendarClient:
    """Minimal Calendar API wrapper.

    Usage:
        calendar = GoogleCalendarClient.from_settings()
        event_id = await calendar.create_event(access_token, "cal@group.calendar.google.com", {
            "summary": "Hamlet - Rehearsal",
            "start": {"date": "2025-03-01"},
            "end": {"date": "2025-03-02"},
        })
    """

    def __init__(
        self,
        base_url: str = GOOGLE_CALENDAR_API,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings_obj: CallboardSettings | None = None) -> "GoogleCalendarClient":
        cfg = settings_obj or settings
        return cls(base_url=cfg.google_calendar_api_url, timeout=cfg.google_http_timeout_seconds)

    async def create_event(
        self, access_token: str, calendar_id: str, event: dict[str, Any]
    ) -> str:
        """Insert an event and return its Google event id.

        Raises:
            CalendarAPIError: On a non-2xx response or a response without an id
        """
        url = f"{self.base_url}/calendars/{quote(calendar_id, safe='')}/events"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                url,
                headers={"Authorization": f"Bearer {access_token}"},
                json=event,
            )

        if response.status_code not in (200, 201):
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {"raw_response": response.text[:500]}
            raise CalendarAPIError(
                f"Failed to create calendar event: {response.status_code}",
                status_code=response.status_code,
                details=error_data,
            )

        event_id = response.json().get("id")
        if not event_id:
            raise CalendarAPIError(
                "Calendar API response did not include an event id",
                status_code=response.status_code,
            )
        return event_id
