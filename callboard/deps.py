"""FastAPI dependencies for the external Google clients."""

from __future__ import annotations

from .config import settings
from .google import GoogleCalendarClient, GoogleOAuthClient


def get_calendar_client() -> GoogleCalendarClient:
    return GoogleCalendarClient.from_settings()


def get_oauth_client() -> GoogleOAuthClient | None:
    """OAuth client for token refresh, or None when the app has no OAuth credentials."""
    if not settings.google_configured:
        return None
    return GoogleOAuthClient.from_settings()
