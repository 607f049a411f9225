"""Google OAuth and Calendar API clients."""

from .calendar import CalendarAPIError, GoogleCalendarClient
from .oauth import GoogleOAuthClient, OAuthError, OAuthTokens

__all__ = [
    "CalendarAPIError",
    "GoogleCalendarClient",
    "GoogleOAuthClient",
    "OAuthError",
    "OAuthTokens",
]
