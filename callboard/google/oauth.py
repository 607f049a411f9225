"""OAuth 2.0 client for Google Calendar access tokens.

Only the refresh-token grant is implemented here: the authorization code
exchange happens in the connect flow, which stores the initial tokens in
``google_calendar_token``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

import httpx

from ..config import CallboardSettings, settings
from ..timeutil import utcnow

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


@dataclass
class OAuthTokens:
    """Tokens returned by Google's token endpoint."""

    access_token: str
    expires_in: int  # seconds
    refresh_token: str | None = None  # Google omits this on refresh
    token_type: str = "Bearer"
    scope: str = ""
    _created_at: datetime = field(default_factory=utcnow)

    @property
    def expires_at(self) -> datetime:
        """When the access token expires (based on creation time)."""
        return self._created_at + timedelta(seconds=self.expires_in)


class OAuthError(Exception):
    """OAuth-related error."""

    def __init__(self, message: str, error_code: str | None = None, details: dict | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class GoogleOAuthClient:
    """Refreshes Google access tokens.

    Usage:
        oauth = GoogleOAuthClient.from_settings()
        tokens = await oauth.refresh_access_token(stored_refresh_token)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str = GOOGLE_TOKEN_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings_obj: CallboardSettings | None = None) -> "GoogleOAuthClient":
        """Create client from CB_GOOGLE_* settings.

        Raises:
            OAuthError: If the client id/secret are not configured
        """
        cfg = settings_obj or settings
        if not (cfg.google_client_id and cfg.google_client_secret):
            raise OAuthError(
                "Google OAuth credentials not configured. Set CB_GOOGLE_CLIENT_ID "
                "and CB_GOOGLE_CLIENT_SECRET.",
                error_code="not_configured",
            )
        return cls(
            client_id=cfg.google_client_id,
            client_secret=cfg.google_client_secret,
            token_url=cfg.google_token_url,
            timeout=cfg.google_http_timeout_seconds,
        )

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """Exchange a refresh token for a fresh access token.

        Raises:
            OAuthError: If refresh fails
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                self.token_url,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

            if response.status_code != 200:
                try:
                    error_data = response.json() if response.content else {}
                except ValueError:
                    error_data = {"raw_response": response.text[:500]}
                error_code = error_data.get("error") or "refresh_failed"
                message = f"Token refresh failed: {response.status_code} {error_code}"
                if error_data.get("error_description"):
                    message += f" ({error_data['error_description']})"
                raise OAuthError(
                    message,
                    error_code=error_code,
                    details=error_data,
                )

            data = response.json()
            return self._parse_token_response(data)

    def _parse_token_response(self, data: dict[str, Any]) -> OAuthTokens:
        """Parse a token response.

        Raises:
            OAuthError: If required fields are missing
        """
        try:
            return OAuthTokens(
                access_token=data["access_token"],
                expires_in=int(data.get("expires_in", 3600)),
                refresh_token=data.get("refresh_token"),
                token_type=data.get("token_type", "Bearer"),
                scope=data.get("scope", ""),
            )
        except KeyError as e:
            raise OAuthError(
                f"Invalid token response: missing {e}",
                error_code="invalid_response",
                details={"missing_field": str(e), "response_keys": list(data.keys())},
            )
