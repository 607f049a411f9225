"""Push-sync engine: local theatre events -> the user's Google calendars.

A run resolves the user's credential, walks the enabled categories in a
fixed order, creates one Google event per unmapped item, and records a
mapping for each so later runs skip it. Progress is reported to a
ProgressSink; the sink always receives exactly one terminal event.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..google.calendar import GoogleCalendarClient
from ..google.oauth import GoogleOAuthClient, OAuthError
from ..services import mapping_svc, sync_setting_svc, token_svc
from ..timeutil import as_utc, utcnow
from . import sources
from .categories import CATEGORY_ORDER, LABELS, PERSONAL, SUB_PASSES, is_known
from .items import to_google_event
from .progress import ProgressSink, complete_event, error_event, progress_event

logger = logging.getLogger(__name__)


class SyncSetupError(Exception):
    """A run cannot start; the message is shown to the user."""


class NotConnected(SyncSetupError):
    def __init__(self, message: str = "Not connected to Google Calendar"):
        super().__init__(message)


class NotConfigured(SyncSetupError):
    def __init__(self, message: str = "No sync calendars configured. Run setup first."):
        super().__init__(message)


class CredentialRefreshFailed(SyncSetupError):
    pass


class CategoryError(Exception):
    """A whole category failed; the run moves on to the next one."""

    def __init__(self, category: str, cause: BaseException):
        super().__init__(f"{category}: {cause}")
        self.category = category
        self.cause = cause


class ItemError(Exception):
    """One item could not be pushed; the category moves on to the next item."""

    def __init__(self, category: str, local_id: str, cause: BaseException):
        super().__init__(f"{category} item {local_id}: {cause}")
        self.category = category
        self.local_id = local_id
        self.cause = cause


@dataclass
class CategoryResult:
    created: int = 0
    skipped: int = 0
    failures: list[ItemError] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.failures)


@dataclass
class SyncSummary:
    synced: int = 0
    created: int = 0
    skipped: int = 0
    failures: list[CategoryError | ItemError] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.failures)


class PushSyncEngine:
    """Runs one push-sync for a user.

    Usage:
        engine = PushSyncEngine(db, GoogleCalendarClient.from_settings(), oauth)
        summary = await engine.run(user_id, sink)
    """

    def __init__(
        self,
        db: AsyncSession,
        calendar: GoogleCalendarClient,
        oauth: GoogleOAuthClient | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.calendar = calendar
        self.oauth = oauth
        self.tz = tz or settings.tz
        self.time_zone = getattr(self.tz, "key", settings.calendar_timezone)
        self.clock = clock

    async def run(self, user_id: uuid.UUID, sink: ProgressSink) -> SyncSummary | None:
        """Execute a run. Returns None when the run could not start."""
        try:
            try:
                access_token = await self.resolve_access_token(user_id)
                targets = await self.enabled_targets(user_id)
            except SyncSetupError as exc:
                logger.warning("Push sync for user %s not started: %s", user_id, exc)
                await sink.emit(error_event(str(exc)))
                return None
            except Exception as exc:
                logger.exception("Push sync setup failed for user %s", user_id)
                await sink.emit(error_event(str(exc) or "Failed to sync"))
                return None

            summary = await self._run_categories(user_id, access_token, targets, sink)

            try:
                await sync_setting_svc.mark_synced(self.db, user_id)
            except Exception:
                logger.exception("Could not stamp last_synced_at for user %s", user_id)
                await self.db.rollback()

            logger.info(
                "Push sync for user %s finished: %d categories, %d created, %d skipped, %d errors",
                user_id, summary.synced, summary.created, summary.skipped, summary.errors,
            )
            await sink.emit(complete_event(summary.synced, summary.errors))
            return summary
        finally:
            await sink.close()

    async def resolve_access_token(self, user_id: uuid.UUID) -> str:
        """Return a usable access token, refreshing it once if expired.

        Raises:
            NotConnected: No credential stored
            CredentialRefreshFailed: Expired and cannot be refreshed
        """
        token = await token_svc.get_credential(self.db, user_id)
        if token is None:
            raise NotConnected()

        # No expiry recorded means the token is treated as valid
        if token.expiry_date is None or as_utc(token.expiry_date) > self.clock():
            return token.access_token

        if not token.refresh_token:
            raise CredentialRefreshFailed(
                "Google Calendar access expired. Please reconnect your Google account."
            )
        if self.oauth is None:
            raise CredentialRefreshFailed("Google OAuth credentials not configured")

        try:
            tokens = await self.oauth.refresh_access_token(token.refresh_token)
        except (OAuthError, httpx.HTTPError) as exc:
            raise CredentialRefreshFailed(
                f"Failed to refresh Google Calendar access: {exc}"
            ) from exc

        await token_svc.persist_credential(
            self.db, user_id, tokens.access_token, tokens.expires_at, tokens.refresh_token,
        )
        logger.info("Refreshed Google access token for user %s", user_id)
        return tokens.access_token

    async def enabled_targets(self, user_id: uuid.UUID) -> list[tuple[str, str]]:
        """(category, google_calendar_id) pairs to process, in run order.

        Raises:
            NotConfigured: No known category is enabled
        """
        targets: dict[str, str] = {}
        for setting in await sync_setting_svc.list_enabled(self.db, user_id):
            if not is_known(setting.event_type):
                logger.warning(
                    "Ignoring unknown sync category %r for user %s", setting.event_type, user_id,
                )
                continue
            targets[setting.event_type] = setting.google_calendar_id

        if not targets:
            raise NotConfigured()
        return [(c, targets[c]) for c in CATEGORY_ORDER if c in targets]

    async def _run_categories(
        self,
        user_id: uuid.UUID,
        access_token: str,
        targets: list[tuple[str, str]],
        sink: ProgressSink,
    ) -> SyncSummary:
        summary = SyncSummary()
        total = len(targets)
        for index, (category, calendar_id) in enumerate(targets, start=1):
            await sink.emit(
                progress_event(index, total, category, f"Syncing {LABELS[category]}...")
            )
            try:
                result = await self.sync_category(user_id, category, calendar_id, access_token)
            except Exception as exc:
                logger.exception("Sync of %s failed for user %s", category, user_id)
                await self.db.rollback()
                summary.failures.append(CategoryError(category, exc))
                continue

            summary.synced += 1
            summary.failures.extend(result.failures)
            summary.created += result.created
            summary.skipped += result.skipped
        return summary

    async def sync_category(
        self, user_id: uuid.UUID, category: str, calendar_id: str, access_token: str
    ) -> CategoryResult:
        """Push every unmapped item of a category. Item failures are counted, not raised."""
        result = CategoryResult()
        if category == PERSONAL:
            # Personal events originate in Google; nothing to push
            return result

        for namespace in SUB_PASSES[category]:
            items = await sources.fetch_items(self.db, user_id, namespace, self.tz)
            mapped = await mapping_svc.find_mapped_ids(
                self.db, user_id, namespace, [item.local_id for item in items],
            )
            for item in items:
                if item.local_id in mapped:
                    result.skipped += 1
                    continue
                try:
                    google_event_id = await self.calendar.create_event(
                        access_token, calendar_id, to_google_event(item, self.time_zone),
                    )
                    await mapping_svc.insert_mapping(
                        self.db, user_id, namespace, item.local_id, calendar_id, google_event_id,
                    )
                except Exception as exc:
                    logger.exception("Failed to sync %s item %s", namespace, item.local_id)
                    await self.db.rollback()
                    result.failures.append(ItemError(namespace, item.local_id, exc))
                    continue
                result.created += 1
        return result
