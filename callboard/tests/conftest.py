"""Async test fixtures for Callboard tests using SQLite."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from callboard.database import get_db, get_session_factory
from callboard.deps import get_calendar_client, get_oauth_client
from callboard.google import CalendarAPIError, OAuthTokens
from callboard.models import (
    AgendaAssignment,
    Audition,
    AuditionSignup,
    AuditionSlot,
    CallbackInvitation,
    CallbackSlot,
    CastMember,
    GoogleCalendarSync,
    GoogleCalendarToken,
    GoogleEventMapping,
    PersonalEvent,
    ProductionEvent,
    ProductionEventAssignment,
    ProductionEventType,
    Profile,
    RehearsalAgendaItem,
    RehearsalEvent,
    Show,
)
from callboard.models.base import Base

CHICAGO = ZoneInfo("America/Chicago")


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


async def list_mappings(
    db: AsyncSession, user_id: uuid.UUID, event_type: str | None = None
) -> list[GoogleEventMapping]:
    stmt = select(GoogleEventMapping).where(GoogleEventMapping.user_id == user_id)
    if event_type is not None:
        stmt = stmt.where(GoogleEventMapping.event_type == event_type)
    stmt = stmt.order_by(GoogleEventMapping.event_type, GoogleEventMapping.event_id)
    return list((await db.execute(stmt)).scalars().all())


class FakeCalendar:
    """Stands in for GoogleCalendarClient; records every created event."""

    def __init__(self, fail_calls: set[int] | None = None, fail_calendars: set[str] | None = None):
        self.fail_calls = fail_calls or set()
        self.fail_calendars = fail_calendars or set()
        self.calls = 0
        self.created: list[tuple[str, str, dict]] = []

    async def create_event(self, access_token: str, calendar_id: str, event: dict) -> str:
        self.calls += 1
        if self.calls in self.fail_calls:
            raise CalendarAPIError("Failed to create calendar event: 500", status_code=500)
        if calendar_id in self.fail_calendars:
            raise CalendarAPIError("Failed to create calendar event: 404", status_code=404)
        self.created.append((access_token, calendar_id, event))
        return f"gevt-{len(self.created)}"

    @property
    def summaries(self) -> list[str]:
        return [event["summary"] for _, _, event in self.created]


class FakeOAuth:
    def __init__(self, access_token: str = "fresh-token", error: Exception | None = None):
        self.access_token = access_token
        self.error = error
        self.calls: list[str] = []

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        self.calls.append(refresh_token)
        if self.error:
            raise self.error
        return OAuthTokens(access_token=self.access_token, expires_in=3600)


class Seed:
    """Inserts the rows tests need; every helper commits and returns ids."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _add(self, obj):
        self.db.add(obj)
        await self.db.commit()
        return obj.id

    async def profile(self, first_name: str = "Test", last_name: str = "User") -> uuid.UUID:
        return await self._add(Profile(first_name=first_name, last_name=last_name))

    async def audition(
        self,
        owner_id: uuid.UUID,
        title: str = "Hamlet",
        rehearsal_dates: list[str] | None = None,
        performance_dates: list[str] | None = None,
    ) -> uuid.UUID:
        show = Show(title=title)
        self.db.add(show)
        await self.db.flush()
        return await self._add(
            Audition(
                user_id=owner_id,
                show_id=show.id,
                audition_location="Main Stage",
                rehearsal_location="Rehearsal Hall",
                performance_location="Playhouse",
                rehearsal_dates=rehearsal_dates,
                performance_dates=performance_dates,
            )
        )

    async def slot(
        self, audition_id: uuid.UUID, start: datetime, end: datetime, max_signups: int = 1
    ) -> uuid.UUID:
        return await self._add(
            AuditionSlot(audition_id=audition_id, start_time=start, end_time=end, max_signups=max_signups)
        )

    async def signup(self, user_id: uuid.UUID, slot_id: uuid.UUID) -> uuid.UUID:
        return await self._add(AuditionSignup(user_id=user_id, slot_id=slot_id))

    async def callback(
        self,
        user_id: uuid.UUID,
        audition_id: uuid.UUID,
        start: datetime,
        end: datetime,
        status: str = "accepted",
    ) -> uuid.UUID:
        slot = CallbackSlot(audition_id=audition_id, start_time=start, end_time=end)
        self.db.add(slot)
        await self.db.flush()
        return await self._add(
            CallbackInvitation(
                user_id=user_id, audition_id=audition_id, callback_slot_id=slot.id, status=status,
            )
        )

    async def cast(self, user_id: uuid.UUID, audition_id: uuid.UUID) -> uuid.UUID:
        return await self._add(CastMember(user_id=user_id, audition_id=audition_id, role_name="Ensemble"))

    async def rehearsal(
        self, audition_id: uuid.UUID, day: date, start: time, end: time, notes: str | None = None
    ) -> uuid.UUID:
        return await self._add(
            RehearsalEvent(audition_id=audition_id, date=day, start_time=start, end_time=end, notes=notes)
        )

    async def agenda_item(
        self, rehearsal_event_id: uuid.UUID, title: str, start: time, end: time
    ) -> uuid.UUID:
        return await self._add(
            RehearsalAgendaItem(
                rehearsal_event_id=rehearsal_event_id, title=title, start_time=start, end_time=end,
            )
        )

    async def assign(self, user_id: uuid.UUID, agenda_item_id: uuid.UUID) -> uuid.UUID:
        return await self._add(AgendaAssignment(user_id=user_id, agenda_item_id=agenda_item_id))

    async def production_event_type(self, name: str = "Tech") -> uuid.UUID:
        return await self._add(ProductionEventType(name=name))

    async def production_event(
        self,
        audition_id: uuid.UUID,
        day: date,
        start: time | None = None,
        end: time | None = None,
        type_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        return await self._add(
            ProductionEvent(
                audition_id=audition_id, event_type_id=type_id, date=day,
                start_time=start, end_time=end,
            )
        )

    async def assign_production(self, user_id: uuid.UUID, production_event_id: uuid.UUID) -> uuid.UUID:
        return await self._add(
            ProductionEventAssignment(user_id=user_id, production_event_id=production_event_id)
        )

    async def personal(
        self,
        user_id: uuid.UUID,
        title: str,
        start: datetime,
        end: datetime | None = None,
        all_day: bool = False,
    ) -> uuid.UUID:
        return await self._add(
            PersonalEvent(user_id=user_id, title=title, start_time=start, end_time=end, all_day=all_day)
        )

    async def credential(
        self,
        user_id: uuid.UUID,
        access_token: str = "stored-token",
        refresh_token: str | None = "refresh-1",
        expiry_date: datetime | None = None,
    ) -> uuid.UUID:
        return await self._add(
            GoogleCalendarToken(
                user_id=user_id,
                access_token=access_token,
                refresh_token=refresh_token,
                expiry_date=expiry_date,
            )
        )

    async def sync_setting(
        self,
        user_id: uuid.UUID,
        event_type: str,
        calendar_id: str | None = None,
        enabled: bool = True,
    ) -> uuid.UUID:
        return await self._add(
            GoogleCalendarSync(
                user_id=user_id,
                event_type=event_type,
                google_calendar_id=calendar_id or f"{event_type}@group.calendar.google.com",
                calendar_name=f"Callboard {event_type}",
                sync_enabled=enabled,
            )
        )


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(db: AsyncSession) -> Seed:
    return Seed(db)


@pytest_asyncio.fixture
async def user_id(seed: Seed) -> uuid.UUID:
    return await seed.profile()


@pytest.fixture
def fake_calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def fake_oauth() -> FakeOAuth:
    return FakeOAuth()


@pytest_asyncio.fixture
async def client(engine, fake_calendar, fake_oauth):
    """HTTPX async test client against the Callboard app."""
    from callboard.app import app

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_calendar_client] = lambda: fake_calendar
    app.dependency_overrides[get_oauth_client] = lambda: fake_oauth

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
