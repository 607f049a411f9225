"""Push-sync engine scenarios against an in-memory database and a fake calendar."""

from __future__ import annotations

from datetime import date, time, timedelta

import pytest
from sqlalchemy import select

from callboard.google import OAuthError
from callboard.models import GoogleCalendarSync
from callboard.services import token_svc
from callboard.sync import sources
from callboard.sync.categories import CATEGORY_ORDER
from callboard.sync.progress import ListProgressSink
from callboard.sync.push_sync import PushSyncEngine

from conftest import CHICAGO, FakeCalendar, FakeOAuth, list_mappings, utc

NOW = utc(2025, 3, 1, 12, 0)


def make_engine(db, calendar, oauth=None):
    return PushSyncEngine(db, calendar, oauth or FakeOAuth(), tz=CHICAGO, clock=lambda: NOW)


async def connected_owner_with_slot(seed, user_id, event_types=("audition_slots",)):
    audition_id = await seed.audition(user_id)
    await seed.slot(audition_id, utc(2025, 3, 10, 18), utc(2025, 3, 10, 18, 15))
    await seed.credential(user_id)
    for event_type in event_types:
        await seed.sync_setting(user_id, event_type)
    return audition_id


@pytest.mark.asyncio
async def test_single_slot_creates_one_event_and_mapping(db, seed, user_id, fake_calendar):
    await connected_owner_with_slot(seed, user_id)
    sink = ListProgressSink()

    summary = await make_engine(db, fake_calendar).run(user_id, sink)

    assert sink.events == [
        {
            "type": "progress",
            "current": 1,
            "total": 1,
            "eventType": "audition_slots",
            "message": "Syncing audition slots...",
        },
        {"type": "complete", "synced": 1, "errors": 0},
    ]
    assert sink.closed
    assert summary.created == 1
    assert fake_calendar.summaries == ["Hamlet - Audition Slot"]
    token, calendar_id, event = fake_calendar.created[0]
    assert token == "stored-token"
    assert calendar_id == "audition_slots@group.calendar.google.com"
    assert event["colorId"] == "9"
    assert event["start"]["dateTime"] == "2025-03-10T18:00:00+00:00"

    mappings = await list_mappings(db, user_id)
    assert [(m.event_type, m.google_event_id) for m in mappings] == [("audition_slots", "gevt-1")]


@pytest.mark.asyncio
async def test_second_run_creates_nothing(db, seed, user_id, fake_calendar):
    await connected_owner_with_slot(seed, user_id)
    await make_engine(db, fake_calendar).run(user_id, ListProgressSink())

    sink = ListProgressSink()
    summary = await make_engine(db, fake_calendar).run(user_id, sink)

    assert len(fake_calendar.created) == 1
    assert summary.created == 0
    assert summary.skipped == 1
    assert sink.terminal == {"type": "complete", "synced": 1, "errors": 0}
    assert len(await list_mappings(db, user_id)) == 1


@pytest.mark.asyncio
async def test_not_connected_emits_single_error(db, seed, user_id, fake_calendar):
    await seed.sync_setting(user_id, "audition_slots")
    sink = ListProgressSink()

    summary = await make_engine(db, fake_calendar).run(user_id, sink)

    assert summary is None
    assert sink.events == [{"type": "error", "message": "Not connected to Google Calendar"}]
    assert sink.closed
    stamps = (await db.execute(select(GoogleCalendarSync.last_synced_at))).scalars().all()
    assert stamps == [None]


@pytest.mark.asyncio
async def test_no_enabled_settings_is_not_configured(db, seed, user_id, fake_calendar):
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "audition_slots", enabled=False)
    sink = ListProgressSink()

    await make_engine(db, fake_calendar).run(user_id, sink)

    assert sink.events == [
        {"type": "error", "message": "No sync calendars configured. Run setup first."}
    ]


@pytest.mark.asyncio
async def test_expired_credential_is_refreshed_once_and_persisted(db, seed, user_id, fake_calendar):
    audition_id = await seed.audition(user_id)
    await seed.slot(audition_id, utc(2025, 3, 10, 18), utc(2025, 3, 10, 18, 15))
    await seed.slot(audition_id, utc(2025, 3, 10, 19), utc(2025, 3, 10, 19, 15))
    await seed.credential(user_id, expiry_date=NOW - timedelta(minutes=5))
    await seed.sync_setting(user_id, "audition_slots")
    oauth = FakeOAuth(access_token="fresh-token")

    sink = ListProgressSink()
    await make_engine(db, fake_calendar, oauth).run(user_id, sink)

    assert oauth.calls == ["refresh-1"]
    assert [token for token, _, _ in fake_calendar.created] == ["fresh-token", "fresh-token"]
    stored = await token_svc.get_credential(db, user_id)
    assert stored.access_token == "fresh-token"
    assert stored.refresh_token == "refresh-1"
    assert sink.terminal == {"type": "complete", "synced": 1, "errors": 0}


@pytest.mark.asyncio
async def test_missing_expiry_is_treated_as_valid(db, seed, user_id, fake_calendar):
    await connected_owner_with_slot(seed, user_id)
    oauth = FakeOAuth()

    await make_engine(db, fake_calendar, oauth).run(user_id, ListProgressSink())

    assert oauth.calls == []
    assert fake_calendar.created[0][0] == "stored-token"


@pytest.mark.asyncio
async def test_expired_without_refresh_token_fails_setup(db, seed, user_id, fake_calendar):
    await seed.credential(user_id, refresh_token=None, expiry_date=NOW - timedelta(hours=1))
    await seed.sync_setting(user_id, "audition_slots")
    sink = ListProgressSink()

    await make_engine(db, fake_calendar).run(user_id, sink)

    assert len(sink.events) == 1
    assert sink.events[0]["type"] == "error"
    assert "reconnect" in sink.events[0]["message"]


@pytest.mark.asyncio
async def test_refresh_failure_fails_setup(db, seed, user_id, fake_calendar):
    await seed.credential(user_id, expiry_date=NOW - timedelta(hours=1))
    await seed.sync_setting(user_id, "audition_slots")
    oauth = FakeOAuth(error=OAuthError("Token refresh failed: 400", error_code="invalid_grant"))
    sink = ListProgressSink()

    await make_engine(db, fake_calendar, oauth).run(user_id, sink)

    assert oauth.calls == ["refresh-1"]
    assert len(sink.events) == 1
    assert sink.events[0]["message"].startswith("Failed to refresh Google Calendar access")
    assert fake_calendar.created == []


@pytest.mark.asyncio
async def test_failing_category_does_not_stop_the_run(db, seed, user_id, fake_calendar, monkeypatch):
    audition_id = await connected_owner_with_slot(
        seed, user_id, event_types=("audition_slots", "performances")
    )
    await seed.cast(user_id, audition_id)
    from callboard.models import Audition
    audition = await db.get(Audition, audition_id)
    audition.performance_dates = ["2025-04-01"]
    await db.commit()

    async def broken_fetch(db, user_id, tz):
        raise RuntimeError("query failed")

    monkeypatch.setitem(sources.FETCHERS, "audition_slots", broken_fetch)
    sink = ListProgressSink()

    summary = await make_engine(db, fake_calendar).run(user_id, sink)

    assert [e["eventType"] for e in sink.events if e["type"] == "progress"] == [
        "audition_slots",
        "performances",
    ]
    assert sink.terminal == {"type": "complete", "synced": 1, "errors": 1}
    assert fake_calendar.summaries == ["Hamlet - Performance"]
    assert summary.failures[0].category == "audition_slots"


@pytest.mark.asyncio
async def test_failing_item_is_retried_next_run(db, seed, user_id):
    audition_id = await seed.audition(user_id)
    await seed.slot(audition_id, utc(2025, 3, 10, 18), utc(2025, 3, 10, 18, 15))
    await seed.slot(audition_id, utc(2025, 3, 10, 19), utc(2025, 3, 10, 19, 15))
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "audition_slots")
    calendar = FakeCalendar(fail_calls={1})

    sink = ListProgressSink()
    summary = await make_engine(db, calendar).run(user_id, sink)

    assert sink.terminal == {"type": "complete", "synced": 1, "errors": 1}
    assert summary.created == 1
    assert len(await list_mappings(db, user_id)) == 1

    retry = await make_engine(db, calendar).run(user_id, ListProgressSink())
    assert retry.created == 1
    assert retry.errors == 0
    assert len(await list_mappings(db, user_id)) == 2


@pytest.mark.asyncio
async def test_personal_category_is_a_no_op(db, seed, user_id, fake_calendar):
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "personal")
    await seed.personal(user_id, "Dentist", utc(2025, 3, 10, 15))
    sink = ListProgressSink()

    await make_engine(db, fake_calendar).run(user_id, sink)

    assert [e["type"] for e in sink.events] == ["progress", "complete"]
    assert sink.terminal == {"type": "complete", "synced": 1, "errors": 0}
    assert fake_calendar.created == []


@pytest.mark.asyncio
async def test_rehearsal_dates_become_all_day_events(db, seed, user_id, fake_calendar):
    owner_id = await seed.profile("Stage", "Manager")
    audition_id = await seed.audition(owner_id, rehearsal_dates=["2025-03-01", "", "2025-03-02"])
    await seed.cast(user_id, audition_id)
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "rehearsals")

    await make_engine(db, fake_calendar).run(user_id, ListProgressSink())

    events = [event for _, _, event in fake_calendar.created]
    assert [e["start"] for e in events] == [{"date": "2025-03-01"}, {"date": "2025-03-02"}]
    assert [e["end"] for e in events] == [{"date": "2025-03-02"}, {"date": "2025-03-03"}]
    mappings = await list_mappings(db, user_id, "rehearsal_dates")
    assert sorted(m.event_id for m in mappings) == [
        f"{audition_id}_2025-03-01",
        f"{audition_id}_2025-03-02",
    ]


@pytest.mark.asyncio
async def test_rehearsal_events_and_agenda_items_use_local_time(db, seed, user_id, fake_calendar):
    owner_id = await seed.profile("Stage", "Manager")
    audition_id = await seed.audition(owner_id)
    await seed.cast(user_id, audition_id)
    event_id = await seed.rehearsal(audition_id, date(2025, 3, 1), time(18, 0), time(21, 0))
    item_id = await seed.agenda_item(event_id, "Act 1 blocking", time(18, 0), time(19, 0))
    await seed.assign(user_id, item_id)
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "rehearsals")

    await make_engine(db, fake_calendar).run(user_id, ListProgressSink())

    by_title = {event["summary"]: event for _, _, event in fake_calendar.created}
    rehearsal = by_title["Hamlet - Rehearsal"]
    assert rehearsal["start"] == {"dateTime": "2025-03-02T00:00:00+00:00", "timeZone": "America/Chicago"}
    assert rehearsal["end"]["dateTime"] == "2025-03-02T03:00:00+00:00"
    agenda = by_title["Hamlet - Act 1 blocking"]
    assert agenda["end"]["dateTime"] == "2025-03-02T01:00:00+00:00"
    assert agenda["colorId"] == "5"

    types = {m.event_type for m in await list_mappings(db, user_id)}
    assert types == {"rehearsal_events", "agenda_items"}


@pytest.mark.asyncio
async def test_only_accepted_callbacks_are_pushed(db, seed, user_id, fake_calendar):
    owner_id = await seed.profile("Stage", "Manager")
    audition_id = await seed.audition(owner_id)
    await seed.callback(user_id, audition_id, utc(2025, 3, 12, 18), utc(2025, 3, 12, 19))
    await seed.callback(
        user_id, audition_id, utc(2025, 3, 13, 18), utc(2025, 3, 13, 19), status="pending"
    )
    await seed.credential(user_id)
    await seed.sync_setting(user_id, "callbacks")

    await make_engine(db, fake_calendar).run(user_id, ListProgressSink())

    assert fake_calendar.summaries == ["Hamlet - Callback"]


@pytest.mark.asyncio
async def test_categories_run_in_fixed_order(db, seed, user_id, fake_calendar):
    await seed.credential(user_id)
    for event_type in reversed(CATEGORY_ORDER):
        await seed.sync_setting(user_id, event_type)
    await seed.sync_setting(user_id, "workshops")
    sink = ListProgressSink()

    await make_engine(db, fake_calendar).run(user_id, sink)

    progress = [e for e in sink.events if e["type"] == "progress"]
    assert [e["eventType"] for e in progress] == list(CATEGORY_ORDER)
    assert [e["current"] for e in progress] == [1, 2, 3, 4, 5, 6]
    assert {e["total"] for e in progress} == {6}
    assert sink.terminal == {"type": "complete", "synced": 6, "errors": 0}


@pytest.mark.asyncio
async def test_completed_run_stamps_every_setting(db, seed, user_id, fake_calendar):
    await connected_owner_with_slot(seed, user_id)
    await seed.sync_setting(user_id, "callbacks", enabled=False)

    await make_engine(db, fake_calendar).run(user_id, ListProgressSink())

    stamps = (await db.execute(select(GoogleCalendarSync.last_synced_at))).scalars().all()
    assert len(stamps) == 2
    assert all(stamp is not None for stamp in stamps)
