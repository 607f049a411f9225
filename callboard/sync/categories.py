"""Sync categories, their processing order, and per-category event styling."""

from __future__ import annotations

AUDITION_SLOTS = "audition_slots"
AUDITIONS = "auditions"
CALLBACKS = "callbacks"
REHEARSALS = "rehearsals"
PERFORMANCES = "performances"
PERSONAL = "personal"

# Mapping namespaces the rehearsals category expands into
REHEARSAL_DATES = "rehearsal_dates"
REHEARSAL_EVENTS = "rehearsal_events"
AGENDA_ITEMS = "agenda_items"

# Fixed processing order for a push run
CATEGORY_ORDER: tuple[str, ...] = (
    AUDITION_SLOTS,
    AUDITIONS,
    CALLBACKS,
    REHEARSALS,
    PERFORMANCES,
    PERSONAL,
)

SUB_PASSES: dict[str, tuple[str, ...]] = {
    AUDITION_SLOTS: (AUDITION_SLOTS,),
    AUDITIONS: (AUDITIONS,),
    CALLBACKS: (CALLBACKS,),
    REHEARSALS: (REHEARSAL_DATES, REHEARSAL_EVENTS, AGENDA_ITEMS),
    PERFORMANCES: (PERFORMANCES,),
    PERSONAL: (),
}

LABELS: dict[str, str] = {
    AUDITION_SLOTS: "audition slots",
    AUDITIONS: "audition signups",
    CALLBACKS: "callbacks",
    REHEARSALS: "rehearsals",
    PERFORMANCES: "performances",
    PERSONAL: "personal events",
}

# Google Calendar event colorId per mapping namespace
COLOR_IDS: dict[str, str] = {
    AUDITION_SLOTS: "9",   # blueberry
    AUDITIONS: "7",        # peacock
    CALLBACKS: "6",        # tangerine
    REHEARSAL_DATES: "2",  # sage
    REHEARSAL_EVENTS: "10",  # basil
    AGENDA_ITEMS: "5",     # banana
    PERFORMANCES: "11",    # tomato
}


def is_known(event_type: str) -> bool:
    return event_type in SUB_PASSES
