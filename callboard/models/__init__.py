"""Callboard models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin
from .profile import Profile
from .show import Show, Audition, CastMember
from .audition import AuditionSlot, AuditionSignup, CallbackSlot, CallbackInvitation
from .rehearsal import RehearsalEvent, RehearsalAgendaItem, AgendaAssignment
from .event import PersonalEvent
from .production import ProductionEventType, ProductionEvent, ProductionEventAssignment
from .google import GoogleCalendarToken, GoogleCalendarSync, GoogleEventMapping

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "UserOwnedMixin",
    "Profile",
    "Show",
    "Audition",
    "CastMember",
    "AuditionSlot",
    "AuditionSignup",
    "CallbackSlot",
    "CallbackInvitation",
    "RehearsalEvent",
    "RehearsalAgendaItem",
    "AgendaAssignment",
    "PersonalEvent",
    "ProductionEventType",
    "ProductionEvent",
    "ProductionEventAssignment",
    "GoogleCalendarToken",
    "GoogleCalendarSync",
    "GoogleEventMapping",
]
