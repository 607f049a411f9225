"""Callboard - theater scheduling backend with Google Calendar push-sync."""

__version__ = "0.1.0"
