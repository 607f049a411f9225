"""Google Calendar push-sync."""
