"""Core modules: configuration, events, event sink, and time zones."""

from tempus.core.config import TempusConfig, get_config, reset_config
from tempus.core.events import Event, EventType, create_event
from tempus.core.event_sink import EventSink
from tempus.core.timezones import ET, UTC, as_utc, convert_to_utc, resolve_zone

__all__ = [
    "TempusConfig",
    "get_config",
    "reset_config",
    "Event",
    "EventType",
    "create_event",
    "EventSink",
    # Time zones
    "ET",
    "UTC",
    "as_utc",
    "convert_to_utc",
    "resolve_zone",
]
