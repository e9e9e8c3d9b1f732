"""Scheduling: scheduled event descriptors, factory strategies, and fault isolation."""

from tempus.scheduling.factory import (
    ScheduleConfigurationError,
    create_event_name,
    every_day_at,
    every_instrument_end_of_day,
    every_schedule_end_of_day,
)
from tempus.scheduling.isolation import (
    EventSinkErrorReporter,
    RuntimeErrorReporter,
    fault_isolated,
)
from tempus.scheduling.scheduled_event import ScheduledEvent, TriggerSequence

__all__ = [
    "ScheduledEvent",
    "TriggerSequence",
    "ScheduleConfigurationError",
    "create_event_name",
    "every_day_at",
    "every_schedule_end_of_day",
    "every_instrument_end_of_day",
    # Fault isolation
    "EventSinkErrorReporter",
    "RuntimeErrorReporter",
    "fault_isolated",
]
