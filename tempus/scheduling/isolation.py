"""
Fault Isolation - Keep a failing callback from taking down the scheduler.

Every end-of-day callback runs inside fault_isolated(). A raised exception:
1. Is logged at ERROR with the event name
2. Is reported to a RuntimeErrorReporter with message and stack trace
3. Is NOT re-raised

Only Exception subclasses are caught. KeyboardInterrupt, SystemExit and
friends are shutdown signals and propagate untouched.
"""

from __future__ import annotations

import logging
import traceback
from datetime import datetime
from typing import Callable, Protocol

from tempus.core.event_sink import EventSink
from tempus.core.events import EventType, create_event
from tempus.scheduling.scheduled_event import FireCallback

logger = logging.getLogger(__name__)


class RuntimeErrorReporter(Protocol):
    """Sink for callback failures raised while firing."""

    def runtime_error(self, message: str, stack_trace: str) -> None: ...


class EventSinkErrorReporter:
    """
    RuntimeErrorReporter that records failures in the JSONL event log.

    Each report becomes a SCHEDULED_EVENT_ERROR event.
    """

    def __init__(self, sink: EventSink, event_name: str | None = None):
        self.sink = sink
        self.event_name = event_name

    def runtime_error(self, message: str, stack_trace: str) -> None:
        event = create_event(
            EventType.SCHEDULED_EVENT_ERROR,
            payload={"message": message, "stack_trace": stack_trace},
            event_name=self.event_name,
        )
        self.sink.emit(event)


def fault_isolated(
    action: Callable[[], None],
    error_reporter: RuntimeErrorReporter,
    *,
    on_success: FireCallback | None = None,
) -> FireCallback:
    """
    Wrap a zero-argument action as a fire callback that never raises.

    Args:
        action: User side effect to run on each fire
        error_reporter: Receives "Runtime error in {name} event: {msg}" + trace
        on_success: Optional hook called with (name, trigger_time) after a
            clean run

    Returns:
        Callback with the (name, trigger_time) signature the scheduler calls
    """

    def fire(name: str, trigger_time: datetime) -> None:
        try:
            action()
        except Exception as e:
            logger.error(f"ScheduledEvent.{name}: {e}")
            stack_trace = traceback.format_exc()
            try:
                error_reporter.runtime_error(f"Runtime error in {name} event: {e}", stack_trace)
            except Exception:
                logger.exception(f"ScheduledEvent.{name}: failed to report runtime error")
            return

        if on_success is not None:
            on_success(name, trigger_time)

    return fire
