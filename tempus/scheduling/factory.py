"""
Scheduled Event Factory - Build common scheduled events.

Three construction strategies, one contract: each returns a ready-to-schedule
ScheduledEvent whose trigger times are generated lazily from immutable
inputs and can be re-enumerated at will.

- every_day_at: fixed time of day on each anchor date (zone-agnostic)
- every_schedule_end_of_day: shortly before local midnight on every date
  any calendar trades, in the schedule's time zone
- every_instrument_end_of_day: a delta before each market close of one
  instrument, in that instrument's exchange time zone

Lower bounds for the end-of-day strategies are applied AFTER conversion
to UTC. Offsets and DST shifts make filtering on local times unsafe.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Callable, Iterable, Iterator

from tempus.core.timezones import as_naive_utc, as_utc, convert_to_utc, resolve_zone
from tempus.markets.calendar import each_tradeable_day
from tempus.markets.exchange_hours import ExchangeHours
from tempus.markets.instrument import Instrument
from tempus.scheduling.isolation import RuntimeErrorReporter, fault_isolated
from tempus.scheduling.scheduled_event import FireCallback, ScheduledEvent, TriggerSequence

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

TradeableDays = Callable[[Any, date, date], Iterable[date]]
ToUtc = Callable[[datetime, tzinfo], datetime]


class ScheduleConfigurationError(ValueError):
    """Raised when a scheduled event is constructed with invalid parameters."""

    def __init__(self, parameter: str, value: Any, reason: str):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"{reason} (parameter '{parameter}' = {value!r})")


def create_event_name(scope: str, name: str) -> str:
    """
    Format a fully scoped event name.

    Args:
        scope: Scope of the event, e.g. 'Schedule' or a ticker
        name: Name within that scope, e.g. 'EndOfDay'
    """
    return f"{scope}.{name}"


def _validate_end_of_day_delta(end_of_day_delta: timedelta) -> None:
    if end_of_day_delta >= ONE_DAY:
        raise ScheduleConfigurationError(
            "end_of_day_delta", end_of_day_delta, "Delta must be less than a day"
        )


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def every_day_at(
    name: str,
    dates: Iterable[date | datetime],
    time_of_day: timedelta,
    callback: FireCallback,
    current_utc_time: datetime | None = None,
) -> ScheduledEvent:
    """
    Fire at `time_of_day` on every anchor date.

    No zone conversion happens here: anchors and offset are taken to be in
    the caller's target zone already, and the produced times are naive.

    NOTE: the bound keeps times strictly BEFORE `current_utc_time`, the
    opposite of the end-of-day strategies. An aware bound is compared as
    naive UTC.

    Args:
        name: Event identifier
        dates: Anchor dates; datetimes are truncated to their date
        time_of_day: Offset added to each anchor's midnight
        callback: Called with (name, trigger_time) on fire, unwrapped
        current_utc_time: Optional bound, None to skip filtering
    """
    anchors = tuple(_as_date(d) for d in dates)
    bound = as_naive_utc(current_utc_time) if current_utc_time is not None else None

    def times() -> Iterator[datetime]:
        for anchor in anchors:
            event_time = datetime.combine(anchor, time.min) + time_of_day
            if bound is None or event_time < bound:
                yield event_time

    return ScheduledEvent(name, TriggerSequence(times), callback)


def every_schedule_end_of_day(
    time_zone: tzinfo | str,
    calendars: ExchangeHours | Iterable[ExchangeHours],
    start: date | datetime,
    end: date | datetime,
    end_of_day_delta: timedelta,
    on_end_of_day: Callable[[], None],
    error_reporter: RuntimeErrorReporter,
    current_utc_time: datetime | None = None,
    *,
    tradeable_days: TradeableDays = each_tradeable_day,
    to_utc: ToUtc = convert_to_utc,
) -> ScheduledEvent:
    """
    Fire `end_of_day_delta` before local midnight on every tradeable date.

    Args:
        time_zone: Schedule-wide zone the local event times are expressed in
        calendars: Exchanges whose union of open dates drives the schedule
        start: First date for events
        end: Last date for events
        end_of_day_delta: Time before the end of the day to fire, < 1 day
        on_end_of_day: Schedule-wide end-of-day hook
        error_reporter: Receives callback failures
        current_utc_time: Only times strictly after this survive; None to skip

    Raises:
        ScheduleConfigurationError: if end_of_day_delta >= 1 day
    """
    _validate_end_of_day_delta(end_of_day_delta)

    zone = resolve_zone(time_zone)
    if not isinstance(calendars, ExchangeHours):
        calendars = tuple(calendars)
    first, last = _as_date(start), _as_date(end)
    bound = as_utc(current_utc_time) if current_utc_time is not None else None
    event_time_of_day = ONE_DAY - end_of_day_delta

    def times() -> Iterator[datetime]:
        for day in tradeable_days(calendars, first, last):
            event_time = datetime.combine(day, time.min) + event_time_of_day
            event_utc_time = to_utc(event_time, zone)
            if bound is None or event_utc_time > bound:
                yield event_utc_time

    def fired(name: str, trigger_time: datetime) -> None:
        logger.debug(
            f"ScheduledEvent.{name}: Fired On End of Day Event() for Day({trigger_time.date()})"
        )

    isolated = fault_isolated(on_end_of_day, error_reporter, on_success=fired)

    def callback(name: str, trigger_time: datetime) -> None:
        logger.debug(f"ScheduledEvent.{name}: Firing at {trigger_time}")
        isolated(name, trigger_time)

    return ScheduledEvent(
        create_event_name("Schedule", "EndOfDay"), TriggerSequence(times), callback
    )


def every_instrument_end_of_day(
    instrument: Instrument,
    start: date | datetime,
    end: date | datetime,
    end_of_day_delta: timedelta,
    on_end_of_day: Callable[[str], None],
    error_reporter: RuntimeErrorReporter,
    current_utc_time: datetime | None = None,
    *,
    tradeable_days: TradeableDays = each_tradeable_day,
    to_utc: ToUtc = convert_to_utc,
) -> ScheduledEvent:
    """
    Fire `end_of_day_delta` before each market close of one instrument.

    Closes honor the instrument's extended-hours flag and are converted
    with the instrument's own exchange zone.

    Args:
        instrument: Instrument defining tradeable dates and closes
        start: First date for events
        end: Last date for events
        end_of_day_delta: Time before market close to fire, < 1 day.
            Negative values fire after the close.
        on_end_of_day: Per-instrument hook, called with the symbol
        error_reporter: Receives callback failures
        current_utc_time: Only times strictly after this survive; None to skip

    Raises:
        ScheduleConfigurationError: if end_of_day_delta >= 1 day
    """
    _validate_end_of_day_delta(end_of_day_delta)

    exchange = instrument.exchange
    extended = instrument.extended_market_hours
    first, last = _as_date(start), _as_date(end)
    bound = as_utc(current_utc_time) if current_utc_time is not None else None

    def times() -> Iterator[datetime]:
        for day in tradeable_days(exchange, first, last):
            market_close = exchange.next_market_close(day, extended)
            event_time = market_close - end_of_day_delta
            event_utc_time = to_utc(event_time, exchange.time_zone)
            if bound is None or event_utc_time > bound:
                yield event_utc_time

    callback = fault_isolated(lambda: on_end_of_day(instrument.symbol), error_reporter)

    return ScheduledEvent(
        create_event_name(instrument.ticker, "EndOfDay"), TriggerSequence(times), callback
    )
