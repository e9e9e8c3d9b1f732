"""
Schedule Preview - Print the trigger times an end-of-day schedule would produce.

Usage:
    python -m tempus.cli --start 2024-01-02 --end 2024-01-10
    python -m tempus.cli --start 2024-03-01 --end 2024-03-15 --symbol SPY --symbol QQQ
    python -m tempus.cli --start 2024-01-02 --end 2024-01-05 --delta-minutes 30 --after 2024-01-03T00:00:00+00:00

Without --symbol, previews the schedule-wide "Schedule.EndOfDay" event in the
configured time zone. With symbols, previews one "<TICKER>.EndOfDay" event per
symbol on US equity hours. Defaults come from TEMPUS_* environment variables
(a .env file is honored).
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfoNotFoundError

from dotenv import load_dotenv

from tempus.core.config import get_config
from tempus.core.event_sink import EventSink
from tempus.core.events import EventType, create_event
from tempus.markets.exchange_hours import ExchangeHours
from tempus.markets.instrument import Instrument
from tempus.scheduling.factory import (
    ScheduleConfigurationError,
    every_instrument_end_of_day,
    every_schedule_end_of_day,
)
from tempus.scheduling.isolation import EventSinkErrorReporter
from tempus.scheduling.scheduled_event import ScheduledEvent

logger = logging.getLogger("tempus.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Preview Tempus end-of-day schedules")
    parser.add_argument("--start", type=date.fromisoformat, required=True, help="First date (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, required=True, help="Last date (YYYY-MM-DD)")
    parser.add_argument(
        "--symbol",
        action="append",
        default=[],
        help="Instrument symbol (repeatable). Omit for the schedule-wide event.",
    )
    parser.add_argument(
        "--delta-minutes",
        type=float,
        default=None,
        help="Minutes before end of day / market close (default: config)",
    )
    parser.add_argument("--time-zone", default=None, help="Schedule time zone (default: config)")
    parser.add_argument(
        "--extended",
        action="store_true",
        default=None,
        help="Use extended-hours closes for instruments",
    )
    parser.add_argument(
        "--after",
        type=datetime.fromisoformat,
        default=None,
        help="Only show times strictly after this instant (naive = UTC)",
    )
    parser.add_argument(
        "--record",
        action="store_true",
        help="Record a SCHEDULE_CREATED event per schedule in the event log",
    )
    return parser


def _noop(*_args) -> None:
    return None


def build_events(args: argparse.Namespace, sink: EventSink) -> list[ScheduledEvent]:
    """Construct the scheduled events described by parsed arguments."""
    schedule_config = get_config().schedule

    delta = (
        timedelta(minutes=args.delta_minutes)
        if args.delta_minutes is not None
        else schedule_config.end_of_day_delta
    )
    extended = schedule_config.extended_market_hours if args.extended is None else args.extended
    exchange = ExchangeHours.us_equity()

    if not args.symbol:
        return [
            every_schedule_end_of_day(
                args.time_zone or schedule_config.time_zone,
                [exchange],
                args.start,
                args.end,
                delta,
                _noop,
                EventSinkErrorReporter(sink, "Schedule.EndOfDay"),
                args.after,
            )
        ]

    events = []
    for symbol in args.symbol:
        instrument = Instrument(symbol, exchange, extended_market_hours=extended)
        events.append(
            every_instrument_end_of_day(
                instrument,
                args.start,
                args.end,
                delta,
                _noop,
                EventSinkErrorReporter(sink, f"{instrument.ticker}.EndOfDay"),
                args.after,
            )
        )
    return events


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    load_dotenv()
    config = get_config()

    logging.basicConfig(
        level=config.runtime.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    args = build_parser().parse_args(argv)
    sink = EventSink(config.runtime.event_log_dir)

    try:
        events = build_events(args, sink)
    except (ScheduleConfigurationError, ZoneInfoNotFoundError) as e:
        logger.error(f"Invalid schedule: {e}")
        return 2

    for event in events:
        times = list(event.times)
        for trigger_time in times:
            print(f"{event.name}\t{trigger_time.isoformat()}")
        logger.info(f"{event.name}: {len(times)} trigger times")

        if args.record:
            sink.emit(
                create_event(
                    EventType.SCHEDULE_CREATED,
                    payload={
                        "trigger_count": len(times),
                        "first": times[0].isoformat() if times else None,
                        "last": times[-1].isoformat() if times else None,
                    },
                    event_name=event.name,
                )
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
