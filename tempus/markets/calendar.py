"""
Trading Calendar - Enumerate tradeable dates.

A date is tradeable for a set of exchanges if ANY of them has a session
on that date (union semantics). Dates are yielded lazily, ascending,
without duplicates.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Iterator

from tempus.markets.exchange_hours import ExchangeHours


def each_day(start: date, end: date) -> Iterator[date]:
    """Every calendar date in [start, end]. Empty if end < start."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def each_tradeable_day(
    calendars: ExchangeHours | Iterable[ExchangeHours],
    start: date,
    end: date,
) -> Iterator[date]:
    """
    Yield every date in [start, end] on which any calendar is open.

    Args:
        calendars: A single exchange or a collection of exchanges
        start: First date (inclusive)
        end: Last date (inclusive)
    """
    if isinstance(calendars, ExchangeHours):
        calendars = (calendars,)
    else:
        calendars = tuple(calendars)

    for day in each_day(start, end):
        if any(calendar.is_date_open(day) for calendar in calendars):
            yield day
