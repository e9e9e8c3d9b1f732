"""
Exchange Hours - Session times and trading dates for one exchange.

Holds everything needed to answer calendar questions for an exchange:
- Which dates are open (weekends and full-day holidays excluded)
- When a session closes (regular, extended, or early close)
- Whether the market is open at a given instant

All session times are local to the exchange time zone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from types import MappingProxyType
from typing import Mapping

from tempus.core.timezones import ET, as_utc

# How far ahead next_market_close will search before giving up
MAX_CLOSE_LOOKAHEAD_DAYS = 14


@dataclass(frozen=True)
class ExchangeHours:
    """
    Market hours for a single exchange.

    Default: US equities, 9:30 AM - 4:00 PM Eastern,
    extended session 4:00 AM - 8:00 PM Eastern.
    """

    time_zone: tzinfo = ET
    market_open: time = time(9, 30)
    market_close: time = time(16, 0)
    pre_market_open: time = time(4, 0)
    post_market_close: time = time(20, 0)
    holidays: frozenset[date] = field(default_factory=frozenset)
    early_closes: Mapping[date, time] = field(default_factory=dict, hash=False)
    weekend: frozenset[int] = frozenset({5, 6})  # Saturday, Sunday

    def __post_init__(self):
        # Copies, so later edits to the caller's set or dict do not leak in
        object.__setattr__(self, "holidays", frozenset(self.holidays))
        object.__setattr__(self, "early_closes", MappingProxyType(dict(self.early_closes)))
        object.__setattr__(self, "weekend", frozenset(self.weekend))

    @classmethod
    def us_equity(
        cls,
        holidays: frozenset[date] | set[date] = frozenset(),
        early_closes: Mapping[date, time] | None = None,
    ) -> ExchangeHours:
        """US equity session hours in America/New_York."""
        return cls(
            holidays=frozenset(holidays),
            early_closes=dict(early_closes or {}),
        )

    def is_date_open(self, day: date) -> bool:
        """True if the exchange has a session on this local date."""
        if day.weekday() in self.weekend:
            return False
        return day not in self.holidays

    def close_time(self, day: date, extended_market_hours: bool = False) -> time:
        """Local closing time for the session on `day`."""
        if day in self.early_closes:
            return self.early_closes[day]
        return self.post_market_close if extended_market_hours else self.market_close

    def next_market_close(
        self, local: date | datetime, extended_market_hours: bool = False
    ) -> datetime:
        """
        Next session close strictly after `local`, as a naive local datetime.

        A bare date is treated as local midnight, so an open date returns
        its own close.

        Raises:
            ValueError: if no close is found within the lookahead window
        """
        if not isinstance(local, datetime):
            local = datetime.combine(local, time.min)

        for offset in range(MAX_CLOSE_LOOKAHEAD_DAYS + 1):
            day = local.date() + timedelta(days=offset)
            if not self.is_date_open(day):
                continue
            close = datetime.combine(day, self.close_time(day, extended_market_hours))
            if close > local:
                return close

        raise ValueError(
            f"Unable to locate next market close within {MAX_CLOSE_LOOKAHEAD_DAYS} days "
            f"of {local.isoformat()}"
        )

    def is_market_open(
        self, utc_time: datetime | None = None, extended_market_hours: bool = False
    ) -> bool:
        """
        Check if the market is open at an instant.

        Args:
            utc_time: Time to check (defaults to now). Naive values are UTC.
            extended_market_hours: Include pre/post market sessions
        """
        if utc_time is None:
            utc_time = datetime.now(self.time_zone)

        local = as_utc(utc_time).astimezone(self.time_zone)
        if not self.is_date_open(local.date()):
            return False

        session_open = self.pre_market_open if extended_market_hours else self.market_open
        session_close = self.close_time(local.date(), extended_market_hours)
        return session_open <= local.time() < session_close
