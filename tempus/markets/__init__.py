"""Markets: exchange hours, instruments, and tradeable-date enumeration."""

from tempus.markets.calendar import each_day, each_tradeable_day
from tempus.markets.exchange_hours import ExchangeHours
from tempus.markets.instrument import Instrument

__all__ = [
    "ExchangeHours",
    "Instrument",
    "each_day",
    "each_tradeable_day",
]
