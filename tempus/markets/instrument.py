"""Tradeable instrument bound to its exchange hours."""

from __future__ import annotations

from dataclasses import dataclass, field

from tempus.markets.exchange_hours import ExchangeHours


@dataclass(frozen=True)
class Instrument:
    """
    A single tradeable instrument.

    Each instrument carries its own exchange, so instruments in one
    schedule may trade in different time zones.
    """

    symbol: str
    exchange: ExchangeHours = field(default_factory=ExchangeHours)
    extended_market_hours: bool = False

    @property
    def ticker(self) -> str:
        """Display ticker used in event names."""
        return self.symbol.upper()
