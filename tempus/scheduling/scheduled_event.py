"""
Scheduled Event - Named trigger times plus a fire callback.

A ScheduledEvent is handed to an external scheduler, which owns it from
then on. Nothing here keeps a registry or mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator

# (event name, trigger time) -> None
FireCallback = Callable[[str, datetime], None]


class TriggerSequence:
    """
    Lazy, restartable sequence of trigger times.

    Each call to iter() builds a fresh generator from the factory, so the
    sequence can be enumerated any number of times as long as the factory
    closes over immutable inputs.
    """

    def __init__(self, factory: Callable[[], Iterator[datetime]]):
        self._factory = factory

    def __iter__(self) -> Iterator[datetime]:
        return self._factory()

    def __repr__(self) -> str:
        return f"TriggerSequence({self._factory!r})"


@dataclass(frozen=True)
class ScheduledEvent:
    """Named event descriptor consumed by the scheduler."""

    name: str
    times: TriggerSequence
    callback: FireCallback

    def fire(self, trigger_time: datetime) -> None:
        """Invoke the callback for one trigger time."""
        self.callback(self.name, trigger_time)
