"""
Event Sink - Append-only JSONL event logging.

Events are written to daily log files:
    logs/events/events_YYYY-MM-DD.jsonl

Thread-safe for concurrent writes.
"""

from __future__ import annotations

import json
import threading
from datetime import date, timedelta
from pathlib import Path
from typing import Iterator

from tempus.core.events import Event


class EventSink:
    """
    Append-only event sink that writes events to daily JSONL files.

    Thread-safe: uses a lock for file operations.
    """

    def __init__(self, log_dir: Path | str = "./logs/events"):
        self._log_dir = Path(log_dir)
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_log_file(self, event_date: date) -> Path:
        """Get the log file path for a given date."""
        return self._log_dir / f"events_{event_date.isoformat()}.jsonl"

    @staticmethod
    def _to_line(event: Event) -> str:
        return json.dumps(event.to_jsonl_dict(), separators=(",", ":"), default=str)

    def emit(self, event: Event) -> None:
        """
        Write an event to the log.

        Events are written as single-line JSON (JSONL format).
        Thread-safe.
        """
        line = self._to_line(event)

        with self._lock:
            log_file = self._get_log_file(event.timestamp.date())
            with open(log_file, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def emit_batch(self, events: list[Event]) -> None:
        """Write multiple events, grouped by day file."""
        if not events:
            return

        events_by_date: dict[date, list[str]] = {}
        for event in events:
            events_by_date.setdefault(event.timestamp.date(), []).append(self._to_line(event))

        with self._lock:
            for event_date, lines in events_by_date.items():
                with open(self._get_log_file(event_date), "a", encoding="utf-8") as f:
                    for line in lines:
                        f.write(line + "\n")

    def _read_file(self, log_file: Path) -> Iterator[Event]:
        with open(log_file, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield Event.from_jsonl_dict(json.loads(line))

    def read_events(self, event_date: date) -> Iterator[Event]:
        """
        Read all events from a specific date's log file.

        Yields events in order they were written.
        """
        log_file = self._get_log_file(event_date)
        if not log_file.exists():
            return
        yield from self._read_file(log_file)

    def read_events_range(self, start_date: date, end_date: date) -> Iterator[Event]:
        """Read events from a date range (inclusive), file by file."""
        current = start_date
        while current <= end_date:
            yield from self.read_events(current)
            current += timedelta(days=1)

    def read_all_events(self) -> Iterator[Event]:
        """Read all events from all log files, in date order."""
        for log_file in self.get_log_files():
            yield from self._read_file(log_file)

    def get_log_dir(self) -> Path:
        """Return the log directory path."""
        return self._log_dir

    def get_log_files(self) -> list[Path]:
        """Return list of all log files, sorted by date."""
        return sorted(self._log_dir.glob("events_*.jsonl"))
