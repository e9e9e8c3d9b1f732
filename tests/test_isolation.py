"""
Tests for fault-isolated callbacks.

Verifies:
- Failures are logged and reported, never raised
- Shutdown signals propagate
- A wrapper keeps working after a failure
- Event-sink backed error reporting
"""

import logging
import pytest
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

from tempus.core.event_sink import EventSink
from tempus.core.events import EventType
from tempus.scheduling.isolation import EventSinkErrorReporter, fault_isolated

FIRE_TIME = datetime(2024, 1, 2, 20, 50, tzinfo=timezone.utc)


class TestFaultIsolated:
    """Tests for fault_isolated."""

    def test_success_runs_action(self):
        action = Mock()
        reporter = Mock()
        on_success = Mock()

        fire = fault_isolated(action, reporter, on_success=on_success)
        fire("SPY.EndOfDay", FIRE_TIME)

        action.assert_called_once_with()
        on_success.assert_called_once_with("SPY.EndOfDay", FIRE_TIME)
        reporter.runtime_error.assert_not_called()

    def test_failure_logged_and_reported(self, caplog):
        caplog.set_level(logging.ERROR, logger="tempus.scheduling.isolation")
        reporter = Mock()
        on_success = Mock()

        fire = fault_isolated(Mock(side_effect=ValueError("bad input")), reporter, on_success=on_success)
        fire("SPY.EndOfDay", FIRE_TIME)

        assert [r.getMessage() for r in caplog.records] == ["ScheduledEvent.SPY.EndOfDay: bad input"]
        message, stack_trace = reporter.runtime_error.call_args.args
        assert message == "Runtime error in SPY.EndOfDay event: bad input"
        assert "Traceback" in stack_trace
        assert "ValueError: bad input" in stack_trace
        on_success.assert_not_called()

    def test_repeated_failures(self, caplog):
        caplog.set_level(logging.ERROR, logger="tempus.scheduling.isolation")
        reporter = Mock()
        fire = fault_isolated(Mock(side_effect=RuntimeError("boom")), reporter)

        for _ in range(5):
            fire("Schedule.EndOfDay", FIRE_TIME)

        assert len(caplog.records) == 5
        assert reporter.runtime_error.call_count == 5

    def test_usable_after_failure(self):
        action = Mock(side_effect=[RuntimeError("first"), None])
        reporter = Mock()
        on_success = Mock()
        fire = fault_isolated(action, reporter, on_success=on_success)

        fire("Schedule.EndOfDay", FIRE_TIME)
        fire("Schedule.EndOfDay", FIRE_TIME)

        assert action.call_count == 2
        assert reporter.runtime_error.call_count == 1
        on_success.assert_called_once()

    @pytest.mark.parametrize("signal", [KeyboardInterrupt, SystemExit])
    def test_shutdown_signals_propagate(self, signal):
        reporter = Mock()
        fire = fault_isolated(Mock(side_effect=signal()), reporter)

        with pytest.raises(signal):
            fire("Schedule.EndOfDay", FIRE_TIME)

        reporter.runtime_error.assert_not_called()

    def test_failing_reporter_does_not_escape(self, caplog):
        caplog.set_level(logging.ERROR, logger="tempus.scheduling.isolation")
        reporter = Mock()
        reporter.runtime_error.side_effect = OSError("disk full")
        fire = fault_isolated(Mock(side_effect=ValueError("bad input")), reporter)

        fire("SPY.EndOfDay", FIRE_TIME)
        fire("SPY.EndOfDay", FIRE_TIME)

        messages = [r.getMessage() for r in caplog.records]
        assert reporter.runtime_error.call_count == 2
        assert messages.count("ScheduledEvent.SPY.EndOfDay: bad input") == 2
        assert messages.count("ScheduledEvent.SPY.EndOfDay: failed to report runtime error") == 2
        assert "OSError: disk full" in caplog.text


class TestEventSinkErrorReporter:
    """Tests for EventSinkErrorReporter."""

    def test_reports_become_events(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            sink = EventSink(Path(tmpdir))
            reporter = EventSinkErrorReporter(sink, "SPY.EndOfDay")

            fire = fault_isolated(Mock(side_effect=ValueError("bad input")), reporter)
            fire("SPY.EndOfDay", FIRE_TIME)
            fire("SPY.EndOfDay", FIRE_TIME)

            events = list(sink.read_all_events())

            assert len(events) == 2
            event = events[0]
            assert event.event_type == EventType.SCHEDULED_EVENT_ERROR
            assert event.event_name == "SPY.EndOfDay"
            assert event.payload["message"] == "Runtime error in SPY.EndOfDay event: bad input"
            assert "ValueError: bad input" in event.payload["stack_trace"]
