"""Tests for the schedule preview CLI."""

import pytest

from tempus.cli import main
from tempus.core.config import reset_config
from tempus.core.event_sink import EventSink
from tempus.core.events import EventType


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("TEMPUS_EVENT_LOG_DIR", str(tmp_path / "events"))
    monkeypatch.setenv("TEMPUS_TIME_ZONE", "America/New_York")
    monkeypatch.setenv("TEMPUS_END_OF_DAY_DELTA_MINUTES", "10")
    monkeypatch.setenv("TEMPUS_EXTENDED_MARKET_HOURS", "false")
    reset_config()
    yield
    reset_config()


class TestPreviewCli:

    def test_schedule_wide_preview(self, capsys):
        exit_code = main(["--start", "2024-01-02", "--end", "2024-01-03"])

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert lines == [
            "Schedule.EndOfDay\t2024-01-03T04:50:00+00:00",
            "Schedule.EndOfDay\t2024-01-04T04:50:00+00:00",
        ]

    def test_instrument_preview(self, capsys):
        exit_code = main(
            ["--start", "2024-01-02", "--end", "2024-01-02", "--symbol", "spy", "--symbol", "QQQ"]
        )

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert lines == [
            "SPY.EndOfDay\t2024-01-02T20:50:00+00:00",
            "QQQ.EndOfDay\t2024-01-02T20:50:00+00:00",
        ]

    def test_extended_and_after(self, capsys):
        exit_code = main(
            [
                "--start", "2024-01-02",
                "--end", "2024-01-03",
                "--symbol", "SPY",
                "--extended",
                "--delta-minutes", "0",
                "--after", "2024-01-03T01:00:00",
            ]
        )

        lines = capsys.readouterr().out.splitlines()
        assert exit_code == 0
        assert lines == ["SPY.EndOfDay\t2024-01-04T01:00:00+00:00"]

    def test_invalid_delta_exits_with_error(self, capsys):
        exit_code = main(["--start", "2024-01-02", "--end", "2024-01-03", "--delta-minutes", "1440"])

        assert exit_code == 2
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize(
        "argv",
        [
            ["--time-zone", "Not/AZone"],
            ["--symbol", "SPY", "--delta-minutes", "1500"],
        ],
    )
    def test_configuration_errors_exit_with_status_2(self, argv, capsys):
        exit_code = main(["--start", "2024-01-02", "--end", "2024-01-03", *argv])

        assert exit_code == 2
        assert capsys.readouterr().out == ""

    def test_unknown_zone_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("TEMPUS_TIME_ZONE", "Not/AZone")
        reset_config()

        assert main(["--start", "2024-01-02", "--end", "2024-01-03"]) == 2
        assert capsys.readouterr().out == ""

    def test_record_writes_schedule_events(self, tmp_path, capsys):
        exit_code = main(["--start", "2024-01-02", "--end", "2024-01-05", "--symbol", "SPY", "--record"])

        events = list(EventSink(tmp_path / "events").read_all_events())
        assert exit_code == 0
        assert len(events) == 1
        assert events[0].event_type == EventType.SCHEDULE_CREATED
        assert events[0].event_name == "SPY.EndOfDay"
        assert events[0].payload["trigger_count"] == 4
        assert events[0].payload["first"] == "2024-01-02T20:50:00+00:00"
