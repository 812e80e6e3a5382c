"""Tests for throttled progress reporting."""

import logging
from pathlib import Path

from csv_splitter.progress import ProgressReporter, ProgressSnapshot
from csv_splitter.split.policy import ByLines
from csv_splitter.split.types import Part, SplitResult


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def snapshot(bytes_processed: int = 50) -> ProgressSnapshot:
    return ProgressSnapshot(
        part_index=1, bytes_processed=bytes_processed, lines_processed=5, total_size=200
    )


class TestProgressReporter:
    """Test cases for ProgressReporter."""

    def test_throttles_to_interval(self) -> None:
        """Test that at most one record is emitted per interval."""
        clock = FakeClock()
        reporter = ProgressReporter(200, interval=1.0, clock=clock)

        assert reporter.update(snapshot()) is False

        clock.now = 0.5
        assert reporter.update(snapshot()) is False

        clock.now = 1.0
        assert reporter.update(snapshot()) is True

        # Window restarts from the last emission.
        clock.now = 1.9
        assert reporter.update(snapshot()) is False

        clock.now = 2.0
        assert reporter.update(snapshot()) is True
        assert reporter.emitted == 2

    def test_update_logs_percentage(self, caplog) -> None:
        clock = FakeClock()
        reporter = ProgressReporter(200, clock=clock)
        clock.now = 5.0

        with caplog.at_level(logging.INFO, logger="csv_splitter.progress"):
            reporter.update(snapshot(bytes_processed=50))

        assert "Processing part 1, lines: 5, processed: 50 B (25.0%)" in caplog.text

    def test_finish_is_unconditional(self, caplog) -> None:
        """Test that the summary is logged even inside the throttle window."""
        reporter = ProgressReporter(200, clock=FakeClock())
        result = SplitResult(
            policy=ByLines(2),
            parts=[Part(index=1, path=Path("a_part001.csv"))],
            bytes_processed=2048,
            lines_processed=7,
        )

        with caplog.at_level(logging.INFO, logger="csv_splitter.progress"):
            reporter.finish(result, elapsed=0.25)

        assert "Split completed: 1 parts created, total size: 2.0 KB, lines: 7" in caplog.text


def test_snapshot_percent() -> None:
    assert snapshot(bytes_processed=100).percent == 50.0
    empty = ProgressSnapshot(part_index=1, bytes_processed=0, lines_processed=0, total_size=0)
    assert empty.percent == 100.0
