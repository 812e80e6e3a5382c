"""Throttled progress reporting for a running split."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from csv_splitter.sizes import format_size
from csv_splitter.split.types import Part, SplitResult

logger = logging.getLogger(__name__)

# Minimum seconds between two throttled progress records.
PROGRESS_INTERVAL = 1.0


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Point-in-time view of a split in progress."""

    part_index: int
    bytes_processed: int
    lines_processed: int
    total_size: int

    @property
    def percent(self) -> float:
        if self.total_size <= 0:
            return 100.0
        return 100.0 * self.bytes_processed / self.total_size


class ProgressReporter:
    """
    Emit progress at most once per `interval` seconds, plus a final summary.

    The throttle window starts at construction, so a split that finishes
    within the first interval only logs its summary.
    """

    def __init__(
        self,
        total_size: int,
        interval: float = PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._total_size = total_size
        self._interval = interval
        self._clock = clock
        self._last_report = clock()
        self.emitted = 0

    def update(self, snapshot: ProgressSnapshot) -> bool:
        """Log `snapshot` if the interval has elapsed. Returns True when it logged."""
        now = self._clock()
        if now - self._last_report < self._interval:
            return False

        self._last_report = now
        self.emitted += 1
        logger.info(
            "Processing part %d, lines: %d, processed: %s (%.1f%%)",
            snapshot.part_index,
            snapshot.lines_processed,
            format_size(snapshot.bytes_processed),
            snapshot.percent,
        )
        return True

    def part_opened(self, part: Part) -> None:
        logger.debug("Created part %d: %s", part.index, part.path)

    def finish(self, result: SplitResult, elapsed: float) -> None:
        """Log the completion summary regardless of the throttle."""
        logger.info(
            "Split completed: %d parts created, total size: %s, lines: %d (%.2fs)",
            result.part_count,
            format_size(result.bytes_processed),
            result.lines_processed,
            elapsed,
        )
