"""Live throughput display."""

from __future__ import annotations

from collections.abc import Callable
from threading import Event

from tqdm import tqdm

from .stats import ScanStatistics

TICK_SECONDS = 0.05
TICKS_PER_SECOND = 20
SECONDS_PER_MINUTE = 60

RenderFn = Callable[[str], None]


def make_status_line(enabled: bool = True) -> tqdm:
    """One-line tqdm bar that only shows its description."""
    return tqdm(total=0, bar_format="{desc}", leave=False, disable=not enabled)


class Reporter:
    """Sample the window counters on a fixed 50ms cadence and render them.

    Windows are "since the last reset", not trailing windows: requests/second is
    sampled and zeroed every 20 ticks, found/minute every 60 seconds.
    """

    def __init__(self, stats: ScanStatistics, render: RenderFn) -> None:
        self._stats = stats
        self._render = render
        self.ticks = 0
        self.uptime_seconds = 0
        self.requests_per_second = 0
        self.found_per_minute = 0

    def line(self) -> str:
        return (
            f"{self.requests_per_second} req / sec - "
            f"{self.found_per_minute} found / min - "
            f"uptime {self.uptime_seconds}s - "
            f"total reqs {self._stats.total_requests} - "
            f"total found {self._stats.total_found}"
        )

    def tick(self) -> str:
        """Advance 50ms, sample on window boundaries and render."""
        self.ticks += 1
        if self.ticks % TICKS_PER_SECOND == 0:
            self.uptime_seconds += 1
            self.requests_per_second = self._stats.sample_requests_per_second()
            if self.uptime_seconds % SECONDS_PER_MINUTE == 0:
                self.found_per_minute = self._stats.sample_found_per_minute()
        text = self.line()
        self._render(text)
        return text

    def run(self, stop_event: Event) -> None:
        while not stop_event.wait(TICK_SECONDS):
            self.tick()
