"""Shared throughput counters."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock


class Counter:
    """Thread-safe integer supporting increment, load and sample-and-reset."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = Lock()

    def increment(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def sample_and_reset(self) -> int:
        with self._lock:
            value = self._value
            self._value = 0
            return value


@dataclass(frozen=True)
class StatsSnapshot:
    requests_this_second: int
    found_this_minute: int
    total_requests: int
    total_found: int


class ScanStatistics:
    """Counters written by probe workers and sampled by the reporter.

    Lifetime totals only grow. The two window counters are reset exclusively
    through the ``sample_*`` methods, which the reporter calls once per window.
    """

    def __init__(self) -> None:
        self._requests_this_second = Counter()
        self._found_this_minute = Counter()
        self._total_requests = Counter()
        self._total_found = Counter()

    def record_request(self, *, found: bool) -> None:
        self._requests_this_second.increment()
        self._total_requests.increment()
        if found:
            self._found_this_minute.increment()
            self._total_found.increment()

    def sample_requests_per_second(self) -> int:
        return self._requests_this_second.sample_and_reset()

    def sample_found_per_minute(self) -> int:
        return self._found_this_minute.sample_and_reset()

    @property
    def total_requests(self) -> int:
        return self._total_requests.value

    @property
    def total_found(self) -> int:
        return self._total_found.value

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(
            requests_this_second=self._requests_this_second.value,
            found_this_minute=self._found_this_minute.value,
            total_requests=self._total_requests.value,
            total_found=self._total_found.value,
        )
