"""Bounded-concurrency existence checks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from threading import Event

from requests.exceptions import RequestException

from .candidates import CandidateFactory
from .dispatch import Dispatcher
from .models import Discovery, ProbeOutcome, ProbeSession
from .stats import ScanStatistics


def parse_content_length(headers: Mapping[str, str]) -> int | None:
    """Return the declared Content-Length, or None when absent or malformed."""
    raw = headers.get("Content-Length")
    if raw is None:
        return None
    try:
        size = int(str(raw).strip())
    except ValueError:
        return None
    return size if size >= 0 else None


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class Prober:
    """Keep at most ``concurrency`` HEAD checks outstanding and classify results.

    A new candidate is admitted as soon as any outstanding check completes, so
    the number of open connections and in-flight futures never exceeds the
    bound no matter how fast candidates can be produced.
    """

    def __init__(
        self,
        *,
        session: ProbeSession,
        next_candidate: CandidateFactory,
        stats: ScanStatistics,
        dispatcher: Dispatcher,
        concurrency: int,
        logger: logging.Logger,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._session = session
        self._next_candidate = next_candidate
        self._stats = stats
        self._dispatcher = dispatcher
        self._concurrency = concurrency
        self._logger = logger

    def probe(self, url: str) -> ProbeOutcome:
        """Run one existence check. Transport failures are a negative outcome."""
        try:
            response = self._session.head(url, allow_redirects=False)
        except RequestException as exc:
            self._logger.debug("Probe failed for %s: %s", url, exc)
            return ProbeOutcome(url=url, success=False)
        try:
            if not is_success(response.status_code):
                return ProbeOutcome(url=url, success=False)
            # Drain whatever body came back so the connection returns to the pool.
            _ = response.content
            return ProbeOutcome(
                url=url, success=True, size=parse_content_length(response.headers)
            )
        except RequestException as exc:
            self._logger.debug("Draining response failed for %s: %s", url, exc)
            return ProbeOutcome(url=url, success=True, size=None)
        finally:
            response.close()

    def handle(self, outcome: ProbeOutcome) -> None:
        """Count one classified outcome and fan out discoveries."""
        self._stats.record_request(found=outcome.success)
        if not outcome.success:
            return
        self._logger.info("Found valid image at %s", outcome.url)
        self._dispatcher.dispatch(Discovery.from_outcome(outcome))

    def run_pass(self, stop_event: Event | None = None, *, max_probes: int | None = None) -> int:
        """Drive candidates through the bounded window until stopped.

        Returns the number of probes classified. Without ``stop_event`` or
        ``max_probes`` the pass never ends.
        """
        issued = 0
        completed = 0

        def may_issue() -> bool:
            if stop_event is not None and stop_event.is_set():
                return False
            return max_probes is None or issued < max_probes

        with ThreadPoolExecutor(
            max_workers=self._concurrency, thread_name_prefix="probe"
        ) as executor:
            pending: set[Future[ProbeOutcome]] = set()
            while True:
                while len(pending) < self._concurrency and may_issue():
                    pending.add(executor.submit(self.probe, self._next_candidate()))
                    issued += 1
                if not pending:
                    break
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    try:
                        outcome = future.result()
                    except Exception:
                        self._logger.exception("Probe raised unexpectedly; counted as a miss.")
                        self._stats.record_request(found=False)
                    else:
                        self.handle(outcome)
                    completed += 1
        return completed

    def run_forever(self, stop_event: Event) -> None:
        """Restart probe passes until ``stop_event`` is set."""
        while not stop_event.is_set():
            try:
                self.run_pass(stop_event)
            except Exception:
                self._logger.exception("Probe pass aborted; starting a fresh pass.")
