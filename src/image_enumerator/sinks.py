"""Queue-backed sink workers."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

from .errors import EnumeratorError
from .models import Discovery, DiscoveryHandler

FatalCallback = Callable[[EnumeratorError], None]

_STOP = None


class SinkWorker:
    """One unbounded queue drained in order by one dedicated thread.

    ``deliver`` never blocks: the queue has no size limit, so a stalled handler
    costs memory instead of slowing the prober. Handlers are expected to keep up
    with the discovery rate, which is low compared to the probe rate.

    Handlers swallow their own delivery failures. An ``EnumeratorError`` that
    escapes a handler is fatal: the worker stops accepting discoveries and
    reports the error through ``on_fatal``. Any other exception is logged, the
    discovery is dropped and draining continues.
    """

    def __init__(
        self,
        name: str,
        handler: DiscoveryHandler,
        *,
        logger: logging.Logger,
        on_fatal: FatalCallback | None = None,
    ) -> None:
        self.name = name
        self._handler = handler
        self._logger = logger
        self._on_fatal = on_fatal
        self._queue: queue.Queue[Discovery | None] = queue.Queue()
        self._closed = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"sink-{name}", daemon=True)
        self.error: EnumeratorError | None = None

    def start(self) -> SinkWorker:
        self._thread.start()
        return self

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    @property
    def backlog(self) -> int:
        return self._queue.qsize()

    def deliver(self, discovery: Discovery) -> bool:
        if self._closed.is_set():
            return False
        self._queue.put_nowait(discovery)
        return True

    def close(self, timeout: float | None = None) -> None:
        """Stop accepting work, let the thread drain its backlog, then join."""
        if not self._closed.is_set():
            self._closed.set()
            self._queue.put_nowait(_STOP)
        if self._thread.is_alive():
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            while True:
                discovery = self._queue.get()
                if discovery is _STOP:
                    return
                try:
                    self._handler.consume(discovery)
                except EnumeratorError as exc:
                    self._logger.error("Sink %s failed: %s", self.name, exc)
                    self.error = exc
                    self._closed.set()
                    if self._on_fatal is not None:
                        self._on_fatal(exc)
                    return
                except Exception:
                    self._logger.exception(
                        "Sink %s dropped %s after an unexpected error", self.name, discovery.url
                    )
        finally:
            close_fn = getattr(self._handler, "close", None)
            if callable(close_fn):
                close_fn()
