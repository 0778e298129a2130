"""Fan-out of discoveries to registered sinks."""

from __future__ import annotations

from .models import Discovery, Sink


class Dispatcher:
    """Offer every discovery to each registered sink, exactly once.

    Sinks accept without blocking (see ``SinkWorker.deliver``), so dispatching
    costs the prober one queue put per sink. A sink that drops a discovery has
    no effect on the others.
    """

    def __init__(self, sinks: list[Sink] | None = None) -> None:
        self._sinks: list[Sink] = list(sinks or [])

    def register(self, sink: Sink) -> None:
        self._sinks.append(sink)

    def dispatch(self, discovery: Discovery) -> int:
        """Return how many sinks accepted the discovery."""
        accepted = 0
        for sink in self._sinks:
            if sink.deliver(discovery):
                accepted += 1
        return accepted
