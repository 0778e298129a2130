from image_enumerator.dispatch import Dispatcher
from image_enumerator.models import Discovery


class FakeSink:
    def __init__(self, accept: bool = True) -> None:
        self._accept = accept
        self.received: list[Discovery] = []

    def deliver(self, discovery: Discovery) -> bool:
        if self._accept:
            self.received.append(discovery)
        return self._accept


def test_dispatch_offers_each_discovery_to_every_sink() -> None:
    first, second = FakeSink(), FakeSink()
    dispatcher = Dispatcher([first])
    dispatcher.register(second)
    discovery = Discovery(url="https://h/a.png")

    assert dispatcher.dispatch(discovery) == 2
    assert first.received == [discovery]
    assert second.received == [discovery]


def test_rejecting_sink_does_not_affect_others() -> None:
    gone, alive = FakeSink(accept=False), FakeSink()
    dispatcher = Dispatcher([gone, alive])

    assert dispatcher.dispatch(Discovery(url="https://h/a.png")) == 1
    assert [item.url for item in alive.received] == ["https://h/a.png"]


def test_dispatch_without_sinks_is_a_noop() -> None:
    assert Dispatcher().dispatch(Discovery(url="https://h/a.png")) == 0
