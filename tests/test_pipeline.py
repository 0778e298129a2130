import logging
from pathlib import Path
from typing import Any

import pytest
import requests

from fakes import FakeProbeSession, sequence_factory
from image_enumerator.config import EnumeratorConfig
from image_enumerator.errors import ExportError
from image_enumerator.models import Discovery
from image_enumerator.pipeline import build_sinks, run_enumerator


class RelaySession:
    """Telegram is unreachable, the webhook accepts everything."""

    def __init__(self) -> None:
        self.posted: list[str] = []
        self.telegram_attempts = 0

    def get(self, _url: str, **_kwargs: Any) -> Any:
        self.telegram_attempts += 1
        raise requests.ConnectionError("unreachable")

    def post(self, _url: str, **kwargs: Any) -> Any:
        self.posted.append(kwargs["json"]["embeds"][0]["image"]["url"])

        class Response:
            status_code = 204

        return Response()


def _config(**overrides: Any) -> EnumeratorConfig:
    values: dict[str, Any] = {"concurrency": 2, "show_progress": False}
    values.update(overrides)
    return EnumeratorConfig(**values)


def test_unreachable_relay_does_not_stop_other_sinks(tmp_path: Path) -> None:
    export = tmp_path / "found.txt"
    config = _config(
        export_path=str(export),
        webhook_id=1,
        webhook_token="hook",
        telegram_channel="-100",
        telegram_token="bot",
    )
    urls = [f"https://i.example.com/{index:07d}.png" for index in range(6)]
    found = {urls[1]: {}, urls[4]: {"Content-Length": "99"}}
    relay_session = RelaySession()

    stats = run_enumerator(
        config,
        logger=logging.getLogger("test"),
        probe_session=FakeProbeSession(found),
        relay_session=relay_session,
        next_candidate=sequence_factory(urls),
        max_probes=6,
    )

    assert stats.total_requests == 6
    assert stats.total_found == 2
    assert sorted(export.read_text(encoding="utf-8").splitlines()) == [urls[1], urls[4]]
    assert sorted(relay_session.posted) == [urls[1], urls[4]]
    assert relay_session.telegram_attempts == 2


def test_export_reports_size_when_enabled(tmp_path: Path) -> None:
    export = tmp_path / "found.txt"
    url = "https://i.example.com/AbCdEfG.png"
    run_enumerator(
        _config(export_path=str(export), report_size=True, concurrency=1),
        logger=logging.getLogger("test"),
        probe_session=FakeProbeSession({url: {"Content-Length": "12345"}}),
        next_candidate=sequence_factory([url]),
        max_probes=1,
    )
    assert export.read_text(encoding="utf-8") == f"{url} 12345\n"


def test_fatal_export_error_stops_probing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    class BrokenExporter:
        def __init__(self, _path: str, *, report_size: bool = False) -> None:
            _ = report_size

        def consume(self, _discovery: Discovery) -> None:
            raise ExportError("disk full")

    monkeypatch.setattr("image_enumerator.pipeline.FileExporter", BrokenExporter)
    session = FakeProbeSession({"https://i.example.com/hit.png": {}})

    with pytest.raises(ExportError):
        run_enumerator(
            _config(export_path=str(tmp_path / "found.txt")),
            logger=logging.getLogger("test"),
            probe_session=session,
            next_candidate=lambda: "https://i.example.com/hit.png",
            max_probes=100_000,
        )
    assert len(session.calls) < 100_000


def test_build_sinks_skips_half_configured_relays(tmp_path: Path) -> None:
    config = _config(
        export_path=str(tmp_path / "found.txt"),
        webhook_id=1,
        telegram_token="bot",
    )
    workers = build_sinks(
        config, relay_session=object(), logger=logging.getLogger("test"), on_fatal=print
    )
    assert [worker.name for worker in workers] == ["export"]


def test_run_enumerator_without_sinks_still_counts() -> None:
    urls = ["https://i.example.com/a.png", "https://i.example.com/b.png"]
    stats = run_enumerator(
        _config(),
        logger=logging.getLogger("test"),
        probe_session=FakeProbeSession({urls[0]: {}}),
        next_candidate=sequence_factory(urls),
        max_probes=2,
    )
    assert (stats.total_requests, stats.total_found) == (2, 1)


class ClosableSession(FakeProbeSession):
    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    def close(self) -> None:
        self.closed = True


def test_sessions_built_by_run_enumerator_are_closed(monkeypatch: pytest.MonkeyPatch) -> None:
    probe_session, relay_session = ClosableSession(), ClosableSession()
    monkeypatch.setattr(
        "image_enumerator.pipeline.make_probe_session", lambda _agent, _size: probe_session
    )
    monkeypatch.setattr(
        "image_enumerator.pipeline.make_relay_session", lambda _agent: relay_session
    )

    run_enumerator(
        _config(),
        logger=logging.getLogger("test"),
        next_candidate=lambda: "https://i.example.com/a.png",
        max_probes=3,
    )

    assert probe_session.closed is True
    assert relay_session.closed is True
    assert len(probe_session.calls) == 3


def test_sessions_are_closed_when_export_cannot_open(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    probe_session, relay_session = ClosableSession(), ClosableSession()
    monkeypatch.setattr(
        "image_enumerator.pipeline.make_probe_session", lambda _agent, _size: probe_session
    )
    monkeypatch.setattr(
        "image_enumerator.pipeline.make_relay_session", lambda _agent: relay_session
    )

    with pytest.raises(ExportError):
        run_enumerator(
            _config(export_path=str(tmp_path)),
            logger=logging.getLogger("test"),
            max_probes=1,
        )

    assert probe_session.closed is True
    assert relay_session.closed is True
    assert probe_session.calls == []


def test_injected_sessions_are_left_open() -> None:
    session = ClosableSession()
    run_enumerator(
        _config(),
        logger=logging.getLogger("test"),
        probe_session=session,
        relay_session=ClosableSession(),  # type: ignore[arg-type]
        next_candidate=lambda: "https://i.example.com/a.png",
        max_probes=1,
    )
    assert session.closed is False
