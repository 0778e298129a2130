"""Core orchestration pipeline."""

from __future__ import annotations

import logging
from threading import Event, Thread

from requests import Session
from tqdm.contrib.logging import logging_redirect_tqdm

from .candidates import CandidateFactory, candidate_factory
from .config import EnumeratorConfig
from .dispatch import Dispatcher
from .errors import EnumeratorError
from .export import FileExporter
from .models import ProbeSession
from .prober import Prober
from .relays import DiscordWebhookRelay, TelegramRelay
from .reporter import Reporter, make_status_line
from .sinks import FatalCallback, SinkWorker
from .stats import ScanStatistics
from .transport import make_probe_session, make_relay_session


def build_sinks(
    config: EnumeratorConfig,
    *,
    relay_session: Session,
    logger: logging.Logger,
    on_fatal: FatalCallback,
) -> list[SinkWorker]:
    """Create one (unstarted) worker per configured sink."""
    workers: list[SinkWorker] = []
    if config.export_enabled and config.export_path:
        exporter = FileExporter(config.export_path, report_size=config.report_size)
        workers.append(SinkWorker("export", exporter, logger=logger, on_fatal=on_fatal))
    if config.telegram_enabled and config.telegram_channel and config.telegram_token:
        telegram = TelegramRelay(
            session=relay_session,
            token=config.telegram_token,
            channel=config.telegram_channel,
            timeout=config.relay_timeout,
            logger=logger,
        )
        workers.append(SinkWorker("telegram", telegram, logger=logger, on_fatal=on_fatal))
    if config.webhook_enabled and config.webhook_id is not None and config.webhook_token:
        webhook = DiscordWebhookRelay(
            session=relay_session,
            webhook_id=config.webhook_id,
            token=config.webhook_token,
            timeout=config.relay_timeout,
            logger=logger,
        )
        workers.append(SinkWorker("webhook", webhook, logger=logger, on_fatal=on_fatal))
    return workers


def run_enumerator(
    config: EnumeratorConfig,
    *,
    logger: logging.Logger,
    probe_session: ProbeSession | None = None,
    relay_session: Session | None = None,
    next_candidate: CandidateFactory | None = None,
    stop_event: Event | None = None,
    max_probes: int | None = None,
) -> ScanStatistics:
    """Wire sinks, reporter and prober together and probe until stopped.

    Runs forever unless ``stop_event`` is set or ``max_probes`` is given. A fatal
    sink error stops the prober and is re-raised once sinks are closed.
    """
    stop_event = stop_event or Event()
    fatal: list[EnumeratorError] = []

    def abort(exc: EnumeratorError) -> None:
        fatal.append(exc)
        stop_event.set()

    next_candidate = next_candidate or candidate_factory(config.base_url, config.extension)
    owned_sessions: list[Session] = []
    if probe_session is None:
        probe_session = make_probe_session(config.user_agent, config.concurrency)
        owned_sessions.append(probe_session)
    if relay_session is None:
        relay_session = make_relay_session(config.user_agent)
        owned_sessions.append(relay_session)

    stats = ScanStatistics()
    try:
        workers = build_sinks(
            config, relay_session=relay_session, logger=logger, on_fatal=abort
        )
    except EnumeratorError:
        for session in owned_sessions:
            session.close()
        raise
    for worker in workers:
        worker.start()
    prober = Prober(
        session=probe_session,
        next_candidate=next_candidate,
        stats=stats,
        dispatcher=Dispatcher(list(workers)),
        concurrency=config.concurrency,
        logger=logger,
    )

    status = make_status_line(config.show_progress)
    reporter = Reporter(stats, status.set_description_str)
    reporter_stop = Event()
    reporter_thread = Thread(
        target=reporter.run, args=(reporter_stop,), name="reporter", daemon=True
    )

    logger.info("Starting with %d concurrent requests.", config.concurrency)
    if workers:
        logger.info("Forwarding discoveries to: %s", ", ".join(w.name for w in workers))
    with logging_redirect_tqdm():
        reporter_thread.start()
        try:
            if max_probes is None:
                prober.run_forever(stop_event)
            else:
                prober.run_pass(stop_event, max_probes=max_probes)
        finally:
            reporter_stop.set()
            reporter_thread.join()
            for worker in workers:
                worker.close()
            status.close()
            for session in owned_sessions:
                session.close()

    if fatal:
        raise fatal[0]
    return stats
