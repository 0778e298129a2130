"""CLI entrypoint for image-enumerator."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONCURRENCY,
    DEFAULT_EXTENSION,
    DEFAULT_RELAY_TIMEOUT,
    DEFAULT_USER_AGENT,
    EnumeratorConfig,
)
from .errors import ConfigError, ExportError
from .logging_utils import configure_logging, get_logger
from .pipeline import run_enumerator


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        prog="image-enumerator",
        description="Probe random image URLs and forward the ones that exist.",
    )
    parser.add_argument(
        "-c",
        "--concurrent",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help="Maximum amount of concurrent requests at a time.",
    )
    parser.add_argument("-i", "--id", dest="webhook_id", type=int, help="Discord webhook ID.")
    parser.add_argument("-t", "--token", dest="webhook_token", help="Discord webhook token.")
    parser.add_argument(
        "-k",
        "--tg-channel",
        dest="tg_channel",
        metavar="CHANNEL",
        help="Telegram channel ID (negative IDs such as -100123 are accepted).",
    )
    parser.add_argument("-l", "--tg-token", dest="tg_token", help="Telegram bot token.")
    parser.add_argument(
        "-e", "--export", dest="export_file", help="File where found links will be appended."
    )
    parser.add_argument(
        "-u",
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="Value of the User-Agent header used in all requests.",
    )
    parser.add_argument(
        "-s",
        "--report-size",
        action="store_true",
        help="Report the image size when exporting to a file.",
    )
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL, help="Address random tokens are appended to."
    )
    parser.add_argument(
        "--extension", default=DEFAULT_EXTENSION, help="Suffix added after each token."
    )
    parser.add_argument(
        "--relay-timeout",
        type=float,
        default=DEFAULT_RELAY_TIMEOUT,
        help="Timeout in seconds for chat relay calls.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable the live status line.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def namespace_to_config(args: argparse.Namespace) -> EnumeratorConfig:
    """Convert CLI args to validated EnumeratorConfig."""
    logger = get_logger()
    if (args.webhook_id is None) != (args.webhook_token is None):
        logger.warning("Discord webhook needs both --id and --token; webhook disabled.")
    if (args.tg_channel is None) != (args.tg_token is None):
        logger.warning("Telegram relay needs both --tg-channel and --tg-token; relay disabled.")
    if args.report_size and not args.export_file:
        logger.warning("--report-size has no effect without --export.")

    return EnumeratorConfig(
        concurrency=args.concurrent,
        user_agent=args.user_agent,
        base_url=args.base_url,
        extension=args.extension,
        export_path=args.export_file,
        report_size=bool(args.report_size),
        webhook_id=args.webhook_id,
        webhook_token=args.webhook_token,
        telegram_channel=args.tg_channel,
        telegram_token=args.tg_token,
        relay_timeout=args.relay_timeout,
        show_progress=not args.no_progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        run_enumerator(config, logger=logger)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    except ExportError as exc:
        logger.error("Export failed: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
