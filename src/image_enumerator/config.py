"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:65.0) Gecko/20100101 Firefox/65.0"
)
DEFAULT_BASE_URL = "https://i.imgur.com/"
DEFAULT_EXTENSION = ".png"
DEFAULT_CONCURRENCY = 4
DEFAULT_RELAY_TIMEOUT = 15.0


@dataclass(frozen=True)
class EnumeratorConfig:
    """Validated configuration used by the enumeration pipeline."""

    concurrency: int = DEFAULT_CONCURRENCY
    user_agent: str = DEFAULT_USER_AGENT
    base_url: str = DEFAULT_BASE_URL
    extension: str = DEFAULT_EXTENSION
    export_path: str | None = None
    report_size: bool = False
    webhook_id: int | None = None
    webhook_token: str | None = None
    telegram_channel: str | None = None
    telegram_token: str | None = None
    relay_timeout: float = DEFAULT_RELAY_TIMEOUT
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            concurrency=self.concurrency,
            base_url=self.base_url,
            extension=self.extension,
            relay_timeout=self.relay_timeout,
        )

    @property
    def export_enabled(self) -> bool:
        return bool(self.export_path)

    @property
    def webhook_enabled(self) -> bool:
        return self.webhook_id is not None and bool(self.webhook_token)

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_channel and self.telegram_token)
