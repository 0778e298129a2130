"""Chat relay clients for discovered images."""

from __future__ import annotations

import logging

from requests import Response, Session
from requests.exceptions import RequestException

from .errors import RelayError
from .models import Discovery

TELEGRAM_API = "https://api.telegram.org"
DISCORD_WEBHOOK_API = "https://discord.com/api/webhooks"


def _check_status(response: Response, relay: str) -> None:
    if not 200 <= response.status_code < 300:
        raise RelayError(f"{relay} responded with HTTP {response.status_code}")


class TelegramRelay:
    """Send each discovery to a Telegram channel as a photo."""

    def __init__(
        self,
        *,
        session: Session,
        token: str,
        channel: str,
        timeout: float,
        logger: logging.Logger,
    ) -> None:
        self._session = session
        self._url = f"{TELEGRAM_API}/bot{token}/sendPhoto"
        self._channel = channel
        self._timeout = timeout
        self._logger = logger

    def send(self, image_url: str) -> None:
        """Deliver one photo, raising RelayError on any failure."""
        try:
            response = self._session.get(
                self._url,
                params={"chat_id": self._channel, "photo": image_url},
                timeout=self._timeout,
            )
        except RequestException as exc:
            raise RelayError(f"telegram request failed: {exc}") from exc
        _check_status(response, "telegram")

    def consume(self, discovery: Discovery) -> None:
        try:
            self.send(discovery.url)
        except RelayError as exc:
            self._logger.debug("Telegram relay dropped %s: %s", discovery.url, exc)


class DiscordWebhookRelay:
    """Post each discovery to a Discord webhook as an embedded image."""

    def __init__(
        self,
        *,
        session: Session,
        webhook_id: int,
        token: str,
        timeout: float,
        logger: logging.Logger,
    ) -> None:
        self._session = session
        self._url = f"{DISCORD_WEBHOOK_API}/{webhook_id}/{token}"
        self._timeout = timeout
        self._logger = logger

    def send(self, image_url: str) -> None:
        """Execute the webhook once, raising RelayError on any failure."""
        payload = {"embeds": [{"image": {"url": image_url}}]}
        try:
            response = self._session.post(self._url, json=payload, timeout=self._timeout)
        except RequestException as exc:
            raise RelayError(f"webhook request failed: {exc}") from exc
        _check_status(response, "webhook")

    def consume(self, discovery: Discovery) -> None:
        try:
            self.send(discovery.url)
        except RelayError as exc:
            self._logger.debug("Webhook relay dropped %s: %s", discovery.url, exc)
