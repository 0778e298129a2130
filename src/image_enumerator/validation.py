"""Validation and runtime guardrails."""

from __future__ import annotations

from urllib.parse import urlparse

from .errors import ConfigError


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_base_url(base_url: str) -> None:
    """Reject base addresses that cannot prefix a random token."""
    if not is_supported_url(base_url):
        raise ConfigError(f"Base URL must be an absolute http(s) URL: {base_url!r}")
    parsed = urlparse(base_url)
    if parsed.query or parsed.fragment:
        raise ConfigError("Base URL cannot carry a query string or fragment.")
    if not base_url.endswith("/"):
        raise ConfigError("Base URL must end with '/'.")


def validate_runtime_constraints(
    *,
    concurrency: int,
    base_url: str,
    extension: str,
    relay_timeout: float,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if concurrency < 1:
        raise ConfigError("--concurrent must be >= 1.")
    validate_base_url(base_url)
    if not extension or any(char in extension for char in "/?# "):
        raise ConfigError("--extension must be a non-empty path suffix such as '.png'.")
    if relay_timeout <= 0:
        raise ConfigError("--relay-timeout must be > 0.")
