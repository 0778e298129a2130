"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class ProbeSession(Protocol):
    """Subset of ``requests.Session`` the prober relies on."""

    def head(self, url: str, **kwargs: Any) -> Any:
        """Issue an existence check for a URL."""


class Sink(Protocol):
    """Contract for fan-out targets: never blocks, never raises."""

    def deliver(self, discovery: Discovery) -> bool:
        """Offer one discovery; return False when it was dropped."""


class DiscoveryHandler(Protocol):
    """Contract for the per-sink side effect run on the sink's own thread."""

    def consume(self, discovery: Discovery) -> None:
        """Record or forward one discovery."""


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of one completed existence check."""

    url: str
    success: bool
    size: int | None = None


@dataclass(frozen=True)
class Discovery:
    """A candidate confirmed to exist, with its declared size when known."""

    url: str
    size: int | None = None

    @classmethod
    def from_outcome(cls, outcome: ProbeOutcome) -> Discovery:
        return cls(url=outcome.url, size=outcome.size)
