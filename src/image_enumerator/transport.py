"""HTTP session factories."""

from __future__ import annotations

from requests import Session
from requests.adapters import HTTPAdapter


def _mount(session: Session, adapter: HTTPAdapter) -> Session:
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def make_probe_session(user_agent: str, pool_size: int) -> Session:
    """Create the session shared by probe workers.

    The connection pool matches the concurrency bound so every outstanding
    check can hold a keep-alive connection. Failed probes are never retried.
    """
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size, max_retries=0)
    return _mount(session, adapter)


def make_relay_session(user_agent: str) -> Session:
    """Create a session for chat relay notifications (best-effort, no retries)."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    return _mount(session, HTTPAdapter(max_retries=0))
