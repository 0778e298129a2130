"""Random candidate generation."""

from __future__ import annotations

import random
import string
from collections.abc import Callable, Iterator

from .validation import validate_base_url

ALPHABET = string.ascii_letters + string.digits
TOKEN_LENGTH = 7

CandidateFactory = Callable[[], str]


def random_token(length: int = TOKEN_LENGTH, *, rng: random.Random | None = None) -> str:
    """Draw an alphanumeric token; not suitable for anything security related."""
    source = rng or random
    return "".join(source.choices(ALPHABET, k=length))


def build_candidate(base_url: str, token: str, extension: str) -> str:
    return f"{base_url}{token}{extension}"


def candidate_factory(
    base_url: str, extension: str, *, rng: random.Random | None = None
) -> CandidateFactory:
    """Validate the base address once and return a stateless candidate factory.

    Every call of the returned function is independent: there is no cursor to
    share between probe workers and nothing to rewind.
    """
    validate_base_url(base_url)

    def generate() -> str:
        return build_candidate(base_url, random_token(rng=rng), extension)

    return generate


def iter_candidates(factory: CandidateFactory) -> Iterator[str]:
    """Endless stream of fresh candidates."""
    while True:
        yield factory()
