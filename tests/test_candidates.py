import random
import string

import pytest

from image_enumerator.candidates import (
    ALPHABET,
    TOKEN_LENGTH,
    build_candidate,
    candidate_factory,
    iter_candidates,
    random_token,
)
from image_enumerator.errors import ConfigError


def test_alphabet_is_alphanumeric() -> None:
    assert set(ALPHABET) == set(string.ascii_letters + string.digits)
    assert TOKEN_LENGTH == 7


def test_candidates_have_seven_alphanumeric_characters() -> None:
    generate = candidate_factory("https://i.example.com/", ".png")
    for _ in range(200):
        url = generate()
        assert url.startswith("https://i.example.com/")
        assert url.endswith(".png")
        token = url[len("https://i.example.com/") : -len(".png")]
        assert len(token) == 7
        assert set(token) <= set(ALPHABET)


def test_consecutive_candidates_differ() -> None:
    generate = candidate_factory("https://i.example.com/", ".png")
    assert generate() != generate()


def test_seeded_rng_is_reproducible() -> None:
    first = random_token(rng=random.Random(7))
    second = random_token(rng=random.Random(7))
    assert first == second


def test_build_candidate_concatenates_parts() -> None:
    assert build_candidate("https://h/", "abcDEF1", ".jpg") == "https://h/abcDEF1.jpg"


@pytest.mark.parametrize("base_url", ["ftp://h/", "not a url", "https://h/x?y=1", "https://h"])
def test_malformed_base_url_fails_at_construction(base_url: str) -> None:
    with pytest.raises(ConfigError):
        candidate_factory(base_url, ".png")


def test_iter_candidates_is_endless() -> None:
    stream = iter_candidates(candidate_factory("https://h/", ".png"))
    urls = [next(stream) for _ in range(50)]
    assert len(urls) == 50
    assert len(set(urls)) > 1
