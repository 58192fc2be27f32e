"""shared fixtures: tiny hand-made vector tables with known rankings."""

import math

import pytest

from engine import Config, GameSession, VectorStore

# similarity to apple: banana 0.8, cherry 0.5, date 0.1
FRUIT_VECTORS = {
    "apple": [1.0, 0.0],
    "banana": [0.8, 0.6],
    "cherry": [0.5, math.sqrt(0.75)],
    "date": [0.1, math.sqrt(0.99)],
}
FRUITS = ["apple", "banana", "cherry", "date"]


def line_vectors(n: int) -> dict[str, list[float]]:
    """w00..w{n-1}, each 3 degrees further from w00 than the last."""
    vectors = {}
    for i in range(n):
        angle = math.radians(i * 3)
        vectors[f"w{i:02d}"] = [math.cos(angle), math.sin(angle)]
    return vectors


class PickSecret:
    """stands in for random.Random: choice() always returns one word."""

    def __init__(self, word: str):
        self.word = word

    def choice(self, seq):
        assert self.word in seq
        return self.word


@pytest.fixture
def make_session():
    """build a started session over `vectors` with a fixed secret."""

    def _make(vectors, secret, dictionary=None, config=None):
        store = VectorStore(dim=2).load(vectors)
        session = GameSession(store, config=config or Config(embed_dim=2), rng=PickSecret(secret))
        session.new_game(dictionary if dictionary is not None else list(vectors))
        return session

    return _make


@pytest.fixture
def fruit_store():
    return VectorStore(dim=2).load(FRUIT_VECTORS)


@pytest.fixture
def fruit_session(make_session):
    return make_session(FRUIT_VECTORS, "apple", FRUITS)


@pytest.fixture
def line_session(make_session):
    # rank of w{i} is i + 1
    return make_session(line_vectors(30), "w00")
