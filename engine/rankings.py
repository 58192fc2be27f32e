"""
rank every dictionary word against a secret.

this is the core semantle logic: score all words by cosine similarity
to the secret and number them 1..K, closest first. the secret itself
is always rank 1.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .embeddings import VectorStore
from .errors import SecretVectorMissing
from .similarity import cosine_similarities
from .text import normalize_word


@dataclass(frozen=True)
class RankEntry:
    word: str
    rank: int


class Ranking:
    """
    total order of the vectorizable dictionary words for one secret.

    entries are kept in rank order, so entries[i].rank == i + 1.
    """

    def __init__(
        self,
        secret: str,
        entries: list[RankEntry],
        scores: NDArray[np.float64] | None = None
    ):
        self.secret = secret
        self.entries: tuple[RankEntry, ...] = tuple(entries)
        # similarity of entries[i] to the secret (for debugging / tools)
        self.scores = scores if scores is not None else np.zeros(len(entries))
        self._by_word = {e.word: e for e in self.entries}

    def rank_of(self, word: str) -> int | None:
        """rank of a word, or None if it wasn't ranked."""
        entry = self._by_word.get(normalize_word(word))
        return entry.rank if entry is not None else None

    def similarity_of(self, word: str) -> float | None:
        rank = self.rank_of(word)
        return float(self.scores[rank - 1]) if rank is not None else None

    def entry_at_rank(self, rank: int) -> RankEntry | None:
        if 1 <= rank <= len(self.entries):
            return self.entries[rank - 1]
        return None

    def top(self, n: int) -> list[RankEntry]:
        return list(self.entries[:max(0, n)])

    def __getitem__(self, index: int) -> RankEntry:
        return self.entries[index]

    def __iter__(self) -> Iterator[RankEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._by_word

    def __repr__(self) -> str:
        return f"Ranking(secret={self.secret!r}, size={len(self)})"


def compute_ranks(
    secret: str,
    dictionary: Iterable[str],
    store: VectorStore
) -> Ranking:
    """
    rank all dictionary words by similarity to the secret.

    args:
        secret: the secret word
        dictionary: words in their canonical order (ties keep this order)
        store: vector source; words without a vector are left out

    returns:
        Ranking with ranks 1..K, K = number of words that have a vector
        (the secret counts even when the dictionary lacks it)

    raises:
        SecretVectorMissing: the secret has no vector
    """
    secret = normalize_word(secret)
    secret_vec = store.get(secret)
    if secret_vec is None:
        raise SecretVectorMissing(secret)

    # --- collect vectorizable words in dictionary order ---

    words: list[str] = []
    rows: list[NDArray[np.float32]] = []
    seen: set[str] = set()
    for raw in dictionary:
        word = normalize_word(raw)
        if word in seen:
            continue
        seen.add(word)
        vec = store.get(word)
        if vec is None:
            continue
        words.append(word)
        rows.append(vec)

    # a secret outside the dictionary still takes rank 1
    if secret not in seen:
        words.append(secret)
        rows.append(secret_vec)

    # --- score and order ---

    scores = cosine_similarities(np.stack(rows), secret_vec)

    # stable sort on negated scores: highest first, ties by dictionary position
    order = np.argsort(-scores, kind="stable")

    # pin the secret to rank 1 even if rounding (or a duplicate vector)
    # puts another word level with it
    secret_idx = words.index(secret)
    order = np.concatenate(([secret_idx], order[order != secret_idx]))

    entries = [RankEntry(words[i], rank) for rank, i in enumerate(order, 1)]
    return Ranking(secret, entries, scores[order])
