"""
one game: the secret, its ranking, and the player's guesses.

a session starts uninitialized. new_game() builds a complete game
(secret, ranking, empty history) and only then replaces the previous
one, so a failed new game leaves the old game playable.
"""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .config import Config, DEFAULT_CONFIG
from .dictionary import dedupe_words
from .embeddings import VectorStore
from .errors import (
    DuplicateGuess,
    InvalidInput,
    NoVectorizableWords,
    NotInitialized,
    UnknownWord,
)
from .rankings import Ranking, compute_ranks
from .text import normalize_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessRecord:
    """a guessed word and its rank (None = in the dictionary but unranked)."""

    word: str
    rank: int | None

    def to_dict(self) -> dict[str, Any]:
        return {"word": self.word, "rank": self.rank}


def _history_key(record: GuessRecord) -> tuple[bool, int]:
    # unranked guesses sort after every ranked one
    return (record.rank is None, record.rank or 0)


@dataclass(frozen=True)
class GuessOutcome:
    word: str
    rank: int | None
    is_correct: bool
    history: tuple[GuessRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "word": self.word,
            "rank": self.rank,
            "is_correct": self.is_correct,
            "history": [g.to_dict() for g in self.history],
        }


@dataclass(frozen=True)
class SessionSnapshot:
    history: tuple[GuessRecord, ...] = ()
    total_words: int = 0
    active: bool = False
    won: bool = False
    ranking_size: int = 0

    @property
    def guess_count(self) -> int:
        return len(self.history)

    def to_dict(self) -> dict[str, Any]:
        return {
            "history": [g.to_dict() for g in self.history],
            "total_words": self.total_words,
            "game_active": self.active,
            "won": self.won,
        }


@dataclass
class _Game:
    secret: str
    dictionary: list[str]
    words: frozenset[str]
    ranking: Ranking
    history: list[GuessRecord] = field(default_factory=list)
    guessed: set[str] = field(default_factory=set)
    won: bool = False


class GameSession:
    """
    holds at most one active game.

    not thread-safe: one mutating call at a time. GameService wraps
    a session in a lock for callers that need that.
    """

    def __init__(
        self,
        store: VectorStore,
        config: Config = DEFAULT_CONFIG,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self._game: _Game | None = None

    # --- mutations ---

    def new_game(self, dictionary: Iterable[str]) -> SessionSnapshot:
        """
        start a fresh game over `dictionary`.

        fills the vector store if it's empty, picks a secret uniformly
        among words that have a vector, ranks the whole dictionary and
        clears the history.

        raises:
            NoVectorizableWords: no dictionary word has a vector
            SecretVectorMissing: (from compute_ranks) should not happen
                since the secret is drawn from vectorizable words
        """
        words = dedupe_words(dictionary)
        self.store.ensure_initialized(words)

        candidates = [w for w in words if w in self.store]
        if not candidates:
            raise NoVectorizableWords()

        secret = self.rng.choice(candidates)
        ranking = compute_ranks(secret, words, self.store)

        self._game = _Game(
            secret=secret,
            dictionary=words,
            words=frozenset(words),
            ranking=ranking,
        )
        logger.info(
            "new game: %d dictionary words, %d ranked", len(words), len(ranking)
        )
        return self.snapshot()

    def submit_guess(self, word: str) -> GuessOutcome:
        """
        record a guess and report its rank.

        checks, in order: a game is active, the word is non-empty, it's
        in the dictionary, and it hasn't been guessed. a failed check
        raises and leaves the history untouched.

        raises:
            NotInitialized, InvalidInput, UnknownWord, DuplicateGuess
        """
        game = self._require_game()

        if not isinstance(word, str):
            raise InvalidInput("guess must be a string")
        guess = normalize_word(word)
        if not guess:
            raise InvalidInput("guess is empty")
        if guess not in game.words:
            raise UnknownWord(guess)
        if guess in game.guessed:
            raise DuplicateGuess(guess)

        rank = game.ranking.rank_of(guess)
        game.history.append(GuessRecord(guess, rank))
        game.guessed.add(guess)
        game.history.sort(key=_history_key)

        is_correct = guess == game.secret
        if is_correct:
            game.won = True
        logger.debug("guess %r -> rank %s", guess, rank)

        return GuessOutcome(
            word=guess,
            rank=rank,
            is_correct=is_correct,
            history=tuple(game.history),
        )

    # --- queries ---

    def snapshot(self) -> SessionSnapshot:
        game = self._game
        if game is None:
            return SessionSnapshot()
        return SessionSnapshot(
            history=tuple(game.history),
            total_words=len(game.dictionary),
            active=True,
            won=game.won,
            ranking_size=len(game.ranking),
        )

    @property
    def is_active(self) -> bool:
        return self._game is not None

    @property
    def won(self) -> bool:
        return self._game is not None and self._game.won

    @property
    def secret(self) -> str:
        return self._require_game().secret

    @property
    def ranking(self) -> Ranking:
        return self._require_game().ranking

    @property
    def history(self) -> tuple[GuessRecord, ...]:
        return tuple(self._require_game().history)

    @property
    def best_rank(self) -> int | None:
        """best (lowest) rank guessed so far, None if nothing ranked yet."""
        history = self._require_game().history
        if history and history[0].rank is not None:
            return history[0].rank
        return None

    @property
    def guessed_words(self) -> frozenset[str]:
        return frozenset(self._require_game().guessed)

    def has_guessed(self, word: str) -> bool:
        return normalize_word(word) in self._require_game().guessed

    def _require_game(self) -> _Game:
        if self._game is None:
            raise NotInitialized()
        return self._game
