"""
in-process game service: the four operations a transport layer calls.

    new_game(dictionary)  -> {"success", "total_words"}
    submit_guess(word)    -> {"success", "word", "rank", "is_correct", "history"}
    get_hint()            -> {"success", "hint", "rank"}
    get_tip(best_rank)    -> {"success", "tip", "rank"}

every call runs under one lock around the whole session, so concurrent
callers (e.g. simultaneous http requests) see consistent state. failures
raise EngineError subclasses; `err.to_dict()` gives the tagged payload.
"""

import logging
import random
import threading
from collections.abc import Iterable
from typing import Any

from .config import Config, DEFAULT_CONFIG
from .dictionary import load_dictionary
from .embeddings import VectorStore
from .hints import HintAdvisor, Suggestion
from .session import GameSession

logger = logging.getLogger(__name__)


class GameService:
    """one game behind a lock, plus the hint advisor."""

    def __init__(
        self,
        config: Config | None = None,
        store: VectorStore | None = None,
        rng: random.Random | None = None,
    ):
        config = config if config is not None else DEFAULT_CONFIG
        self.config = config
        self.store = store if store is not None else VectorStore.from_config(config)
        self.session = GameSession(self.store, config=config, rng=rng)
        self.advisor = HintAdvisor(config)
        self._lock = threading.Lock()

    def new_game(self, dictionary: Iterable[str] | None = None) -> dict[str, Any]:
        """
        start a new game.

        args:
            dictionary: words to play with (default: read config.dictionary_path)
        """
        if dictionary is None:
            dictionary = load_dictionary(self.config.dictionary_path)
        with self._lock:
            snapshot = self.session.new_game(dictionary)
        return {"success": True, "total_words": snapshot.total_words}

    def submit_guess(self, word: str) -> dict[str, Any]:
        with self._lock:
            return self.session.submit_guess(word).to_dict()

    def get_hint(self) -> dict[str, Any]:
        with self._lock:
            return self.advisor.hint(self.session).to_dict()

    def get_tip(self, best_rank: int | None = None) -> dict[str, Any]:
        with self._lock:
            return self.advisor.tip(self.session, best_rank).to_dict()

    def state(self) -> dict[str, Any]:
        """history, dictionary size and whether a game is running."""
        with self._lock:
            return self.session.snapshot().to_dict()

    # --- hint / tip followed by a guess, like the web client does ---

    def accept_hint(self) -> dict[str, Any]:
        with self._lock:
            return self._accept(self.advisor.hint(self.session))

    def accept_tip(self, best_rank: int | None = None) -> dict[str, Any]:
        with self._lock:
            return self._accept(self.advisor.tip(self.session, best_rank))

    def _accept(self, suggestion: Suggestion) -> dict[str, Any]:
        result: dict[str, Any] = {"suggestion": suggestion.to_dict(), "guess": None}
        if suggestion.word is not None:
            result["guess"] = self.session.submit_guess(suggestion.word).to_dict()
        return result
