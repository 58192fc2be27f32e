"""
hint and tip selection.

both suggest a word the player hasn't tried yet, chosen from the
ranking, without giving away the secret:

- hint: coarse. with no guesses it reveals a word far out (rank 1000,
  or half the ranking for small dictionaries); afterwards it reveals
  the closest unguessed word that beats the player's best rank.
- tip: fine. it aims to close a quarter of the gap between the
  player's best rank and the secret.

the selectors are pure functions over a Ranking; HintAdvisor adds the
session checks. neither touches the guess history: submitting the
suggestion is the caller's decision.
"""

import logging
import math
import numbers
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from .config import Config, DEFAULT_CONFIG
from .errors import EmptyRanking, InvalidInput
from .rankings import RankEntry, Ranking
from .session import GameSession

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_ALREADY_WON = "already_won"
STATUS_EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Suggestion:
    """result of a hint / tip request."""

    kind: str
    status: str
    word: str | None = None
    rank: int | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status != STATUS_EXHAUSTED

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            self.kind: self.word,
            "rank": self.rank,
        }
        if self.message:
            payload["message"] = self.message
        return payload


def select_hint(
    ranking: Ranking,
    guessed: Collection[str],
    best_rank: int | None,
    anchor_rank: int = DEFAULT_CONFIG.hint_anchor_rank,
) -> RankEntry | None:
    """
    pick the hint word.

    args:
        ranking: the active ranking
        guessed: words already guessed
        best_rank: best rank guessed so far, None if nothing ranked yet
        anchor_rank: rank to reveal when there's nothing to improve on

    returns:
        the entry to suggest, or None if no word qualifies
    """
    secret = ranking.secret
    size = len(ranking)
    pick: RankEntry | None = None

    if best_rank is None:
        target = min(anchor_rank, size // 2)
        pick = ranking.entry_at_rank(target)
        if pick is None and size > 1:
            pick = ranking[min(target, size - 1)]
        # in tiny rankings the anchor can land on the secret
        if pick is not None and (pick.word == secret or pick.word in guessed):
            pick = None
    else:
        # first unguessed word that beats the best guess; the secret
        # only if it's the sole improving word left
        secret_entry: RankEntry | None = None
        for entry in ranking:
            if entry.rank >= best_rank:
                break
            if entry.word in guessed:
                continue
            if entry.word == secret:
                secret_entry = entry
                continue
            pick = entry
            break
        if pick is None:
            pick = secret_entry

    if pick is None and size > 1:
        # nothing better left: next unguessed word, even if it's worse
        pick = _first_unguessed(ranking, guessed)

    return pick


def select_tip(
    ranking: Ranking,
    guessed: Collection[str],
    best_rank: int,
    fraction: float = DEFAULT_CONFIG.tip_fraction,
) -> RankEntry | None:
    """
    pick the tip word.

    aims for target = best_rank - max(1, floor(best_rank * fraction)),
    never closer than rank 2. among unguessed non-secret words that
    beat best_rank, the one nearest the target wins; on equal distance
    the earlier one in ranking order is kept.

    args:
        ranking: the active ranking
        guessed: words already guessed
        best_rank: the player's current best rank (>= 1)
        fraction: share of the gap to close

    returns:
        the entry to suggest, or None if no word qualifies
    """
    secret = ranking.secret
    improvement = max(1, math.floor(best_rank * fraction))
    target = max(2, best_rank - improvement)

    candidates = [
        entry for entry in ranking
        if entry.rank < best_rank
        and entry.rank >= 2
        and entry.word != secret
        and entry.word not in guessed
    ]
    if candidates:
        return min(candidates, key=lambda e: abs(e.rank - target))

    for entry in ranking:
        if entry.rank < best_rank and entry.word != secret and entry.word not in guessed:
            return entry

    return _first_unguessed(ranking, guessed)


def _first_unguessed(ranking: Ranking, guessed: Collection[str]) -> RankEntry | None:
    for entry in ranking:
        if entry.word != ranking.secret and entry.word not in guessed:
            return entry
    return None


class HintAdvisor:
    """hint / tip requests against a live session."""

    def __init__(self, config: Config = DEFAULT_CONFIG):
        self.config = config

    def hint(self, session: GameSession) -> Suggestion:
        """
        suggest a hint word for the session's current state.

        raises:
            NotInitialized: no game has been started
            EmptyRanking: the game ranked no words
        """
        ranking = self._ranking(session)
        best = session.best_rank
        if best == 1:
            return Suggestion("hint", STATUS_ALREADY_WON, message="already found the word")

        entry = select_hint(
            ranking,
            session.guessed_words,
            best,
            anchor_rank=self.config.hint_anchor_rank,
        )
        return self._wrap("hint", entry)

    def tip(self, session: GameSession, best_rank: int | None = None) -> Suggestion:
        """
        suggest a tip word.

        args:
            session: the live session
            best_rank: the caller's idea of the best rank so far. defaults
                to the best ranked guess, or config.tip_default_rank if
                nothing has been ranked yet

        raises:
            NotInitialized, EmptyRanking, InvalidInput (best_rank < 1)
        """
        ranking = self._ranking(session)
        if best_rank is not None:
            if isinstance(best_rank, bool) or not isinstance(best_rank, numbers.Integral) or best_rank < 1:
                raise InvalidInput(f"best rank must be a positive integer, got {best_rank!r}")
            best_rank = int(best_rank)

        history_best = session.best_rank
        if best_rank == 1 or history_best == 1:
            return Suggestion("tip", STATUS_ALREADY_WON, message="already found the word")

        if best_rank is None:
            best_rank = history_best if history_best is not None else self.config.tip_default_rank

        entry = select_tip(
            ranking,
            session.guessed_words,
            best_rank,
            fraction=self.config.tip_fraction,
        )
        return self._wrap("tip", entry)

    @staticmethod
    def _ranking(session: GameSession) -> Ranking:
        ranking = session.ranking
        if len(ranking) == 0:
            raise EmptyRanking()
        return ranking

    @staticmethod
    def _wrap(kind: str, entry: RankEntry | None) -> Suggestion:
        if entry is None:
            logger.info("no %s available", kind)
            return Suggestion(kind, STATUS_EXHAUSTED, message=f"could not determine a {kind}")
        logger.debug("%s: %r (rank %d)", kind, entry.word, entry.rank)
        return Suggestion(kind, STATUS_OK, word=entry.word, rank=entry.rank)
