"""
error kinds raised by the engine.

every failure has its own class and a stable `code`, so callers
(a web layer, the terminal game) can tell them apart without
parsing messages. user-input errors are marked recoverable: the
session is left exactly as it was.
"""

from typing import Any


class EngineError(Exception):
    """base class for all engine failures."""

    code: str = "engine_error"
    recoverable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """tagged failure payload for transport layers."""
        return {"success": False, "error": self.code, "message": str(self)}


# --- data / programming errors ---


class DimensionMismatch(EngineError, ValueError):
    """two vectors (or a vector and its store) disagree on length."""

    code = "dimension_mismatch"

    def __init__(self, expected: int, actual: int, word: str | None = None):
        self.expected = expected
        self.actual = actual
        self.word = word
        where = f" for '{word}'" if word is not None else ""
        super().__init__(f"vector length mismatch{where}: expected {expected}, got {actual}")


class VectorTableError(EngineError):
    """a precomputed vector table could not be read."""

    code = "vector_table_error"


class SecretVectorMissing(EngineError):
    """the secret word has no vector, so nothing can be ranked."""

    code = "secret_vector_missing"

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"no vector for secret word '{word}'")


class NoVectorizableWords(EngineError):
    """none of the dictionary words has a vector."""

    code = "no_vectorizable_words"

    def __init__(self, message: str = "no words with vectors available"):
        super().__init__(message)


class EmptyRanking(EngineError):
    """the active game has no ranked words to suggest from."""

    code = "empty_ranking"

    def __init__(self, message: str = "ranks not calculated"):
        super().__init__(message)


# --- session state ---


class NotInitialized(EngineError):
    """a session operation was called before any game was started."""

    code = "not_initialized"

    def __init__(self, message: str = "game not initialized"):
        super().__init__(message)


# --- user input (always recoverable) ---


class InvalidInput(EngineError):
    code = "invalid_input"
    recoverable = True


class UnknownWord(EngineError):
    code = "unknown_word"
    recoverable = True

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"'{word}' is not in the dictionary")


class DuplicateGuess(EngineError):
    code = "duplicate_guess"
    recoverable = True

    def __init__(self, word: str):
        self.word = word
        super().__init__(f"'{word}' was already guessed")
