"""word normalization shared by the store, ranker and session."""


def normalize_word(word: str) -> str:
    """
    canonical form of a word: trimmed and lowercased.

    idempotent, so it's safe to call on already-normalized input.
    """
    return word.strip().lower()
