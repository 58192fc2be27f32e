"""
dictionary loading.

the dictionary is a plain UTF-8 file with one word (or multi-syllable
entry) per line. blank lines are ignored, everything is normalized,
and duplicates keep their first position, which matters because
ranking ties are broken by dictionary order.
"""

from collections.abc import Iterable
from pathlib import Path

from .text import normalize_word


def dedupe_words(words: Iterable[str]) -> list[str]:
    """normalize words, dropping blanks and later duplicates."""
    seen: set[str] = set()
    out: list[str] = []
    for word in words:
        w = normalize_word(word)
        if not w or w in seen:
            continue
        seen.add(w)
        out.append(w)
    return out


def load_dictionary(path: Path) -> list[str]:
    """
    read a one-word-per-line dictionary file.

    returns the normalized, de-duplicated words in file order.
    """
    with open(path, "r", encoding="utf-8") as f:
        return dedupe_words(f)
