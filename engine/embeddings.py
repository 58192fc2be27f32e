"""
word vector store.

vectors come from a precomputed table whenever one exists:
- data/word_vectors.json: a JSON object {word: [float, ...]}
- data/words.json + data/embeddings_normed.npy: vocab list and a
  row-aligned matrix (the preprocessed GloVe layout)

if neither is available the store can be filled with *placeholder*
vectors from a fallback generator. those are random noise with no
semantic meaning at all; they only keep the game playable without
real embeddings. never judge ranking quality on fallback vectors.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from .config import Config, DEFAULT_CONFIG
from .errors import DimensionMismatch, VectorTableError
from .text import normalize_word

logger = logging.getLogger(__name__)

Vector = NDArray[np.float32]


class VectorGenerator(Protocol):
    """makes a vector for a word that has none."""

    def __call__(self, word: str, dim: int) -> Vector: ...


class RandomVectorGenerator:
    """
    placeholder generator: uniform noise in [-1, 1).

    the resulting similarities are meaningless. only structural
    properties of a ranking (contiguous ranks, secret at rank 1)
    hold for these vectors.
    """

    def __init__(self, seed: int | None = None):
        self.rng = np.random.default_rng(seed)

    def __call__(self, word: str, dim: int) -> Vector:
        return self.rng.uniform(-1.0, 1.0, size=dim).astype(np.float32)


class VectorStore:
    """
    mapping of normalized word → vector, all of one dimension.

    populated once (load, or the fallback in ensure_initialized) and
    read-only afterwards. no locking: callers that share a store across
    threads must not reload it while others read.
    """

    def __init__(
        self,
        dim: int = DEFAULT_CONFIG.embed_dim,
        fallback: VectorGenerator | None = None,
    ):
        self.dim = dim
        self.fallback = fallback if fallback is not None else RandomVectorGenerator()
        self.source: str | None = None
        self._vectors: dict[str, Vector] = {}

    @classmethod
    def from_config(
        cls,
        config: Config = DEFAULT_CONFIG,
        fallback: VectorGenerator | None = None,
    ) -> "VectorStore":
        """
        build a store from whatever precomputed table the config points at.

        prefers word_vectors.json, then the words.json + .npy pair. if
        neither exists the store is returned empty and will use the
        fallback generator on ensure_initialized().
        """
        if fallback is None:
            fallback = RandomVectorGenerator(config.seed)
        store = cls(dim=config.embed_dim, fallback=fallback)

        if config.vectors_path.exists():
            store.load(config.vectors_path)
        elif config.vocab_path.exists() and config.embeddings_path.exists():
            store.load(config.data_dir, config=config)
        else:
            logger.info("no precomputed vectors found under %s", config.data_dir)
        return store

    # --- population ---

    def load(
        self,
        source: Mapping[str, Sequence[float]] | Path | str,
        config: Config = DEFAULT_CONFIG,
    ) -> "VectorStore":
        """
        (re)populate the store from a precomputed table.

        args:
            source: a {word: vector} mapping, a JSON table file, or a
                directory holding the vocab + .npy pair
            config: supplies the vocab / embeddings filenames for directories

        returns:
            self, so `VectorStore(dim=50).load(path)` reads naturally

        raises:
            DimensionMismatch: a row has the wrong length
            VectorTableError: the file is missing or malformed, or a row
                isn't a flat list of numbers
        """
        if isinstance(source, Mapping):
            items: Iterable[tuple[str, Sequence[float]]] = source.items()
            label = "mapping"
        else:
            path = Path(source)
            if path.is_dir():
                items = _read_npy_pair(path / config.vocab_file, path / config.embeddings_file)
                label = str(path)
            else:
                items = _read_json_table(path).items()
                label = str(path)

        vectors: dict[str, Vector] = {}
        for word, raw in items:
            key = normalize_word(str(word))
            if not key or key in vectors:
                continue
            vectors[key] = self._coerce(raw, key)

        # swap only once every row validated
        self._vectors = vectors
        self.source = label
        logger.info("loaded %d word vectors from %s", len(vectors), label)
        return self

    def ensure_initialized(self, dictionary: Iterable[str]) -> bool:
        """
        make sure the store holds vectors, falling back to placeholders.

        a no-op if anything is loaded already (repeated calls never
        re-populate). otherwise every dictionary word gets a vector from
        the fallback generator.

        returns:
            True if placeholder vectors were generated
        """
        if self._vectors:
            return False

        logger.warning(
            "no word vectors loaded; generating placeholder vectors "
            "(random, no semantic meaning)"
        )
        for word in dictionary:
            key = normalize_word(word)
            if not key or key in self._vectors:
                continue
            self._vectors[key] = self._coerce(self.fallback(key, self.dim), key)

        self.source = "fallback"
        logger.info("generated %d placeholder vectors", len(self._vectors))
        return True

    def clear(self) -> None:
        """drop all vectors so the next load / ensure_initialized starts fresh."""
        self._vectors = {}
        self.source = None

    def _coerce(self, raw: Sequence[float], word: str) -> Vector:
        try:
            vec = np.asarray(raw, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise VectorTableError(f"bad vector for '{word}': {e}") from e
        if vec.ndim != 1:
            raise VectorTableError(f"bad vector for '{word}': expected a flat list, got shape {vec.shape}")
        if vec.shape[0] != self.dim:
            raise DimensionMismatch(self.dim, vec.shape[0], word=word)
        return vec

    # --- lookups ---

    def get(self, word: str) -> Vector | None:
        """vector for a word, or None. never raises."""
        if not isinstance(word, str):
            return None
        return self._vectors.get(normalize_word(word))

    def words(self) -> list[str]:
        return list(self._vectors)

    def items(self) -> Iterator[tuple[str, Vector]]:
        return iter(self._vectors.items())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._vectors

    def __len__(self) -> int:
        return len(self._vectors)

    def __repr__(self) -> str:
        return f"VectorStore(dim={self.dim}, size={len(self)}, source={self.source!r})"


def _read_json_table(path: Path) -> dict[str, Sequence[float]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise VectorTableError(f"can't read vector table {path}: {e}") from e

    if not isinstance(data, dict):
        raise VectorTableError(f"{path}: expected a JSON object of word → vector")
    return data


def _read_npy_pair(
    vocab_path: Path,
    embeddings_path: Path
) -> Iterator[tuple[str, NDArray[np.float32]]]:
    try:
        with open(vocab_path, "r", encoding="utf-8") as f:
            vocab = json.load(f)
        embeddings = np.load(embeddings_path, mmap_mode="r")
    except (OSError, ValueError) as e:
        raise VectorTableError(f"can't read {vocab_path} / {embeddings_path}: {e}") from e

    if embeddings.ndim != 2 or embeddings.shape[0] != len(vocab):
        raise VectorTableError(
            f"shape mismatch: {len(vocab)} words vs embeddings {embeddings.shape}"
        )
    return zip(vocab, embeddings)


def write_vector_table(
    vectors: Mapping[str, Sequence[float]] | VectorStore,
    path: Path,
) -> int:
    """
    persist vectors as a JSON table keyed by normalized word.

    returns:
        number of words written
    """
    pairs = vectors.items()
    table = {normalize_word(w): [float(x) for x in v] for w, v in pairs}

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(table, f, ensure_ascii=False)
    return len(table)


def build_vector_table(
    glove_path: Path,
    dictionary: Iterable[str],
    expected_dim: int = DEFAULT_CONFIG.embed_dim,
) -> dict[str, list[float]]:
    """
    pull the vectors for dictionary words out of a GloVe-format text file.

    each line is `word v1 v2 ... vD`, space separated. lines with the
    wrong number of fields or unparseable floats are skipped. words
    outside the dictionary are dropped; the first line for a word wins.

    args:
        glove_path: path to the .txt vectors
        dictionary: words to keep (normalized before matching)
        expected_dim: embedding dimension to validate

    returns:
        {word: vector} for every dictionary word found in the file
    """
    wanted = {normalize_word(w) for w in dictionary}
    wanted.discard("")
    table: dict[str, list[float]] = {}
    skipped = 0

    logger.info("reading %s", glove_path)
    with open(glove_path, "r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            if line_num % 100_000 == 0:
                logger.info("processed %s lines", f"{line_num:,}")

            # multi-syllable entries contain spaces, so split from the right
            parts = line.rstrip().rsplit(" ", expected_dim)
            if len(parts) != expected_dim + 1:
                skipped += 1
                continue

            word = normalize_word(parts[0])
            if word not in wanted or word in table:
                continue

            try:
                table[word] = [float(x) for x in parts[1:]]
            except ValueError:
                skipped += 1
                continue

    logger.info(
        "matched %d of %d dictionary words (%d malformed lines skipped)",
        len(table), len(wanted), skipped,
    )
    return table
