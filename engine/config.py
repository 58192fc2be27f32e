"""
configuration constants for the semantle engine.

all the magic numbers live here so they're easy to tweak.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """engine configuration, tweak as needed."""

    # embedding dimensions (also the size of fallback vectors)
    embed_dim: int = 100

    # hint: with no guesses yet, reveal the word at this rank
    # (or half the ranking, whichever is smaller)
    hint_anchor_rank: int = 1000

    # tip: assumed best rank when the player hasn't guessed anything
    tip_default_rank: int = 1000

    # tip: aim to close this fraction of the gap to the secret
    tip_fraction: float = 0.25

    # seed for secret selection and fallback vectors (None = nondeterministic)
    seed: int | None = None

    # paths (relative to project root by default)
    data_dir: Path = Path("data")

    # precomputed word -> vector table (JSON object)
    vectors_file: str = "word_vectors.json"

    # preprocessed pair: vocab list + row-aligned embedding matrix
    vocab_file: str = "words.json"
    embeddings_file: str = "embeddings_normed.npy"

    # dictionary, one word per line (lives at the project root)
    dictionary_file: Path = Path("Viet39K.txt")

    def __post_init__(self):
        """ensure paths are Path objects."""
        self.data_dir = Path(self.data_dir)
        self.dictionary_file = Path(self.dictionary_file)

    @property
    def vectors_path(self) -> Path:
        return self.data_dir / self.vectors_file

    @property
    def vocab_path(self) -> Path:
        return self.data_dir / self.vocab_file

    @property
    def embeddings_path(self) -> Path:
        return self.data_dir / self.embeddings_file

    @property
    def dictionary_path(self) -> Path:
        return self.dictionary_file


# default config instance
DEFAULT_CONFIG = Config()
