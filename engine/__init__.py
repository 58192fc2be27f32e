"""
semantle game engine

ranks a dictionary by embedding similarity to a hidden secret word,
scores guesses by rank, and suggests hints / tips.
"""

from .config import Config
from .embeddings import VectorStore, RandomVectorGenerator, build_vector_table, write_vector_table
from .dictionary import load_dictionary
from .similarity import cosine_similarity
from .rankings import Ranking, RankEntry, compute_ranks
from .session import GameSession, GuessRecord
from .hints import HintAdvisor, Suggestion
from .service import GameService
from .errors import EngineError

__all__ = [
    "Config",
    "VectorStore",
    "RandomVectorGenerator",
    "build_vector_table",
    "write_vector_table",
    "load_dictionary",
    "cosine_similarity",
    "Ranking",
    "RankEntry",
    "compute_ranks",
    "GameSession",
    "GuessRecord",
    "HintAdvisor",
    "Suggestion",
    "GameService",
    "EngineError",
]
