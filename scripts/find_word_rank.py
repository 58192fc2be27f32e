#!/usr/bin/env python3
"""
find the rank of a word for a given secret.

usage:
    python scripts/find_word_rank.py --secret "con mèo" --word "con chó"
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import engine
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import Config, VectorStore, compute_ranks, load_dictionary
from engine.errors import SecretVectorMissing
from engine.text import normalize_word


def main():
    parser = argparse.ArgumentParser(description="find word rank for a secret")
    parser.add_argument("--secret", type=str, required=True, help="secret word")
    parser.add_argument("--word", type=str, required=True, help="word to find")
    parser.add_argument("--dictionary", type=Path, default=None, help="dictionary file")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="data directory")

    args = parser.parse_args()

    config = Config(data_dir=args.data_dir)
    if args.dictionary:
        config.dictionary_file = args.dictionary

    words = load_dictionary(config.dictionary_path)
    store = VectorStore.from_config(config)
    if len(store) == 0:
        print(f"error: no precomputed vectors under {config.data_dir}")
        print("run scripts/build_vectors.py first!")
        sys.exit(1)

    try:
        ranking = compute_ranks(args.secret, words, store)
    except SecretVectorMissing as e:
        print(f"error: {e}")
        sys.exit(1)

    search_word = normalize_word(args.word)
    word_rank = ranking.rank_of(search_word)
    if word_rank is None:
        print(f"'{args.word}' has no rank (not in dictionary or no vector)")
        sys.exit(1)

    size = len(ranking)
    print(f"secret word: {ranking.secret}")
    print(f"search word: '{search_word}'")
    print(f"rank: {word_rank:,} (out of {size:,} words)")
    print(f"similarity: {ranking.similarity_of(search_word):.4f}")

    # calculate percentile
    if size > 1:
        percentile = (1 - (word_rank - 1) / (size - 1)) * 100
        print(f"percentile: {percentile:.2f}%")


if __name__ == "__main__":
    main()
