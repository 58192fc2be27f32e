#!/usr/bin/env python3
"""
display the top N words for a given secret.
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import engine
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import Config, VectorStore, compute_ranks, load_dictionary
from engine.errors import SecretVectorMissing


def main():
    parser = argparse.ArgumentParser(description="display top words for a secret")
    parser.add_argument("--secret", type=str, required=True, help="secret word")
    parser.add_argument("--top", type=int, default=50, help="number of top words to show")
    parser.add_argument("--dictionary", type=Path, default=None, help="dictionary file")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="data directory")

    args = parser.parse_args()

    config = Config(data_dir=args.data_dir)
    if args.dictionary:
        config.dictionary_file = args.dictionary

    print("loading words...")
    words = load_dictionary(config.dictionary_path)
    print(f"  loaded {len(words):,} words")

    print("loading vectors...")
    store = VectorStore.from_config(config)
    if len(store) == 0:
        print(f"error: no precomputed vectors under {config.data_dir}")
        print("run scripts/build_vectors.py first!")
        sys.exit(1)
    print(f"  loaded {len(store):,} vectors")

    print("computing rankings...")
    try:
        ranking = compute_ranks(args.secret, words, store)
    except SecretVectorMissing as e:
        print(f"error: {e}")
        sys.exit(1)
    print(f"  ranked {len(ranking):,} words")

    print(f"\ntop {args.top} words for '{ranking.secret}':")
    print("-" * 50)
    for entry in ranking.top(args.top):
        score = ranking.similarity_of(entry.word)
        print(f"{entry.rank:5,d}. {entry.word:24s} (score={score:.4f})")


if __name__ == "__main__":
    main()
