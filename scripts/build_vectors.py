#!/usr/bin/env python3
"""
one-time preprocessing: GloVe-format .txt → data/word_vectors.json

usage:
    python scripts/build_vectors.py path/to/vectors.txt
    python scripts/build_vectors.py path/to/vectors.txt --dictionary Viet39K.txt --dim 300

keeps only the dictionary words, so the table the game loads stays
small. you only need to run this once per dictionary / vector file.
"""

import argparse
import logging
import sys
from pathlib import Path

# add parent dir to path so we can import engine
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine.config import DEFAULT_CONFIG
from engine.dictionary import load_dictionary
from engine.embeddings import build_vector_table, write_vector_table


def main():
    parser = argparse.ArgumentParser(
        description="extract dictionary word vectors into a JSON table"
    )
    parser.add_argument(
        "vectors_path",
        type=Path,
        help="path to GloVe-format vectors (word v1 ... vD per line)"
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=DEFAULT_CONFIG.dictionary_path,
        help=f"dictionary file (default: {DEFAULT_CONFIG.dictionary_path})"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_CONFIG.vectors_path,
        help=f"output table (default: {DEFAULT_CONFIG.vectors_path})"
    )
    parser.add_argument(
        "--dim",
        type=int,
        default=DEFAULT_CONFIG.embed_dim,
        help=f"embedding dimension (default: {DEFAULT_CONFIG.embed_dim})"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="print extra info"
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    for path in (args.vectors_path, args.dictionary):
        if not path.exists():
            print(f"error: file not found: {path}")
            sys.exit(1)

    print(f"loading dictionary from {args.dictionary}...")
    words = load_dictionary(args.dictionary)
    print(f"  {len(words):,} words")

    print(f"reading vectors from {args.vectors_path}...")
    table = build_vector_table(args.vectors_path, words, expected_dim=args.dim)
    missing = len(words) - len(table)
    print(f"  matched {len(table):,} words ({missing:,} without a vector)")

    if not table:
        print("error: no dictionary word has a vector (wrong --dim?)")
        sys.exit(1)

    print(f"saving table to {args.output}...")
    write_vector_table(table, args.output)

    print("\ndone!")
    print(f"  {args.output} ({args.output.stat().st_size:,} bytes)")


if __name__ == "__main__":
    main()
