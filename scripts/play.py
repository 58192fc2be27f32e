#!/usr/bin/env python3
"""
play the game in a terminal.

usage:
    python scripts/play.py
    python scripts/play.py --dictionary Viet39K.txt --seed 7

commands:
    /hint     reveal a word (and guess it)
    /tip      reveal a word a bit closer than your best (and guess it)
    /history  show your guesses, best first
    /new      start over with a new secret
    /quit     leave
anything else is a guess.
"""

import argparse
import logging
import sys
from pathlib import Path

# add parent dir to path so we can import engine
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine import Config, GameService
from engine.errors import EngineError


def format_rank(rank):
    return f"#{rank:,}" if rank is not None else "unranked"


def print_history(history, limit=15):
    if not history:
        print("  (no guesses yet)")
        return
    for record in history[:limit]:
        print(f"  {format_rank(record['rank']):>10}  {record['word']}")
    if len(history) > limit:
        print(f"  ... {len(history) - limit:,} more")


def print_suggestion(result):
    suggestion = result["suggestion"]
    kind = "hint" if "hint" in suggestion else "tip"
    if suggestion[kind] is None:
        print(f"  {suggestion.get('message', f'no {kind} available')}")
        return
    print(f"  {kind}: '{suggestion[kind]}' is {format_rank(suggestion['rank'])}")
    guess = result["guess"]
    if guess and guess["is_correct"]:
        print("  ...and that's the secret!")


def start(service):
    result = service.new_game()
    print(f"new game! {result['total_words']:,} words in the dictionary.")


def main():
    parser = argparse.ArgumentParser(description="play the word-ranking game")
    parser.add_argument("--dictionary", type=Path, default=None, help="dictionary file")
    parser.add_argument("--data-dir", type=Path, default=Path("data"), help="data directory")
    parser.add_argument("--seed", type=int, default=None, help="seed for the secret pick")
    parser.add_argument("--verbose", "-v", action="store_true", help="print engine logs")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = Config(data_dir=args.data_dir, seed=args.seed)
    if args.dictionary:
        config.dictionary_file = args.dictionary

    if not config.dictionary_path.exists():
        print(f"error: dictionary not found at {config.dictionary_path}")
        sys.exit(1)

    service = GameService(config)
    try:
        start(service)
    except EngineError as e:
        print(f"error: {e}")
        sys.exit(1)

    while True:
        try:
            line = input("guess> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue

        try:
            if line == "/quit":
                break
            elif line == "/new":
                start(service)
            elif line == "/history":
                print_history(service.state()["history"])
            elif line == "/hint":
                print_suggestion(service.accept_hint())
            elif line == "/tip":
                print_suggestion(service.accept_tip())
            else:
                result = service.submit_guess(line)
                print(f"  '{result['word']}' is {format_rank(result['rank'])}")
                if result["is_correct"]:
                    print(f"  you got it in {len(result['history'])} guesses!")
        except EngineError as e:
            print(f"  {e}")


if __name__ == "__main__":
    main()
