"""CLI entry point for the scrabble drill."""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time

from rackdrill.dictionary import AnagramIndex, load_default_dictionary, load_dictionary_file
from rackdrill.display import format_duration, print_draw, print_insight, render_draw
from rackdrill.distribution import DistributionRegistry, default_registry
from rackdrill.errors import ConfigurationError, MalformedWordError, UnavailableLetterError
from rackdrill.game import GameOptions, GameSession
from rackdrill.predicates import DrawPredicate, parse_predicates

logger = logging.getLogger(__name__)

DEFAULT_DISTRIBUTION = "french"
LOG_FILE = "debug.log"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rackdrill",
        description="rackdrill — pick your tiles, find every scrabble they hide",
    )
    parser.add_argument(
        "--distribution", "-d",
        default=DEFAULT_DISTRIBUTION,
        help=f"Tiles distribution (default: {DEFAULT_DISTRIBUTION})",
    )
    parser.add_argument(
        "--dictionary", "-w",
        help="Dictionary file, one word per line, plain or gzip "
             "(default: the distribution's word list in data/)",
    )
    parser.add_argument(
        "--length", "-n",
        type=int,
        default=7,
        help="Number of tiles per draw (default: 7)",
    )
    parser.add_argument(
        "--min-vowels",
        type=int,
        default=0,
        help="Minimum vowels in each draw",
    )
    parser.add_argument(
        "--min-consonants",
        type=int,
        default=0,
        help="Minimum consonants in each draw",
    )
    parser.add_argument(
        "--predicates", "-p",
        action="append",
        default=[],
        metavar="KEY=VAL,...",
        help='Draw predicates, e.g. "dup-vowels=2"',
    )
    parser.add_argument(
        "--points",
        action="store_true",
        help="Show tile points",
    )
    parser.add_argument(
        "--timer", "-t",
        type=float,
        default=0.0,
        help="Seconds allotted to find a word, 0 to disable (default: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the tile shuffling, for reproducible games",
    )
    parser.add_argument(
        "--debug", "-v",
        action="store_true",
        help=f"Write debug logs to {LOG_FILE}",
    )
    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    fmt = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
    if debug:
        logging.basicConfig(filename=LOG_FILE, level=logging.DEBUG, format=fmt)
    else:
        logging.basicConfig(level=logging.WARNING, format=fmt)


def build_session(args: argparse.Namespace,
                  registry: DistributionRegistry) -> GameSession:
    """Validate the options, load the dictionary and create the session."""
    distribution = registry.get(args.distribution)

    predicates: list[DrawPredicate] = []
    for config in args.predicates:
        predicates.extend(parse_predicates(config))

    options = GameOptions(
        word_length=args.length,
        min_vowels=args.min_vowels,
        min_consonants=args.min_consonants,
        predicates=predicates,
        show_points=args.points,
        timer=args.timer,
    )
    options.validate()

    index: AnagramIndex
    if args.dictionary:
        index = load_dictionary_file(args.dictionary, word_length=args.length)
    else:
        index = load_default_dictionary(distribution, word_length=args.length)

    rng = random.Random(args.seed)
    return GameSession(distribution, index, options, rng=rng)


def prompt_word(session: GameSession) -> str | None:
    """Ask for the word played until the draw can spell it."""
    start = time.monotonic()
    timer = session.options.timer
    while True:
        try:
            word = input("Enter tiles played: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if not word:
            continue
        try:
            session.play_word(word, check_only=True)
        except UnavailableLetterError as e:
            print(f"Invalid — {e}")
            continue

        if timer:
            elapsed = time.monotonic() - start
            if elapsed > timer:
                print(f"Time elapsed ({format_duration(elapsed)} / {format_duration(timer)})")
            else:
                print(f"Found in {format_duration(elapsed)}")
        return word


def drill_loop(session: GameSession) -> None:
    """Interactive loop: accept or reject draws, then play a word."""
    session.draw_tiles()
    insight = 0

    while not session.is_finished():
        print_draw(session)
        print_insight(session, insight)

        print("\n[A]ccept / [R]eject / [F]resh draw / [I]nsight / [Q]uit")
        try:
            choice = input("> ").strip().upper()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            return

        if choice == "Q":
            print("Exiting.")
            return

        if choice == "I":
            insight += 1
            continue

        if choice in ("R", "F"):
            session.reject_draw(full=choice == "F")
            insight = 0
            continue

        if choice not in ("A", ""):
            print("Invalid choice.")
            continue

        session.accept_draw()
        word = prompt_word(session)
        if word is None:
            print("\nExiting.")
            return
        session.play_word(word)
        print(f"\nPlayed {word.upper()}, keeping {render_draw(session.hand()).strip()}")

        if session.is_finished():
            break
        session.draw_tiles()
        insight = 0

    print("\n=== Game finished ===")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.debug)

    registry = default_registry()
    try:
        session = build_session(args, registry)
    except (ConfigurationError, MalformedWordError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {session.index.word_count} words.")
    if session.predicates:
        print("Predicates: " + ", ".join(p.describe() for p in session.predicates))
    logger.info("starting new game with %r distribution", args.distribution)
    drill_loop(session)


if __name__ == "__main__":
    main()
