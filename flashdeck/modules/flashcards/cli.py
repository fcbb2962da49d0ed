from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys

from flashdeck.core.config import settings
from flashdeck.core.errors import SourceUnavailable
from flashdeck.core.logging import setup_logging
from flashdeck.modules.flashcards.loader import load_deck
from flashdeck.modules.flashcards.main import DeckSession
from flashdeck.modules.flashcards.models.flashcards import Deck
from flashdeck.modules.flashcards.rotation import shuffle


def _print_human(version: int, deck: Deck) -> None:
    print(f"=== Deck v{version} ({len(deck)} cards) ===")
    for i, card in enumerate(deck, start=1):
        print(f"{i:>3}. Q: {card.question}")
        print(f"     A: {card.answer}")


def _emit(version: int, deck: Deck, *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(DeckSession.to_jsonable(version, deck)), flush=True)
    else:
        _print_human(version, deck)
        sys.stdout.flush()


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return parsed


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return parsed


async def _watch(args: argparse.Namespace) -> int:
    session = DeckSession(args.source, interval=args.interval)
    try:
        session.start()
    except SourceUnavailable as exc:
        print(str(exc), file=sys.stderr)
        return 1
    rotator = session.rotator
    if rotator is None:
        return 1

    done = asyncio.Event()
    seen = 0

    def _render(deck: Deck) -> None:
        nonlocal seen
        if done.is_set():
            return
        seen += 1
        _emit(rotator.version, deck, as_json=args.json)
        if args.rounds and seen >= args.rounds:
            done.set()

    rotator.subscribe(_render)
    _emit(*rotator.snapshot(), as_json=args.json)
    try:
        await done.wait()
    finally:
        await session.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashdeck", description="Flashcard deck viewer CLI"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors (logs go to stderr)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    def _add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--source",
            "-s",
            default=settings.deck.source,
            help="Path to a flashcards XML file (default: bundled deck)",
        )
        p.add_argument("--json", action="store_true", help="Output JSON instead of text")

    ld = sub.add_parser("load", help="Print the deck in document order")
    _add_common(ld)

    sh = sub.add_parser("shuffle", help="Print one random permutation of the deck")
    _add_common(sh)
    sh.add_argument("--seed", type=int, default=None, help="Seed for reproducible order")

    w = sub.add_parser("watch", help="Reshuffle on a fixed interval and print each deck")
    _add_common(w)
    w.add_argument(
        "--interval",
        "-i",
        type=_positive_float,
        default=settings.deck.rotation_interval,
        help="Seconds between reshuffles (default: %(default)s)",
    )
    w.add_argument(
        "--rounds",
        "-n",
        type=_non_negative_int,
        default=0,
        help="Stop after this many reshuffles (default: run until Ctrl-C)",
    )

    args = parser.parse_args(argv)
    setup_logging("WARNING" if args.quiet else settings.log_level)

    if args.cmd == "watch":
        try:
            return asyncio.run(_watch(args))
        except KeyboardInterrupt:
            return 0

    try:
        deck = load_deck(args.source)
    except SourceUnavailable as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if args.cmd == "load":
        _emit(0, deck, as_json=args.json)
        return 0
    if args.cmd == "shuffle":
        rng = random.Random(args.seed) if args.seed is not None else None
        _emit(1, shuffle(deck, rng), as_json=args.json)
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
