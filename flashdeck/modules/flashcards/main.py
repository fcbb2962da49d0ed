"""Deck session class and simple module entrypoint.

``DeckSession`` is what a host (the web app, the CLI, a test) talks to: it
loads the deck once, synchronously, then owns the rotator for the rest of the
session. The module also stays executable and delegates to the CLI.
"""

from __future__ import annotations

import random
from typing import Optional

from flashdeck.core.config import DeckSettings, settings
from flashdeck.core.errors import SourceUnavailable
from flashdeck.core.logging import get_logger
from flashdeck.modules.flashcards.loader import DeckSource, load_deck
from flashdeck.modules.flashcards.models.flashcards import Deck
from flashdeck.modules.flashcards.rotation import DeckRotator


logger = get_logger(__name__)


class DeckSession:
    """One viewing session over a single deck.

    Example (async):
        async with DeckSession("cards.xml", interval=15) as session:
            session.rotator.subscribe(render)
            ...

    Example (from settings):
        session = DeckSession.from_settings()
        session.start()
    """

    def __init__(
        self,
        source: DeckSource = None,
        *,
        interval: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.source = source
        self.interval = (
            interval if interval is not None else settings.deck.rotation_interval
        )
        self.rng = rng
        self.error: Optional[SourceUnavailable] = None
        self.rotator: Optional[DeckRotator] = None

    @classmethod
    def from_settings(cls, deck_settings: Optional[DeckSettings] = None) -> "DeckSession":
        cfg = deck_settings or settings.deck
        rng = random.Random(cfg.shuffle_seed) if cfg.shuffle_seed is not None else None
        return cls(cfg.source, interval=cfg.rotation_interval, rng=rng)

    @property
    def available(self) -> bool:
        return self.rotator is not None

    def load(self) -> Deck:
        """Load the deck; on failure remember the error, keep no deck, re-raise.

        Reloading is refused while rotation is running; call ``stop()`` first.
        """
        if self.rotator is not None and self.rotator.running:
            raise RuntimeError("Deck session is running; stop it before reloading")
        try:
            deck = load_deck(self.source)
        except SourceUnavailable as exc:
            self.error = exc
            self.rotator = None
            logger.error("Deck unavailable: %s", exc)
            raise
        self.error = None
        self.rotator = DeckRotator(deck, interval=self.interval, rng=self.rng)
        return deck

    def start(self) -> None:
        if self.rotator is None:
            self.load()
        if self.rotator is not None:
            self.rotator.start()

    async def stop(self) -> None:
        if self.rotator is not None:
            await self.rotator.stop()

    def snapshot(self) -> tuple[int, Deck]:
        if self.rotator is None:
            return 0, ()
        return self.rotator.snapshot()

    async def __aenter__(self) -> "DeckSession":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    @staticmethod
    def to_jsonable(version: int, deck: Deck) -> dict:
        """Convert a deck snapshot into a JSON-serializable dict."""
        return {
            "version": version,
            "total": len(deck),
            "cards": [card.model_dump() for card in deck],
        }


def main(argv: list[str] | None = None) -> int:
    from flashdeck.modules.flashcards.cli import main as _cli_main

    return _cli_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
