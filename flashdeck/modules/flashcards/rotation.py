"""Deck rotation: periodic reshuffling with change notifications.

``DeckRotator`` is the only writer of the deck it holds. Every firing swaps in
a freshly shuffled tuple and bumps ``version``; readers either subscribe a
callback or poll with ``wait_for_change``.
"""

from __future__ import annotations

import asyncio
import random
from typing import Callable, Optional, Sequence

from flashdeck.core.logging import get_logger
from flashdeck.core.scheduler import PeriodicTask
from flashdeck.modules.flashcards.models.flashcards import Deck, Flashcard


logger = get_logger(__name__)

DEFAULT_INTERVAL = 15.0

Listener = Callable[[Deck], None]


def shuffle(deck: Sequence[Flashcard], rng: Optional[random.Random] = None) -> Deck:
    """Return a uniformly random permutation of ``deck``.

    Decks with fewer than two cards come back unchanged.
    """
    cards = tuple(deck)
    if len(cards) <= 1:
        return cards
    return tuple((rng or random).sample(cards, len(cards)))


class DeckRotator:
    """Holds the current deck and reshuffles it every ``interval`` seconds.

    Example:
        rotator = DeckRotator(load_deck(), interval=15)
        rotator.subscribe(render)
        rotator.start()
        ...
        await rotator.stop()
    """

    def __init__(
        self,
        deck: Sequence[Flashcard],
        *,
        interval: float = DEFAULT_INTERVAL,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._deck: Deck = tuple(deck)
        self._version = 0
        self._rng = rng
        self._listeners: list[Listener] = []
        self._changed = asyncio.Event()
        self._task = PeriodicTask(self._tick, interval=interval, name="deck-rotation")

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def version(self) -> int:
        return self._version

    @property
    def interval(self) -> float:
        return self._task.interval

    @property
    def running(self) -> bool:
        return self._task.running

    def snapshot(self) -> tuple[int, Deck]:
        return self._version, self._deck

    # Subscriptions ------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new deck; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def wait_for_change(
        self, after_version: int, *, timeout: Optional[float] = None
    ) -> tuple[int, Deck]:
        """Wait until the deck is newer than ``after_version``.

        On timeout the current snapshot is returned as-is.
        """
        while self._version <= after_version:
            event = self._changed
            try:
                await asyncio.wait_for(event.wait(), timeout)
            except asyncio.TimeoutError:
                break
        return self.snapshot()

    # Rotation -----------------------------------------------------------
    def rotate_once(self) -> Deck:
        self._deck = shuffle(self._deck, self._rng)
        self._version += 1
        self._publish()
        return self._deck

    async def _tick(self) -> None:
        self.rotate_once()

    def _publish(self) -> None:
        deck = self._deck
        logger.debug(
            "Deck reshuffled (%d cards)",
            len(deck),
            extra={"deck_version": self._version},
        )
        for listener in list(self._listeners):
            try:
                listener(deck)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Deck listener %r failed",
                    listener,
                    extra={"deck_version": self._version},
                )
        # Wake pollers, then arm a fresh event for the next change
        self._changed.set()
        self._changed = asyncio.Event()

    def start(self) -> None:
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()
