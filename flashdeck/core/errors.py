"""Exception types shared across flashdeck modules."""

from __future__ import annotations


class FlashdeckError(Exception):
    """Base class for flashdeck errors."""


class SourceUnavailable(FlashdeckError):
    """The card source could not be opened or parsed as a whole."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Flashcard source unavailable ({source}): {reason}")
