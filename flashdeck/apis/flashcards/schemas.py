from __future__ import annotations

from pydantic import BaseModel, Field

from flashdeck.modules.flashcards.models.flashcards import Deck, Flashcard


class FlashcardRead(BaseModel):
    question: str
    answer: str


class DeckResponse(BaseModel):
    version: int = Field(..., description="Increments on every reshuffle")
    total: int
    cards: list[FlashcardRead] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, version: int, deck: Deck) -> "DeckResponse":
        return cls(
            version=version,
            total=len(deck),
            cards=[_read(card) for card in deck],
        )


class DeckEvent(BaseModel):
    """Envelope for websocket deck pushes."""

    type: str = "deck"
    data: DeckResponse


def _read(card: Flashcard) -> FlashcardRead:
    return FlashcardRead(question=card.question, answer=card.answer)
