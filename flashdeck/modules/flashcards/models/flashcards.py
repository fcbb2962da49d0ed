"""Pydantic models for flashcards and decks.

Cards are frozen so a deck can be handed to any number of readers without
copying; a reshuffle always builds a new tuple.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class Flashcard(BaseModel):
    """Simple question/answer flashcard."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str

    @field_validator("question", "answer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


Deck = tuple[Flashcard, ...]
