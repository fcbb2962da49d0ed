"""Flashcards module exports."""

from .models.flashcards import Deck, Flashcard
from .loader import load_deck, parse_deck
from .rotation import DeckRotator, shuffle
from .main import DeckSession

__all__ = [
    "Deck",
    "Flashcard",
    "load_deck",
    "parse_deck",
    "DeckRotator",
    "shuffle",
    "DeckSession",
]
