from .flashcards import Deck, Flashcard

__all__ = [
    "Deck",
    "Flashcard",
]
