"""
Shared pytest fixtures for flashdeck.

Sets a quiet log level and provides small XML decks written to a temp dir.
"""

import os
from pathlib import Path

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")

from flashdeck.modules.flashcards.models.flashcards import Flashcard  # noqa: E402


THREE_CARDS_XML = """<?xml version="1.0" encoding="utf-8"?>
<flashcards>
    <card><question>Q1</question><answer>A1</answer></card>
    <card><question>Q2</question><answer>A2</answer></card>
    <card><question>Q3</question><answer>A3</answer></card>
</flashcards>
"""


@pytest.fixture
def three_cards_xml() -> str:
    return THREE_CARDS_XML


@pytest.fixture
def deck_file(tmp_path: Path) -> Path:
    """A valid three-card deck on disk."""
    path = tmp_path / "flashcards.xml"
    path.write_text(THREE_CARDS_XML, encoding="utf-8")
    return path


@pytest.fixture
def missing_file(tmp_path: Path) -> Path:
    return tmp_path / "does-not-exist.xml"


@pytest.fixture
def three_cards() -> tuple[Flashcard, ...]:
    return (
        Flashcard(question="Q1", answer="A1"),
        Flashcard(question="Q2", answer="A2"),
        Flashcard(question="Q3", answer="A3"),
    )
