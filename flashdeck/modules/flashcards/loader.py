"""Card source loader.

Reads a ``<flashcards>`` XML document and returns the valid cards in document
order::

    <flashcards>
      <card><question>...</question><answer>...</answer></card>
    </flashcards>

Fields are scoped to the ``card`` that is open when they appear. A card only
closes at the end tag of the element that opened it, so a stray ``card``
nested inside another one does not start a new record. Cards missing either
field (or with a blank one) are skipped; only a source that cannot be read or
parsed at all raises ``SourceUnavailable``.
"""

from __future__ import annotations

import io
import os
from importlib import resources
from typing import IO, Iterator, Optional, Union
from xml.etree import ElementTree as ET

from flashdeck.core.errors import SourceUnavailable
from flashdeck.core.logging import get_logger
from flashdeck.modules.flashcards.models.flashcards import Deck, Flashcard


logger = get_logger(__name__)

BUNDLED_DECK = "resources/flashcards.xml"
CARD_TAG = "card"
FIELD_TAGS = ("question", "answer")

DeckSource = Union[str, os.PathLike, IO[bytes], IO[str], None]


def _local_name(tag: str) -> str:
    # "{namespace}card" -> "card"
    return tag.rsplit("}", 1)[-1]


def _describe(source: DeckSource) -> str:
    if source is None:
        return f"<bundled:{BUNDLED_DECK}>"
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return str(getattr(source, "name", "<stream>"))


def _iter_raw_cards(stream) -> Iterator[tuple[str, str]]:
    """Yield ``(question, answer)`` text for every card scope, valid or not."""
    depth = 0
    card_depth: Optional[int] = None
    fields: dict[str, str] = {}

    for event, elem in ET.iterparse(stream, events=("start", "end")):
        name = _local_name(elem.tag)
        if event == "start":
            depth += 1
            if card_depth is None and name == CARD_TAG:
                card_depth = depth
                fields = {}
            continue

        if card_depth is not None:
            if name in FIELD_TAGS and depth > card_depth:
                # last occurrence wins
                fields[name] = "".join(elem.itertext())
            elif name == CARD_TAG and depth == card_depth:
                yield fields.get("question", ""), fields.get("answer", "")
                card_depth = None
                elem.clear()
        depth -= 1


def _build_deck(stream, label: str) -> Deck:
    cards: list[Flashcard] = []
    skipped = 0
    try:
        for index, (question, answer) in enumerate(_iter_raw_cards(stream)):
            question, answer = question.strip(), answer.strip()
            if not question or not answer:
                skipped += 1
                logger.debug(
                    "Skipping card #%d: missing %s",
                    index,
                    "question" if not question else "answer",
                    extra={"source": label},
                )
                continue
            cards.append(Flashcard(question=question, answer=answer))
    except ET.ParseError as exc:
        raise SourceUnavailable(label, f"malformed document: {exc}") from exc
    except (UnicodeError, ValueError) as exc:
        # undecodable text handles, closed streams
        raise SourceUnavailable(label, f"unreadable stream: {exc}") from exc

    logger.info(
        "Loaded %d flashcards from %s (%d skipped)",
        len(cards),
        label,
        skipped,
        extra={"source": label},
    )
    return tuple(cards)


def load_deck(source: DeckSource = None) -> Deck:
    """Load every valid card from ``source``.

    ``source`` may be a path, an open binary/text file, or ``None`` for the
    deck bundled with the package.
    """
    label = _describe(source)
    try:
        if source is None:
            ref = resources.files("flashdeck.modules.flashcards").joinpath(
                BUNDLED_DECK
            )
            with ref.open("rb") as fh:
                return _build_deck(fh, label)
        if isinstance(source, (str, os.PathLike)):
            with open(source, "rb") as fh:
                return _build_deck(fh, label)
        return _build_deck(source, label)
    except OSError as exc:
        raise SourceUnavailable(label, exc.strerror or str(exc)) from exc


def parse_deck(document: Union[str, bytes]) -> Deck:
    """Parse an in-memory XML document with the same rules as ``load_deck``."""
    if isinstance(document, bytes):
        return _build_deck(io.BytesIO(document), "<memory>")
    return _build_deck(io.StringIO(document), "<memory>")
