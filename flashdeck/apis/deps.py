from __future__ import annotations

from fastapi import HTTPException, Request, status

from flashdeck.modules.flashcards.main import DeckSession
from flashdeck.modules.flashcards.rotation import DeckRotator


def get_deck_session(request: Request) -> DeckSession:
    return request.app.state.deck_session


def require_rotator(session: DeckSession) -> DeckRotator:
    """Return the session's rotator, or raise 503 when there is no deck to serve."""
    if session.rotator is None:
        detail = str(session.error) if session.error else "Deck not loaded"
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
    return session.rotator
