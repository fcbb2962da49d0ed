from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from flashdeck.apis.deps import get_deck_session, require_rotator
from flashdeck.core.config import settings
from flashdeck.core.logging import get_logger
from flashdeck.modules.flashcards.main import DeckSession
from .schemas import DeckEvent, DeckResponse


logger = get_logger(__name__)
router = APIRouter()

Session = Annotated[DeckSession, Depends(get_deck_session)]


@router.get(
    f"/{settings.app.version}/flashcards/deck",
    response_model=DeckResponse,
    tags=["flashcards"],
)
async def get_deck(session: Session) -> DeckResponse:
    rotator = require_rotator(session)
    return DeckResponse.from_snapshot(*rotator.snapshot())


@router.post(
    f"/{settings.app.version}/flashcards/deck/shuffle",
    response_model=DeckResponse,
    status_code=status.HTTP_200_OK,
    tags=["flashcards"],
)
async def shuffle_deck(session: Session) -> DeckResponse:
    rotator = require_rotator(session)
    rotator.rotate_once()
    return DeckResponse.from_snapshot(*rotator.snapshot())


def _event(version: int, deck) -> dict:
    return DeckEvent(data=DeckResponse.from_snapshot(version, deck)).model_dump()


@router.websocket(f"/{settings.app.version}/flashcards/deck/live")
async def deck_live(websocket: WebSocket) -> None:
    session: DeckSession = websocket.app.state.deck_session
    await websocket.accept()
    rotator = session.rotator
    if rotator is None:
        await websocket.close(
            code=status.WS_1011_INTERNAL_ERROR,
            reason=str(session.error or "Deck not loaded"),
        )
        return

    version, deck = rotator.snapshot()
    await websocket.send_json(_event(version, deck))
    logger.info("WS viewer connected", extra={"deck_version": version})

    async def _push(seen: int) -> None:
        while True:
            seen, current = await rotator.wait_for_change(seen)
            try:
                await websocket.send_json(_event(seen, current))
            except Exception:
                # Best-effort; the receive loop handles the disconnect
                return

    pusher = asyncio.create_task(_push(version))
    try:
        while True:
            message = await websocket.receive_text()
            if message.strip().lower() == "shuffle":
                rotator.rotate_once()
    except WebSocketDisconnect:
        logger.info("WS viewer disconnected", extra={"deck_version": rotator.version})
    finally:
        pusher.cancel()
