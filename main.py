from typing import Optional

from fastapi import FastAPI
from contextlib import asynccontextmanager
from flashdeck.core.config import settings
from flashdeck.core.errors import SourceUnavailable
from flashdeck.core.logging import setup_logging
from flashdeck.apis.flashcards.main import router as flashcards_router
from flashdeck.modules.flashcards.main import DeckSession

import uvicorn
from fastapi.middleware.cors import CORSMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    session: DeckSession = app.state.deck_session
    try:
        session.start()
    except SourceUnavailable:
        # Serve the error state; deck routes answer 503
        pass
    try:
        yield
    finally:
        await session.stop()


def create_app(deck_session: Optional[DeckSession] = None) -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )
    app.state.deck_session = deck_session or DeckSession.from_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(flashcards_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
