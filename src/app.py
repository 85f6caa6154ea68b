"""
FastAPI application serving the chess engine to a presentation layer.

The games live in memory: restarting the process forgets them.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import Settings, get_settings
from src.core.exceptions import GameNotFoundError
from src.core.logging_config import configure_logging
from src.db.memory_repository import InMemoryGameRepository
from src.services.chess_service import ChessService

_log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Chess rules engine", version="0.1.0")
    app.state.chess_service = ChessService(InMemoryGameRepository(), settings)
    app.include_router(router)

    @app.exception_handler(GameNotFoundError)
    def handle_not_found(request: Request, exc: GameNotFoundError) -> JSONResponse:
        _log.info("Unknown game requested: %s", request.url.path)
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app
