"""HTTP routes the presentation layer talks to. Thin: every route hands over to the ChessService."""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    SelectionResponse,
    SelectSquareRequest,
    SuggestionResponse,
)
from src.services.chess_service import ChessService

router = APIRouter(prefix="/games", tags=["games"])


def get_service(request: Request) -> ChessService:
    """The service lives on the application state (see src/app.py)"""
    return request.app.state.chess_service


Service = Annotated[ChessService, Depends(get_service)]


@router.post("", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(service: Service, request: Optional[CreateGameRequest] = None) -> GameResponse:
    return service.create_new_game(request)


@router.get("", response_model=list[UUID])
def list_games(service: Service) -> list[UUID]:
    return service.list_games()


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: Service) -> GameResponse:
    return service.get_game_state(game_id)


@router.post("/{game_id}/select", response_model=SelectionResponse)
def select_square(
    game_id: UUID, request: SelectSquareRequest, service: Service
) -> SelectionResponse:
    return service.select_square(game_id, request)


@router.post("/{game_id}/undo", response_model=GameResponse)
def undo(game_id: UUID, service: Service) -> GameResponse:
    return service.undo(game_id)


@router.post("/{game_id}/redo", response_model=GameResponse)
def redo(game_id: UUID, service: Service) -> GameResponse:
    return service.redo(game_id)


@router.post("/{game_id}/reset", response_model=GameResponse)
def reset(game_id: UUID, service: Service) -> GameResponse:
    return service.reset(game_id)


@router.post("/{game_id}/start", response_model=GameResponse)
def start_game(game_id: UUID, service: Service) -> GameResponse:
    return service.start_game(game_id)


@router.post("/{game_id}/suggestion", response_model=SuggestionResponse)
def suggest_move(game_id: UUID, service: Service) -> SuggestionResponse:
    return service.suggest_move(game_id)


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: Service) -> None:
    service.delete_game(game_id)
