"""Orchestration of communication from API router to business logic and storage layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    MoveResponse,
    SelectionResponse,
    SelectSquareRequest,
    SuggestionResponse,
)
from src.chess.board import Board
from src.chess.game import Game
from src.core.config import Settings
from src.core.exceptions import GameNotFoundError
from src.db.repository import GameRepository

_log = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository, settings: Optional[Settings] = None) -> None:
        self.repo = repository
        self.settings = settings or Settings()

    # -- API routes logic ---
    def create_new_game(self, request: Optional[CreateGameRequest] = None) -> GameResponse:
        """Set up a new game in the starting position. The clock only runs once the game gets started."""
        settings = self.settings
        starting_board = None
        if request is not None:
            if request.starting_time_seconds is not None:
                settings = settings.model_copy(
                    update={"starting_time_seconds": request.starting_time_seconds}
                )
            if request.starting_position is not None:
                starting_board = Board.from_fen(request.starting_position)

        game = Game(settings=settings, starting_board=starting_board)
        game_id = self.repo.create_game(game)
        _log.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, game_id: UUID) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to refresh the clocks for instance.
        """
        game = self._fetch_game(game_id)
        return self._create_game_response(game_id, game)

    def list_games(self) -> list[UUID]:
        return self.repo.list_games()

    def select_square(self, game_id: UUID, request: SelectSquareRequest) -> SelectionResponse:
        """The single event entry point: the player clicked a square."""
        game = self._fetch_game(game_id)
        outcome = game.handle_square_select(request.row, request.col)
        return SelectionResponse.from_outcome(
            outcome, self._create_game_response(game_id, game)
        )

    def undo(self, game_id: UUID) -> GameResponse:
        game = self._fetch_game(game_id)
        game.undo()
        return self._create_game_response(game_id, game)

    def redo(self, game_id: UUID) -> GameResponse:
        game = self._fetch_game(game_id)
        game.redo()
        return self._create_game_response(game_id, game)

    def reset(self, game_id: UUID) -> GameResponse:
        game = self._fetch_game(game_id)
        game.reset()
        return self._create_game_response(game_id, game)

    def start_game(self, game_id: UUID) -> GameResponse:
        game = self._fetch_game(game_id)
        game.start_game()
        return self._create_game_response(game_id, game)

    def suggest_move(self, game_id: UUID) -> SuggestionResponse:
        game = self._fetch_game(game_id)
        game.suggest_move()
        return SuggestionResponse(
            game_id=game_id,
            suggested_move=MoveResponse.from_model(game.snapshot().suggested_move),
        )

    def delete_game(self, game_id: UUID) -> None:
        """Handle a request to delete a Game record. Its clock gets stopped."""
        game = self.repo.delete_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        game.shutdown()
        _log.info("Deleted game %s", game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        return GameResponse.from_snapshot(game_id, game.snapshot())

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game
