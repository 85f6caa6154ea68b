"""Implementation of (Game)Repository as a plain dictionary"""

import threading
from uuid import UUID, uuid4

from src.chess.game import Game


class InMemoryGameRepository:
    """Games keyed by a random UUID. The lock guards the dictionary, each Game guards itself."""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}
        self._lock = threading.Lock()

    def get_game(self, game_id: UUID) -> Game | None:
        with self._lock:
            return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        new_id = uuid4()
        with self._lock:
            self._games[new_id] = game
        return new_id

    def delete_game(self, game_id: UUID) -> Game | None:
        with self._lock:
            return self._games.pop(game_id, None)

    def list_games(self) -> list[UUID]:
        with self._lock:
            return list(self._games.keys())
