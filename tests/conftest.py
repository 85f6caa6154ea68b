"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.chess.board import Board
from src.chess.game import Game
from src.chess.moves import Move
from src.core.config import Settings


@pytest.fixture
def settings() -> Settings:
    """No background clock: tests drive the clock by calling Game.tick()"""
    return Settings(run_clock=False, suggestion_seed=42)


@pytest.fixture
def started_game(settings: Settings) -> Generator[Game, None, None]:
    """A started game in the standard starting position"""
    game = Game(settings=settings)
    game.start_game()
    try:
        yield game
    finally:
        game.shutdown()


@pytest.fixture
def game_from_position(settings: Settings) -> Callable[[str], Game]:
    """Call the inner function with a FEN piece placement to get a started game from that position (white to move)"""

    def _create_game(placement: str) -> Game:
        game = Game(settings=settings, starting_board=Board.from_fen(placement))
        game.start_game()
        return game

    return _create_game


@pytest.fixture
def play() -> Callable[..., None]:
    """Commit a series of moves given in coordinate notation, failing loudly on the first one that is refused"""

    def _play(game: Game, *moves: str) -> None:
        for notation in moves:
            assert game.commit(Move.from_algebraic(notation)), f"move {notation} was refused"

    return _play
