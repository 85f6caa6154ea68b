"""The ordered list of board snapshots of a game, and the cursor used for undo/redo."""

from typing import Optional

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color


class History:
    """
    Snapshots of the game: index 0 is the starting position, index i the position after the i-th move.

    Undo/redo only move the cursor. Committing a new board while the cursor is not at the end
    throws away everything after the cursor first.
    """

    def __init__(self, starting_board: Optional[Board] = None) -> None:
        self._snapshots: list[Board] = []
        # _moves[i] turned _snapshots[i] into _snapshots[i + 1]
        self._moves: list[Move] = []
        self._cursor = 0
        self.reset(starting_board)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Board:
        return self._snapshots[self._cursor]

    @property
    def active_line(self) -> list[Board]:
        """Snapshots that led to the current board, the current board included"""
        return self._snapshots[: self._cursor + 1]

    @property
    def last_move(self) -> Optional[Move]:
        """The move that produced the current board"""
        return self._moves[self._cursor - 1] if self._cursor > 0 else None

    @property
    def turn(self) -> Color:
        """White moves on even cursor positions"""
        return Color.WHITE if self._cursor % 2 == 0 else Color.BLACK

    def __len__(self) -> int:
        return len(self._snapshots)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self) - 1

    def commit(self, move: Move, board: Board) -> None:
        # a new move overwrites the redo branch
        del self._snapshots[self._cursor + 1 :]
        del self._moves[self._cursor :]
        self._snapshots.append(board)
        self._moves.append(move)
        self._cursor += 1

    def undo(self) -> bool:
        if not self.can_undo():
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo():
            return False
        self._cursor += 1
        return True

    def reset(self, starting_board: Optional[Board] = None) -> None:
        self._snapshots = [starting_board or Board.initial()]
        self._moves = []
        self._cursor = 0
