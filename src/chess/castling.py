"""
Helpers for implementing Castling rules.

There are no castling-rights flags: whether king or rook ever moved is read off the snapshots of the game so far.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self, Sequence

from src.chess.attacks import is_any_under_attack
from src.chess.board import Board
from src.chess.geometry import squares_between
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square

KING_START_COLUMN = 4


class CastlingDirection(Enum):
    """The four castling directions. Values are their usual one-letter names."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"


@dataclass(frozen=True)
class CastlingSquares:
    """Store the squares where king/rook start from/end up in by castling."""

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def color(self) -> Color:
        return Color.WHITE if self.king_from.row == Color.WHITE.home_row else Color.BLACK


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def castling_direction(from_square: Square, to_square: Square) -> Optional[CastlingDirection]:
    """Which castling (if any) a king move between these two squares would be"""
    return next(
        (
            direction
            for direction, rule in CASTLING_RULES.items()
            if rule.king_from == from_square and rule.king_to == to_square
        ),
        None,
    )


def has_left_square(history: Sequence[Board], square: Square, piece: Piece) -> bool:
    """Did any snapshot so far show the square without this piece on it?"""
    return any(board.piece(square) != piece for board in history)


def has_king_moved(history: Sequence[Board], color: Color) -> bool:
    king_square = Square(color.home_row, KING_START_COLUMN)
    return has_left_square(history, king_square, Piece(PieceType.KING, color))


def has_rook_moved(history: Sequence[Board], direction: CastlingDirection) -> bool:
    rule = CASTLING_RULES[direction]
    return has_left_square(history, rule.rook_from, Piece(PieceType.ROOK, rule.color))


def can_castle(
    board: Board, history: Sequence[Board], direction: CastlingDirection
) -> bool:
    """
    You are allowed to castle if
    ---

    * the rook of that side still stands on its original square
    * neither the king nor that rook ever left their original squares
    * every square in between king and rook is empty
    * none of the squares the king passes through (start and end included) is under attack
    """
    rule = CASTLING_RULES[direction]
    color = rule.color
    if board.piece(rule.rook_from) != Piece(PieceType.ROOK, color):
        return False

    if has_king_moved(history, color) or has_rook_moved(history, direction):
        return False

    if not all(board.is_empty(square) for square in squares_between(rule.king_from, rule.rook_from)):
        return False

    king_path = [rule.king_from, *squares_between(rule.king_from, rule.king_to), rule.king_to]
    return not is_any_under_attack(king_path, color, board)

