"""Shape helpers shared by the movement and the attacking rules"""

from typing import Protocol

from src.chess.square import Square

Vector = tuple[int, int]

KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]


class Board(Protocol):
    """Just the part of the Board the geometry needs"""

    def is_empty(self, square: Square) -> bool: ...


def deltas(from_square: Square, to_square: Square) -> Vector:
    return to_square.row - from_square.row, to_square.col - from_square.col


def is_straight(from_square: Square, to_square: Square) -> bool:
    """Same row or same column (rook lines)"""
    return from_square != to_square and (
        from_square.row == to_square.row or from_square.col == to_square.col
    )


def is_diagonal(from_square: Square, to_square: Square) -> bool:
    """|delta_row| = |delta_col| (bishop lines)"""
    d_row, d_col = deltas(from_square, to_square)
    return d_row != 0 and abs(d_row) == abs(d_col)


def is_knight_jump(from_square: Square, to_square: Square) -> bool:
    return deltas(from_square, to_square) in KNIGHT_DELTAS


def is_adjacent(from_square: Square, to_square: Square) -> bool:
    """Chebyshev distance of exactly one"""
    d_row, d_col = deltas(from_square, to_square)
    return from_square != to_square and abs(d_row) <= 1 and abs(d_col) <= 1


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on a shared line (row, column or diagonal).

    Empty for squares that are not on a shared line, or that are next to each other.
    """
    if not (is_straight(from_square, to_square) or is_diagonal(from_square, to_square)):
        return []

    d_row, d_col = deltas(from_square, to_square)
    step_row = (d_row > 0) - (d_row < 0)
    step_col = (d_col > 0) - (d_col < 0)
    squares_found: list[Square] = []
    square = from_square.offset(step_row, step_col)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_row, step_col)
    return squares_found


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """Line of sight: nothing stands in between the two squares"""
    return all(board.is_empty(square) for square in squares_between(from_square, to_square))
