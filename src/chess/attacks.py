"""
Attacking rules
---

Answers "is this square under attack?".

Uses the same geometry as the movement rules with two exceptions:
* pawns attack their two forward diagonals, whether or not anything stands there
* kings attack the adjacent squares only (castling never captures)
"""

from typing import Callable

from src.chess.board import Board
from src.chess.geometry import (
    is_adjacent,
    is_diagonal,
    is_knight_jump,
    is_path_clear,
    is_straight,
)
from src.chess.pieces import Color, PieceType
from src.chess.square import Square


def is_attacked_by_pawn(from_square: Square, target: Square, board: Board) -> bool:
    """One row forward (for the pawn's color) and one column sideways"""
    pawn = board.piece(from_square)
    assert pawn is not None
    return (
        target.row - from_square.row == pawn.color.direction
        and abs(target.col - from_square.col) == 1
    )


def is_attacked_by_knight(from_square: Square, target: Square, board: Board) -> bool:
    return is_knight_jump(from_square, target)


def is_attacked_by_bishop(from_square: Square, target: Square, board: Board) -> bool:
    return is_diagonal(from_square, target) and is_path_clear(from_square, target, board)


def is_attacked_by_rook(from_square: Square, target: Square, board: Board) -> bool:
    return is_straight(from_square, target) and is_path_clear(from_square, target, board)


def is_attacked_by_queen(from_square: Square, target: Square, board: Board) -> bool:
    """The Queen combines the rook lines and the bishop lines"""
    return is_attacked_by_rook(from_square, target, board) or is_attacked_by_bishop(
        from_square, target, board
    )


def is_attacked_by_king(from_square: Square, target: Square, board: Board) -> bool:
    return is_adjacent(from_square, target)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Square, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}


def attackers_of(square: Square, defending_color: Color, board: Board) -> list[Square]:
    """Squares of every opposing piece that could capture on the given square"""
    target_piece = board.piece(square)
    if target_piece is not None and target_piece.color != defending_color:
        # an attacker never captures its own piece
        return []

    found: list[Square] = []
    for from_square in board.squares_of(defending_color.opponent):
        attacker = board.piece(from_square)
        assert attacker is not None
        if ATTACK_RULES[attacker.type](from_square, square, board):
            found.append(from_square)
    return found


def is_under_attack(square: Square, defending_color: Color, board: Board) -> bool:
    """True if any piece NOT of the defending color can reach the square"""
    return bool(attackers_of(square, defending_color, board))


def is_any_under_attack(
    squares: list[Square], defending_color: Color, board: Board
) -> bool:
    return any(is_under_attack(square, defending_color, board) for square in squares)
