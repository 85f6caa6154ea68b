"""Check, checkmate and stalemate detection for the side that is about to move."""

from typing import Optional, Sequence

from src.chess.attacks import is_under_attack
from src.chess.board import Board
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.pieces import Color
from src.chess.resolver import resolve_move
from src.chess.square import Square
from src.core.shared_types import Status


def king_square(board: Board, color: Color) -> Optional[Square]:
    return board.locate_king(color)


def in_check(board: Board, color: Color) -> bool:
    """
    Is the king of this color attacked by the opponent?

    A board without that king (it got captured) is never in check.
    """
    square = king_square(board, color)
    if square is None:
        return False
    return is_under_attack(square, color, board)


def leaves_king_in_check(board: Board, move: Move, color: Color) -> bool:
    """Play the move on a scratch board and look at the mover's king afterwards"""
    return in_check(resolve_move(board, move), color)


def has_any_response(board: Board, history: Sequence[Board], color: Color) -> bool:
    """Does the color have at least one move that does not leave its own king in check?"""
    return any(
        not leaves_king_in_check(board, move, color)
        for move in pseudo_legal_moves(board, history, color)
    )


def classify(board: Board, history: Sequence[Board], side_to_move: Color) -> Status:
    """
    Game status from the point of view of the side to move.

    * checkmate: in check and no way out
    * stalemate: not in check, but no move either
    """
    if has_any_response(board, history, side_to_move):
        return Status.IN_PROGRESS
    if in_check(board, side_to_move):
        return Status.CHECKMATE
    return Status.STALEMATE
