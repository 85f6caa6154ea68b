"""
Turning an accepted move into the next board.

Besides moving the piece, a move may have side effects:
* promotion: a pawn reaching the far rank becomes a queen of its own color (no choice offered)
* en passant: a pawn taking diagonally onto an empty square removes the pawn it passed
* castling: the king moving two columns along its home rank brings the rook along
"""

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


def resolve_move(board: Board, move: Move) -> Board:
    """
    Board after the move. The given board is left untouched.

    NOTE: legality is not checked here. Call with moves that passed `is_legal_shape`.
    """
    piece = board.piece(move.from_square)
    assert piece is not None, f"No piece to move on {move.from_square}"
    d_col = move.to_square.col - move.from_square.col
    is_diagonal_step = abs(d_col) == 1 and abs(move.to_square.row - move.from_square.row) == 1
    target_was_empty = board.is_empty(move.to_square)

    new_board = board.move_piece(move.from_square, move.to_square)

    if piece.type == PieceType.PAWN:
        if move.to_square.row == piece.color.promotion_row:
            new_board = new_board.with_piece(
                move.to_square, piece.promoted_to(PieceType.QUEEN)
            )
        if is_diagonal_step and target_was_empty:
            new_board = _remove_passed_pawn(new_board, move)

    elif piece.type == PieceType.KING and abs(d_col) == 2:
        new_board = _move_castling_rook(new_board, move)

    return new_board


def _remove_passed_pawn(board: Board, move: Move) -> Board:
    """The pawn taken en passant stands on the mover's original row, in the destination column"""
    return board.with_piece(Square(move.from_square.row, move.to_square.col), None)


def _move_castling_rook(board: Board, move: Move) -> Board:
    """Rook comes from the corner on the side the king moved to, and lands next to the king on the inside"""
    king_side = move.to_square.col > move.from_square.col
    row = move.to_square.row
    rook_from = Square(row, BOARD_DIMENSIONS[1] - 1 if king_side else 0)
    rook_to = Square(row, move.to_square.col - 1 if king_side else move.to_square.col + 1)
    return board.move_piece(rook_from, rook_to)
