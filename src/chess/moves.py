"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement shape for each piece type.

`is_legal_shape` is the single question the rest of the engine asks: may the piece on `from_square` go to `to_square`?
It does NOT look at the safety of the mover's own king (see check.py for that).

Every rule receives `history`: the board snapshots of the game so far, the last one being the current board.
Only en passant and castling ever look further back than the current board.
"""

from dataclasses import dataclass
from typing import Callable, Self, Sequence

from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, can_castle, castling_direction
from src.chess.geometry import (
    deltas,
    is_adjacent,
    is_diagonal,
    is_knight_jump,
    is_path_clear,
    is_straight,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square, all_squares


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_algebraic(cls, notation: str) -> Self:
        """
        Coordinate notation: <from_square><to_square>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e1g1": the king castles king side
        """
        return cls(
            Square.from_algebraic(notation[:2]), Square.from_algebraic(notation[2:4])
        )

    def to_algebraic(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- MOVEMENT RULES ---
def is_en_passant(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """
    A pawn may take diagonally onto an EMPTY square only when
    ---

    1. it stands on its en passant rank (row 3 for white, row 4 for black)
    2. the snapshot before the current one shows the opposing pawn on its home rank, in the destination column
    3. that pawn now stands right beside the mover (and so just made its double step)
    """
    pawn = board.piece(move.from_square)
    if pawn is None or pawn.type != PieceType.PAWN:
        return False

    color = pawn.color
    d_row, d_col = deltas(move.from_square, move.to_square)
    if d_row != color.direction or abs(d_col) != 1:
        return False
    if move.from_square.row != color.en_passant_row or not board.is_empty(move.to_square):
        return False
    if len(history) < 2:
        return False

    previous = history[-2]
    passed_pawn = Piece(PieceType.PAWN, color.opponent)
    beside = Square(move.from_square.row, move.to_square.col)
    double_step_start = Square(color.opponent.pawn_row, move.to_square.col)
    just_double_stepped = (
        previous.piece(double_step_start) == passed_pawn
        and previous.is_empty(beside)
        and board.is_empty(double_step_start)
    )
    return just_double_stepped and board.piece(beside) == passed_pawn


def is_pawn_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two from its starting rank, when both squares in front of it are empty
    - takes diagonally
    - takes en passant
    """
    pawn = board.piece(move.from_square)
    assert pawn is not None
    direction = pawn.color.direction
    d_row, d_col = deltas(move.from_square, move.to_square)
    target_empty = board.is_empty(move.to_square)

    if d_col == 0 and target_empty:
        if d_row == direction:
            return True
        if d_row == 2 * direction and move.from_square.row == pawn.color.pawn_row:
            return board.is_empty(move.from_square.offset(direction, 0))
        return False

    if abs(d_col) == 1 and d_row == direction:
        # the capture filter already ruled out an own piece on the target square
        return not target_empty or is_en_passant(move, board, history)

    return False


def is_knight_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """Knights always move such that |delta_row| + |delta_col| = 3 (and never along a line)"""
    return is_knight_jump(move.from_square, move.to_square)


def is_bishop_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return is_diagonal(move.from_square, move.to_square) and is_path_clear(
        move.from_square, move.to_square, board
    )


def is_rook_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """Rooks move either horizontally or vertically"""
    return is_straight(move.from_square, move.to_square) and is_path_clear(
        move.from_square, move.to_square, board
    )


def is_queen_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_rook_move(move, board, history) or is_bishop_move(move, board, history)


def is_king_move(move: Move, board: Board, history: Sequence[Board]) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move: two columns along its home rank.
    """
    if is_adjacent(move.from_square, move.to_square):
        return True

    direction = castling_direction(move.from_square, move.to_square)
    if direction is None:
        return False

    king = board.piece(move.from_square)
    assert king is not None
    return CASTLING_RULES[direction].color == king.color and can_castle(
        board, history, direction
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
IsMoveFn = Callable[[Move, Board, Sequence[Board]], bool]
MOVEMENT_RULES: dict[PieceType, IsMoveFn] = {
    PieceType.PAWN: is_pawn_move,
    PieceType.KNIGHT: is_knight_move,
    PieceType.BISHOP: is_bishop_move,
    PieceType.ROOK: is_rook_move,
    PieceType.QUEEN: is_queen_move,
    PieceType.KING: is_king_move,
}


def is_legal_shape(board: Board, history: Sequence[Board], move: Move) -> bool:
    """
    Is the move permitted by the movement rules of the piece on the starting square?

    1. there must be a piece to move
    2. capture filter: you never take your own piece (independent of the piece type)
    3. the movement rule of the piece type decides
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return False

    piece = board.piece(move.from_square)
    if piece is None:
        return False

    target = board.piece(move.to_square)
    if target is not None and target.color == piece.color:
        return False

    return MOVEMENT_RULES[piece.type](move, board, history)


def pseudo_legal_moves(
    board: Board, history: Sequence[Board], color: Color
) -> list[Move]:
    """Every (origin, destination) pair of the given color that passes `is_legal_shape`"""
    return [
        move
        for from_square in board.squares_of(color)
        for to_square in all_squares()
        if is_legal_shape(board, history, move := Move(from_square, to_square))
    ]
