"""Move suggestions: a uniformly random pick among the moves of the side to move. No evaluation involved."""

import random
from typing import Optional, Sequence

from src.chess.board import Board
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.pieces import Color


def suggest_move(
    board: Board,
    history: Sequence[Board],
    color: Color,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """
    Random pseudo-legal move (it may leave the own king in check), or None if there is nothing to move.
    """
    candidates = pseudo_legal_moves(board, history, color)
    if not candidates:
        return None
    return (rng or random).choice(candidates)
