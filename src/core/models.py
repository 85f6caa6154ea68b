"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make the models easier to read
Coordinates = tuple[int, int]
PieceSymbol = str
PieceColor = str


@dataclass
class MoveModel:
    """(row, col) of the starting and the target square"""

    from_square: Coordinates
    to_square: Coordinates


@dataclass
class SelectionOutcome:
    """What a click on a square did"""

    selection_changed: bool
    move_committed: bool
    status: str


@dataclass
class GameSnapshot:
    """Transport-safe, read-only view of a game: everything the presentation layer needs to draw it."""

    board: list[list[Optional[PieceSymbol]]]
    turn: PieceColor
    selected_square: Optional[Coordinates]
    suggested_move: Optional[MoveModel]
    last_move: Optional[MoveModel]
    remaining_time: dict[PieceColor, int]
    started: bool
    game_over: bool
    status: str
    winner: Optional[PieceColor]
    can_undo: bool
    can_redo: bool
