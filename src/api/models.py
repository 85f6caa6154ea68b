"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import GameSnapshot, MoveModel, SelectionOutcome
from src.core.shared_types import ColorName, Status

PieceColor = str
Coordinates = tuple[int, int]


# --- REQUEST MODELS ---
class SelectSquareRequest(BaseModel):
    """(row, col) of the clicked square. Row 0 is black's back rank, col 0 the a-file."""

    row: int = Field(ge=0, le=7)
    col: int = Field(ge=0, le=7)


class CreateGameRequest(BaseModel):
    """Optional overrides of the default settings for this one game"""

    starting_time_seconds: Optional[int] = Field(default=None, ge=0)
    starting_position: Optional[str] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        """Only the piece placement field of a FEN string: 8 ranks separated by '/', exactly one king per color"""
        if value is None:
            return value

        ranks = value.strip().split("/")
        if len(ranks) != 8:
            raise InvalidRequestError(
                "Starting position must contain 8 '/'-separated ranks."
            )
        for rank in ranks:
            width = sum(int(char) if char.isdigit() else 1 for char in rank)
            if width != 8 or not all(char.isdigit() or char in "kqrbnpKQRBNP" for char in rank):
                raise InvalidRequestError(f"Cannot interpret rank {rank!r}.")
        for king in "Kk":
            if value.count(king) != 1:
                raise InvalidRequestError(
                    f"Starting position must contain exactly one {king!r}."
                )
        return value.strip()


# --- RESPONSE MODELS ---
class MoveResponse(BaseModel):
    from_square: Coordinates
    to_square: Coordinates

    @classmethod
    def from_model(cls, move: Optional[MoveModel]) -> Optional["MoveResponse"]:
        if move is None:
            return None
        return cls(from_square=move.from_square, to_square=move.to_square)


class GameResponse(BaseModel):
    game_id: UUID
    board: list[list[Optional[str]]]
    turn: ColorName
    selected_square: Optional[Coordinates]
    suggested_move: Optional[MoveResponse]
    last_move: Optional[MoveResponse]
    remaining_time: dict[PieceColor, int]
    started: bool
    game_over: bool
    status: Status
    winner: Optional[ColorName]
    can_undo: bool
    can_redo: bool

    @classmethod
    def from_snapshot(cls, game_id: UUID, snapshot: GameSnapshot) -> "GameResponse":
        return cls(
            game_id=game_id,
            board=snapshot.board,
            turn=ColorName(snapshot.turn),
            selected_square=snapshot.selected_square,
            suggested_move=MoveResponse.from_model(snapshot.suggested_move),
            last_move=MoveResponse.from_model(snapshot.last_move),
            remaining_time=snapshot.remaining_time,
            started=snapshot.started,
            game_over=snapshot.game_over,
            status=Status(snapshot.status),
            winner=ColorName(snapshot.winner) if snapshot.winner else None,
            can_undo=snapshot.can_undo,
            can_redo=snapshot.can_redo,
        )


class SelectionResponse(BaseModel):
    selection_changed: bool
    move_committed: bool
    status: Status
    game: GameResponse

    @classmethod
    def from_outcome(
        cls, outcome: SelectionOutcome, game: GameResponse
    ) -> "SelectionResponse":
        return cls(
            selection_changed=outcome.selection_changed,
            move_committed=outcome.move_committed,
            status=Status(outcome.status),
            game=game,
        )


class SuggestionResponse(BaseModel):
    game_id: UUID
    suggested_move: Optional[MoveResponse]
