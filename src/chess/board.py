"""The Board is the value every other part of the engine works on: which piece stands on which square"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

Grid = tuple[tuple[Optional[Piece], ...], ...]


@dataclass(frozen=True)
class Board:
    """
    Immutable 8x8 grid. `None` marks an empty square.

    Every mutator returns a new Board, so a snapshot stored in the history can never change underneath it.
    """

    grid: Grid

    @classmethod
    def initial(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def empty(cls) -> Self:
        return cls.from_fen("/".join(["8"] * BOARD_DIMENSIONS[0]))

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the piece placement field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), read from the a-file to the h-file
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces
        """
        rows: list[tuple[Optional[Piece], ...]] = []
        for fen_one_rank in fen_str.split("/"):
            row: list[Optional[Piece]] = []
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    row.append(Piece.from_symbol(character))
                else:
                    # A number denotes the amount of empty squares after each other
                    row.extend([None] * int(character))
            rows.append(tuple(row))
        return cls(tuple(rows))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: tuple[Optional[Piece], ...]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_symbol())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def with_piece(self, square: Square, piece: Optional[Piece]) -> "Board":
        """Copy of the board with a single square changed"""
        row = list(self.grid[square.row])
        row[square.col] = piece
        grid = list(self.grid)
        grid[square.row] = tuple(row)
        return Board(tuple(grid))

    def move_piece(self, from_square: Square, to_square: Square) -> "Board":
        """Relocate whatever stands on from_square. Anything on to_square is captured."""
        moving_piece = self.piece(from_square)
        return self.with_piece(from_square, None).with_piece(to_square, moving_piece)

    def squares_of(self, color: Color) -> list[Square]:
        return [
            square
            for square in all_squares()
            if (piece := self.piece(square)) is not None and piece.color == color
        ]

    def find(self, piece: Piece) -> Optional[Square]:
        """First square (row by row) holding the given piece"""
        return next(
            (square for square in all_squares() if self.piece(square) == piece), None
        )

    def locate_king(self, color: Color) -> Optional[Square]:
        return self.find(Piece(PieceType.KING, color))

    def rows(self) -> list[list[Optional[str]]]:
        """Symbol grid handed to the presentation layer"""
        return [
            [piece.to_symbol() if piece else None for piece in row]
            for row in self.grid
        ]
