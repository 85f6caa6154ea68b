"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    OUT_OF_TIME = "out of time"


# --- Color names as they travel across the layers. The domain itself uses src.chess.pieces.Color
class ColorName(StrEnum):
    WHITE = "white"
    BLACK = "black"
