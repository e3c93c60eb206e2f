"""
Type definitions used across layers
"""

from enum import Enum, StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WON = "won"
    DRAW = "draw"


# --- NOTE the integer values double as the cell codes in saved games / exported boards. Do not renumber.
class CellState(Enum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class GameResult(StrEnum):
    CONTINUE = "continue"
    WIN = "win"
    DRAW = "draw"
