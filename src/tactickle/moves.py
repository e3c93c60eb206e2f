"""
Movement rules

A piece slides exactly one square up, down, left or right into an empty square.
These functions only answer questions about a board; they never change it. The Game applies the move.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Self

from src.core.exceptions import (
    IllegalDestinationError,
    IllegalMoveError,
    InvalidSelectionError,
    NotationFormatError,
)
from src.core.shared_types import CellState, Direction
from src.tactickle.coordinate import Coordinate, is_within_bounds


class Board(Protocol):
    """Just the parts the movement rules need"""

    def cell(self, coord: Coordinate) -> CellState: ...


Vector = tuple[int, int]

# (d_row, d_column). Row numbers grow towards the far edge: UP from A1 lands on A2.
DIRECTION_DELTAS: dict[Direction, Vector] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

# Single-key controls of the console (w/a/s/d) next to the full names
DIRECTION_TOKENS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    **{direction.value: direction for direction in Direction},
}


@dataclass(frozen=True)
class Move:
    """A piece of `color` that slid from one square to the neighbouring one."""

    from_square: Coordinate
    to_square: Coordinate
    color: CellState

    @classmethod
    def from_notation(cls, notation: str, color: CellState) -> Self:
        """'A1A2': the piece on A1 moved to A2"""
        notation = notation.strip()
        if len(notation) != 4:
            raise NotationFormatError(f"Cannot interpret {notation!r} as a move.")
        return cls(
            Coordinate.from_notation(notation[:2]),
            Coordinate.from_notation(notation[2:]),
            color,
        )

    def to_notation(self) -> str:
        return f"{self.from_square.to_notation()}{self.to_square.to_notation()}"

    @property
    def direction(self) -> Optional[Direction]:
        delta = (
            self.to_square.row - self.from_square.row,
            self.to_square.column - self.from_square.column,
        )
        return next((d for d, vector in DIRECTION_DELTAS.items() if vector == delta), None)


@dataclass(frozen=True)
class MoveValidation:
    """Outcome of validating a move. `error` names the exception type matching the failure (None when valid)."""

    is_valid: bool
    message: str = ""
    error: Optional[type[IllegalMoveError]] = None


def parse_direction(token: str) -> Optional[Direction]:
    """'w' / 'up' / 'UP' -> Direction.UP. Returns None for anything else."""
    return DIRECTION_TOKENS.get(token.strip().lower())


def can_select_piece(board: Board, coord: Coordinate, expected_color: CellState) -> bool:
    """Only your own pieces can be picked up. (Empty squares never match.)"""
    return board.cell(coord) == expected_color


def can_move_in_direction(
    board: Board, from_square: Coordinate, direction: Direction
) -> Optional[Coordinate]:
    """Destination of a one-square slide, or None when it leaves the board or the square is taken."""
    d_row, d_column = DIRECTION_DELTAS[direction]
    new_row = from_square.row + d_row
    new_column = from_square.column + d_column
    if not is_within_bounds(new_row, new_column):
        return None

    target = Coordinate(new_row, new_column)
    if board.cell(target) != CellState.EMPTY:
        return None
    return target


def validate_move(
    board: Board,
    from_square: Coordinate,
    direction: Direction,
    player_color: CellState,
) -> MoveValidation:
    """
    Combines both checks. Purely advisory: nothing is changed on the board.

    1. Is it your piece?
    2. Is the square next to it (in the chosen direction) on the board and empty?
    """
    if not can_select_piece(board, from_square, player_color):
        return MoveValidation(
            is_valid=False,
            message=f"{from_square} does not hold one of your pieces.",
            error=InvalidSelectionError,
        )

    if can_move_in_direction(board, from_square, direction) is None:
        return MoveValidation(
            is_valid=False,
            message=f"Cannot move {from_square} {direction}: square is occupied or outside of the board.",
            error=IllegalDestinationError,
        )

    return MoveValidation(is_valid=True)
