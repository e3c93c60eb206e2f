"""The Game board holds the `position` (the configuration of pieces on the 4x4 grid)"""

from dataclasses import dataclass
from typing import Iterable, Self

from src.core.exceptions import OutOfRangeError, StateMismatchError
from src.core.shared_types import CellState
from src.tactickle.coordinate import BOARD_DIMENSIONS, Coordinate, is_within_bounds

CELL_COUNT = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

# Pieces alternate colors along both edges, offset by one between the two edges.
STARTING_LAYOUT: dict[str, CellState] = {
    "A4": CellState.BLACK,
    "B4": CellState.WHITE,
    "C4": CellState.BLACK,
    "D4": CellState.WHITE,
    "A1": CellState.WHITE,
    "B1": CellState.BLACK,
    "C1": CellState.WHITE,
    "D1": CellState.BLACK,
}

CELL_SYMBOLS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.WHITE: "W",
    CellState.BLACK: "B",
}


@dataclass
class Board:
    cells: list[CellState]

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise StateMismatchError(
                f"Board must have exactly {CELL_COUNT} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls([CellState.EMPTY] * CELL_COUNT)

    @classmethod
    def starting_position(cls) -> Self:
        board = cls.empty()
        board.initialize()
        return board

    @classmethod
    def from_codes(cls, codes: Iterable[int]) -> Self:
        """Construct a board from the flat, row-major list of cell codes (the persisted format)."""
        board = cls.empty()
        board.restore(codes)
        return board

    def initialize(self) -> None:
        """Clear the board and place the pieces in the starting layout."""
        self.cells[:] = [CellState.EMPTY] * CELL_COUNT
        for notation, state in STARTING_LAYOUT.items():
            self.set_cell(Coordinate.from_notation(notation), state)

    # -- ACCESSORS --
    def cell(self, coord: Coordinate) -> CellState:
        return self.cells[self._index(coord.row, coord.column)]

    def set_cell(self, coord: Coordinate, state: CellState) -> None:
        self.cells[self._index(coord.row, coord.column)] = state

    def cell_at(self, row: int, column: int) -> CellState:
        return self.cells[self._index(row, column)]

    def set_cell_at(self, row: int, column: int, state: CellState) -> None:
        self.cells[self._index(row, column)] = state

    def locate_color(self, color: CellState) -> list[Coordinate]:
        return [
            Coordinate(idx // BOARD_DIMENSIONS[1], idx % BOARD_DIMENSIONS[1])
            for idx, state in enumerate(self.cells)
            if state == color
        ]

    def empty_cells(self) -> list[Coordinate]:
        return self.locate_color(CellState.EMPTY)

    # -- EXPORT / RESTORE --
    def to_codes(self) -> list[int]:
        """Flat, row-major list of cell codes."""
        return [state.value for state in self.cells]

    def restore(self, codes: Iterable[int]) -> None:
        """Bulk-replace the board. The incoming data must describe exactly 16 valid cells, otherwise nothing changes."""
        codes = list(codes)
        if len(codes) != CELL_COUNT:
            raise StateMismatchError(
                f"Board state dimensions do not match: expected {CELL_COUNT} cells, got {len(codes)}."
            )
        try:
            new_cells = [CellState(code) for code in codes]
        except ValueError as exc:
            raise StateMismatchError(f"Invalid cell code in board state: {exc}") from exc
        self.cells[:] = new_cells

    def render(self) -> str:
        """Plain text picture of the board. Far edge (row 4) on top, so UP on screen is UP on the board."""
        header = "  " + " ".join(
            chr(ord("A") + column) for column in range(BOARD_DIMENSIONS[1])
        )
        lines = [header]
        for row in reversed(range(BOARD_DIMENSIONS[0])):
            symbols = " ".join(
                CELL_SYMBOLS[self.cell_at(row, column)]
                for column in range(BOARD_DIMENSIONS[1])
            )
            lines.append(f"{row + 1} {symbols}")
        return "\n".join(lines)

    @staticmethod
    def _index(row: int, column: int) -> int:
        """The single bounds check every accessor goes through."""
        if not is_within_bounds(row, column):
            raise OutOfRangeError(
                f"({row}, {column}) is outside of the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )
        return row * BOARD_DIMENSIONS[1] + column
