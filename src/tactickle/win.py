"""End of game conditions: three in a row wins, 30 moves is a draw."""

from typing import Optional, Protocol

from src.core.shared_types import CellState
from src.tactickle.coordinate import BOARD_DIMENSIONS, Coordinate, is_within_bounds

WIN_LENGTH = 3
MAX_MOVES = 30

Vector = tuple[int, int]


class Board(Protocol):
    def cell_at(self, row: int, column: int) -> CellState: ...


def _scan_lines() -> list[tuple[Coordinate, Vector]]:
    """
    (start square, step) of every line that is checked, in this order:

    * every row, left to right
    * every column, from row 0 onwards
    * the main diagonal, starting at (0, 0)
    * the anti-diagonal, starting at the top right (0, 3)
    """
    rows, columns = BOARD_DIMENSIONS
    lines: list[tuple[Coordinate, Vector]] = []
    lines.extend((Coordinate(row, 0), (0, 1)) for row in range(rows))
    lines.extend((Coordinate(0, column), (1, 0)) for column in range(columns))
    lines.append((Coordinate(0, 0), (1, 1)))
    lines.append((Coordinate(0, columns - 1), (1, -1)))
    return lines


SCAN_LINES = _scan_lines()


def winning_line(board: Board, color: CellState) -> Optional[list[Coordinate]]:
    """
    First run of WIN_LENGTH contiguous `color` squares, or None.

    Walk each line keeping a running count: +1 on a match, back to zero on anything else.
    A gap breaks the run, even if the line holds enough pieces overall.
    """
    for start, (d_row, d_column) in SCAN_LINES:
        run: list[Coordinate] = []
        row, column = start.row, start.column
        while is_within_bounds(row, column):
            if board.cell_at(row, column) == color:
                run.append(Coordinate(row, column))
                if len(run) >= WIN_LENGTH:
                    return run
            else:
                run = []
            row += d_row
            column += d_column
    return None


def check_win(board: Board, color: CellState) -> bool:
    return winning_line(board, color) is not None


def check_draw(move_count: int) -> bool:
    """Draw once MAX_MOVES moves have been made in total (not configurable)."""
    return move_count >= MAX_MOVES
