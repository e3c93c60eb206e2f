"""Unit tests for /src/tactickle/board.py"""

from typing import Callable

import pytest

from src.core.exceptions import OutOfRangeError, StateMismatchError
from src.core.shared_types import CellState
from src.tactickle.board import CELL_COUNT, Board
from src.tactickle.coordinate import Coordinate, all_coordinates


# -- CREATION LOGIC ---
def test_starting_position() -> None:
    """White on A1, C1, B4, D4. Black on B1, D1, A4, C4. Everything else empty."""
    board = Board.starting_position()

    expected = {
        "A1": CellState.WHITE,
        "B1": CellState.BLACK,
        "C1": CellState.WHITE,
        "D1": CellState.BLACK,
        "A4": CellState.BLACK,
        "B4": CellState.WHITE,
        "C4": CellState.BLACK,
        "D4": CellState.WHITE,
    }
    for notation, state in expected.items():
        assert board.cell(Coordinate.from_notation(notation)) == state

    empty = [
        coord for coord in all_coordinates() if coord.to_notation() not in expected
    ]
    assert len(empty) == 8
    assert all(board.cell(coord) == CellState.EMPTY for coord in empty)


def test_starting_position_piece_count() -> None:
    """Four pieces each"""
    board = Board.starting_position()
    assert len(board.locate_color(CellState.WHITE)) == 4
    assert len(board.locate_color(CellState.BLACK)) == 4
    assert len(board.empty_cells()) == 8


def test_empty_board() -> None:
    board = Board.empty()
    assert len(board.empty_cells()) == CELL_COUNT
    assert board.locate_color(CellState.WHITE) == []


def test_initialize_resets_the_board() -> None:
    """Whatever happened on the board, initialize() puts it back in the starting layout"""
    board = Board.empty()
    board.set_cell(Coordinate(1, 1), CellState.WHITE)
    board.set_cell(Coordinate(2, 2), CellState.BLACK)
    board.initialize()
    assert board == Board.starting_position()


@pytest.mark.parametrize("cell_count", [0, 15, 17])
def test_board_must_have_sixteen_cells(cell_count: int) -> None:
    with pytest.raises(StateMismatchError):
        _ = Board([CellState.EMPTY] * cell_count)


# -- ACCESSORS --
def test_set_and_get_cell() -> None:
    board = Board.empty()
    coord = Coordinate.from_notation("C2")
    board.set_cell(coord, CellState.BLACK)
    assert board.cell(coord) == CellState.BLACK
    assert board.cell_at(1, 2) == CellState.BLACK


@pytest.mark.parametrize("row, column", [(-1, 0), (0, -1), (4, 0), (0, 4)])
def test_out_of_bounds_access(row: int, column: int) -> None:
    """Index based access is bounds checked as well (no wrapping around with negative indices)"""
    board = Board.starting_position()
    with pytest.raises(OutOfRangeError):
        board.cell_at(row, column)
    with pytest.raises(OutOfRangeError):
        board.set_cell_at(row, column, CellState.WHITE)


# -- EXPORT / RESTORE --
def test_export_starting_position() -> None:
    """Row-major codes: Empty=0, Black=1, White=2. Row 0 is the row labelled '1'."""
    codes = Board.starting_position().to_codes()
    assert codes == [2, 1, 2, 1] + [0] * 8 + [1, 2, 1, 2]


def test_export_restore_roundtrip(board_from_rows: Callable[..., Board]) -> None:
    board = board_from_rows("W..B", ".WB.", "B...", "..WW")
    restored = Board.from_codes(board.to_codes())
    assert restored == board
    assert restored.to_codes() == board.to_codes()


@pytest.mark.parametrize("cell_count", [0, 15, 17, 32])
def test_restore_with_wrong_dimensions(cell_count: int) -> None:
    """Restoring needs exactly 16 cells. A failed restore leaves the board as it was."""
    board = Board.starting_position()
    with pytest.raises(StateMismatchError):
        board.restore([0] * cell_count)
    assert board == Board.starting_position()


def test_restore_with_invalid_code() -> None:
    board = Board.starting_position()
    with pytest.raises(StateMismatchError):
        board.restore([0] * 15 + [7])
    assert board == Board.starting_position()


def test_render_puts_far_edge_on_top() -> None:
    lines = Board.starting_position().render().splitlines()
    assert lines[0].split() == ["A", "B", "C", "D"]
    assert lines[1] == "4 B W B W"
    assert lines[-1] == "1 W B W B"
