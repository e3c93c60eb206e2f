"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import NotationFormatError, OutOfRangeError

# TacTickle is always played on a 4x4 board: (rows, columns)
BOARD_DIMENSIONS = (4, 4)


@dataclass(frozen=True)
class Coordinate:
    """(row, column) on the board, both zero-based. Row 0 is the row labelled '1' in notation."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.row, self.column):
            raise OutOfRangeError(
                f"({self.row}, {self.column}) is outside of the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )

    @classmethod
    def from_notation(cls, notation: str) -> Coordinate:
        """Notation: 'A1' - 'D4' get converted to (0, 0) - (3, 3). Lower case letters are fine too."""
        if notation is None or not notation.strip():
            raise NotationFormatError("Notation cannot be empty.")

        notation = notation.strip()
        column_char = notation[0].upper()
        if not column_char.isalpha():
            raise NotationFormatError(
                f"Unable to parse column letter from notation {notation!r}."
            )

        column = ord(column_char) - ord("A")
        if not 0 <= column < BOARD_DIMENSIONS[1]:
            raise OutOfRangeError(
                f"Column letter in {notation!r} is outside of the board range."
            )

        row_part = notation[1:]
        if not (row_part.isascii() and row_part.isdigit()):
            raise NotationFormatError(
                f"Unable to parse row number from notation {notation!r}."
            )

        row_number = int(row_part)
        if not 1 <= row_number <= BOARD_DIMENSIONS[0]:
            raise OutOfRangeError(
                f"Row number in {notation!r} is outside of the board range."
            )
        return cls(row_number - 1, column)

    def to_notation(self) -> str:
        return f"{chr(self.column + ord('A'))}{self.row + 1}"

    def __str__(self) -> str:
        return self.to_notation()


def is_within_bounds(row: int, column: int) -> bool:
    return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= column < BOARD_DIMENSIONS[1])


def all_coordinates() -> list[Coordinate]:
    """Every square on the board, row-major."""
    return [
        Coordinate(row, column)
        for row in range(BOARD_DIMENSIONS[0])
        for column in range(BOARD_DIMENSIONS[1])
    ]
