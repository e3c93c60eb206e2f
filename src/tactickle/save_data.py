"""
Versioned save file format.

A save file is a JSON document. Two version markers travel with every file:

* formatVersion: the version of the schema the file was written with.
* minCompatibleVersion: the oldest schema this version of the game still reads.

Decoding refuses files written with an older schema than MIN_COMPATIBLE_FORMAT_VERSION or a newer one than
CURRENT_FORMAT_VERSION before anything is built from them.
"""

from datetime import datetime, timezone
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.exceptions import (
    IncompatibleSaveError,
    OutOfRangeError,
    StateMismatchError,
)
from src.core.shared_types import CellState
from src.tactickle.board import CELL_COUNT
from src.tactickle.coordinate import Coordinate
from src.tactickle.moves import Move
from src.tactickle.state import GameState, player_color

# Bump CURRENT when making incompatible schema changes.
CURRENT_FORMAT_VERSION = 1
MIN_COMPATIBLE_FORMAT_VERSION = 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MoveRecord(BaseModel):
    """One move of the history, as written to the save file."""

    model_config = ConfigDict(populate_by_name=True)

    player_name: str = Field(alias="playerName")
    player_color: str = Field(alias="playerColor")
    from_row: int = Field(alias="fromRow")
    from_column: int = Field(alias="fromColumn")
    to_row: int = Field(alias="toRow")
    to_column: int = Field(alias="toColumn")
    move_number: int = Field(alias="moveNumber")
    timestamp: datetime = Field(default_factory=utc_now)


class SaveGameData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format_version: int = Field(default=CURRENT_FORMAT_VERSION, alias="formatVersion")
    min_compatible_version: int = Field(
        default=MIN_COMPATIBLE_FORMAT_VERSION, alias="minCompatibleVersion"
    )
    timestamp: datetime = Field(default_factory=utc_now)
    player1_name: str = Field(default="", alias="player1Name")
    player2_name: str = Field(default="", alias="player2Name")
    current_player_index: int = Field(default=0, alias="currentPlayerIndex")
    move_count: int = Field(default=0, alias="moveCount")
    board_state: list[int] = Field(default_factory=list, alias="boardState")
    move_history: list[MoveRecord] = Field(default_factory=list, alias="moveHistory")

    @classmethod
    def from_state(cls, state: GameState) -> Self:
        codes, current_player_index, move_count = state.export()
        return cls(
            player1_name=state.players[0],
            player2_name=state.players[1],
            current_player_index=current_player_index,
            move_count=move_count,
            board_state=codes,
            move_history=[
                _move_record(state, number, move)
                for number, move in enumerate(state.moves, start=1)
            ],
        )


def encode_save(state: GameState) -> str:
    """Serialise a game to the (indented) save file JSON."""
    return SaveGameData.from_state(state).model_dump_json(by_alias=True, indent=2)


def decode_save(raw: str | bytes) -> GameState:
    """
    Parse save file JSON back into a GameState.
    ---

    1. valid JSON with the expected shape? --> IncompatibleSaveError otherwise
    2. version gate: min compatible <= formatVersion <= current --> IncompatibleSaveError otherwise
    3. sanity checks on the content --> StateMismatchError
    4. only then build the GameState
    """
    try:
        data = SaveGameData.model_validate_json(raw)
    except ValidationError as exc:
        raise IncompatibleSaveError(
            "Save file is not valid JSON or has unexpected format."
        ) from exc

    check_compatibility(data.format_version)

    if not data.player1_name.strip() or not data.player2_name.strip():
        raise StateMismatchError("Save file missing player names.")
    if len(data.board_state) != CELL_COUNT:
        raise StateMismatchError("Save file has invalid board state.")
    if data.current_player_index not in (0, 1):
        raise StateMismatchError("Save file has invalid current player index.")
    if data.move_count < 0:
        raise StateMismatchError("Save file has invalid move count.")

    state = GameState.restore(
        players=(data.player1_name, data.player2_name),
        codes=data.board_state,
        current_player_index=data.current_player_index,
        move_count=data.move_count,
    )
    state.moves.extend(_to_move(record) for record in data.move_history)
    return state


def check_compatibility(format_version: int) -> None:
    if format_version < MIN_COMPATIBLE_FORMAT_VERSION:
        raise IncompatibleSaveError(
            f"Save format version {format_version} is too old and incompatible (minimum supported: {MIN_COMPATIBLE_FORMAT_VERSION})."
        )
    if format_version > CURRENT_FORMAT_VERSION:
        raise IncompatibleSaveError(
            f"Save format version {format_version} is newer than this version of the game supports (current: {CURRENT_FORMAT_VERSION})."
        )


# -- HELPERS --
def _move_record(state: GameState, number: int, move: Move) -> MoveRecord:
    player_index = 0 if move.color == player_color(0) else 1
    return MoveRecord(
        player_name=state.players[player_index],
        player_color=move.color.name.lower(),
        from_row=move.from_square.row,
        from_column=move.from_square.column,
        to_row=move.to_square.row,
        to_column=move.to_square.column,
        move_number=number,
    )


def _to_move(record: MoveRecord) -> Move:
    color_name = record.player_color.upper()
    if color_name not in (CellState.WHITE.name, CellState.BLACK.name):
        raise StateMismatchError(f"Save file has invalid move color {record.player_color!r}.")
    return Move(
        from_square=_coordinate(record.from_row, record.from_column),
        to_square=_coordinate(record.to_row, record.to_column),
        color=CellState[color_name],
    )


def _coordinate(row: int, column: int) -> Coordinate:
    try:
        return Coordinate(row, column)
    except OutOfRangeError as exc:
        raise StateMismatchError(f"Save file has a move outside of the board: ({row}, {column}).") from exc
