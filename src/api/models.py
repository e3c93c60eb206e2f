"""Requests and Response models"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Direction, GameResult
from src.tactickle.moves import parse_direction

PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_one: PlayerName
    player_two: PlayerName
    starting_player: int = 0

    @field_validator(*["player_one", "player_two"])
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value.strip()

    @field_validator("starting_player")
    @classmethod
    def validate_starting_player(cls, value: int) -> int:
        if value not in (0, 1):
            raise InvalidRequestError(
                f"starting_player must be 0 (first player) or 1 (second player), got {value}."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName
    square: str
    direction: Direction

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        """Only checks the shape (letter + digit). Whether the square is on the board is for the game to decide."""

        def _is_square_notation(value: str) -> bool:
            if len(value) != 2:
                return False

            first_character = value[0]
            second_character = value[1]
            if not (first_character.isalpha() and second_character.isnumeric()):
                return False
            return True

        value = value.strip()
        if not _is_square_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value.upper()

    @field_validator("direction", mode="before")
    @classmethod
    def validate_direction(cls, value: Any) -> Direction:
        """Accepts the direction names as well as the w/a/s/d keys."""
        direction = parse_direction(value) if isinstance(value, str) else None
        if direction is None:
            raise InvalidRequestError(
                f"Cannot interpret direction: {value!r}. Use up/down/left/right or w/s/a/d."
            )
        return direction


class ImportSaveRequest(BaseModel):
    save_data: str


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: list[PlayerName]
    board_state: list[int]
    current_player: PlayerName
    current_color: str
    move_count: int
    move_history: list[str]
    status: str
    winner: Optional[PlayerName] = None


class MoveResponse(BaseModel):
    success: bool
    message: str
    result: Optional[GameResult]
    game: GameResponse


class RecordResponse(BaseModel):
    winner: PlayerName
    loser: PlayerName
    move_count: int
    played_at: datetime
