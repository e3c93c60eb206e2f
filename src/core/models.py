"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# Type aliases to make the models easier to read
PlayerName = str
CellCode = int
MoveNotation = str


@dataclass
class GameModel:
    """Transport-safe representation of a TacTickle game used between API, Service, DB, and Game layers."""

    players: list[PlayerName]
    board_state: list[CellCode]
    current_player_index: int
    move_count: int
    status: str
    moves: list[MoveNotation] = field(default_factory=list)
    winner: Optional[PlayerName] = None


@dataclass
class RecordModel:
    """A finished (won) game in the records table."""

    winner: PlayerName
    loser: PlayerName
    move_count: int
    played_at: datetime
