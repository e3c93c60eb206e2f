"""Protocol repositories (SQLAlchemy implementation in sql_repository.py, tests use in-memory dictionaries)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, RecordModel

TOP_RECORDS_COUNT = 10


class GameRepository(Protocol):
    """Games in progress (and finished ones, until deleted)"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """None when no game is stored under this ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Stored game + the ID it was given."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored game. None when the ID is unknown."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """The removed game, or None when there was nothing to remove."""
        ...


class RecordRepository(Protocol):
    """Table of won games. Also serves as the engine's RecordSink."""

    def add_record(self, winner: str, loser: str, move_count: int) -> None: ...

    def top_records(self, count: int = TOP_RECORDS_COUNT) -> list[RecordModel]:
        """Fastest wins first (fewest moves), most recent first on equal move counts."""
        ...

    def all_records(self) -> list[RecordModel]: ...
