"""Implementation of the repositories using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel, RecordModel
from src.db.repository import TOP_RECORDS_COUNT
from src.db.schema import DBGame, DBRecord

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Games table, one row per game (board, players and move history as JSON columns)"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Insert a row under a fresh UUID."""
        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            players=list(game.players),
            board_state=list(game.board_state),
            current_player_index=game.current_player_index,
            move_count=game.move_count,
            moves=list(game.moves),
            status=game.status,
            winner=game.winner,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        # assign new lists: JSON columns do not track in-place mutation
        game_db.players = list(game.players)
        game_db.board_state = list(game.board_state)
        game_db.current_player_index = game.current_player_index
        game_db.move_count = game.move_count
        game_db.moves = list(game.moves)
        game_db.status = game.status
        game_db.winner = game.winner
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        logger.debug("Deleted game %s", game_id)
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Row --> GameModel (copies of the JSON lists, so callers cannot mutate the row)"""
        return GameModel(
            players=list(game_db.players),
            board_state=list(game_db.board_state),
            current_player_index=game_db.current_player_index,
            move_count=game_db.move_count,
            status=game_db.status,
            moves=list(game_db.moves),
            winner=game_db.winner,
        )


class SQLRecordRepository:
    """Table of won games stored using SQLAlchemy."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def add_record(self, winner: str, loser: str, move_count: int) -> None:
        """Store a won game."""
        record_db = DBRecord(winner=winner, loser=loser, move_count=move_count)
        self.db.add(record_db)
        self.db.commit()
        logger.info("Recorded win of %s over %s in %d moves", winner, loser, move_count)

    def top_records(self, count: int = TOP_RECORDS_COUNT) -> list[RecordModel]:
        """Fastest wins first (fewest moves), most recent first on equal move counts."""
        query = (
            select(DBRecord)
            .order_by(DBRecord.move_count.asc(), DBRecord.played_at.desc(), DBRecord.id.desc())
            .limit(count)
        )
        return [self._to_model(record_db) for record_db in self.db.scalars(query)]

    def all_records(self) -> list[RecordModel]:
        query = select(DBRecord).order_by(DBRecord.id)
        return [self._to_model(record_db) for record_db in self.db.scalars(query)]

    def _to_model(self, record_db: DBRecord) -> RecordModel:
        return RecordModel(
            winner=record_db.winner,
            loser=record_db.loser,
            move_count=record_db.move_count,
            played_at=record_db.played_at,
        )
