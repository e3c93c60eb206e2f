"""Unit tests for src/db/sql_repository.py"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.models import GameModel, RecordModel
from src.core.shared_types import Status
from src.db.sql_repository import SQLGameRepository, SQLRecordRepository

STARTING_CODES = [2, 1, 2, 1] + [0] * 8 + [1, 2, 1, 2]


def _game_model(**changes) -> GameModel:
    data = dict(
        players=["Alice", "Bob"],
        board_state=list(STARTING_CODES),
        current_player_index=0,
        move_count=0,
        status=Status.IN_PROGRESS,
        moves=[],
    )
    data.update(changes)
    return GameModel(**data)


# -- GAMES --
def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = _game_model()

    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(_game_model(moves=["A1A2"], move_count=1, current_player_index=1))
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(_game_model())
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """
    Update an earlier created record.
    """
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(_game_model())

    board = list(STARTING_CODES)
    board[0], board[4] = 0, 2
    updated = _game_model(board_state=board, moves=["A1A2"], move_count=1, current_player_index=1)
    result = repo.update_game(game_id, updated)

    assert result == updated
    assert repo.get_game(game_id) == updated


def test_update_finished_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(_game_model())

    finished = _game_model(status=Status.WON, winner="Alice", move_count=9)
    repo.update_game(game_id, finished)

    stored = repo.get_game(game_id)
    assert stored is not None
    assert stored.status == Status.WON
    assert stored.winner == "Alice"


def test_update_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), _game_model()) is None


def test_delete_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model, game_id = repo.create_game(_game_model())

    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None


# -- RECORDS --
def test_add_record(db_session_repo: Session) -> None:
    repo = SQLRecordRepository(db_session_repo)
    repo.add_record("Alice", "Bob", 7)

    records = repo.all_records()
    assert len(records) == 1
    record = records[0]
    assert isinstance(record, RecordModel)
    assert (record.winner, record.loser, record.move_count) == ("Alice", "Bob", 7)
    assert isinstance(record.played_at, datetime)


def test_top_records_fastest_first(db_session_repo: Session) -> None:
    repo = SQLRecordRepository(db_session_repo)
    for winner, loser, move_count in [("A", "B", 12), ("C", "D", 5), ("E", "F", 9), ("G", "H", 5)]:
        repo.add_record(winner, loser, move_count)

    top = repo.top_records(3)
    assert [record.move_count for record in top] == [5, 5, 9]
    # on equal move counts the most recent win comes first
    assert [record.winner for record in top[:2]] == ["G", "C"]


def test_top_records_on_empty_table(db_session_repo: Session) -> None:
    repo = SQLRecordRepository(db_session_repo)
    assert repo.top_records() == []
    assert repo.all_records() == []
