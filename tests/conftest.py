"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import CellState
from src.tactickle.board import Board
from src.tactickle.coordinate import Coordinate
from src.tactickle.state import GameState

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    from src.db.schema import Base

    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def new_game() -> GameState:
    """Fresh game in the starting position, white (Alice) to move."""
    return GameState.new("Alice", "Bob")


@pytest.fixture
def board_from_rows() -> Callable[..., Board]:
    """
    Call the inner function with 4 strings of 4 characters to build a board.
    The first string is row 0 (the row labelled "1"). "W" = white, "B" = black, anything else = empty.
    """

    def _create_board(*rows: str) -> Board:
        board = Board.empty()
        for row, line in enumerate(rows):
            for column, character in enumerate(line):
                if character == "W":
                    board.set_cell(Coordinate(row, column), CellState.WHITE)
                elif character == "B":
                    board.set_cell(Coordinate(row, column), CellState.BLACK)
        return board

    return _create_board
