"""Unit tests for /src/tactickle/state.py"""

import pytest

from src.core.exceptions import InvalidRequestError, OutOfRangeError, StateMismatchError
from src.core.models import GameModel
from src.core.shared_types import CellState, Direction, Status
from src.tactickle.board import Board
from src.tactickle.coordinate import Coordinate
from src.tactickle.game import GameEngine
from src.tactickle.state import GameState, player_color


# -- CREATION LOGIC ---
def test_new_game(new_game: GameState) -> None:
    assert new_game.players == ("Alice", "Bob")
    assert new_game.board == Board.starting_position()
    assert new_game.current_player_index == 0
    assert new_game.current_player == "Alice"
    assert new_game.opponent == "Bob"
    assert new_game.current_color == CellState.WHITE
    assert new_game.move_count == 0
    assert new_game.moves == []


def test_new_game_strips_names() -> None:
    state = GameState.new("  Alice ", "Bob\n")
    assert state.players == ("Alice", "Bob")


@pytest.mark.parametrize("names", [("", "Bob"), ("Alice", "   ")])
def test_new_game_needs_names(names: tuple[str, str]) -> None:
    with pytest.raises(InvalidRequestError):
        _ = GameState.new(*names)


def test_second_player_can_start() -> None:
    """Seats keep their colors: the second player is black, even when moving first"""
    state = GameState.new("Alice", "Bob", starting_player_index=1)
    assert state.current_player == "Bob"
    assert state.current_color == CellState.BLACK


# -- TURN HANDLING --
def test_next_turn(new_game: GameState) -> None:
    new_game.next_turn()
    assert new_game.current_player_index == 1
    assert new_game.move_count == 1
    new_game.next_turn()
    assert new_game.current_player_index == 0
    assert new_game.move_count == 2


@pytest.mark.parametrize("index", [-1, 2, 5])
def test_set_current_player_out_of_range(new_game: GameState, index: int) -> None:
    with pytest.raises(OutOfRangeError):
        new_game.set_current_player(index)
    assert new_game.current_player_index == 0


def test_set_move_count(new_game: GameState) -> None:
    new_game.set_move_count(12)
    assert new_game.move_count == 12
    with pytest.raises(OutOfRangeError):
        new_game.set_move_count(-1)
    assert new_game.move_count == 12


def test_move_count_never_goes_back(new_game: GameState) -> None:
    """Only reset() brings the counter back down"""
    new_game.set_move_count(5)
    with pytest.raises(OutOfRangeError):
        new_game.set_move_count(4)
    assert new_game.move_count == 5

    new_game.set_move_count(5)
    new_game.reset()
    assert new_game.move_count == 0


def test_player_color() -> None:
    assert player_color(0) == CellState.WHITE
    assert player_color(1) == CellState.BLACK
    with pytest.raises(OutOfRangeError):
        player_color(2)


def test_reset_keeps_players(new_game: GameState) -> None:
    engine = GameEngine(new_game)
    engine.make_move(Coordinate.from_notation("A1"), Direction.UP)
    engine.make_move(Coordinate.from_notation("B1"), Direction.UP)

    new_game.reset()

    assert new_game.players == ("Alice", "Bob")
    assert new_game.board == Board.starting_position()
    assert new_game.current_player_index == 0
    assert new_game.move_count == 0
    assert new_game.moves == []


# -- EXPORT / RESTORE --
def test_export_restore_roundtrip(new_game: GameState) -> None:
    engine = GameEngine(new_game)
    engine.make_move(Coordinate.from_notation("A1"), Direction.UP)

    codes, index, count = new_game.export()
    restored = GameState.restore(new_game.players, codes, index, count)

    assert restored.board == new_game.board
    assert restored.current_player_index == 1
    assert restored.move_count == 1


@pytest.mark.parametrize(
    "players, codes, index, count",
    [
        (("Alice", "Bob"), [0] * 15, 0, 0),
        (("Alice", "Bob"), [0] * 17, 0, 0),
        (("Alice", "Bob"), [0] * 15 + [3], 0, 0),
        (("Alice", "Bob"), [0] * 16, 2, 0),
        (("Alice", "Bob"), [0] * 16, -1, 0),
        (("Alice", "Bob"), [0] * 16, 0, -1),
        (("Alice", ""), [0] * 16, 0, 0),
        (("Alice",), [0] * 16, 0, 0),
    ],
    ids=["15-cells", "17-cells", "bad-code", "index-2", "index-negative", "negative-count", "blank-name", "one-player"],
)
def test_restore_rejects_invalid_data(
    players: tuple[str, ...], codes: list[int], index: int, count: int
) -> None:
    with pytest.raises(StateMismatchError):
        _ = GameState.restore(players, codes, index, count)


def test_model_roundtrip(new_game: GameState) -> None:
    """The move history keeps its colors when a game in progress is stored and loaded again"""
    engine = GameEngine(new_game)
    engine.make_move(Coordinate.from_notation("A1"), Direction.UP)
    engine.make_move(Coordinate.from_notation("B1"), Direction.UP)
    engine.make_move(Coordinate.from_notation("C1"), Direction.UP)

    model = new_game.to_model()
    assert model.status == "in progress"
    assert model.moves == ["A1A2", "B1B2", "C1C2"]

    loaded = GameState.from_model(model)
    assert loaded == new_game
    assert [move.color for move in loaded.moves] == [CellState.WHITE, CellState.BLACK, CellState.WHITE]


def test_model_of_finished_game() -> None:
    """After a win the turn stays with the winner, so the last move belongs to the current player"""
    model = GameModel(
        players=["Alice", "Bob"],
        board_state=[2, 2, 2, 1] + [0] * 8 + [1, 0, 1, 0],
        current_player_index=0,
        move_count=3,
        status=Status.WON,
        moves=["B4B3", "D4D3", "C2C1"],
        winner="Alice",
    )
    loaded = GameState.from_model(model)
    assert [move.color for move in loaded.moves] == [CellState.WHITE, CellState.BLACK, CellState.WHITE]
