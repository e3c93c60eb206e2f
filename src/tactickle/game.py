"""
The GameEngine will be the entrypoint into the domain layer for the service layer (and the console).
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
returns an outcome describing what happened, which the caller can then pass onwards.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol

from src.core.exceptions import (
    GameError,
    IllegalDestinationError,
    IllegalMoveError,
    NotationFormatError,
    OutOfRangeError,
)
from src.core.shared_types import CellState, Direction, GameResult, Status
from src.tactickle.coordinate import Coordinate
from src.tactickle.moves import Move, can_move_in_direction, validate_move
from src.tactickle.state import PLAYER_COLORS, GameState, player_color
from src.tactickle.win import MAX_MOVES, check_draw, check_win


class RecordSink(Protocol):
    """Whoever keeps the table of won games (see RecordRepository)"""

    def add_record(self, winner: str, loser: str, move_count: int) -> None: ...


# --- MOVE OUTCOMES ---
# Exactly one of these is returned per move attempt. Each one can still be read as the flat
# {success, message, result} triple the presentation layer expects.
@dataclass(frozen=True)
class Continue:
    move: Move
    next_player: str

    success: ClassVar[bool] = True
    result: ClassVar[Optional[GameResult]] = GameResult.CONTINUE

    @property
    def message(self) -> str:
        return f"{self.move.to_notation()} played. {self.next_player} to move."


@dataclass(frozen=True)
class Win:
    move: Move
    winner: str
    loser: str
    move_count: int  # moves completed, including the winning move

    success: ClassVar[bool] = True
    result: ClassVar[Optional[GameResult]] = GameResult.WIN

    @property
    def message(self) -> str:
        return f"{self.winner} wins after {self.move_count} moves!"


@dataclass(frozen=True)
class Draw:
    move: Move
    move_count: int

    success: ClassVar[bool] = True
    result: ClassVar[Optional[GameResult]] = GameResult.DRAW

    @property
    def message(self) -> str:
        return f"Draw! The game ended after {self.move_count} moves."


@dataclass(frozen=True)
class Rejected:
    """Nothing happened on the board; ask the player for another move."""

    reason: str
    error: type[GameError] = IllegalMoveError

    success: ClassVar[bool] = False
    result: ClassVar[Optional[GameResult]] = None

    @property
    def message(self) -> str:
        return self.reason


MoveOutcome = Continue | Win | Draw | Rejected


class GameEngine:
    # --- DOMAIN LAYER API CALLED BY SERVICE / CONSOLE ---

    def __init__(self, state: GameState, records: Optional[RecordSink] = None) -> None:
        self.state = state
        self.records = records

    def current_player_color(self) -> CellState:
        """Player 0 always plays white, player 1 black."""
        return player_color(self.state.current_player_index)

    def make_move(self, from_square: Coordinate, direction: Direction) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. find the color of the player to move
        2. validate the move (your piece? free square next to it?) --> reject without touching the board
        3. work out the destination again and refuse if the two checks disagree
        4. update the board (the only place the board changes during play)
        5. three in a row? --> Win, the turn stays with the winner
        6. 30th move? --> Draw, the turn stays where it is
        7. otherwise hand over the turn
        """
        color = self.current_player_color()

        validation = validate_move(self.state.board, from_square, direction, color)
        if not validation.is_valid:
            assert validation.error is not None
            return Rejected(validation.message, validation.error)

        to_square = can_move_in_direction(self.state.board, from_square, direction)
        if to_square is None:
            return Rejected("Cannot make this move.", IllegalDestinationError)

        move = Move(from_square, to_square, color)
        self._update_board(move)

        # the move just made counts, even when the turn is not handed over (win or draw)
        completed_moves = self.state.move_count + 1

        if check_win(self.state.board, color):
            self.state.set_move_count(completed_moves)
            outcome = Win(
                move=move,
                winner=self.state.current_player,
                loser=self.state.opponent,
                move_count=completed_moves,
            )
            self._record_win(outcome)
            return outcome

        if check_draw(completed_moves):
            self.state.set_move_count(completed_moves)
            return Draw(move=move, move_count=completed_moves)

        self.state.next_turn()
        return Continue(move=move, next_player=self.state.current_player)

    def make_move_from_notation(self, notation: str, direction: Direction) -> MoveOutcome:
        """Same as make_move, but a square that cannot be parsed is just another rejected move."""
        try:
            from_square = Coordinate.from_notation(notation)
        except (NotationFormatError, OutOfRangeError) as exc:
            return Rejected(str(exc), type(exc))
        return self.make_move(from_square, direction)

    @property
    def moves_left(self) -> int:
        return max(MAX_MOVES - self.state.move_count, 0)

    # -- PRIVATE HELPERS ---
    def _update_board(self, move: Move) -> None:
        self.state.board.set_cell(move.from_square, CellState.EMPTY)
        self.state.board.set_cell(move.to_square, move.color)
        self.state.moves.append(move)

    def _record_win(self, outcome: Win) -> None:
        if self.records is None:
            return
        self.records.add_record(outcome.winner, outcome.loser, outcome.move_count)


def settled_status(state: GameState) -> tuple[Status, Optional[str]]:
    """
    Status of a game that was restored rather than played here (e.g. imported from a save file).

    (WON, winner) when a player already has three in a row, (DRAW, None) once the move limit is used up,
    otherwise (IN_PROGRESS, None).
    """
    for index, color in enumerate(PLAYER_COLORS):
        if check_win(state.board, color):
            return Status.WON, state.players[index]
    if check_draw(state.move_count):
        return Status.DRAW, None
    return Status.IN_PROGRESS, None
