"""
State of a single game: the board, who plays, whose turn it is and how many moves were made.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.core.exceptions import InvalidRequestError, OutOfRangeError, StateMismatchError
from src.core.models import GameModel
from src.core.shared_types import CellState, Status
from src.tactickle.board import Board
from src.tactickle.moves import Move

# Fixed by seat, never stored per player: the first player plays white, the second black.
PLAYER_COLORS: tuple[CellState, CellState] = (CellState.WHITE, CellState.BLACK)


@dataclass
class GameState:
    players: tuple[str, str]
    board: Board
    current_player_index: int = 0
    move_count: int = 0
    moves: list[Move] = field(default_factory=list)

    @classmethod
    def new(
        cls, player_one: str, player_two: str, starting_player_index: int = 0
    ) -> Self:
        """Fresh game in the starting position."""
        players = (_clean_name(player_one), _clean_name(player_two))
        state = cls(players=players, board=Board.starting_position())
        state.set_current_player(starting_player_index)
        return state

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""
        state = cls.restore(
            players=model.players,
            codes=model.board_state,
            current_player_index=model.current_player_index,
            move_count=model.move_count,
        )
        # Turns strictly alternate, so the colors of the recorded moves follow from who made the last one:
        # the player to move, if the game already ended on that move, otherwise their opponent.
        last_mover = state.current_player_index
        if model.status == Status.IN_PROGRESS:
            last_mover = (last_mover + 1) % 2
        for moves_ago, notation in enumerate(reversed(model.moves)):
            color = PLAYER_COLORS[(last_mover + moves_ago) % 2]
            state.moves.insert(0, Move.from_notation(notation, color))
        return state

    @classmethod
    def restore(
        cls,
        players: Iterable[str],
        codes: Iterable[int],
        current_player_index: int,
        move_count: int,
    ) -> Self:
        """
        Rebuild a game from persisted data.

        Everything is validated before the state is built, so a failed restore never leaves a half-loaded game behind.
        """
        names = [name.strip() if isinstance(name, str) else "" for name in players]
        if len(names) != 2 or not all(names):
            raise StateMismatchError("Stored game must have two non-empty player names.")
        if current_player_index not in (0, 1):
            raise StateMismatchError(
                f"Invalid current player index: {current_player_index!r}."
            )
        if move_count < 0:
            raise StateMismatchError(f"Invalid move count: {move_count!r}.")

        board = Board.from_codes(codes)
        return cls(
            players=(names[0], names[1]),
            board=board,
            current_player_index=current_player_index,
            move_count=move_count,
        )

    def to_model(self, status: Status = Status.IN_PROGRESS, winner: Optional[str] = None) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            players=list(self.players),
            board_state=self.board.to_codes(),
            current_player_index=self.current_player_index,
            move_count=self.move_count,
            status=str(status),
            moves=[move.to_notation() for move in self.moves],
            winner=winner,
        )

    def export(self) -> tuple[list[int], int, int]:
        """(cell codes row-major, current player index, move count)"""
        return self.board.to_codes(), self.current_player_index, self.move_count

    # -- TURN HANDLING --
    @property
    def current_player(self) -> str:
        return self.players[self.current_player_index]

    @property
    def opponent(self) -> str:
        return self.players[(self.current_player_index + 1) % 2]

    @property
    def current_color(self) -> CellState:
        return player_color(self.current_player_index)

    def next_turn(self) -> None:
        """Count the move and hand the turn to the other player."""
        self.move_count += 1
        self.current_player_index = (self.current_player_index + 1) % len(self.players)

    def set_current_player(self, index: int) -> None:
        if index not in (0, 1):
            raise OutOfRangeError(f"Player index {index!r} is out of range.")
        self.current_player_index = index

    def set_move_count(self, count: int) -> None:
        """The counter only goes up during play (reset() is the way back to zero)."""
        if count < 0:
            raise OutOfRangeError(f"Move count cannot be negative, got {count}.")
        if count < self.move_count:
            raise OutOfRangeError(
                f"Move count cannot go back from {self.move_count} to {count}."
            )
        self.move_count = count

    def reset(self) -> None:
        """Back to the starting position with the same players."""
        self.board.initialize()
        self.move_count = 0
        self.current_player_index = 0
        self.moves.clear()


def player_color(index: int) -> CellState:
    if index not in (0, 1):
        raise OutOfRangeError(f"Player index {index!r} is out of range.")
    return PLAYER_COLORS[index]


def _clean_name(name: str) -> str:
    if name is None or not name.strip():
        raise InvalidRequestError("Player name cannot be empty.")
    return name.strip()

