"""
Console front end: TacTickle played at a terminal (main menu, one game at a time).

All input / output goes through a GameIO object handed to the controller, so a game can be driven by a script
(tests) just as well as by a person at the keyboard (ConsoleIO).
"""

import argparse
import logging
import os
from typing import Callable, Optional, Protocol, Sequence

from src.core.exceptions import (
    NotationFormatError,
    OutOfRangeError,
    RepositoryError,
    StateMismatchError,
)
from src.core.models import RecordModel
from src.core.shared_types import CellState, Status
from src.db.repository import TOP_RECORDS_COUNT
from src.tactickle.coordinate import Coordinate
from src.tactickle.game import Draw, GameEngine, RecordSink, Rejected, Win, settled_status
from src.tactickle.moves import can_select_piece, parse_direction
from src.tactickle.state import GameState

logger = logging.getLogger(__name__)

QUIT_WORDS = ("quit", "exit", "q")
CANCEL_WORDS = ("cancel", "c")
YES_WORDS = ("y", "yes")

COLOR_NAMES: dict[CellState, str] = {
    CellState.WHITE: "white",
    CellState.BLACK: "black",
    CellState.EMPTY: "empty",
}

MENU_LINES = (
    "=== TacTickle ===",
    "1. New game",
    "2. Load game",
    "3. High scores",
    "4. Rules",
    "0. Exit",
)

RULES_LINES = (
    "Get three of your pieces in a row: across, down or along one of the two long diagonals.",
    "- Players take turns, white (player 1) moves first.",
    "- A move slides one of your pieces one square up, down, left or right onto an empty square.",
    "- No diagonal moves, no jumping.",
    "- After 30 moves without a winner the game is a draw.",
)


class GameIO(Protocol):
    def write(self, text: str = "") -> None: ...

    def read(self, prompt: str) -> Optional[str]:
        """Next line typed by the player, None when there is no more input."""
        ...


class SaveStore(Protocol):
    def save_game(self, state: GameState, filename: str = "") -> object: ...

    def load_game(self, filename: str) -> GameState: ...

    def list_saves(self) -> list[str]: ...


class RecordTable(RecordSink, Protocol):
    def top_records(self, count: int = TOP_RECORDS_COUNT) -> list[RecordModel]: ...


class ConsoleIO:
    """GameIO on stdin / stdout."""

    def write(self, text: str = "") -> None:
        print(text)

    def read(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None


class GameController:
    def __init__(
        self,
        state: GameState,
        io: GameIO,
        records: Optional[RecordSink] = None,
        saves: Optional[SaveStore] = None,
    ) -> None:
        self.state = state
        self.io = io
        self.saves = saves
        self.engine = GameEngine(state, records=records)

    def play(self) -> Optional[Win | Draw]:
        """
        Play until somebody wins, the game is drawn, or the player quits.
        ---

        Returns the final outcome, or None when the player quit (after being offered to save the game).
        Every mistake (unreadable square, somebody else's piece, blocked square, ...) just asks again.
        """
        while True:
            self._show_turn()

            answer = self.io.read("Square of the piece to move (e.g. A1), or 'quit': ")
            if answer is None or answer.strip().lower() in (*QUIT_WORDS, ""):
                self._offer_save()
                return None

            try:
                from_square = Coordinate.from_notation(answer)
            except (NotationFormatError, OutOfRangeError):
                self._error("Invalid square! Use the format A1-D4.")
                continue

            color = self.engine.current_player_color()
            if not can_select_piece(self.state.board, from_square, color):
                found = self.state.board.cell(from_square)
                self._error(
                    f"{from_square} is not one of your pieces (found: {COLOR_NAMES[found]}, expected: {COLOR_NAMES[color]})."
                )
                continue

            token = self.io.read("Direction: w - up, s - down, a - left, d - right (or 'cancel'): ")
            if token is None:
                self._offer_save()
                return None
            if token.strip().lower() in CANCEL_WORDS:
                continue

            direction = parse_direction(token)
            if direction is None:
                self._error("Invalid direction! Use w, s, a or d.")
                continue

            outcome = self.engine.make_move(from_square, direction)
            if isinstance(outcome, Rejected):
                self._error(outcome.message)
                continue

            if isinstance(outcome, (Win, Draw)):
                self.io.write(self.state.board.render())
                self.io.write(outcome.message)
                logger.info("Game finished: %s", outcome.message)
                return outcome

    # -- Internal helpers --
    def _show_turn(self) -> None:
        color = self.engine.current_player_color()
        self.io.write()
        self.io.write(self.state.board.render())
        self.io.write(
            f"Turn: {self.state.current_player} ({COLOR_NAMES[color]}), moves made: {self.state.move_count}"
        )

    def _error(self, message: str) -> None:
        self.io.write(f"Error: {message}")

    def _offer_save(self) -> None:
        if self.saves is None:
            return
        answer = self.io.read("Save the game? (y/n): ")
        if answer is None or answer.strip().lower() not in YES_WORDS:
            return
        name = self.io.read("Name of the save: ") or ""
        if not name.strip():
            name = f"{self.state.players[0]}_{self.state.players[1]}"
        path = self.saves.save_game(self.state, name)
        self.io.write(f"Game saved to {path}.")


class Menu:
    """
    Session loop around single games: new game, load a save, high scores, rules.
    ---

    Nothing that goes wrong in here ends the session: a save that cannot be loaded is reported and the menu is
    shown again.
    """

    def __init__(self, io: GameIO, saves: SaveStore, records: RecordTable) -> None:
        self.io = io
        self.saves = saves
        self.records = records

    def run(self) -> None:
        """Until '0' (or the end of input)."""
        handlers: dict[str, Callable[[], None]] = {
            "1": self.new_game,
            "2": self.load_game,
            "3": self.show_records,
            "4": self.show_rules,
        }
        while True:
            self.io.write()
            for line in MENU_LINES:
                self.io.write(line)
            choice = self.io.read("Choose an option: ")
            if choice is None or choice.strip() == "0":
                return
            handler = handlers.get(choice.strip())
            if handler is None:
                self.io.write("Error: Invalid choice!")
                continue
            handler()

    def play(self, state: GameState) -> Optional[Win | Draw]:
        return GameController(state, self.io, records=self.records, saves=self.saves).play()

    def new_game(self) -> None:
        player_one = _ask_name(self.io, "Player 1 (white): ", "Player 1")
        if player_one is None:
            return
        player_two = _ask_name(self.io, "Player 2 (black): ", "Player 2")
        if player_two is None:
            return
        self.play(GameState.new(player_one, player_two))

    def load_game(self) -> None:
        """Pick a save from a numbered list."""
        names = self.saves.list_saves()
        if not names:
            self.io.write("No saved games yet.")
            return

        for number, name in enumerate(names, start=1):
            self.io.write(f"{number}. {name}")
        self.io.write("0. Back")

        choice = self.io.read("Choose a save: ")
        if choice is None or choice.strip() in ("", "0"):
            return
        if not choice.strip().isdigit() or not 1 <= int(choice) <= len(names):
            self.io.write("Error: Invalid choice!")
            return

        state = load_save(self.saves, names[int(choice) - 1], self.io)
        if state is None:
            return
        self.io.write("Game loaded.")
        self.play(state)

    def show_records(self) -> None:
        records = self.records.top_records(TOP_RECORDS_COUNT)
        if not records:
            self.io.write("No records yet.")
            return
        self.io.write(f"{'Winner':<20} {'Loser':<20} {'Played at':<16}  Moves")
        self.io.write("-" * 65)
        for record in records:
            self.io.write(
                f"{record.winner:<20} {record.loser:<20} {record.played_at:%Y-%m-%d %H:%M}  {record.move_count:>5}"
            )

    def show_rules(self) -> None:
        for line in RULES_LINES:
            self.io.write(line)


def load_save(saves: SaveStore, filename: str, io: GameIO) -> Optional[GameState]:
    """Load a save to continue playing it. A failed load (or a game that is already over) is reported and gives None."""
    try:
        state = saves.load_game(filename)
    except (StateMismatchError, RepositoryError) as exc:
        logger.warning("Could not load save %r: %s", filename, exc)
        io.write(f"Error: could not load save: {exc}")
        return None

    status, _ = settled_status(state)
    if status != Status.IN_PROGRESS:
        io.write(f"Error: the game in {filename} is already over ({status}).")
        return None
    return state


def main(argv: Optional[Sequence[str]] = None, io: Optional[GameIO] = None) -> int:
    """Play TacTickle at the terminal. Wins end up in the records table of the configured database."""
    # imported here so the controller can be used without a database
    from src.db.database import SessionLocal, init_db
    from src.db.save_files import SAVES_DIRECTORY, SaveFileStore
    from src.db.sql_repository import SQLRecordRepository

    parser = argparse.ArgumentParser(prog="tactickle", description=__doc__)
    parser.add_argument("--load", metavar="SAVE", help="continue a saved game right away")
    parser.add_argument("--saves-dir", default=SAVES_DIRECTORY, help="directory of the save files")
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.environ.get("TACTICKLE_LOG_LEVEL", "WARNING").upper())

    if io is None:
        io = ConsoleIO()
    saves = SaveFileStore(args.saves_dir)

    state = None
    if args.load:
        state = load_save(saves, args.load, io)
        if state is None:
            return 1

    init_db()
    with SessionLocal() as db:
        menu = Menu(io, saves, SQLRecordRepository(db))
        if state is None:
            menu.run()
        else:
            menu.play(state)
    return 0


def _ask_name(io: GameIO, prompt: str, default: str) -> Optional[str]:
    """Blank answer --> default name. None at the end of input."""
    name = io.read(prompt)
    if name is None:
        return None
    return name.strip() or default


if __name__ == "__main__":
    raise SystemExit(main())
