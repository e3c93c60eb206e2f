"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    ImportSaveRequest,
    MoveRequest,
    MoveResponse,
    RecordResponse,
)
from src.core.exceptions import GameStateError, NotYourTurnError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import TOP_RECORDS_COUNT, GameRepository, RecordRepository
from src.tactickle.game import Draw, GameEngine, Rejected, Win, settled_status
from src.tactickle.save_data import decode_save, encode_save
from src.tactickle.state import GameState, player_color

logger = logging.getLogger(__name__)


class TacTickleService:
    """Orchestration of layers for a TacTickle game."""

    def __init__(self, repository: GameRepository, records: RecordRepository) -> None:
        self.repo = repository
        self.records = records

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Two players sit down at a new board."""

        # Use info in CreateGameRequest to create a new GameState, and convert into GameModel
        state = GameState.new(
            request.player_one, request.player_two, request.starting_player
        )
        created_game_data = state.to_model(Status.IN_PROGRESS)

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created game %s: %s vs %s", game_id, *state.players)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state."""
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        Illegal moves are raised as the matching IllegalMoveError so the caller can ask for a new move.
        Nothing is stored in that case.
        """

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(request.game_id)
        if stored_model.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {stored_model.status}")

        # Create a new GameState instance from the retrieved GameModel
        state = GameState.from_model(stored_model)
        if request.player_name != state.current_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {state.current_player} to make a move first."
            )

        # Attempt the move. The win is recorded further down, once the finished game is stored.
        engine = GameEngine(state)
        outcome = engine.make_move_from_notation(request.square, request.direction)
        if isinstance(outcome, Rejected):
            raise outcome.error(outcome.reason)

        status, winner = Status.IN_PROGRESS, None
        if isinstance(outcome, Win):
            status, winner = Status.WON, outcome.winner
            logger.info("Game %s won by %s after %d moves", request.game_id, winner, outcome.move_count)
        elif isinstance(outcome, Draw):
            status = Status.DRAW
            logger.info("Game %s drawn after %d moves", request.game_id, outcome.move_count)

        # Capture updated state in GameModel and store in repository
        after_move = state.to_model(status, winner)
        if self.repo.update_game(request.game_id, after_move) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} could not be updated.")
        if isinstance(outcome, Win):
            self.records.add_record(outcome.winner, outcome.loser, outcome.move_count)

        return MoveResponse(
            success=outcome.success,
            message=outcome.message,
            result=outcome.result,
            game=self._create_game_response(request.game_id, after_move),
        )

    def reset_game(self, request: GetGameRequest) -> GameResponse:
        """Start over with the same players."""
        state = GameState.from_model(self._fetch_game(request.game_id))
        state.reset()
        reset_model = state.to_model(Status.IN_PROGRESS)
        self.repo.update_game(request.game_id, reset_model)
        return self._create_game_response(request.game_id, reset_model)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    def export_save(self, request: GetGameRequest) -> str:
        """Save file contents (versioned JSON) of a stored game."""
        state = GameState.from_model(self._fetch_game(request.game_id))
        return encode_save(state)

    def import_save(self, request: ImportSaveRequest) -> GameResponse:
        """Continue a saved game. Incompatible / broken save data is rejected before anything is stored."""
        state = decode_save(request.save_data)
        # a save can hold a game that is already decided
        status, winner = settled_status(state)
        stored_game, game_id = self.repo.create_game(state.to_model(status, winner))
        logger.info("Imported saved game as %s (%s)", game_id, status)
        return self._create_game_response(game_id, stored_game)

    def top_records(self, count: int = TOP_RECORDS_COUNT) -> list[RecordResponse]:
        return [
            RecordResponse(
                winner=record.winner,
                loser=record.loser,
                move_count=record.move_count,
                played_at=record.played_at,
            )
            for record in self.records.top_records(count)
        ]

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            players=model.players,
            board_state=model.board_state,
            current_player=model.players[model.current_player_index],
            current_color=player_color(model.current_player_index).name.lower(),
            move_count=model.move_count,
            move_history=model.moves,
            status=model.status,
            winner=model.winner,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
