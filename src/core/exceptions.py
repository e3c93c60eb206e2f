"""
Custom exceptions.

Every exception raised on purpose by this package derives from GameError, so the layers above can catch
one type and leave the details to the layer that raised it.
"""


class GameError(Exception):
    """Top-level exception for anything going wrong while playing / storing a game."""


# --- COORDINATES / BOARD ---
class OutOfRangeError(GameError):
    """Coordinate or board index outside of the 4x4 board. Never clamped."""


class NotationFormatError(GameError):
    """Square notation like 'A1' could not be parsed."""


# --- MOVES ---
class IllegalMoveError(GameError):
    """Move is not allowed in the current position."""


class InvalidSelectionError(IllegalMoveError):
    """Selected square does not hold a piece of the player to move."""


class IllegalDestinationError(IllegalMoveError):
    """Destination square is occupied or off the board."""


# --- STATE / PERSISTENCE ---
class StateMismatchError(GameError):
    """Restored data does not describe a valid game (wrong dimensions, bad player index, negative move count, ...)."""


class IncompatibleSaveError(StateMismatchError):
    """Save file cannot be read: broken JSON or a format version this version of the game does not support."""


class GameStateError(GameError):
    """Action not allowed given the status of the game (e.g. moving after the game ended)."""


class NotYourTurnError(GameError):
    """A player attempted to move while it is the opponent's turn."""


class InvalidRequestError(GameError):
    """Incoming request did not pass validation."""


class RepositoryError(GameError):
    """Record could not be found / stored."""
