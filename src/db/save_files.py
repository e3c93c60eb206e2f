"""Save files on disk: one versioned JSON document per saved game (format defined in src/tactickle/save_data.py)"""

import logging
import os
import re
from datetime import datetime
from pathlib import Path

from src.core.exceptions import RepositoryError
from src.tactickle.save_data import decode_save, encode_save
from src.tactickle.state import GameState

logger = logging.getLogger(__name__)

SAVES_DIRECTORY = os.environ.get("TACTICKLE_SAVES_DIR", "./saves")
SAVE_SUFFIX = ".json"

_UNSAFE_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class SaveFileStore:
    """Save / load / list / delete save files in a single directory."""

    def __init__(self, saves_directory: str | Path = SAVES_DIRECTORY) -> None:
        self.directory = Path(saves_directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def save_game(self, state: GameState, filename: str = "") -> Path:
        """Write the game to disk and return the path of the file."""
        if not filename.strip():
            filename = f"save_{datetime.now():%Y%m%d_%H%M%S}"
        path = self._path(filename)
        path.write_text(encode_save(state), encoding="utf-8")
        logger.info("Saved game of %s vs %s to %s", *state.players, path)
        return path

    def load_game(self, filename: str) -> GameState:
        """Read a save file. Raises RepositoryError when it does not exist; decoding errors propagate."""
        if not filename.strip():
            raise RepositoryError("Filename cannot be empty.")
        path = self._path(filename)
        if not path.is_file():
            raise RepositoryError(f"Save file not found: {path}")
        state = decode_save(path.read_text(encoding="utf-8"))
        logger.info("Loaded game from %s", path)
        return state

    def list_saves(self) -> list[str]:
        """File names (without directory), newest name first."""
        return sorted(
            (path.name for path in self.directory.glob(f"*{SAVE_SUFFIX}")),
            reverse=True,
        )

    def delete_save(self, filename: str) -> bool:
        path = self._path(filename)
        if not path.is_file():
            return False
        path.unlink()
        logger.info("Deleted save file %s", path)
        return True

    def _path(self, filename: str) -> Path:
        name = _UNSAFE_CHARACTERS.sub("_", filename.strip())
        if not name.endswith(SAVE_SUFFIX):
            name += SAVE_SUFFIX
        return self.directory / name
