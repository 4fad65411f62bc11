"""Persisted best score: a single named integer in a small JSON file."""

import json
import logging
import os
from pathlib import Path

from dinobus.exceptions import StorageUnavailableError, StorageWriteError

logger = logging.getLogger(__name__)

HIGHSCORE_KEY = "dinobus_highscore"


class HighScoreStore:
    """
    Reads and writes the high score.

    The file holds ``{"dinobus_highscore": <int>}``. The directory is
    created (and checked for write access) up front so a broken location
    fails at start-up instead of at the end of the first run.
    """

    def __init__(self, path: Path, key: str = HIGHSCORE_KEY) -> None:
        self.path = Path(path).expanduser()
        self.key = key

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot create {self.path.parent}: {e}") from e

        if not os.access(self.path.parent, os.W_OK):
            raise StorageUnavailableError(f"High score directory is not writable: {self.path.parent}")

        logger.info(f"High score store at {self.path}")

    def load(self) -> int:
        """Read the stored high score; 0 when missing or unreadable."""
        if not self.path.exists():
            return 0

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = data.get(self.key, 0)
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ValueError(f"unexpected value {value!r}")
            return max(0, int(value))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable high score file {self.path}: {e}")
            return 0

    def save(self, score: int) -> None:
        """Atomically write ``score`` (temp file, then replace)."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps({self.key: int(score)}), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.debug(f"Could not remove {tmp_path}")
            raise StorageWriteError(f"Failed to save high score to {self.path}: {e}") from e

        logger.info(f"High score saved: {score}")
