"""
Snapshot persistence for the game state.
"""

import json
import logging
import os
import tempfile

from models import GameState

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Saves the whole GameState as JSON and restores it verbatim."""

    def __init__(self, path: str) -> None:
        self.path = path

    def save(self, state: GameState) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(state.to_dict(), fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def load(self) -> GameState:
        """
        Restore the last snapshot. A missing or unreadable file yields a fresh,
        unconfigured state.
        """
        if not os.path.exists(self.path):
            return GameState()
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, exc)
            return GameState()
        if not isinstance(data, dict):
            logger.warning("Ignoring snapshot %s: not an object", self.path)
            return GameState()
        try:
            return GameState.from_dict(data)
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.warning("Ignoring malformed snapshot %s: %s", self.path, exc)
            return GameState()

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
