"""
Progress Store
==============
Persists the single "current level index" between runs as a small JSON
file. Unreadable saves fall back to level 0.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional

from logic.settings import resolve_save_path

logger = logging.getLogger(__name__)

SAVE_KEY = "SavedLevel"


class ProgressStore:
    def __init__(self, path: Optional[str] = None):
        self.path = path or resolve_save_path()

    def has_saved_level(self) -> bool:
        return os.path.exists(self.path)

    def load(self) -> int:
        if not self.has_saved_level():
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            level = int(data[SAVE_KEY])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable save %s: %s", self.path, e)
            return 0
        if level < 0:
            logger.warning("Ignoring negative saved level %d", level)
            return 0
        return level

    def save(self, level: int) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({SAVE_KEY: int(level)}, f)
        logger.debug("Saved level %d to %s", level, self.path)

    def reset(self) -> None:
        if self.has_saved_level():
            os.remove(self.path)
