"""
Game Session
============
Level lifecycle around the connection engine: which level is being
played, loading it from the generator, advancing once it is solved and
resetting saved progress.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from logic.connection_engine import ConnectionEngine
from logic.generators.level_generator import LevelGenerator
from logic.level_data import LevelDescriptor
from logic.progress_store import ProgressStore

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        generator: Optional[LevelGenerator] = None,
        engine: Optional[ConnectionEngine] = None,
        store: Optional[ProgressStore] = None,
    ):
        self.generator = generator or LevelGenerator()
        self.engine = engine or ConnectionEngine()
        self.store = store or ProgressStore()
        self.current_level = 0
        self.descriptor: Optional[LevelDescriptor] = None
        self.level_solved = False
        self._solved_listeners: List[Callable[[int], None]] = []
        self._unsolved_listeners: List[Callable[[int], None]] = []

        self.engine.on_level_complete(self._on_level_complete)
        self.engine.on_level_unsolved(self._on_level_unsolved)

    @property
    def level_label(self) -> str:
        return f"Level {self.current_level + 1}"

    def on_level_solved(self, callback: Callable[[int], None]) -> Callable[[int], None]:
        """Observers receive the index of the level that was just solved."""
        self._solved_listeners.append(callback)
        return callback

    def on_level_unsolved(self, callback: Callable[[int], None]) -> Callable[[int], None]:
        self._unsolved_listeners.append(callback)
        return callback

    def start(self) -> LevelDescriptor:
        """Resume from the saved level (or level 0)."""
        return self.load_level(self.store.load())

    def load_level(self, level_index: int) -> LevelDescriptor:
        self.current_level = max(0, level_index)
        self.level_solved = False
        logger.info("Loading level %d", self.current_level)
        self.descriptor = self.generator.generate(self.current_level)
        self.engine.setup_board(self.descriptor)
        return self.descriptor

    def next_level(self) -> Optional[LevelDescriptor]:
        """Advance once the current level is solved; None otherwise."""
        if not (self.level_solved and self.engine.is_level_complete()):
            return None
        return self.load_level(self.current_level + 1)

    def restart_level(self) -> LevelDescriptor:
        """Clear all drawn paths on the current layout."""
        if self.descriptor is None:
            return self.load_level(self.current_level)
        self.level_solved = False
        self.engine.setup_board(self.descriptor)
        return self.descriptor

    def reset_progress(self) -> LevelDescriptor:
        self.store.reset()
        return self.load_level(0)

    def shutdown(self) -> None:
        self.store.save(self.current_level)

    def _on_level_complete(self) -> None:
        self.level_solved = True
        for callback in list(self._solved_listeners):
            callback(self.current_level)

    def _on_level_unsolved(self) -> None:
        self.level_solved = False
        logger.debug("Level %d no longer solved", self.current_level)
        for callback in list(self._unsolved_listeners):
            callback(self.current_level)
