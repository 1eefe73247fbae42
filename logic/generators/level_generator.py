import logging
import random

from logic.colors import PALETTE
from logic.level_data import MAX_GRID_SIZE, MIN_GRID_SIZE, LevelDescriptor, PointData
from logic.settings import resolve_seed

logger = logging.getLogger(__name__)


class LevelGenerator:
    """
    Corridor-validated level generator.
    Grid size and pair count grow with the level index. Each pair is placed
    so that a straight or single-bend corridor of free cells joins its two
    endpoints at the time of placement, which keeps every level completable.
    A color whose second endpoint cannot be placed is dropped, so a level
    may hold fewer pairs than requested.
    """
    MIN_GRID_SIZE = MIN_GRID_SIZE
    MAX_GRID_SIZE = MAX_GRID_SIZE
    MIN_COLOR_PAIRS = 2
    MAX_COLOR_PAIRS = 8
    MIN_DISTANCE = 2
    MAX_DISTANCE = 6

    def __init__(self, rng=None, seed=None):
        if rng is None:
            rng = random.Random(seed if seed is not None else resolve_seed())
        self.rng = rng
        self.palette = list(PALETTE)

    def difficulty_for(self, level_index):
        level_index = max(0, int(level_index))
        grid_size = min(self.MIN_GRID_SIZE + level_index // 5, self.MAX_GRID_SIZE)
        num_pairs = min(self.MIN_COLOR_PAIRS + level_index // 3, self.MAX_COLOR_PAIRS, len(self.palette))
        return grid_size, num_pairs

    def generate(self, level_index):
        if level_index < 0:
            logger.warning("Negative level index %s, using 0", level_index)
            level_index = 0

        grid_size, num_pairs = self.difficulty_for(level_index)
        logger.debug("Level %d: grid %dx%d, color pairs: %d", level_index, grid_size, grid_size, num_pairs)

        colors = list(self.palette)
        self.rng.shuffle(colors)

        occupied = set()
        points = []
        for color in colors[:num_pairs]:
            first = self._find_free_cell(grid_size, occupied)
            if first is None:
                logger.warning("No free cell left for %s", color.display_name)
                break
            occupied.add(first)

            second = self._find_pair_cell(grid_size, occupied, first)
            if second is None:
                # Free the first endpoint and move on to the next color
                occupied.discard(first)
                logger.warning("No reachable partner cell for %s at %s, dropping color",
                               color.display_name, first)
                continue

            occupied.add(second)
            points.append(PointData(first[0], first[1], color.display_name))
            points.append(PointData(second[0], second[1], color.display_name))

        if len(points) < 2 * num_pairs:
            logger.warning("Level %d: placed %d of %d pairs", level_index, len(points) // 2, num_pairs)
        logger.debug("Generated %d points total (%d pairs)", len(points), len(points) // 2)
        return LevelDescriptor(grid_size=grid_size, points=points)

    def _find_free_cell(self, grid_size, occupied):
        free = [(x, y) for x in range(grid_size) for y in range(grid_size) if (x, y) not in occupied]
        if not free:
            return None
        return free[self.rng.randrange(len(free))]

    def _find_pair_cell(self, grid_size, occupied, first):
        candidates = [
            (x, y)
            for x in range(grid_size)
            for y in range(grid_size)
            if (x, y) not in occupied and self.is_valid_pair(first, (x, y), occupied)
        ]
        if not candidates:
            return None
        return candidates[self.rng.randrange(len(candidates))]

    def is_valid_pair(self, first, second, occupied):
        """
        Second endpoint must be another cell, within the Manhattan distance
        band, and joined to the first by a clear corridor.
        """
        x1, y1 = first
        x2, y2 = second
        if first == second:
            return False

        distance = abs(x2 - x1) + abs(y2 - y1)
        if distance < self.MIN_DISTANCE or distance > self.MAX_DISTANCE:
            return False

        return has_clear_corridor(first, second, occupied)


def _row_clear(y, xa, xb, occupied):
    """Cells strictly between columns xa and xb on row y are free."""
    lo, hi = min(xa, xb), max(xa, xb)
    return all((x, y) not in occupied for x in range(lo + 1, hi))


def _column_clear(x, ya, yb, occupied):
    """Cells strictly between rows ya and yb on column x are free."""
    lo, hi = min(ya, yb), max(ya, yb)
    return all((x, y) not in occupied for y in range(lo + 1, hi))


def has_clear_corridor(first, second, occupied):
    """
    Straight horizontal, straight vertical, or an L through (x2, y1) or
    (x1, y2), with every intermediate cell unoccupied.
    """
    x1, y1 = first
    x2, y2 = second

    if y1 == y2 and _row_clear(y1, x1, x2, occupied):
        return True
    if x1 == x2 and _column_clear(x1, y1, y2, occupied):
        return True

    # Bend at (x2, y1): along row y1, then down column x2
    if (x2, y1) not in occupied:
        if _row_clear(y1, x1, x2, occupied) and _column_clear(x2, y1, y2, occupied):
            return True

    # Bend at (x1, y2): down column x1, then along row y2
    if (x1, y2) not in occupied:
        if _column_clear(x1, y1, y2, occupied) and _row_clear(y2, x1, x2, occupied):
            return True

    return False


def generate_level(level_index, rng=None):
    """One-shot helper around LevelGenerator."""
    return LevelGenerator(rng=rng).generate(level_index)
