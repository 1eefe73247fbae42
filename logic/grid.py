"""
Grid
====
Square lattice of cells holding colored endpoints.

Cells are addressed by integer (x, y). World coordinates put the board
centre on the origin, one cell_size per cell, so pointer input can be
mapped back onto cells.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from logic.colors import Color

GridPosition = Tuple[int, int]
Point = Tuple[float, float]


@dataclass
class Endpoint:
    id: int
    position: GridPosition
    color: Color
    connected: bool = False
    connected_to: Optional[int] = None   # partner endpoint id

    def connect(self, other: "Endpoint") -> None:
        self.connected = True
        self.connected_to = other.id

    def disconnect(self) -> None:
        self.connected = False
        self.connected_to = None


class Grid:
    def __init__(self, grid_size: int, cell_size: float = 1.0):
        self.grid_size = grid_size
        self.cell_size = cell_size
        self._cells: Dict[GridPosition, Endpoint] = {}
        self._endpoints: List[Endpoint] = []

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def at(self, x: int, y: int) -> Optional[Endpoint]:
        if not self.in_bounds(x, y):
            return None
        return self._cells.get((x, y))

    def place(self, x: int, y: int, color: Color) -> Endpoint:
        endpoint = Endpoint(id=len(self._endpoints), position=(x, y), color=color)
        self._endpoints.append(endpoint)
        self._cells[(x, y)] = endpoint
        return endpoint

    def endpoint(self, endpoint_id: Optional[int]) -> Optional[Endpoint]:
        if endpoint_id is None or not (0 <= endpoint_id < len(self._endpoints)):
            return None
        return self._endpoints[endpoint_id]

    def endpoints(self) -> List[Endpoint]:
        return list(self._endpoints)

    # ── Coordinates ─────────────────────────────────────────────

    @property
    def _offset(self) -> float:
        return (self.grid_size - 1) * self.cell_size * 0.5

    def cell_to_world(self, position: GridPosition) -> Point:
        x, y = position
        return (x * self.cell_size - self._offset, y * self.cell_size - self._offset)

    def world_to_cell(self, point: Point) -> Optional[GridPosition]:
        """Nearest cell to a world point, or None when it falls off the board."""
        x = int(round((point[0] + self._offset) / self.cell_size))
        y = int(round((point[1] + self._offset) / self.cell_size))
        if not self.in_bounds(x, y):
            return None
        return (x, y)

    def endpoint_at_world(self, point: Point, radius: float = 0.4) -> Optional[Endpoint]:
        """Endpoint whose disc (radius in cell units) contains the world point."""
        cell = self.world_to_cell(point)
        if cell is None:
            return None
        endpoint = self.at(*cell)
        if endpoint is None:
            return None
        cx, cy = self.cell_to_world(cell)
        if math.hypot(point[0] - cx, point[1] - cy) > radius * self.cell_size:
            return None
        return endpoint
