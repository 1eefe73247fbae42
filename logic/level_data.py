"""
Level Descriptor
================
What the generator hands to the board: a grid size and an ordered list of
(x, y, color name) points, two per color.

The dict form is the JSON level layout:
    {"gridSize": 5, "points": [{"x": 0, "y": 1, "colorName": "Red"}, ...]}
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from logic.colors import Color
from logic.errors import InvalidLevelError

MIN_GRID_SIZE = 4
MAX_GRID_SIZE = 8


@dataclass(frozen=True)
class PointData:
    x: int
    y: int
    color_name: str

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def color(self) -> Color:
        return Color.from_name(self.color_name)


@dataclass
class LevelDescriptor:
    grid_size: int
    points: List[PointData] = field(default_factory=list)

    @property
    def pair_count(self) -> int:
        return len(self.colors())

    def colors(self) -> List[Color]:
        """Distinct non-blank colors, in order of first appearance."""
        seen: List[Color] = []
        for p in self.points:
            color = p.color
            if not color.is_blank and color not in seen:
                seen.append(color)
        return seen

    def validate(self) -> None:
        """Raise InvalidLevelError unless the descriptor can be set up as a board."""
        if not (MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE):
            raise InvalidLevelError(
                f"Grid size {self.grid_size} outside [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}]",
                grid_size=self.grid_size,
            )

        occupied = set()
        for p in self.points:
            if not (0 <= p.x < self.grid_size and 0 <= p.y < self.grid_size):
                raise InvalidLevelError(
                    f"Point {p.position} is off a {self.grid_size}x{self.grid_size} grid",
                    grid_size=self.grid_size, position=p.position, color_name=p.color_name,
                )
            if p.position in occupied:
                raise InvalidLevelError(
                    f"Two points share cell {p.position}",
                    grid_size=self.grid_size, position=p.position, color_name=p.color_name,
                )
            occupied.add(p.position)

        counts = Counter(p.color for p in self.points if not p.color.is_blank)
        for color, count in counts.items():
            if count != 2:
                raise InvalidLevelError(
                    f"Color {color.display_name} has {count} points, expected 2",
                    grid_size=self.grid_size, color_name=color.display_name,
                )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "gridSize": self.grid_size,
            "points": [{"x": p.x, "y": p.y, "colorName": p.color_name} for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelDescriptor":
        try:
            grid_size = int(data["gridSize"])
            points = [
                PointData(int(p["x"]), int(p["y"]), str(p["colorName"]))
                for p in data.get("points", [])
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidLevelError(f"Unreadable level data: {e}") from e
        return cls(grid_size=grid_size, points=points)
