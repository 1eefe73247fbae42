"""
Color Palette
=============
The eight playable endpoint colors plus the BLANK sentinel.

Level descriptors refer to colors by display name ("Red", "Blue", ...);
unknown names resolve to BLANK, which never counts toward the win check.
"""

from enum import Enum
from typing import List


class Color(Enum):
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    YELLOW = "Yellow"
    MAGENTA = "Magenta"
    CYAN = "Cyan"
    ORANGE = "Orange"
    PURPLE = "Purple"
    BLANK = "White"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def hex(self) -> str:
        return _HEX[self]

    @property
    def is_blank(self) -> bool:
        return self is Color.BLANK

    @classmethod
    def from_name(cls, name) -> "Color":
        """Case-insensitive lookup by display name; anything unknown is BLANK."""
        if isinstance(name, Color):
            return name
        key = str(name).strip().lower()
        for color in cls:
            if color.value.lower() == key:
                return color
        return cls.BLANK


_HEX = {
    Color.RED: "#FF0000",
    Color.BLUE: "#0000FF",
    Color.GREEN: "#00FF00",
    Color.YELLOW: "#FFEB04",
    Color.MAGENTA: "#FF00FF",
    Color.CYAN: "#00FFFF",
    Color.ORANGE: "#FF8000",
    Color.PURPLE: "#800080",
    Color.BLANK: "#FFFFFF",
}

# Generation order before shuffling.
PALETTE: List[Color] = [c for c in Color if c is not Color.BLANK]
