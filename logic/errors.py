"""
Board errors and rejection reasons.

Rejected gestures are reported as data (False / a rejected FinalizeResult
with one of the REASON_* strings). Only malformed level descriptors raise.
"""

from __future__ import annotations

from typing import Optional, Tuple

REASON_OK = "OK"
REASON_NO_ENDPOINT = "No endpoint at that cell"
REASON_BLANK_ENDPOINT = "Blank endpoints cannot start a path"
REASON_ALREADY_CONNECTED = "Endpoint is already connected"
REASON_NOT_DRAWING = "No path is being drawn"
REASON_SAME_ENDPOINT = "Path must end on the other endpoint"
REASON_WRONG_COLOR = "Endpoint color does not match"
REASON_CROSSING = "Path would cross another line"
REASON_NO_TARGET = "Path did not end on an endpoint"

INVALID_LEVEL_MESSAGE = "Level descriptor is malformed."


class InvalidLevelError(ValueError):
    """
    Raised when a LevelDescriptor cannot be turned into a board:
    grid size outside the supported range, a point off the grid, two points
    on the same cell, or a color that does not appear exactly twice.
    """

    def __init__(
        self,
        message: str = INVALID_LEVEL_MESSAGE,
        *,
        grid_size: int | None = None,
        position: Optional[Tuple[int, int]] = None,
        color_name: str | None = None,
    ) -> None:
        super().__init__(message)
        self.grid_size = grid_size
        self.position = position
        self.color_name = color_name
