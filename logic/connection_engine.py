"""
Connection Engine
=================
Session state for one board: which colors are being drawn or are
connected, the committed segments used for crossing checks, and the
win condition.

Each color moves through IDLE -> DRAWING -> FINALIZED and back to IDLE
when its path is removed. Only one provisional polyline exists at a time
(single pointer input). Endpoint pairing is stored by endpoint id.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from logic.colors import Color
from logic.errors import REASON_CROSSING, REASON_NOT_DRAWING, REASON_OK
from logic.grid import Endpoint, Grid, GridPosition, Point
from logic.level_data import LevelDescriptor
from logic.settings import (
    CELL_SIZE,
    ENDPOINT_HIT_RADIUS,
    LINE_PICK_TOLERANCE,
    resolve_min_point_distance,
)
from logic.validators import (
    Segment,
    check_win_condition,
    curve_crosses_any,
    point_segment_distance,
    polyline_segments,
    validate_start,
    validate_target,
)

logger = logging.getLogger(__name__)


class PathState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    FINALIZED = "finalized"


@dataclass
class PathRecord:
    color: Color
    points: List[Point]
    start_id: int
    end_id: int

    @property
    def segments(self) -> List[Segment]:
        return polyline_segments(self.points, self.color)


@dataclass(frozen=True)
class FinalizeResult:
    accepted: bool
    completed_level: bool = False
    reason: str = REASON_OK


class ConnectionEngine:
    """
    Board session driven by discrete pointer events.

    Usage:
        engine = ConnectionEngine()
        engine.on_level_complete(lambda: print("solved"))
        engine.setup_board(descriptor)

        if engine.begin_path((0, 0)):
            engine.extend_path((-1.0, -1.5))
            result = engine.end_path((2, 0))
    """

    def __init__(
        self,
        min_point_distance: Optional[float] = None,
        allow_redraw: bool = True,
        cell_size: float = CELL_SIZE,
        hit_radius: float = ENDPOINT_HIT_RADIUS,
    ):
        self.min_point_distance = (
            min_point_distance if min_point_distance is not None
            else resolve_min_point_distance()
        )
        self.allow_redraw = allow_redraw
        self.cell_size = cell_size
        self.hit_radius = hit_radius

        self.grid: Optional[Grid] = None
        self._paths: Dict[Color, PathRecord] = {}
        self._segments: List[Segment] = []
        self._drawing_start: Optional[int] = None
        self._provisional: List[Point] = []
        self._completed = False
        self._listeners: List[Callable[[], None]] = []
        self._unsolved_listeners: List[Callable[[], None]] = []

    # ── Board lifecycle ────────────────────────────────────────

    def setup_board(self, descriptor: LevelDescriptor) -> Grid:
        """Replace any previous board with the one described."""
        descriptor.validate()
        self.clear_board()
        self.grid = Grid(descriptor.grid_size, self.cell_size)
        for p in descriptor.points:
            self.grid.place(p.x, p.y, p.color)
        logger.debug("Board %dx%d set up with %d endpoints",
                     descriptor.grid_size, descriptor.grid_size, len(descriptor.points))
        return self.grid

    def clear_board(self) -> None:
        self.grid = None
        self._paths.clear()
        self._segments.clear()
        self._cancel_drawing()
        self._completed = False

    def on_level_complete(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register an observer called once each time the board becomes solved."""
        self._listeners.append(callback)
        return callback

    def on_level_unsolved(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register an observer called when a solved board loses a path."""
        self._unsolved_listeners.append(callback)
        return callback

    # ── Drawing ────────────────────────────────────────────────

    def begin_path(self, position: GridPosition) -> bool:
        if self.grid is None:
            return False
        endpoint = self.grid.at(*position)
        ok, reason = validate_start(endpoint, self.allow_redraw)
        if not ok:
            logger.debug("begin_path %s rejected: %s", position, reason)
            return False

        self._cancel_drawing()
        if endpoint.color in self._paths:
            self._teardown(endpoint.color)

        self._drawing_start = endpoint.id
        self._provisional = [self.grid.cell_to_world(endpoint.position)]
        return True

    def extend_path(self, point: Point) -> bool:
        """
        Add a sampled pointer position to the provisional polyline.
        Returns True when the polyline changed.
        """
        start = self._start_endpoint()
        if start is None:
            return False

        point = (float(point[0]), float(point[1]))
        changed = False
        last = self._provisional[-1]
        if math.hypot(point[0] - last[0], point[1] - last[1]) > self.min_point_distance:
            self._provisional.append(point)
            changed = True

        hovered = self.grid.endpoint_at_world(point, self.hit_radius)
        if hovered is not None and validate_target(start, hovered)[0]:
            snap = self.grid.cell_to_world(hovered.position)
            if len(self._provisional) > 1:
                self._provisional[-1] = snap
            else:
                self._provisional.append(snap)
            changed = True
        return changed

    def end_path(self, position: Optional[GridPosition] = None) -> FinalizeResult:
        start = self._start_endpoint()
        if start is None:
            return FinalizeResult(False, False, REASON_NOT_DRAWING)

        target = self.grid.at(*position) if position is not None else None
        ok, reason = validate_target(start, target)
        if not ok:
            logger.debug("end_path %s rejected: %s", position, reason)
            self._cancel_drawing()
            return FinalizeResult(False, False, reason)

        points = list(self._provisional)
        target_point = self.grid.cell_to_world(target.position)
        if points[-1] != target_point:
            points.append(target_point)

        candidate = polyline_segments(points, start.color)
        if curve_crosses_any(candidate, self._segments):
            logger.debug("%s path rejected: crosses an existing line", start.color.display_name)
            self._cancel_drawing()
            return FinalizeResult(False, False, REASON_CROSSING)

        self._segments.extend(candidate)
        self._paths[start.color] = PathRecord(start.color, points, start.id, target.id)
        start.connect(target)
        target.connect(start)
        self._cancel_drawing()
        logger.info("Connected %s (%d segments)", start.color.display_name, len(candidate))

        return FinalizeResult(True, self._evaluate_completion(), REASON_OK)

    def cancel_path(self) -> None:
        """Drop the provisional polyline without touching committed paths."""
        self._cancel_drawing()

    # ── Removal ────────────────────────────────────────────────

    def remove_path(self, color) -> bool:
        color = Color.from_name(color)
        if color not in self._paths:
            return False
        self._teardown(color)
        return True

    def remove_path_at(self, point: Point, tolerance: float = LINE_PICK_TOLERANCE) -> Optional[Color]:
        """Remove the finalized path passing within `tolerance` of a world point."""
        for color, record in list(self._paths.items()):
            for seg in record.segments:
                if point_segment_distance(point, seg.start, seg.end) <= tolerance:
                    self._teardown(color)
                    return color
        return None

    # ── Queries ────────────────────────────────────────────────

    def is_level_complete(self) -> bool:
        if self.grid is None:
            return False
        return check_win_condition(self.grid.endpoints())[0]

    def state_of(self, color) -> PathState:
        color = Color.from_name(color)
        start = self._start_endpoint()
        if start is not None and start.color == color:
            return PathState.DRAWING
        if color in self._paths:
            return PathState.FINALIZED
        return PathState.IDLE

    def path_for(self, color) -> Optional[PathRecord]:
        return self._paths.get(Color.from_name(color))

    @property
    def paths(self) -> Dict[Color, PathRecord]:
        return dict(self._paths)

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @property
    def provisional_points(self) -> List[Point]:
        return list(self._provisional)

    @property
    def drawing_color(self) -> Optional[Color]:
        start = self._start_endpoint()
        return start.color if start is not None else None

    # ── Internal ───────────────────────────────────────────────

    def _start_endpoint(self) -> Optional[Endpoint]:
        if self.grid is None or self._drawing_start is None:
            return None
        return self.grid.endpoint(self._drawing_start)

    def _cancel_drawing(self) -> None:
        self._drawing_start = None
        self._provisional = []

    def _teardown(self, color: Color) -> None:
        record = self._paths.pop(color)
        before = len(self._segments)
        self._segments = [s for s in self._segments if s.color != color]
        for endpoint_id in (record.start_id, record.end_id):
            endpoint = self.grid.endpoint(endpoint_id)
            if endpoint is not None:
                endpoint.disconnect()
        was_completed = self._completed
        self._completed = False
        logger.debug("Removed %s path (%d segments)",
                     color.display_name, before - len(self._segments))
        if was_completed:
            for callback in list(self._unsolved_listeners):
                callback()

    def _evaluate_completion(self) -> bool:
        complete, _ = check_win_condition(self.grid.endpoints())
        if complete and not self._completed:
            self._completed = True
            logger.info("Level complete")
            for callback in list(self._listeners):
                callback()
        elif not complete:
            self._completed = False
        return complete
