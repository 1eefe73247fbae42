"""
Path Validators
===============
Pure geometry used to accept or reject drawn paths, plus the win check.

Segments are any (start, end) pair of 2D points; committed segments carry
the color that owns them. A crossing is a strict interior intersection:
touching at a shared endpoint is legal.
"""

import math
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from logic.colors import Color
from logic.errors import (
    REASON_ALREADY_CONNECTED,
    REASON_BLANK_ENDPOINT,
    REASON_NO_ENDPOINT,
    REASON_NO_TARGET,
    REASON_OK,
    REASON_SAME_ENDPOINT,
    REASON_WRONG_COLOR,
)

Point = Tuple[float, float]


class Segment(NamedTuple):
    start: Point
    end: Point
    color: Optional[Color] = None


def _same_point(p, q):
    return p[0] == q[0] and p[1] == q[1]


def segments_intersect(a1, a2, b1, b2):
    """
    Parametric cross-product test for segments a1-a2 and b1-b2.
    Parallel or collinear segments never cross, nor do segments sharing an
    exact endpoint. Both parameters must lie strictly inside (0, 1).
    """
    if (_same_point(a1, b1) or _same_point(a1, b2)
            or _same_point(a2, b1) or _same_point(a2, b2)):
        return False

    d = (a2[0] - a1[0]) * (b2[1] - b1[1]) - (a2[1] - a1[1]) * (b2[0] - b1[0])
    if d == 0:
        return False

    u = ((b1[0] - a1[0]) * (b2[1] - b1[1]) - (b1[1] - a1[1]) * (b2[0] - b1[0])) / d
    v = ((b1[0] - a1[0]) * (a2[1] - a1[1]) - (b1[1] - a1[1]) * (a2[0] - a1[0])) / d

    return 0 < u < 1 and 0 < v < 1


def polyline_segments(points: Sequence[Point], color: Optional[Color] = None) -> List[Segment]:
    """Consecutive point pairs of a polyline."""
    return [
        Segment(tuple(points[i]), tuple(points[i + 1]), color)
        for i in range(len(points) - 1)
    ]


def curve_crosses_any(candidate_segments: Iterable, existing_segments: Iterable) -> bool:
    """
    True iff any candidate segment strictly crosses any existing segment,
    whatever its color.
    """
    existing = list(existing_segments)
    if not existing:
        return False
    for c in candidate_segments:
        for e in existing:
            if segments_intersect(e[0], e[1], c[0], c[1]):
                return True
    return False


def point_segment_distance(p, a, b):
    """Euclidean distance from p to the closest point of segment a-b."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(p[0] - (a[0] + t * dx), p[1] - (a[1] + t * dy))


def validate_start(endpoint, allow_redraw=True):
    """
    Can a path start from this endpoint?
    Returns: (bool, reason)
    """
    if endpoint is None:
        return False, REASON_NO_ENDPOINT
    if endpoint.color.is_blank:
        return False, REASON_BLANK_ENDPOINT
    if endpoint.connected and not allow_redraw:
        return False, REASON_ALREADY_CONNECTED
    return True, REASON_OK


def validate_target(start, target):
    """
    Can a path drawn from `start` end on `target`?
    Returns: (bool, reason)
    """
    if target is None:
        return False, REASON_NO_TARGET
    if target.id == start.id:
        return False, REASON_SAME_ENDPOINT
    if target.color != start.color:
        return False, REASON_WRONG_COLOR
    if target.connected:
        return False, REASON_ALREADY_CONNECTED
    return True, REASON_OK


def check_win_condition(endpoints):
    """
    Level is complete when every non-blank endpoint is connected.
    Returns: (bool, reason)
    """
    for endpoint in endpoints:
        if endpoint.color.is_blank:
            continue
        if not endpoint.connected:
            return False, f"{endpoint.color.display_name} is not connected"
    return True, "Winner"
