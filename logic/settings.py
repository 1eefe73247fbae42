"""
Runtime settings.

Defaults live here as module constants. The resolve_* helpers follow one
priority order:

1) <owner>.<attr_name> when an owner object is given and the attribute is set
2) the FLOWLINK_* environment variable
3) the module default
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

MIN_POINT_DISTANCE = 0.1
CELL_SIZE = 1.0
ENDPOINT_HIT_RADIUS = 0.4      # fraction of a cell
LINE_PICK_TOLERANCE = 0.15     # world units
DEFAULT_SAVE_PATH = os.path.join(os.path.expanduser("~"), ".flowlink", "progress.json")
DEFAULT_LOG_LEVEL = "WARNING"


def _lookup(owner: Any, attr_name: Optional[str], env_name: str) -> Any:
    raw = getattr(owner, attr_name, None) if owner is not None and attr_name else None
    if raw is None:
        raw = os.getenv(env_name)
    return raw


def resolve_seed(owner: Any = None, attr_name: str = "seed") -> Optional[int]:
    """Fixed random seed, or None to let the generator seed from the OS."""
    raw = _lookup(owner, attr_name, "FLOWLINK_SEED")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def resolve_min_point_distance(owner: Any = None, attr_name: str = "min_point_distance") -> float:
    raw = _lookup(owner, attr_name, "FLOWLINK_MIN_POINT_DISTANCE")
    if raw is None:
        return MIN_POINT_DISTANCE
    try:
        value = float(raw)
        if value >= 0:
            return value
    except (TypeError, ValueError):
        pass
    return MIN_POINT_DISTANCE


def resolve_save_path(owner: Any = None, attr_name: str = "save_path") -> str:
    raw = _lookup(owner, attr_name, "FLOWLINK_SAVE_PATH")
    if not raw:
        return DEFAULT_SAVE_PATH
    return str(raw)


def resolve_log_level() -> int:
    raw = os.getenv("FLOWLINK_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    level = logging.getLevelName(str(raw).upper())
    return level if isinstance(level, int) else logging.WARNING
