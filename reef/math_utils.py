"""Small geometry helpers shared by the systems.

Agents store their position and velocity as plain floats, so these work on
scalars rather than vector objects.
"""

from __future__ import annotations

import math
from typing import Tuple


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    dx = x1 - x2
    dy = y1 - y2
    return math.sqrt(dx * dx + dy * dy)


def limit_velocity(vx: float, vy: float, max_length: float) -> Tuple[float, float]:
    """Rescale (vx, vy) to max_length if it is longer, keeping its direction."""
    length = math.sqrt(vx * vx + vy * vy)
    if length > max_length:
        return (vx / length) * max_length, (vy / length) * max_length
    return vx, vy


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


__all__ = ["distance", "limit_velocity", "clamp"]
