"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple
import numpy as np

from .entities import Entity


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def movement_vector(up: bool, down: bool, left: bool, right: bool) -> np.ndarray:
    """
    Unit movement direction from four directional signals.

    Screen convention: +y points down. Opposite keys on one axis cancel.
    """
    x = float(right) - float(left)
    y = float(down) - float(up)
    return np.array(normalize(x, y), dtype=np.float64)


def collides(a: Entity, b: Entity) -> bool:
    """Axis-aligned box overlap; position is the top-left corner"""
    ax, ay = a.position
    aw, ah = a.size
    bx, by = b.position
    bw, bh = b.size

    # Zero or negative area never collides
    if aw <= 0 or ah <= 0 or bw <= 0 or bh <= 0:
        return False

    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah

