"""
2D camera: maps between screen space and world space
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np


@dataclass
class Camera2D:
    """
    Screen/world transform.

    offset: screen point the camera target is drawn at
    target: world point the camera looks at
    zoom:   screen pixels per world unit
    """
    offset: np.ndarray = field(default_factory=lambda: np.zeros(2))
    target: np.ndarray = field(default_factory=lambda: np.zeros(2))
    zoom: float = 1.0

    def __post_init__(self):
        if self.zoom <= 0:
            raise ValueError(f"Camera zoom must be positive, got {self.zoom}")
        self.offset = np.asarray(self.offset, dtype=np.float64)
        self.target = np.asarray(self.target, dtype=np.float64)

    def screen_to_world(self, point: Sequence[float]) -> np.ndarray:
        return (np.asarray(point, dtype=np.float64) - self.offset) / self.zoom + self.target

    def world_to_screen(self, point: Sequence[float]) -> np.ndarray:
        return (np.asarray(point, dtype=np.float64) - self.target) * self.zoom + self.offset
