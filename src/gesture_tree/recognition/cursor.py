"""
Cursor smoothing for the wrist position.

Two-tier exponential smoothing: a big jump is an intentional move and is
followed quickly, small movement is jitter and is damped hard.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CursorConfig:
    fast_factor: float = 0.3
    slow_factor: float = 0.1
    jump_threshold: float = 0.05
    mirror: bool = True  # front camera: screen x = 1 - wrist x

    @classmethod
    def from_dict(cls, config: dict) -> "CursorConfig":
        return cls(
            fast_factor=config.get("fast_factor", 0.3),
            slow_factor=config.get("slow_factor", 0.1),
            jump_threshold=config.get("jump_threshold", 0.05),
            mirror=config.get("mirror", True),
        )


def lerp(start: float, end: float, t: float) -> float:
    return start * (1 - t) + end * t


class CursorSmoother:
    """Smoothed 2D cursor, starting at the frame centre.

    The cursor is only moved by ``update``; when no hand is present the
    caller simply does not call it and the cursor holds its position.
    Results are not clamped.
    """

    def __init__(self, config: CursorConfig = None):
        self.config = config or CursorConfig()
        self._x = 0.5
        self._y = 0.5

    def update(self, wrist_x: float, wrist_y: float) -> Tuple[float, float]:
        """Move the cursor toward the (mirrored) wrist position."""
        raw_x = 1.0 - wrist_x if self.config.mirror else wrist_x
        raw_y = wrist_y

        dist_moved = float(np.hypot(raw_x - self._x, raw_y - self._y))
        if dist_moved > self.config.jump_threshold:
            factor = self.config.fast_factor
        else:
            factor = self.config.slow_factor

        self._x = lerp(self._x, raw_x, factor)
        self._y = lerp(self._y, raw_y, factor)
        return self._x, self._y

    @property
    def position(self) -> Tuple[float, float]:
        return self._x, self._y

    def reset(self) -> None:
        self._x = 0.5
        self._y = 0.5
