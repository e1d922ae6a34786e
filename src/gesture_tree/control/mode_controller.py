"""
Debounced mode transitions driven by the stable gesture.

    HEART       -> LOVE
    VICTORY     -> TEXT
    CLOSED_FIST -> TREE
    OPEN_HAND   -> SCATTER

A single global cooldown applies after every committed transition, no
matter which gesture caused it. It stops the mode from bouncing while the
hand passes through ambiguous shapes between two held gestures.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.types import AppMode, Gesture, GESTURE_MODE_MAP

logger = logging.getLogger(__name__)


@dataclass
class TransitionConfig:
    cooldown_ms: float = 600.0

    @classmethod
    def from_dict(cls, config: dict) -> "TransitionConfig":
        return cls(cooldown_ms=config.get("cooldown_ms", 600.0))


@dataclass
class TransitionGate:
    """Time of the last committed transition; None until the first one."""
    last_transition_at_ms: Optional[float] = None

    def is_open(self, now_ms: float, cooldown_ms: float) -> bool:
        if self.last_transition_at_ms is None:
            return True
        return now_ms - self.last_transition_at_ms > cooldown_ms

    def commit(self, now_ms: float) -> None:
        self.last_transition_at_ms = now_ms


class ModeTransitionController:
    """Maps stable-gesture edges to AppMode changes, at most one per cooldown.

    The controller does not own the mode. Callers pass the current mode in
    and store the returned one.
    """

    def __init__(self, config: TransitionConfig = None, gate: TransitionGate = None):
        self.config = config or TransitionConfig()
        self.gate = gate or TransitionGate()
        self._transition_count = 0

    def evaluate(self, gesture: Gesture, current_mode: AppMode, now_ms: float) -> AppMode:
        """
        Decide the mode for this tick.

        Args:
            gesture: Stable gesture for this tick
            current_mode: Mode before this tick
            now_ms: Tick time in milliseconds

        Returns:
            The new mode, or ``current_mode`` when nothing commits
        """
        target = GESTURE_MODE_MAP.get(gesture)
        if target is None or target is current_mode:
            return current_mode

        if not self.gate.is_open(now_ms, self.config.cooldown_ms):
            logger.debug("Transition %s -> %s suppressed by cooldown",
                         current_mode.name, target.name)
            return current_mode

        self.gate.commit(now_ms)
        self._transition_count += 1
        logger.info("Mode %s -> %s (gesture=%s)", current_mode.name, target.name, gesture.name)
        return target

    def override(self, current_mode: AppMode, target_mode: AppMode) -> AppMode:
        """Manual mode selection from the UI. Leaves the cooldown untouched."""
        if target_mode is not current_mode:
            logger.info("Mode %s -> %s (manual)", current_mode.name, target_mode.name)
        return target_mode

    @property
    def transition_count(self) -> int:
        return self._transition_count

    def reset(self) -> None:
        self.gate = TransitionGate()
        self._transition_count = 0
