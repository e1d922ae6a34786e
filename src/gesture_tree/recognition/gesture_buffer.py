"""
Gesture Buffer
===============

Plurality voting over the last few raw classifications so a single
misclassified frame cannot flip the reported gesture.
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass
from typing import Deque, List

from ..core.types import Gesture

logger = logging.getLogger(__name__)


@dataclass
class StabilizerConfig:
    """Temporal stabilizer configuration."""
    history_size: int = 8

    @classmethod
    def from_dict(cls, config: dict) -> "StabilizerConfig":
        return cls(history_size=config.get("history_size", 8))


class TemporalStabilizer:
    """
    Fixed-capacity gesture history with plurality vote.

    Ties go to the gesture that appears first in the window (oldest
    sample first). ``Counter`` keeps first-seen order and ``most_common``
    returns equal counts in that order, which gives exactly this rule.

    A held gesture wins once it outnumbers the leftovers from the previous
    pose, typically after 3 to 5 frames.

    Example:
        >>> stabilizer = TemporalStabilizer()
        >>> for raw in (Gesture.PINCH, Gesture.PINCH, Gesture.NONE):
        ...     stable = stabilizer.push(raw)
        >>> stable
        <Gesture.PINCH: 'pinch'>
    """

    def __init__(self, config: StabilizerConfig = None):
        self.config = config or StabilizerConfig()
        self._history: Deque[Gesture] = deque(maxlen=max(1, self.config.history_size))

    def push(self, gesture: Gesture) -> Gesture:
        """
        Record one raw classification and return the stable gesture.

        Args:
            gesture: Raw per-frame classifier output

        Returns:
            Plurality gesture over the current window
        """
        self._history.append(gesture)
        return self.stable

    @property
    def stable(self) -> Gesture:
        """Plurality gesture of the window, NONE when empty."""
        if not self._history:
            return Gesture.NONE
        return Counter(self._history).most_common(1)[0][0]

    def reset(self) -> None:
        self._history.clear()

    @property
    def history(self) -> List[Gesture]:
        """Window contents, oldest first."""
        return list(self._history)

    @property
    def capacity(self) -> int:
        return self._history.maxlen

    def __len__(self) -> int:
        return len(self._history)
