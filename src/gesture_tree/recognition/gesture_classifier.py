"""
Static Gesture Classifier
==========================

Rule-based gesture recognition from hand landmark geometry.

Every distance is divided by the hand size (wrist to middle-finger MCP),
so the thresholds hold at any distance from the camera. Predicates are
checked in a fixed priority order and the first match wins, because
transitional hand shapes can satisfy more than one of them.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..core.types import Gesture
from ..detection.hand_detector import HandFrame, LandmarkIndex, FINGERTIPS

logger = logging.getLogger(__name__)


@dataclass
class ClassifierConfig:
    """Finger-distance thresholds, as multiples of the hand size."""
    extended_ratio: float = 1.4   # index/middle/pinky counted as up
    folded_ratio: float = 1.2     # middle/ring/pinky counted as down
    thumb_ratio: float = 0.8      # thumb counted as out
    fist_ratio: float = 1.3       # all four tips within this
    pinch_ratio: float = 0.5      # thumb tip to index tip
    open_ratio: float = 1.6       # all four tips beyond this

    @classmethod
    def from_dict(cls, config: dict) -> "ClassifierConfig":
        """Create config from dictionary."""
        return cls(
            extended_ratio=config.get("extended_ratio", 1.4),
            folded_ratio=config.get("folded_ratio", 1.2),
            thumb_ratio=config.get("thumb_ratio", 0.8),
            fist_ratio=config.get("fist_ratio", 1.3),
            pinch_ratio=config.get("pinch_ratio", 0.5),
            open_ratio=config.get("open_ratio", 1.6),
        )


@dataclass(frozen=True)
class HandMeasurements:
    """Distances extracted from one HandFrame."""
    hand_size: float
    finger_distances: Tuple[float, float, float, float]  # index, middle, ring, pinky to wrist
    pinch_distance: float
    thumb_distance: float


def measure(hand: HandFrame) -> HandMeasurements:
    """Compute the distances the classifier works on (image plane only)."""
    points = hand.to_numpy()[:, :2]
    wrist = points[LandmarkIndex.WRIST]

    hand_size = np.linalg.norm(points[LandmarkIndex.MIDDLE_MCP] - wrist)
    tips = points[[int(i) for i in FINGERTIPS]]
    finger_distances = np.linalg.norm(tips - wrist, axis=1)
    pinch = np.linalg.norm(points[LandmarkIndex.THUMB_TIP] - points[LandmarkIndex.INDEX_TIP])
    thumb = np.linalg.norm(points[LandmarkIndex.THUMB_TIP] - wrist)

    return HandMeasurements(
        hand_size=float(hand_size),
        finger_distances=tuple(float(d) for d in finger_distances),
        pinch_distance=float(pinch),
        thumb_distance=float(thumb),
    )


class GestureClassifier:
    """
    Pure, deterministic mapping from one HandFrame to one Gesture.

    Priority order:
        HEART        thumb, index, pinky out; middle, ring folded
        VICTORY      index, middle out; ring, pinky folded
        CLOSED_FIST  all four fingertips close to the wrist
        PINCH        thumb tip touching index tip
        OPEN_HAND    all four fingertips far from the wrist
        NONE         anything else, or no hand

    Example:
        >>> classifier = GestureClassifier()
        >>> classifier.classify(hand_frame)
        <Gesture.OPEN_HAND: 'open_hand'>
    """

    PRIORITY = (
        Gesture.HEART,
        Gesture.VICTORY,
        Gesture.CLOSED_FIST,
        Gesture.PINCH,
        Gesture.OPEN_HAND,
    )

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()
        self._predicates = {
            Gesture.HEART: self._is_heart,
            Gesture.VICTORY: self._is_victory,
            Gesture.CLOSED_FIST: self._is_closed_fist,
            Gesture.PINCH: self._is_pinch,
            Gesture.OPEN_HAND: self._is_open_hand,
        }

    def classify(self, hand: Optional[HandFrame]) -> Gesture:
        """
        Classify a hand pose.

        Args:
            hand: Landmarks for this frame, or None when no hand was found

        Returns:
            The first gesture in priority order whose predicate holds
        """
        if hand is None:
            return Gesture.NONE

        m = measure(hand)
        if m.hand_size <= 0.0:
            # Wrist and middle MCP coincide; no usable scale
            return Gesture.NONE
        for gesture in self.PRIORITY:
            if self._predicates[gesture](m):
                return gesture
        return Gesture.NONE

    def matching(self, hand: HandFrame) -> Tuple[Gesture, ...]:
        """All gestures whose predicate holds, in priority order (debug aid)."""
        m = measure(hand)
        return tuple(g for g in self.PRIORITY if self._predicates[g](m))

    def _is_heart(self, m: HandMeasurements) -> bool:
        c = self.config
        index, middle, ring, pinky = m.finger_distances
        return (m.thumb_distance > m.hand_size * c.thumb_ratio
                and index > m.hand_size * c.extended_ratio
                and middle < m.hand_size * c.folded_ratio
                and ring < m.hand_size * c.folded_ratio
                and pinky > m.hand_size * c.extended_ratio)

    def _is_victory(self, m: HandMeasurements) -> bool:
        c = self.config
        index, middle, ring, pinky = m.finger_distances
        return (index > m.hand_size * c.extended_ratio
                and middle > m.hand_size * c.extended_ratio
                and ring < m.hand_size * c.folded_ratio
                and pinky < m.hand_size * c.folded_ratio)

    def _is_closed_fist(self, m: HandMeasurements) -> bool:
        return all(d < m.hand_size * self.config.fist_ratio for d in m.finger_distances)

    def _is_pinch(self, m: HandMeasurements) -> bool:
        return m.pinch_distance < m.hand_size * self.config.pinch_ratio

    def _is_open_hand(self, m: HandMeasurements) -> bool:
        return all(d > m.hand_size * self.config.open_ratio for d in m.finger_distances)
