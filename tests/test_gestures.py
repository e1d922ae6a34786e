"""
Tests for Gesture Classification
=================================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture_tree.core.types import Gesture
from gesture_tree.detection.hand_detector import HandFrame, Landmark, LandmarkIndex
from gesture_tree.recognition.gesture_classifier import (
    ClassifierConfig, GestureClassifier, measure,
)

from hand_factory import (
    HAND_SIZE, make_hand, open_hand, closed_fist, victory, heart, pinch, relaxed,
)


class TestGestureClassifier:
    """Test suite for the rule-based classifier."""

    @pytest.fixture
    def classifier(self):
        return GestureClassifier()

    def test_no_hand(self, classifier):
        """Absent hand is a valid input and classifies as NONE."""
        assert classifier.classify(None) == Gesture.NONE

    def test_open_hand(self, classifier):
        assert classifier.classify(open_hand()) == Gesture.OPEN_HAND

    def test_closed_fist(self, classifier):
        assert classifier.classify(closed_fist()) == Gesture.CLOSED_FIST

    def test_victory(self, classifier):
        assert classifier.classify(victory()) == Gesture.VICTORY

    def test_heart(self, classifier):
        assert classifier.classify(heart()) == Gesture.HEART

    def test_pinch(self, classifier):
        assert classifier.classify(pinch()) == Gesture.PINCH

    def test_relaxed_hand_is_none(self, classifier):
        assert classifier.classify(relaxed()) == Gesture.NONE

    @pytest.mark.parametrize("scale", [0.4, 1.0, 2.5])
    def test_scale_invariance(self, classifier, scale):
        """Thresholds are relative to hand size, so distance to camera does not matter."""
        assert classifier.classify(open_hand(scale=scale)) == Gesture.OPEN_HAND
        assert classifier.classify(closed_fist(scale=scale)) == Gesture.CLOSED_FIST
        assert classifier.classify(victory(scale=scale)) == Gesture.VICTORY
        assert classifier.classify(heart(scale=scale)) == Gesture.HEART

    def test_depth_is_ignored(self, classifier):
        """Only the image plane is measured."""
        assert classifier.classify(open_hand(z=-0.3)) == Gesture.OPEN_HAND

    def test_deterministic(self, classifier):
        hand = victory()
        results = {classifier.classify(hand) for _ in range(50)}
        assert results == {Gesture.VICTORY}

    def test_degenerate_hand_is_none(self, classifier):
        """All landmarks on one point: no scale, no exception."""
        hand = HandFrame(landmarks=[Landmark(0.5, 0.5, 0.0)] * 21)
        assert classifier.classify(hand) == Gesture.NONE

    def test_zero_hand_size_with_spread_fingers_is_none(self, classifier):
        hand = open_hand()
        landmarks = list(hand.landmarks)
        landmarks[LandmarkIndex.MIDDLE_MCP] = landmarks[LandmarkIndex.WRIST]
        assert classifier.classify(HandFrame(landmarks=landmarks)) == Gesture.NONE


class TestPriorityOrder:
    """First matching predicate wins."""

    @pytest.fixture
    def classifier(self):
        return GestureClassifier()

    def test_priority_sequence(self):
        assert GestureClassifier.PRIORITY == (
            Gesture.HEART,
            Gesture.VICTORY,
            Gesture.CLOSED_FIST,
            Gesture.PINCH,
            Gesture.OPEN_HAND,
        )

    def test_heart_beats_pinch(self, classifier):
        hand = heart(pinch_gap=0.2)
        assert classifier.matching(hand) == (Gesture.HEART, Gesture.PINCH)
        assert classifier.classify(hand) == Gesture.HEART

    def test_fist_beats_pinch(self, classifier):
        hand = closed_fist(pinch_gap=0.2)
        assert Gesture.PINCH in classifier.matching(hand)
        assert classifier.classify(hand) == Gesture.CLOSED_FIST

    def test_victory_beats_pinch(self, classifier):
        hand = victory(pinch_gap=0.2)
        assert classifier.matching(hand)[:1] == (Gesture.VICTORY,)
        assert classifier.classify(hand) == Gesture.VICTORY

    def test_heart_beats_victory_when_thresholds_overlap(self):
        """With a config where both predicates can hold, HEART still wins."""
        config = ClassifierConfig(extended_ratio=1.4, folded_ratio=2.0)
        classifier = GestureClassifier(config)
        # index, middle, pinky at 1.8; ring folded
        hand = make_hand(thumb=1.0, index=1.8, middle=1.8, ring=1.0, pinky=1.8)
        matches = classifier.matching(hand)
        assert Gesture.HEART in matches and Gesture.VICTORY in matches
        assert classifier.classify(hand) == Gesture.HEART


class TestMeasurements:

    def test_hand_size(self):
        m = measure(open_hand())
        assert m.hand_size == pytest.approx(HAND_SIZE)

    def test_finger_distances(self):
        m = measure(make_hand(index=1.8, middle=1.0, ring=1.2, pinky=1.5))
        expected = np.array([1.8, 1.0, 1.2, 1.5]) * HAND_SIZE
        assert np.allclose(m.finger_distances, expected)

    def test_pinch_distance(self):
        m = measure(pinch())
        assert m.pinch_distance == pytest.approx(0.2 * HAND_SIZE)


class TestClassifierConfig:

    def test_defaults(self):
        config = ClassifierConfig()
        assert config.open_ratio == 1.6
        assert config.fist_ratio == 1.3
        assert config.pinch_ratio == 0.5

    def test_from_dict_partial(self):
        config = ClassifierConfig.from_dict({"pinch_ratio": 0.3})
        assert config.pinch_ratio == 0.3
        assert config.open_ratio == 1.6


class TestHandFrame:

    def test_requires_21_landmarks(self):
        with pytest.raises(ValueError):
            HandFrame(landmarks=[Landmark(0.0, 0.0, 0.0)] * 5)

    def test_to_numpy(self):
        arr = open_hand().to_numpy()
        assert arr.shape == (21, 3)
        assert isinstance(arr, np.ndarray)

    def test_wrist(self):
        hand = make_hand(wrist=(0.3, 0.6))
        assert hand.wrist.x == pytest.approx(0.3)
        assert hand.wrist.y == pytest.approx(0.6)

    def test_to_pixel(self):
        lm = Landmark(x=0.5, y=0.5, z=0.0)
        assert lm.to_pixel(640, 480) == (320, 240)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
