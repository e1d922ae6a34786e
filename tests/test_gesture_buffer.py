"""
Tests for the temporal gesture stabilizer
==========================================
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture_tree.core.types import Gesture
from gesture_tree.recognition.gesture_buffer import StabilizerConfig, TemporalStabilizer


class TestTemporalStabilizer:
    """Test suite for plurality voting over recent frames."""

    @pytest.fixture
    def stabilizer(self):
        return TemporalStabilizer()

    def test_empty_is_none(self, stabilizer):
        assert stabilizer.stable == Gesture.NONE
        assert len(stabilizer) == 0

    def test_single_sample(self, stabilizer):
        assert stabilizer.push(Gesture.PINCH) == Gesture.PINCH

    def test_capacity_is_bounded(self, stabilizer):
        for _ in range(20):
            stabilizer.push(Gesture.OPEN_HAND)

        assert len(stabilizer) == 8
        assert stabilizer.capacity == 8

    def test_single_outlier_is_suppressed(self, stabilizer):
        """One misclassified frame cannot flip the output."""
        for _ in range(7):
            stabilizer.push(Gesture.OPEN_HAND)

        assert stabilizer.push(Gesture.CLOSED_FIST) == Gesture.OPEN_HAND

    def test_plurality_not_majority(self, stabilizer):
        sequence = [Gesture.VICTORY] * 3 + [Gesture.NONE] * 2 + [Gesture.PINCH] * 2 + [Gesture.HEART]
        for g in sequence:
            stable = stabilizer.push(g)

        assert stable == Gesture.VICTORY

    def test_oldest_sample_evicted(self, stabilizer):
        for _ in range(8):
            stabilizer.push(Gesture.OPEN_HAND)
        for _ in range(5):
            stabilizer.push(Gesture.CLOSED_FIST)

        assert stabilizer.history == [Gesture.OPEN_HAND] * 3 + [Gesture.CLOSED_FIST] * 5
        assert stabilizer.stable == Gesture.CLOSED_FIST

    def test_switch_takes_a_few_frames(self, stabilizer):
        """A newly held gesture wins once it outnumbers the leftovers."""
        for _ in range(8):
            stabilizer.push(Gesture.OPEN_HAND)

        outputs = [stabilizer.push(Gesture.VICTORY) for _ in range(5)]

        assert outputs[:4] == [Gesture.OPEN_HAND] * 4
        assert outputs[4] == Gesture.VICTORY

    def test_tie_goes_to_oldest(self, stabilizer):
        for g in (Gesture.PINCH, Gesture.VICTORY, Gesture.VICTORY, Gesture.PINCH):
            stable = stabilizer.push(g)

        assert stable == Gesture.PINCH

    def test_none_counts_as_a_vote(self, stabilizer):
        for g in (Gesture.NONE, Gesture.NONE, Gesture.PINCH):
            stable = stabilizer.push(g)

        assert stable == Gesture.NONE

    def test_reset(self, stabilizer):
        stabilizer.push(Gesture.HEART)
        stabilizer.reset()

        assert stabilizer.stable == Gesture.NONE
        assert stabilizer.history == []

    def test_custom_history_size(self):
        stabilizer = TemporalStabilizer(StabilizerConfig(history_size=3))
        for g in (Gesture.HEART, Gesture.HEART, Gesture.PINCH, Gesture.PINCH):
            stable = stabilizer.push(g)

        assert stable == Gesture.PINCH
        assert stabilizer.capacity == 3

    def test_config_from_dict(self):
        assert StabilizerConfig.from_dict({}).history_size == 8
        assert StabilizerConfig.from_dict({"history_size": 4}).history_size == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
