"""Gesture recognition: classification, temporal voting, cursor smoothing."""
from .gesture_classifier import GestureClassifier, ClassifierConfig
from .gesture_buffer import TemporalStabilizer, StabilizerConfig
from .cursor import CursorSmoother, CursorConfig

__all__ = [
    "GestureClassifier",
    "ClassifierConfig",
    "TemporalStabilizer",
    "StabilizerConfig",
    "CursorSmoother",
    "CursorConfig",
]
