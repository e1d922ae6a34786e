"""Shared types, event bus and pipeline driver."""
from .types import Gesture, AppMode, HandState, AppState, PipelineStatus, GESTURE_MODE_MAP
from .events import EventBus, Events

__all__ = [
    "Gesture",
    "AppMode",
    "HandState",
    "AppState",
    "PipelineStatus",
    "GESTURE_MODE_MAP",
    "EventBus",
    "Events",
]
