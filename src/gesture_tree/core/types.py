"""
Shared domain types for the gesture tree installation.

Centralizes enums and data classes used across modules to avoid
circular imports between recognition, control and the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


# =============================================================================
# Gesture Types
# =============================================================================

class Gesture(Enum):
    """Discrete hand poses recognized by the classifier."""
    NONE = "none"
    OPEN_HAND = "open_hand"
    CLOSED_FIST = "closed_fist"
    PINCH = "pinch"
    VICTORY = "victory"
    HEART = "heart"


class AppMode(Enum):
    """Visual/interaction mode of the scene. Exactly one is active."""
    TREE = "tree"
    TEXT = "text"
    SCATTER = "scatter"
    LOVE = "love"

    @classmethod
    def initial(cls) -> "AppMode":
        return cls.TREE


class PipelineStatus(Enum):
    """Lifecycle status reported to the UI layer."""
    IDLE = "idle"
    LOADING = "loading"
    RUNNING = "running"
    UNAVAILABLE = "unavailable"
    CAMERA_ERROR = "camera_error"
    STOPPED = "stopped"


# =============================================================================
# Gesture -> Mode Mapping
# =============================================================================

# PINCH is reserved for photo focus downstream and NONE means "no hand";
# neither changes the mode.
GESTURE_MODE_MAP: Dict[Gesture, AppMode] = {
    Gesture.HEART: AppMode.LOVE,
    Gesture.VICTORY: AppMode.TEXT,
    Gesture.CLOSED_FIST: AppMode.TREE,
    Gesture.OPEN_HAND: AppMode.SCATTER,
}


# =============================================================================
# Data Containers
# =============================================================================

@dataclass(frozen=True)
class HandState:
    """Published per-frame snapshot read by the renderer and UI."""
    gesture: Gesture
    cursor_x: float
    cursor_y: float
    timestamp_ms: float = 0.0

    @classmethod
    def initial(cls) -> "HandState":
        return cls(gesture=Gesture.NONE, cursor_x=0.5, cursor_y=0.5, timestamp_ms=0.0)

    @property
    def cursor(self):
        return (self.cursor_x, self.cursor_y)


@dataclass
class AppState:
    """Application-wide state owned by the frame loop.

    The loop is the only writer: it feeds ``mode`` into each pipeline tick
    and stores the returned mode and hand state. Everything else reads.
    """
    mode: AppMode = AppMode.TREE
    hand_state: HandState = field(default_factory=HandState.initial)
    status: PipelineStatus = PipelineStatus.IDLE
