"""Scene mode control."""
from .mode_controller import ModeTransitionController, TransitionConfig, TransitionGate

__all__ = ["ModeTransitionController", "TransitionConfig", "TransitionGate"]
