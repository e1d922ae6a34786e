"""Hand landmark detection using MediaPipe."""
from .hand_detector import HandDetector, HandDetectorConfig, HandFrame, Landmark, LandmarkIndex
from .landmarker import LandmarkerResource, ResourceState
from .source import LandmarkSource, CameraLandmarkSource

__all__ = [
    "HandDetector",
    "HandDetectorConfig",
    "HandFrame",
    "Landmark",
    "LandmarkIndex",
    "LandmarkerResource",
    "ResourceState",
    "LandmarkSource",
    "CameraLandmarkSource",
]
