"""
Landmark Sources
=================

A landmark source yields at most one HandFrame per upstream video frame.
The pipeline only needs two things from it: an id that advances when a
new frame arrives, and a synchronous ``detect()`` for the current frame.
"""

import logging
from typing import Optional

from .hand_detector import HandDetector, HandFrame

logger = logging.getLogger(__name__)


class LandmarkSource:
    """Interface consumed by the pipeline driver."""

    def initialize(self) -> bool:
        return True

    @property
    def frame_id(self) -> Optional[int]:
        """Id of the latest upstream frame, or None while video is not ready."""
        raise NotImplementedError

    def detect(self, timestamp_ms: float) -> Optional[HandFrame]:
        """Landmarks of the hand in the current frame, or None."""
        raise NotImplementedError

    def close(self) -> None:
        pass


class CameraLandmarkSource(LandmarkSource):
    """Feeds the latest camera frame through the MediaPipe hand detector.

    The camera's frame counter is the frame id, so a threaded camera that
    has not produced a new frame since the last tick reports the same id.
    """

    def __init__(self, camera, detector: HandDetector):
        self._camera = camera
        self._detector = detector
        self._frame = None

    def initialize(self) -> bool:
        return self._detector.start()

    @property
    def frame_id(self) -> Optional[int]:
        frame = self._camera.read()
        if frame is None or not frame.is_ready:
            return None
        self._frame = frame
        return frame.frame_number

    @property
    def current_frame(self):
        """The camera frame most recently seen by ``frame_id``."""
        return self._frame

    def detect(self, timestamp_ms: float) -> Optional[HandFrame]:
        if self._frame is None:
            return None
        return self._detector.detect(self._frame.rgb, timestamp_ms)

    def close(self) -> None:
        self._detector.stop()
        self._camera.stop()
