"""
Visualization Module
=====================

Camera preview overlay: hand skeleton, pinch line, smoothed cursor and
the current gesture / mode / status.
"""

import cv2
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.types import AppState, PipelineStatus
from ..detection.hand_detector import HandFrame, LandmarkIndex


@dataclass
class OverlayConfig:
    """Overlay settings. Colors are BGR."""
    show_landmarks: bool = True
    show_cursor: bool = True
    show_fps: bool = True
    mirror_preview: bool = True

    connection_color: Tuple[int, int, int] = (0, 215, 255)   # Gold
    landmark_color: Tuple[int, int, int] = (255, 255, 255)
    pinch_color: Tuple[int, int, int] = (200, 200, 200)
    tip_color: Tuple[int, int, int] = (0, 215, 255)
    text_color: Tuple[int, int, int] = (255, 255, 255)
    warning_color: Tuple[int, int, int] = (0, 0, 255)

    font_scale: float = 0.6
    font_thickness: int = 1

    @classmethod
    def from_dict(cls, config: dict) -> "OverlayConfig":
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_cursor=config.get("show_cursor", True),
            show_fps=config.get("show_fps", True),
            mirror_preview=config.get("mirror_preview", True),
            font_scale=config.get("font_scale", 0.6),
            font_thickness=config.get("font_thickness", 1),
        )


class Overlay:
    """
    Draws gesture feedback onto a BGR camera frame.

    Landmarks are drawn on the unmirrored frame first; the preview is then
    flipped so it reads like a mirror, and text is drawn last so it stays
    readable.
    """

    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),         # Thumb
        (0, 5), (5, 6), (6, 7), (7, 8),         # Index
        (5, 9), (9, 10), (10, 11), (11, 12),    # Middle
        (9, 13), (13, 14), (14, 15), (15, 16),  # Ring
        (13, 17), (17, 18), (18, 19), (19, 20), # Pinky
        (0, 17),                                # Palm base
    ]

    def __init__(self, config: Optional[OverlayConfig] = None):
        self.config = config or OverlayConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def render(
        self,
        image: np.ndarray,
        state: AppState,
        hand: Optional[HandFrame] = None,
        fps: float = 0.0,
    ) -> np.ndarray:
        """Return a new frame with all overlays drawn."""
        canvas = image.copy()

        if hand is not None and self.config.show_landmarks:
            self.draw_hand(canvas, hand)

        if self.config.mirror_preview:
            canvas = cv2.flip(canvas, 1)

        # Cursor is already in mirrored screen space
        if self.config.show_cursor and state.status is PipelineStatus.RUNNING:
            self.draw_cursor(canvas, state.hand_state.cursor)

        self.draw_status(canvas, state, fps)
        return canvas

    def draw_hand(self, image: np.ndarray, hand: HandFrame) -> np.ndarray:
        """Skeleton, the thumb-to-index pinch line and the index tip marker."""
        height, width = image.shape[:2]

        for start_idx, end_idx in self.HAND_CONNECTIONS:
            start = hand.get(LandmarkIndex(start_idx)).to_pixel(width, height)
            end = hand.get(LandmarkIndex(end_idx)).to_pixel(width, height)
            cv2.line(image, start, end, self.config.connection_color, 2)

        for lm in hand.landmarks:
            cv2.circle(image, lm.to_pixel(width, height), 2, self.config.landmark_color, -1)

        thumb = hand.get(LandmarkIndex.THUMB_TIP).to_pixel(width, height)
        index = hand.get(LandmarkIndex.INDEX_TIP).to_pixel(width, height)
        cv2.line(image, thumb, index, self.config.pinch_color, 1)
        cv2.circle(image, index, 5, self.config.tip_color, -1)
        return image

    def draw_cursor(self, image: np.ndarray, cursor: Tuple[float, float]) -> np.ndarray:
        height, width = image.shape[:2]
        x, y = int(cursor[0] * width), int(cursor[1] * height)
        cv2.drawMarker(image, (x, y), self.config.tip_color, cv2.MARKER_CROSS, 16, 2)
        return image

    def draw_status(self, image: np.ndarray, state: AppState, fps: float = 0.0) -> np.ndarray:
        """Mode, gesture and pipeline status in the top-left corner."""
        x, y = 10, 22
        line_height = 22

        lines = [f"Mode: {state.mode.name}", f"Gesture: {state.hand_state.gesture.name}"]
        if self.config.show_fps and fps > 0:
            lines.append(f"FPS: {fps:.1f}")

        for line in lines:
            cv2.putText(image, line, (x, y), self._font, self.config.font_scale,
                        self.config.text_color, self.config.font_thickness)
            y += line_height

        banner, color = self._status_banner(state.status)
        height = image.shape[0]
        cv2.putText(image, banner, (x, height - 12), self._font, self.config.font_scale,
                    color, self.config.font_thickness)
        return image

    def _status_banner(self, status: PipelineStatus):
        if status is PipelineStatus.RUNNING:
            return "GESTURE LINKED", self.config.text_color
        if status is PipelineStatus.LOADING:
            return "LOADING HAND TRACKING...", self.config.text_color
        if status is PipelineStatus.UNAVAILABLE:
            return "HAND TRACKING UNAVAILABLE", self.config.warning_color
        if status is PipelineStatus.CAMERA_ERROR:
            return "CAMERA UNAVAILABLE", self.config.warning_color
        return status.value.upper(), self.config.text_color
