"""
Tests for the camera preview overlay
=====================================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture_tree.core.types import AppMode, AppState, Gesture, HandState, PipelineStatus
from gesture_tree.utils.visualization import Overlay, OverlayConfig

from hand_factory import open_hand


class TestOverlay:
    """Test suite for Overlay."""

    @pytest.fixture
    def image(self):
        return np.zeros((480, 640, 3), dtype=np.uint8)

    @pytest.fixture
    def state(self):
        return AppState(
            mode=AppMode.SCATTER,
            hand_state=HandState(gesture=Gesture.OPEN_HAND, cursor_x=0.3, cursor_y=0.4),
            status=PipelineStatus.RUNNING,
        )

    def test_render_returns_new_frame(self, image, state):
        out = Overlay().render(image, state, open_hand(), fps=30.0)

        assert out.shape == image.shape
        assert out is not image
        assert not image.any()
        assert out.any()

    def test_draw_hand_marks_index_tip(self, image):
        hand = open_hand()
        Overlay().draw_hand(image, hand)

        x, y = hand.get(8).to_pixel(640, 480)
        assert image[y, x].any()

    def test_no_landmarks_when_disabled(self, image, state):
        overlay = Overlay(OverlayConfig(show_landmarks=False, show_cursor=False, mirror_preview=False))
        with_hand = overlay.render(image, state, open_hand())
        without_hand = overlay.render(image, state, None)

        assert np.array_equal(with_hand, without_hand)

    def test_cursor_only_when_running(self, image, state):
        overlay = Overlay(OverlayConfig(mirror_preview=False))
        running = overlay.render(image, state)

        state.status = PipelineStatus.LOADING
        loading = overlay.render(image, state)

        cx, cy = int(0.3 * 640), int(0.4 * 480)
        assert running[cy, cx].any()
        assert not loading[cy, cx].any()

    @pytest.mark.parametrize("status, text", [
        (PipelineStatus.RUNNING, "GESTURE LINKED"),
        (PipelineStatus.LOADING, "LOADING HAND TRACKING..."),
        (PipelineStatus.UNAVAILABLE, "HAND TRACKING UNAVAILABLE"),
        (PipelineStatus.CAMERA_ERROR, "CAMERA UNAVAILABLE"),
        (PipelineStatus.STOPPED, "STOPPED"),
    ])
    def test_status_banner(self, status, text):
        banner, _ = Overlay()._status_banner(status)

        assert banner == text

    def test_config_from_dict(self):
        config = OverlayConfig.from_dict({"mirror_preview": False, "font_scale": 0.8})

        assert config.mirror_preview is False
        assert config.font_scale == 0.8
        assert config.show_cursor is True


class TestAppState:

    def test_defaults(self):
        state = AppState()

        assert state.mode == AppMode.TREE
        assert state.hand_state == HandState.initial()
        assert state.status == PipelineStatus.IDLE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
