"""
Gesture Tree Installation - Main Application
=============================================

Opens the webcam, loads hand tracking in the background and runs the frame
loop: pipeline tick, state update, camera preview overlay.
"""

import argparse
import logging
import signal
import time
from typing import Optional

import cv2

from .capture.camera import Camera, CameraConfig
from .control.mode_controller import ModeTransitionController, TransitionConfig
from .core.events import EventBus, Events
from .core.pipeline import Pipeline, TickResult
from .core.types import AppMode, AppState, PipelineStatus
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .detection.landmarker import LandmarkerResource, ResourceState
from .detection.source import CameraLandmarkSource
from .recognition.cursor import CursorConfig, CursorSmoother
from .recognition.gesture_buffer import StabilizerConfig, TemporalStabilizer
from .recognition.gesture_classifier import ClassifierConfig, GestureClassifier
from .utils.config import Config
from .utils.logger import TransitionLogger, setup_logging
from .utils.performance import PerformanceMonitor
from .utils.visualization import Overlay, OverlayConfig

logger = logging.getLogger(__name__)

# Number keys select a mode directly, like the on-screen mode buttons
MODE_KEYS = {
    ord("1"): AppMode.TREE,
    ord("2"): AppMode.TEXT,
    ord("3"): AppMode.SCATTER,
    ord("4"): AppMode.LOVE,
}


class GestureTreeApp:
    """
    Main application for the gesture tree installation.

    Lifecycle:
        IDLE -> (camera fails) CAMERA_ERROR
             -> LOADING -> (landmarker fails) UNAVAILABLE
                        -> RUNNING -> STOPPED
    """

    # Headless loop wait when there was no new frame to process
    IDLE_WAIT_S = 0.005

    def __init__(self, config: Config, show_window: bool = True):
        self.config = config
        self.show_window = show_window and config.get("visualization.enabled", True)
        self.state = AppState()
        self.bus = EventBus()

        self.camera = Camera(CameraConfig.from_dict(config.camera))
        self.detector = HandDetector(HandDetectorConfig.from_dict(config.landmarker))
        self.source = CameraLandmarkSource(self.camera, self.detector)
        self.landmarker = LandmarkerResource(
            self.source.initialize,
            max_attempts=config.get("landmarker.max_attempts", 3),
            retry_delay_s=config.get("landmarker.retry_delay_s", 1.0),
            release=self.detector.stop,
        )

        self.performance = PerformanceMonitor()
        self.pipeline = Pipeline(
            classifier=GestureClassifier(ClassifierConfig.from_dict(config.recognition)),
            stabilizer=TemporalStabilizer(StabilizerConfig.from_dict(config.recognition)),
            cursor=CursorSmoother(CursorConfig.from_dict(config.cursor)),
            controller=ModeTransitionController(TransitionConfig.from_dict(config.transitions)),
            event_bus=self.bus,
            performance_monitor=self.performance,
        )
        self.overlay = Overlay(OverlayConfig.from_dict(config.visualization))
        self.transitions = TransitionLogger()
        self.bus.subscribe(Events.MODE_CHANGED, self.transitions.on_mode_changed)

        self._running = False
        self._last_result: Optional[TickResult] = None

    def set_status(self, status: PipelineStatus) -> None:
        if status is not self.state.status:
            logger.info("Status: %s -> %s", self.state.status.value, status.value)
            self.state.status = status
            self.bus.emit(Events.STATUS_CHANGED, status=status)

    def start(self) -> bool:
        """Open the camera and begin loading hand tracking.

        Returns:
            False if the camera could not be acquired
        """
        if not self.camera.start():
            self.set_status(PipelineStatus.CAMERA_ERROR)
            self.bus.emit(Events.CAMERA_ERROR, device_id=self.camera.config.device_id)
            return False

        self.set_status(PipelineStatus.LOADING)
        self.landmarker.start_async()
        self._running = True
        self.bus.emit(Events.SYSTEM_STARTED)
        return True

    def step(self) -> Optional[TickResult]:
        """One loop iteration: follow the landmarker state, then tick."""
        landmarker_state = self.landmarker.state
        if landmarker_state is ResourceState.FAILED:
            self.set_status(PipelineStatus.UNAVAILABLE)
            return None
        if landmarker_state is not ResourceState.READY:
            return None

        self.set_status(PipelineStatus.RUNNING)
        result = self.pipeline.tick(self.source, self.state.mode)
        if not result.skipped:
            self.state.mode = result.mode
            self.state.hand_state = result.hand_state
            self._last_result = result
        return result

    def select_mode(self, mode: AppMode) -> None:
        """Manual mode selection (keyboard)."""
        old = self.state.mode
        self.state.mode = self.pipeline.controller.override(old, mode)
        if self.state.mode is not old:
            self.bus.emit(Events.MODE_CHANGED, old_mode=old, new_mode=self.state.mode,
                          gesture=None, timestamp_ms=None)

    def run(self) -> None:
        """Run the frame loop until quit or signal."""
        if not self.start():
            logger.error("Camera unavailable. Check the connection and camera permissions.")
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        window_name = self.config.get("visualization.window_name", "Gesture Tree")
        try:
            while self._running:
                result = self.step()

                if self.show_window:
                    self._show(window_name)
                    self._handle_key(cv2.waitKey(1) & 0xFF)
                elif self.state.status is PipelineStatus.UNAVAILABLE:
                    # Inert without a window; nothing left to do
                    break
                elif result is None or result.skipped:
                    time.sleep(self.IDLE_WAIT_S)
        finally:
            self.stop()

    def _show(self, window_name: str) -> None:
        frame = self.source.current_frame or self.camera.read()
        if frame is None:
            return
        hand = self._last_result.hand if self._last_result else None
        image = self.overlay.render(frame.image, self.state, hand, fps=self.performance.fps)
        cv2.imshow(window_name, image)

    def _handle_key(self, key: int) -> None:
        if key in (ord("q"), 27):
            self._running = False
        elif key in MODE_KEYS:
            self.select_mode(MODE_KEYS[key])
        elif key == ord("p"):
            print(self.performance.get_report())

    def stop(self) -> None:
        """Stop ticking and release the camera and the landmarker."""
        self._running = False
        self.pipeline.stop()
        self.landmarker.cancel()
        self.source.close()
        if self.show_window:
            cv2.destroyAllWindows()
        if self.state.status is not PipelineStatus.CAMERA_ERROR:
            self.set_status(PipelineStatus.STOPPED)
        self.bus.emit(Events.SYSTEM_SHUTDOWN)
        logger.info("Shutdown complete (%d mode transitions this session)",
                    self.transitions.total_transitions)

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Gesture Tree - hand gesture control for the 3D tree installation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Gestures:
  Fist      - gather the tree          (TREE)
  Victory   - show the wish text       (TEXT)
  Open hand - scatter                  (SCATTER)
  Heart/ILY - love mode                (LOVE)
  Pinch     - focus a photo (handled by the scene)

Keyboard:
  q/ESC     - Quit
  1-4       - Select TREE / TEXT / SCATTER / LOVE
  p         - Print performance report
        """,
    )
    parser.add_argument("--config", "-c", default=None, help="Path to config.yaml")
    parser.add_argument("--camera", type=int, default=None, help="Camera device ID")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-window", action="store_true", help="Run without the preview window")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    config = Config.load(args.config)
    if args.camera is not None:
        config.set("camera.device_id", args.camera)

    log_cfg = config.logging
    setup_logging(
        level="DEBUG" if args.debug else log_cfg.get("level", "INFO"),
        log_file=log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    app = GestureTreeApp(config, show_window=not args.no_window)
    app.run()


if __name__ == "__main__":
    main()
