"""
Per-frame pipeline driver.

    LandmarkSource -> GestureClassifier -> TemporalStabilizer
                   -> ModeTransitionController           (mode)
    LandmarkSource(wrist) -> CursorSmoother              (cursor)

State goes in and out explicitly: each tick takes the current AppMode and
returns the new one together with the published HandState. The driver owns
the gesture history, the cursor and the transition gate; nothing else
writes them.
"""

import time
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .types import AppMode, Gesture, HandState
from .events import EventBus, Events
from ..control.mode_controller import ModeTransitionController
from ..detection.hand_detector import HandFrame
from ..recognition.cursor import CursorSmoother
from ..recognition.gesture_buffer import TemporalStabilizer
from ..recognition.gesture_classifier import GestureClassifier
from ..utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class TickResult:
    """Outcome of one pipeline tick."""
    hand_state: HandState
    mode: AppMode
    raw_gesture: Gesture = Gesture.NONE
    hand_detected: bool = False
    mode_changed: bool = False
    skipped: bool = False
    hand: Optional[HandFrame] = None


class Pipeline:
    """Gesture pipeline driven one tick per video frame.

    A tick is skipped (no classification, no publish) when:
        - the source has no ready frame yet,
        - the source frame id has not advanced since the last tick,
        - a tick is already in flight,
        - ``stop()`` has been called.

    A detection that returns after ``stop()`` was requested is discarded.
    """

    def __init__(
        self,
        classifier: Optional[GestureClassifier] = None,
        stabilizer: Optional[TemporalStabilizer] = None,
        cursor: Optional[CursorSmoother] = None,
        controller: Optional[ModeTransitionController] = None,
        event_bus: Optional[EventBus] = None,
        performance_monitor: Optional[PerformanceMonitor] = None,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self._classifier = classifier or GestureClassifier()
        self._stabilizer = stabilizer or TemporalStabilizer()
        self._cursor = cursor or CursorSmoother()
        self._controller = controller or ModeTransitionController()
        self._bus = event_bus or EventBus()
        self._perf = performance_monitor or PerformanceMonitor()
        self._clock = clock

        self._hand_state = HandState.initial()
        self._last_frame_id = None
        self._hand_present = False
        self._last_stable = Gesture.NONE
        self._in_tick = False
        self._stopped = False

    def tick(self, source, mode: AppMode, now_ms: Optional[float] = None) -> TickResult:
        """
        Run one iteration against ``source``.

        Args:
            source: LandmarkSource providing ``frame_id`` and ``detect()``
            mode: Current application mode
            now_ms: Tick time in milliseconds (defaults to the pipeline clock)

        Returns:
            TickResult with the published HandState and the new mode
        """
        if self._stopped or self._in_tick:
            return self._skip(mode)

        self._in_tick = True
        try:
            return self._run(source, mode, self._clock() if now_ms is None else now_ms)
        finally:
            self._in_tick = False

    def _run(self, source, mode: AppMode, now_ms: float) -> TickResult:
        frame_id = source.frame_id
        if frame_id is None or frame_id == self._last_frame_id:
            self._perf.frame_skipped()
            return self._skip(mode)
        self._last_frame_id = frame_id

        self._perf.frame_start()
        with self._perf.measure("detection"):
            hand = source.detect(now_ms)

        if self._stopped:
            logger.debug("Discarding detection for frame %s: pipeline stopped", frame_id)
            return self._skip(mode)

        with self._perf.measure("recognition"):
            raw = self._classifier.classify(hand)
            stable = self._stabilizer.push(raw)
            if hand is not None:
                self._cursor.update(hand.wrist.x, hand.wrist.y)
            else:
                # Presence wins over leftover history
                stable = Gesture.NONE

        new_mode = self._controller.evaluate(stable, mode, now_ms)

        cursor_x, cursor_y = self._cursor.position
        state = HandState(gesture=stable, cursor_x=cursor_x, cursor_y=cursor_y,
                          timestamp_ms=now_ms)
        self._hand_state = state
        self._publish(state, hand, mode, new_mode)
        self._perf.frame_complete()

        return TickResult(
            hand_state=state,
            mode=new_mode,
            raw_gesture=raw,
            hand_detected=hand is not None,
            mode_changed=new_mode is not mode,
            hand=hand,
        )

    def _publish(self, state: HandState, hand, old_mode: AppMode, new_mode: AppMode):
        present = hand is not None
        if present and not self._hand_present:
            self._bus.emit(Events.HAND_DETECTED, hand=hand)
        elif not present and self._hand_present:
            self._bus.emit(Events.HAND_LOST)
        self._hand_present = present

        if state.gesture is not self._last_stable:
            self._bus.emit(Events.GESTURE_STABLE, gesture=state.gesture,
                           previous=self._last_stable)
            self._last_stable = state.gesture

        if new_mode is not old_mode:
            self._bus.emit(Events.MODE_CHANGED, old_mode=old_mode, new_mode=new_mode,
                           gesture=state.gesture, timestamp_ms=state.timestamp_ms)

        self._bus.emit(Events.HAND_STATE, state=state)

    def _skip(self, mode: AppMode) -> TickResult:
        return TickResult(hand_state=self._hand_state, mode=mode, skipped=True)

    def stop(self) -> None:
        """Stop processing; later ticks are no-ops."""
        if not self._stopped:
            self._stopped = True
            logger.info("Pipeline stopped")

    def reset(self) -> None:
        """Clear gesture history, cursor and cooldown and accept ticks again."""
        self._stabilizer.reset()
        self._cursor.reset()
        self._controller.reset()
        self._hand_state = HandState.initial()
        self._last_frame_id = None
        self._hand_present = False
        self._last_stable = Gesture.NONE
        self._stopped = False

    @property
    def hand_state(self) -> HandState:
        """Latest published snapshot."""
        return self._hand_state

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    @property
    def controller(self) -> ModeTransitionController:
        return self._controller

    @property
    def performance(self) -> PerformanceMonitor:
        return self._perf
