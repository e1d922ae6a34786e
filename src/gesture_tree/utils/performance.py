"""
Performance Monitoring Module
==============================

Rolling FPS and per-stage latency for the frame loop.
"""

import time
import logging
from collections import deque
from contextlib import contextmanager
from typing import Deque, Dict, Optional

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Rolling-window frame and stage timing.

    Example:
        >>> monitor = PerformanceMonitor()
        >>> monitor.frame_start()
        >>> with monitor.measure("detection"):
        ...     hand = source.detect(now_ms)
        >>> monitor.frame_complete()
    """

    def __init__(self, window_size: int = 30):
        self.window_size = window_size
        self._frame_times: Deque[float] = deque(maxlen=window_size)
        self._stage_times: Dict[str, Deque[float]] = {}
        self._frame_start: Optional[float] = None
        self._total_frames = 0
        self._skipped_frames = 0

    def frame_start(self) -> None:
        self._frame_start = time.perf_counter()

    def frame_complete(self) -> None:
        if self._frame_start is None:
            return
        self._frame_times.append(time.perf_counter() - self._frame_start)
        self._total_frames += 1
        self._frame_start = None

    def frame_skipped(self) -> None:
        """Count a tick that found no new upstream frame."""
        self._skipped_frames += 1
        self._frame_start = None

    @contextmanager
    def measure(self, stage: str):
        """Time a processing stage (e.g. "detection", "recognition")."""
        start = time.perf_counter()
        try:
            yield
        finally:
            times = self._stage_times.setdefault(stage, deque(maxlen=self.window_size))
            times.append(time.perf_counter() - start)

    @property
    def fps(self) -> float:
        """Processed frames per second (rolling average)."""
        if not self._frame_times:
            return 0.0
        avg = sum(self._frame_times) / len(self._frame_times)
        return 1.0 / avg if avg > 0 else 0.0

    @property
    def frame_time_ms(self) -> float:
        if not self._frame_times:
            return 0.0
        return (sum(self._frame_times) / len(self._frame_times)) * 1000

    def stage_time_ms(self, stage: str) -> float:
        times = self._stage_times.get(stage)
        if not times:
            return 0.0
        return (sum(times) / len(times)) * 1000

    @property
    def total_frames(self) -> int:
        return self._total_frames

    @property
    def skipped_frames(self) -> int:
        return self._skipped_frames

    def get_report(self) -> str:
        """Formatted performance report."""
        lines = [
            "Performance Report",
            "=" * 40,
            f"FPS: {self.fps:.1f}",
            f"Frame time: {self.frame_time_ms:.1f}ms",
            "",
            "Per-Stage Breakdown:",
        ]
        for stage in sorted(self._stage_times):
            lines.append(f"  {stage}: {self.stage_time_ms(stage):.2f}ms")
        lines.extend([
            "",
            "Frame Stats:",
            f"  Processed: {self._total_frames}",
            f"  Skipped (no new frame): {self._skipped_frames}",
        ])
        return "\n".join(lines)
