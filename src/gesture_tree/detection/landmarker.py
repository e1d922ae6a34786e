"""
Landmarker Resource Lifecycle
==============================

Explicit lifecycle around the slow, failure-prone model load:

    UNINITIALIZED -> INITIALIZING -> READY
                                  -> FAILED (after all attempts)

``ensure_ready()`` is idempotent. Concurrent callers wait on the single
in-flight initialization and all observe the same outcome.
"""

import time
import logging
import threading
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ResourceState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class LandmarkerResource:
    """Retrying, thread-safe initializer for the landmark source.

    Args:
        initializer: Callable returning True on success. Returning False
            or raising counts as a failed attempt.
        max_attempts: Total attempts before settling in FAILED
        retry_delay_s: Base delay; after failed attempt ``n`` the next
            attempt waits ``n * retry_delay_s``
        sleep: Injectable sleep function (tests pass a recorder)
        release: Called when an initialization succeeds after ``cancel()``,
            so a resource created during teardown is not leaked
    """

    def __init__(
        self,
        initializer: Callable[[], bool],
        max_attempts: int = 3,
        retry_delay_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        release: Optional[Callable[[], None]] = None,
    ):
        self._initializer = initializer
        self._max_attempts = max(1, max_attempts)
        self._retry_delay_s = retry_delay_s
        self._sleep = sleep
        self._release = release

        self._lock = threading.Lock()
        self._done = threading.Event()
        self._state = ResourceState.UNINITIALIZED
        self._attempts = 0
        self._last_error: Optional[str] = None
        self._cancelled = False
        self._thread: Optional[threading.Thread] = None

    def ensure_ready(self) -> bool:
        """Initialize once, or wait for the in-flight initialization.

        Returns:
            True if the resource is READY
        """
        with self._lock:
            if self._state is ResourceState.READY:
                return True
            if self._state is ResourceState.FAILED or self._cancelled:
                return False
            owner = self._state is ResourceState.UNINITIALIZED
            if owner:
                self._state = ResourceState.INITIALIZING
                self._done.clear()

        if not owner:
            self._done.wait()
            return self._state is ResourceState.READY

        ready = False
        try:
            ready = self._run_attempts()
            if ready and self._cancelled:
                logger.info("Landmark source became ready after cancel; releasing it")
                if self._release is not None:
                    self._release()
                self._last_error = "cancelled"
                ready = False
        finally:
            # Waiters must be woken even if initialization is interrupted
            with self._lock:
                self._state = ResourceState.READY if ready else ResourceState.FAILED
                self._done.set()

        if ready:
            logger.info("Landmark source ready after %d attempt(s)", self._attempts)
        else:
            logger.error("Landmark source unavailable after %d attempts: %s",
                         self._attempts, self._last_error)
        return ready

    def cancel(self) -> None:
        """Teardown: stop retrying and release a late successful initialization."""
        with self._lock:
            self._cancelled = True

    def _run_attempts(self) -> bool:
        for attempt in range(1, self._max_attempts + 1):
            if self._cancelled:
                self._last_error = "cancelled"
                return False
            self._attempts = attempt
            try:
                if self._initializer():
                    return True
                self._last_error = "initializer returned False"
            except Exception as e:
                self._last_error = str(e) or type(e).__name__
            logger.warning("Landmark source initialization failed (attempt %d/%d): %s",
                           attempt, self._max_attempts, self._last_error)

            if attempt < self._max_attempts:
                delay = attempt * self._retry_delay_s
                logger.info("Retrying landmark source initialization in %.1fs...", delay)
                self._sleep(delay)
        return False

    def start_async(self) -> threading.Thread:
        """Run ensure_ready() on a daemon thread and return it."""
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self.ensure_ready, daemon=True,
                                            name="landmarker-init")
            self._thread.start()
        return self._thread

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until a started initialization settles. Returns READY-ness."""
        if self._state is ResourceState.UNINITIALIZED:
            return False
        self._done.wait(timeout)
        return self._state is ResourceState.READY

    def reset(self) -> None:
        """Forget a FAILED outcome so the next ensure_ready() tries again."""
        with self._lock:
            if self._state is ResourceState.INITIALIZING:
                return
            self._state = ResourceState.UNINITIALIZED
            self._attempts = 0
            self._last_error = None

    @property
    def state(self) -> ResourceState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ResourceState.READY

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error
