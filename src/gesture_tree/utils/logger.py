"""
Logging setup and the mode-transition log.
"""

import os
import time
import logging
import logging.handlers
from collections import deque


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure console (and optional rotating file) logging."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-30s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class TransitionLogger:
    """Keeps the committed mode transitions of the current session.

    Subscribe ``on_mode_changed`` to ``Events.MODE_CHANGED``. Nothing is
    written to disk beyond the regular log output.
    """

    def __init__(self, max_entries: int = 200):
        self.logger = logging.getLogger("gesture_tree.transitions")
        self._history = deque(maxlen=max_entries)

    def on_mode_changed(self, old_mode, new_mode, gesture=None, timestamp_ms=None, **_):
        entry = {
            "time": time.time(),
            "from": old_mode.name,
            "to": new_mode.name,
            "gesture": gesture.name if gesture is not None else "manual",
            "timestamp_ms": timestamp_ms,
        }
        self._history.append(entry)
        self.logger.info("Transition: %-7s -> %-7s | Gesture: %s",
                         entry["from"], entry["to"], entry["gesture"])

    def get_history(self, last_n=None):
        history = list(self._history)
        if last_n:
            return history[-last_n:]
        return history

    @property
    def total_transitions(self):
        return len(self._history)
