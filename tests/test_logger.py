"""
Tests for logging setup and the transition log
===============================================
"""

import logging
import logging.handlers
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture_tree.core.types import AppMode, Gesture
from gesture_tree.utils.logger import TransitionLogger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:

    def test_console_only(self, restore_root_logger):
        root = setup_logging(level="DEBUG")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        root = setup_logging(level="chatty")

        assert root.level == logging.INFO

    def test_rotating_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "gesture_tree.log"
        root = setup_logging(level="INFO", log_file=str(log_file), max_size_mb=1, backup_count=2)

        file_handlers = [h for h in root.handlers
                         if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024 * 1024
        assert file_handlers[0].backupCount == 2
        assert log_file.parent.is_dir()


class TestTransitionLogger:
    """Test suite for TransitionLogger."""

    @pytest.fixture
    def transitions(self):
        return TransitionLogger(max_entries=3)

    def test_records_gesture_transition(self, transitions):
        transitions.on_mode_changed(old_mode=AppMode.TREE, new_mode=AppMode.LOVE,
                                    gesture=Gesture.HEART, timestamp_ms=120.0)

        entry = transitions.get_history()[0]
        assert entry["from"] == "TREE"
        assert entry["to"] == "LOVE"
        assert entry["gesture"] == "HEART"
        assert entry["timestamp_ms"] == 120.0

    def test_manual_transition(self, transitions):
        transitions.on_mode_changed(old_mode=AppMode.TREE, new_mode=AppMode.TEXT)

        assert transitions.get_history()[0]["gesture"] == "manual"

    def test_history_bounded(self, transitions):
        for _ in range(5):
            transitions.on_mode_changed(old_mode=AppMode.TREE, new_mode=AppMode.TEXT)

        assert transitions.total_transitions == 3
        assert len(transitions.get_history(last_n=2)) == 2

    def test_ignores_extra_payload(self, transitions):
        transitions.on_mode_changed(old_mode=AppMode.TREE, new_mode=AppMode.TEXT, source="ui")

        assert transitions.total_transitions == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
