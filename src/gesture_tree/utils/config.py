"""
Centralized configuration.
Loads a YAML config, merges it over built-in defaults and provides
dot-path access plus type warnings for the fields that matter.
"""

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
DEFAULT_CONFIG_PATH = os.path.join(_BASE_DIR, "config", "config.yaml")

DEFAULTS = {
    "camera": {
        "device_id": 0,
        "width": 640,
        "height": 480,
        "fps": 30,
        "threaded": True,
        "flip_horizontal": False,
        "warmup_frames": 5,
    },
    "landmarker": {
        "model_path": "",
        "max_num_hands": 1,
        "min_detection_confidence": 0.6,
        "min_presence_confidence": 0.6,
        "min_tracking_confidence": 0.6,
        "max_attempts": 3,
        "retry_delay_s": 1.0,
    },
    "recognition": {
        "history_size": 8,
        "extended_ratio": 1.4,
        "folded_ratio": 1.2,
        "thumb_ratio": 0.8,
        "fist_ratio": 1.3,
        "pinch_ratio": 0.5,
        "open_ratio": 1.6,
    },
    "cursor": {
        "fast_factor": 0.3,
        "slow_factor": 0.1,
        "jump_threshold": 0.05,
        "mirror": True,
    },
    "transitions": {
        "cooldown_ms": 600,
    },
    "visualization": {
        "enabled": True,
        "window_name": "Gesture Tree",
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "max_size_mb": 10,
        "backup_count": 3,
    },
}

# Schema: sections and the expected types of their critical fields
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
    },
    "landmarker": {
        "max_attempts": int,
        "retry_delay_s": float,
        "min_detection_confidence": float,
    },
    "recognition": {
        "history_size": int,
    },
    "cursor": {
        "fast_factor": float,
        "slow_factor": float,
        "jump_threshold": float,
    },
    "transitions": {
        "cooldown_ms": float,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """YAML-backed configuration with defaults."""

    def __init__(self, data: dict = None):
        self._data = _deep_merge(copy.deepcopy(DEFAULTS), data or {})

    @classmethod
    def load(cls, config_path: str = None) -> "Config":
        """Load configuration from a YAML file; missing file means defaults."""
        config_path = config_path or DEFAULT_CONFIG_PATH
        data = {}
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.info("Loaded config from %s", config_path)
        except FileNotFoundError:
            logger.warning("Config file not found: %s, using defaults", config_path)

        if not isinstance(data, dict):
            logger.warning("Config root should be a mapping, got %s; using defaults",
                           type(data).__name__)
            data = {}

        config = cls(data)
        config.validate()
        return config

    def validate(self) -> list:
        """Check critical fields against the schema. Returns the warnings."""
        warnings = []
        for section_name, fields in _CONFIG_SCHEMA.items():
            section = self._data.get(section_name)
            if not isinstance(section, dict):
                warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
                continue
            for field_name, expected_type in fields.items():
                if field_name not in section:
                    continue
                value = section[field_name]
                # bool is an int subclass but never a valid number here
                if isinstance(value, bool):
                    ok = expected_type is bool
                elif expected_type is float:
                    ok = isinstance(value, (int, float))
                else:
                    ok = isinstance(value, expected_type)
                if not ok:
                    warnings.append(
                        f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                        f"got {type(value).__name__} ({value!r})"
                    )

        for w in warnings:
            logger.warning("Config validation: %s", w)
        if not warnings:
            logger.debug("Config validation passed")
        return warnings

    def get(self, key_path: str, default=None):
        """Get nested config value using dot notation: 'camera.width'."""
        value = self._data
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value) -> None:
        """Set a nested value, creating sections as needed."""
        keys = key_path.split(".")
        section = self._data
        for key in keys[:-1]:
            section = section.setdefault(key, {})
        section[keys[-1]] = value

    def get_section(self, section: str) -> dict:
        return self._data.get(section, {}) or {}

    @property
    def camera(self) -> dict:
        return self.get_section("camera")

    @property
    def landmarker(self) -> dict:
        return self.get_section("landmarker")

    @property
    def recognition(self) -> dict:
        return self.get_section("recognition")

    @property
    def cursor(self) -> dict:
        return self.get_section("cursor")

    @property
    def transitions(self) -> dict:
        return self.get_section("transitions")

    @property
    def visualization(self) -> dict:
        return self.get_section("visualization")

    @property
    def logging(self) -> dict:
        return self.get_section("logging")
