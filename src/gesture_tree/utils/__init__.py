"""Configuration, logging, performance and visualization helpers."""
from .config import Config
from .logger import setup_logging, TransitionLogger
from .performance import PerformanceMonitor

__all__ = ["Config", "setup_logging", "TransitionLogger", "PerformanceMonitor"]
