"""
Gesture Tree Installation
==========================

Hand-gesture driven control core for an interactive 3D tree installation.
A webcam hand-landmark stream is turned into stable gestures, a smoothed
cursor and debounced scene-mode changes.

Modules:
    - capture: Camera frame acquisition
    - detection: MediaPipe hand landmark detection and its lifecycle
    - recognition: Gesture classification, temporal voting, cursor smoothing
    - control: Mode transition state machine
    - core: Shared types, event bus and the per-frame pipeline
    - utils: Configuration, logging, performance and visualization
"""

__version__ = "1.0.0"
__author__ = "Gesture Tree Team"
