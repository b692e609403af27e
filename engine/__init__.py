"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Recorder, VisualizerSession
"""

from engine.timer    import RepeatingTimer
from engine.stepper  import (
    PlaybackController,
    PlaybackState,
    clamp_speed,
    MIN_SPEED_MS,
    MAX_SPEED_MS,
    DEFAULT_SPEED_MS,
)
from engine.recorder import Recorder, RunMetrics
from engine.session  import VisualizerSession, KEY_BINDINGS

__all__ = [
    "RepeatingTimer",
    "PlaybackController",
    "PlaybackState",
    "clamp_speed",
    "MIN_SPEED_MS",
    "MAX_SPEED_MS",
    "DEFAULT_SPEED_MS",
    "Recorder",
    "RunMetrics",
    "VisualizerSession",
    "KEY_BINDINGS",
]
