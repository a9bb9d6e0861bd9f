from .types import Stroke, Gesture, GestureCallback, LoggingGestureCallback
from .synth import GestureSynthesizer

__all__ = [
    "Stroke",
    "Gesture",
    "GestureCallback",
    "LoggingGestureCallback",
    "GestureSynthesizer",
]
