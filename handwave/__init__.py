"""
Hand wave detection from the average color of a camera feed.
"""

from .animation import AnimationSink, LogAnimationSink, WebSocketAnimationSink
from .color import ColorSample, average_color
from .detectors import DetectionEvent, EventDetector, WaveDetector
from .exc import EmptyFrame, HandWaveError, InvalidFrame, MissingCollaborator
from .runner import HandWaveRunner
from .sources import CameraFrameSource, FrameSource, SequenceFrameSource

__all__ = [
    "AnimationSink", "LogAnimationSink", "WebSocketAnimationSink",
    "ColorSample", "average_color",
    "DetectionEvent", "EventDetector", "WaveDetector",
    "EmptyFrame", "HandWaveError", "InvalidFrame", "MissingCollaborator",
    "HandWaveRunner",
    "CameraFrameSource", "FrameSource", "SequenceFrameSource",
]
