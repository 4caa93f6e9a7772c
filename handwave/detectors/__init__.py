from .base import DetectionEvent, EventDetector
from .wave_detector import WaveDetector

__all__ = ["DetectionEvent", "EventDetector", "WaveDetector"]
