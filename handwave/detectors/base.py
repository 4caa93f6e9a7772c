from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class DetectionEvent:
    """Represents a detected event."""
    name: str
    timestamp: float
    onset_time: float  # When the qualifying streak started
    offset_time: float  # When the gesture was confirmed
    metadata: dict = field(default_factory=dict)


class EventDetector(ABC):
    """Base class for all event detectors."""

    def __init__(self, name: str, cooldown: float = 0.0):
        """
        Initialize event detector.

        Args:
            name: Name of the event
            cooldown: Minimum time (seconds) between detections to avoid duplicates
        """
        self.name = name
        self.cooldown = cooldown
        self.last_detection_time = None

    @abstractmethod
    def detect(self, frame, frame_time: float) -> Optional[DetectionEvent]:
        """
        Detect event from a camera frame.

        Args:
            frame: RGB pixel frame
            frame_time: Current frame timestamp

        Returns:
            DetectionEvent if detected, None otherwise
        """

    @abstractmethod
    def reset(self) -> None:
        """Forget all tracked state."""

    def can_detect(self, frame_time: float) -> bool:
        """Check if enough time has passed since last detection."""
        if self.last_detection_time is None:
            return True
        return (frame_time - self.last_detection_time) >= self.cooldown

    def record_detection(self, frame_time: float):
        """Record that a detection occurred."""
        self.last_detection_time = frame_time

    # Helper methods for common detection patterns
    def check_threshold_stable(self, value: float, threshold: float,
                               below: bool, frame_counter: int,
                               required_frames: int) -> Tuple[int, bool]:
        """
        Check if a value stays below/above a threshold for consecutive frames.

        Args:
            value: Current value to check
            threshold: Threshold to compare against
            below: If True, check if value < threshold; if False, check if value > threshold
            frame_counter: Current count of consecutive frames meeting condition
            required_frames: Number of consecutive frames required

        Returns:
            Tuple of (new_frame_counter, condition_met)
        """
        if below:
            condition_met = value < threshold
        else:
            condition_met = value > threshold

        if condition_met:
            frame_counter += 1
        else:
            frame_counter = 0

        return frame_counter, (frame_counter >= required_frames)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
