"""
Frame sources feeding the wave detector.

A source announces once that it has started (``add_started_listener``) and is
then polled once per tick. ``poll`` returns the newest RGB frame, or None when
no new frame has arrived since the last poll.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

import cv2
import numpy as np

from handwave.consts import CAMERA_INDEX
from handwave.exc import MissingCollaborator

log = logging.getLogger(__name__)


class FrameSource(ABC):
    """Base class for anything that delivers camera frames."""

    def __init__(self):
        self.started = False
        self._started_listeners: List[Callable[[], None]] = []

    def add_started_listener(self, callback: Callable[[], None]):
        """Call ``callback`` once the source is running (immediately if it already is)."""
        self._started_listeners.append(callback)
        if self.started:
            callback()

    def _notify_started(self):
        self.started = True
        for callback in list(self._started_listeners):
            callback()

    @abstractmethod
    def start(self):
        """Begin delivering frames."""

    @abstractmethod
    def poll(self) -> Optional[np.ndarray]:
        """Return the newest frame, or None if there is no new frame yet."""

    @property
    def exhausted(self) -> bool:
        """True once the source will never deliver another frame."""
        return False

    def release(self):
        """Free the underlying device."""


class CameraFrameSource(FrameSource):
    """Frames from an OpenCV camera index or video file."""

    def __init__(self, source=CAMERA_INDEX):
        """
        Args:
            source: Camera device index (int) or video file path (str)
        """
        super().__init__()
        self.source = source
        self.is_video_file = isinstance(source, str)
        self.frame_size = None
        self.fps = None
        self._cap = None
        self._pending = None
        self._exhausted = False

    def start(self):
        """
        Open the camera and announce it once the first frame reads.

        Raises:
            MissingCollaborator: If the camera or file can't be opened or read
        """
        kind = "video file" if self.is_video_file else "camera"
        cap = cv2.VideoCapture(self.source)
        if not cap.isOpened():
            cap.release()
            raise MissingCollaborator(f"Could not open {kind}: {self.source}")

        # Test read
        success, frame = cap.read()
        if not success:
            cap.release()
            raise MissingCollaborator(f"Could not read first frame from {kind}: {self.source}")

        self._cap = cap
        self._pending = frame
        self.frame_size = (frame.shape[1], frame.shape[0])
        if self.is_video_file:
            self.fps = cap.get(cv2.CAP_PROP_FPS)
        log.info("Opened %s %s (%dx%d)", kind, self.source, *self.frame_size)
        self._notify_started()

    def poll(self) -> Optional[np.ndarray]:
        if self._cap is None or self._exhausted:
            return None

        if self._pending is not None:
            frame, self._pending = self._pending, None
        else:
            success, frame = self._cap.read()
            if not success:
                if self.is_video_file:
                    log.info("End of video reached")
                    self._exhausted = True
                else:
                    log.debug("Failed to read frame, retrying")
                return None

        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None


class SequenceFrameSource(FrameSource):
    """Replays frames held in memory. A None entry means no new frame for that tick."""

    def __init__(self, frames: Iterable[Optional[np.ndarray]]):
        super().__init__()
        self._frames = iter(frames)
        self._exhausted = False
        self.released = False

    def start(self):
        self._notify_started()

    def poll(self) -> Optional[np.ndarray]:
        if not self.started or self._exhausted:
            return None
        try:
            return next(self._frames)
        except StopIteration:
            self._exhausted = True
            return None

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def release(self):
        self.released = True
