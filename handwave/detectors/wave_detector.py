import logging
from collections import deque
from typing import Optional

from handwave.color import ColorSample, average_color
from handwave.consts import FRAME_HISTORY, MOVEMENT_THRESHOLD, WAVE_COOLDOWN, WAVE_FRAMES

from .base import DetectionEvent, EventDetector

log = logging.getLogger(__name__)


class WaveDetector(EventDetector):
    """
    Detects a hand wave from changes in the average color of the scene.

    Keeps the average colors of the last few frames, scores how much the color
    moved across that window and requires several consecutive moving frames
    before reporting a wave, so single-frame flicker never fires.
    """

    def __init__(self, frame_history: int = FRAME_HISTORY,
                 movement_threshold: float = MOVEMENT_THRESHOLD,
                 wave_frames: int = WAVE_FRAMES,
                 cooldown: float = WAVE_COOLDOWN):
        """
        :param frame_history: number of frames kept in the sliding window
        :param movement_threshold: score a window must exceed to count as moving
        :param wave_frames: consecutive moving frames needed to confirm a wave
        :param cooldown: minimum seconds between reported waves
        """
        if frame_history < 1:
            raise ValueError(f"frame_history must be at least 1, got {frame_history}")
        if wave_frames < 1:
            raise ValueError(f"wave_frames must be at least 1, got {wave_frames}")

        super().__init__("wave", cooldown=cooldown)
        self.frame_history = frame_history
        self.movement_threshold = movement_threshold
        self.wave_frames = wave_frames

        # State tracking
        self.history = deque(maxlen=frame_history)
        self.wave_frame_count = 0
        self.onset_time = None

        # Debug info
        self.movement_score = 0.0
        self.last_sample = None
        self.current_state = "warming_up"  # "warming_up", "armed" or "fired"
        self.just_detected = False

    def calculate_total_movement(self) -> float:
        """Sum of color distances between neighbouring frames, oldest to newest."""
        samples = list(self.history)
        return sum(samples[i].distance(samples[i - 1]) for i in range(1, len(samples)))

    def observe(self, sample: ColorSample) -> bool:
        """
        Feed one frame's average color through the sliding window.

        Args:
            sample: Average color of the newest frame

        Returns:
            True on the frame that completes a wave, False otherwise
        """
        self.history.append(sample)
        self.last_sample = sample
        self.just_detected = False

        # A full window is needed before the score means anything
        if len(self.history) < self.frame_history:
            self.current_state = "warming_up"
            return False

        self.movement_score = self.calculate_total_movement()
        self.wave_frame_count, waved = self.check_threshold_stable(
            self.movement_score, self.movement_threshold, below=False,
            frame_counter=self.wave_frame_count, required_frames=self.wave_frames
        )

        if waved:
            self.wave_frame_count = 0
            self.current_state = "fired"
            self.just_detected = True
            return True

        self.current_state = "armed"
        return False

    def detect(self, frame, frame_time: float) -> Optional[DetectionEvent]:
        # Reduce first so a bad frame leaves the window untouched
        sample = average_color(frame)
        waved = self.observe(sample)

        log.debug("Wave: %s score=%.3f streak=%d/%d", self.current_state,
                  self.movement_score, self.wave_frame_count, self.wave_frames)

        if not waved:
            if self.wave_frame_count == 0:
                self.onset_time = None
            elif self.wave_frame_count == 1:
                self.onset_time = frame_time
            return None

        onset = self.onset_time if self.onset_time is not None else frame_time
        self.onset_time = None

        if not self.can_detect(frame_time):
            log.debug("Wave at %.2fs suppressed by cooldown", frame_time)
            self.just_detected = False
            return None

        self.record_detection(frame_time)
        return DetectionEvent(
            name=self.name,
            timestamp=frame_time,
            onset_time=onset,
            offset_time=frame_time,
            metadata={"movement_score": self.movement_score}
        )

    def reset(self) -> None:
        self.history.clear()
        self.wave_frame_count = 0
        self.onset_time = None
        self.movement_score = 0.0
        self.last_sample = None
        self.current_state = "warming_up"
        self.just_detected = False
