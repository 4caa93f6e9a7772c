import asyncio
import logging
import time
from typing import Callable, List, Optional

import numpy as np

from handwave.animation import AnimationSink, LogAnimationSink
from handwave.consts import FRAME_TICK_INTERVAL, WAVE_ANIMATION_DURATION, WAVE_ANIMATION_NAME
from handwave.detectors import DetectionEvent, WaveDetector
from handwave.exc import InvalidFrame
from handwave.sources import FrameSource

log = logging.getLogger(__name__)


class HandWaveRunner:
    """Feeds frames from a source through the wave detector and plays the wave animation."""

    def __init__(self, source: Optional[FrameSource],
                 sink: Optional[AnimationSink] = None,
                 detector: Optional[WaveDetector] = None,
                 animation_name: str = WAVE_ANIMATION_NAME,
                 animation_duration: float = WAVE_ANIMATION_DURATION,
                 frame_callback: Optional[Callable[[np.ndarray, Optional[DetectionEvent]], None]] = None):
        """
        Args:
            source: Frame source to analyse; None leaves the runner idle
            sink: Where the wave animation is played (logs only by default)
            detector: Wave detector; a default-configured one if not given
            animation_name: Animation played on each detected wave
            animation_duration: Seconds the animation plays for
            frame_callback: Called with (frame, event or None) after every processed frame
        """
        self.source = source
        self.sink = sink or LogAnimationSink()
        self.detector = detector or WaveDetector()
        self.animation_name = animation_name
        self.animation_duration = animation_duration
        self.frame_callback = frame_callback

        self.active = False
        self.running = False
        self.start_time = None
        self.frame_count = 0
        self.skipped_frames = 0
        self.events: List[DetectionEvent] = []

    def attach(self) -> bool:
        """
        Subscribe to the frame source so analysis begins once it starts.

        Returns:
            False if there is no frame source to analyse
        """
        if self.source is None:
            log.error("No frame source available; wave detection disabled")
            return False
        self.source.add_started_listener(self._on_source_started)
        return True

    def _on_source_started(self):
        log.info("Start analysing frames")
        self.detector.reset()
        self.start_time = time.time()
        self.active = True

    def tick(self, frame_time: Optional[float] = None) -> Optional[DetectionEvent]:
        """Poll the source once and analyse the frame if a new one arrived."""
        if not self.active:
            return None
        frame = self.source.poll()
        if frame is None:
            return None
        return self.process_frame(frame, frame_time)

    def process_frame(self, frame, frame_time: Optional[float] = None) -> Optional[DetectionEvent]:
        """
        Run one frame through the detector.

        Args:
            frame: RGB pixel frame
            frame_time: Timestamp of the frame; seconds since start if not given

        Returns:
            DetectionEvent if this frame completed a wave, None otherwise
        """
        if frame_time is None:
            frame_time = time.time() - (self.start_time or time.time())

        try:
            event = self.detector.detect(frame, frame_time)
        except InvalidFrame as e:
            self.skipped_frames += 1
            log.warning("Skipping frame at %.2fs: %s", frame_time, e)
            return None

        self.frame_count += 1
        if event:
            self.events.append(event)
            log.info("[%s] Detected at %.2fs (score: %.3f)", event.name.upper(),
                     event.timestamp, event.metadata["movement_score"])
            self._play_wave_animation()

        if self.frame_callback:
            try:
                self.frame_callback(frame, event)
            except Exception:
                log.exception("Frame callback failed at %.2fs", frame_time)
        return event

    def _play_wave_animation(self):
        try:
            self.sink.play(self.animation_name, self.animation_duration)
        except Exception:
            log.exception("Animation sink failed to play %r", self.animation_name)

    async def run(self, tick_interval: float = FRAME_TICK_INTERVAL):
        """
        Analyse frames until stopped, cancelled or the source runs dry.
        The source is released on the way out.
        """
        if self.source is None:
            return

        self.running = True
        try:
            while self.running and not self.source.exhausted:
                self.tick()
                await asyncio.sleep(tick_interval)
        finally:
            self.running = False
            self.active = False
            self.source.release()

    def stop(self):
        self.running = False
