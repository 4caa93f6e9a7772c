from typing import Optional

import cv2
import numpy as np

from handwave.detectors import DetectionEvent, WaveDetector

SWATCH_SIZE = 60

STATE_LABELS = {
    "warming_up": "WARMING UP",
    "armed": "ARMED",
    "fired": "FIRED",
}


def annotate(image: np.ndarray, detector: WaveDetector,
             event: Optional[DetectionEvent] = None) -> np.ndarray:
    """
    Draw the detector's debug state onto a copy of a BGR frame.

    Shows the current average color as a swatch, the window fill, the
    moving-frame streak and the movement score against its threshold.
    The frame gets a green border on the frame a wave is detected.
    """
    image = image.copy()
    h, w = image.shape[:2]

    # Average color swatch (top right)
    if detector.last_sample is not None:
        r, g, b = detector.last_sample.as_tuple()
        swatch_color = (int(b * 255), int(g * 255), int(r * 255))
        x0 = max(0, w - SWATCH_SIZE - 10)
        cv2.rectangle(image, (x0, 10), (w - 10, 10 + SWATCH_SIZE), swatch_color, -1)
        cv2.rectangle(image, (x0, 10), (w - 10, 10 + SWATCH_SIZE), (255, 255, 255), 1)

    state_str = STATE_LABELS.get(detector.current_state, "UNKNOWN")
    debug_info = [
        f"Wave: {state_str} | Streak:{detector.wave_frame_count}/{detector.wave_frames} "
        f"Window:{len(detector.history)}/{detector.frame_history}",
        f"Movement: {detector.movement_score:.3f} (threshold: {detector.movement_threshold})",
    ]

    y_offset = h - 20
    for info in debug_info:
        cv2.putText(image, info, (10, y_offset), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 0), 2)
        y_offset -= 25

    if event is not None:
        cv2.rectangle(image, (0, 0), (w - 1, h - 1), (0, 255, 0), 8)
        cv2.putText(image, "WAVE!", (10, 40), cv2.FONT_HERSHEY_SIMPLEX, 1.2, (0, 255, 0), 3)

    return image
