from dataclasses import dataclass
from typing import Tuple

import numpy as np

from handwave.exc import EmptyFrame, InvalidFrame


@dataclass(frozen=True)
class ColorSample:
    """Average color of one frame, each channel normalized to [0, 1]."""
    r: float
    g: float
    b: float

    def distance(self, other: "ColorSample") -> float:
        """
        Manhattan (L1) distance between two colors.

        Args:
            other: Color to compare against

        Returns:
            Sum of the absolute channel differences
        """
        return abs(self.r - other.r) + abs(self.g - other.g) + abs(self.b - other.b)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)


def average_color(pixels) -> ColorSample:
    """
    Reduce a frame to its average color.

    Args:
        pixels: RGB(A) frame as an (H, W, C) image, an (N, C) pixel list or a
            sequence of (r, g, b) tuples. Integer values are treated as 8-bit,
            float values as already normalized. Any 2-D input with 3 or 4
            columns is read as a pixel list, so an (H, 3) grayscale image
            would be taken as H RGB pixels.

    Returns:
        ColorSample with the per-channel mean of the frame

    Raises:
        InvalidFrame: If the frame is missing or not made of color pixels
        EmptyFrame: If the frame has no pixels
    """
    if pixels is None:
        raise InvalidFrame("no frame to reduce")

    try:
        frame = np.asarray(pixels)
    except (TypeError, ValueError) as e:
        raise InvalidFrame(f"frame is not a pixel array: {e}") from e

    if frame.size == 0:
        raise EmptyFrame("frame has no pixels")
    if frame.dtype.kind not in "uif":
        raise InvalidFrame(f"unsupported pixel type {frame.dtype}")
    if frame.ndim < 2 or frame.shape[-1] not in (3, 4):
        raise InvalidFrame(f"expected RGB or RGBA pixels, got shape {frame.shape}")

    # Alpha is ignored
    flat = frame.reshape(-1, frame.shape[-1])[:, :3]
    count = flat.shape[0]

    # Sum in a wide accumulator and divide once at the end
    if frame.dtype.kind == "f":
        sums = flat.sum(axis=0, dtype=np.float64)
        scale = 1.0
    else:
        sums = flat.sum(axis=0, dtype=np.int64)
        scale = 255.0

    r, g, b = sums / (count * scale)
    return ColorSample(float(r), float(g), float(b))
