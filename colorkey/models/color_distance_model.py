import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from PIL import Image

from ..color import validate_color
from ..config import DEFAULT_TOLERANCE
from ..exceptions import InvalidInput
from .base import BackgroundRemover

logger = logging.getLogger(__name__)


def _as_pixel_array(buffer, in_place: bool) -> np.ndarray:
    """Validate an RGBA buffer and return it as a uint8 array (the caller's array when in_place)."""
    if in_place:
        if not isinstance(buffer, np.ndarray) or buffer.dtype != np.uint8:
            raise InvalidInput("In-place removal needs a uint8 numpy array")
        if not buffer.flags.writeable or not buffer.flags.c_contiguous:
            raise InvalidInput("In-place removal needs a writable, C-contiguous array")
        arr = buffer
    elif isinstance(buffer, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(buffer, dtype=np.uint8)
    else:
        try:
            arr = np.asarray(buffer)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Cannot read pixel buffer: {e}") from e

    if arr.ndim > 1 and arr.shape[-1] != 4:
        raise InvalidInput(f"Expected RGBA pixels on the last axis, got shape {arr.shape}")
    if arr.size % 4 != 0:
        raise InvalidInput(f"Buffer length {arr.size} is not a multiple of 4")

    if arr.dtype == np.uint8:
        return arr

    # Wider integer or float buffers must still hold 8-bit channel values
    if arr.dtype.kind not in "iuf":
        raise InvalidInput(f"Unsupported buffer dtype: {arr.dtype}")
    if arr.size:
        if arr.min() < 0 or arr.max() > 255:
            raise InvalidInput("Channel values must be within [0, 255]")
        if arr.dtype.kind == "f" and not np.array_equal(arr, np.floor(arr)):
            raise InvalidInput("Channel values must be whole numbers")
    return arr.astype(np.uint8)


def check_tolerance(tolerance) -> float:
    """Return tolerance as a float, rejecting negative and NaN values."""
    try:
        tolerance = float(tolerance)
    except (TypeError, ValueError):
        raise InvalidInput(f"Tolerance must be a number, got {tolerance!r}") from None
    if math.isnan(tolerance) or tolerance < 0:
        raise InvalidInput(f"Tolerance must be >= 0, got {tolerance}")
    return tolerance


def _distance(pixels: np.ndarray, target: np.ndarray) -> np.ndarray:
    """Euclidean RGB distance for an (N, 4) pixel block."""
    diff = pixels[:, :3].astype(np.int32) - target
    return np.sqrt(np.sum(diff * diff, axis=1, dtype=np.int64))


def _zero_alpha(pixels: np.ndarray, target: np.ndarray, tolerance: float) -> int:
    """Zero the alpha of every matching pixel in an (N, 4) block. Returns the match count."""
    mask = _distance(pixels, target) < tolerance
    pixels[mask, 3] = 0
    return int(np.count_nonzero(mask))


def color_distance(buffer, target) -> np.ndarray:
    """
    Per-pixel Euclidean distance in RGB space from a target color.

    Args:
        buffer: RGBA pixel buffer (flat or (H, W, 4))
        target: (R, G, B) color

    Returns:
        Float array with one distance per pixel, in buffer order
    """
    arr = _as_pixel_array(buffer, in_place=False)
    target = np.array(validate_color(target), dtype=np.int32)
    return _distance(arr.reshape(-1, 4), target)


def remove_color(
    buffer,
    target,
    tolerance: float,
    in_place: bool = False,
    workers: int = 1,
) -> np.ndarray:
    """
    Make every pixel close to `target` fully transparent.

    A pixel matches when its RGB distance from the target is strictly less
    than `tolerance`, so a tolerance of 0 never removes anything. Matching
    pixels only have their alpha set to 0; color channels, and the alpha of
    everything else, are left as they were.

    Args:
        buffer: RGBA pixel buffer. A uint8 numpy array (flat or (H, W, 4)),
                bytes, or any sequence of 0-255 integers.
        target: (R, G, B) color to remove
        tolerance: Maximum RGB distance (exclusive) treated as a match
        in_place: Write into `buffer` instead of a copy. Requires a writable
                  uint8 numpy array.
        workers: Split the pixels into this many disjoint ranges and process
                 them on a thread pool

    Returns:
        uint8 array with the same shape as the input (flat for non-array input)
    """
    target = np.array(validate_color(target), dtype=np.int32)
    tolerance = check_tolerance(tolerance)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise InvalidInput(f"workers must be a positive integer, got {workers!r}")

    arr = _as_pixel_array(buffer, in_place)
    out = arr if in_place else np.array(arr, dtype=np.uint8, order="C", copy=True)
    pixels = out.reshape(-1, 4)
    n_pixels = len(pixels)

    workers = min(workers, max(n_pixels, 1))
    if workers == 1:
        removed = _zero_alpha(pixels, target, tolerance)
    else:
        bounds = np.linspace(0, n_pixels, workers + 1, dtype=np.int64)
        chunks = [pixels[start:stop] for start, stop in zip(bounds[:-1], bounds[1:])]
        with ThreadPoolExecutor(max_workers=workers) as executor:
            removed = sum(executor.map(lambda c: _zero_alpha(c, target, tolerance), chunks))

    logger.debug(
        "Made %d of %d pixels transparent (target=%s, tolerance=%s, workers=%d)",
        removed, n_pixels, tuple(int(c) for c in target), tolerance, workers,
    )
    return out


class ColorDistanceRemover(BackgroundRemover):
    """
    Background remover using plain RGB Euclidean distance.

    Best for: Images with a flat background of one known color.
    Every pixel whose color lies within `tolerance` of the target loses its
    opacity, wherever it is in the image. Color channels are kept intact, so
    the result can be re-keyed or composited later.
    """

    def __init__(
        self,
        target_color: tuple = (255, 255, 255),
        tolerance: float = DEFAULT_TOLERANCE,
        workers: int = 1,
    ):
        """
        Initialize the color distance remover.

        Args:
            target_color: RGB tuple of the background color (default: white)
            tolerance: Maximum RGB distance (exclusive) to consider as background.
                       0 removes nothing, ~442 covers the whole RGB cube.
            workers: Thread count for large images
        """
        self.target_color = validate_color(target_color)
        self.tolerance = check_tolerance(tolerance)
        self.workers = workers

    def apply(self, buffer: np.ndarray) -> np.ndarray:
        """Zero alpha on pixels near the target color, writing into `buffer`."""
        return remove_color(
            buffer,
            self.target_color,
            self.tolerance,
            in_place=True,
            workers=self.workers,
        )


def remove_background(
    input_path: str,
    output_path: str,
    target_color: tuple = (255, 255, 255),
    tolerance: float = DEFAULT_TOLERANCE,
) -> Image.Image:
    """Convenience function for color distance background removal."""
    return ColorDistanceRemover(target_color=target_color, tolerance=tolerance).remove(
        input_path, output_path
    )
