"""
Image decoding into RGBA pixel buffers.

Any format Pillow can open is accepted. The optional canvas fit reproduces
the preview sizing of the browser tool: the long side is scaled down to
`max_dimension` and the other side follows the aspect ratio.
"""

import io
import logging
from pathlib import Path
from typing import NamedTuple

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import DEFAULT_MAX_DIMENSION, MAX_IMAGE_PIXELS
from ..exceptions import InvalidInput

logger = logging.getLogger(__name__)


class DecodedImage(NamedTuple):
    width: int
    height: int
    buffer: np.ndarray  # (height, width, 4) uint8


def fit_to_canvas(width: int, height: int, max_dimension: int | None) -> tuple[int, int]:
    """
    Scale dimensions down so the image fits the preview canvas.

    Landscape images wider than `max_dimension` are pinned on width;
    otherwise images taller than `max_dimension` are pinned on height.
    Smaller images are left alone.

    Args:
        width: Source width
        height: Source height
        max_dimension: Longest allowed side (0 or None disables the fit)

    Returns:
        (width, height) tuple
    """
    if width <= 0 or height <= 0:
        raise InvalidInput(f"Image dimensions must be positive, got {width}x{height}")
    if not max_dimension:
        return width, height

    if width > height and width > max_dimension:
        height = height * (max_dimension / width)
        width = max_dimension
    elif height > max_dimension:
        width = width * (max_dimension / height)
        height = max_dimension

    # Canvas dimensions truncate fractional sizes
    return max(1, int(width)), max(1, int(height))


def _to_rgba(image: Image.Image, max_dimension: int | None) -> DecodedImage:
    # Size comes from the header, so this runs before any pixel data is decoded
    if image.width * image.height > MAX_IMAGE_PIXELS:
        raise InvalidInput(
            f"Image is {image.width}x{image.height}, over the {MAX_IMAGE_PIXELS} pixel limit"
        )

    # Honor camera rotation before measuring
    image = ImageOps.exif_transpose(image).convert("RGBA")
    arr = np.array(image)

    width, height = image.size
    new_width, new_height = fit_to_canvas(width, height, max_dimension)
    if (new_width, new_height) != (width, height):
        arr = cv2.resize(arr, (new_width, new_height), interpolation=cv2.INTER_AREA)
        logger.debug("Fit %dx%d image to %dx%d canvas", width, height, new_width, new_height)

    return DecodedImage(new_width, new_height, arr)


def decode_image(data: bytes, max_dimension: int | None = DEFAULT_MAX_DIMENSION) -> DecodedImage:
    """
    Decode encoded image bytes into an RGBA buffer.

    Args:
        data: Encoded image (PNG, JPEG, WebP, ...)
        max_dimension: Canvas fit limit (0 or None keeps full resolution)

    Returns:
        DecodedImage with a writable (H, W, 4) uint8 buffer
    """
    if not data:
        raise InvalidInput("Empty image data")
    try:
        with Image.open(io.BytesIO(data)) as image:
            return _to_rgba(image, max_dimension)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidInput(f"Could not decode image: {e}") from e


def load_image(path: str | Path, max_dimension: int | None = DEFAULT_MAX_DIMENSION) -> DecodedImage:
    """Decode an image file into an RGBA buffer. See decode_image."""
    try:
        with Image.open(path) as image:
            return _to_rgba(image, max_dimension)
    except FileNotFoundError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidInput(f"Could not read image {path}: {e}") from e
