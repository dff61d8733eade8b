import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from ..config import DEFAULT_EXPORT_FILENAME
from ..exceptions import InvalidInput

logger = logging.getLogger(__name__)


def _to_image(buffer, width: int | None, height: int | None) -> Image.Image:
    arr = np.asarray(buffer, dtype=np.uint8)

    if arr.ndim == 3:
        if arr.shape[2] != 4:
            raise InvalidInput(f"Expected an (H, W, 4) buffer, got shape {arr.shape}")
        if (width, height) not in ((None, None), (arr.shape[1], arr.shape[0])):
            raise InvalidInput(
                f"Buffer is {arr.shape[1]}x{arr.shape[0]}, not {width}x{height}"
            )
    else:
        if width is None or height is None:
            raise InvalidInput("Flat buffers need an explicit width and height")
        if width <= 0 or height <= 0 or arr.size != width * height * 4:
            raise InvalidInput(
                f"Buffer length {arr.size} does not match {width}x{height} RGBA"
            )
        arr = arr.reshape(height, width, 4)

    return Image.fromarray(np.ascontiguousarray(arr))


def encode_png(buffer, width: int | None = None, height: int | None = None) -> bytes:
    """
    Encode an RGBA buffer as PNG, preserving the alpha channel.

    Args:
        buffer: (H, W, 4) uint8 array, or a flat RGBA buffer with width/height
        width: Image width (required for flat buffers)
        height: Image height (required for flat buffers)

    Returns:
        PNG file contents
    """
    out = io.BytesIO()
    _to_image(buffer, width, height).save(out, "PNG")
    return out.getvalue()


def export_png(
    buffer,
    output_path: str | Path = DEFAULT_EXPORT_FILENAME,
    width: int | None = None,
    height: int | None = None,
) -> str:
    """
    Write an RGBA buffer to a PNG file.

    Args:
        buffer: (H, W, 4) uint8 array, or a flat RGBA buffer with width/height
        output_path: Destination file (default: background-removed.png)
        width: Image width (required for flat buffers)
        height: Image height (required for flat buffers)

    Returns:
        Path to the output PNG file
    """
    image = _to_image(buffer, width, height)
    image.save(output_path, "PNG")
    logger.info("Wrote %s (%dx%d)", output_path, image.width, image.height)
    return str(output_path)
