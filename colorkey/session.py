"""
Editing session: one loaded image, one target color, one tolerance.

Holds what the browser tool kept in page-level variables so that loading,
removing, exporting and resetting are explicit calls on an object that can
be created per request or per CLI run.
"""

import logging
from pathlib import Path

import numpy as np

from .color import Color, parse_hex_color, validate_color
from .config import (
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_TARGET_COLOR,
    DEFAULT_TOLERANCE,
    DEFAULT_WORKERS,
)
from .exceptions import SessionError
from .models.color_distance_model import check_tolerance, remove_color
from .processors.decoder import DecodedImage, decode_image, load_image
from .processors.exporter import encode_png, export_png

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(
        self,
        target: Color | tuple | str = DEFAULT_TARGET_COLOR,
        tolerance: float = DEFAULT_TOLERANCE,
        max_dimension: int | None = DEFAULT_MAX_DIMENSION,
        workers: int = DEFAULT_WORKERS,
    ):
        self.target = target
        self.tolerance = tolerance
        self.max_dimension = max_dimension
        self.workers = workers
        self._original: DecodedImage | None = None
        self._result: np.ndarray | None = None

    @property
    def target(self) -> Color:
        return self._target

    @target.setter
    def target(self, value):
        self._target = parse_hex_color(value) if isinstance(value, str) else validate_color(value)

    def set_target_hex(self, value: str) -> Color:
        self.target = parse_hex_color(value)
        return self.target

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value):
        self._tolerance = check_tolerance(value)

    @property
    def has_image(self) -> bool:
        return self._original is not None

    @property
    def has_result(self) -> bool:
        return self._result is not None

    @property
    def original(self) -> DecodedImage:
        if self._original is None:
            raise SessionError("No image loaded")
        return self._original

    @property
    def result(self) -> np.ndarray:
        if self._result is None:
            raise SessionError("Background has not been removed yet")
        return self._result

    def load(self, path: str | Path) -> DecodedImage:
        """Load an image file, replacing any previous image and result."""
        return self._set_original(load_image(path, max_dimension=self.max_dimension))

    def load_bytes(self, data: bytes) -> DecodedImage:
        """Load encoded image bytes, replacing any previous image and result."""
        return self._set_original(decode_image(data, max_dimension=self.max_dimension))

    def _set_original(self, decoded: DecodedImage) -> DecodedImage:
        self._original = decoded
        self._result = None
        logger.info("Loaded %dx%d image", decoded.width, decoded.height)
        return decoded

    def remove_background(self) -> np.ndarray:
        """
        Run color removal on the loaded image with the current settings.

        The loaded original is left untouched, so this can be repeated with
        other colors or tolerances.

        Returns:
            (H, W, 4) uint8 result buffer
        """
        self._result = remove_color(
            self.original.buffer,
            self.target,
            self.tolerance,
            workers=self.workers,
        )
        return self._result

    def result_png(self) -> bytes:
        return encode_png(self.result)

    def export(self, output_path: str | Path | None = None) -> str:
        """Write the result as PNG (default: background-removed.png)."""
        return export_png(self.result, output_path or DEFAULT_EXPORT_FILENAME)

    def reset(self) -> None:
        self._original = None
        self._result = None
