from abc import ABC, abstractmethod

import numpy as np
from PIL import Image

from ..processors.decoder import load_image
from ..processors.exporter import export_png


class BackgroundRemover(ABC):
    """Abstract base class for pixel-buffer background removers."""

    @abstractmethod
    def apply(self, buffer: np.ndarray) -> np.ndarray:
        """
        Remove background from a decoded RGBA buffer.

        Args:
            buffer: (H, W, 4) uint8 array. Implementations may write into it.

        Returns:
            RGBA array of the same shape
        """
        pass

    def remove(self, input_path: str, output_path: str) -> Image.Image:
        """
        Remove background from an image file at full resolution.

        Args:
            input_path: Path to the input image
            output_path: Path to save the PNG with transparent background

        Returns:
            PIL Image with transparent background
        """
        decoded = load_image(input_path, max_dimension=None)
        result = self.apply(decoded.buffer)
        export_png(result, output_path)
        return Image.fromarray(result)
