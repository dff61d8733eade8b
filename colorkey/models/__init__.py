from .base import BackgroundRemover
from .color_distance_model import (
    ColorDistanceRemover,
    color_distance,
    remove_background,
    remove_color,
)

__all__ = [
    "BackgroundRemover",
    "ColorDistanceRemover",
    "color_distance",
    "remove_background",
    "remove_color",
]
