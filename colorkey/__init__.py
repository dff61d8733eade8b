__version__ = "1.0.0"

from .color import Color, parse_hex_color, to_hex
from .exceptions import InvalidInput, SessionError
from .models.color_distance_model import color_distance, remove_color
from .session import EditorSession

__all__ = [
    "Color",
    "EditorSession",
    "InvalidInput",
    "SessionError",
    "color_distance",
    "parse_hex_color",
    "remove_color",
    "to_hex",
]
