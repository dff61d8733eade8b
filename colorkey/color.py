"""RGB target colors and the hex notation used by color pickers."""

import numbers
import re
from typing import NamedTuple

from .exceptions import InvalidInput

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Color(NamedTuple):
    r: int
    g: int
    b: int


def validate_color(color) -> Color:
    """Check that `color` is three integer channels in [0, 255] and return it as a Color."""
    try:
        channels = tuple(color)
    except TypeError:
        raise InvalidInput(f"Color must be an (R, G, B) triple, got {color!r}") from None

    if len(channels) != 3:
        raise InvalidInput(f"Color must have exactly 3 channels, got {len(channels)}")

    for value in channels:
        # bool is an int subclass but never a meaningful channel
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidInput(f"Color channels must be integers, got {color!r}")
        if not isinstance(value, numbers.Integral) and not float(value).is_integer():
            raise InvalidInput(f"Color channels must be integers, got {color!r}")
        if not 0 <= value <= 255:
            raise InvalidInput(f"Color channel {value} is outside [0, 255]")

    return Color(*(int(v) for v in channels))


def parse_hex_color(value: str) -> Color:
    """
    Parse an HTML color input value.

    Accepts '#rrggbb', 'rrggbb' and the short '#rgb' form.

    Args:
        value: Hex color string

    Returns:
        Color triple
    """
    match = _HEX_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidInput(f"Not a hex color: {value!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def to_hex(color) -> str:
    r, g, b = validate_color(color)
    return f"#{r:02x}{g:02x}{b:02x}"
