import numpy as np
import pytest

from colorkey.color import Color, parse_hex_color, to_hex, validate_color
from colorkey.exceptions import InvalidInput


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#ff0000", (255, 0, 0)),
        ("00FF7f", (0, 255, 127)),
        ("#abc", (170, 187, 204)),
        ("  #ffffff ", (255, 255, 255)),
    ],
)
def test_parse_hex_color(value, expected):
    assert parse_hex_color(value) == Color(*expected)


@pytest.mark.parametrize("value", ["", "#", "#ff00", "#gg0000", "#ff00001", "rgb(0,0,0)", None, 0xFF0000])
def test_parse_hex_color_rejects(value):
    with pytest.raises(InvalidInput):
        parse_hex_color(value)


def test_to_hex():
    assert to_hex((255, 0, 10)) == "#ff000a"
    assert to_hex(parse_hex_color("#ABCDEF")) == "#abcdef"


def test_validate_color_accepts_numpy_channels():
    color = validate_color(np.array([1, 2, 3], dtype=np.uint8))
    assert color == Color(1, 2, 3)
    assert all(type(c) is int for c in color)


def test_validate_color_accepts_whole_floats():
    assert validate_color((1.0, 2.0, 3.0)) == Color(1, 2, 3)


@pytest.mark.parametrize("color", [(0, 0, 256), (True, 0, 0), (0, 0), 5, (0, float("nan"), 0)])
def test_validate_color_rejects(color):
    with pytest.raises(InvalidInput):
        validate_color(color)
