import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image


def make_png(arr: np.ndarray) -> bytes:
    out = io.BytesIO()
    Image.fromarray(arr).save(out, "PNG")
    return out.getvalue()


def make_png_header(width: int, height: int) -> bytes:
    """A tiny PNG whose IHDR claims width x height but carries no real pixel data."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def to_png():
    return make_png


@pytest.fixture
def huge_png():
    """Header claiming 20000x20000, far past Pillow's own decompression bomb limit."""
    return make_png_header(20000, 20000)


@pytest.fixture
def logo_rgba():
    """8x6 white image with an opaque red 4x2 block and one half-transparent white pixel."""
    arr = np.full((6, 8, 4), 255, dtype=np.uint8)
    arr[2:4, 2:6] = (200, 30, 30, 255)
    arr[0, 0] = (255, 255, 255, 128)
    return arr


@pytest.fixture
def logo_png(logo_rgba):
    return make_png(logo_rgba)


@pytest.fixture
def logo_path(tmp_path, logo_png):
    path = tmp_path / "logo.png"
    path.write_bytes(logo_png)
    return path


@pytest.fixture
def png_header():
    return make_png_header
