import io

import numpy as np
import pytest
from PIL import Image

from colorkey.color import Color
from colorkey.config import DEFAULT_EXPORT_FILENAME, DEFAULT_TOLERANCE
from colorkey.exceptions import InvalidInput, SessionError
from colorkey.session import EditorSession


def test_defaults():
    session = EditorSession()
    assert session.target == Color(255, 255, 255)
    assert session.tolerance == DEFAULT_TOLERANCE
    assert not session.has_image
    assert not session.has_result


def test_remove_without_image_fails():
    with pytest.raises(SessionError):
        EditorSession().remove_background()


def test_export_without_result_fails(logo_png):
    session = EditorSession()
    session.load_bytes(logo_png)
    with pytest.raises(SessionError):
        session.export()
    with pytest.raises(SessionError):
        session.result_png()


def test_remove_keeps_original_untouched(logo_png):
    session = EditorSession(target="#ffffff", tolerance=30)
    session.load_bytes(logo_png)
    original = session.original.buffer.copy()

    result = session.remove_background()

    assert session.has_result
    assert np.array_equal(session.original.buffer, original)
    assert result[5, 7, 3] == 0
    assert (result[2:4, 2:6, 3] == 255).all()


def test_rerun_with_new_settings(logo_png):
    session = EditorSession(target=(255, 255, 255), tolerance=30)
    session.load_bytes(logo_png)
    session.remove_background()

    session.set_target_hex("#c81e1e")
    session.tolerance = 5
    result = session.remove_background()

    # White is back to opaque, the red block is gone
    assert result[5, 7, 3] == 255
    assert not result[2:4, 2:6, 3].any()


def test_load_replaces_previous_result(logo_png, logo_path):
    session = EditorSession()
    session.load_bytes(logo_png)
    session.remove_background()
    session.load(logo_path)
    assert session.has_image
    assert not session.has_result


def test_load_applies_canvas_fit(to_png):
    session = EditorSession(max_dimension=50)
    decoded = session.load_bytes(to_png(np.zeros((40, 200, 4), dtype=np.uint8)))
    assert (decoded.width, decoded.height) == (50, 10)


def test_export_default_filename(tmp_path, monkeypatch, logo_png):
    monkeypatch.chdir(tmp_path)
    session = EditorSession()
    session.load_bytes(logo_png)
    session.remove_background()

    path = session.export()

    assert path == DEFAULT_EXPORT_FILENAME
    assert (tmp_path / DEFAULT_EXPORT_FILENAME).exists()


def test_result_png(logo_png):
    session = EditorSession(workers=2)
    session.load_bytes(logo_png)
    session.remove_background()
    with Image.open(io.BytesIO(session.result_png())) as image:
        assert image.mode == "RGBA"
        assert image.getpixel((7, 5))[3] == 0


def test_reset(logo_png):
    session = EditorSession()
    session.load_bytes(logo_png)
    session.remove_background()
    session.reset()
    assert not session.has_image
    assert not session.has_result
    with pytest.raises(SessionError):
        session.original


def test_rejects_bad_settings():
    session = EditorSession()
    with pytest.raises(InvalidInput):
        session.tolerance = -1
    with pytest.raises(InvalidInput):
        session.set_target_hex("#12345")
    with pytest.raises(InvalidInput):
        session.target = (0, 0, 999)
    with pytest.raises(InvalidInput):
        EditorSession(target="blue")
