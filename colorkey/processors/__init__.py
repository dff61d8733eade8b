from .decoder import DecodedImage, decode_image, fit_to_canvas, load_image
from .exporter import encode_png, export_png

__all__ = [
    "DecodedImage",
    "decode_image",
    "fit_to_canvas",
    "load_image",
    "encode_png",
    "export_png",
]
