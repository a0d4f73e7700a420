"""QR code encoding and decoding command line tools."""

__version__ = "0.1.0"

from .decoder import DecodeResult, decode_bytes, decode_image
from .errors import DecodeError, EncodeError, ImageFormatError, InputError, OutputError, QrGenError
from .generator import ErrorCorrection, matrix_from_text
from .render import RenderOptions, render_png, render_svg, render_text, write_png

__all__ = [
    "DecodeError",
    "DecodeResult",
    "EncodeError",
    "ErrorCorrection",
    "ImageFormatError",
    "InputError",
    "OutputError",
    "QrGenError",
    "RenderOptions",
    "decode_bytes",
    "decode_image",
    "matrix_from_text",
    "render_png",
    "render_svg",
    "render_text",
    "write_png",
]
