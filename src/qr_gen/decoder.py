"""Locate and decode QR symbols in raster images."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from pyzbar import pyzbar
from pyzbar.pyzbar import ZBarSymbol

from .errors import DecodeError, ImageFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFormat:
    """A raster container recognised by the leading bytes of its data."""

    name: str
    signatures: Tuple[bytes, ...]
    pil_format: str
    offset: int = 0

    def matches(self, data: bytes) -> bool:
        head = data[self.offset:]
        return any(head.startswith(signature) for signature in self.signatures)


FORMATS: List[ImageFormat] = [
    ImageFormat("PNG", (b"\x89PNG\r\n\x1a\n",), "PNG"),
    ImageFormat("JPEG", (b"\xff\xd8\xff",), "JPEG"),
    ImageFormat("GIF", (b"GIF87a", b"GIF89a"), "GIF"),
    ImageFormat("BMP", (b"BM",), "BMP"),
    ImageFormat("TIFF", (b"II*\x00", b"MM\x00*"), "TIFF"),
    ImageFormat("WEBP", (b"WEBP",), "WEBP", offset=8),
]


def register_format(image_format: ImageFormat) -> None:
    FORMATS.append(image_format)


def detect_format(data: bytes) -> ImageFormat:
    for image_format in FORMATS:
        if image_format.matches(data):
            return image_format
    raise ImageFormatError("Failed to guess image format: unrecognised or unsupported data")


def load_grayscale(data: bytes) -> Image.Image:
    """Decode ``data`` as a raster image and convert it to 8-bit luma."""
    image_format = detect_format(data)
    logger.debug("detected %s image (%d bytes)", image_format.name, len(data))
    try:
        with Image.open(io.BytesIO(data), formats=[image_format.pil_format]) as image:
            return image.convert("L")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageFormatError(f"Failed to decode {image_format.name} image: {exc}") from exc


@dataclass(frozen=True)
class DecodeResult:
    """Outcome for one symbol located in an image."""

    payload: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.payload is not None

    def text(self) -> str:
        if not self.ok:
            raise DecodeError(self.error or "failed to decode qr code")
        try:
            return self.payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"payload is not valid UTF-8: {exc.reason} at byte {exc.start}") from exc


def decode_image(image: Image.Image) -> List[DecodeResult]:
    """Return one result per QR symbol found in ``image``; may be empty."""
    if image.mode != "L":
        image = image.convert("L")
    symbols = pyzbar.decode(image, symbols=[ZBarSymbol.QRCODE])
    logger.debug("located %d symbol(s) in %dx%d image", len(symbols), image.width, image.height)
    # zbar only reports symbols it decoded; located but undecodable ones are dropped
    return [DecodeResult(payload=bytes(symbol.data)) for symbol in symbols]


def decode_bytes(data: bytes) -> List[DecodeResult]:
    return decode_image(load_grayscale(data))
