import io
import struct
import zlib
from collections import namedtuple

import pytest
from PIL import Image

from qr_gen import decoder
from qr_gen.decoder import DecodeResult, ImageFormat, decode_bytes, decode_image, detect_format, load_grayscale
from qr_gen.errors import DecodeError, ImageFormatError
from qr_gen.generator import matrix_from_text
from qr_gen.render import render_png

FakeSymbol = namedtuple("FakeSymbol", "data type")


def _encode(image, fmt="PNG"):
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.mark.parametrize("fmt", ["PNG", "JPEG", "GIF", "BMP", "TIFF"])
def test_detect_format(fmt):
    data = _encode(Image.new("RGB", (8, 8), "white"), fmt)
    assert detect_format(data).name == fmt


def test_detect_format_rejects_unknown_data():
    with pytest.raises(ImageFormatError):
        detect_format(b"hello, world")


def test_register_format(monkeypatch):
    monkeypatch.setattr(decoder, "FORMATS", list(decoder.FORMATS))
    pnm = ImageFormat("PPM", (b"P6",), "PPM")
    decoder.register_format(pnm)
    assert detect_format(_encode(Image.new("RGB", (4, 4)), "PPM")) is pnm


def test_load_grayscale_converts_colour_images():
    image = load_grayscale(_encode(Image.new("RGB", (8, 8), (255, 0, 0))))
    assert image.mode == "L"
    assert image.size == (8, 8)


def test_truncated_image_is_a_format_error():
    with pytest.raises(ImageFormatError):
        load_grayscale(b"\x89PNG\r\n\x1a\n\x00\x00")


def test_decode_result_text():
    assert DecodeResult(payload=b"hi").text() == "hi"
    with pytest.raises(DecodeError, match="UTF-8"):
        DecodeResult(payload=b"\xff\xfe").text()
    with pytest.raises(DecodeError, match="boom"):
        DecodeResult(error="boom").text()


def test_each_symbol_is_independent(monkeypatch):
    found = [FakeSymbol(b"first", "QRCODE"), FakeSymbol(b"\xc3\x28", "QRCODE"), FakeSymbol(b"third", "QRCODE")]
    monkeypatch.setattr(decoder.pyzbar, "decode", lambda image, symbols=None: found)
    results = decode_image(Image.new("L", (10, 10), 255))
    assert [r.ok for r in results] == [True, True, True]
    assert results[0].text() == "first"
    assert results[2].text() == "third"
    with pytest.raises(DecodeError):
        results[1].text()


def test_blank_image_has_no_symbols():
    assert decode_bytes(_encode(Image.new("L", (200, 200), 255))) == []


def test_png_round_trip():
    text = "https://example.com"
    data = _encode(render_png(matrix_from_text(text), border=4, scale=10))
    results = decode_bytes(data)
    assert [r.text() for r in results] == [text]


def test_multiple_symbols():
    first = render_png(matrix_from_text("alpha"), border=4, scale=8)
    second = render_png(matrix_from_text("bravo charlie"), border=4, scale=8)
    canvas = Image.new("L", (first.width + second.width, max(first.height, second.height)), 255)
    canvas.paste(first, (0, 0))
    canvas.paste(second, (first.width, 0))
    texts = sorted(r.text() for r in decode_image(canvas))
    assert texts == ["alpha", "bravo charlie"]


def _oversized_png(width, height):
    def chunk(kind, body):
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body))

    header = struct.pack(">IIBBBBB", width, height, 8, 0, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IDAT", zlib.compress(b"")) + chunk(b"IEND", b"")


def test_oversized_image_is_a_format_error():
    with pytest.raises(ImageFormatError, match="PNG"):
        load_grayscale(_oversized_png(60000, 60000))
