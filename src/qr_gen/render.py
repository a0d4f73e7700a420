"""Text, SVG and PNG renderers for QR matrices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from PIL import Image

from .errors import OutputError
from .matrix_utils import add_border, check_render_options, dark_modules

logger = logging.getLogger(__name__)

TEXT_BORDER = 4
DARK_GLYPH = "█"
LIGHT_GLYPH = " "


@dataclass(frozen=True)
class RenderOptions:
    border: int = 4
    scale: int = 10

    def validate(self) -> "RenderOptions":
        check_render_options(self.border, self.scale)
        return self


def render_text(matrix: Sequence[Sequence[bool]]) -> str:
    """Render ``matrix`` as block-glyph art with a fixed quiet zone.

    Each module is two characters wide so the symbol stays roughly square in
    a monospaced terminal. The result ends with an empty line.
    """

    lines = [
        "".join((DARK_GLYPH if value else LIGHT_GLYPH) * 2 for value in row)
        for row in add_border(matrix, TEXT_BORDER)
    ]
    return "\n".join(lines) + "\n\n"


def render_svg(matrix: Sequence[Sequence[bool]], border: int = 4, scale: int = 10) -> str:
    """Return an SVG document depicting ``matrix``.

    The string always uses ``\\n`` line endings, whatever the platform.
    """

    check_render_options(border, scale)
    dimension = (len(matrix) + border * 2) * scale
    header = _svg_header(dimension)
    path = " ".join(
        f"M{(x + border) * scale},{(y + border) * scale}h{scale}v{scale}h-{scale}z"
        for x, y in dark_modules(matrix)
    )
    body = [f'\t<path d="{path}" fill="#000000"/>', "</svg>"]
    return "\n".join(header + body) + "\n"


def _svg_header(dimension: int) -> List[str]:
    return [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
        '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">',
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="0 0 {dimension} {dimension}" '
        f'width="{dimension}" height="{dimension}" stroke="none">',
        '\t<rect width="100%" height="100%" fill="#FFFFFF"/>',
    ]


def render_png(matrix: Sequence[Sequence[bool]], border: int = 4, scale: int = 10) -> Image.Image:
    """Rasterize ``matrix`` into a grayscale image, one pixel per module, then
    upsample by ``scale`` with nearest-neighbour resampling."""

    check_render_options(border, scale)
    side = len(matrix) + border * 2
    image = Image.new("L", (side, side), 255)
    pixels = image.load()
    for x, y in dark_modules(matrix):
        pixels[x + border, y + border] = 0
    if scale == 1:
        return image
    return image.resize((side * scale, side * scale), Image.NEAREST)


def write_png(
    matrix: Sequence[Sequence[bool]],
    path: Union[str, Path],
    border: int = 4,
    scale: int = 10,
) -> Path:
    image = render_png(matrix, border=border, scale=scale)
    path = Path(path)
    try:
        image.save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise OutputError(f"Failed to write PNG to {path}: {exc}") from exc
    logger.debug("wrote %dx%d PNG to %s", image.width, image.height, path)
    return path
