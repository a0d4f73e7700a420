"""Command line interfaces for encoding and decoding QR codes."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, TextIO

from . import __version__
from . import decoder, generator, render, source
from .errors import DecodeError, QrGenError
from .generator import ErrorCorrection

logger = logging.getLogger(__name__)

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class OutputType(str, Enum):
    TEXT = "Text"
    SVG = "SVG"
    PNG = "PNG"

    @classmethod
    def parse(cls, value: str) -> "OutputType":
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown output type: {value}. Use Text, SVG or PNG")


def _argument_type(parse: Callable[[str], object]) -> Callable[[str], object]:
    def convert(value: str) -> object:
        try:
            return parse(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return convert


def _bounded_int(minimum: int) -> Callable[[str], int]:
    def convert(value: str) -> int:
        try:
            number = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
        if number < minimum:
            raise argparse.ArgumentTypeError(f"must be at least {minimum}, got {number}")
        return number

    return convert


@dataclass(frozen=True)
class EncodeRequest:
    ecc: ErrorCorrection
    input: Optional[Path]
    output_type: OutputType
    output_file: Path
    options: render.RenderOptions

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "EncodeRequest":
        return cls(
            ecc=args.ecc,
            input=args.input,
            output_type=args.output_type,
            output_file=args.output_file,
            options=render.RenderOptions(border=args.border_width, scale=args.scale).validate(),
        )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="WARNING", type=str.upper, help="Logging verbosity")


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(name)s: %(levelname)s: %(message)s")


def build_encode_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qr-gen", description="Create a QR Code from text file or piped data")
    parser.add_argument(
        "-e", "--ecc",
        type=_argument_type(ErrorCorrection.parse),
        default=ErrorCorrection.M,
        metavar="ECC",
        help="Error correction level. Use L, M, Q, or H (default: M)",
    )
    parser.add_argument("-i", "--input", type=Path, metavar="INPUT", help="Unicode text file (default: piped data)")
    parser.add_argument(
        "-t", "--output-type",
        type=_argument_type(OutputType.parse),
        default=OutputType.TEXT,
        metavar="OUTPUT_TYPE",
        help="Output type. Use Text, SVG or PNG (default: Text)",
    )
    parser.add_argument(
        "-o", "--output-file",
        type=Path,
        default=Path("qrcode.png"),
        metavar="OUTPUT_FILE",
        help="Output file path, only used for PNG (default: qrcode.png)",
    )
    parser.add_argument("-b", "--border-width", type=_bounded_int(0), default=4, help="Quiet-zone width in modules for SVG and PNG")
    parser.add_argument("-s", "--scale", type=_bounded_int(1), default=10, help="Pixels per module for SVG and PNG")
    _add_common_arguments(parser)
    return parser


def build_decode_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qr-read", description="Decode QR Codes from an image file or piped data")
    parser.add_argument("-i", "--input", type=Path, metavar="INPUT", help="Image file (default: piped data)")
    _add_common_arguments(parser)
    return parser


def run_encode(
    request: EncodeRequest,
    stdin: Optional[source.Stream] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    out = sys.stdout if stdout is None else stdout
    text = source.read_text(request.input, stdin)
    matrix = generator.matrix_from_text(text, request.ecc)
    options = request.options
    if request.output_type is OutputType.TEXT:
        out.write(render.render_text(matrix))
    elif request.output_type is OutputType.SVG:
        out.write(render.render_svg(matrix, border=options.border, scale=options.scale))
    else:
        render.write_png(matrix, request.output_file, border=options.border, scale=options.scale)


def run_decode(
    path: Optional[Path],
    stdin: Optional[source.Stream] = None,
    stdout: Optional[TextIO] = None,
) -> None:
    """Print every decodable payload, logging and skipping the rest."""
    out = sys.stdout if stdout is None else stdout
    results = decoder.decode_bytes(source.read_input(path, stdin))
    for index, result in enumerate(results, start=1):
        try:
            text = result.text()
        except DecodeError as exc:
            logger.warning("skipping symbol %d: %s", index, exc)
            continue
        out.write(text + "\n")


def encode_main(argv: Optional[list[str]] = None) -> None:
    parser = build_encode_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        run_encode(EncodeRequest.from_args(args))
    except QrGenError as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")
    if args.output_type is OutputType.PNG:
        logger.info("saved PNG to %s", args.output_file)


def decode_main(argv: Optional[list[str]] = None) -> None:
    parser = build_decode_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        run_decode(args.input)
    except QrGenError as exc:
        parser.exit(1, f"{parser.prog}: error: {exc}\n")

