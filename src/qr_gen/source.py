"""Input acquisition from a named file or piped standard input."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from .errors import InputError

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "No input provided. Please specify a file or pipe data."

Stream = Union[TextIO, BinaryIO]


def read_input(path: Optional[Path] = None, stdin: Optional[Stream] = None) -> bytes:
    """Return the bytes of ``path``, or of ``stdin`` when it is not a terminal."""
    if path is not None:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            reason = exc.strerror or exc
            raise InputError(f"cannot read {path}: {reason}") from exc
        logger.debug("read %d bytes from %s", len(data), path)
        return data

    stream = sys.stdin if stdin is None else stdin
    if stream is None or stream.isatty():
        raise InputError(NO_INPUT_MESSAGE)
    data = getattr(stream, "buffer", stream).read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    logger.debug("read %d bytes from standard input", len(data))
    return data


def read_text(path: Optional[Path] = None, stdin: Optional[Stream] = None) -> str:
    data = read_input(path, stdin)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        where = path if path is not None else "standard input"
        raise InputError(f"{where} is not valid UTF-8 text: {exc.reason} at byte {exc.start}") from exc
