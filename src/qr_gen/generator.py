"""QR data helpers."""

from __future__ import annotations

import logging
from enum import Enum

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q
from qrcode.exceptions import DataOverflowError

from .errors import EncodeError
from .matrix_utils import Matrix, freeze

logger = logging.getLogger(__name__)


class ErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def qr_constant(self) -> int:
        return {
            ErrorCorrection.L: ERROR_CORRECT_L,
            ErrorCorrection.M: ERROR_CORRECT_M,
            ErrorCorrection.Q: ERROR_CORRECT_Q,
            ErrorCorrection.H: ERROR_CORRECT_H,
        }[self]

    @property
    def label(self) -> str:
        return {
            ErrorCorrection.L: "low",
            ErrorCorrection.M: "medium",
            ErrorCorrection.Q: "quartile",
            ErrorCorrection.H: "high",
        }[self]

    @classmethod
    def parse(cls, value: str) -> "ErrorCorrection":
        """Return the level named by a single letter, ignoring case."""
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(
                f"invalid error correction level: {value!r} (use L, M, Q, or H)"
            ) from exc


def matrix_from_text(text: str, ecc: ErrorCorrection = ErrorCorrection.M) -> Matrix:
    """Encode ``text`` into a matrix of booleans, without a quiet zone."""
    qr = qrcode.QRCode(version=None, error_correction=ecc.qr_constant, border=0)
    qr.add_data(text)
    try:
        qr.make(fit=True)
    except DataOverflowError as exc:
        raise EncodeError(
            f"Failed to generate QR code: {len(text.encode('utf-8'))} bytes of text "
            f"exceed the capacity of the largest symbol at {ecc.label} error correction"
        ) from exc
    matrix = freeze(qr.get_matrix())
    logger.debug("encoded %d characters as version %d (%d modules)", len(text), qr.version, len(matrix))
    return matrix
