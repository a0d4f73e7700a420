"""Utilities for working with QR code matrices."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

Coordinate = Tuple[int, int]
Matrix = Tuple[Tuple[bool, ...], ...]


def freeze(rows: Iterable[Sequence[object]]) -> Matrix:
    """Return ``rows`` as an immutable square matrix of booleans."""

    matrix = tuple(tuple(bool(value) for value in row) for row in rows)
    size = len(matrix)
    if size == 0:
        raise ValueError("matrix must not be empty")
    for row in matrix:
        if len(row) != size:
            raise ValueError("matrix must be square")
    return matrix


def check_render_options(border: int, scale: int) -> None:
    assert border >= 0, "Border must be non-negative"
    assert scale > 0, "Scale must be positive"


def add_border(matrix: Sequence[Sequence[bool]], border: int) -> Matrix:
    """Surround ``matrix`` with ``border`` rows and columns of light modules."""

    assert border >= 0, "Border must be non-negative"
    size = len(matrix)
    new_size = size + border * 2
    blank = (False,) * new_size
    side = (False,) * border
    rows = [blank] * border
    rows.extend(side + tuple(row) + side for row in matrix)
    rows.extend([blank] * border)
    return tuple(rows)


def dark_modules(matrix: Sequence[Sequence[bool]]) -> Iterator[Coordinate]:
    """Yield ``(x, y)`` for every dark module in row-major order."""

    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            if value:
                yield x, y
