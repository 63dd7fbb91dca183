# -*- coding: utf-8 -*-
"""Grid generators for new matrices."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

import numpy as np

from ..config import RANDOM_RANGE
from .errors import MalformedSizeError

Grid = Tuple[Tuple[int, ...], ...]


def _to_grid(arr: np.ndarray) -> Grid:
    return tuple(tuple(row) for row in arr.astype(int).tolist())


def _check_size(rows: int, cols: int) -> None:
    if int(rows) < 1 or int(cols) < 1:
        raise MalformedSizeError(f"Matrix size must be positive, got [{rows}, {cols}].")


def _check_square(kind: str, rows: int, cols: int) -> None:
    if rows != cols:
        raise MalformedSizeError(f"A {kind} matrix must be square, got [{rows}, {cols}].")


def _fill_mask(mask: np.ndarray) -> np.ndarray:
    # boolean assignment walks the mask in row-major order
    out = np.zeros(mask.shape, dtype=int)
    out[mask] = np.arange(1, int(mask.sum()) + 1)
    return out


def sequential_grid(rows: int, cols: int) -> Grid:
    """Cell ``(i, j)`` holds ``i * cols + j + 1``."""
    _check_size(rows, cols)
    return _to_grid(np.arange(1, rows * cols + 1).reshape(rows, cols))


def identity_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    _check_square("identity", rows, cols)
    return _to_grid(np.eye(rows, dtype=int))


def zeros_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    return _to_grid(np.zeros((rows, cols), dtype=int))


def ones_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    return _to_grid(np.ones((rows, cols), dtype=int))


def upper_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    _check_square("upper triangular", rows, cols)
    return _to_grid(_fill_mask(np.triu(np.ones((rows, cols), dtype=bool))))


def lower_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    _check_square("lower triangular", rows, cols)
    return _to_grid(_fill_mask(np.tril(np.ones((rows, cols), dtype=bool))))


def diagonal_grid(rows: int, cols: int) -> Grid:
    _check_size(rows, cols)
    _check_square("diagonal", rows, cols)
    return _to_grid(np.diag(np.arange(1, rows + 1)))


def random_grid(
    rows: int,
    cols: int,
    low: int = RANDOM_RANGE[0],
    high: int = RANDOM_RANGE[1],
    rng: Optional[np.random.Generator] = None,
) -> Grid:
    """Integers drawn uniformly from the inclusive range ``[low, high]``."""
    _check_size(rows, cols)
    if low > high:
        low, high = high, low
    rng = rng or np.random.default_rng()
    return _to_grid(rng.integers(low, high, size=(rows, cols), endpoint=True))


GENERATORS: Dict[str, Callable[[int, int], Grid]] = {
    "sequential": sequential_grid,
    "identity": identity_grid,
    "zeros": zeros_grid,
    "ones": ones_grid,
    "upper": upper_grid,
    "lower": lower_grid,
    "diagonal": diagonal_grid,
}


def generate(kind: str, rows: int, cols: int) -> Grid:
    try:
        gen = GENERATORS[kind]
    except KeyError:
        raise ValueError(f"Unknown matrix kind: {kind!r}") from None
    return gen(int(rows), int(cols))
