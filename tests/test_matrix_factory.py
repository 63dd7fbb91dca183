# -*- coding: utf-8 -*-
from __future__ import annotations

import numpy as np
import pytest

from matrix_canvas.core.errors import MalformedSizeError
from matrix_canvas.core.matrix_factory import (
    diagonal_grid,
    generate,
    identity_grid,
    lower_grid,
    ones_grid,
    random_grid,
    sequential_grid,
    upper_grid,
    zeros_grid,
)


@pytest.mark.parametrize("rows,cols", [(1, 1), (2, 3), (4, 2), (5, 5)])
def test_sequential_fill(rows, cols):
    grid = sequential_grid(rows, cols)
    assert len(grid) == rows and all(len(r) == cols for r in grid)
    for i in range(rows):
        for j in range(cols):
            assert grid[i][j] == i * cols + j + 1
            assert type(grid[i][j]) is int


def test_special_grids():
    assert identity_grid(3, 3) == ((1, 0, 0), (0, 1, 0), (0, 0, 1))
    assert zeros_grid(2, 3) == ((0, 0, 0), (0, 0, 0))
    assert ones_grid(1, 2) == ((1, 1),)
    assert upper_grid(3, 3) == ((1, 2, 3), (0, 4, 5), (0, 0, 6))
    assert lower_grid(3, 3) == ((1, 0, 0), (2, 3, 0), (4, 5, 6))
    assert diagonal_grid(3, 3) == ((1, 0, 0), (0, 2, 0), (0, 0, 3))


@pytest.mark.parametrize("fn", [identity_grid, upper_grid, lower_grid, diagonal_grid])
def test_square_only_generators(fn):
    with pytest.raises(MalformedSizeError, match="square"):
        fn(2, 3)


@pytest.mark.parametrize("rows,cols", [(0, 2), (2, 0), (-1, 1)])
def test_size_must_be_positive(rows, cols):
    with pytest.raises(MalformedSizeError):
        sequential_grid(rows, cols)


def test_random_grid_range_is_inclusive():
    grid = random_grid(20, 20, -2, 2, rng=np.random.default_rng(7))
    flat = [v for row in grid for v in row]
    assert min(flat) >= -2 and max(flat) <= 2
    assert {-2, 2} <= set(flat)
    assert random_grid(2, 2, 3, 3) == ((3, 3), (3, 3))


def test_random_grid_accepts_swapped_bounds():
    grid = random_grid(3, 3, 5, 1, rng=np.random.default_rng(0))
    assert all(1 <= v <= 5 for row in grid for v in row)


def test_generate_dispatch():
    assert generate("ones", 2, 2) == ((1, 1), (1, 1))
    with pytest.raises(ValueError):
        generate("hilbert", 2, 2)
