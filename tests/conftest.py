# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from matrix_canvas.core.matrix_factory import sequential_grid
from matrix_canvas.core.model import Arrow, CellRef, ColoredCell, Matrix, SceneModel, default_scene


def make_matrix(rows: int, cols: int, x: float = 0.0, y: float = 0.0) -> Matrix:
    return Matrix(rows, cols, sequential_grid(rows, cols), (x, y))


@pytest.fixture
def scene() -> SceneModel:
    return default_scene()


@pytest.fixture
def linked_scene() -> SceneModel:
    """A, B, C, D with arrows A->B, B->A, C->D and tints on A and C."""
    return SceneModel(
        matrices={
            "A": make_matrix(2, 2),
            "B": make_matrix(2, 2, 3, 0),
            "C": make_matrix(2, 2, 0, 3),
            "D": make_matrix(2, 2, 3, 3),
        },
        arrows=(
            Arrow(CellRef("A", 0, 0), CellRef("B", 1, 1), "green"),
            Arrow(CellRef("B", 0, 1), CellRef("A", 1, 0), "blue"),
            Arrow(CellRef("C", 0, 0), CellRef("D", 0, 0)),
        ),
        colored_cells=(
            ColoredCell("A", 1, 1, "lightblue"),
            ColoredCell("C", 0, 1, "orange"),
        ),
    )
