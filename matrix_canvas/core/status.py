# -*- coding: utf-8 -*-
"""Status line text.

The scene can hold a hovered cell and three independent selections at once.
Only one of them is described, in this order: hovered cell, selected matrix,
selected arrow, selected colored cell. Entries that no longer resolve fall
through to the next one.
"""

from __future__ import annotations

from typing import Optional

from .model import CellRef, SceneModel

READY = "Ready"


def _bracket(name: str, row: int, col: int) -> str:
    return f"{name}[{row},{col}]"


def cell_info(model: SceneModel, ref: Optional[CellRef]) -> Optional[str]:
    if ref is None:
        return None
    m = model.resolve(ref)
    if m is None:
        return None
    value = m.value(ref.row, ref.col)
    return f"Matrix: {ref.matrix}, row: {ref.row}, col: {ref.col}, value: {value}"


def _matrix_info(model: SceneModel) -> Optional[str]:
    name = model.selected_matrix
    if name is None or name not in model.matrices:
        return None
    m = model.matrices[name]
    return f"Matrix '{name}' selected ({m.rows}x{m.cols})"


def _arrow_info(model: SceneModel) -> Optional[str]:
    idx = model.selected_arrow
    if idx is None or not (0 <= idx < len(model.arrows)):
        return None
    a = model.arrows[idx]
    src = _bracket(a.source.matrix, a.source.row, a.source.col)
    tgt = _bracket(a.target.matrix, a.target.row, a.target.col)
    return f"Arrow {src} -> {tgt} selected"


def _colored_cell_info(model: SceneModel) -> Optional[str]:
    idx = model.selected_colored_cell
    if idx is None or not (0 <= idx < len(model.colored_cells)):
        return None
    c = model.colored_cells[idx]
    return f"Colored cell {_bracket(c.matrix, c.row, c.col)} selected"


def status_text(model: SceneModel) -> str:
    for text in (
        cell_info(model, model.hovered_cell),
        _matrix_info(model),
        _arrow_info(model),
        _colored_cell_info(model),
    ):
        if text is not None:
            return text
    return READY
