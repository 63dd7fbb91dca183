# -*- coding: utf-8 -*-
"""Export / import of the scene document.

Document layout (JSON)::

    {
      "matrices": [{"name": "A", "rows": 3, "cols": 3, "position": [0, 0], "values": [[...]]}],
      "arrows": [{"source": ["A", 0, 0], "target": ["B", 0, 0], "color": "red",
                  "style": "-|>", "width": 2.0, "label": "example"}],
      "coloredCells": [{"matrix": "A", "row": 1, "col": 1, "color": "lightblue"}]
    }

Selection, hover and theme are not part of the document.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from ..config import DEFAULT_ARROW_COLOR, DEFAULT_ARROW_STYLE, DEFAULT_ARROW_WIDTH
from .errors import ImportFormatError
from .model import Arrow, CellRef, ColoredCell, Matrix, SceneModel

logger = logging.getLogger(__name__)


def _ref_to_list(ref: CellRef) -> List[Any]:
    return [ref.matrix, ref.row, ref.col]


def to_dict(model: SceneModel) -> Dict[str, Any]:
    arrows = []
    for a in model.arrows:
        rec: Dict[str, Any] = {
            "source": _ref_to_list(a.source),
            "target": _ref_to_list(a.target),
            "color": a.color,
            "style": a.style,
            "width": a.width,
        }
        if a.label:
            rec["label"] = a.label
        arrows.append(rec)
    return {
        "matrices": [
            {
                "name": name,
                "rows": m.rows,
                "cols": m.cols,
                "position": list(m.position),
                "values": m.to_lists(),
            }
            for name, m in model.iter_matrices()
        ],
        "arrows": arrows,
        "coloredCells": [
            {"matrix": c.matrix, "row": c.row, "col": c.col, "color": c.color}
            for c in model.colored_cells
        ],
    }


def _ref_from(raw: Any, what: str) -> CellRef:
    try:
        name, row, col = raw
        return CellRef(str(name), int(row), int(col))
    except (TypeError, ValueError):
        raise ImportFormatError(f"Invalid {what} reference: {raw!r}") from None


def _matrix_from(rec: Dict[str, Any]) -> Matrix:
    values = rec["values"]
    if not isinstance(values, list) or not all(isinstance(r, list) for r in values):
        raise ImportFormatError(f"Matrix '{rec.get('name')}': values must be a list of rows.")
    try:
        rows = int(rec.get("rows") or len(values))
        cols = int(rec.get("cols") or (len(values[0]) if values else 0))
        pos = rec.get("position") or [0, 0]
        return Matrix(rows, cols, values, (float(pos[0]), float(pos[1])))
    except (TypeError, ValueError, IndexError, KeyError):
        raise ImportFormatError(f"Matrix '{rec.get('name')}' is malformed.") from None


def _arrow_from(rec: Dict[str, Any]) -> Arrow:
    if not isinstance(rec, dict):
        raise ImportFormatError(f"Invalid arrow record: {rec!r}")
    try:
        width = float(rec.get("width", DEFAULT_ARROW_WIDTH))
    except (TypeError, ValueError):
        raise ImportFormatError(f"Invalid arrow width: {rec.get('width')!r}") from None
    return Arrow(
        source=_ref_from(rec.get("source"), "arrow source"),
        target=_ref_from(rec.get("target"), "arrow target"),
        color=str(rec.get("color") or DEFAULT_ARROW_COLOR),
        style=str(rec.get("style") or DEFAULT_ARROW_STYLE),
        width=width,
        label=str(rec["label"]) if rec.get("label") else None,
    )


def _colored_cell_from(rec: Dict[str, Any]) -> ColoredCell:
    try:
        return ColoredCell(str(rec["matrix"]), int(rec["row"]), int(rec["col"]), str(rec["color"]))
    except (KeyError, TypeError, ValueError):
        raise ImportFormatError(f"Invalid colored cell record: {rec!r}") from None


def _records(data: Dict[str, Any], key: str) -> List[Any]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ImportFormatError(f"Invalid data format: '{key}' must be a list.")
    return raw


def load_dict(data: Any) -> SceneModel:
    """Build a scene from an exported document.

    Matrix records without a ``name`` or ``values`` are skipped. Anything else
    that cannot be read raises :class:`ImportFormatError`, so a caller never
    sees a partial scene. Duplicate colored-cell records collapse onto the
    last one.
    """
    if not isinstance(data, dict) or not isinstance(data.get("matrices"), list):
        raise ImportFormatError("Invalid data format: no 'matrices' list found.")

    matrices: Dict[str, Matrix] = {}
    for rec in data["matrices"]:
        if not isinstance(rec, dict) or not rec.get("name") or rec.get("values") is None:
            logger.debug("skipping matrix record %r", rec)
            continue
        matrices[str(rec["name"])] = _matrix_from(rec)

    arrows = [_arrow_from(r) for r in _records(data, "arrows")]
    model = SceneModel(matrices=matrices, arrows=arrows)
    for rec in _records(data, "coloredCells"):
        model = model.put_colored_cell(_colored_cell_from(rec))
    return model


def save_json(model: SceneModel, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_dict(model), f, ensure_ascii=False, indent=2)
    logger.info("saved scene to %s", path)


def load_json(path: str) -> SceneModel:
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ImportFormatError(f"Not a valid JSON document: {exc}") from exc
    model = load_dict(raw)
    logger.info("loaded scene from %s (%d matrices)", path, len(model.matrices))
    return model
