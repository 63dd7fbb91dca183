# -*- coding: utf-8 -*-
"""Scene data model.

The scene is a value: every mutation returns a new :class:`SceneModel` built
from the old one, so the renderer and the form widgets never observe a
half-applied change. :class:`~matrix_canvas.core.controller.SceneController`
owns the single current value for an application session.

Arrows and colored cells refer to cells by ``(matrix name, row, col)`` only.
Those references are weak: resizing a matrix does not re-validate them, and
lookups through :meth:`SceneModel.resolve` return ``None`` for stale ones.
Deleting or renaming a matrix does cascade to them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterator, Literal, Mapping, Optional, Sequence, Tuple, Union

from ..config import (
    DEFAULT_ARROW_COLOR,
    DEFAULT_ARROW_STYLE,
    DEFAULT_ARROW_WIDTH,
    RESERVED_NAMES,
)
from .errors import IndexOutOfRangeError, MalformedNameError, ReservedNameError, UnknownMatrixError
from .matrix_factory import sequential_grid

logger = logging.getLogger(__name__)

Number = Union[int, float]
Grid = Tuple[Tuple[Number, ...], ...]
SelectionKind = Literal["matrix", "arrow", "colored_cell"]
Theme = Literal["light", "dark"]

MATRIX_NAME = r"[A-Za-z0-9_]+"
_MATRIX_NAME_RE = re.compile(rf"^{MATRIX_NAME}$")


def check_matrix_name(name: str) -> str:
    if name in RESERVED_NAMES:
        raise ReservedNameError(f"'{name}' is a reserved word and cannot be used as a matrix name.")
    return name


def validate_matrix_name(name: str) -> str:
    """Reserved-word and character check for names typed by the user."""
    check_matrix_name(name)
    if not _MATRIX_NAME_RE.match(name):
        raise MalformedNameError(f"'{name}' is not a valid matrix name (letters, digits and '_' only).")
    return name


@dataclass(frozen=True)
class CellRef:
    matrix: str
    row: int
    col: int

    def renamed(self, old: str, new: str) -> "CellRef":
        if self.matrix != old:
            return self
        return replace(self, matrix=new)

    def __str__(self) -> str:
        return f"{self.matrix}[{self.row}][{self.col}]"


@dataclass(frozen=True)
class Matrix:
    rows: int
    cols: int
    values: Grid
    position: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(tuple(r) for r in self.values))
        object.__setattr__(self, "position", (float(self.position[0]), float(self.position[1])))

    @classmethod
    def from_rows(cls, values: Sequence[Sequence[Number]], position: Sequence[float] = (0.0, 0.0)) -> "Matrix":
        rows = len(values)
        cols = len(values[0]) if rows else 0
        return cls(rows=rows, cols=cols, values=values, position=(position[0], position[1]))

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def value(self, row: int, col: int) -> Optional[Number]:
        """Value at ``(row, col)``; ``None`` when the grid is shorter than the declared size."""
        try:
            return self.values[row][col]
        except IndexError:
            return None

    def with_value(self, row: int, col: int, value: Number) -> "Matrix":
        grid = tuple(
            tuple(value if (i == row and j == col) else v for j, v in enumerate(r))
            for i, r in enumerate(self.values)
        )
        return replace(self, values=grid)

    def with_position(self, x: float, y: float) -> "Matrix":
        return replace(self, position=(x, y))

    def to_lists(self) -> list[list[Number]]:
        return [list(r) for r in self.values]


@dataclass(frozen=True)
class Arrow:
    source: CellRef
    target: CellRef
    color: str = DEFAULT_ARROW_COLOR
    style: str = DEFAULT_ARROW_STYLE
    width: float = DEFAULT_ARROW_WIDTH
    label: Optional[str] = None

    def touches(self, name: str) -> bool:
        return self.source.matrix == name or self.target.matrix == name

    def renamed(self, old: str, new: str) -> "Arrow":
        return replace(self, source=self.source.renamed(old, new), target=self.target.renamed(old, new))


@dataclass(frozen=True)
class ColoredCell:
    matrix: str
    row: int
    col: int
    color: str

    @property
    def ref(self) -> CellRef:
        return CellRef(self.matrix, self.row, self.col)

    def same_cell(self, other: "ColoredCell") -> bool:
        return (self.matrix, self.row, self.col) == (other.matrix, other.row, other.col)


@dataclass(frozen=True)
class SceneModel:
    matrices: Mapping[str, Matrix] = field(default_factory=dict)
    arrows: Tuple[Arrow, ...] = ()
    colored_cells: Tuple[ColoredCell, ...] = ()
    theme: Theme = "light"
    selected_matrix: Optional[str] = None
    selected_arrow: Optional[int] = None
    selected_colored_cell: Optional[int] = None
    hovered_cell: Optional[CellRef] = None

    def __post_init__(self):
        if not isinstance(self.matrices, MappingProxyType):
            object.__setattr__(self, "matrices", MappingProxyType(dict(self.matrices)))
        object.__setattr__(self, "arrows", tuple(self.arrows))
        object.__setattr__(self, "colored_cells", tuple(self.colored_cells))

    # ---------- queries ----------
    def matrix(self, name: str) -> Matrix:
        try:
            return self.matrices[name]
        except KeyError:
            raise UnknownMatrixError(f"Matrix '{name}' is not defined.") from None

    def require_cell(self, ref: CellRef, role: str = "Cell") -> Matrix:
        """Return the matrix of ``ref`` or raise if the name or index is invalid."""
        m = self.matrix(ref.matrix)
        if not m.contains(ref.row, ref.col):
            raise IndexOutOfRangeError(
                f"{role} position is out of range. Rows: 0-{m.rows - 1}, cols: 0-{m.cols - 1}"
            )
        return m

    def resolve(self, ref: CellRef) -> Optional[Matrix]:
        """Weak lookup: the matrix of ``ref`` if it exists and still contains the cell."""
        m = self.matrices.get(ref.matrix)
        if m is None or not m.contains(ref.row, ref.col):
            return None
        return m

    def find_colored_cell(self, matrix: str, row: int, col: int) -> Optional[int]:
        for i, c in enumerate(self.colored_cells):
            if c.matrix == matrix and c.row == row and c.col == col:
                return i
        return None

    def color_at(self, matrix: str, row: int, col: int) -> Optional[str]:
        idx = self.find_colored_cell(matrix, row, col)
        return None if idx is None else self.colored_cells[idx].color

    def names_sorted(self) -> list[str]:
        return sorted(self.matrices.keys())

    def iter_matrices(self) -> Iterator[Tuple[str, Matrix]]:
        """Matrices in insertion order (the paint order)."""
        return iter(self.matrices.items())

    # ---------- matrices ----------
    def put_matrix(self, name: str, matrix: Matrix) -> "SceneModel":
        check_matrix_name(name)
        mats: Dict[str, Matrix] = dict(self.matrices)
        mats[name] = matrix
        logger.debug("put matrix %s (%dx%d)", name, matrix.rows, matrix.cols)
        return replace(self, matrices=mats)

    def rename_matrix(self, old: str, new: str) -> "SceneModel":
        m = self.matrix(old)
        check_matrix_name(new)
        if old == new:
            return self
        mats = {k: v for k, v in self.matrices.items() if k != old}
        mats[new] = m
        hovered = self.hovered_cell.renamed(old, new) if self.hovered_cell is not None else None
        logger.debug("rename matrix %s -> %s", old, new)
        return replace(
            self,
            matrices=mats,
            arrows=tuple(a.renamed(old, new) for a in self.arrows),
            colored_cells=tuple(replace(c, matrix=new) if c.matrix == old else c for c in self.colored_cells),
            selected_matrix=new if self.selected_matrix == old else self.selected_matrix,
            hovered_cell=hovered,
        )

    def delete_matrix(self, name: str) -> "SceneModel":
        if name not in self.matrices:
            return self
        mats = {k: v for k, v in self.matrices.items() if k != name}
        logger.debug("delete matrix %s", name)
        return replace(
            self,
            matrices=mats,
            arrows=tuple(a for a in self.arrows if not a.touches(name)),
            colored_cells=tuple(c for c in self.colored_cells if c.matrix != name),
        )

    # ---------- arrows ----------
    def _check_index(self, items: Sequence, index: int, what: str) -> None:
        if not (0 <= index < len(items)):
            raise IndexOutOfRangeError(f"{what} index {index} is out of range (0-{len(items) - 1}).")

    def put_arrow(self, arrow: Arrow) -> "SceneModel":
        return replace(self, arrows=self.arrows + (arrow,))

    def update_arrow(self, index: int, arrow: Arrow) -> "SceneModel":
        self._check_index(self.arrows, index, "Arrow")
        arrows = list(self.arrows)
        arrows[index] = arrow
        return replace(self, arrows=arrows)

    def delete_arrow(self, index: int) -> "SceneModel":
        self._check_index(self.arrows, index, "Arrow")
        return replace(self, arrows=self.arrows[:index] + self.arrows[index + 1:])

    # ---------- colored cells ----------
    def put_colored_cell(self, cell: ColoredCell) -> "SceneModel":
        kept = tuple(c for c in self.colored_cells if not c.same_cell(cell))
        return replace(self, colored_cells=kept + (cell,))

    def update_colored_cell(self, index: int, cell: ColoredCell) -> "SceneModel":
        """Replace entry ``index``; other entries for the same cell are dropped."""
        self._check_index(self.colored_cells, index, "Colored cell")
        cells = [
            cell if i == index else c
            for i, c in enumerate(self.colored_cells)
            if i == index or not c.same_cell(cell)
        ]
        return replace(self, colored_cells=cells)

    def delete_colored_cell(self, index: int) -> "SceneModel":
        self._check_index(self.colored_cells, index, "Colored cell")
        return replace(self, colored_cells=self.colored_cells[:index] + self.colored_cells[index + 1:])

    def clear_colored_cell(self, matrix: str, row: int, col: int) -> "SceneModel":
        """Remove the tint of one cell if there is one."""
        idx = self.find_colored_cell(matrix, row, col)
        return self if idx is None else self.delete_colored_cell(idx)

    # ---------- selection / hover / theme ----------
    def set_selection(self, kind: SelectionKind, value) -> "SceneModel":
        if kind == "matrix":
            return replace(self, selected_matrix=value)
        if kind == "arrow":
            return replace(self, selected_arrow=value)
        if kind == "colored_cell":
            return replace(self, selected_colored_cell=value)
        raise ValueError(f"Unknown selection kind: {kind!r}")

    def set_hover(self, ref: Optional[CellRef]) -> "SceneModel":
        if ref == self.hovered_cell:
            return self
        return replace(self, hovered_cell=ref)

    def toggle_theme(self) -> "SceneModel":
        return replace(self, theme="dark" if self.theme == "light" else "light")

    def reset(self) -> "SceneModel":
        return default_scene(theme=self.theme)

    def import_scene(self, data: "SceneModel") -> "SceneModel":
        return replace(
            data,
            theme=self.theme,
            selected_matrix=None,
            selected_arrow=None,
            selected_colored_cell=None,
            hovered_cell=None,
        )


def default_scene(theme: Theme = "light") -> SceneModel:
    """Two 3x3 sequential matrices, one arrow and one tinted cell."""
    return SceneModel(
        matrices={
            "A": Matrix(3, 3, sequential_grid(3, 3), (0.0, 0.0)),
            "B": Matrix(3, 3, sequential_grid(3, 3), (5.0, 0.0)),
        },
        arrows=(
            Arrow(CellRef("A", 0, 0), CellRef("B", 0, 0), "red", "-|>", 2.0, "example"),
        ),
        colored_cells=(ColoredCell("A", 1, 1, "lightblue"),),
        theme=theme,
    )
