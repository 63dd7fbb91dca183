# -*- coding: utf-8 -*-
"""Session controller.

:class:`SceneController` owns the current :class:`SceneModel` value for one
application session together with the viewport, the command interpreter and
the undo stack. Forms, the console and the canvas call into it; nothing else
writes the scene.

Every data mutation is computed on the current value first and published only
when no exception escaped, so a failing form action leaves the scene as it was.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from ..config import DEFAULT_ARROW_COLOR, DEFAULT_ARROW_STYLE, DEFAULT_ARROW_WIDTH, NO_COLOR, RANDOM_RANGE
from . import io as scene_io
from .commands import CommandStack, SnapshotCommand
from .errors import MalformedNameError, UnknownMatrixError
from .hit_test import HitTester
from .interpreter import BatchResult, CommandInterpreter, parse_number
from .matrix_factory import generate, random_grid
from .model import Arrow, CellRef, ColoredCell, Matrix, SceneModel, default_scene, validate_matrix_name
from .status import status_text
from .viewport import PanTracker, ViewportTransform

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise MalformedNameError("Matrix name must not be empty.")
    return validate_matrix_name(name)


def duplicate_name(model: SceneModel, name: str) -> str:
    candidate = f"{name}_copy"
    counter = 1
    while candidate in model.matrices:
        counter += 1
        candidate = f"{name}_copy{counter}"
    return candidate


class SceneController:
    def __init__(self, model: Optional[SceneModel] = None):
        self.model: SceneModel = model if model is not None else default_scene()
        self.viewport = ViewportTransform()
        self.hit_tester = HitTester(self.viewport)
        self.pan = PanTracker(self.viewport)
        self.interpreter = CommandInterpreter()
        self.stack = CommandStack(on_change=self._stack_changed)
        self.current_file: Optional[str] = None
        self._listeners: List[Listener] = []
        self._stack_listeners: List[Listener] = []

    # ---------- listeners ----------
    def add_listener(self, cb: Listener) -> None:
        """``cb`` runs after every change of the scene value or the viewport."""
        self._listeners.append(cb)

    def add_stack_listener(self, cb: Listener) -> None:
        self._stack_listeners.append(cb)

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb()

    def _stack_changed(self) -> None:
        for cb in list(self._stack_listeners):
            cb()

    # ---------- publishing ----------
    def publish(self, model: SceneModel) -> None:
        self.model = model
        self._notify()

    def _restore(self, snapshot: SceneModel) -> None:
        """Undo/redo target: the snapshot's data under the current view state."""
        self.publish(
            replace(
                self.model,
                matrices=snapshot.matrices,
                arrows=snapshot.arrows,
                colored_cells=snapshot.colored_cells,
            )
        )

    def _commit(self, desc: str, after: SceneModel) -> SceneModel:
        before = self.model
        if after is before:
            return before
        self.publish(after)
        self.stack.push(SnapshotCommand(before, after, self._restore, desc), execute=False)
        logger.debug("%s", desc)
        return after

    def status_text(self) -> str:
        return status_text(self.model)

    # ---------- undo / redo ----------
    def undo(self) -> bool:
        return self.stack.undo()

    def redo(self) -> bool:
        return self.stack.redo()

    # ---------- matrices ----------
    def define_matrix(
        self,
        name: str,
        rows: int,
        cols: int,
        x: float = 0.0,
        y: float = 0.0,
        kind: str = "sequential",
        random_range: Tuple[int, int] = RANDOM_RANGE,
    ) -> SceneModel:
        """Create or overwrite ``name`` with a generated grid and select it."""
        name = _clean_name(name)
        if kind == "random":
            values = random_grid(rows, cols, random_range[0], random_range[1])
        else:
            values = generate(kind, rows, cols)
        m = Matrix(int(rows), int(cols), values, (float(x), float(y)))
        after = self.model.put_matrix(name, m).set_selection("matrix", name)
        return self._commit(f"Define matrix {name} ({kind})", after)

    def move_matrix(self, name: str, x: float, y: float) -> SceneModel:
        m = self.model.matrix(name)
        return self._commit(f"Move matrix {name}", self.model.put_matrix(name, m.with_position(float(x), float(y))))

    def rename_matrix(self, old: str, new: str) -> SceneModel:
        new = _clean_name(new)
        return self._commit(f"Rename matrix {old} -> {new}", self.model.rename_matrix(old, new))

    def delete_matrix(self, name: str) -> SceneModel:
        after = self.model.delete_matrix(name)
        if after.selected_matrix == name:
            after = after.set_selection("matrix", None)
        return self._commit(f"Delete matrix {name}", after)

    def duplicate_matrix(self, name: str) -> str:
        m = self.model.matrix(name)
        new = duplicate_name(self.model, name)
        px, py = m.position
        self._commit(f"Duplicate matrix {name}", self.model.put_matrix(new, m.with_position(px + 1, py + 1)))
        return new

    # ---------- cells ----------
    def edit_cell(self, matrix: str, row: int, col: int, value_text: str, color: str = NO_COLOR) -> SceneModel:
        """Set one cell's value and tint together."""
        ref = CellRef(matrix, int(row), int(col))
        m = self.model.require_cell(ref)
        value = parse_number(value_text)
        after = self.model.put_matrix(matrix, m.with_value(ref.row, ref.col, value))
        color = (color or "").strip()
        if not color or color.lower() == NO_COLOR:
            after = after.clear_colored_cell(matrix, ref.row, ref.col)
        else:
            after = after.put_colored_cell(ColoredCell(matrix, ref.row, ref.col, color))
        after = after.set_selection("colored_cell", None)
        return self._commit(f"Edit cell {ref}", after)

    def tint_range(self, matrix: str, start: Tuple[int, int], end: Tuple[int, int], color: str) -> SceneModel:
        """Tint (or with ``none`` untint) an inclusive rectangle of cells."""
        self.model.require_cell(CellRef(matrix, int(start[0]), int(start[1])), "Range start")
        self.model.require_cell(CellRef(matrix, int(end[0]), int(end[1])), "Range end")
        r0, r1 = sorted((int(start[0]), int(end[0])))
        c0, c1 = sorted((int(start[1]), int(end[1])))
        color = (color or "").strip()

        after = self.model
        if not color or color.lower() == NO_COLOR:
            kept = tuple(
                c for c in after.colored_cells
                if not (c.matrix == matrix and r0 <= c.row <= r1 and c0 <= c.col <= c1)
            )
            if len(kept) != len(after.colored_cells):
                after = replace(after, colored_cells=kept)
        else:
            for r in range(r0, r1 + 1):
                for c in range(c0, c1 + 1):
                    after = after.put_colored_cell(ColoredCell(matrix, r, c, color))
        return self._commit(f"Tint {matrix}[{r0}:{r1}][{c0}:{c1}]", after)

    # ---------- arrows ----------
    def _build_arrow(
        self,
        source: CellRef,
        target: CellRef,
        color: str,
        style: str,
        width: float,
        label: Optional[str],
    ) -> Arrow:
        self.model.require_cell(source, "Source")
        self.model.require_cell(target, "Target")
        return Arrow(
            source,
            target,
            (color or "").strip() or DEFAULT_ARROW_COLOR,
            style or DEFAULT_ARROW_STYLE,
            float(width) if width else DEFAULT_ARROW_WIDTH,
            (label or "").strip() or None,
        )

    def save_arrow(
        self,
        source: CellRef,
        target: CellRef,
        color: str = DEFAULT_ARROW_COLOR,
        style: str = DEFAULT_ARROW_STYLE,
        width: float = DEFAULT_ARROW_WIDTH,
        label: Optional[str] = None,
    ) -> SceneModel:
        """Add an arrow, or replace the selected one, then clear the arrow selection."""
        arrow = self._build_arrow(source, target, color, style, width, label)
        idx = self.model.selected_arrow
        if idx is not None and 0 <= idx < len(self.model.arrows):
            after = self.model.update_arrow(idx, arrow)
            desc = f"Update arrow {idx}"
        else:
            after = self.model.put_arrow(arrow)
            desc = f"Add arrow {source} -> {target}"
        return self._commit(desc, after.set_selection("arrow", None))

    def update_arrow(self, index: int, arrow: Arrow) -> SceneModel:
        arrow = self._build_arrow(arrow.source, arrow.target, arrow.color, arrow.style, arrow.width, arrow.label)
        return self._commit(f"Update arrow {index}", self.model.update_arrow(index, arrow))

    def delete_arrow(self, index: int) -> SceneModel:
        after = self.model.delete_arrow(index)
        if after.selected_arrow is not None:
            after = after.set_selection("arrow", None)
        return self._commit(f"Delete arrow {index}", after)

    # ---------- colored cells ----------
    def update_colored_cell(self, index: int, cell: ColoredCell) -> SceneModel:
        self.model.require_cell(cell.ref)
        after = self.model.update_colored_cell(index, cell)
        if len(after.colored_cells) != len(self.model.colored_cells):
            # a merged duplicate shifts the indices
            after = after.set_selection("colored_cell", None)
        return self._commit(f"Update colored cell {index}", after)

    def delete_colored_cell(self, index: int) -> SceneModel:
        after = self.model.delete_colored_cell(index)
        if after.selected_colored_cell is not None:
            after = after.set_selection("colored_cell", None)
        return self._commit(f"Delete colored cell {index}", after)

    # ---------- console ----------
    def run_commands(self, text: str) -> BatchResult:
        result = self.interpreter.run_batch(self.model, text)
        if result.changed:
            self._commit(f"Run {result.successes} command(s)", result.model)
        else:
            self._notify()
        return result

    def clear_history(self) -> None:
        self.interpreter.clear_history()
        self._notify()

    # ---------- selection / hover / theme ----------
    def select_matrix(self, name: Optional[str]) -> None:
        if name is not None and name not in self.model.matrices:
            raise UnknownMatrixError(f"Matrix '{name}' is not defined.")
        self.publish(self.model.set_selection("matrix", name))

    def select_arrow(self, index: Optional[int]) -> None:
        self.publish(self.model.set_selection("arrow", index))

    def select_colored_cell(self, index: Optional[int]) -> None:
        self.publish(self.model.set_selection("colored_cell", index))

    def toggle_theme(self) -> str:
        self.publish(self.model.toggle_theme())
        return self.model.theme

    # ---------- pointer ----------
    def pointer_move(self, px: float, py: float) -> Optional[CellRef]:
        """Pan while the drag button is held, otherwise update the hovered cell."""
        if self.pan.move(px, py):
            self._notify()
            return self.model.hovered_cell
        ref = self.hit_tester.cell_at(self.model, px, py)
        if ref != self.model.hovered_cell:
            self.publish(self.model.set_hover(ref))
        return ref

    def pointer_leave(self) -> None:
        if self.model.hovered_cell is not None:
            self.publish(self.model.set_hover(None))

    def begin_pan(self, px: float, py: float) -> None:
        self.pan.press(px, py)

    def end_pan(self) -> None:
        self.pan.release()

    def double_click(self, px: float, py: float) -> Optional[str]:
        name = self.hit_tester.matrix_at(self.model, px, py)
        if name is not None:
            self.publish(self.model.set_selection("matrix", name))
        return name

    def wheel(self, wheel_up: bool) -> float:
        scale = self.viewport.zoom(wheel_up)
        self._notify()
        return scale

    def reset_view(self) -> None:
        self.viewport.reset()
        self._notify()

    # ---------- document ----------
    def reset(self) -> None:
        self.publish(self.model.reset())
        self.stack.clear()
        logger.info("scene reset to defaults")

    def new_scene(self) -> None:
        self.publish(self.model.import_scene(SceneModel()))
        self.current_file = None
        self.stack.clear()
        logger.info("new empty scene")

    def import_dict(self, data) -> None:
        loaded = scene_io.load_dict(data)
        self.publish(self.model.import_scene(loaded))
        self.stack.clear()

    def load_file(self, path: str) -> None:
        loaded = scene_io.load_json(path)
        self.publish(self.model.import_scene(loaded))
        self.current_file = path
        self.stack.clear()

    def save_file(self, path: Optional[str] = None) -> str:
        path = path or self.current_file
        if not path:
            raise ValueError("No file name given.")
        scene_io.save_json(self.model, path)
        self.current_file = path
        return path

    def to_dict(self) -> dict:
        return scene_io.to_dict(self.model)
