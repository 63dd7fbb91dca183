# -*- coding: utf-8 -*-
"""Dock tabs for editing matrices, cells, arrows and the item lists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from PyQt6.QtCore import QSignalBlocker
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ..config import ARROW_STYLES, DEFAULT_ARROW_COLOR, DEFAULT_ARROW_WIDTH, DEFAULT_CELL_COLOR, RANDOM_RANGE
from ..core.errors import SceneError
from ..core.model import CellRef
from ..utils.constants import COLOR_SWATCHES

if TYPE_CHECKING:
    from .panel import MatrixPanel

logger = logging.getLogger(__name__)

MATRIX_KINDS = (
    ("sequential", "Sequential 1..n"),
    ("identity", "Identity"),
    ("zeros", "Zeros"),
    ("ones", "Ones"),
    ("upper", "Upper triangular"),
    ("lower", "Lower triangular"),
    ("diagonal", "Diagonal"),
    ("random", "Random"),
)


def guarded(parent: QWidget, title: str, fn: Callable, *args) -> bool:
    """Run a controller action and show a :class:`SceneError` in a message box."""
    try:
        fn(*args)
    except SceneError as exc:
        logger.info("%s rejected: %s", title, exc)
        QMessageBox.warning(parent, title, str(exc))
        return False
    return True


def _spin(lo: int, hi: int, value: int = 0) -> QSpinBox:
    s = QSpinBox()
    s.setRange(lo, hi)
    s.setValue(value)
    return s


def _dspin(value: float = 0.0, step: float = 1.0) -> QDoubleSpinBox:
    s = QDoubleSpinBox()
    s.setRange(-1e6, 1e6)
    s.setDecimals(2)
    s.setSingleStep(step)
    s.setValue(value)
    return s


def _color_combo(default: str) -> QComboBox:
    c = QComboBox()
    c.setEditable(True)
    c.addItems(list(COLOR_SWATCHES) + ["none"])
    c.setCurrentText(default)
    return c


class MatrixTab(QWidget):
    def __init__(self, panel: "MatrixPanel"):
        super().__init__()
        self.panel = panel
        self.ctrl = panel.ctrl
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self.ed_name = QLineEdit("A")
        self.sp_rows = _spin(1, 50, 3)
        self.sp_cols = _spin(1, 50, 3)
        self.sp_x = _dspin()
        self.sp_y = _dspin()
        self.cb_kind = QComboBox()
        for key, label in MATRIX_KINDS:
            self.cb_kind.addItem(label, key)
        self.sp_rand_min = _spin(-1000, 1000, RANDOM_RANGE[0])
        self.sp_rand_max = _spin(-1000, 1000, RANDOM_RANGE[1])
        rand_row = QHBoxLayout()
        rand_row.addWidget(self.sp_rand_min)
        rand_row.addWidget(QLabel("to"))
        rand_row.addWidget(self.sp_rand_max)
        form.addRow("Name", self.ed_name)
        form.addRow("Rows", self.sp_rows)
        form.addRow("Cols", self.sp_cols)
        form.addRow("X", self.sp_x)
        form.addRow("Y", self.sp_y)
        form.addRow("Kind", self.cb_kind)
        form.addRow("Random range", rand_row)
        layout.addLayout(form)

        btn_row = QHBoxLayout()
        self.btn_define = QPushButton("Create / Update")
        self.btn_move = QPushButton("Move")
        btn_row.addWidget(self.btn_define)
        btn_row.addWidget(self.btn_move)
        btn_row.addStretch(1)
        layout.addLayout(btn_row)

        rename_row = QHBoxLayout()
        self.ed_new_name = QLineEdit()
        self.ed_new_name.setPlaceholderText("New name")
        self.btn_rename = QPushButton("Rename")
        rename_row.addWidget(self.ed_new_name)
        rename_row.addWidget(self.btn_rename)
        layout.addLayout(rename_row)
        layout.addStretch(1)

        self.btn_define.clicked.connect(self._define)
        self.btn_move.clicked.connect(self._move)
        self.btn_rename.clicked.connect(self._rename)

    def _define(self):
        name = self.ed_name.text().strip()
        if name in self.ctrl.model.matrices and name != self.ctrl.model.selected_matrix:
            answer = QMessageBox.question(self, "Matrix", f"Matrix '{name}' already exists. Overwrite it?")
            if answer != QMessageBox.StandardButton.Yes:
                return
        guarded(
            self, "Matrix", self.ctrl.define_matrix,
            name, self.sp_rows.value(), self.sp_cols.value(),
            self.sp_x.value(), self.sp_y.value(), self.cb_kind.currentData(),
            (self.sp_rand_min.value(), self.sp_rand_max.value()),
        )

    def _move(self):
        guarded(self, "Matrix", self.ctrl.move_matrix, self.ed_name.text().strip(), self.sp_x.value(), self.sp_y.value())

    def _rename(self):
        if guarded(self, "Rename", self.ctrl.rename_matrix, self.ed_name.text().strip(), self.ed_new_name.text()):
            self.ed_name.setText(self.ed_new_name.text().strip())
            self.ed_new_name.clear()

    def refresh(self):
        name = self.ctrl.model.selected_matrix
        m = self.ctrl.model.matrices.get(name) if name else None
        if m is None:
            return
        for w in (self.ed_name, self.sp_rows, self.sp_cols, self.sp_x, self.sp_y):
            w.blockSignals(True)
        self.ed_name.setText(name)
        self.sp_rows.setValue(m.rows)
        self.sp_cols.setValue(m.cols)
        self.sp_x.setValue(m.position[0])
        self.sp_y.setValue(m.position[1])
        for w in (self.ed_name, self.sp_rows, self.sp_cols, self.sp_x, self.sp_y):
            w.blockSignals(False)


class CellTab(QWidget):
    def __init__(self, panel: "MatrixPanel"):
        super().__init__()
        self.panel = panel
        self.ctrl = panel.ctrl
        layout = QVBoxLayout(self)

        cell_box = QGroupBox("Cell")
        form = QFormLayout(cell_box)
        self.ed_matrix = QLineEdit("A")
        self.sp_row = _spin(0, 999)
        self.sp_col = _spin(0, 999)
        self.ed_value = QLineEdit("0")
        self.cb_color = _color_combo(DEFAULT_CELL_COLOR)
        self.btn_apply = QPushButton("Apply")
        form.addRow("Matrix", self.ed_matrix)
        form.addRow("Row", self.sp_row)
        form.addRow("Col", self.sp_col)
        form.addRow("Value", self.ed_value)
        form.addRow("Colour", self.cb_color)
        form.addRow(self.btn_apply)
        layout.addWidget(cell_box)

        range_box = QGroupBox("Colour range")
        rform = QFormLayout(range_box)
        self.sp_r0 = _spin(0, 999)
        self.sp_c0 = _spin(0, 999)
        self.sp_r1 = _spin(0, 999, 1)
        self.sp_c1 = _spin(0, 999, 1)
        start = QHBoxLayout(); start.addWidget(self.sp_r0); start.addWidget(self.sp_c0)
        end = QHBoxLayout(); end.addWidget(self.sp_r1); end.addWidget(self.sp_c1)
        self.cb_range_color = _color_combo(DEFAULT_CELL_COLOR)
        self.btn_range = QPushButton("Apply to range")
        rform.addRow("From (row, col)", start)
        rform.addRow("To (row, col)", end)
        rform.addRow("Colour", self.cb_range_color)
        rform.addRow(self.btn_range)
        layout.addWidget(range_box)
        layout.addStretch(1)

        self.btn_apply.clicked.connect(self._apply)
        self.btn_range.clicked.connect(self._apply_range)

    def _apply(self):
        guarded(
            self, "Cell", self.ctrl.edit_cell,
            self.ed_matrix.text().strip(), self.sp_row.value(), self.sp_col.value(),
            self.ed_value.text(), self.cb_color.currentText(),
        )

    def _apply_range(self):
        guarded(
            self, "Colour range", self.ctrl.tint_range,
            self.ed_matrix.text().strip(),
            (self.sp_r0.value(), self.sp_c0.value()),
            (self.sp_r1.value(), self.sp_c1.value()),
            self.cb_range_color.currentText(),
        )

    def refresh(self):
        model = self.ctrl.model
        idx = model.selected_colored_cell
        if idx is None or not (0 <= idx < len(model.colored_cells)):
            return
        cell = model.colored_cells[idx]
        m = model.resolve(cell.ref)
        self.ed_matrix.setText(cell.matrix)
        self.sp_row.setValue(cell.row)
        self.sp_col.setValue(cell.col)
        self.cb_color.setCurrentText(cell.color)
        if m is not None:
            self.ed_value.setText(str(m.value(cell.row, cell.col)))


class ArrowTab(QWidget):
    def __init__(self, panel: "MatrixPanel"):
        super().__init__()
        self.panel = panel
        self.ctrl = panel.ctrl
        layout = QVBoxLayout(self)

        form = QFormLayout()
        self.ed_src = QLineEdit("A")
        self.sp_src_row = _spin(0, 999)
        self.sp_src_col = _spin(0, 999)
        self.ed_tgt = QLineEdit("B")
        self.sp_tgt_row = _spin(0, 999)
        self.sp_tgt_col = _spin(0, 999)
        src = QHBoxLayout(); src.addWidget(self.ed_src); src.addWidget(self.sp_src_row); src.addWidget(self.sp_src_col)
        tgt = QHBoxLayout(); tgt.addWidget(self.ed_tgt); tgt.addWidget(self.sp_tgt_row); tgt.addWidget(self.sp_tgt_col)
        self.cb_color = _color_combo(DEFAULT_ARROW_COLOR)
        self.cb_style = QComboBox()
        for token, label in ARROW_STYLES:
            self.cb_style.addItem(f"{token}  {label}", token)
        self.sp_width = _dspin(DEFAULT_ARROW_WIDTH, 0.5)
        self.sp_width.setRange(0.5, 20.0)
        self.ed_label = QLineEdit()
        form.addRow("Source (name, row, col)", src)
        form.addRow("Target (name, row, col)", tgt)
        form.addRow("Colour", self.cb_color)
        form.addRow("Style", self.cb_style)
        form.addRow("Width", self.sp_width)
        form.addRow("Label", self.ed_label)
        layout.addLayout(form)

        btn_row = QHBoxLayout()
        self.btn_save = QPushButton("Add arrow")
        self.btn_cancel = QPushButton("Cancel edit")
        btn_row.addWidget(self.btn_save)
        btn_row.addWidget(self.btn_cancel)
        btn_row.addStretch(1)
        layout.addLayout(btn_row)
        layout.addStretch(1)

        self.btn_save.clicked.connect(self._save)
        self.btn_cancel.clicked.connect(lambda: self.ctrl.select_arrow(None))

    def _save(self):
        guarded(
            self, "Arrow", self.ctrl.save_arrow,
            CellRef(self.ed_src.text().strip(), self.sp_src_row.value(), self.sp_src_col.value()),
            CellRef(self.ed_tgt.text().strip(), self.sp_tgt_row.value(), self.sp_tgt_col.value()),
            self.cb_color.currentText(),
            self.cb_style.currentData(),
            self.sp_width.value(),
            self.ed_label.text(),
        )

    def refresh(self):
        model = self.ctrl.model
        idx = model.selected_arrow
        editing = idx is not None and 0 <= idx < len(model.arrows)
        self.btn_save.setText("Update arrow" if editing else "Add arrow")
        self.btn_cancel.setEnabled(editing)
        if not editing:
            return
        a = model.arrows[idx]
        self.ed_src.setText(a.source.matrix)
        self.sp_src_row.setValue(a.source.row)
        self.sp_src_col.setValue(a.source.col)
        self.ed_tgt.setText(a.target.matrix)
        self.sp_tgt_row.setValue(a.target.row)
        self.sp_tgt_col.setValue(a.target.col)
        self.cb_color.setCurrentText(a.color)
        i = self.cb_style.findData(a.style)
        if i >= 0:
            self.cb_style.setCurrentIndex(i)
        self.sp_width.setValue(a.width)
        self.ed_label.setText(a.label or "")


class ItemsTab(QWidget):
    """Lists of defined matrices, arrows and colored cells."""

    def __init__(self, panel: "MatrixPanel"):
        super().__init__()
        self.panel = panel
        self.ctrl = panel.ctrl
        layout = QVBoxLayout(self)

        layout.addWidget(QLabel("Matrices"))
        self.lst_matrices = self._list()
        layout.addWidget(self.lst_matrices)
        m_row = QHBoxLayout()
        self.btn_m_dup = QPushButton("Duplicate")
        self.btn_m_del = QPushButton("Delete")
        m_row.addWidget(self.btn_m_dup); m_row.addWidget(self.btn_m_del); m_row.addStretch(1)
        layout.addLayout(m_row)

        layout.addWidget(QLabel("Arrows"))
        self.lst_arrows = self._list()
        layout.addWidget(self.lst_arrows)
        self.btn_a_del = QPushButton("Delete arrow")
        layout.addWidget(self.btn_a_del)

        layout.addWidget(QLabel("Colored cells"))
        self.lst_cells = self._list()
        layout.addWidget(self.lst_cells)
        self.btn_c_del = QPushButton("Delete colored cell")
        layout.addWidget(self.btn_c_del)

        self.lst_matrices.itemClicked.connect(lambda it: self.ctrl.select_matrix(it.text()))
        self.lst_arrows.itemClicked.connect(lambda it: self.ctrl.select_arrow(self.lst_arrows.row(it)))
        self.lst_cells.itemClicked.connect(lambda it: self.ctrl.select_colored_cell(self.lst_cells.row(it)))
        self.btn_m_dup.clicked.connect(self._duplicate)
        self.btn_m_del.clicked.connect(self._delete_matrix)
        self.btn_a_del.clicked.connect(self._delete_arrow)
        self.btn_c_del.clicked.connect(self._delete_cell)

    @staticmethod
    def _list() -> QListWidget:
        lst = QListWidget()
        lst.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        return lst

    def _confirm(self, text: str) -> bool:
        return QMessageBox.question(self, "Delete", text) == QMessageBox.StandardButton.Yes

    def _duplicate(self):
        item = self.lst_matrices.currentItem()
        if item is not None:
            guarded(self, "Duplicate", self.ctrl.duplicate_matrix, item.text())

    def _delete_matrix(self):
        item = self.lst_matrices.currentItem()
        if item is not None and self._confirm(f"Delete matrix '{item.text()}'?"):
            guarded(self, "Delete", self.ctrl.delete_matrix, item.text())

    def _delete_arrow(self):
        row = self.lst_arrows.currentRow()
        if row >= 0 and self._confirm(f"Delete arrow {self.lst_arrows.item(row).text()}?"):
            guarded(self, "Delete", self.ctrl.delete_arrow, row)

    def _delete_cell(self):
        row = self.lst_cells.currentRow()
        if row >= 0 and self._confirm(f"Delete colored cell {self.lst_cells.item(row).text()}?"):
            guarded(self, "Delete", self.ctrl.delete_colored_cell, row)

    def refresh(self):
        model = self.ctrl.model
        with QSignalBlocker(self.lst_matrices):
            self.lst_matrices.clear()
            for name, _m in model.iter_matrices():
                self.lst_matrices.addItem(name)
            if model.selected_matrix in model.matrices:
                self.lst_matrices.setCurrentRow(list(model.matrices).index(model.selected_matrix))
        with QSignalBlocker(self.lst_arrows):
            self.lst_arrows.clear()
            for a in model.arrows:
                s, t = a.source, a.target
                self.lst_arrows.addItem(f"{s.matrix}[{s.row},{s.col}] -> {t.matrix}[{t.row},{t.col}]  {a.color} {a.style}")
            if model.selected_arrow is not None and model.selected_arrow < len(model.arrows):
                self.lst_arrows.setCurrentRow(model.selected_arrow)
        with QSignalBlocker(self.lst_cells):
            self.lst_cells.clear()
            for c in model.colored_cells:
                self.lst_cells.addItem(f"{c.matrix}[{c.row},{c.col}]  {c.color}")
            if model.selected_colored_cell is not None and model.selected_colored_cell < len(model.colored_cells):
                self.lst_cells.setCurrentRow(model.selected_colored_cell)
