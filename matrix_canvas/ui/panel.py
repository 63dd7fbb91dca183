# -*- coding: utf-8 -*-
"""Right-side panel containing tabs for scene editing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QLabel, QTabWidget, QVBoxLayout, QWidget

from .tabs import ArrowTab, CellTab, ItemsTab, MatrixTab

if TYPE_CHECKING:
    from ..core.controller import SceneController


class MatrixPanel(QWidget):
    def __init__(self, ctrl: "SceneController"):
        super().__init__()
        self.ctrl = ctrl
        layout = QVBoxLayout(self)
        self.title = QLabel("Scene")
        self.title.setStyleSheet("font-weight: 600;")
        layout.addWidget(self.title)
        self.tabs = QTabWidget()
        layout.addWidget(self.tabs)
        self.matrix_tab = MatrixTab(self)
        self.cell_tab = CellTab(self)
        self.arrow_tab = ArrowTab(self)
        self.items_tab = ItemsTab(self)
        self.tabs.addTab(self.matrix_tab, "Matrix")
        self.tabs.addTab(self.cell_tab, "Cells")
        self.tabs.addTab(self.arrow_tab, "Arrows")
        self.tabs.addTab(self.items_tab, "Items")
        self._last = None
        ctrl.add_listener(self.defer_refresh_all)
        self.refresh_all()

    def defer_refresh_all(self):
        QTimer.singleShot(0, self.refresh_all)

    def refresh_all(self):
        model = self.ctrl.model
        # hover-only changes do not touch the forms
        data = (model.matrices, model.arrows, model.colored_cells)
        selection = (model.selected_matrix, model.selected_arrow, model.selected_colored_cell)
        if self._last is not None:
            last_data, last_selection = self._last
            if all(a is b for a, b in zip(data, last_data)) and selection == last_selection:
                return
        self._last = (data, selection)
        self.matrix_tab.refresh()
        self.cell_tab.refresh()
        self.arrow_tab.refresh()
        self.items_tab.refresh()
