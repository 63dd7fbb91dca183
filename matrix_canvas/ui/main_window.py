# -*- coding: utf-8 -*-
"""Main window + ribbon actions."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QDockWidget, QFileDialog, QMainWindow, QMessageBox, QStatusBar

from ..config import DEFAULT_FILE_NAME, FILE_FILTER
from ..core.controller import SceneController
from ..core.errors import SceneError
from .canvas import MatrixCanvas
from .console import ConsoleWidget
from .panel import MatrixPanel
from .ribbon import assign_default_icons, build_matrix_ribbon_spec, build_ribbon

logger = logging.getLogger(__name__)

APP_TITLE = "Matrix Canvas"


class MainWindow(QMainWindow):
    def __init__(self, ctrl: Optional[SceneController] = None):
        super().__init__()
        self.resize(1400, 900)
        self.ctrl = ctrl or SceneController()
        self.canvas = MatrixCanvas(self.ctrl)
        self.setCentralWidget(self.canvas)

        self.dock = QDockWidget("Scene", self)
        self.panel = MatrixPanel(self.ctrl)
        self.dock.setWidget(self.panel)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, self.dock)

        self.console_dock = QDockWidget("Console", self)
        self.console = ConsoleWidget(self.ctrl)
        self.console_dock.setWidget(self.console)
        self.addDockWidget(Qt.DockWidgetArea.BottomDockWidgetArea, self.console_dock)

        self.setStatusBar(QStatusBar())
        self._build_actions()
        self._build_ribbon()

        self.ctrl.add_listener(self.update_status)
        self.ctrl.add_stack_listener(self.update_undo_redo_actions)
        self.update_undo_redo_actions()
        self.update_status()
        self._update_title()

    # ---------- actions ----------
    def _action(self, key: str, text: str, slot, shortcut: Optional[QKeySequence] = None, checkable: bool = False) -> QAction:
        act = QAction(text, self)
        act.setCheckable(checkable)
        if shortcut is not None:
            act.setShortcut(shortcut)
        act.triggered.connect(slot)
        self.addAction(act)
        self.actions_by_key[key] = act
        return act

    def _build_actions(self):
        self.actions_by_key: dict[str, QAction] = {}
        self.act_file_new = self._action("act_file_new", "New", self.file_new, QKeySequence.StandardKey.New)
        self.act_file_open = self._action("act_file_open", "Open", self.file_open, QKeySequence.StandardKey.Open)
        self.act_file_save = self._action("act_file_save", "Save", self.file_save, QKeySequence.StandardKey.Save)
        self.act_file_save_as = self._action("act_file_save_as", "Save As", self.file_save_as, QKeySequence.StandardKey.SaveAs)
        self.act_undo = self._action("act_undo", "Undo", self.ctrl.undo, QKeySequence.StandardKey.Undo)
        self.act_redo = self._action("act_redo", "Redo", self.ctrl.redo, QKeySequence.StandardKey.Redo)
        self.act_reset_data = self._action("act_reset_data", "Reset", self.reset_data)
        self.act_reset_view = self._action("act_reset_view", "Reset View", self.ctrl.reset_view)
        self.act_zoom_in = self._action("act_zoom_in", "Zoom In", lambda: self.ctrl.wheel(True), QKeySequence.StandardKey.ZoomIn)
        self.act_zoom_out = self._action("act_zoom_out", "Zoom Out", lambda: self.ctrl.wheel(False), QKeySequence.StandardKey.ZoomOut)
        self.act_dark_theme = self._action("act_dark_theme", "Dark Theme", self._toggle_theme, checkable=True)
        assign_default_icons(self.actions_by_key, self.style())

    def _build_ribbon(self) -> None:
        self.ribbon = build_ribbon(self, build_matrix_ribbon_spec(), self.actions_by_key)
        self.setMenuBar(self.ribbon)

    def update_undo_redo_actions(self):
        self.act_undo.setEnabled(self.ctrl.stack.can_undo())
        self.act_redo.setEnabled(self.ctrl.stack.can_redo())
        undo_text = self.ctrl.stack.undo_text()
        self.act_undo.setToolTip(f"Undo {undo_text}" if undo_text else "Undo")
        redo_text = self.ctrl.stack.redo_text()
        self.act_redo.setToolTip(f"Redo {redo_text}" if redo_text else "Redo")

    def update_status(self):
        self.statusBar().showMessage(self.ctrl.status_text())
        dark = self.ctrl.model.theme == "dark"
        if self.act_dark_theme.isChecked() != dark:
            self.act_dark_theme.setChecked(dark)

    def _update_title(self):
        name = self.ctrl.current_file or "untitled"
        self.setWindowTitle(f"{APP_TITLE} - {name}")

    def _toggle_theme(self, checked: bool = False):
        theme = self.ctrl.toggle_theme()
        logger.debug("theme: %s", theme)

    # ---------- file ----------
    def file_new(self):
        if QMessageBox.question(self, "New", "Discard the current scene?") != QMessageBox.StandardButton.Yes:
            return
        self.ctrl.new_scene()
        self._update_title()

    def reset_data(self):
        if QMessageBox.question(self, "Reset", "Reset all data to the default scene?") != QMessageBox.StandardButton.Yes:
            return
        self.ctrl.reset()

    def open_path(self, path: str) -> bool:
        try:
            self.ctrl.load_file(path)
        except (OSError, SceneError) as e:
            logger.warning("open failed: %s (%s)", path, e)
            QMessageBox.critical(self, "Open failed", str(e))
            return False
        self._update_title()
        self.statusBar().showMessage(f"Loaded {path}", 3000)
        return True

    def file_open(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Scene", "", FILE_FILTER)
        if not path:
            return
        self.open_path(path)

    def file_save(self):
        if not self.ctrl.current_file:
            return self.file_save_as()
        try:
            self.ctrl.save_file()
        except OSError as e:
            logger.warning("save failed: %s", e)
            QMessageBox.critical(self, "Save failed", str(e))

    def file_save_as(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save Scene As", DEFAULT_FILE_NAME, FILE_FILTER)
        if not path:
            return
        if not path.lower().endswith(".json"):
            path += ".json"
        try:
            self.ctrl.save_file(path)
        except OSError as e:
            logger.warning("save failed: %s", e)
            QMessageBox.critical(self, "Save failed", str(e))
            return
        self._update_title()
