# -*- coding: utf-8 -*-
"""Command console: multi-line input, run, transcript."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtGui import QFont, QKeySequence, QShortcut
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

if TYPE_CHECKING:
    from ..core.controller import SceneController

SAMPLES = (
    ("Matrix", "A := [3, 3] @ (0, 0)"),
    ("Arrow", "A[0][0] -> B[1][1] : red"),
    ("Colour", "A[0][0] : lightblue"),
    ("Example", "A := [2, 2] @ (0, 0)\nB := [2, 2] @ (3, 0)\nA[0][0] -> B[0][0] : green"),
)


class ConsoleWidget(QWidget):
    def __init__(self, ctrl: "SceneController", parent=None):
        super().__init__(parent)
        self.ctrl = ctrl
        mono = QFont("Consolas")
        mono.setStyleHint(QFont.StyleHint.Monospace)

        layout = QVBoxLayout(self)
        self.history = QPlainTextEdit()
        self.history.setReadOnly(True)
        self.history.setFont(mono)
        layout.addWidget(self.history, 2)

        sample_row = QHBoxLayout()
        sample_row.addWidget(QLabel("Samples:"))
        for title, text in SAMPLES:
            btn = QPushButton(title)
            btn.clicked.connect(lambda _=False, t=text: self.input.setPlainText(t))
            sample_row.addWidget(btn)
        sample_row.addStretch(1)
        layout.addLayout(sample_row)

        self.input = QPlainTextEdit()
        self.input.setFont(mono)
        self.input.setPlaceholderText("A := [3, 3] @ (0, 0)    (Ctrl+Enter to run)")
        layout.addWidget(self.input, 1)

        btn_row = QHBoxLayout()
        self.btn_run = QPushButton("Run")
        self.btn_clear_input = QPushButton("Clear input")
        self.btn_clear_history = QPushButton("Clear history")
        btn_row.addWidget(self.btn_run)
        btn_row.addWidget(self.btn_clear_input)
        btn_row.addWidget(self.btn_clear_history)
        btn_row.addStretch(1)
        layout.addLayout(btn_row)

        self.btn_run.clicked.connect(self.run)
        self.btn_clear_input.clicked.connect(self.input.clear)
        self.btn_clear_history.clicked.connect(self.ctrl.clear_history)
        QShortcut(QKeySequence("Ctrl+Return"), self.input, activated=self.run)
        self._shown = -1
        ctrl.add_listener(self.refresh)
        self.refresh()

    def run(self):
        text = self.input.toPlainText()
        if not text.strip():
            return
        self.ctrl.run_commands(text)

    def refresh(self):
        lines = self.ctrl.interpreter.history
        if len(lines) == self._shown:
            return
        self._shown = len(lines)
        self.history.setPlainText("\n".join(lines))
        bar = self.history.verticalScrollBar()
        bar.setValue(bar.maximum())
