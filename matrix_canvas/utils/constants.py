# -*- coding: utf-8 -*-
"""UI constants and colors."""

from dataclasses import dataclass

from PyQt6.QtGui import QColor

HILITE = QColor(0, 0, 255)
HOVER = QColor(0, 120, 255, 60)
ARROW_HILITE = QColor(255, 165, 0)

MATRIX_PAD = 5
SELECTION_PAD = 10


@dataclass(frozen=True)
class Palette:
    background: QColor
    grid: QColor
    frame_fill: QColor
    frame_line: QColor
    cell_fill: QColor
    cell_line: QColor
    text: QColor
    label_fill: QColor


PALETTES = {
    "light": Palette(
        background=QColor("#f0f0f0"),
        grid=QColor("#dddddd"),
        frame_fill=QColor("#f8f8f8"),
        frame_line=QColor("#000000"),
        cell_fill=QColor("#ffffff"),
        cell_line=QColor("#000000"),
        text=QColor("#000000"),
        label_fill=QColor("#ffffff"),
    ),
    "dark": Palette(
        background=QColor("#2d2d2d"),
        grid=QColor("#444444"),
        frame_fill=QColor("#2a2a2a"),
        frame_line=QColor("#888888"),
        cell_fill=QColor("#3a3a3a"),
        cell_line=QColor("#555555"),
        text=QColor("#ffffff"),
        label_fill=QColor("#2a2a2a"),
    ),
}

COLOR_SWATCHES = (
    "red", "green", "blue", "orange", "purple",
    "lightblue", "lightgreen", "lightyellow", "lightpink", "gray",
)
