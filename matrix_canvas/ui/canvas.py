# -*- coding: utf-8 -*-
"""Scene canvas (paint + pan/zoom/hover/pick)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import QWidget

from ..core.arrow_style import arrow_geometry
from ..core.colors import text_color_for
from ..core.status import cell_info
from ..utils.constants import ARROW_HILITE, HILITE, HOVER, MATRIX_PAD, PALETTES, SELECTION_PAD
from ..utils.qt_safe import safe_event

if TYPE_CHECKING:
    from ..core.controller import SceneController


def _qcolor(name: str, fallback: QColor) -> QColor:
    c = QColor(name)
    return c if c.isValid() else fallback


def _fmt(value) -> str:
    return "" if value is None else str(value)


class MatrixCanvas(QWidget):
    def __init__(self, ctrl: "SceneController", parent=None):
        super().__init__(parent)
        self.ctrl = ctrl
        self.setMouseTracking(True)
        self.setMinimumSize(400, 300)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)
        ctrl.add_listener(self.update)

    # ---------- painting ----------
    def paintEvent(self, e):
        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing)
            pal = PALETTES.get(self.ctrl.model.theme, PALETTES["light"])
            p.fillRect(self.rect(), pal.background)
            self._draw_grid(p, pal)
            self._draw_matrices(p, pal)
            self._draw_colored_cells(p, pal)
            self._draw_arrows(p, pal)
            self._draw_selection(p)
            self._draw_hover(p, pal)
        finally:
            p.end()

    def _draw_grid(self, p: QPainter, pal):
        vp = self.ctrl.viewport
        step = vp.scale
        p.setPen(QPen(pal.grid, 1))
        y = vp.offset_y % step
        while y < self.height():
            p.drawLine(QPointF(0, y), QPointF(self.width(), y))
            y += step
        x = vp.offset_x % step
        while x < self.width():
            p.drawLine(QPointF(x, 0), QPointF(x, self.height()))
            x += step

    def _cell_rect(self, m, row: int, col: int) -> QRectF:
        vp = self.ctrl.viewport
        x, y = vp.data_to_screen(m.position[0] + col, m.position[1] + row)
        return QRectF(x, y, vp.scale, vp.scale)

    def _matrix_rect(self, m, pad: float) -> QRectF:
        vp = self.ctrl.viewport
        x0, y0 = vp.data_to_screen(m.position[0], m.position[1])
        x1, y1 = vp.data_to_screen(m.position[0] + m.cols, m.position[1] + m.rows)
        return QRectF(x0 - pad, y0 - pad, (x1 - x0) + 2 * pad, (y1 - y0) + 2 * pad)

    def _draw_matrices(self, p: QPainter, pal):
        value_font = QFont("Arial", 9)
        name_font = QFont("Arial", 11)
        name_font.setBold(True)
        for name, m in self.ctrl.model.iter_matrices():
            frame = self._matrix_rect(m, MATRIX_PAD)
            p.setPen(QPen(pal.frame_line, 1))
            p.setBrush(QBrush(pal.frame_fill))
            p.drawRect(frame)
            p.setFont(value_font)
            for i in range(m.rows):
                for j in range(m.cols):
                    r = self._cell_rect(m, i, j)
                    p.setPen(QPen(pal.cell_line, 1))
                    p.setBrush(QBrush(pal.cell_fill))
                    p.drawRect(r)
                    p.setPen(pal.text)
                    p.drawText(r, Qt.AlignmentFlag.AlignCenter, _fmt(m.value(i, j)))
            p.setFont(name_font)
            p.setPen(pal.text)
            origin = frame.topLeft()
            p.drawText(
                QRectF(origin.x() - 105, origin.y() - 25, 100, 20),
                Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignBottom,
                name,
            )

    def _draw_colored_cells(self, p: QPainter, pal):
        font = QFont("Arial", 9)
        font.setBold(True)
        p.setFont(font)
        for cell in self.ctrl.model.colored_cells:
            m = self.ctrl.model.resolve(cell.ref)
            if m is None:
                continue
            r = self._cell_rect(m, cell.row, cell.col)
            fill = _qcolor(cell.color, pal.cell_fill)
            p.setPen(QPen(pal.cell_line, 1))
            p.setBrush(QBrush(fill))
            p.drawRect(r)
            p.setPen(QColor(text_color_for(cell.color)))
            p.drawText(r, Qt.AlignmentFlag.AlignCenter, _fmt(m.value(cell.row, cell.col)))

    def _draw_arrows(self, p: QPainter, pal):
        label_font = QFont("Arial", 8)
        label_font.setBold(True)
        fm = QFontMetricsF(label_font)
        for arrow in self.ctrl.model.arrows:
            geo = arrow_geometry(self.ctrl.model, arrow, self.ctrl.viewport)
            if geo is None:
                continue
            color = _qcolor(arrow.color, QColor("red"))
            pen = QPen(color, arrow.width)
            p.setPen(pen)
            p.setBrush(Qt.BrushStyle.NoBrush)
            path = QPainterPath(QPointF(*geo.start))
            if geo.controls is not None:
                c1, c2 = geo.controls
                path.cubicTo(QPointF(*c1), QPointF(*c2), QPointF(*geo.end))
            else:
                path.lineTo(QPointF(*geo.end))
            p.drawPath(path)

            p.setBrush(QBrush(color))
            for tri in geo.heads:
                p.drawPolygon(QPolygonF([QPointF(*pt) for pt in tri]))
            if geo.bar is not None:
                p.drawLine(QPointF(*geo.bar[0]), QPointF(*geo.bar[1]))

            if arrow.label:
                lx, ly = geo.label_pos
                rx = fm.horizontalAdvance(arrow.label) / 2 + 5
                p.setPen(Qt.PenStyle.NoPen)
                p.setBrush(QBrush(pal.label_fill))
                p.drawEllipse(QPointF(lx, ly), rx, 12)
                p.setFont(label_font)
                p.setPen(color)
                p.drawText(QRectF(lx - rx, ly - 12, 2 * rx, 24), Qt.AlignmentFlag.AlignCenter, arrow.label)

    def _draw_selection(self, p: QPainter):
        model = self.ctrl.model
        if model.selected_matrix is not None and model.selected_matrix in model.matrices:
            pen = QPen(HILITE, 2)
            pen.setStyle(Qt.PenStyle.DashLine)
            p.setPen(pen)
            p.setBrush(Qt.BrushStyle.NoBrush)
            p.drawRect(self._matrix_rect(model.matrices[model.selected_matrix], SELECTION_PAD))
        idx = model.selected_arrow
        if idx is not None and 0 <= idx < len(model.arrows):
            geo = arrow_geometry(model, model.arrows[idx], self.ctrl.viewport)
            if geo is not None:
                p.setPen(QPen(ARROW_HILITE, model.arrows[idx].width + 4))
                p.setBrush(Qt.BrushStyle.NoBrush)
                p.drawLine(QPointF(*geo.start), QPointF(*geo.end))
        idx = model.selected_colored_cell
        if idx is not None and 0 <= idx < len(model.colored_cells):
            cell = model.colored_cells[idx]
            m = model.resolve(cell.ref)
            if m is not None:
                p.setPen(QPen(HILITE, 3))
                p.setBrush(Qt.BrushStyle.NoBrush)
                p.drawRect(self._cell_rect(m, cell.row, cell.col))

    def _draw_hover(self, p: QPainter, pal):
        ref = self.ctrl.model.hovered_cell
        text = cell_info(self.ctrl.model, ref)
        if text is None:
            return
        m = self.ctrl.model.resolve(ref)
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(QBrush(HOVER))
        p.drawRect(self._cell_rect(m, ref.row, ref.col))
        p.setFont(QFont("Arial", 9))
        p.setPen(pal.text)
        p.drawText(QRectF(10, self.height() - 24, self.width() - 20, 20), Qt.AlignmentFlag.AlignLeft, text)

    # ---------- interaction ----------
    @safe_event
    def wheelEvent(self, e):
        self.ctrl.wheel(e.angleDelta().y() > 0)
        e.accept()

    @safe_event
    def mousePressEvent(self, e):
        if e.button() == Qt.MouseButton.RightButton:
            pos = e.position()
            self.ctrl.begin_pan(pos.x(), pos.y())
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            e.accept(); return
        super().mousePressEvent(e)

    @safe_event
    def mouseMoveEvent(self, e):
        pos = e.position()
        self.ctrl.pointer_move(pos.x(), pos.y())
        e.accept()

    @safe_event
    def mouseReleaseEvent(self, e):
        if e.button() == Qt.MouseButton.RightButton:
            self.ctrl.end_pan()
            self.setCursor(Qt.CursorShape.ArrowCursor)
            e.accept(); return
        super().mouseReleaseEvent(e)

    @safe_event
    def mouseDoubleClickEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton:
            pos = e.position()
            self.ctrl.double_click(pos.x(), pos.y())
            e.accept(); return
        super().mouseDoubleClickEvent(e)

    def leaveEvent(self, e):
        self.ctrl.pointer_leave()
        super().leaveEvent(e)
