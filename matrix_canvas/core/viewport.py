# -*- coding: utf-8 -*-
"""Scene <-> screen coordinate mapping (pan/zoom).

Scene coordinates are Y-up, screen pixels are Y-down, hence the sign flip on
the Y axis in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..config import DEFAULT_OFFSET, DEFAULT_SCALE, MAX_SCALE, MIN_SCALE, ZOOM_FACTOR


def clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, float(scale)))


@dataclass
class ViewportTransform:
    scale: float = DEFAULT_SCALE
    offset_x: float = DEFAULT_OFFSET[0]
    offset_y: float = DEFAULT_OFFSET[1]

    def __post_init__(self):
        self.scale = clamp_scale(self.scale)

    @property
    def offset(self) -> Tuple[float, float]:
        return self.offset_x, self.offset_y

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale + self.offset_x, -y * self.scale + self.offset_y

    def to_scene(self, px: float, py: float) -> Tuple[float, float]:
        return (px - self.offset_x) / self.scale, -(py - self.offset_y) / self.scale

    def data_to_screen(self, col_x: float, row_y: float) -> Tuple[float, float]:
        """Map a matrix-space point (x right, y = row direction, down) to pixels."""
        return self.to_screen(col_x, -row_y)

    def zoom(self, wheel_up: bool) -> float:
        if wheel_up:
            self.scale = clamp_scale(self.scale * ZOOM_FACTOR)
        else:
            self.scale = clamp_scale(self.scale / ZOOM_FACTOR)
        return self.scale

    def pan(self, dx: float, dy: float) -> None:
        self.offset_x += dx
        self.offset_y += dy

    def reset(self) -> None:
        self.scale = DEFAULT_SCALE
        self.offset_x, self.offset_y = DEFAULT_OFFSET


class PanTracker:
    """Tracks a held drag button and turns pointer moves into offset deltas."""

    def __init__(self, viewport: ViewportTransform):
        self.viewport = viewport
        self.active = False
        self._last: Tuple[float, float] = (0.0, 0.0)

    def press(self, px: float, py: float) -> None:
        self.active = True
        self._last = (px, py)

    def move(self, px: float, py: float) -> bool:
        """Apply the delta since the last event. Returns False when not dragging."""
        if not self.active:
            return False
        dx = px - self._last[0]
        dy = py - self._last[1]
        self.viewport.pan(dx, dy)
        self._last = (px, py)
        return True

    def release(self) -> None:
        self.active = False
