# -*- coding: utf-8 -*-
"""Arrow style tokens and arrow geometry in screen space.

A style token such as ``-|>`` or ``<->`` is read by substring, not matched
against a fixed list, so several flags can hold at once and unknown tokens
simply draw a plain line:

- ``>``   arrowhead at the target
- ``<-``  arrowhead at the source
- ``|``   short perpendicular bar near the target
- ``arc`` cubic curve instead of a straight segment
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .model import Arrow, CellRef, SceneModel
from .viewport import ViewportTransform

Point = Tuple[float, float]

HEAD_LENGTH = 10.0
HEAD_HALF_ANGLE = math.pi / 7
BAR_BACKOFF = 5.0
BAR_HALF_LENGTH = 5.0
LABEL_OFFSET = 0.1


@dataclass(frozen=True)
class ArrowStyle:
    head_at_target: bool = False
    head_at_source: bool = False
    bar_at_target: bool = False
    curved: bool = False

    @classmethod
    def parse(cls, token: str) -> "ArrowStyle":
        token = token or ""
        return cls(
            head_at_target=">" in token,
            head_at_source="<-" in token,
            bar_at_target="|" in token,
            curved="arc" in token,
        )


@dataclass(frozen=True)
class ArrowGeometry:
    """Everything the painter needs for one arrow, in pixels."""
    start: Point
    end: Point
    controls: Optional[Tuple[Point, Point]]
    heads: Tuple[Tuple[Point, Point, Point], ...]
    bar: Optional[Tuple[Point, Point]]
    label_pos: Point


def cell_center(model: SceneModel, ref: CellRef, viewport: ViewportTransform) -> Optional[Point]:
    m = model.resolve(ref)
    if m is None:
        return None
    px, py = m.position
    return viewport.data_to_screen(px + ref.col + 0.5, py + ref.row + 0.5)


def _head(tip: np.ndarray, direction: np.ndarray) -> Tuple[Point, Point, Point]:
    """Triangle with its apex at ``tip``, opening back along ``-direction``."""
    angle = math.atan2(direction[1], direction[0])
    wings = []
    for a in (angle - HEAD_HALF_ANGLE, angle + HEAD_HALF_ANGLE):
        wings.append(tip - HEAD_LENGTH * np.array([math.cos(a), math.sin(a)]))
    return (
        (float(tip[0]), float(tip[1])),
        (float(wings[0][0]), float(wings[0][1])),
        (float(wings[1][0]), float(wings[1][1])),
    )


def build_geometry(start: Point, end: Point, style: ArrowStyle) -> ArrowGeometry:
    p0 = np.asarray(start, dtype=float)
    p1 = np.asarray(end, dtype=float)
    d = p1 - p0
    angle = math.atan2(d[1], d[0])
    unit = np.array([math.cos(angle), math.sin(angle)])

    controls = None
    if style.curved:
        # control points at 25% / 75% of the x span, pinned to the end heights
        c1 = (float(p0[0] + d[0] * 0.25), float(p0[1]))
        c2 = (float(p1[0] - d[0] * 0.25), float(p1[1]))
        controls = (c1, c2)

    heads: List[Tuple[Point, Point, Point]] = []
    if style.head_at_target:
        heads.append(_head(p1, unit))
    if style.head_at_source:
        heads.append(_head(p0, -unit))

    bar = None
    if style.bar_at_target:
        perp = np.array([-unit[1], unit[0]])
        base = p1 - BAR_BACKOFF * unit
        a = base + BAR_HALF_LENGTH * perp
        b = base - BAR_HALF_LENGTH * perp
        bar = ((float(a[0]), float(a[1])), (float(b[0]), float(b[1])))

    mid = (p0 + p1) / 2.0
    label = mid + LABEL_OFFSET * np.array([d[1], -d[0]])
    return ArrowGeometry(
        start=(float(p0[0]), float(p0[1])),
        end=(float(p1[0]), float(p1[1])),
        controls=controls,
        heads=tuple(heads),
        bar=bar,
        label_pos=(float(label[0]), float(label[1])),
    )


def arrow_geometry(model: SceneModel, arrow: Arrow, viewport: ViewportTransform) -> Optional[ArrowGeometry]:
    """Geometry for ``arrow``, or ``None`` when an endpoint no longer resolves."""
    start = cell_center(model, arrow.source, viewport)
    end = cell_center(model, arrow.target, viewport)
    if start is None or end is None:
        return None
    return build_geometry(start, end, ArrowStyle.parse(arrow.style))
