# -*- coding: utf-8 -*-
from __future__ import annotations

import math

import pytest

from matrix_canvas.core.arrow_style import ArrowStyle, arrow_geometry, build_geometry
from matrix_canvas.core.model import Arrow, CellRef
from matrix_canvas.core.viewport import ViewportTransform

from conftest import make_matrix


@pytest.mark.parametrize("token,flags", [
    ("-|>", (True, False, True, False)),
    ("->>", (True, False, False, False)),
    ("-[", (False, False, False, False)),
    ("-|", (False, False, True, False)),
    ("<->", (True, True, False, False)),
    ("<-|>", (True, True, True, False)),
    ("arc->", (True, False, False, True)),
    ("", (False, False, False, False)),
    ("~~", (False, False, False, False)),
])
def test_style_flags(token, flags):
    s = ArrowStyle.parse(token)
    assert (s.head_at_target, s.head_at_source, s.bar_at_target, s.curved) == flags


def test_straight_geometry_with_head_and_bar():
    geo = build_geometry((0, 0), (100, 0), ArrowStyle.parse("-|>"))
    assert geo.controls is None
    assert len(geo.heads) == 1
    tip, w1, w2 = geo.heads[0]
    assert tip == (100, 0)
    dx, dy = 10 * math.cos(math.pi / 7), 10 * math.sin(math.pi / 7)
    assert sorted([w1, w2]) == [pytest.approx((100 - dx, -dy)), pytest.approx((100 - dx, dy))]
    a, b = geo.bar
    assert sorted([a, b]) == [pytest.approx((95, -5)), pytest.approx((95, 5))]
    assert geo.label_pos == pytest.approx((50, -10))


def test_source_head_points_backwards():
    geo = build_geometry((0, 0), (100, 0), ArrowStyle.parse("<->"))
    assert len(geo.heads) == 2
    tip, w1, w2 = geo.heads[1]
    assert tip == (0, 0)
    assert w1[0] == pytest.approx(10 * math.cos(math.pi / 7))
    assert w2[0] == pytest.approx(10 * math.cos(math.pi / 7))
    assert geo.bar is None


def test_curved_control_points():
    geo = build_geometry((0, 0), (100, 40), ArrowStyle.parse("arc"))
    assert geo.controls == ((25, 0), (75, 40))
    assert geo.heads == ()


def test_geometry_from_scene(scene):
    vp = ViewportTransform()
    geo = arrow_geometry(scene, scene.arrows[0], vp)
    assert geo.start == (70, 70)
    assert geo.end == (270, 70)


def test_stale_endpoints_produce_no_geometry(scene):
    vp = ViewportTransform()
    shrunk = scene.put_matrix("B", make_matrix(1, 1, 5, 0))
    assert arrow_geometry(shrunk, Arrow(CellRef("A", 0, 0), CellRef("B", 2, 2)), vp) is None
    assert arrow_geometry(scene, Arrow(CellRef("Q", 0, 0), CellRef("B", 0, 0)), vp) is None
