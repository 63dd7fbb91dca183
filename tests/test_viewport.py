# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from matrix_canvas.core.viewport import PanTracker, ViewportTransform, clamp_scale


@pytest.mark.parametrize("scale", [10.0, 37.5, 100.0])
@pytest.mark.parametrize("offset", [(0.0, 0.0), (50.0, 50.0), (-120.5, 333.25)])
@pytest.mark.parametrize("point", [(0.0, 0.0), (3.25, -7.5), (-12.0, 4.4)])
def test_scene_screen_round_trip(scale, offset, point):
    vp = ViewportTransform(scale, *offset)
    assert vp.to_scene(*vp.to_screen(*point)) == pytest.approx(point)


def test_to_screen_flips_y():
    vp = ViewportTransform(40, 50, 50)
    assert vp.to_screen(1, 1) == (90, 10)
    assert vp.to_scene(90, 10) == (1, 1)
    assert vp.data_to_screen(1, 1) == (90, 90)


def test_scale_is_clamped():
    assert ViewportTransform(scale=500).scale == 100
    assert ViewportTransform(scale=1).scale == 10
    assert clamp_scale(55) == 55


def test_zoom_steps_and_clamps():
    vp = ViewportTransform()
    assert vp.zoom(True) == pytest.approx(44.0)
    assert vp.zoom(False) == pytest.approx(40.0)
    vp.scale = 95
    assert vp.zoom(True) == 100
    vp.scale = 10.5
    assert vp.zoom(False) == 10


def test_pan_moves_offset_only():
    vp = ViewportTransform()
    vp.pan(12, -3)
    assert vp.offset == (62, 47)
    assert vp.scale == 40
    vp.reset()
    assert (vp.scale, vp.offset) == (40, (50, 50))


def test_pan_tracker():
    vp = ViewportTransform()
    pan = PanTracker(vp)
    assert pan.move(30, 30) is False
    pan.press(10, 10)
    assert pan.move(15, 20) is True
    assert pan.move(15, 25) is True
    assert vp.offset == (55, 65)
    pan.release()
    assert pan.move(100, 100) is False
    assert vp.offset == (55, 65)
