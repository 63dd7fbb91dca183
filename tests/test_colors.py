# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from matrix_canvas.core.colors import brightness, text_color_for, to_rgb


def test_to_rgb():
    assert to_rgb("lightblue") == (0xAD, 0xD8, 0xE6)
    assert to_rgb(" Orange ") == (255, 165, 0)
    assert to_rgb("#102030") == (16, 32, 48)
    assert to_rgb("a0B0c0") == (160, 176, 192)
    assert to_rgb("nope") is None
    assert to_rgb("#12345") is None


@pytest.mark.parametrize("color,expected", [
    ("white", "#000000"),
    ("yellow", "#000000"),
    ("lightblue", "#000000"),
    ("black", "#FFFFFF"),
    ("blue", "#FFFFFF"),
    ("purple", "#FFFFFF"),
    # unknown colours count as exactly 128, which is not "light"
    ("chartreuse-ish", "#FFFFFF"),
])
def test_text_color_for(color, expected):
    assert text_color_for(color) == expected


def test_brightness():
    assert brightness("#000000") == 0
    assert brightness("#FFFFFF") == 255
    assert brightness("red") == pytest.approx(76.245)
    assert brightness("unknown") == 128
