# -*- coding: utf-8 -*-
"""Colour helpers for tinted cells.

Only a small table of CSS colour names is known here; anything else must be a
``#rrggbb`` hex string. Unknown colours are treated as mid-grey when choosing
the text colour.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

RGB = Tuple[int, int, int]

NAMED_COLORS = {
    "red": "#FF0000",
    "green": "#00FF00",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "black": "#000000",
    "white": "#FFFFFF",
    "gray": "#808080",
    "grey": "#808080",
    "lightblue": "#ADD8E6",
    "lightcyan": "#E0FFFF",
    "lightgreen": "#90EE90",
    "lightgrey": "#D3D3D3",
    "lightpink": "#FFB6C1",
    "lightyellow": "#FFFFE0",
    "orange": "#FFA500",
    "pink": "#FFC0CB",
    "purple": "#800080",
    "violet": "#EE82EE",
    "brown": "#A52A2A",
}

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)

NEUTRAL_BRIGHTNESS = 128.0


def to_rgb(color: str) -> Optional[RGB]:
    key = (color or "").strip().lower()
    key = NAMED_COLORS.get(key, key)
    m = _HEX_RE.match(key)
    if not m:
        return None
    return int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16)


def brightness(color: str) -> float:
    """Perceived brightness in ``[0, 255]`` (ITU-R BT.601 weights)."""
    rgb = to_rgb(color)
    if rgb is None:
        return NEUTRAL_BRIGHTNESS
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 114) / 1000


def text_color_for(color: str) -> str:
    """Black on light backgrounds, white otherwise."""
    return "#000000" if brightness(color) > NEUTRAL_BRIGHTNESS else "#FFFFFF"
