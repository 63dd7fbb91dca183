"""
Configuration & Constants
=========================
Central registry for the defaults shared by the core and the UI.

There is no external configuration file. Values that a user may want to change
at start-up (log level, log file) are read from the command line or the
``MATRIX_CANVAS_LOG`` environment variable by :mod:`matrix_canvas.app`.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

# Viewport
DEFAULT_SCALE: float = 40.0          # pixels per scene unit
MIN_SCALE: float = 10.0
MAX_SCALE: float = 100.0
ZOOM_FACTOR: float = 1.1
DEFAULT_OFFSET: tuple[float, float] = (50.0, 50.0)

# Arrows
DEFAULT_ARROW_COLOR: str = "red"
DEFAULT_ARROW_STYLE: str = "-|>"
DEFAULT_ARROW_WIDTH: float = 2.0
ARROW_STYLES: tuple[tuple[str, str], ...] = (
    ("-|>", "Arrow"),
    ("->>", "Thin arrow"),
    ("-[", "Square end"),
    ("-|", "Bar end"),
    ("<->", "Two-way arrow"),
    ("<-|>", "Two-way arrow (bold)"),
)

# Matrices
RESERVED_NAMES: frozenset[str] = frozenset({"+", "-", "*", "^", "Det", "Tr", "="})
RANDOM_RANGE: tuple[int, int] = (-10, 10)

# Colored cells
DEFAULT_CELL_COLOR: str = "lightblue"
NO_COLOR: str = "none"

# Files
FILE_FILTER: str = "Matrix JSON (*.json);;All Files (*)"
DEFAULT_FILE_NAME: str = "matrix_data.json"

LOG_ENV_VAR: str = "MATRIX_CANVAS_LOG"


def log_level_from_env(default: int = logging.INFO) -> int:
    """Resolve a log level name from ``MATRIX_CANVAS_LOG``; unknown names keep ``default``."""
    name: Optional[str] = os.environ.get(LOG_ENV_VAR)
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
