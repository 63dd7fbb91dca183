# -*- coding: utf-8 -*-
"""Line-oriented command language for editing the scene.

Four command forms are recognised::

    A := [3, 3] @ (0, 0)         define a sequential matrix
    A[0][0] -> B[1][1] : green   add an arrow (colour optional, default red)
    A[1][1] : lightblue          tint a cell ("none" removes the tint)
    A[0][2] = 4.5                set a cell value

The forms overlap character-wise, so a line is classified by an ordered list of
substring tests and the first matching rule parses it. A batch runs every line
on its own: a failing line is reported and the next one still runs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from ..config import DEFAULT_ARROW_COLOR, DEFAULT_ARROW_STYLE, DEFAULT_ARROW_WIDTH, NO_COLOR
from .errors import (
    InvalidNumberError,
    MalformedEndpointError,
    MalformedPositionError,
    MalformedSizeError,
    SceneError,
    UnrecognizedCommandError,
)
from .matrix_factory import sequential_grid
from .model import MATRIX_NAME, Arrow, CellRef, ColoredCell, Matrix, Number, SceneModel, validate_matrix_name

logger = logging.getLogger(__name__)

_CELL_RE = re.compile(rf"({MATRIX_NAME})\s*\[\s*(\d+)\s*\]\s*\[\s*(\d+)\s*\]")
_SIZE_RE = re.compile(r"\[\s*(\d+)\s*,\s*(\d+)\s*\]")
_NUM = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_POS_RE = re.compile(rf"\(\s*({_NUM})\s*,\s*({_NUM})\s*\)")
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+)$")

USAGE = "Examples: A := [3, 3] @ (0, 0), A[0][0] -> B[1][1] : red, A[0][0] : blue, A[0][0] = 5"


def parse_number(text: str) -> Number:
    """Parse a plain decimal literal: float if it contains a dot, else int."""
    s = (text or "").strip()
    if "." in s:
        if _FLOAT_RE.match(s):
            return float(s)
    elif _INT_RE.match(s):
        return int(s)
    raise InvalidNumberError(f"'{s}' is not a valid number.")


def parse_cell(text: str, role: str = "Cell") -> CellRef:
    m = _CELL_RE.search(text)
    if not m:
        raise MalformedEndpointError(f"{role} has the wrong format. Example: A[0][0]")
    return CellRef(m.group(1), int(m.group(2)), int(m.group(3)))


# ---------- classifiers ----------
def _has_brackets(line: str) -> bool:
    return "[" in line and "]" in line


def is_definition(line: str) -> bool:
    return ":=" in line and "@" in line


def is_arrow(line: str) -> bool:
    return "->" in line and _has_brackets(line)


def is_cell_color(line: str) -> bool:
    return ":" in line and _has_brackets(line) and "->" not in line


def is_cell_value(line: str) -> bool:
    return "=" in line and _has_brackets(line) and "->" not in line


@dataclass(frozen=True)
class CommandRule:
    name: str
    matches: Callable[[str], bool]
    apply: Callable[[SceneModel, str], Tuple[SceneModel, str]]


# ---------- parsers ----------
def define_matrix(model: SceneModel, line: str) -> Tuple[SceneModel, str]:
    name_part, _, rest = line.partition(":=")
    name = name_part.strip()
    validate_matrix_name(name)

    size_part, _, pos_part = rest.partition("@")
    size = _SIZE_RE.search(size_part)
    if not size:
        raise MalformedSizeError("Matrix size has the wrong format. Example: [3, 3]")
    rows, cols = int(size.group(1)), int(size.group(2))

    pos = _POS_RE.search(pos_part)
    if not pos:
        raise MalformedPositionError("Position has the wrong format. Example: (0, 0)")
    x, y = float(pos.group(1)), float(pos.group(2))

    matrix = Matrix(rows, cols, sequential_grid(rows, cols), (x, y))
    return model.put_matrix(name, matrix), f"Created matrix '{name}' ({rows}x{cols})"


def add_arrow(model: SceneModel, line: str) -> Tuple[SceneModel, str]:
    src_part, _, rest = line.partition("->")
    tgt_part, _, color = rest.partition(":")
    color = color.strip() or DEFAULT_ARROW_COLOR

    source = parse_cell(src_part, "Source")
    target = parse_cell(tgt_part, "Target")
    model.require_cell(source, "Source")
    model.require_cell(target, "Target")

    arrow = Arrow(source, target, color, DEFAULT_ARROW_STYLE, DEFAULT_ARROW_WIDTH)
    return model.put_arrow(arrow), f"Added arrow {source} -> {target}"


def color_cell(model: SceneModel, line: str) -> Tuple[SceneModel, str]:
    cell_part, _, color = line.partition(":")
    color = color.strip()
    ref = parse_cell(cell_part)
    model.require_cell(ref)
    if not color:
        raise UnrecognizedCommandError(f"Missing colour after ':'. {USAGE}")

    if color.lower() == NO_COLOR:
        return model.clear_colored_cell(ref.matrix, ref.row, ref.col), f"Removed colour of {ref}"
    cell = ColoredCell(ref.matrix, ref.row, ref.col, color)
    return model.put_colored_cell(cell), f"Set colour of {ref} to '{color}'"


def set_cell_value(model: SceneModel, line: str) -> Tuple[SceneModel, str]:
    cell_part, _, value_part = line.partition("=")
    ref = parse_cell(cell_part)
    m = model.require_cell(ref)
    value = parse_number(value_part)
    return model.put_matrix(ref.matrix, m.with_value(ref.row, ref.col, value)), f"Set {ref} to {value}"


DEFAULT_RULES: Tuple[CommandRule, ...] = (
    CommandRule("definition", is_definition, define_matrix),
    CommandRule("arrow", is_arrow, add_arrow),
    CommandRule("cell_color", is_cell_color, color_cell),
    CommandRule("cell_value", is_cell_value, set_cell_value),
)


@dataclass(frozen=True)
class LineResult:
    line_no: int
    source: str
    ok: bool
    message: str


@dataclass
class BatchResult:
    model: SceneModel
    results: List[LineResult] = field(default_factory=list)

    @property
    def successes(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failures(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def changed(self) -> bool:
        return self.successes > 0


def is_skipped(line: str) -> bool:
    return not line or line.startswith("#")


class CommandInterpreter:
    """Runs command lines against a scene and keeps the console transcript.

    The transcript (:attr:`history`) only grows; it is emptied by
    :meth:`clear_history` and nothing else.
    """

    def __init__(self, rules: Tuple[CommandRule, ...] = DEFAULT_RULES):
        self.rules = rules
        self.history: List[str] = []

    def classify(self, line: str) -> Optional[CommandRule]:
        for rule in self.rules:
            if rule.matches(line):
                return rule
        return None

    def execute(self, model: SceneModel, line: str) -> Tuple[SceneModel, str]:
        """Apply one trimmed command line. Raises :class:`SceneError` on failure."""
        rule = self.classify(line)
        if rule is None:
            raise UnrecognizedCommandError(f"Unrecognized command. {USAGE}")
        return rule.apply(model, line)

    def run_batch(self, model: SceneModel, text: str) -> BatchResult:
        lines = (text or "").split("\n")
        result = BatchResult(model=model)
        self.history.append(f"> {text}")
        self.history.append(f"==== Running {len(lines)} line(s) ====")
        for no, raw in enumerate(lines, start=1):
            line = raw.strip()
            if is_skipped(line):
                continue
            try:
                result.model, message = self.execute(result.model, line)
            except SceneError as exc:
                logger.warning("line %d failed: %s (%s)", no, line, exc)
                result.results.append(LineResult(no, line, False, str(exc)))
                self.history.append(f"  Error: {exc}")
                continue
            result.results.append(LineResult(no, line, True, message))
            self.history.append(f"  OK: {message}")
        self.history.append(f"==== Done: {result.successes} succeeded, {result.failures} failed ====")
        logger.info("command batch: %d succeeded, %d failed", result.successes, result.failures)
        return result

    def clear_history(self) -> None:
        self.history.clear()
