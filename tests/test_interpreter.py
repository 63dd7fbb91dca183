# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from matrix_canvas.core.errors import (
    IndexOutOfRangeError,
    InvalidNumberError,
    MalformedEndpointError,
    MalformedNameError,
    MalformedPositionError,
    MalformedSizeError,
    ReservedNameError,
    UnknownMatrixError,
    UnrecognizedCommandError,
)
from matrix_canvas.core.interpreter import CommandInterpreter, parse_cell, parse_number
from matrix_canvas.core.model import Arrow, CellRef, ColoredCell, SceneModel


@pytest.fixture
def interp():
    return CommandInterpreter()


@pytest.mark.parametrize("text,expected", [("5", 5), ("-3", -3), ("+7", 7), ("4.5", 4.5), ("-0.25", -0.25), (".5", 0.5), ("2.", 2.0)])
def test_parse_number(text, expected):
    value = parse_number(text)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize("text", ["", "abc", "1.2.3", "1e5", "--1", "5x"])
def test_parse_number_rejects(text):
    with pytest.raises(InvalidNumberError):
        parse_number(text)


def test_parse_cell():
    assert parse_cell(" Ab_1 [ 2 ][3] ") == CellRef("Ab_1", 2, 3)
    with pytest.raises(MalformedEndpointError):
        parse_cell("A[1]")


@pytest.mark.parametrize("line,rule", [
    ("A := [2, 2] @ (0, 0)", "definition"),
    ("A[0][0] -> B[1][1] : red", "arrow"),
    ("A[0][0] -> B[1][1]", "arrow"),
    ("A[0][0] : blue", "cell_color"),
    ("A[0][0] = 5", "cell_value"),
])
def test_classification_order(interp, line, rule):
    assert interp.classify(line).name == rule


def test_unclassified_line(interp):
    assert interp.classify("print A") is None
    with pytest.raises(UnrecognizedCommandError):
        interp.execute(SceneModel(), "print A")


@pytest.mark.parametrize("rows,cols", [(1, 1), (2, 3), (3, 2), (4, 4)])
def test_definition_fills_sequentially(interp, rows, cols):
    model, msg = interp.execute(SceneModel(), f"M := [{rows}, {cols}] @ (1.5, -2)")
    m = model.matrices["M"]
    assert (m.rows, m.cols, m.position) == (rows, cols, (1.5, -2.0))
    for i in range(rows):
        for j in range(cols):
            assert m.values[i][j] == i * cols + j + 1
    assert msg == f"Created matrix 'M' ({rows}x{cols})"


@pytest.mark.parametrize("line,exc", [
    ("Det := [2, 2] @ (0, 0)", ReservedNameError),
    ("+ := [2, 2] @ (0, 0)", ReservedNameError),
    ("A B := [2, 2] @ (0, 0)", MalformedNameError),
    ("A := [2] @ (0, 0)", MalformedSizeError),
    ("A := [0, 2] @ (0, 0)", MalformedSizeError),
    ("A := [2, 2] @ 0, 0", MalformedPositionError),
])
def test_definition_errors(interp, line, exc):
    with pytest.raises(exc):
        interp.execute(SceneModel(), line)


def test_arrow_defaults_and_color(interp, scene):
    model, _ = interp.execute(scene, "A[0][1] -> B[2][2]")
    assert model.arrows[-1] == Arrow(CellRef("A", 0, 1), CellRef("B", 2, 2), "red", "-|>", 2.0)
    model, msg = interp.execute(model, "B[1][1]->A[0][0]:green")
    assert model.arrows[-1].color == "green"
    assert msg == "Added arrow B[1][1] -> A[0][0]"


@pytest.mark.parametrize("line,exc", [
    ("A[0][0] -> Q[0][0]", UnknownMatrixError),
    ("Q[0][0] -> A[0][0]", UnknownMatrixError),
    ("A[0][3] -> B[0][0]", IndexOutOfRangeError),
    ("A[0][0] -> B[3][0]", IndexOutOfRangeError),
    ("A[0] -> B[0][0]", MalformedEndpointError),
])
def test_arrow_errors(interp, scene, line, exc):
    with pytest.raises(exc):
        interp.execute(scene, line)


def test_cell_color_replaces_and_removes(interp, scene):
    model, _ = interp.execute(scene, "A[1][1] : green")
    assert model.colored_cells == (ColoredCell("A", 1, 1, "green"),)
    model, msg = interp.execute(model, "A[1][1] : NONE")
    assert model.colored_cells == ()
    assert msg == "Removed colour of A[1][1]"
    # removing an absent tint is not an error
    model, _ = interp.execute(model, "A[0][0] : none")
    assert model.colored_cells == ()


def test_cell_color_errors(interp, scene):
    with pytest.raises(IndexOutOfRangeError):
        interp.execute(scene, "A[5][5] : red")
    with pytest.raises(UnknownMatrixError):
        interp.execute(scene, "Q[0][0] : red")
    with pytest.raises(UnrecognizedCommandError):
        interp.execute(scene, "A[0][0] :")


def test_cell_value(interp, scene):
    model, msg = interp.execute(scene, "A[0][0] = 4.5")
    assert model.matrices["A"].values[0][0] == 4.5
    assert msg == "Set A[0][0] to 4.5"
    model, _ = interp.execute(model, "A[2][1] = -7")
    assert model.matrices["A"].values[2][1] == -7
    assert model.matrices["A"].values[1] == (4, 5, 6)
    with pytest.raises(InvalidNumberError):
        interp.execute(scene, "A[0][0] = x")
    with pytest.raises(IndexOutOfRangeError):
        interp.execute(scene, "A[3][0] = 1")


def test_batch_continues_past_failures(interp, scene):
    text = "C := [2, 2] @ (0, 4)\nC[0][0] -> Q[0][0]\nC[1][1] = 9"
    result = interp.run_batch(scene, text)
    assert (result.successes, result.failures) == (2, 1)
    assert [r.ok for r in result.results] == [True, False, True]
    assert result.results[1].line_no == 2
    assert result.model.matrices["C"].values == ((1, 2), (3, 9))
    assert len(result.model.arrows) == 1
    assert "C" not in scene.matrices


def test_batch_transcript(interp):
    text = "A := [1, 1] @ (0, 0)\n\n# comment\nnonsense"
    interp.run_batch(SceneModel(), text)
    assert interp.history == [
        f"> {text}",
        "==== Running 4 line(s) ====",
        "  OK: Created matrix 'A' (1x1)",
        interp.history[3],
        "==== Done: 1 succeeded, 1 failed ====",
    ]
    assert interp.history[3].startswith("  Error: Unrecognized command.")


def test_skipped_lines_are_not_counted(interp):
    result = interp.run_batch(SceneModel(), "   \n# A := [1, 1] @ (0, 0)\n")
    assert result.results == []
    assert not result.changed


def test_history_is_append_only_until_cleared(interp):
    interp.run_batch(SceneModel(), "x")
    first = list(interp.history)
    interp.run_batch(SceneModel(), "y")
    assert interp.history[: len(first)] == first
    interp.clear_history()
    assert interp.history == []


def test_end_to_end_example(interp):
    result = interp.run_batch(SceneModel(), "A := [2,2] @ (0,0)\nB := [2,2] @ (3,0)\nA[0][0] -> B[0][0] : green")
    model = result.model
    assert result.failures == 0
    assert model.matrices["A"].values == ((1, 2), (3, 4))
    assert model.matrices["B"].values == ((1, 2), (3, 4))
    assert model.arrows == (Arrow(CellRef("A", 0, 0), CellRef("B", 0, 0), "green", "-|>", 2.0),)
