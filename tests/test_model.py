# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from matrix_canvas.core.errors import (
    IndexOutOfRangeError,
    MalformedNameError,
    ReservedNameError,
    UnknownMatrixError,
)
from matrix_canvas.core.model import (
    Arrow,
    CellRef,
    ColoredCell,
    SceneModel,
    default_scene,
    validate_matrix_name,
)

from conftest import make_matrix


def test_default_scene_contents(scene):
    assert list(scene.matrices) == ["A", "B"]
    assert scene.matrices["A"].values == ((1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert scene.matrices["B"].position == (5.0, 0.0)
    assert scene.arrows == (Arrow(CellRef("A", 0, 0), CellRef("B", 0, 0), "red", "-|>", 2.0, "example"),)
    assert scene.colored_cells == (ColoredCell("A", 1, 1, "lightblue"),)
    assert scene.theme == "light"
    assert scene.selected_matrix is None and scene.hovered_cell is None


def test_put_matrix_inserts_and_overwrites(scene):
    s2 = scene.put_matrix("C", make_matrix(1, 2))
    assert "C" in s2.matrices and "C" not in scene.matrices
    s3 = s2.put_matrix("A", make_matrix(1, 1))
    assert s3.matrices["A"].rows == 1
    assert s3.arrows == scene.arrows


@pytest.mark.parametrize("name", ["+", "-", "*", "^", "Det", "Tr", "="])
def test_put_matrix_rejects_reserved_names(scene, name):
    with pytest.raises(ReservedNameError):
        scene.put_matrix(name, make_matrix(1, 1))


def test_shrinking_keeps_stale_references(scene):
    s2 = scene.put_matrix("A", make_matrix(1, 1))
    assert s2.colored_cells == scene.colored_cells
    assert s2.resolve(CellRef("A", 1, 1)) is None
    assert s2.resolve(CellRef("A", 0, 0)) is s2.matrices["A"]


def test_rename_rewrites_every_reference(linked_scene):
    s2 = linked_scene.rename_matrix("A", "A2")
    assert "A" not in s2.matrices and "A2" in s2.matrices
    assert len(s2.arrows) == len(linked_scene.arrows)
    assert len(s2.colored_cells) == len(linked_scene.colored_cells)
    for old, new in zip(linked_scene.arrows, s2.arrows):
        for a, b in ((old.source, new.source), (old.target, new.target)):
            assert b.matrix == ("A2" if a.matrix == "A" else a.matrix)
            assert (a.row, a.col) == (b.row, b.col)
        assert old.color == new.color
    assert s2.colored_cells[0] == ColoredCell("A2", 1, 1, "lightblue")
    assert s2.colored_cells[1] == linked_scene.colored_cells[1]


def test_rename_moves_selection_and_hover(linked_scene):
    s = linked_scene.set_selection("matrix", "A").set_hover(CellRef("A", 0, 1))
    s2 = s.rename_matrix("A", "Z")
    assert s2.selected_matrix == "Z"
    assert s2.hovered_cell == CellRef("Z", 0, 1)


def test_rename_errors(linked_scene):
    with pytest.raises(UnknownMatrixError):
        linked_scene.rename_matrix("nope", "X")
    with pytest.raises(ReservedNameError):
        linked_scene.rename_matrix("A", "Det")


@pytest.mark.parametrize("name,error", [
    ("Tr", ReservedNameError),
    ("my matrix", MalformedNameError),
    ("A-1", MalformedNameError),
    ("x.y", MalformedNameError),
])
def test_validate_matrix_name_rejects(name, error):
    with pytest.raises(error):
        validate_matrix_name(name)


def test_validate_matrix_name_accepts():
    assert validate_matrix_name("M_2b") == "M_2b"


def test_delete_cascades_only_to_references(linked_scene):
    s2 = linked_scene.delete_matrix("A")
    assert list(s2.matrices) == ["B", "C", "D"]
    assert s2.arrows == (linked_scene.arrows[2],)
    assert s2.colored_cells == (linked_scene.colored_cells[1],)


def test_delete_absent_matrix_is_noop(linked_scene):
    assert linked_scene.delete_matrix("missing") is linked_scene


def test_colored_cell_is_unique_per_cell():
    s = SceneModel(matrices={"M": make_matrix(3, 3)})
    s = s.put_colored_cell(ColoredCell("M", 1, 1, "blue"))
    s = s.put_colored_cell(ColoredCell("M", 0, 0, "red"))
    s = s.put_colored_cell(ColoredCell("M", 1, 1, "green"))
    matches = [c for c in s.colored_cells if (c.matrix, c.row, c.col) == ("M", 1, 1)]
    assert matches == [ColoredCell("M", 1, 1, "green")]
    assert s.colored_cells[-1].color == "green"


def test_clear_colored_cell(scene):
    assert scene.clear_colored_cell("A", 1, 1).colored_cells == ()
    assert scene.clear_colored_cell("A", 0, 0) is scene


def test_arrow_index_operations(linked_scene):
    new = Arrow(CellRef("D", 1, 1), CellRef("C", 1, 1))
    s2 = linked_scene.update_arrow(1, new)
    assert s2.arrows[1] == new and s2.arrows[0] == linked_scene.arrows[0]
    s3 = s2.delete_arrow(0)
    assert s3.arrows == (new, linked_scene.arrows[2])
    with pytest.raises(IndexOutOfRangeError):
        linked_scene.update_arrow(3, new)
    with pytest.raises(IndexOutOfRangeError):
        linked_scene.delete_arrow(-1)


def test_colored_cell_index_operations(linked_scene):
    s2 = linked_scene.update_colored_cell(0, ColoredCell("B", 0, 0, "pink"))
    assert s2.colored_cells[0].matrix == "B"
    assert s2.delete_colored_cell(1).colored_cells == (s2.colored_cells[0],)
    with pytest.raises(IndexOutOfRangeError):
        linked_scene.delete_colored_cell(2)


def test_update_colored_cell_merges_onto_existing_cell(linked_scene):
    s2 = linked_scene.update_colored_cell(1, ColoredCell("A", 1, 1, "pink"))
    assert s2.colored_cells == (ColoredCell("A", 1, 1, "pink"),)
    s3 = linked_scene.update_colored_cell(0, ColoredCell("A", 1, 1, "yellow"))
    assert s3.colored_cells == (ColoredCell("A", 1, 1, "yellow"), linked_scene.colored_cells[1])


def test_mutations_leave_the_original_untouched(scene):
    before = (dict(scene.matrices), scene.arrows, scene.colored_cells)
    scene.put_matrix("X", make_matrix(2, 2)).delete_matrix("A").toggle_theme()
    assert (dict(scene.matrices), scene.arrows, scene.colored_cells) == before
    assert scene.theme == "light"


def test_selection_fields_are_independent(scene):
    s = scene.set_selection("matrix", "A").set_selection("arrow", 0).set_selection("colored_cell", 0)
    assert (s.selected_matrix, s.selected_arrow, s.selected_colored_cell) == ("A", 0, 0)
    with pytest.raises(ValueError):
        scene.set_selection("cell", 1)


def test_set_hover_returns_same_value_when_unchanged(scene):
    s = scene.set_hover(CellRef("A", 0, 0))
    assert s.set_hover(CellRef("A", 0, 0)) is s
    assert s.set_hover(None).hovered_cell is None


def test_require_cell(scene):
    assert scene.require_cell(CellRef("A", 2, 2)) is scene.matrices["A"]
    with pytest.raises(UnknownMatrixError):
        scene.require_cell(CellRef("Q", 0, 0))
    with pytest.raises(IndexOutOfRangeError, match="Rows: 0-2, cols: 0-2"):
        scene.require_cell(CellRef("A", 3, 0))


def test_reset_restores_defaults_and_keeps_theme(scene):
    s = scene.delete_matrix("A").toggle_theme().reset()
    assert s.theme == "dark"
    assert s.matrices == default_scene().matrices
    assert len(s.arrows) == 1 and len(s.colored_cells) == 1


def test_import_scene_keeps_theme_and_clears_cursor(scene):
    current = scene.toggle_theme().set_selection("matrix", "A").set_hover(CellRef("A", 0, 0))
    incoming = SceneModel(matrices={"Q": make_matrix(1, 1)}, theme="light", selected_arrow=3)
    s = current.import_scene(incoming)
    assert list(s.matrices) == ["Q"]
    assert s.theme == "dark"
    assert (s.selected_matrix, s.selected_arrow, s.selected_colored_cell, s.hovered_cell) == (None, None, None, None)


def test_cell_ref_str():
    assert str(CellRef("A", 0, 2)) == "A[0][2]"
