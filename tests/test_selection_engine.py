"""Tests for pointer and keyboard interaction."""

import pytest
from PySide6.QtCore import Qt

from conftest import draft
from drill_editor.drills.document import DrillDocument
from drill_editor.interaction.engine import DragMode, SelectionEngine
from drill_editor.interaction.geometry import element_bounds, hit_test

SHIFT = Qt.KeyboardModifier.ShiftModifier
CTRL = Qt.KeyboardModifier.ControlModifier


@pytest.fixture
def doc() -> DrillDocument:
    return DrillDocument()


class TestClickSelection:
    """Test click, shift-click and ctrl-click selection."""

    def test_click_replaces_selection(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("player", "team1", x=100, y=100))
        b = doc.add_element(0, draft("player", "team2", x=300, y=100))

        engine.press(100, 100)
        engine.release(100, 100)
        engine.press(300, 100)
        engine.release(300, 100)

        assert doc.selection.ids == [b.id]
        assert a.id not in doc.selection

    def test_shift_adds_and_ctrl_toggles(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("player", "team1", x=100, y=100))
        b = doc.add_element(0, draft("player", "team2", x=300, y=100))

        engine.press(100, 100)
        engine.release(100, 100)
        engine.press(300, 100, SHIFT)
        engine.release(300, 100)
        assert doc.selection.ids == [a.id, b.id]

        engine.press(100, 100, CTRL)
        engine.release(100, 100)
        assert doc.selection.ids == [b.id]

    def test_click_on_empty_canvas_clears(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("player", "team1", x=100, y=100))
        doc.selection.add(a.id)

        engine.press(700, 500)
        engine.release(700, 500)
        assert not doc.selection

    def test_hit_test_prefers_topmost(self, doc: DrillDocument) -> None:
        doc.add_element(0, draft("equipment", "circle", x=100, y=100))
        top = doc.add_element(0, draft("player", "team1", x=104, y=100))
        assert hit_test(doc.current_frame, 102, 100) is top


class TestMarquee:
    """Test rubber-band selection by anchor point."""

    def test_marquee_uses_anchor_points(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        inside = doc.add_element(0, draft("player", "team1", x=50, y=50))
        doc.add_element(0, draft("player", "team2", x=500, y=500))
        # Long arrow anchored at (600, 600) pointing back towards the origin
        overlapping = doc.add_element(
            0, draft("movement", "arrow", x=600, y=600, size=19.0, rotation=225.0)
        )
        assert element_bounds(overlapping).left < 100
        assert element_bounds(overlapping).top < 100

        engine.press(0, 0)
        assert engine.mode is DragMode.MARQUEE
        engine.move(100, 100)
        engine.release(100, 100)

        assert doc.selection.ids == [inside.id]

    def test_shift_marquee_is_additive(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        kept = doc.add_element(0, draft("player", "team1", x=500, y=500))
        added = doc.add_element(0, draft("player", "team2", x=50, y=50))
        doc.selection.add(kept.id)

        engine.press(0, 0, SHIFT)
        engine.move(100, 100)
        engine.release(100, 100)

        assert doc.selection.ids == [kept.id, added.id]


class TestDragging:
    """Test moving single elements and groups."""

    def test_single_drag_follows_pointer(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=100, y=100))

        engine.press(102, 98)
        engine.move(112, 118)
        engine.release(112, 118)

        moved = doc.current_frame.find(player.id)
        assert (moved.x, moved.y) == (110, 120)  # type: ignore[union-attr]

    def test_single_drag_clamps_at_zero(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=20, y=20))

        engine.press(20, 20)
        engine.move(-100, 10)

        moved = doc.current_frame.find(player.id)
        assert (moved.x, moved.y) == (0.0, 10)  # type: ignore[union-attr]

    def test_group_drag_preserves_offsets(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("player", "team1", x=100, y=100))
        b = doc.add_element(0, draft("player", "team1", x=200, y=150))
        doc.selection.replace([a.id, b.id])

        engine.press(100, 100)
        engine.move(105, 100)  # establishes the anchor only
        engine.move(115, 105)
        engine.move(125, 110)
        engine.release(125, 110)

        frame = doc.current_frame
        assert (frame.find(a.id).x, frame.find(a.id).y) == (120, 110)  # type: ignore[union-attr]
        assert (frame.find(b.id).x, frame.find(b.id).y) == (220, 160)  # type: ignore[union-attr]


class TestTransformHandle:
    """Test the resize/rotate handle."""

    def test_handle_on_players_can_resize(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=100, y=100))

        engine.double_click(100, 100)

        assert engine.handle is not None
        assert engine.handle.element_ids == [player.id]
        assert engine.handle.can_resize
        assert engine.scale_knob() is not None

    def test_rotate_only_batch_cannot_resize(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("equipment", "cone", x=100, y=100))
        b = doc.add_element(0, draft("equipment", "circle", x=200, y=100))
        doc.selection.replace([a.id, b.id])

        engine.double_click(100, 100)
        assert engine.handle is not None
        assert not engine.handle.can_resize
        assert engine.scale_knob() is None

        engine.commit_transform(2.0, 90.0)
        frame = doc.current_frame
        assert [frame.find(i).size for i in (a.id, b.id)] == [1.0, 1.0]  # type: ignore[union-attr]
        assert [frame.find(i).rotation for i in (a.id, b.id)] == [90.0, 90.0]  # type: ignore[union-attr]

    def test_mixed_batch_resizes(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        cone = doc.add_element(0, draft("equipment", "cone", x=100, y=100))
        player = doc.add_element(0, draft("player", "team1", x=200, y=100))
        doc.selection.replace([cone.id, player.id])

        engine.double_click(200, 100)
        engine.commit_transform(2.0, 0.0)

        frame = doc.current_frame
        assert frame.find(cone.id).size == 2.0  # type: ignore[union-attr]
        assert frame.find(player.id).size == 2.0  # type: ignore[union-attr]

    def test_rotate_knob_drag_commits_on_release(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=300, y=300))
        engine.double_click(300, 300)

        knob = engine.rotate_knob()
        assert knob is not None
        engine.press(*knob)
        assert engine.mode is DragMode.ROTATE
        # Pointer to the right of the center means 90 degrees
        engine.move(400, 300)
        assert engine.preview(doc.current_frame.find(player.id)).rotation == 90.0  # type: ignore[arg-type]
        engine.release(400, 300)

        assert doc.current_frame.find(player.id).rotation == 90.0  # type: ignore[union-attr]

    def test_scale_knob_drag_keeps_each_rotation(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        a = doc.add_element(0, draft("player", "team1", x=200, y=300))
        b = doc.add_element(0, draft("player", "team2", x=400, y=300, rotation=45.0))
        doc.selection.replace([a.id, b.id])
        engine.double_click(200, 300)

        bounds = engine.handle_bounds()
        knob = engine.scale_knob()
        assert bounds is not None and knob is not None
        cx, cy = bounds.center
        engine.press(*knob)
        assert engine.mode is DragMode.SCALE
        far = (cx + 2 * (knob[0] - cx), cy + 2 * (knob[1] - cy))
        engine.move(*far)
        engine.release(*far)

        frame = doc.current_frame
        assert frame.find(a.id).rotation == 0.0  # type: ignore[union-attr]
        assert frame.find(b.id).rotation == 45.0  # type: ignore[union-attr]
        assert frame.find(a.id).size == pytest.approx(2.0)  # type: ignore[union-attr]
        assert frame.find(b.id).size == pytest.approx(2.0)  # type: ignore[union-attr]

    def test_handle_detached_on_frame_switch(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        doc.add_element(0, draft("player", "team1", x=100, y=100))
        engine.double_click(100, 100)
        doc.add_frame()
        assert engine.handle is None

    def test_released_engine_ignores_document_changes(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        doc.add_element(0, draft("player", "team1", x=100, y=100))
        engine.double_click(100, 100)

        engine.release_document()
        assert engine.handle is None

        replacement = SelectionEngine(doc)
        replacement.double_click(100, 100)
        engine.double_click(100, 100)
        doc.add_frame()
        assert replacement.handle is None
        assert engine.handle is not None

    def test_text_is_edited_not_transformed(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        note = doc.add_element(0, draft("text", "note", x=100, y=100, text="Note"))

        engine.double_click(105, 105)
        assert engine.handle is None
        assert engine.editing_text_id == note.id

        engine.commit_text("Sprint!")
        assert doc.current_frame.find(note.id).text == "Sprint!"  # type: ignore[union-attr]
        assert engine.editing_text_id is None


class TestKeyboard:
    """Test nudging, deleting and escaping."""

    def test_arrow_keys_nudge(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=100, y=100))
        doc.selection.add(player.id)

        assert engine.key_press(Qt.Key.Key_Right)
        assert engine.key_press(Qt.Key.Key_Down, SHIFT)

        moved = doc.current_frame.find(player.id)
        assert (moved.x, moved.y) == (101, 110)  # type: ignore[union-attr]

    def test_delete_removes_selection(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=100, y=100))
        doc.selection.add(player.id)

        assert engine.key_press(Qt.Key.Key_Delete)
        assert doc.current_frame.elements == []

    def test_keys_ignored_without_selection(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        assert not engine.key_press(Qt.Key.Key_Left)
        assert not engine.key_press(Qt.Key.Key_Backspace)

    def test_escape_clears_selection(self, doc: DrillDocument) -> None:
        engine = SelectionEngine(doc)
        player = doc.add_element(0, draft("player", "team1", x=100, y=100))
        doc.selection.add(player.id)
        assert engine.key_press(Qt.Key.Key_Escape)
        assert not doc.selection
