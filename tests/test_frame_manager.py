"""Tests for frame list operations."""

import pytest

from conftest import draft
from drill_editor.drills.document import DrillDocument


class TestFrameOperations:
    """Test add, duplicate, remove and navigation."""

    def test_new_document_has_one_frame(self) -> None:
        doc = DrillDocument()
        assert len(doc.frames) == 1
        assert doc.current_frame.name == "Frame 1"

    def test_add_frame_becomes_current(self) -> None:
        doc = DrillDocument()
        frame = doc.add_frame()
        assert doc.current_index == 1
        assert frame.name == "Frame 2"
        assert frame.elements == []

    def test_duplicate_preserves_element_identity(self) -> None:
        doc = DrillDocument()
        cone = doc.add_element(0, draft("equipment", "cone", x=200, y=100))

        copy = doc.duplicate_frame()
        doc.set_element_position(cone.id, 400, 100)

        assert copy.name == "Frame 1 Copy"
        assert copy.id != doc.frames[0].id
        assert copy.element_ids() == [cone.id]
        assert doc.frames[0].find(cone.id).x == 200  # type: ignore[union-attr]
        assert copy.find(cone.id).x == 400  # type: ignore[union-attr]

    def test_duplicate_carries_counters(self) -> None:
        doc = DrillDocument()
        doc.add_element(0, draft("player", "team1"))
        doc.add_element(0, draft("player", "team1"))
        doc.duplicate_frame()
        added = doc.add_element(doc.current_index, draft("player", "team1"))
        assert added.text == "3"

    def test_last_frame_cannot_be_removed(self) -> None:
        doc = DrillDocument()
        assert doc.remove_frame(0) is False
        assert len(doc.frames) == 1

    def test_remove_frame_keeps_current_valid(self) -> None:
        doc = DrillDocument()
        doc.add_frame()
        doc.add_frame()
        assert doc.current_index == 2

        assert doc.remove_frame(2) is True
        assert doc.current_index == 1

        doc.remove_frame(0)
        assert doc.current_index == 0
        assert len(doc.frames) == 1

    def test_remove_frame_out_of_range(self) -> None:
        doc = DrillDocument()
        doc.add_frame()
        with pytest.raises(IndexError):
            doc.remove_frame(5)

    def test_navigation_is_clamped(self) -> None:
        doc = DrillDocument()
        doc.add_frame()
        doc.next_frame()
        assert doc.current_index == 1
        doc.set_current_frame(0)
        doc.previous_frame()
        assert doc.current_index == 0

    def test_switching_frames_clears_selection(self) -> None:
        doc = DrillDocument()
        element = doc.add_element(0, draft("text", "text"))
        doc.add_frame()
        doc.set_current_frame(0)
        doc.selection.add(element.id)

        doc.set_current_frame(1)
        assert not doc.selection

    def test_rename_does_not_bump_revision(self) -> None:
        doc = DrillDocument()
        revision = doc.revision
        doc.rename_frame(0, "Setup")
        assert doc.frames[0].name == "Setup"
        assert doc.revision == revision
