"""Tests for record mapping, structural diff and local drill files."""

from pathlib import Path

import pytest

from conftest import draft
from drill_editor.drills.document import DrillDocument
from drill_editor.persistence.diff import frames_differ
from drill_editor.persistence.files import DRILL_FILE_SUFFIX, load_drill_file, save_drill_file
from drill_editor.persistence.mapper import (
    DrillRecord,
    DrillRecordError,
    build_save_payload,
    element_from_record,
    frames_to_records,
    record_to_frames,
)


class TestRecordMapping:
    """Test conversion to and from the persisted shape."""

    def test_positions_are_normalized(self) -> None:
        doc = DrillDocument()
        doc.add_element(0, draft("equipment", "cone", x=450, y=300, color="#f97316"))

        (record,) = frames_to_records(doc.frames)
        element = record["elements"][0]

        assert record["order_index"] == 1
        assert element["icon_path"] == "equipment/cone"
        assert (element["x"], element["y"]) == (0.5, 0.5)
        assert element["text"] is None

    def test_round_trip_restores_pixels(self) -> None:
        doc = DrillDocument()
        doc.add_element(0, draft("player", "team1", x=123.4, y=456.7, color="#ef4444"))

        (frame,) = record_to_frames(frames_to_records(doc.frames))
        element = frame.elements[0]

        assert element.x == pytest.approx(123.4)
        assert element.y == pytest.approx(456.7)
        assert element.text == "1"
        assert element.color == "#ef4444"

    def test_frames_sorted_by_order_index(self) -> None:
        raw = [
            {"order_index": 2, "elements": [{"icon_path": "text/note", "x": 0.1, "y": 0.1}]},
            {"order_index": 1, "elements": []},
        ]
        frames = record_to_frames(raw)
        assert [len(f.elements) for f in frames] == [0, 1]
        assert [f.name for f in frames] == ["Frame 1", "Frame 2"]

    def test_zero_scale_means_default(self) -> None:
        element = element_from_record(
            {"icon_path": "player/coach", "x": 0, "y": 0, "scale": 0, "text": "C"}, "el-1"
        )
        assert element.size == 1.0

    def test_malformed_elements_rejected(self) -> None:
        with pytest.raises(DrillRecordError):
            element_from_record({"icon_path": "ball", "x": 0, "y": 0}, "el-1")
        with pytest.raises(DrillRecordError):
            element_from_record({"icon_path": "player/cone", "x": 0, "y": 0}, "el-1")
        with pytest.raises(DrillRecordError):
            element_from_record({"icon_path": "player/team1"}, "el-1")

    def test_empty_frames_give_one_frame(self) -> None:
        frames = record_to_frames([])
        assert len(frames) == 1
        assert frames[0].elements == []

    def test_payload_omits_animation_when_absent(self) -> None:
        frames = DrillDocument().frames
        payload = build_save_payload(frames, "Rondo", thumbnail_base64="abc")
        assert payload["thumbnailBase64"] == "abc"
        assert "animation_gif" not in payload
        assert "description" not in payload

        with_gif = build_save_payload(frames, "Rondo", "4v2", "abc", "R0lG")
        assert with_gif["animation_gif"] == "R0lG"
        assert with_gif["description"] == "4v2"


class TestDrillRecord:
    """Test parsing of stored drills."""

    def test_wrapped_response(self) -> None:
        record = DrillRecord.from_dict(
            {
                "data": {
                    "id": 42,
                    "title": "Passing",
                    "frames": [{"order_index": 1, "elements": []}],
                    "animationVideoStatus": "pending",
                }
            }
        )
        assert record.id == "42"
        assert record.title == "Passing"
        assert record.animation_video_status == "pending"

    def test_unknown_status_dropped(self) -> None:
        record = DrillRecord.from_dict({"frames": [], "animationVideoStatus": "weird"})
        assert record.animation_video_status is None
        assert record.title == "Untitled Drill"

    def test_not_a_record(self) -> None:
        with pytest.raises(DrillRecordError):
            DrillRecord.from_dict({"message": "nothing here"})


class TestFramesDiffer:
    """Test structural change detection."""

    def test_never_saved_counts_as_changed(self) -> None:
        assert frames_differ(None, DrillDocument().frames)

    def test_small_drift_is_ignored(self) -> None:
        doc = DrillDocument()
        element = doc.add_element(0, draft("player", "team1", x=100, y=100))
        original = doc.snapshot()

        doc.set_element_position(element.id, 100.05, 99.95)
        assert not frames_differ(original, doc.frames)

        doc.set_element_position(element.id, 101, 100)
        assert frames_differ(original, doc.frames)

    def test_added_frame_is_a_change(self) -> None:
        doc = DrillDocument()
        original = doc.snapshot()
        doc.add_frame()
        assert frames_differ(original, doc.frames)

    def test_color_change_is_a_change(self) -> None:
        doc = DrillDocument()
        element = doc.add_element(0, draft("text", "text", color="#000000"))
        original = doc.snapshot()
        doc.update_element(element.id, color="#ffffff")
        assert frames_differ(original, doc.frames)


class TestDrillFiles:
    """Test local drill files."""

    def test_save_and_load_keeps_identity(self, tmp_path: Path) -> None:
        doc = DrillDocument(title="Finishing")
        cone = doc.add_element(0, draft("equipment", "cone", x=300, y=200))
        doc.duplicate_frame()
        doc.rename_frame(1, "Shot")

        path = save_drill_file(tmp_path / "finishing", doc.frames, doc.title, "Near post")
        assert path.name == f"finishing{DRILL_FILE_SUFFIX}"

        record = load_drill_file(path)
        assert record.title == "Finishing"
        assert record.description == "Near post"
        assert [f.name for f in record.frames] == ["Frame 1", "Shot"]
        assert [f.element_ids() for f in record.frames] == [[cone.id], [cone.id]]
        assert not frames_differ(doc.frames, record.frames)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / f"broken{DRILL_FILE_SUFFIX}"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DrillRecordError):
            load_drill_file(path)
