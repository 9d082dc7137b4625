"""Tests for keyframe tweening."""

import pytest

from conftest import draft
from drill_editor.drills.document import DrillDocument
from drill_editor.export.interpolation import (
    STEPS,
    build_sample_sequence,
    interpolate_elements,
)


def _two_keyframes() -> tuple[DrillDocument, str]:
    doc = DrillDocument()
    cone = doc.add_element(0, draft("equipment", "cone", x=200, y=100))
    doc.duplicate_frame()
    doc.set_element_position(cone.id, 400, 100)
    return doc, cone.id


class TestInterpolation:
    """Test in-between sample computation."""

    def test_sample_nine_of_ten(self) -> None:
        doc, cone_id = _two_keyframes()
        samples = build_sample_sequence(doc.frames, delay_ms=800, steps=STEPS)

        # samples[0] holds frame A, samples[1..9] are s = 1..9
        ninth = {el.id: el for el in samples[9].elements}[cone_id]
        assert ninth.x == pytest.approx(380.0)
        assert ninth.y == pytest.approx(100.0)

    def test_unmodified_duplicate_does_not_move(self) -> None:
        doc = DrillDocument()
        doc.add_element(0, draft("player", "team1", x=120, y=80, rotation=30))
        doc.add_element(0, draft("movement", "arrow", x=300, y=240, size=1.5))
        doc.duplicate_frame()

        originals = doc.frames[0].by_id()
        for sample in build_sample_sequence(doc.frames, delay_ms=800):
            for element in sample.elements:
                source = originals[element.id]
                assert (element.x, element.y) == (source.x, source.y)
                assert element.rotation == source.rotation
                assert element.size == source.size

    def test_sample_count_and_durations(self) -> None:
        doc, _ = _two_keyframes()
        doc.add_frame()

        samples = build_sample_sequence(doc.frames, delay_ms=800, steps=10)

        assert len(samples) == 3 + 2 * 9
        assert samples[0].duration_ms == 800
        assert samples[1].duration_ms == 80
        assert samples[10].duration_ms == 800
        assert samples[-1].duration_ms == 800

    def test_unmatched_elements_hold_still(self) -> None:
        doc = DrillDocument()
        stays = doc.add_element(0, draft("player", "team1", x=50, y=60))
        doc.add_frame()
        doc.add_element(1, draft("player", "team2", x=500, y=500))

        tweened = interpolate_elements(doc.frames[0], doc.frames[1], 0.5)

        assert [el.id for el in tweened] == [stays.id]
        assert (tweened[0].x, tweened[0].y) == (50, 60)

    def test_rotation_and_size_are_interpolated(self) -> None:
        doc = DrillDocument()
        arrow = doc.add_element(0, draft("movement", "arrow", rotation=0.0, size=1.0))
        doc.duplicate_frame()
        doc.update_element(arrow.id, rotation=90.0, size=2.0)

        (half,) = interpolate_elements(doc.frames[0], doc.frames[1], 0.5)
        assert half.rotation == pytest.approx(45.0)
        assert half.size == pytest.approx(1.5)

    def test_single_frame_is_one_sample(self) -> None:
        samples = build_sample_sequence(DrillDocument().frames, delay_ms=400)
        assert len(samples) == 1
        assert samples[0].duration_ms == 400

    def test_empty_frame_list_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_sample_sequence([], delay_ms=400)
