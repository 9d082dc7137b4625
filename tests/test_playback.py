"""Tests for timed frame playback."""

from drill_editor.drills.document import DrillDocument
from drill_editor.drills.playback import FramePlayer


class TestFramePlayer:
    """Test advancing, wrapping and stopping."""

    def test_advances_and_stops_on_wrap(self) -> None:
        doc = DrillDocument()
        doc.add_frame()
        doc.add_frame()
        doc.set_current_frame(0)
        player = FramePlayer(doc, interval_ms=500)
        shown: list[int] = []
        states: list[bool] = []
        player.frame_changed.connect(shown.append)
        player.playing_changed.connect(states.append)

        player.start()
        player.advance()
        player.advance()
        assert player.is_playing
        player.advance()

        assert shown == [1, 2, 0]
        assert doc.current_index == 0
        assert not player.is_playing
        assert states == [True, False]

    def test_single_frame_stops_after_first_tick(self) -> None:
        player = FramePlayer(DrillDocument())
        player.start()
        player.advance()
        assert not player.is_playing

    def test_toggle(self) -> None:
        player = FramePlayer(DrillDocument())
        player.toggle()
        assert player.is_playing
        player.toggle()
        assert not player.is_playing

    def test_interval_change(self) -> None:
        player = FramePlayer(DrillDocument(), interval_ms=2000)
        player.set_interval(750)
        assert player.interval_ms == 750

    def test_playback_does_not_bump_revision(self) -> None:
        doc = DrillDocument()
        doc.add_frame()
        revision = doc.revision
        player = FramePlayer(doc)
        player.advance()
        player.advance()
        assert doc.revision == revision
