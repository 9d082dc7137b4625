"""Tests for the load/save workflow."""

import threading
from pathlib import Path

import pytest

from conftest import CountingEncoder, FakeBackend, FakePoller, draft
from drill_editor.backend.client import BackendError
from drill_editor.export.service import AnimationExportService
from drill_editor.persistence.mapper import frames_to_records
from drill_editor.session import DownloadError, DrillEditorSession, SaveError, SessionState


@pytest.fixture
def encoder() -> CountingEncoder:
    return CountingEncoder()


@pytest.fixture
def exporter(app_settings, encoder):
    service = AnimationExportService(app_settings.editor, encoder=encoder)
    yield service
    service.shutdown(wait=True)


class TestLoading:
    """Test loading drills from the backend and files."""

    def test_load_stored_drill(self, exporter) -> None:
        backend = FakeBackend(
            {
                "7": {
                    "id": 7,
                    "title": "Rondo",
                    "frames": [
                        {
                            "order_index": 1,
                            "elements": [
                                {"icon_path": "player/team1", "x": 0.5, "y": 0.5, "text": "3"}
                            ],
                        }
                    ],
                }
            }
        )
        session = DrillEditorSession(exporter, backend)

        document = session.load("7")

        assert document is not None
        assert session.state is SessionState.READY
        assert document.title == "Rondo"
        assert document.frames[0].elements[0].x == pytest.approx(450)
        assert not session.has_unsaved_changes
        assert document.add_element(0, draft("player", "team1")).text == "4"

    def test_load_failure(self, exporter) -> None:
        session = DrillEditorSession(exporter, FakeBackend())
        assert session.load("missing") is None
        assert session.state is SessionState.LOAD_FAILED
        assert session.failure_reason == "Drill not found"
        assert session.document is None

    def test_load_without_backend_fails(self, exporter) -> None:
        session = DrillEditorSession(exporter)
        assert session.load("1") is None
        assert session.state is SessionState.LOAD_FAILED

    def test_pending_video_starts_polling(self, exporter) -> None:
        backend = FakeBackend({"9": {"id": 9, "frames": [], "animationVideoStatus": "pending"}})
        poller = FakePoller()
        session = DrillEditorSession(exporter, backend, poller)

        session.load("9")
        assert poller.started == ["9"]

    def test_open_file_is_not_linked(self, exporter, tmp_path: Path) -> None:
        session = DrillEditorSession(exporter, FakeBackend())
        document = session.new("Local")
        document.add_element(0, draft("text", "note", text="Hi"))
        path = session.save_file(tmp_path / "local")

        reopened = session.open_file(path)
        assert reopened is not None
        assert session.drill_id is None
        assert reopened.frames[0].elements[0].text == "Hi"


class TestSaving:
    """Test save decisions and failure handling."""

    def test_new_drill_is_created_with_animation(self, exporter, encoder) -> None:
        backend = FakeBackend()
        poller = FakePoller()
        session = DrillEditorSession(exporter, backend, poller)
        document = session.new("Pressing")
        document.add_element(0, draft("player", "team1"))

        result = session.save()

        assert result.drill_id == "d1"
        assert result.animation_included
        payload = backend.created[0]
        assert payload["title"] == "Pressing"
        assert payload["animation_gif"]
        assert payload["thumbnailBase64"]
        assert payload["frames"] == frames_to_records(document.frames)
        assert len(encoder.calls) == 1
        assert poller.started == ["d1"]
        assert not session.has_unsaved_changes

    def test_unchanged_save_skips_animation(self, exporter, encoder, monkeypatch) -> None:
        thumbnails: list[int] = []
        render_thumbnail = exporter.render_thumbnail

        def counting_thumbnail(document):
            thumbnails.append(document.revision)
            return render_thumbnail(document)

        monkeypatch.setattr(exporter, "render_thumbnail", counting_thumbnail)
        backend = FakeBackend()
        session = DrillEditorSession(exporter, backend)
        session.new().add_element(0, draft("equipment", "cone", x=200, y=200))

        session.save()
        second = session.save()

        assert len(encoder.calls) == 1
        assert len(thumbnails) == 2
        assert not second.animation_included
        assert backend.updated[0][0] == "d1"
        assert "animation_gif" not in backend.updated[0][1]

    def test_edit_after_save_regenerates(self, exporter, encoder) -> None:
        backend = FakeBackend()
        session = DrillEditorSession(exporter, backend)
        document = session.new()
        cone = document.add_element(0, draft("equipment", "cone", x=200, y=200))
        session.save()

        document.set_element_position(cone.id, 300, 200)
        assert session.has_unsaved_changes
        assert session.save().animation_included
        assert len(encoder.calls) == 2

    def test_new_drill_never_saves_previous_animation(self, app_settings) -> None:
        gate = threading.Event()
        encoder = CountingEncoder(gate=gate)
        exporter = AnimationExportService(app_settings.editor, encoder=encoder)
        backend = FakeBackend()
        session = DrillEditorSession(exporter, backend)
        try:
            session.new("A").add_element(0, draft("player", "team1"))
            running = exporter.request_animation(session.document)
            assert running is not None

            document = session.new("B")
            gate.set()
            running.result(timeout=30)
            document.add_element(0, draft("player", "team2"))

            assert exporter.cached_artifact(document) is None
            result = session.save()
        finally:
            gate.set()
            exporter.shutdown(wait=True)

        assert result.animation_included
        assert len(encoder.calls) == 2
        assert backend.created[0]["title"] == "B"

    def test_export_failure_sends_nothing(self, app_settings) -> None:
        failing = AnimationExportService(
            app_settings.editor, encoder=CountingEncoder(error=RuntimeError("boom"))
        )
        backend = FakeBackend()
        session = DrillEditorSession(failing, backend)
        session.new().add_element(0, draft("player", "team2"))
        try:
            with pytest.raises(SaveError):
                session.save()
        finally:
            failing.shutdown(wait=True)
        assert backend.created == []
        assert session.drill_id is None

    def test_backend_failure_keeps_changes(self, exporter) -> None:
        backend = FakeBackend()
        backend.fail_saves = BackendError("Server error", status_code=500)
        session = DrillEditorSession(exporter, backend)
        session.new().add_element(0, draft("player", "team1"))

        with pytest.raises(SaveError, match="Server error"):
            session.save()
        assert session.has_unsaved_changes

    def test_save_requires_backend(self, exporter) -> None:
        session = DrillEditorSession(exporter)
        session.new()
        with pytest.raises(SaveError):
            session.save()

    def test_save_requires_document(self, exporter) -> None:
        with pytest.raises(SaveError):
            DrillEditorSession(exporter, FakeBackend()).save()

    def test_document_export(self, exporter) -> None:
        session = DrillEditorSession(exporter)
        session.new()
        assert session.export_document().startswith(b"%PDF")


class TestMedia:
    """Test downloading the stored animation video and GIF."""

    def _stored(self, **fields) -> FakeBackend:
        return FakeBackend({"5": {"id": 5, "title": "Overlap", "frames": [], **fields}})

    def test_download_stored_video(self, exporter, tmp_path: Path) -> None:
        backend = self._stored(animationVideoUrl="/media/5.mp4", animationVideoStatus="success")
        backend.media["/media/5.mp4"] = b"mp4-bytes"
        session = DrillEditorSession(exporter, backend)
        session.load("5")

        assert session.media_url("video") == "/media/5.mp4"
        written = session.download_media("video", tmp_path / "overlap.mp4")

        assert written.read_bytes() == b"mp4-bytes"

    def test_download_refreshes_after_transcode(self, exporter, tmp_path: Path) -> None:
        backend = self._stored(animationVideoStatus="pending")
        session = DrillEditorSession(exporter, backend)
        session.load("5")
        assert session.media_url("video") is None

        backend.drills["5"]["animationVideoUrl"] = "/media/5.mp4"
        backend.media["/media/5.mp4"] = b"mp4-bytes"
        session.download_media("video", tmp_path / "overlap.mp4")

        assert session.record is not None
        assert session.record.animation_video_url == "/media/5.mp4"

    def test_missing_media_raises(self, exporter, tmp_path: Path) -> None:
        session = DrillEditorSession(exporter, self._stored())
        session.load("5")

        with pytest.raises(DownloadError, match="no stored gif"):
            session.download_media("gif", tmp_path / "overlap.gif")
        with pytest.raises(ValueError):
            session.media_url("webm")

    def test_failed_download_raises(self, exporter, tmp_path: Path) -> None:
        session = DrillEditorSession(exporter, self._stored(animationGifUrl="/media/gone.gif"))
        session.load("5")

        with pytest.raises(DownloadError, match="Not Found"):
            session.download_media("gif", tmp_path / "overlap.gif")

    def test_new_animation_forgets_stored_media(self, exporter) -> None:
        backend = self._stored(animationGifUrl="/media/5.gif")
        session = DrillEditorSession(exporter, backend)
        document = session.load("5")
        assert document is not None
        assert session.media_url("gif") == "/media/5.gif"

        document.add_element(0, draft("player", "team1"))
        session.save()

        assert session.record is None
        assert session.media_url("gif") is None

    def test_local_drill_has_no_media(self, exporter, tmp_path: Path) -> None:
        session = DrillEditorSession(exporter, FakeBackend())
        session.new()
        assert session.media_url("video") is None
        with pytest.raises(DownloadError):
            session.download_media("video", tmp_path / "x.mp4")
