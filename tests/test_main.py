"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from conftest import CountingEncoder, FakeBackend, draft
from drill_editor.__main__ import build_parser, is_drill_file, open_startup_drill
from drill_editor.export.service import AnimationExportService
from drill_editor.session import DrillEditorSession, SessionState


@pytest.fixture
def session(app_settings):
    exporter = AnimationExportService(app_settings.editor, encoder=CountingEncoder())
    backend = FakeBackend({"42": {"id": 42, "title": "Overlap", "frames": []}})
    yield DrillEditorSession(exporter, backend)
    exporter.shutdown(wait=True)


class TestArguments:
    """Test command line parsing."""

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.drill is None
        assert args.profile == "default"

    def test_drill_and_profile(self) -> None:
        args = build_parser().parse_args(["42", "--profile", "coach"])
        assert args.drill == "42"
        assert args.profile == "coach"

    def test_qt_arguments_are_left_over(self) -> None:
        args, rest = build_parser().parse_known_args(["-platform", "offscreen"])
        assert args.drill is None
        assert "-platform" in rest

    def test_file_or_drill_id(self, tmp_path: Path) -> None:
        existing = tmp_path / "rondo"
        existing.write_text("{}")
        assert is_drill_file("missing.drill.json")
        assert is_drill_file(str(existing))
        assert not is_drill_file("42")


class TestStartupDrill:
    """Test opening the drill named on the command line."""

    def test_loads_stored_drill(self, session) -> None:
        document = open_startup_drill(session, "42")
        assert document is not None
        assert document.title == "Overlap"
        assert session.drill_id == "42"

    def test_opens_local_file(self, session, tmp_path: Path) -> None:
        session.new("Local").add_element(0, draft("player", "team1"))
        path = session.save_file(tmp_path / "local")

        document = open_startup_drill(session, str(path))

        assert document is not None
        assert document.title == "Local"
        assert session.drill_id is None

    def test_missing_file_fails(self, session, tmp_path: Path) -> None:
        assert open_startup_drill(session, str(tmp_path / "gone.drill.json")) is None
        assert session.state is SessionState.LOAD_FAILED

    def test_drill_id_without_backend(self, session) -> None:
        session.backend = None
        assert open_startup_drill(session, "42") is None
        assert session.failure_reason == "No backend configured"
