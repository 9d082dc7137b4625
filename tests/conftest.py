"""Shared fixtures for drill-editor tests."""

import os
import threading
import uuid
from typing import Any, Optional, Sequence

# Headless Qt for rendering and timers
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from drill_editor.backend.client import BackendError
from drill_editor.drills.models import ElementDraft, ElementKind


@pytest.fixture(scope="session", autouse=True)
def qapp(tmp_path_factory: pytest.TempPathFactory) -> QApplication:
    """Single QApplication with settings stored in a temporary directory."""
    settings_dir = str(tmp_path_factory.mktemp("settings"))
    for fmt in (QSettings.Format.NativeFormat, QSettings.Format.IniFormat):
        QSettings.setPath(fmt, QSettings.Scope.UserScope, settings_dir)

    app = QApplication.instance() or QApplication([])
    return app  # type: ignore[return-value]


@pytest.fixture
def app_settings():
    """AppSettings on a fresh profile, with small export sizes for speed."""
    from drill_editor.settings import AppSettings

    settings = AppSettings(profile=f"test-{uuid.uuid4().hex[:8]}")
    settings.editor.export_width = 180
    settings.editor.thumbnail_pixel_ratio = 1
    yield settings
    settings.reset_to_defaults()


def draft(kind: str, subtype: str, x: float = 100.0, y: float = 100.0, **fields: Any) -> ElementDraft:
    """Shorthand for building element drafts in tests."""
    return ElementDraft(kind=ElementKind(kind), subtype=subtype, x=x, y=y, **fields)


class CountingEncoder:
    """Animation encoder that records calls instead of producing a real GIF."""

    def __init__(self, gate: Optional[threading.Event] = None, error: Optional[Exception] = None):
        self.calls: list[tuple[int, list[int]]] = []
        self.gate = gate
        self.error = error

    def encode(self, images: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        if self.gate is not None:
            self.gate.wait(timeout=10)
        if self.error is not None:
            raise self.error
        self.calls.append((len(images), list(durations_ms)))
        return b"GIF89a" + str(len(self.calls)).encode("ascii")


class FakeBackend:
    """In-memory DrillBackend."""

    def __init__(self, drills: Optional[dict[str, dict[str, Any]]] = None):
        self.drills: dict[str, dict[str, Any]] = dict(drills or {})
        self.created: list[dict[str, Any]] = []
        self.updated: list[tuple[str, dict[str, Any]]] = []
        self.statuses: list[Any] = []
        self.fail_saves: Optional[BackendError] = None
        self.media: dict[str, bytes] = {}

    def fetch_drill(self, drill_id: str) -> dict[str, Any]:
        if drill_id not in self.drills:
            raise BackendError("Drill not found", status_code=404)
        return {"data": dict(self.drills[drill_id])}

    def create_drill(self, payload: dict[str, Any]) -> dict[str, Any]:
        if self.fail_saves is not None:
            raise self.fail_saves
        self.created.append(payload)
        drill_id = f"d{len(self.created)}"
        self.drills[drill_id] = {"id": drill_id, **payload}
        return {"data": {"id": drill_id}}

    def update_drill(self, drill_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        if self.fail_saves is not None:
            raise self.fail_saves
        self.updated.append((drill_id, payload))
        self.drills[drill_id] = {"id": drill_id, **payload}
        return {"data": {"id": drill_id}}

    def fetch_transcode_status(self, drill_id: str) -> Optional[str]:
        status = self.statuses.pop(0) if self.statuses else "pending"
        if isinstance(status, Exception):
            raise status
        return status

    def download(self, url: str) -> bytes:
        if url not in self.media:
            raise BackendError("Not Found", status_code=404)
        return self.media[url]


class FakePoller:
    """Records transcode polling requests."""

    def __init__(self) -> None:
        self.started: list[str] = []
        self.cancelled = 0

    def start(self, drill_id: str) -> None:
        self.started.append(drill_id)

    def cancel(self) -> None:
        self.cancelled += 1
