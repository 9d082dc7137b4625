"""
Editor session: the load/save workflow around a DrillDocument.

The session owns the document being edited, remembers the frames as last
loaded or saved, and decides on save whether a new animation has to be
produced. Saving always sends a fresh thumbnail; the animation is only
regenerated and sent when the frames changed structurally.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from .backend.client import BackendError
from .drills.document import DrillDocument
from .drills.models import Frame
from .export.service import AnimationExportService, ExportError
from .persistence.diff import frames_differ
from .persistence.files import load_drill_file, save_drill_file
from .persistence.mapper import DrillRecord, DrillRecordError, build_save_payload, unwrap_record

if TYPE_CHECKING:
    from .backend.client import DrillBackend
    from .backend.transcode import TranscodeStatusPoller


class SessionState(Enum):
    EMPTY = auto()
    LOADING = auto()
    READY = auto()
    LOAD_FAILED = auto()


class SaveError(Exception):
    """Raised when a drill cannot be saved; nothing was sent."""
    pass


class DownloadError(Exception):
    """Raised when stored drill media cannot be downloaded."""
    pass


# Media kinds and the DrillRecord field holding their URL
MEDIA_URL_FIELDS = {"video": "animation_video_url", "gif": "animation_gif_url"}


@dataclass
class SaveResult:
    drill_id: Optional[str]
    animation_included: bool
    response: dict[str, Any]


class DrillEditorSession:
    """Loads, tracks and saves one drill."""

    def __init__(
        self,
        exporter: AnimationExportService,
        backend: Optional["DrillBackend"] = None,
        poller: Optional["TranscodeStatusPoller"] = None,
    ):
        """Initialize the session.

        Args:
            exporter: Produces thumbnails and animations
            backend: Drill storage; local files still work without one
            poller: Optional transcode poller started for pending videos
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.exporter = exporter
        self.backend = backend
        self.poller = poller

        self.state = SessionState.EMPTY
        self.failure_reason: Optional[str] = None
        self.document: Optional[DrillDocument] = None
        self.drill_id: Optional[str] = None
        self.record: Optional[DrillRecord] = None
        self.original_frames: Optional[list[Frame]] = None

    # === LOADING ===

    def new(self, title: str = "New Training Session") -> DrillDocument:
        """Start an unsaved drill with one empty frame."""
        self._cancel_polling()
        self.document = DrillDocument(title=title)
        self.drill_id = None
        self.record = None
        self.original_frames = None
        self.failure_reason = None
        self.state = SessionState.READY
        self.exporter.invalidate()
        self.logger.info("Started a new drill")
        return self.document

    def load(self, drill_id: str) -> Optional[DrillDocument]:
        """Load a stored drill from the backend.

        Returns:
            The document, or None when loading failed (see failure_reason)
        """
        self._cancel_polling()
        self.state = SessionState.LOADING
        self.document = None
        self.failure_reason = None

        if self.backend is None:
            return self._fail("No backend configured")

        try:
            record = DrillRecord.from_dict(self.backend.fetch_drill(drill_id))
        except (BackendError, DrillRecordError) as e:
            return self._fail(str(e))

        self.drill_id = record.id or drill_id
        self._open_record(record)
        self.logger.info(
            f"Loaded drill {self.drill_id} '{record.title}' with {len(record.frames)} frames"
        )

        if record.animation_video_status == "pending":
            self._start_polling()
        return self.document

    def open_file(self, path: Path) -> Optional[DrillDocument]:
        """Load a drill from a local file; the result is not linked to the backend."""
        self._cancel_polling()
        self.state = SessionState.LOADING
        self.document = None
        self.failure_reason = None
        try:
            record = load_drill_file(path)
        except (OSError, DrillRecordError) as e:
            return self._fail(str(e))

        self.drill_id = None
        self._open_record(record)
        return self.document

    def _open_record(self, record: DrillRecord) -> None:
        self.record = record
        self.document = DrillDocument(record.frames, record.title, record.description)
        self.original_frames = self.document.snapshot()
        self.exporter.invalidate()
        self.state = SessionState.READY

    def _fail(self, reason: str) -> None:
        self.state = SessionState.LOAD_FAILED
        self.failure_reason = reason
        self.document = None
        self.logger.error(f"Failed to load drill: {reason}")
        return None

    # === SAVING ===

    @property
    def has_unsaved_changes(self) -> bool:
        if self.document is None:
            return False
        return frames_differ(self.original_frames, self.document.frames)

    def save(self) -> SaveResult:
        """Send the drill to the backend.

        Raises:
            SaveError: If there is nothing to save, the animation cannot be
                produced or the backend rejects the request
        """
        document = self.document
        if document is None or self.state is not SessionState.READY:
            raise SaveError("No drill is open")
        if self.backend is None:
            raise SaveError("No backend configured")

        changed = frames_differ(self.original_frames, document.frames)
        thumbnail = self.exporter.render_thumbnail(document)

        animation: Optional[str] = None
        if changed:
            try:
                animation = self.exporter.ensure_animation(document).to_base64()
            except ExportError as e:
                self.logger.error(f"Error generating animation, drill not saved: {e}")
                raise SaveError(f"Failed to create drill animation: {e}") from e

        payload = build_save_payload(
            document.frames,
            document.title,
            document.description,
            thumbnail_base64=thumbnail,
            animation_gif_base64=animation,
        )

        try:
            if self.drill_id is None:
                response = self.backend.create_drill(payload)
                self.drill_id = self._created_id(response)
            else:
                response = self.backend.update_drill(self.drill_id, payload)
        except BackendError as e:
            self.logger.error(f"Failed to save drill: {e}")
            raise SaveError(str(e)) from e

        self.original_frames = document.snapshot()
        self.exporter.invalidate()
        if animation is not None:
            # Stored media now belongs to the previous animation
            self.record = None
        self.logger.info(
            f"Drill {self.drill_id} saved "
            f"({'animation regenerated' if animation else 'animation unchanged'})"
        )

        if animation and self.drill_id is not None:
            self._start_polling()
        return SaveResult(self.drill_id, animation is not None, response)

    def save_file(self, path: Path) -> Path:
        """Write the drill to a local file."""
        if self.document is None:
            raise SaveError("No drill is open")
        return save_drill_file(
            path, self.document.frames, self.document.title, self.document.description
        )

    def export_document(self) -> bytes:
        """PDF with a title cover page, then one page per frame."""
        if self.document is None:
            raise SaveError("No drill is open")
        return self.exporter.export_document(self.document)

    # === MEDIA ===

    def refresh_record(self) -> Optional[DrillRecord]:
        """Re-read stored metadata (media URLs, transcode status) of the drill.

        The document being edited is left untouched.
        """
        if self.backend is None or self.drill_id is None:
            return None
        try:
            self.record = DrillRecord.from_dict(self.backend.fetch_drill(self.drill_id))
        except (BackendError, DrillRecordError) as e:
            self.logger.warning(f"Could not refresh drill {self.drill_id}: {e}")
            return None
        return self.record

    def media_url(self, media: str) -> Optional[str]:
        """URL of stored media ("video" or "gif") of the drill, if known."""
        if media not in MEDIA_URL_FIELDS:
            raise ValueError(f"Unknown media type: {media}")
        if self.record is None or self.drill_id is None:
            return None
        return getattr(self.record, MEDIA_URL_FIELDS[media])

    def download_media(self, media: str, path: Path) -> Path:
        """Download stored media of the drill to a file.

        Raises:
            DownloadError: If the drill has no such media or the download fails
        """
        if self.backend is None:
            raise DownloadError("No backend configured")
        url = self.media_url(media)
        if url is None and self.refresh_record() is not None:
            url = self.media_url(media)
        if not url:
            raise DownloadError(f"The drill has no stored {media} yet")

        try:
            data = self.backend.download(url)
            path = Path(path)
            path.write_bytes(data)
        except (BackendError, OSError) as e:
            self.logger.error(f"Failed to download drill {media}: {e}")
            raise DownloadError(str(e)) from e
        self.logger.info(f"Downloaded drill {media} ({len(data)} bytes) to {path}")
        return path

    @staticmethod
    def _created_id(response: dict[str, Any]) -> Optional[str]:
        try:
            data = unwrap_record(response)
        except DrillRecordError:
            inner = response.get("data")
            data = inner if isinstance(inner, dict) else response
        drill_id = data.get("id")
        return str(drill_id) if drill_id is not None else None

    # === TRANSCODE ===

    def _start_polling(self) -> None:
        if self.poller is not None and self.drill_id is not None:
            self.poller.start(self.drill_id)

    def _cancel_polling(self) -> None:
        if self.poller is not None:
            self.poller.cancel()

    def close(self) -> None:
        """Stop background activity."""
        self._cancel_polling()
        self.exporter.shutdown()
