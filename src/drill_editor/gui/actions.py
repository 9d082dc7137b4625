"""Action handlers for MainWindow.

Keeps UI action logic separate from window construction/layout.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QFileDialog,
    QInputDialog,
    QMessageBox,
)

from .. import __version__
from ..export.service import AnimationArtifact
from ..persistence.files import DRILL_FILE_SUFFIX
from ..session import DownloadError, SaveError
from .dialogs import (
    AnimationPreviewDialog,
    BackendSettingsDialog,
    EditorSettingsDialog,
    LoggingSettingsDialog,
    show_about_dialog,
)

if TYPE_CHECKING:
    from .main_window import MainWindow

DRILL_FILE_FILTER = f"Drill Files (*{DRILL_FILE_SUFFIX});;JSON Files (*.json);;All Files (*)"

EXPORT_POLL_INTERVAL_MS = 100


class MainWindowActions:
    """Handles actions and events for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        self.main_window = main_window
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        # Path is None for previews
        self._pending_export: Optional[tuple[Future, Optional[Path]]] = None
        self._export_timer = QTimer(main_window)
        self._export_timer.setInterval(EXPORT_POLL_INTERVAL_MS)
        self._export_timer.timeout.connect(self._check_export)

    # === FILE ===

    def _confirm_discard(self) -> bool:
        """Ask before replacing a drill with unsaved frame changes."""
        mw = self.main_window
        if not mw.session.has_unsaved_changes:
            return True
        reply = QMessageBox.question(
            mw,
            "Unsaved Changes",
            "The current drill has unsaved changes.\n\nDiscard them?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def new_drill(self) -> None:
        """Create a new drill."""
        mw = self.main_window
        if not self._confirm_discard():
            return
        mw.logger.info("New drill requested")
        mw.set_document(mw.session.new())
        mw.status_bar.showMessage("New drill created", 3000)

    def open_drill(self) -> None:
        """Open a stored drill from the backend by id."""
        mw = self.main_window
        if mw.session.backend is None:
            QMessageBox.warning(
                mw,
                "No Backend",
                "No drill backend is configured. Use Settings → Backend Settings first.",
            )
            return
        if not self._confirm_discard():
            return

        drill_id, ok = QInputDialog.getItem(
            mw, "Open Drill", "Drill id:", mw.settings.ui.recent_drill_ids, 0, True
        )
        drill_id = drill_id.strip()
        if not ok or not drill_id:
            return

        mw.logger.info(f"Open drill requested: {drill_id}")
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            document = mw.session.load(drill_id)
        finally:
            QApplication.restoreOverrideCursor()

        mw.set_document(document)
        if document is None:
            QMessageBox.critical(
                mw,
                "Failed to Load Drill",
                f"Drill {drill_id} could not be loaded:\n{mw.session.failure_reason}",
            )
            return
        mw.settings.ui.add_recent_drill(drill_id)
        mw.status_bar.showMessage(f"Loaded drill: {document.title}", 3000)

    def open_drill_file(self) -> None:
        """Open a drill from a local file."""
        mw = self.main_window
        if not self._confirm_discard():
            return
        file_path, _ = QFileDialog.getOpenFileName(
            mw, "Open Drill File", str(mw.settings.ui.last_directory), DRILL_FILE_FILTER
        )
        if not file_path:
            return

        mw.logger.info(f"Selected file: {file_path}")
        mw.settings.ui.remember_file(Path(file_path))
        document = mw.session.open_file(Path(file_path))
        mw.set_document(document)
        if document is None:
            QMessageBox.critical(
                mw,
                "Failed to Open File",
                f"{Path(file_path).name} could not be opened:\n{mw.session.failure_reason}",
            )
            return
        mw.status_bar.showMessage(f"Opened: {Path(file_path).name}", 3000)

    def save_drill(self) -> None:
        """Save the current drill to the backend."""
        mw = self.main_window
        if mw.session.backend is None:
            QMessageBox.warning(
                mw,
                "No Backend",
                "No drill backend is configured. Use File → Save As File to keep a local copy.",
            )
            return

        mw.status_bar.showMessage("Saving drill...")
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            result = mw.session.save()
        except SaveError as e:
            mw.status_bar.showMessage("Save failed", 3000)
            QMessageBox.critical(mw, "Save Failed", f"Failed to save drill:\n{e}")
            return
        finally:
            QApplication.restoreOverrideCursor()

        if result.drill_id is not None:
            mw.settings.ui.add_recent_drill(result.drill_id)
        mw.update_media_actions()
        detail = "with new animation" if result.animation_included else "animation unchanged"
        mw.status_bar.showMessage(f"Drill {result.drill_id} saved ({detail})", 5000)
        mw.update_window_title()

    def save_drill_file(self) -> None:
        """Save the current drill to a local file."""
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        file_path, _ = QFileDialog.getSaveFileName(
            mw,
            "Save Drill As",
            str(mw.settings.ui.last_directory / f"{_file_stem(document.title)}{DRILL_FILE_SUFFIX}"),
            DRILL_FILE_FILTER,
        )
        if not file_path:
            return
        mw.settings.ui.remember_file(Path(file_path))

        try:
            written = mw.session.save_file(Path(file_path))
        except (OSError, SaveError) as e:
            mw.logger.error(f"Failed to save drill file: {e}")
            QMessageBox.critical(mw, "Save Failed", f"Failed to write file:\n{e}")
            return
        mw.status_bar.showMessage(f"Saved: {written.name}", 3000)

    # === EXPORT ===

    def export_animation(self) -> None:
        """Export the drill as an animated GIF in the background."""
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        file_path, _ = QFileDialog.getSaveFileName(
            mw,
            "Export Animation",
            str(mw.settings.ui.last_directory / f"{_file_stem(document.title)}.gif"),
            "GIF Images (*.gif)",
        )
        if not file_path:
            return
        mw.settings.ui.remember_file(Path(file_path))
        self._start_animation(Path(file_path))

    def preview_animation(self) -> None:
        """Generate the animation in the background and play it in a dialog."""
        if self.main_window.session.document is not None:
            self._start_animation(None)

    def _start_animation(self, path: Optional[Path]) -> None:
        mw = self.main_window
        future = mw.exporter.request_animation(mw.session.document)
        if future is None:
            mw.status_bar.showMessage("An animation export is already running", 3000)
            return

        self._pending_export = (future, path)
        self._set_animation_actions_enabled(False)
        mw.status_bar.showMessage("Generating animation...")
        self._export_timer.start()

    def _set_animation_actions_enabled(self, enabled: bool) -> None:
        mw = self.main_window
        for action in (mw.action_export_animation, mw.action_preview_animation):
            action.setEnabled(enabled)

    def _check_export(self) -> None:
        """Finish a background export once its future is done."""
        if self._pending_export is None:
            self._export_timer.stop()
            return
        future, path = self._pending_export
        if not future.done():
            return

        self._export_timer.stop()
        self._pending_export = None
        mw = self.main_window
        self._set_animation_actions_enabled(mw.session.document is not None)

        try:
            artifact: AnimationArtifact = future.result()
            if path is not None:
                path.write_bytes(artifact.data)
        except Exception as e:
            mw.logger.error(f"Animation export failed: {e}", exc_info=True)
            mw.status_bar.showMessage("Animation export failed", 3000)
            QMessageBox.critical(mw, "Export Failed", f"Failed to export animation:\n{e}")
            return

        if path is None:
            mw.status_bar.clearMessage()
            title = mw.session.document.title if mw.session.document else "Drill"
            AnimationPreviewDialog(artifact.data, title, mw).exec()
            return

        mw.logger.info(f"Animation written to {path}")
        mw.status_bar.showMessage(
            f"Animation exported: {path.name} ({artifact.sample_count} frames)", 5000
        )

    def export_pdf(self) -> None:
        """Export every frame as a page of a PDF."""
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        file_path, _ = QFileDialog.getSaveFileName(
            mw,
            "Export PDF",
            str(mw.settings.ui.last_directory / f"{_file_stem(document.title)}.pdf"),
            "PDF Documents (*.pdf)",
        )
        if not file_path:
            return
        mw.settings.ui.remember_file(Path(file_path))

        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            Path(file_path).write_bytes(mw.session.export_document())
        except (OSError, SaveError) as e:
            mw.logger.error(f"PDF export failed: {e}")
            QMessageBox.critical(mw, "Export Failed", f"Failed to export PDF:\n{e}")
            return
        finally:
            QApplication.restoreOverrideCursor()
        mw.status_bar.showMessage(f"PDF exported: {Path(file_path).name}", 3000)

    def download_video(self) -> None:
        """Download the transcoded MP4 of the stored drill."""
        self._download_media("video", "mp4", "MP4 Videos (*.mp4)")

    def download_gif(self) -> None:
        """Download the GIF stored with the drill."""
        self._download_media("gif", "gif", "GIF Images (*.gif)")

    def _download_media(self, media: str, suffix: str, file_filter: str) -> None:
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        file_path, _ = QFileDialog.getSaveFileName(
            mw,
            f"Download {media.title()}",
            str(mw.settings.ui.last_directory / f"{_file_stem(document.title)}.{suffix}"),
            file_filter,
        )
        if not file_path:
            return
        mw.settings.ui.remember_file(Path(file_path))

        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        try:
            written = mw.session.download_media(media, Path(file_path))
        except DownloadError as e:
            QMessageBox.critical(mw, "Download Failed", f"Failed to download drill {media}:\n{e}")
            return
        finally:
            QApplication.restoreOverrideCursor()
        mw.status_bar.showMessage(f"Downloaded: {written.name}", 3000)

    # === EDIT ===

    def select_all(self) -> None:
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        document.selection.replace(el.id for el in document.current_frame.elements)
        mw.canvas.update()

    def delete_selected(self) -> None:
        mw = self.main_window
        document = mw.session.document
        if document is None:
            return
        removed = document.remove_selected()
        if removed:
            mw.status_bar.showMessage(f"Removed {len(removed)} element(s)", 2000)

    def clear_frame(self) -> None:
        """Remove every element of the current frame after confirmation."""
        mw = self.main_window
        document = mw.session.document
        if document is None or not document.current_frame.elements:
            return
        reply = QMessageBox.question(
            mw,
            "Clear Frame",
            f"Remove all elements from '{document.current_frame.name}'?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply == QMessageBox.StandardButton.Yes:
            document.clear_frame()

    def set_speed_preset(self, preset: str) -> None:
        mw = self.main_window
        mw.settings.editor.speed_preset = preset
        mw.status_bar.showMessage(
            f"Animation speed: {preset} ({mw.settings.editor.keyframe_delay_ms} ms per frame)",
            3000,
        )

    # === SETTINGS ===

    def editor_settings(self) -> None:
        """Show editor settings dialog."""
        mw = self.main_window
        try:
            dialog = EditorSettingsDialog(mw.settings, mw)
            if dialog.exec() == QDialog.DialogCode.Accepted:
                mw.frame_bar.set_playback_interval(mw.settings.editor.playback_interval_ms)
                speed_action = mw.speed_actions.get(mw.settings.editor.speed_preset)
                if speed_action is not None:
                    speed_action.setChecked(True)
                mw.status_bar.showMessage("Editor settings updated", 3000)
        except Exception as e:
            mw.logger.error(f"Error showing editor settings dialog: {e}", exc_info=True)
            QMessageBox.critical(mw, "Error", f"Failed to show editor settings dialog:\n{e}")

    def backend_settings(self) -> None:
        """Show backend settings dialog and reconnect."""
        mw = self.main_window
        try:
            dialog = BackendSettingsDialog(mw.settings, mw)
            if dialog.exec() == QDialog.DialogCode.Accepted:
                mw.setup_backend()
                target = mw.settings.backend.base_url or "local files only"
                mw.status_bar.showMessage(f"Backend: {target}", 3000)
        except Exception as e:
            mw.logger.error(f"Error showing backend settings dialog: {e}", exc_info=True)
            QMessageBox.critical(mw, "Error", f"Failed to show backend settings dialog:\n{e}")

    def logging_settings(self) -> None:
        """Show logging settings dialog."""
        mw = self.main_window
        try:
            dialog = LoggingSettingsDialog(mw.settings, mw)
            dialog.exec()
        except Exception as e:
            mw.logger.error(
                f"Error showing logging settings dialog: {e}", exc_info=True
            )

    def about(self) -> None:
        """Show about dialog."""
        mw = self.main_window
        show_about_dialog(
            version=__version__,
            backend_url=mw.settings.backend.base_url or None,
            parent=mw,
        )

    # === TRANSCODE ===

    def on_transcode_resolved(self, status: str) -> None:
        mw = self.main_window
        if status == "success":
            mw.session.refresh_record()
            mw.update_media_actions()
        if status:
            mw.status_bar.showMessage(f"Drill video: {status}", 5000)
        else:
            mw.status_bar.showMessage("No drill video is being produced", 3000)

    def on_transcode_timed_out(self) -> None:
        self.main_window.status_bar.showMessage(
            "Drill video is still processing; check again later", 5000
        )

    def shutdown(self) -> None:
        """Stop watching a background export."""
        self._export_timer.stop()
        self._pending_export = None


def _file_stem(title: str) -> str:
    """File name suggestion derived from a drill title."""
    stem = "".join(ch if ch.isalnum() or ch in "-_ " else "_" for ch in title).strip()
    return stem.replace(" ", "_") or "drill"
