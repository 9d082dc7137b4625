"""
Main application window for drill-editor.
"""

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QActionGroup, QCloseEvent
from PySide6.QtWidgets import (
    QDockWidget,
    QLabel,
    QLineEdit,
    QMainWindow,
    QScrollArea,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from ..backend.client import HttpDrillBackend
from ..backend.transcode import TranscodeStatusPoller
from ..drills.document import DrillDocument
from ..drills.toolbox import Toolbox
from ..export.service import AnimationExportService
from ..session import DrillEditorSession
from ..settings import AppSettings
from .actions import MainWindowActions
from .canvas import DrillCanvas
from .frame_bar import FrameBar
from .menu import MenuBuilder
from .toolbox_panel import ToolboxPanel


class MainWindow(QMainWindow):
    """Main application window."""

    # Menu actions (created by MenuBuilder)
    action_new: QAction
    action_open: QAction
    action_open_file: QAction
    action_save: QAction
    action_save_as: QAction
    action_export_animation: QAction
    action_preview_animation: QAction
    action_export_pdf: QAction
    action_download_video: QAction
    action_download_gif: QAction
    action_exit: QAction
    action_select_all: QAction
    action_delete_selected: QAction
    action_clear_frame: QAction
    action_editor_settings: QAction
    action_backend_settings: QAction
    action_logging_settings: QAction
    action_about: QAction
    speed_action_group: QActionGroup
    speed_actions: dict[str, QAction]

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.setObjectName("main_window")
        self.settings = settings

        # Editing services
        self.toolbox = Toolbox(settings.toolbox)
        self.exporter = AnimationExportService(settings.editor)
        self.session = DrillEditorSession(self.exporter)
        self.poller: Optional[TranscodeStatusPoller] = None

        # Initialize managers
        self.menu_builder = MenuBuilder(self)
        self.main_window_actions = MainWindowActions(self)

        # Setup UI components
        self.setup_widgets()
        self.menu_builder.setup_actions()
        self.menu_builder.setup_menus()
        self.setup_toolbar()
        self.setup_status_bar()
        self.setup_backend()

        # Restore window geometry from settings
        if not self.settings.ui.restore_window_geometry(self):
            # Default size if no saved geometry
            self.resize(1400, 900)

        self.set_document(self.session.new())
        self.logger.info("Main window initialized")

    # === SETUP ===

    def setup_widgets(self) -> None:
        """Create canvas, frame bar and toolbox dock."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self.canvas = DrillCanvas(self.toolbox)
        self.canvas.document_edited.connect(self._on_document_edited)
        layout.addWidget(self.canvas, 1)

        self.frame_bar = FrameBar(self.settings.editor.playback_interval_ms)
        layout.addWidget(self.frame_bar)
        self.setCentralWidget(central)

        self.toolbox_panel = ToolboxPanel(self.toolbox)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.toolbox_panel)

        self.toolbox_dock = QDockWidget("Toolbox", self)
        self.toolbox_dock.setObjectName("toolbox_dock")
        self.toolbox_dock.setWidget(scroll)
        self.toolbox_dock.setFeatures(
            QDockWidget.DockWidgetFeature.DockWidgetMovable
            | QDockWidget.DockWidgetFeature.DockWidgetFloatable
        )
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, self.toolbox_dock)

        self.logger.debug("Widgets created")

    def setup_toolbar(self) -> None:
        """Setup the drill toolbar with the title field."""
        toolbar = QToolBar("Drill", self)
        toolbar.setObjectName("drill_toolbar")
        toolbar.addAction(self.action_new)
        toolbar.addAction(self.action_save)
        toolbar.addSeparator()
        toolbar.addWidget(QLabel(" Title: "))

        self.title_edit = QLineEdit()
        self.title_edit.setMaximumWidth(320)
        self.title_edit.editingFinished.connect(self._on_title_edited)
        toolbar.addWidget(self.title_edit)
        self.addToolBar(toolbar)

    def setup_status_bar(self) -> None:
        """Setup the status bar."""
        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready - Drill Editor loaded successfully", 5000)

        # Show configuration info
        QTimer.singleShot(100, self.show_config_info)  # type: ignore

        self.logger.debug("Status bar created")

    def show_config_info(self) -> None:
        """Show configuration information in status bar."""
        backend = self.settings.backend.base_url or "Not set (local files only)"
        self.status_bar.showMessage(f"Backend: {backend}", 10000)

    def setup_backend(self) -> None:
        """(Re)connect the session to the configured backend."""
        if self.poller is not None:
            self.poller.cancel()
            self.poller.deleteLater()
            self.poller = None

        backend_settings = self.settings.backend
        if not backend_settings.base_url:
            self.session.backend = None
            self.session.poller = None
            self.logger.info("No backend configured, working with local files only")
            return

        backend = HttpDrillBackend.from_settings(backend_settings)
        self.poller = TranscodeStatusPoller(
            backend,
            interval_ms=backend_settings.transcode_poll_interval_ms,
            max_attempts=backend_settings.transcode_max_attempts,
            parent=self,
        )
        self.poller.status_resolved.connect(self.main_window_actions.on_transcode_resolved)
        self.poller.timed_out.connect(self.main_window_actions.on_transcode_timed_out)

        self.session.backend = backend
        self.session.poller = self.poller
        self.logger.info(f"Backend configured: {backend_settings.base_url}")

    # === DOCUMENT ===

    def set_document(self, document: Optional[DrillDocument]) -> None:
        """Show a document (None after a failed load)."""
        self.canvas.set_document(document)
        self.frame_bar.set_document(document)

        has_document = document is not None
        for action in (
            self.action_save,
            self.action_save_as,
            self.action_export_animation,
            self.action_preview_animation,
            self.action_export_pdf,
            self.action_select_all,
            self.action_delete_selected,
            self.action_clear_frame,
        ):
            action.setEnabled(has_document)

        self.title_edit.setEnabled(has_document)
        self.title_edit.setText(document.title if document is not None else "")
        self._update_preview()
        self.update_media_actions()
        self.update_window_title()

    def update_media_actions(self) -> None:
        """Offer downloads of the stored media the drill currently has."""
        self.action_download_video.setEnabled(self.session.media_url("video") is not None)
        self.action_download_gif.setEnabled(self.session.media_url("gif") is not None)

    def update_window_title(self) -> None:
        document = self.session.document
        if document is None:
            self.setWindowTitle("Drill Editor")
            return
        marker = " *" if self.session.has_unsaved_changes else ""
        self.setWindowTitle(f"{document.title}{marker} - Drill Editor")

    def _update_preview(self) -> None:
        document = self.session.document
        label = ""
        if document is not None:
            label = self.toolbox.preview_label(document, self.settings.toolbox.active_team)
        self.toolbox_panel.update_preview(label)

    def _on_document_edited(self) -> None:
        self._update_preview()
        self.update_window_title()

    def _on_title_edited(self) -> None:
        document = self.session.document
        title = self.title_edit.text().strip()
        if document is None or not title or title == document.title:
            return
        document.title = title
        self.update_window_title()
        self.logger.debug(f"Drill title set to '{title}'")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event to save settings."""
        # Save window geometry and state
        self.settings.ui.save_window_geometry(self)

        if self.frame_bar.player is not None:
            self.frame_bar.player.stop()
        self.main_window_actions.shutdown()
        self.session.close()

        self.logger.info("Window geometry saved")
        super().closeEvent(event)
