"""
Menu builder for main application window.
"""

import logging
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QMenuBar
from PySide6.QtGui import QAction, QActionGroup, QKeySequence

if TYPE_CHECKING:
    from .main_window import MainWindow


class MenuBuilder:
    """Builds and manages the application menu bar."""

    def __init__(self, main_window: "MainWindow") -> None:
        """
        Initialize menu builder.

        Args:
            main_window: MainWindow instance that owns the menus
        """
        self.main_window = main_window
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def setup_actions(self) -> None:
        """Create all actions for menus and toolbar."""
        self._setup_file_actions()
        self._setup_edit_actions()
        self._setup_settings_actions()
        self._setup_help_actions()

        self.logger.debug("Actions created")

    def _setup_file_actions(self) -> None:
        """Create File menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_new = QAction("&New Drill", mw)
        mw.action_new.setShortcut(QKeySequence.StandardKey.New)
        mw.action_new.setStatusTip("Create a new drill")
        mw.action_new.triggered.connect(actions.new_drill)

        mw.action_open = QAction("&Open Drill...", mw)
        mw.action_open.setShortcut(QKeySequence.StandardKey.Open)
        mw.action_open.setStatusTip("Open a stored drill from the backend")
        mw.action_open.triggered.connect(actions.open_drill)

        mw.action_open_file = QAction("Open &File...", mw)
        mw.action_open_file.setStatusTip("Open a drill from a local file")
        mw.action_open_file.triggered.connect(actions.open_drill_file)

        mw.action_save = QAction("&Save Drill", mw)
        mw.action_save.setShortcut(QKeySequence.StandardKey.Save)
        mw.action_save.setStatusTip("Save the current drill to the backend")
        mw.action_save.triggered.connect(actions.save_drill)
        mw.action_save.setEnabled(False)  # Disabled until a drill is open

        mw.action_save_as = QAction("Save &As File...", mw)
        mw.action_save_as.setShortcut(QKeySequence.StandardKey.SaveAs)
        mw.action_save_as.setStatusTip("Save the current drill to a local file")
        mw.action_save_as.triggered.connect(actions.save_drill_file)
        mw.action_save_as.setEnabled(False)

        mw.action_export_animation = QAction("Export &Animation...", mw)
        mw.action_export_animation.setStatusTip("Export the drill as an animated GIF")
        mw.action_export_animation.triggered.connect(actions.export_animation)
        mw.action_export_animation.setEnabled(False)

        mw.action_preview_animation = QAction("Pre&view Animation", mw)
        mw.action_preview_animation.setShortcut(QKeySequence("Ctrl+P"))
        mw.action_preview_animation.setStatusTip("Play the exported animation without saving it")
        mw.action_preview_animation.triggered.connect(actions.preview_animation)
        mw.action_preview_animation.setEnabled(False)

        mw.action_export_pdf = QAction("Export &PDF...", mw)
        mw.action_export_pdf.setStatusTip("Export every frame as a page of a PDF")
        mw.action_export_pdf.triggered.connect(actions.export_pdf)
        mw.action_export_pdf.setEnabled(False)

        mw.action_download_video = QAction("Download &Video...", mw)
        mw.action_download_video.setStatusTip("Download the transcoded MP4 of the stored drill")
        mw.action_download_video.triggered.connect(actions.download_video)
        mw.action_download_video.setEnabled(False)  # Enabled once the video is ready

        mw.action_download_gif = QAction("Download Stored &GIF...", mw)
        mw.action_download_gif.setStatusTip("Download the GIF stored with the drill")
        mw.action_download_gif.triggered.connect(actions.download_gif)
        mw.action_download_gif.setEnabled(False)

        mw.action_exit = QAction("E&xit", mw)
        mw.action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        mw.action_exit.setStatusTip("Exit the application")
        mw.action_exit.triggered.connect(mw.close)

    def _setup_edit_actions(self) -> None:
        """Create Edit menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_select_all = QAction("Select &All", mw)
        mw.action_select_all.setShortcut(QKeySequence.StandardKey.SelectAll)
        mw.action_select_all.setStatusTip("Select every element of the current frame")
        mw.action_select_all.triggered.connect(actions.select_all)

        mw.action_delete_selected = QAction("&Delete Selected", mw)
        mw.action_delete_selected.setStatusTip("Remove the selected elements")
        mw.action_delete_selected.triggered.connect(actions.delete_selected)

        mw.action_clear_frame = QAction("&Clear Frame", mw)
        mw.action_clear_frame.setStatusTip("Remove every element of the current frame")
        mw.action_clear_frame.triggered.connect(actions.clear_frame)

        mw.speed_action_group = QActionGroup(mw)
        mw.speed_action_group.setExclusive(True)
        mw.speed_actions = {}
        for name, delay in mw.settings.editor.SPEED_PRESETS.items():
            action = QAction(f"{name.title()} ({delay} ms)", mw)
            action.setCheckable(True)
            action.setChecked(name == mw.settings.editor.speed_preset)
            action.setStatusTip(f"Hold each keyframe {delay} ms in exported animations")
            action.triggered.connect(
                lambda _checked=False, preset=name: actions.set_speed_preset(preset)
            )
            mw.speed_action_group.addAction(action)
            mw.speed_actions[name] = action

    def _setup_settings_actions(self) -> None:
        """Create Settings menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_editor_settings = QAction("&Editor Settings...", mw)
        mw.action_editor_settings.setStatusTip("Configure playback and export settings")
        mw.action_editor_settings.triggered.connect(actions.editor_settings)

        mw.action_backend_settings = QAction("&Backend Settings...", mw)
        mw.action_backend_settings.setStatusTip("Configure the drill backend")
        mw.action_backend_settings.triggered.connect(actions.backend_settings)

        mw.action_logging_settings = QAction("&Logging Settings...", mw)
        mw.action_logging_settings.setStatusTip("Configure logging settings")
        mw.action_logging_settings.triggered.connect(actions.logging_settings)

    def _setup_help_actions(self) -> None:
        """Create Help menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_about = QAction("&About", mw)
        mw.action_about.setStatusTip("About Drill Editor")
        mw.action_about.triggered.connect(actions.about)

    def setup_menus(self) -> None:
        """Setup the menu bar."""
        menubar = self.main_window.menuBar()

        self._setup_file_menu(menubar)
        self._setup_edit_menu(menubar)
        self._setup_settings_menu(menubar)
        self._setup_help_menu(menubar)

        self.logger.debug("Menus created")

    def _setup_file_menu(self, menubar: QMenuBar) -> None:
        """Setup File menu."""
        mw = self.main_window
        file_menu = menubar.addMenu("&File")
        file_menu.addAction(mw.action_new)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_open)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_open_file)  # type: ignore[arg-type]
        file_menu.addSeparator()
        file_menu.addAction(mw.action_save)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_save_as)  # type: ignore[arg-type]
        file_menu.addSeparator()
        file_menu.addAction(mw.action_preview_animation)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_export_animation)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_export_pdf)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_download_video)  # type: ignore[arg-type]
        file_menu.addAction(mw.action_download_gif)  # type: ignore[arg-type]
        file_menu.addSeparator()
        file_menu.addAction(mw.action_exit)  # type: ignore[arg-type]

    def _setup_edit_menu(self, menubar: QMenuBar) -> None:
        """Setup Edit menu."""
        mw = self.main_window
        edit_menu = menubar.addMenu("&Edit")
        edit_menu.addAction(mw.action_select_all)  # type: ignore[arg-type]
        edit_menu.addAction(mw.action_delete_selected)  # type: ignore[arg-type]
        edit_menu.addSeparator()
        edit_menu.addAction(mw.action_clear_frame)  # type: ignore[arg-type]
        edit_menu.addSeparator()
        speed_menu = edit_menu.addMenu("Animation &Speed")
        for action in mw.speed_actions.values():
            speed_menu.addAction(action)  # type: ignore[arg-type]

    def _setup_settings_menu(self, menubar: QMenuBar) -> None:
        """Setup Settings menu."""
        mw = self.main_window
        settings_menu = menubar.addMenu("&Settings")
        settings_menu.addAction(mw.action_editor_settings)  # type: ignore[arg-type]
        settings_menu.addAction(mw.action_backend_settings)  # type: ignore[arg-type]
        settings_menu.addSeparator()
        settings_menu.addAction(mw.action_logging_settings)  # type: ignore[arg-type]

    def _setup_help_menu(self, menubar: QMenuBar) -> None:
        """Setup Help menu."""
        mw = self.main_window
        help_menu = menubar.addMenu("&Help")
        help_menu.addAction(mw.action_about)  # type: ignore[arg-type]
