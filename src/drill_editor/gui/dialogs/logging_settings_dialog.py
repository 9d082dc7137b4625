"""
Logging settings dialog for drill-editor.
"""

import logging
import subprocess
import sys
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from ...settings import AppSettings
from ...settings.logging import MAX_LOG_BACKUPS, MAX_LOG_SIZE_MB, MIN_LOG_SIZE_MB, VALID_LEVELS


class LoggingSettingsDialog(QDialog):
    """Dialog for configuring console and file logging."""

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setWindowTitle("Logging Settings")
        self.settings = settings

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self):
        main_vbox = QVBoxLayout(self)

        # region Console
        console_group = QGroupBox("Console Logging")
        console_layout = QFormLayout(console_group)

        self.console_enabled_check = QCheckBox("Enable console logging")
        console_layout.addRow(self.console_enabled_check)

        self.console_level_combo = QComboBox()
        self.console_level_combo.addItems(VALID_LEVELS)
        console_layout.addRow("Console log level:", self.console_level_combo)

        self.console_colors_check = QCheckBox("Use colors in console")
        console_layout.addRow(self.console_colors_check)

        self.library_level_combo = QComboBox()
        self.library_level_combo.addItems(VALID_LEVELS)
        self.library_level_combo.setToolTip("Level for Pillow, urllib3 and requests")
        console_layout.addRow("Library log level:", self.library_level_combo)
        main_vbox.addWidget(console_group)

        # region File
        file_group = QGroupBox("File Logging")
        file_layout = QFormLayout(file_group)

        self.file_enabled_check = QCheckBox("Write a CSV log file (always DEBUG)")
        file_layout.addRow(self.file_enabled_check)

        path_row = QHBoxLayout()
        self.log_path_field = QLineEdit(str(self.settings.logging.log_file_path))
        self.log_path_field.setReadOnly(True)
        path_row.addWidget(self.log_path_field)
        open_button = QPushButton("Open Folder")
        open_button.clicked.connect(self._open_log_folder)
        path_row.addWidget(open_button)
        file_layout.addRow("Log file:", path_row)

        self.max_size_spin = QSpinBox()
        self.max_size_spin.setRange(MIN_LOG_SIZE_MB, MAX_LOG_SIZE_MB)
        self.max_size_spin.setSuffix(" MB")
        file_layout.addRow("Rotate at:", self.max_size_spin)

        self.backup_spin = QSpinBox()
        self.backup_spin.setRange(0, MAX_LOG_BACKUPS)
        file_layout.addRow("Keep old files:", self.backup_spin)
        main_vbox.addWidget(file_group)

        restart_note = QLabel("Changes take effect after restarting the application")
        restart_note.setAlignment(Qt.AlignmentFlag.AlignCenter)
        main_vbox.addWidget(restart_note)

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self._save_and_accept)
        button_box.rejected.connect(self.reject)
        main_vbox.addWidget(button_box)

    def _load_settings(self):
        options = self.settings.logging
        self.console_enabled_check.setChecked(options.console_logging)
        self.console_level_combo.setCurrentText(options.console_log_level)
        self.console_colors_check.setChecked(options.console_use_colors)
        self.library_level_combo.setCurrentText(options.library_log_level)
        self.file_enabled_check.setChecked(options.file_logging)
        self.max_size_spin.setValue(options.max_file_size_mb)
        self.backup_spin.setValue(options.backup_count)

    def _save_and_accept(self):
        options = self.settings.logging
        options.console_logging = self.console_enabled_check.isChecked()
        options.console_log_level = self.console_level_combo.currentText()
        options.console_use_colors = self.console_colors_check.isChecked()
        options.library_log_level = self.library_level_combo.currentText()
        options.file_logging = self.file_enabled_check.isChecked()
        options.max_file_size_mb = self.max_size_spin.value()
        options.backup_count = self.backup_spin.value()

        self.logger.info("Logging settings updated")
        self.accept()

    def _open_log_folder(self):
        folder_path = self.settings.logging.log_file_path.parent
        folder_path.mkdir(parents=True, exist_ok=True)

        if sys.platform == "win32":
            command = ["explorer", str(folder_path)]
        elif sys.platform == "darwin":
            command = ["open", str(folder_path)]
        else:
            command = ["xdg-open", str(folder_path)]
        try:
            subprocess.run(command)
        except OSError as e:
            self.logger.error(f"Failed to open log folder: {e}")
