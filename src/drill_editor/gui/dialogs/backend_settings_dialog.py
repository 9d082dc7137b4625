"""
Backend connection settings dialog for drill-editor.
"""

import logging
from typing import Optional
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLabel,
    QLineEdit,
    QSpinBox,
    QDialogButtonBox,
    QWidget,
)

from ...settings import AppSettings


class BackendSettingsDialog(QDialog):
    """Dialog for configuring the drill backend and transcode polling."""

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setWindowTitle("Backend Settings")
        self.settings = settings

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self):
        """Setup the user interface."""
        main_vbox = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.url_field = QLineEdit()
        self.url_field.setPlaceholderText("https://drills.example.org")
        form_layout.addRow("Base URL:", self.url_field)

        self.timeout_spinbox = QSpinBox()
        self.timeout_spinbox.setRange(1, 300)
        self.timeout_spinbox.setSuffix(" s")
        form_layout.addRow("Request timeout:", self.timeout_spinbox)

        self.poll_interval_spinbox = QSpinBox()
        self.poll_interval_spinbox.setRange(1000, 600000)
        self.poll_interval_spinbox.setSingleStep(1000)
        self.poll_interval_spinbox.setSuffix(" ms")
        form_layout.addRow("Video status poll interval:", self.poll_interval_spinbox)

        self.max_attempts_spinbox = QSpinBox()
        self.max_attempts_spinbox.setRange(1, 1000)
        form_layout.addRow("Video status max polls:", self.max_attempts_spinbox)

        info_label = QLabel("Leave the URL empty to work with local files only.")
        info_label.setWordWrap(True)
        form_layout.addRow(info_label)

        main_vbox.addLayout(form_layout)

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self._save_and_accept)
        button_box.rejected.connect(self.reject)
        main_vbox.addWidget(button_box)

    def _load_settings(self):
        """Load current settings into UI."""
        backend = self.settings.backend
        self.url_field.setText(backend.base_url)
        self.timeout_spinbox.setValue(backend.request_timeout_s)
        self.poll_interval_spinbox.setValue(backend.transcode_poll_interval_ms)
        self.max_attempts_spinbox.setValue(backend.transcode_max_attempts)

    def _save_and_accept(self):
        """Save settings and close dialog."""
        backend = self.settings.backend
        backend.base_url = self.url_field.text()
        backend.request_timeout_s = self.timeout_spinbox.value()
        backend.transcode_poll_interval_ms = self.poll_interval_spinbox.value()
        backend.transcode_max_attempts = self.max_attempts_spinbox.value()

        self.logger.info("Backend settings updated")
        self.accept()
