"""
Editor, playback and export settings dialog for drill-editor.
"""

import logging
from typing import Optional
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QComboBox,
    QLabel,
    QSpinBox,
    QDialogButtonBox,
    QWidget,
)

from ...settings import AppSettings


class EditorSettingsDialog(QDialog):
    """Dialog for configuring playback and export settings."""

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setWindowTitle("Editor Settings")
        self.settings = settings

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self):
        """Setup the user interface."""
        main_vbox = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.speed_combo = QComboBox()
        for name, delay in self.settings.editor.SPEED_PRESETS.items():
            self.speed_combo.addItem(f"{name.title()} ({delay} ms per frame)", name)
        form_layout.addRow("Animation speed:", self.speed_combo)

        self.playback_spinbox = QSpinBox()
        self.playback_spinbox.setRange(100, 10000)
        self.playback_spinbox.setSingleStep(100)
        self.playback_spinbox.setSuffix(" ms")
        self.playback_spinbox.setToolTip("Time each frame stays visible during playback")
        form_layout.addRow("Playback interval:", self.playback_spinbox)

        self.width_spinbox = QSpinBox()
        self.width_spinbox.setRange(100, 1800)
        self.width_spinbox.setSingleStep(50)
        self.width_spinbox.setSuffix(" px")
        form_layout.addRow("Animation width:", self.width_spinbox)

        self.timeout_spinbox = QSpinBox()
        self.timeout_spinbox.setRange(5, 600)
        self.timeout_spinbox.setSuffix(" s")
        form_layout.addRow("Export timeout:", self.timeout_spinbox)

        self.pixel_ratio_spinbox = QSpinBox()
        self.pixel_ratio_spinbox.setRange(1, 4)
        self.pixel_ratio_spinbox.setSuffix("x")
        form_layout.addRow("Thumbnail/PDF pixel ratio:", self.pixel_ratio_spinbox)

        info_label = QLabel(
            "Animation speed controls how long each keyframe is held in exported "
            "animations. Changing it does not modify the drill."
        )
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
        editor = self.settings.editor
        self.speed_combo.setCurrentIndex(max(0, self.speed_combo.findData(editor.speed_preset)))
        self.playback_spinbox.setValue(editor.playback_interval_ms)
        self.width_spinbox.setValue(editor.export_width)
        self.timeout_spinbox.setValue(editor.export_timeout_s)
        self.pixel_ratio_spinbox.setValue(editor.thumbnail_pixel_ratio)

    def _save_and_accept(self):
        """Save settings and close dialog."""
        editor = self.settings.editor
        editor.speed_preset = str(self.speed_combo.currentData())
        editor.playback_interval_ms = self.playback_spinbox.value()
        editor.export_width = self.width_spinbox.value()
        editor.export_timeout_s = self.timeout_spinbox.value()
        editor.thumbnail_pixel_ratio = self.pixel_ratio_spinbox.value()

        self.logger.info("Editor settings updated")
        self.accept()
