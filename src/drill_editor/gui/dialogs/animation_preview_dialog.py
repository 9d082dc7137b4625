"""
In-editor animation preview for drill-editor.
"""

import logging
from typing import Optional

import qtawesome as qta
from PySide6.QtCore import QBuffer, QByteArray, QIODevice, Qt
from PySide6.QtGui import QMovie
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class AnimationPreviewDialog(QDialog):
    """Plays an encoded drill animation without writing it to disk."""

    def __init__(self, data: bytes, title: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.setWindowTitle(f"Animation Preview - {title}")

        # QMovie reads lazily; the buffer must outlive it
        self._bytes = QByteArray(data)
        self._buffer = QBuffer(self._bytes, self)
        self._buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        self.movie = QMovie(self._buffer, QByteArray(b"gif"), self)

        self._setup_ui()
        if not self.movie.isValid():
            self.logger.warning("Animation data could not be decoded for preview")
            self.movie_label.setText("The animation could not be displayed.")
            self.play_button.setEnabled(False)
            return
        self.movie.start()
        self.logger.debug(f"Previewing animation with {self.movie.frameCount()} frames")

    def _setup_ui(self):
        """Setup the user interface."""
        main_vbox = QVBoxLayout(self)

        self.movie_label = QLabel()
        self.movie_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.movie_label.setMovie(self.movie)
        main_vbox.addWidget(self.movie_label, 1)

        controls = QHBoxLayout()
        self.play_button = QPushButton(qta.icon("fa5s.pause"), "Pause")
        self.play_button.clicked.connect(self.toggle_playback)
        controls.addWidget(self.play_button)
        controls.addStretch()
        main_vbox.addLayout(controls)

        button_box = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        button_box.rejected.connect(self.reject)
        main_vbox.addWidget(button_box)

    def toggle_playback(self):
        """Pause or resume the animation."""
        running = self.movie.state() == QMovie.MovieState.Running
        self.movie.setPaused(running)
        if running:
            self.play_button.setIcon(qta.icon("fa5s.play"))
            self.play_button.setText("Play")
        else:
            self.play_button.setIcon(qta.icon("fa5s.pause"))
            self.play_button.setText("Pause")

    def done(self, result: int) -> None:
        self.movie.stop()
        super().done(result)
