"""Timed frame playback.

Steps through the frames of a document on a QTimer and stops by itself once
playback wraps back to the first frame.
"""

import logging
from typing import TYPE_CHECKING

from PySide6.QtCore import QObject, QTimer, Signal

if TYPE_CHECKING:
    from .document import DrillDocument


class FramePlayer(QObject):
    """Auto-advances the current frame of a DrillDocument."""

    frame_changed = Signal(int)
    playing_changed = Signal(bool)

    def __init__(self, document: "DrillDocument", interval_ms: int = 2000, parent: QObject | None = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.document = document

        self.timer = QTimer(self)
        self.timer.setSingleShot(False)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.advance)

    @property
    def is_playing(self) -> bool:
        return self.timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self.timer.interval()

    def set_interval(self, interval_ms: int) -> None:
        """Change the delay between frames, effective from the next tick."""
        self.timer.setInterval(interval_ms)

    def toggle(self) -> None:
        """Start playback, or stop it if already running."""
        if self.is_playing:
            self.stop()
        else:
            self.start()

    def start(self) -> None:
        if self.is_playing:
            return
        self.timer.start()
        self.logger.debug(f"Playback started at {self.timer.interval()}ms per frame")
        self.playing_changed.emit(True)

    def stop(self) -> None:
        if not self.is_playing:
            return
        self.timer.stop()
        self.logger.debug("Playback stopped")
        self.playing_changed.emit(False)

    def advance(self) -> None:
        """Show the next frame; stop when wrapping back to frame 0.

        With a single frame the first tick wraps immediately, so playback
        stops after one interval.
        """
        frame_count = len(self.document.frames)
        next_index = (self.document.current_index + 1) % frame_count
        self.document.set_current_frame(next_index)
        self.frame_changed.emit(next_index)
        if next_index == 0:
            self.stop()
