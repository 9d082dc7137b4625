"""
Frame bar: frame list, frame operations and playback controls.
"""

import logging
from typing import Optional

import qtawesome as qta  # type: ignore
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette
from PySide6.QtWidgets import (
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QToolButton,
    QWidget,
)

from drill_editor.drills.document import DrillDocument
from drill_editor.drills.playback import FramePlayer


class FrameBar(QWidget):
    """Horizontal strip listing the frames of a document."""

    BUTTONS = (
        ("previous", "fa5s.step-backward", "Previous frame"),
        ("play", "fa5s.play", "Play frames"),
        ("next", "fa5s.step-forward", "Next frame"),
        ("add", "fa5s.plus", "Add empty frame"),
        ("duplicate", "fa5s.clone", "Duplicate current frame"),
        ("remove", "fa5s.trash-alt", "Remove current frame"),
    )

    def __init__(self, playback_interval_ms: int = 2000, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.playback_interval_ms = playback_interval_ms
        self.document: Optional[DrillDocument] = None
        self.player: Optional[FramePlayer] = None
        self._updating = False

        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        self.buttons: dict[str, QToolButton] = {}
        icon_color = self.palette().color(QPalette.ColorRole.WindowText)
        for name, icon_name, tooltip in self.BUTTONS:
            button = QToolButton()
            button.setToolTip(tooltip)
            try:
                button.setIcon(qta.icon(icon_name, color=icon_color))  # type: ignore[arg-type]
            except Exception as e:
                self.logger.warning(f"Failed to load icon {icon_name}: {e}")
                button.setText(name.title())
            self.buttons[name] = button
            layout.addWidget(button)

        self.buttons["previous"].clicked.connect(self._on_previous)
        self.buttons["next"].clicked.connect(self._on_next)
        self.buttons["play"].clicked.connect(self._on_play)
        self.buttons["add"].clicked.connect(self._on_add)
        self.buttons["duplicate"].clicked.connect(self._on_duplicate)
        self.buttons["remove"].clicked.connect(self._on_remove)

        self.frame_list = QListWidget()
        self.frame_list.setFlow(QListWidget.Flow.LeftToRight)
        self.frame_list.setFixedHeight(48)
        self.frame_list.currentRowChanged.connect(self._on_row_changed)
        self.frame_list.itemChanged.connect(self._on_item_renamed)
        layout.addWidget(self.frame_list, 1)

    # === DOCUMENT ===

    def set_document(self, document: Optional[DrillDocument]) -> None:
        if self.player is not None:
            self.player.stop()
            self.player.deleteLater()
            self.player = None
        if self.document is not None:
            self.document.remove_listener(self._on_document_changed)

        self.document = document
        if document is not None:
            document.add_listener(self._on_document_changed)
            self.player = FramePlayer(document, self.playback_interval_ms, self)
            self.player.playing_changed.connect(self._on_playing_changed)
        self.refresh()

    def set_playback_interval(self, interval_ms: int) -> None:
        self.playback_interval_ms = interval_ms
        if self.player is not None:
            self.player.set_interval(interval_ms)

    def refresh(self) -> None:
        """Rebuild the list from the document."""
        self._updating = True
        try:
            self.frame_list.clear()
            if self.document is None:
                return
            for frame in self.document.frames:
                item = QListWidgetItem(frame.name)
                item.setFlags(item.flags() | Qt.ItemFlag.ItemIsEditable)
                self.frame_list.addItem(item)
            self.frame_list.setCurrentRow(self.document.current_index)
            self.buttons["remove"].setEnabled(len(self.document.frames) > 1)
        finally:
            self._updating = False

    def _on_document_changed(self, reason: str) -> None:
        if reason in ("add_frame", "duplicate_frame", "remove_frame", "rename_frame",
                      "current_frame", "clear_frame"):
            self.refresh()

    # === HANDLERS ===

    def _on_row_changed(self, row: int) -> None:
        if self._updating or self.document is None or row < 0:
            return
        if row != self.document.current_index:
            self.document.set_current_frame(row)

    def _on_item_renamed(self, item: QListWidgetItem) -> None:
        if self._updating or self.document is None:
            return
        row = self.frame_list.row(item)
        name = item.text().strip()
        if name and name != self.document.frames[row].name:
            self.document.rename_frame(row, name)

    def _on_previous(self) -> None:
        if self.document is not None:
            self.document.previous_frame()

    def _on_next(self) -> None:
        if self.document is not None:
            self.document.next_frame()

    def _on_play(self) -> None:
        if self.player is not None:
            self.player.toggle()

    def _on_add(self) -> None:
        if self.document is not None:
            self.document.add_frame()

    def _on_duplicate(self) -> None:
        if self.document is not None:
            self.document.duplicate_frame()

    def _on_remove(self) -> None:
        if self.document is not None:
            self.document.remove_frame(self.document.current_index)

    def _on_playing_changed(self, playing: bool) -> None:
        icon_name = "fa5s.stop" if playing else "fa5s.play"
        icon_color = self.palette().color(QPalette.ColorRole.WindowText)
        try:
            self.buttons["play"].setIcon(qta.icon(icon_name, color=icon_color))  # type: ignore[arg-type]
        except Exception as e:
            self.logger.warning(f"Failed to load icon {icon_name}: {e}")
        self.buttons["play"].setToolTip("Stop playback" if playing else "Play frames")
