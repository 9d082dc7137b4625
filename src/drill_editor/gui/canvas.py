"""
Interactive drill canvas widget.

Paints the active frame of a DrillDocument scaled to the widget, forwards
pointer and key input to a SelectionEngine, accepts drops from the toolbox
and hosts the inline text editor.
"""

import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QColor,
    QDragEnterEvent,
    QDropEvent,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPen,
)
from PySide6.QtWidgets import QLineEdit, QSizePolicy, QWidget

from drill_editor.drills.document import DrillDocument
from drill_editor.drills.models import CANVAS_HEIGHT, CANVAS_WIDTH, InvalidElementError
from drill_editor.drills.toolbox import Toolbox
from drill_editor.interaction.engine import SelectionEngine
from drill_editor.rendering.painter import SELECTION_COLOR, DrillRenderer

# Drag payload format: "<kind>/<subtype>"
TOOLBOX_MIME_TYPE = "application/x-drill-item"


class DrillCanvas(QWidget):
    """Editing surface for the active frame."""

    document_edited = Signal()

    def __init__(self, toolbox: Toolbox, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.toolbox = toolbox
        self.renderer = DrillRenderer()
        self.document: Optional[DrillDocument] = None
        self.engine: Optional[SelectionEngine] = None

        self.setMinimumSize(CANVAS_WIDTH // 2, CANVAS_HEIGHT // 2)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAcceptDrops(True)

        self.text_editor = QLineEdit(self)
        self.text_editor.hide()
        self.text_editor.editingFinished.connect(self._finish_text_edit)

    # === DOCUMENT ===

    def set_document(self, document: Optional[DrillDocument]) -> None:
        """Show another document (or none)."""
        if self.document is not None:
            self.document.remove_listener(self._on_document_changed)
        if self.engine is not None:
            self.engine.release_document()
        self.document = document
        self.engine = SelectionEngine(document) if document is not None else None
        if document is not None:
            document.add_listener(self._on_document_changed)
        self.text_editor.hide()
        self.update()

    def _on_document_changed(self, reason: str) -> None:
        self.update()
        self.document_edited.emit()

    # === COORDINATES ===

    def _scale_and_offset(self) -> tuple[float, float, float]:
        scale = min(self.width() / CANVAS_WIDTH, self.height() / CANVAS_HEIGHT)
        offset_x = (self.width() - CANVAS_WIDTH * scale) / 2
        offset_y = (self.height() - CANVAS_HEIGHT * scale) / 2
        return scale, offset_x, offset_y

    def to_canvas(self, point: QPointF) -> tuple[float, float]:
        """Widget position to canvas pixels."""
        scale, offset_x, offset_y = self._scale_and_offset()
        return ((point.x() - offset_x) / scale, (point.y() - offset_y) / scale)

    def to_widget(self, x: float, y: float) -> QPointF:
        scale, offset_x, offset_y = self._scale_and_offset()
        return QPointF(offset_x + x * scale, offset_y + y * scale)

    # === PAINTING ===

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), self.palette().window())

            if self.document is None or self.engine is None:
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No drill open")
                return

            scale, offset_x, offset_y = self._scale_and_offset()
            painter.translate(offset_x, offset_y)
            painter.scale(scale, scale)
            painter.setClipRect(QRectF(0, 0, CANVAS_WIDTH, CANVAS_HEIGHT))

            self.renderer.paint(
                painter,
                self.document.current_frame.elements,
                selected=set(self.document.selection.ids),
                element_filter=self.engine.preview,
            )
            self._paint_overlays(painter)
        finally:
            painter.end()

    def _paint_overlays(self, painter: QPainter) -> None:
        assert self.engine is not None
        accent = QColor(SELECTION_COLOR)

        marquee = self.engine.marquee
        if marquee is not None:
            rect = marquee.rect
            fill = QColor(accent)
            fill.setAlpha(40)
            painter.setPen(QPen(accent, 1, Qt.PenStyle.DashLine))
            painter.setBrush(fill)
            painter.drawRect(QRectF(rect.left, rect.top, rect.width, rect.height))

        bounds = self.engine.handle_bounds()
        if bounds is None:
            return
        painter.setPen(QPen(accent, 1, Qt.PenStyle.DashLine))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(bounds.left, bounds.top, bounds.width, bounds.height))

        painter.setPen(QPen(QColor("#111827"), 1))
        painter.setBrush(accent)
        for knob in (self.engine.scale_knob(), self.engine.rotate_knob()):
            if knob is not None:
                painter.drawEllipse(QPointF(*knob), 6.0, 6.0)

    # === POINTER ===

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self.engine is None or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        self.setFocus()
        x, y = self.to_canvas(event.position())
        self.engine.press(x, y, event.modifiers())
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self.engine is None or not event.buttons() & Qt.MouseButton.LeftButton:
            return
        x, y = self.to_canvas(event.position())
        self.engine.move(x, y)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self.engine is None or event.button() != Qt.MouseButton.LeftButton:
            return
        x, y = self.to_canvas(event.position())
        self.engine.release(x, y)
        self.update()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if self.engine is None or self.document is None:
            return
        x, y = self.to_canvas(event.position())
        self.engine.double_click(x, y)
        if self.engine.editing_text_id is not None:
            self._begin_text_edit(self.engine.editing_text_id)
        self.update()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if self.engine is not None and self.engine.key_press(event.key(), event.modifiers()):
            self.update()
            return
        super().keyPressEvent(event)

    # === TEXT EDITING ===

    def _begin_text_edit(self, element_id: str) -> None:
        assert self.document is not None
        element = self.document.current_frame.find(element_id)
        if element is None:
            return
        position = self.to_widget(element.x, element.y).toPoint()
        self.text_editor.setText(element.text or "")
        self.text_editor.move(position)
        self.text_editor.resize(max(120, self.text_editor.sizeHint().width()), 24)
        self.text_editor.show()
        self.text_editor.setFocus()
        self.text_editor.selectAll()

    def _finish_text_edit(self) -> None:
        if not self.text_editor.isVisible():
            return
        self.text_editor.hide()
        if self.engine is not None:
            self.engine.commit_text(self.text_editor.text())
        self.setFocus()
        self.update()

    # === DROPS ===

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if self.document is not None and event.mimeData().hasFormat(TOOLBOX_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        if self.document is None:
            return
        payload = bytes(event.mimeData().data(TOOLBOX_MIME_TYPE).data()).decode("utf-8")
        kind, _, subtype = payload.partition("/")
        x, y = self.to_canvas(event.position())
        try:
            draft = self.toolbox.draft(kind, subtype, x, y)
        except InvalidElementError as e:
            self.logger.warning(f"Rejected drop of {payload!r}: {e}")
            event.ignore()
            return
        self.document.add_element(self.document.current_index, draft)
        event.acceptProposedAction()
