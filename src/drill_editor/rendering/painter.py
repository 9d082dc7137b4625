"""Raster rendering of drill frames.

DrillRenderer paints a frame (pitch background plus elements) into a QImage
with QPainter. The same code paints the interactive canvas widget, the
animation samples, the thumbnail and the document pages, so every output
looks identical.

Painting into a QImage is safe from a worker thread, which the animation
exporter relies on.
"""

import logging
from typing import Callable, Collection, Iterable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QImage,
    QPainter,
    QPainterPath,
    QPen,
    QPolygonF,
)

from drill_editor.drills.models import CANVAS_HEIGHT, CANVAS_WIDTH, Element, ElementKind
from drill_editor.interaction.geometry import (
    BASE_RADIUS,
    STROKE_LENGTH,
    TEXT_FONT_SIZE,
    local_box,
)

PITCH_COLOR = "#3f8f3a"
PITCH_STRIPE_COLOR = "#459a3f"
PITCH_LINE_COLOR = "#f8fafc"
SELECTION_COLOR = "#facc15"

# Fallback colours when an element carries none
DEFAULT_COLORS: dict[str, str] = {
    "player": "#2563eb",
    "cone": "#f97316",
    "cone-orange": "#f97316",
    "cone-blue": "#3b82f6",
    "line": "#000000",
    "movement": "#e11d48",
    "text": "#000000",
}

ElementFilter = Callable[[Element], Element]


def _color(element: Element) -> QColor:
    if element.color:
        return QColor(element.color)
    key = element.subtype if element.subtype in DEFAULT_COLORS else element.kind.value
    return QColor(DEFAULT_COLORS.get(key, "#000000"))


class DrillRenderer:
    """Paints frames onto QImages or existing painters."""

    def __init__(self, show_pitch: bool = True):
        """Initialize the renderer.

        Args:
            show_pitch: Whether to paint the pitch markings behind elements
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.show_pitch = show_pitch

    def render(
        self,
        elements: Iterable[Element],
        width: int = CANVAS_WIDTH,
        pixel_ratio: float = 1.0,
    ) -> QImage:
        """Render elements to a new image.

        Args:
            elements: Elements in z-order
            width: Logical output width; height keeps the canvas aspect
            pixel_ratio: Device pixels per logical pixel

        Returns:
            RGB32 QImage of size (width * pixel_ratio, height * pixel_ratio)
        """
        height = round(width * CANVAS_HEIGHT / CANVAS_WIDTH)
        image = QImage(
            round(width * pixel_ratio),
            round(height * pixel_ratio),
            QImage.Format.Format_RGB32,
        )
        image.fill(QColor(PITCH_COLOR))

        painter = QPainter(image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
            painter.scale(
                image.width() / CANVAS_WIDTH,
                image.height() / CANVAS_HEIGHT,
            )
            self.paint(painter, elements)
        finally:
            painter.end()
        return image

    def paint(
        self,
        painter: QPainter,
        elements: Iterable[Element],
        selected: Collection[str] = (),
        element_filter: Optional[ElementFilter] = None,
    ) -> None:
        """Paint pitch and elements in canvas coordinates.

        Args:
            painter: Active painter whose transform maps the 900x600 canvas
            elements: Elements in z-order
            selected: Ids to highlight
            element_filter: Optional mapping applied before painting (previews)
        """
        if self.show_pitch:
            self.paint_pitch(painter)
        for element in elements:
            shown = element_filter(element) if element_filter else element
            self.paint_element(painter, shown, shown.id in selected)

    def paint_pitch(self, painter: QPainter) -> None:
        """Paint a striped pitch with standard markings."""
        painter.save()
        painter.fillRect(QRectF(0, 0, CANVAS_WIDTH, CANVAS_HEIGHT), QColor(PITCH_COLOR))

        stripe = CANVAS_WIDTH / 12
        for index in range(0, 12, 2):
            painter.fillRect(
                QRectF(index * stripe, 0, stripe, CANVAS_HEIGHT), QColor(PITCH_STRIPE_COLOR)
            )

        pen = QPen(QColor(PITCH_LINE_COLOR), 2)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        margin = 20.0
        field = QRectF(margin, margin, CANVAS_WIDTH - 2 * margin, CANVAS_HEIGHT - 2 * margin)
        painter.drawRect(field)

        center = field.center()
        painter.drawLine(QPointF(center.x(), field.top()), QPointF(center.x(), field.bottom()))
        painter.drawEllipse(center, 60.0, 60.0)
        painter.setBrush(QColor(PITCH_LINE_COLOR))
        painter.drawEllipse(center, 3.0, 3.0)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        box_w, box_h = 110.0, 260.0
        goal_w, goal_h = 40.0, 120.0
        for left_side in (True, False):
            x_box = field.left() if left_side else field.right() - box_w
            x_goal = field.left() if left_side else field.right() - goal_w
            painter.drawRect(QRectF(x_box, center.y() - box_h / 2, box_w, box_h))
            painter.drawRect(QRectF(x_goal, center.y() - goal_h / 2, goal_w, goal_h))
        painter.restore()

    def paint_element(self, painter: QPainter, element: Element, selected: bool = False) -> None:
        """Paint one element at its anchor with size and rotation applied."""
        painter.save()
        painter.translate(element.x, element.y)
        painter.rotate(element.rotation)

        match element.kind:
            case ElementKind.PLAYER:
                self._paint_player(painter, element, selected)
            case ElementKind.EQUIPMENT:
                self._paint_equipment(painter, element)
            case ElementKind.MOVEMENT:
                self._paint_movement(painter, element)
            case ElementKind.TEXT:
                self._paint_text(painter, element)

        if selected and element.kind is not ElementKind.PLAYER:
            box = local_box(element)
            outline = QPen(QColor(SELECTION_COLOR), 2, Qt.PenStyle.DashLine)
            painter.setPen(outline)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(box.left - 3, box.top - 3, box.width + 6, box.height + 6))
        painter.restore()

    def _paint_player(self, painter: QPainter, element: Element, selected: bool) -> None:
        radius = BASE_RADIUS * element.size
        if selected:
            painter.setPen(QPen(QColor(SELECTION_COLOR), 4))
        else:
            painter.setPen(QPen(QColor("#000000"), 1))
        painter.setBrush(QBrush(_color(element)))
        painter.drawEllipse(QPointF(0, 0), radius, radius)

        if element.text:
            font = QFont()
            font.setBold(True)
            font.setPixelSize(max(6, round(radius)))
            painter.setFont(font)
            painter.setPen(QColor("#ffffff"))
            painter.drawText(
                QRectF(-radius, -radius, 2 * radius, 2 * radius),
                Qt.AlignmentFlag.AlignCenter,
                element.text,
            )

    def _paint_equipment(self, painter: QPainter, element: Element) -> None:
        radius = BASE_RADIUS * element.size
        color = _color(element)

        if element.subtype in ("cone", "cone-orange", "cone-blue"):
            triangle = QPolygonF(
                [QPointF(0, -radius), QPointF(radius, radius), QPointF(-radius, radius)]
            )
            painter.setPen(QPen(color.darker(140), 1))
            painter.setBrush(QBrush(color))
            painter.drawPolygon(triangle)
        elif element.subtype == "line":
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(color))
            painter.drawRect(QRectF(-1.5 * radius, -2, 3 * radius, 4))
        elif element.subtype == "circle":
            painter.setPen(QPen(QColor("#1f2937"), 2))
            painter.setBrush(QBrush(QColor("#ffffff")))
            painter.drawEllipse(QPointF(0, 0), radius, radius)
        elif element.subtype == "square":
            painter.setPen(QPen(QColor("#1f2937"), 2))
            painter.setBrush(QBrush(QColor("#ffffff")))
            painter.drawRect(QRectF(-radius, -radius, 2 * radius, 2 * radius))

    def _paint_movement(self, painter: QPainter, element: Element) -> None:
        length = STROKE_LENGTH * element.size
        color = _color(element)
        pen = QPen(color, 3)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)

        if element.subtype == "dotted-line":
            pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.drawLine(QPointF(0, 0), QPointF(length, 0))
        elif element.subtype == "curved-line":
            path = QPainterPath(QPointF(0, 0))
            path.quadTo(QPointF(length / 2, -26 * element.size), QPointF(length, 0))
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawPath(path)
        else:
            head = 8 * element.size
            painter.setPen(pen)
            painter.drawLine(QPointF(0, 0), QPointF(length - head, 0))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(color))
            painter.drawPolygon(
                QPolygonF(
                    [
                        QPointF(length, 0),
                        QPointF(length - head, -head / 2),
                        QPointF(length - head, head / 2),
                    ]
                )
            )

    def _paint_text(self, painter: QPainter, element: Element) -> None:
        box = local_box(element)
        rect = QRectF(box.left, box.top, box.width, box.height)

        if element.subtype == "note":
            painter.setPen(QPen(QColor("#ca8a04"), 1))
            painter.setBrush(QBrush(QColor("#fef9c3")))
            painter.drawRoundedRect(rect, 4, 4)

        font = QFont()
        font.setPixelSize(max(6, round(TEXT_FONT_SIZE * element.size)))
        painter.setFont(font)
        painter.setPen(_color(element))
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, element.text or "Text")
