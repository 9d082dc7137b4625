"""Element geometry and hit-testing.

Shapes are described in element-local coordinates relative to the anchor
point (x, y), scaled by ``size`` and rotated about the anchor by
``rotation`` degrees. The renderer draws within the same local boxes, so
what is hit is what is seen.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from drill_editor.drills.models import Element, ElementKind, Frame

# Base radius of players, cones and rings at size 1.0
BASE_RADIUS = 12.0
# Base length of movement strokes at size 1.0
STROKE_LENGTH = 40.0
TEXT_FONT_SIZE = 14.0
# Extra pixels around shapes that still count as a hit
HIT_TOLERANCE = 4.0


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle, inclusive on all edges."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def united(self, other: "Bounds") -> "Bounds":
        return Bounds(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    @classmethod
    def from_points(cls, x0: float, y0: float, x1: float, y1: float) -> "Bounds":
        """Normalized rectangle spanned by two corner points."""
        return cls(min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))


def text_extent(text: Optional[str], size: float) -> tuple[float, float]:
    """Approximate width and height of a text label."""
    font = TEXT_FONT_SIZE * size
    label = text or "Text"
    return (max(font, 0.6 * font * len(label)), font * 1.4)


def local_box(element: Element) -> Bounds:
    """Unrotated shape box relative to the anchor."""
    s = element.size
    r = BASE_RADIUS * s

    match element.kind:
        case ElementKind.PLAYER:
            return Bounds(-r, -r, r, r)
        case ElementKind.EQUIPMENT:
            if element.subtype == "line":
                return Bounds(-1.5 * r, -2.0, 1.5 * r, 2.0)
            return Bounds(-r, -r, r, r)
        case ElementKind.MOVEMENT:
            length = STROKE_LENGTH * s
            if element.subtype == "curved-line":
                return Bounds(0.0, -15.0 * s, length, 2.0 * s)
            return Bounds(0.0, -4.0 * s, length, 4.0 * s)
        case ElementKind.TEXT:
            width, height = text_extent(element.text, s)
            return Bounds(0.0, 0.0, width, height)
    raise ValueError(f"Unhandled element kind: {element.kind}")


def rotate_point(x: float, y: float, degrees: float) -> tuple[float, float]:
    """Rotate a point about the origin (clockwise on screen for positive angles)."""
    radians = math.radians(degrees)
    cos_a, sin_a = math.cos(radians), math.sin(radians)
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def element_corners(element: Element) -> list[tuple[float, float]]:
    """Canvas coordinates of the four rotated corners of an element."""
    box = local_box(element)
    corners = [
        (box.left, box.top),
        (box.right, box.top),
        (box.right, box.bottom),
        (box.left, box.bottom),
    ]
    result = []
    for cx, cy in corners:
        rx, ry = rotate_point(cx, cy, element.rotation)
        result.append((element.x + rx, element.y + ry))
    return result


def element_bounds(element: Element) -> Bounds:
    """Axis-aligned bounds of the rotated element."""
    corners = element_corners(element)
    xs = [x for x, _ in corners]
    ys = [y for _, y in corners]
    return Bounds(min(xs), min(ys), max(xs), max(ys))


def batch_bounds(elements: Iterable[Element]) -> Optional[Bounds]:
    """Union of the bounds of several elements, or None when empty."""
    result: Optional[Bounds] = None
    for element in elements:
        bounds = element_bounds(element)
        result = bounds if result is None else result.united(bounds)
    return result


def contains_point(element: Element, x: float, y: float, tolerance: float = HIT_TOLERANCE) -> bool:
    """Whether a canvas point falls on the element's rotated shape box."""
    lx, ly = rotate_point(x - element.x, y - element.y, -element.rotation)
    box = local_box(element)
    return (
        box.left - tolerance <= lx <= box.right + tolerance
        and box.top - tolerance <= ly <= box.bottom + tolerance
    )


def hit_test(frame: Frame, x: float, y: float) -> Optional[Element]:
    """Topmost element under a point."""
    for element in reversed(frame.elements):
        if contains_point(element, x, y):
            return element
    return None


def anchors_in_rect(frame: Frame, rect: Bounds) -> list[str]:
    """Ids of elements whose anchor lies inside rect (edges included)."""
    return [element.id for element in frame.elements if rect.contains(element.x, element.y)]
