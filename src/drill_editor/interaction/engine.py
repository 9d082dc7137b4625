"""
Pointer and keyboard interaction for the drill canvas.

SelectionEngine translates press/move/release/double-click/key events
(in canvas coordinates, with Qt keyboard modifiers) into selection changes
and element edits on a DrillDocument. It holds no widget state, so the
canvas widget and the tests drive it the same way.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from PySide6.QtCore import Qt

from drill_editor.drills.document import DrillDocument
from drill_editor.drills.models import Element, ElementKind

from .geometry import Bounds, anchors_in_rect, batch_bounds, hit_test

# Distance from the top edge of the handle bounds to the rotate knob
ROTATE_KNOB_OFFSET = 30.0
KNOB_RADIUS = 8.0

NUDGE_STEP = 1.0
NUDGE_STEP_LARGE = 10.0

# Document changes after which the transform handle no longer applies
_FRAME_CHANGES = frozenset(
    {"current_frame", "add_frame", "duplicate_frame", "remove_frame", "clear_frame"}
)

_NUDGE_KEYS: dict[int, tuple[float, float]] = {
    Qt.Key.Key_Left.value: (-1.0, 0.0),
    Qt.Key.Key_Right.value: (1.0, 0.0),
    Qt.Key.Key_Up.value: (0.0, -1.0),
    Qt.Key.Key_Down.value: (0.0, 1.0),
}
_DELETE_KEYS = frozenset({Qt.Key.Key_Delete.value, Qt.Key.Key_Backspace.value})


def _key_value(key: "Qt.Key | int") -> int:
    return key.value if isinstance(key, Enum) else int(key)


def _has_shift(modifiers: Qt.KeyboardModifier) -> bool:
    return bool(modifiers & Qt.KeyboardModifier.ShiftModifier)


def _has_toggle(modifiers: Qt.KeyboardModifier) -> bool:
    return bool(
        modifiers & (Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.MetaModifier)
    )


class DragMode(Enum):
    NONE = auto()
    MARQUEE = auto()
    MOVE = auto()
    SCALE = auto()
    ROTATE = auto()


@dataclass
class Marquee:
    """Rubber-band rectangle from press point to current pointer."""

    start_x: float
    start_y: float
    current_x: float
    current_y: float
    base: list[str] = field(default_factory=list)

    @property
    def rect(self) -> Bounds:
        return Bounds.from_points(self.start_x, self.start_y, self.current_x, self.current_y)


@dataclass
class TransformHandle:
    """Resize/rotate handle attached to a batch of elements.

    Attributes:
        element_ids: Elements the handle transforms
        can_resize: False when every member is rotate-only equipment
        rotation: Rotation shown by the handle, in degrees
        preview_scale: Scale factor of an in-progress knob drag
        preview_rotation: Rotation of an in-progress knob drag
    """

    element_ids: list[str]
    can_resize: bool
    rotation: float = 0.0
    preview_scale: float = 1.0
    preview_rotation: Optional[float] = None


class SelectionEngine:
    """Applies pointer and key input to a document's active frame."""

    def __init__(self, document: DrillDocument):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.document = document

        self.mode = DragMode.NONE
        self.marquee: Optional[Marquee] = None
        self.handle: Optional[TransformHandle] = None
        self.editing_text_id: Optional[str] = None

        self._press_point: Optional[tuple[float, float]] = None
        self._drag_anchor: Optional[tuple[float, float]] = None
        self._drag_origin: Optional[tuple[float, float]] = None
        self._knob_start: float = 1.0

        document.add_listener(self._on_document_changed)

    # === STATE ===

    @property
    def selection(self):
        return self.document.selection

    def _on_document_changed(self, reason: str) -> None:
        if reason in _FRAME_CHANGES:
            self.cancel()
        elif self.handle is not None:
            present = set(self.document.current_frame.element_ids())
            if not all(element_id in present for element_id in self.handle.element_ids):
                self.detach_handle()

    def cancel(self) -> None:
        """Abort any drag in progress and drop the transform handle."""
        self.mode = DragMode.NONE
        self.marquee = None
        self._press_point = None
        self._drag_anchor = None
        self.detach_handle()

    def detach_handle(self) -> None:
        if self.handle is not None:
            self.logger.debug("Transform handle detached")
        self.handle = None

    def release_document(self) -> None:
        """Stop following document changes; the engine is unusable afterwards."""
        self.cancel()
        self.document.remove_listener(self._on_document_changed)

    def handle_bounds(self) -> Optional[Bounds]:
        """Bounds of the elements under the transform handle."""
        if self.handle is None:
            return None
        lookup = self.document.current_frame.by_id()
        return batch_bounds(lookup[i] for i in self.handle.element_ids if i in lookup)

    def scale_knob(self) -> Optional[tuple[float, float]]:
        """Position of the resize knob, or None when resize is disabled."""
        bounds = self.handle_bounds()
        if bounds is None or self.handle is None or not self.handle.can_resize:
            return None
        return (bounds.right, bounds.bottom)

    def rotate_knob(self) -> Optional[tuple[float, float]]:
        bounds = self.handle_bounds()
        if bounds is None:
            return None
        return (bounds.center[0], bounds.top - ROTATE_KNOB_OFFSET)

    def preview(self, element: Element) -> Element:
        """Element as it should be displayed during a knob drag."""
        handle = self.handle
        if handle is None or element.id not in handle.element_ids:
            return element
        if self.mode not in (DragMode.SCALE, DragMode.ROTATE):
            return element
        size = element.size * handle.preview_scale if handle.can_resize else element.size
        rotation = (
            handle.preview_rotation if handle.preview_rotation is not None else element.rotation
        )
        return element.copy(size=size, rotation=rotation)

    # === POINTER INPUT ===

    def press(
        self,
        x: float,
        y: float,
        modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier,
    ) -> None:
        """Handle a primary-button press at canvas point (x, y)."""
        if self.editing_text_id is not None:
            self.editing_text_id = None

        if self._press_knob(x, y):
            return

        before = self.selection.ids
        target = hit_test(self.document.current_frame, x, y)

        if target is None:
            if _has_toggle(modifiers):
                return
            base = before if _has_shift(modifiers) else []
            if not base:
                self.selection.clear()
            self.marquee = Marquee(x, y, x, y, base=base)
            self.mode = DragMode.MARQUEE
        else:
            if _has_shift(modifiers):
                self.selection.add(target.id)
            elif _has_toggle(modifiers):
                self.selection.toggle(target.id)
            elif target.id not in self.selection:
                self.selection.replace([target.id])

            self.mode = DragMode.MOVE if target.id in self.selection else DragMode.NONE
            self._press_point = (x, y)
            self._drag_origin = (target.x, target.y)
            self._drag_anchor = None

        if self.selection.ids != before:
            self.detach_handle()

    def _press_knob(self, x: float, y: float) -> bool:
        if self.handle is None:
            return False
        bounds = self.handle_bounds()
        if bounds is None:
            return False
        center_x, center_y = bounds.center

        scale_knob = self.scale_knob()
        if scale_knob is not None and math.dist(scale_knob, (x, y)) <= KNOB_RADIUS:
            self.mode = DragMode.SCALE
            self._knob_start = max(1.0, math.dist((center_x, center_y), scale_knob))
            self.handle.preview_scale = 1.0
            return True

        rotate_knob = self.rotate_knob()
        if rotate_knob is not None and math.dist(rotate_knob, (x, y)) <= KNOB_RADIUS:
            self.mode = DragMode.ROTATE
            self.handle.preview_rotation = self.handle.rotation
            return True

        return False

    def move(self, x: float, y: float) -> None:
        """Handle pointer motion with the primary button held."""
        match self.mode:
            case DragMode.MARQUEE:
                self._update_marquee(x, y)
            case DragMode.MOVE:
                self._drag_to(x, y)
            case DragMode.SCALE:
                self._drag_scale_knob(x, y)
            case DragMode.ROTATE:
                self._drag_rotate_knob(x, y)
            case DragMode.NONE:
                pass

    def _update_marquee(self, x: float, y: float) -> None:
        assert self.marquee is not None
        self.marquee.current_x = x
        self.marquee.current_y = y
        inside = anchors_in_rect(self.document.current_frame, self.marquee.rect)
        combined = list(self.marquee.base)
        combined.extend(i for i in inside if i not in self.marquee.base)
        if combined != self.selection.ids:
            self.selection.replace(combined)
            self.detach_handle()

    def _drag_to(self, x: float, y: float) -> None:
        selected = self.selection.ids
        if len(selected) == 1:
            assert self._press_point is not None and self._drag_origin is not None
            dx = x - self._press_point[0]
            dy = y - self._press_point[1]
            self.document.set_element_position(
                selected[0], self._drag_origin[0] + dx, self._drag_origin[1] + dy
            )
            return

        # The first motion only establishes the anchor for group drags
        if self._drag_anchor is None:
            self._drag_anchor = (x, y)
            return
        dx = x - self._drag_anchor[0]
        dy = y - self._drag_anchor[1]
        if dx == 0 and dy == 0:
            return
        self._drag_anchor = (x, y)
        self.document.move_elements(selected, dx, dy)

    def _drag_scale_knob(self, x: float, y: float) -> None:
        bounds = self.handle_bounds()
        if bounds is None or self.handle is None:
            return
        distance = math.dist(bounds.center, (x, y))
        self.handle.preview_scale = max(0.05, distance / self._knob_start)

    def _drag_rotate_knob(self, x: float, y: float) -> None:
        bounds = self.handle_bounds()
        if bounds is None or self.handle is None:
            return
        center_x, center_y = bounds.center
        # Knob straight above the center means 0 degrees
        angle = math.degrees(math.atan2(y - center_y, x - center_x)) + 90.0
        self.handle.preview_rotation = round(angle % 360.0, 1)

    def release(self, x: float, y: float) -> None:
        """Handle release of the primary button."""
        if self.mode is DragMode.MARQUEE:
            self._update_marquee(x, y)
        elif self.mode is DragMode.SCALE and self.handle is not None:
            # Resizing keeps every member's own rotation
            self.commit_transform(self.handle.preview_scale, None)
        elif self.mode is DragMode.ROTATE and self.handle is not None:
            rotation = (
                self.handle.preview_rotation
                if self.handle.preview_rotation is not None
                else self.handle.rotation
            )
            self.commit_transform(1.0, rotation)

        self.mode = DragMode.NONE
        self.marquee = None
        self._press_point = None
        self._drag_anchor = None
        self._drag_origin = None

    def double_click(self, x: float, y: float) -> None:
        """Attach the transform handle, or start text editing on text elements."""
        target = hit_test(self.document.current_frame, x, y)
        if target is None:
            return

        if target.kind is ElementKind.TEXT:
            self.editing_text_id = target.id
            self.logger.debug(f"Editing text of {target.id}")
            return

        if not target.is_transformable:
            return

        if target.id not in self.selection:
            self.selection.replace([target.id])

        batch = [el for el in self.document.selected_elements() if el.is_transformable]
        self.handle = TransformHandle(
            element_ids=[el.id for el in batch],
            can_resize=not all(el.is_rotate_only for el in batch),
            rotation=target.rotation,
        )
        self.logger.debug(
            f"Transform handle attached to {len(batch)} elements "
            f"(resize {'enabled' if self.handle.can_resize else 'disabled'})"
        )

    # === EDITS ===

    def commit_transform(self, scale: float, rotation: Optional[float]) -> None:
        """Apply size *= scale and rotation = degrees to the handle's batch.

        A rotation of None leaves each member's rotation unchanged.
        """
        if self.handle is None:
            return
        self.document.apply_transform(
            self.handle.element_ids,
            scale,
            rotation,
            resize=self.handle.can_resize,
        )
        if self.handle is not None:
            if rotation is not None:
                self.handle.rotation = rotation
            self.handle.preview_scale = 1.0
            self.handle.preview_rotation = None

    def commit_text(self, text: str) -> None:
        """Store edited text on the element being edited."""
        if self.editing_text_id is None:
            return
        element_id, self.editing_text_id = self.editing_text_id, None
        self.document.update_element(element_id, text=text or None)

    def key_press(
        self,
        key: "Qt.Key | int",
        modifiers: Qt.KeyboardModifier = Qt.KeyboardModifier.NoModifier,
    ) -> bool:
        """Handle a key press.

        Returns:
            True if the key was consumed
        """
        value = _key_value(key)

        if value in _NUDGE_KEYS:
            if not self.selection:
                return False
            step = NUDGE_STEP_LARGE if _has_shift(modifiers) else NUDGE_STEP
            dx, dy = _NUDGE_KEYS[value]
            self.document.move_elements(self.selection.ids, dx * step, dy * step)
            return True

        if value in _DELETE_KEYS:
            if not self.selection:
                return False
            removed = self.document.remove_selected()
            self.detach_handle()
            self.logger.debug(f"Deleted {len(removed)} selected elements")
            return True

        if value == Qt.Key.Key_Escape.value:
            self.selection.clear()
            self.editing_text_id = None
            self.cancel()
            return True

        return False
