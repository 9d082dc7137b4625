"""
Editable drill document.

DrillDocument owns the frame list, the active frame pointer, the selection
and the player counters. All edits go through it so that every mutation
bumps ``revision``, which downstream caches (the animation exporter) use to
detect changes.
"""

import logging
from typing import Callable, Iterable, Optional

from .counters import PlayerCounters
from .frame_manager import FrameOperationsMixin
from .models import (
    CONE_SUBTYPES,
    MUTABLE_FIELDS,
    Element,
    ElementDraft,
    ElementKind,
    Frame,
    InvalidElementError,
    new_element_id,
    new_frame_id,
)
from .selection import Selection

ChangeListener = Callable[[str], None]


class ElementNotFoundError(KeyError):
    """Raised when an element id is not present in the active frame."""
    pass


class DrillDocument(FrameOperationsMixin):
    """In-memory drill being edited.

    Deleting an element removes it from the active frame and from every
    later frame, but never from earlier frames.
    """

    def __init__(
        self,
        frames: Optional[list[Frame]] = None,
        title: str = "New Training Session",
        description: str = "",
    ):
        """Initialize the document.

        Args:
            frames: Initial frames; a single empty frame when omitted or empty
            title: Drill title carried through to the saved record
            description: Drill description carried through to the saved record
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.frames: list[Frame] = list(frames) if frames else [
            Frame(id=new_frame_id(), name="Frame 1")
        ]
        self.current_index = 0
        self.title = title
        self.description = description

        self.selection = Selection()
        self.counters = PlayerCounters()
        for frame in self.frames:
            self.counters.seed_from_elements(frame.id, frame.elements)

        self.revision = 0
        self._listeners: list[ChangeListener] = []

    # === CHANGE TRACKING ===

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked with a reason string after each change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unregister a change callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _touch(self, reason: str, structural: bool = True) -> None:
        """Record a change and notify listeners.

        Structural changes alter what an export would render and bump the
        revision; others (renames, frame switches) only notify.
        """
        if structural:
            self.revision += 1
        for listener in list(self._listeners):
            listener(reason)

    # === ACCESS ===

    @property
    def current_frame(self) -> Frame:
        """The active frame."""
        return self.frames[self.current_index]

    def frame_at(self, index: int) -> Frame:
        """Frame by index."""
        if not 0 <= index < len(self.frames):
            raise IndexError(f"Frame index out of range: {index}")
        return self.frames[index]

    def selected_elements(self) -> list[Element]:
        """Selected elements of the active frame, in z-order."""
        return [el for el in self.current_frame.elements if el.id in self.selection]

    def snapshot(self) -> list[Frame]:
        """Deep copy of the frame list, safe to hand to a background worker."""
        return [frame.copy() for frame in self.frames]

    # === ELEMENT EDITING ===

    def add_element(self, frame_index: int, draft: ElementDraft) -> Element:
        """Insert a new element into a frame.

        Cone-family equipment inherits color, size and rotation from the most
        recently inserted element of the same subtype in that frame. Numbered
        players receive the next number of their team.

        Args:
            frame_index: Target frame index
            draft: Element description from the toolbox

        Returns:
            The inserted Element
        """
        frame = self.frame_at(frame_index)
        element = Element.from_draft(new_element_id(draft.kind), draft)

        if element.kind is ElementKind.EQUIPMENT and element.subtype in CONE_SUBTYPES:
            siblings = [
                el
                for el in frame.elements
                if el.kind is ElementKind.EQUIPMENT and el.subtype == element.subtype
            ]
            if siblings:
                latest = siblings[-1]
                element.color = latest.color
                element.size = latest.size
                element.rotation = latest.rotation

        if element.is_numbered_player:
            element.text = str(self.counters.take_next(frame.id, element.subtype))

        frame.elements.append(element)
        self.logger.debug(
            f"Added {element.kind.value}/{element.subtype} {element.id} to '{frame.name}'"
        )
        self._touch("add_element")
        return element

    def update_element(self, element_id: str, **changes: object) -> Element:
        """Merge field changes into an element of the active frame.

        Raises:
            ElementNotFoundError: If the id is not in the active frame
            InvalidElementError: If an identity or unknown field is given
        """
        invalid = set(changes) - MUTABLE_FIELDS
        if invalid:
            raise InvalidElementError(f"Fields cannot be updated: {sorted(invalid)}")

        frame = self.current_frame
        index = frame.index_of(element_id)
        if index < 0:
            raise ElementNotFoundError(element_id)

        updated = frame.elements[index].copy(**changes)
        if updated.size <= 0:
            raise InvalidElementError(f"Element size must be positive, got {updated.size}")
        frame.elements[index] = updated
        self._touch("update_element")
        return updated

    def remove_element(self, element_id: str) -> Optional[Element]:
        """Remove an element from the active frame and all later frames.

        Returns:
            The element removed from the active frame, or None if absent
        """
        frame = self.current_frame
        element = frame.find(element_id)
        if element is None:
            self.logger.debug(f"Remove ignored, {element_id} not in '{frame.name}'")
            return None

        if element.is_numbered_player:
            self.counters.release(frame.id, element.subtype, element.player_number)

        for later in self.frames[self.current_index:]:
            later.elements = [el for el in later.elements if el.id != element_id]

        self.selection.discard(element_id)
        self.logger.debug(f"Removed {element_id} from frame {self.current_index} onward")
        self._touch("remove_element")
        return element

    def remove_elements(self, element_ids: Iterable[str]) -> list[Element]:
        """Remove several elements, applying the counter rule one by one."""
        wanted = set(element_ids)
        ordered = [el.id for el in self.current_frame.elements if el.id in wanted]
        removed = []
        for element_id in ordered:
            element = self.remove_element(element_id)
            if element is not None:
                removed.append(element)
        return removed

    def remove_selected(self) -> list[Element]:
        """Remove every selected element and clear the selection."""
        removed = self.remove_elements(self.selection.ids)
        self.selection.clear()
        return removed

    def move_elements(self, element_ids: Iterable[str], dx: float, dy: float) -> None:
        """Translate elements of the active frame, clamping at zero per element."""
        wanted = set(element_ids)
        if not wanted or (dx == 0 and dy == 0):
            return
        frame = self.current_frame
        frame.elements = [
            el.copy(x=max(0.0, el.x + dx), y=max(0.0, el.y + dy)) if el.id in wanted else el
            for el in frame.elements
        ]
        self._touch("move_elements")

    def set_element_position(self, element_id: str, x: float, y: float) -> Element:
        """Place one element, clamping both coordinates at zero."""
        return self.update_element(element_id, x=max(0.0, x), y=max(0.0, y))

    def apply_transform(
        self,
        element_ids: Iterable[str],
        scale: float,
        rotation: Optional[float],
        resize: bool = True,
    ) -> None:
        """Commit a resize/rotate to several elements at once.

        Args:
            element_ids: Elements of the active frame to transform
            scale: Factor applied to each element's size (ignored if not resize)
            rotation: Absolute rotation in degrees set on each element, or None
                to keep each element's own rotation
            resize: Whether the batch may change size
        """
        if scale <= 0:
            raise InvalidElementError(f"Scale factor must be positive, got {scale}")
        wanted = set(element_ids)
        frame = self.current_frame
        frame.elements = [
            el.copy(
                size=el.size * scale if resize else el.size,
                rotation=el.rotation if rotation is None else rotation,
            )
            if el.id in wanted
            else el
            for el in frame.elements
        ]
        self._touch("transform")

    def clear_frame(self) -> None:
        """Empty the active frame and reset its player counters."""
        frame = self.current_frame
        frame.elements = []
        self.counters.reset_frame(frame.id)
        self.selection.clear()
        self.logger.debug(f"Cleared frame '{frame.name}'")
        self._touch("clear_frame")
