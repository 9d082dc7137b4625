"""Structural comparison of frame lists.

Decides whether a save needs a fresh animation. Positions and rotation may
drift by 0.1 and size by 0.01 without counting as a change, which absorbs
the rounding introduced by the normalized storage format.
"""

from typing import Optional, Sequence

from drill_editor.drills.models import Element, Frame

POSITION_TOLERANCE = 0.1
ROTATION_TOLERANCE = 0.1
SIZE_TOLERANCE = 0.01


def elements_differ(current: Element, original: Element) -> bool:
    return (
        current.kind != original.kind
        or current.subtype != original.subtype
        or abs(current.x - original.x) > POSITION_TOLERANCE
        or abs(current.y - original.y) > POSITION_TOLERANCE
        or abs(current.rotation - original.rotation) > ROTATION_TOLERANCE
        or abs(current.size - original.size) > SIZE_TOLERANCE
        or current.text != original.text
        or current.color != original.color
    )


def frames_differ(original: Optional[Sequence[Frame]], current: Sequence[Frame]) -> bool:
    """Whether current differs structurally from the last loaded/saved frames.

    Elements are compared position by position in z-order. With no
    original (a drill never saved) everything counts as changed.
    """
    if original is None:
        return True
    if len(original) != len(current):
        return True

    for current_frame, original_frame in zip(current, original):
        if len(current_frame.elements) != len(original_frame.elements):
            return True
        for current_el, original_el in zip(current_frame.elements, original_frame.elements):
            if elements_differ(current_el, original_el):
                return True
    return False
