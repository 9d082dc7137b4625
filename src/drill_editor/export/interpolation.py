"""Keyframe tweening.

Builds the sample sequence of an animation: each keyframe is held for the
keyframe delay, followed by STEPS - 1 in-between samples towards the next
keyframe. Elements are paired across keyframes by id.
"""

from dataclasses import dataclass
from typing import Sequence

from drill_editor.drills.models import Element, Frame

STEPS = 10


@dataclass
class SampleFrame:
    """One rendered sample of the animation and its display duration."""

    elements: list[Element]
    duration_ms: int


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def interpolate_elements(start: Frame, end: Frame, t: float) -> list[Element]:
    """Elements of start moved a fraction t towards their counterparts in end.

    Only x, y, rotation and size are interpolated. Elements with no
    counterpart stay where they are; elements only present in end do not
    appear until end is shown.
    """
    targets = end.by_id()
    result = []
    for element in start.elements:
        target = targets.get(element.id, element)
        result.append(
            element.copy(
                x=lerp(element.x, target.x, t),
                y=lerp(element.y, target.y, t),
                rotation=lerp(element.rotation, target.rotation, t),
                size=lerp(element.size, target.size, t),
            )
        )
    return result


def build_sample_sequence(
    frames: Sequence[Frame], delay_ms: int, steps: int = STEPS
) -> list[SampleFrame]:
    """Expand keyframes into the full list of animation samples.

    Args:
        frames: Keyframes in playback order (at least one)
        delay_ms: How long each keyframe is held
        steps: Subdivisions between consecutive keyframes

    Returns:
        len(frames) + (len(frames) - 1) * (steps - 1) samples
    """
    if not frames:
        raise ValueError("At least one frame is required")
    if steps < 1:
        raise ValueError(f"steps must be positive, got {steps}")

    tween_ms = max(1, round(delay_ms / steps))
    samples: list[SampleFrame] = []

    for current, following in zip(frames, frames[1:]):
        samples.append(SampleFrame([el.copy() for el in current.elements], delay_ms))
        for step in range(1, steps):
            samples.append(
                SampleFrame(interpolate_elements(current, following, step / steps), tween_ms)
            )

    samples.append(SampleFrame([el.copy() for el in frames[-1].elements], delay_ms))
    return samples
