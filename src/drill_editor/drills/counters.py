"""Auto-numbering counters for numbered players.

Counters are keyed by (frame id, subtype) so that removing or reordering
frames never attributes a counter to the wrong frame.
"""

import logging
from typing import Iterable

from .models import Element


class PlayerCounters:
    """Running player numbers per frame and team subtype."""

    def __init__(self) -> None:
        self._counters: dict[tuple[str, str], int] = {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get(self, frame_id: str, subtype: str) -> int:
        """Current counter value (0 when never used)."""
        return self._counters.get((frame_id, subtype), 0)

    def next_number(self, frame_id: str, subtype: str) -> int:
        """Number the next player of this subtype would receive."""
        return self.get(frame_id, subtype) + 1

    def take_next(self, frame_id: str, subtype: str) -> int:
        """Allocate the next number and advance the counter."""
        number = self.next_number(frame_id, subtype)
        self._counters[(frame_id, subtype)] = number
        return number

    def release(self, frame_id: str, subtype: str, number: int | None) -> None:
        """Account for a removed player.

        The counter only steps back when the removed player carried the
        highest number handed out; gaps left by other removals are kept.
        """
        current = self.get(frame_id, subtype)
        if number is not None and number == current:
            self._counters[(frame_id, subtype)] = max(0, current - 1)
            self.logger.debug(
                f"Counter {subtype} in {frame_id} decremented to {current - 1}"
            )

    def reset_frame(self, frame_id: str) -> None:
        """Forget all counters of a frame."""
        for key in [key for key in self._counters if key[0] == frame_id]:
            del self._counters[key]

    def copy_frame(self, source_frame_id: str, target_frame_id: str) -> None:
        """Copy all counters of one frame to another."""
        for (frame_id, subtype), value in list(self._counters.items()):
            if frame_id == source_frame_id:
                self._counters[(target_frame_id, subtype)] = value

    def seed_from_elements(self, frame_id: str, elements: Iterable[Element]) -> None:
        """Initialize counters of a frame from the highest numbers present."""
        for element in elements:
            number = element.player_number
            if number is None:
                continue
            key = (frame_id, element.subtype)
            self._counters[key] = max(self._counters.get(key, 0), number)

    def frame_counters(self, frame_id: str) -> dict[str, int]:
        """All counters of a frame by subtype."""
        return {
            subtype: value
            for (owner, subtype), value in self._counters.items()
            if owner == frame_id
        }
