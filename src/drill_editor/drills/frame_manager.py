"""Frame management operations for DrillDocument.

This module provides the frame list operations (add, duplicate, remove,
rename, navigation) as a mixin so the document class stays focused on
element editing.
"""

import logging
from typing import Callable

from .counters import PlayerCounters
from .models import Frame, new_frame_id
from .selection import Selection


class FrameOperationsMixin:
    """Mixin class for DrillDocument frame management.

    Handles:
    - Appending empty frames and duplicating the current frame
    - Removing frames while keeping the current index valid
    - Renaming and switching the active frame
    """

    frames: list[Frame]
    current_index: int
    selection: Selection
    counters: PlayerCounters
    logger: logging.Logger
    _touch: Callable[..., None]

    def add_frame(self) -> Frame:
        """Append an empty frame and make it current."""
        frame = Frame(id=new_frame_id(), name=f"Frame {len(self.frames) + 1}")
        self.frames.append(frame)
        self.current_index = len(self.frames) - 1
        self.selection.clear()
        self.logger.debug(f"Added frame '{frame.name}' at index {self.current_index}")
        self._touch("add_frame")
        return frame

    def duplicate_frame(self) -> Frame:
        """Append a copy of the current frame and make it current.

        Element ids are preserved so the copy tracks the same entities as
        the source frame. The source frame's player counters carry over.
        """
        source = self.frames[self.current_index]
        duplicate = source.copy(frame_id=new_frame_id(), name=f"{source.name} Copy")
        self.counters.copy_frame(source.id, duplicate.id)

        self.frames.append(duplicate)
        self.current_index = len(self.frames) - 1
        self.selection.clear()
        self.logger.debug(
            f"Duplicated frame '{source.name}' with {len(duplicate)} elements"
        )
        self._touch("duplicate_frame")
        return duplicate

    def remove_frame(self, index: int) -> bool:
        """Remove a frame by index.

        The last remaining frame is never removed.

        Returns:
            True if a frame was removed
        """
        if len(self.frames) <= 1:
            self.logger.debug("Refusing to remove the only frame")
            return False
        if not 0 <= index < len(self.frames):
            raise IndexError(f"Frame index out of range: {index}")

        removed = self.frames.pop(index)
        self.counters.reset_frame(removed.id)

        if self.current_index >= len(self.frames):
            self.current_index = len(self.frames) - 1
        elif self.current_index > index:
            self.current_index -= 1

        self.selection.clear()
        self.logger.debug(
            f"Removed frame '{removed.name}', current index is now {self.current_index}"
        )
        self._touch("remove_frame")
        return True

    def rename_frame(self, index: int, name: str) -> None:
        """Rename a frame. Names do not affect rendering."""
        if not 0 <= index < len(self.frames):
            raise IndexError(f"Frame index out of range: {index}")
        self.frames[index].name = name
        self._touch("rename_frame", structural=False)

    def set_current_frame(self, index: int) -> None:
        """Switch the active frame and clear the selection."""
        if not 0 <= index < len(self.frames):
            raise IndexError(f"Frame index out of range: {index}")
        self.current_index = index
        self.selection.clear()
        self._touch("current_frame", structural=False)

    def next_frame(self) -> None:
        """Move to the next frame, staying on the last one."""
        self.set_current_frame(min(len(self.frames) - 1, self.current_index + 1))

    def previous_frame(self) -> None:
        """Move to the previous frame, staying on the first one."""
        self.set_current_frame(max(0, self.current_index - 1))
