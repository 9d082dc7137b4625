"""
Drill model: elements, frames, the editable document and playback.
"""

from .models import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    Element,
    ElementDraft,
    ElementKind,
    Frame,
    InvalidElementError,
)
from .counters import PlayerCounters
from .selection import Selection
from .document import DrillDocument, ElementNotFoundError
from .toolbox import Toolbox

__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "Element",
    "ElementDraft",
    "ElementKind",
    "Frame",
    "InvalidElementError",
    "PlayerCounters",
    "Selection",
    "DrillDocument",
    "ElementNotFoundError",
    "Toolbox",
]
