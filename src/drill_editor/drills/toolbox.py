"""
Toolbox catalog and preset provider.

The toolbox turns a dropped catalog item into an ElementDraft, filling in
colour, size and default text from the current team presets. Inheritance
between cones of the same subtype is applied later by the document.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .models import COACH_SUBTYPE, ElementDraft, ElementKind, parse_kind, validate_subtype

if TYPE_CHECKING:
    from drill_editor.settings.toolbox import ToolboxSettings

    from .document import DrillDocument

COACH_COLOR = "#000000"
COACH_LABEL = "C"

DEFAULT_TEXT: dict[str, str] = {"text": "Sample Text", "note": "Note"}

# Palette offered by the colour picker
COLOR_PALETTE: tuple[str, ...] = (
    "#ef4444", "#f97316", "#f59e0b", "#eab308", "#84cc16",
    "#22c55e", "#10b981", "#14b8a6", "#06b6d4", "#0ea5e9",
    "#3b82f6", "#6366f1", "#8b5cf6", "#a855f7", "#d946ef",
    "#ec4899", "#f43f5e", "#000000", "#6b7280", "#ffffff",
)

SIZE_STEP = 0.1


@dataclass(frozen=True)
class ToolboxItem:
    """One draggable entry of the toolbox."""

    kind: ElementKind
    subtype: str
    label: str
    icon: str


CATALOG: tuple[ToolboxItem, ...] = (
    ToolboxItem(ElementKind.PLAYER, "team1", "Team 1", "fa5s.user"),
    ToolboxItem(ElementKind.PLAYER, "team2", "Team 2", "fa5s.user"),
    ToolboxItem(ElementKind.PLAYER, "coach", "Coach", "fa5s.user-tie"),
    ToolboxItem(ElementKind.EQUIPMENT, "cone", "Cone", "fa5s.caret-up"),
    ToolboxItem(ElementKind.EQUIPMENT, "cone-orange", "Orange Cone", "fa5s.caret-up"),
    ToolboxItem(ElementKind.EQUIPMENT, "cone-blue", "Blue Cone", "fa5s.caret-up"),
    ToolboxItem(ElementKind.EQUIPMENT, "line", "Line", "fa5s.minus"),
    ToolboxItem(ElementKind.EQUIPMENT, "circle", "Circle", "fa5.circle"),
    ToolboxItem(ElementKind.EQUIPMENT, "square", "Square", "fa5.square"),
    ToolboxItem(ElementKind.MOVEMENT, "arrow", "Arrow", "fa5s.long-arrow-alt-right"),
    ToolboxItem(ElementKind.MOVEMENT, "dotted-line", "Dotted Line", "fa5s.ellipsis-h"),
    ToolboxItem(ElementKind.MOVEMENT, "curved-line", "Curved Line", "fa5s.redo"),
    ToolboxItem(ElementKind.TEXT, "text", "Text", "fa5s.font"),
    ToolboxItem(ElementKind.TEXT, "note", "Note", "fa5s.sticky-note"),
)


def size_steps(minimum: float = 0.5, maximum: float = 3.0) -> list[float]:
    """Selectable preset sizes from minimum to maximum in SIZE_STEP increments."""
    count = int(round((maximum - minimum) / SIZE_STEP))
    return [round(minimum + i * SIZE_STEP, 1) for i in range(count + 1)]


class Toolbox:
    """Builds element drafts from catalog items and team presets."""

    def __init__(self, settings: "ToolboxSettings"):
        self.settings = settings
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def items(self) -> tuple[ToolboxItem, ...]:
        return CATALOG

    def draft(
        self, kind: "str | ElementKind", subtype: str, x: float, y: float
    ) -> ElementDraft:
        """Describe a new element dropped at (x, y).

        Numbered players take their team preset; the coach is black and
        labelled "C"; everything else uses the active team's preset colour.

        Raises:
            InvalidElementError: If the kind/subtype pair is unknown
        """
        kind = parse_kind(kind)
        validate_subtype(kind, subtype)

        color: Optional[str]
        text: Optional[str] = None
        size = 1.0

        if kind is ElementKind.PLAYER and subtype == COACH_SUBTYPE:
            color = COACH_COLOR
            text = COACH_LABEL
        elif kind is ElementKind.PLAYER:
            color = self.settings.get_team_color(subtype)
            size = self.settings.get_team_size(subtype)
        else:
            color = self.settings.get_team_color(self.settings.active_team)
            if kind is ElementKind.TEXT:
                text = DEFAULT_TEXT[subtype]

        self.logger.debug(f"Draft {kind.value}/{subtype} at ({x:.1f}, {y:.1f})")
        return ElementDraft(
            kind=kind,
            subtype=subtype,
            x=max(0.0, float(x)),
            y=max(0.0, float(y)),
            color=color,
            text=text,
            size=size,
        )

    def preview_label(self, document: "DrillDocument", subtype: str) -> str:
        """Label the next player of a subtype would get in the active frame."""
        if subtype == COACH_SUBTYPE:
            return COACH_LABEL
        frame_id = document.current_frame.id
        return str(document.counters.next_number(frame_id, subtype))
