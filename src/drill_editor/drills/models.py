"""
Data models for drill diagrams.

Contains the element and frame dataclasses used while editing. The models
are plain data: frame management, counters and selection live in the
document layer, persistence shaping lives in the persistence package.

Elements that share an id across frames are the same tracked entity. Frame
duplication copies ids on purpose so that the animation exporter can pair
elements between consecutive keyframes. Each frame still stores its own
attribute snapshot of the entity.
"""

import itertools
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, Optional

# Fixed logical drawing surface, in pixels
CANVAS_WIDTH = 900
CANVAS_HEIGHT = 600


class InvalidElementError(ValueError):
    """Raised when an element has an unknown kind/subtype pair or bad field."""
    pass


class ElementKind(str, Enum):
    """Closed set of drawable element kinds."""

    PLAYER = "player"
    EQUIPMENT = "equipment"
    MOVEMENT = "movement"
    TEXT = "text"


# Valid subtypes for each kind
KIND_SUBTYPES: dict[ElementKind, tuple[str, ...]] = {
    ElementKind.PLAYER: ("team1", "team2", "coach"),
    ElementKind.EQUIPMENT: ("cone", "cone-orange", "cone-blue", "line", "circle", "square"),
    ElementKind.MOVEMENT: ("arrow", "dotted-line", "curved-line"),
    ElementKind.TEXT: ("text", "note"),
}

COACH_SUBTYPE = "coach"

# Equipment subtypes that inherit color/size/rotation from the latest sibling
CONE_SUBTYPES = frozenset({"cone", "cone-orange", "cone-blue"})

# Equipment subtypes that may be rotated but never resized as a batch
ROTATE_ONLY_SUBTYPES = CONE_SUBTYPES | {"circle", "square"}

# Fields an update may touch; identity fields (id, kind, subtype) are excluded
MUTABLE_FIELDS = frozenset({"x", "y", "color", "text", "size", "rotation"})


def parse_kind(value: "str | ElementKind") -> ElementKind:
    """Convert a string into an ElementKind.

    Raises:
        InvalidElementError: If the value is not a known kind
    """
    if isinstance(value, ElementKind):
        return value
    try:
        return ElementKind(value)
    except ValueError:
        raise InvalidElementError(f"Unknown element kind: {value!r}") from None


def validate_subtype(kind: ElementKind, subtype: str) -> None:
    """Ensure subtype belongs to kind.

    Raises:
        InvalidElementError: If the pair is not part of the closed variant
    """
    if subtype not in KIND_SUBTYPES[kind]:
        raise InvalidElementError(
            f"Subtype {subtype!r} is not valid for kind {kind.value!r}"
        )


_id_sequence = itertools.count(1)


def new_element_id(kind: ElementKind) -> str:
    """Generate a fresh element id, never reused within the process."""
    return f"{kind.value}-{next(_id_sequence)}-{uuid.uuid4().hex[:8]}"


def new_frame_id() -> str:
    """Generate a fresh frame id."""
    return f"frame-{next(_id_sequence)}-{uuid.uuid4().hex[:8]}"


@dataclass
class ElementDraft:
    """Element description before insertion (no id yet).

    Produced by the toolbox on drop and completed by the document, which
    assigns the id and applies the inheritance rules.
    """

    kind: ElementKind
    subtype: str
    x: float
    y: float
    color: Optional[str] = None
    text: Optional[str] = None
    size: float = 1.0
    rotation: float = 0.0

    def __post_init__(self) -> None:
        self.kind = parse_kind(self.kind)
        validate_subtype(self.kind, self.subtype)


@dataclass
class Element:
    """A single positioned drawable on the canvas.

    Attributes:
        id: Opaque identifier, shared across frames by duplication
        kind: Element kind
        subtype: Kind-specific subtype (see KIND_SUBTYPES)
        x: Anchor X in canvas pixels
        y: Anchor Y in canvas pixels
        color: Optional fill/stroke color (#rrggbb)
        text: Display text; numbered players keep their number here
        size: Scale multiplier
        rotation: Rotation in degrees
    """

    id: str
    kind: ElementKind
    subtype: str
    x: float
    y: float
    color: Optional[str] = None
    text: Optional[str] = None
    size: float = 1.0
    rotation: float = 0.0

    def __post_init__(self) -> None:
        self.kind = parse_kind(self.kind)
        validate_subtype(self.kind, self.subtype)
        if self.size <= 0:
            raise InvalidElementError(f"Element size must be positive, got {self.size}")

    @classmethod
    def from_draft(cls, element_id: str, draft: ElementDraft) -> "Element":
        """Create an Element from a draft and an assigned id."""
        return cls(
            id=element_id,
            kind=draft.kind,
            subtype=draft.subtype,
            x=draft.x,
            y=draft.y,
            color=draft.color,
            text=draft.text,
            size=draft.size,
            rotation=draft.rotation,
        )

    def copy(self, **changes: Any) -> "Element":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_numbered_player(self) -> bool:
        """Whether this element takes part in per-team auto numbering."""
        return self.kind is ElementKind.PLAYER and self.subtype != COACH_SUBTYPE

    @property
    def player_number(self) -> Optional[int]:
        """Numeric label of a numbered player, or None."""
        if not self.is_numbered_player or self.text is None:
            return None
        try:
            return int(str(self.text).strip())
        except ValueError:
            return None

    @property
    def is_transformable(self) -> bool:
        """Whether a resize/rotate handle may attach to this element."""
        match self.kind:
            case ElementKind.PLAYER | ElementKind.MOVEMENT:
                return True
            case ElementKind.EQUIPMENT:
                return self.subtype in ROTATE_ONLY_SUBTYPES
            case ElementKind.TEXT:
                return False

    @property
    def is_rotate_only(self) -> bool:
        """Whether this element belongs to the rotate-only equipment subset."""
        return self.kind is ElementKind.EQUIPMENT and self.subtype in ROTATE_ONLY_SUBTYPES


@dataclass
class Frame:
    """One keyframe: an ordered snapshot of elements (order is z-order)."""

    id: str
    name: str
    elements: list[Element] = field(default_factory=list)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def find(self, element_id: str) -> Optional[Element]:
        """Find an element by id."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def index_of(self, element_id: str) -> int:
        """Position of an element in the z-order, or -1."""
        for index, element in enumerate(self.elements):
            if element.id == element_id:
                return index
        return -1

    def element_ids(self) -> list[str]:
        """Ids in z-order."""
        return [element.id for element in self.elements]

    def by_id(self) -> dict[str, Element]:
        """Id-indexed lookup map."""
        return {element.id: element for element in self.elements}

    def copy(self, frame_id: Optional[str] = None, name: Optional[str] = None) -> "Frame":
        """Copy the frame, keeping element ids and copying element attributes."""
        return Frame(
            id=frame_id if frame_id is not None else self.id,
            name=name if name is not None else self.name,
            elements=[element.copy() for element in self.elements],
        )
