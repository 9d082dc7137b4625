"""
Mapping between the in-memory drill model and the persisted record format.

Persisted coordinates are normalized to the 0..1 range of the 900x600
canvas; element kinds travel as an ``icon_path`` of the form
``"<kind>/<subtype>"``; frames carry a 1-based ``order_index``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from drill_editor.drills.models import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    Element,
    Frame,
    InvalidElementError,
    parse_kind,
)

logger = logging.getLogger(__name__)

TRANSCODE_STATUSES = frozenset({"pending", "success", "error"})


class DrillRecordError(ValueError):
    """Raised when a persisted drill record cannot be interpreted."""
    pass


def normalize(x: float, y: float) -> tuple[float, float]:
    """Canvas pixels to the persisted 0..1 range."""
    return (x / CANVAS_WIDTH, y / CANVAS_HEIGHT)


def denormalize(x: float, y: float) -> tuple[float, float]:
    """Persisted 0..1 range to canvas pixels."""
    return (x * CANVAS_WIDTH, y * CANVAS_HEIGHT)


# === SAVE ===


def element_to_record(element: Element) -> dict[str, Any]:
    """Persisted shape of one element."""
    x, y = normalize(element.x, element.y)
    return {
        "icon_path": f"{element.kind.value}/{element.subtype}",
        "x": x,
        "y": y,
        "rotation": element.rotation,
        "scale": element.size,
        "text": element.text or None,
        "color": element.color or None,
    }


def frames_to_records(frames: Sequence[Frame], include_ids: bool = False) -> list[dict[str, Any]]:
    """Persisted shape of a frame list, ordered from 1.

    Args:
        frames: Frames in display order
        include_ids: Also write frame and element ids (local files only)
    """
    records = []
    for index, frame in enumerate(frames):
        elements = []
        for element in frame.elements:
            record = element_to_record(element)
            if include_ids:
                record["id"] = element.id
            elements.append(record)
        frame_record: dict[str, Any] = {"order_index": index + 1, "elements": elements}
        if include_ids:
            frame_record["id"] = frame.id
            frame_record["name"] = frame.name
        records.append(frame_record)
    return records


def build_save_payload(
    frames: Sequence[Frame],
    title: str,
    description: str = "",
    thumbnail_base64: Optional[str] = None,
    animation_gif_base64: Optional[str] = None,
) -> dict[str, Any]:
    """Assemble the body of a create/update request.

    ``animation_gif`` is only present when an animation is supplied, which
    tells the backend to keep its existing animation otherwise.
    """
    payload: dict[str, Any] = {"title": title}
    if description:
        payload["description"] = description
    if thumbnail_base64 is not None:
        payload["thumbnailBase64"] = thumbnail_base64
    payload["frames"] = frames_to_records(frames)
    if animation_gif_base64:
        payload["animation_gif"] = animation_gif_base64
    return payload


# === LOAD ===


def _derive_id(prefix: str, raw_id: Any, fallback: str) -> str:
    if raw_id is None or raw_id == "":
        return fallback
    text = str(raw_id)
    # Numeric backend row ids get a readable prefix; other ids are kept as-is
    return f"{prefix}-{text}" if text.isdigit() else text


def _number(raw: dict[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise DrillRecordError(f"Field {key!r} is not a number: {value!r}") from None


def element_from_record(raw: Any, fallback_id: str) -> Element:
    """Build an Element from its persisted shape.

    Raises:
        DrillRecordError: If the record is malformed
    """
    if not isinstance(raw, dict):
        raise DrillRecordError(f"Element record must be an object, got {type(raw).__name__}")

    icon_path = raw.get("icon_path")
    if not isinstance(icon_path, str) or "/" not in icon_path:
        raise DrillRecordError(f"Invalid icon_path: {icon_path!r}")
    kind_name, subtype = icon_path.split("/", 1)

    if "x" not in raw or "y" not in raw:
        raise DrillRecordError(f"Element {icon_path} has no position")
    x, y = denormalize(_number(raw, "x", 0.0), _number(raw, "y", 0.0))

    # Falsy scale/rotation mean "unset" in stored records
    size = _number(raw, "scale", 1.0) or 1.0
    rotation = _number(raw, "rotation", 0.0)

    try:
        return Element(
            id=_derive_id("el", raw.get("id"), fallback_id),
            kind=parse_kind(kind_name),
            subtype=subtype,
            x=x,
            y=y,
            color=raw.get("color") or None,
            text=str(raw["text"]) if raw.get("text") else None,
            size=size,
            rotation=rotation,
        )
    except InvalidElementError as e:
        raise DrillRecordError(str(e)) from e


def record_to_frames(raw_frames: Any) -> list[Frame]:
    """Build frames from their persisted shape.

    Frames are ordered by ``order_index`` and named after their position.
    An empty list yields a single empty frame.

    Raises:
        DrillRecordError: If the records are malformed
    """
    if raw_frames is None:
        raw_frames = []
    if not isinstance(raw_frames, list):
        raise DrillRecordError("Drill frames must be a list")

    for raw in raw_frames:
        if not isinstance(raw, dict):
            raise DrillRecordError("Frame record must be an object")

    ordered = sorted(
        enumerate(raw_frames),
        key=lambda item: (_number(item[1], "order_index", item[0] + 1), item[0]),
    )

    frames = []
    for position, (_, raw) in enumerate(ordered):
        raw_elements = raw.get("elements") or []
        if not isinstance(raw_elements, list):
            raise DrillRecordError("Frame elements must be a list")
        elements = [
            element_from_record(el, f"el-f{position + 1}-{index + 1}")
            for index, el in enumerate(raw_elements)
        ]
        frames.append(
            Frame(
                id=_derive_id("frame", raw.get("id"), f"frame-{position + 1}"),
                name=raw.get("name") or f"Frame {position + 1}",
                elements=elements,
            )
        )

    if not frames:
        frames = [Frame(id="frame-1", name="Frame 1")]
    return frames


def unwrap_record(raw: Any) -> dict[str, Any]:
    """Return the drill object of a response that may wrap it in ``data``."""
    if isinstance(raw, dict):
        if "frames" in raw:
            return raw
        inner = raw.get("data")
        if isinstance(inner, dict):
            return inner
    raise DrillRecordError("Response does not contain a drill record")


@dataclass
class DrillRecord:
    """Read model of a stored drill."""

    id: Optional[str]
    title: str
    description: str
    frames: list[Frame] = field(default_factory=list)
    thumbnail_url: Optional[str] = None
    animation_gif_url: Optional[str] = None
    animation_video_url: Optional[str] = None
    animation_video_status: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Any) -> "DrillRecord":
        """Parse a backend response or a local drill file."""
        data = unwrap_record(raw)

        status = data.get("animationVideoStatus")
        if status not in TRANSCODE_STATUSES:
            if status is not None:
                logger.warning(f"Unknown animation video status: {status!r}")
            status = None

        drill_id = data.get("id")
        return cls(
            id=str(drill_id) if drill_id is not None else None,
            title=data.get("title") or "Untitled Drill",
            description=data.get("description") or "",
            frames=record_to_frames(data.get("frames")),
            thumbnail_url=data.get("thumbnailUrl"),
            animation_gif_url=data.get("animationGifUrl"),
            animation_video_url=data.get("animationVideoUrl"),
            animation_video_status=status,
        )


def extract_transcode_status(raw: Any) -> Optional[str]:
    """Transcode status of a drill response, None when unknown."""
    try:
        data = unwrap_record(raw)
    except DrillRecordError:
        data = raw if isinstance(raw, dict) else {}
        if isinstance(data.get("data"), dict):
            data = data["data"]
    status = data.get("animationVideoStatus")
    return status if status in TRANSCODE_STATUSES else None

