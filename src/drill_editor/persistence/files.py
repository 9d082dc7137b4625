"""Local drill files (``*.drill.json``).

Files use the persisted record shape plus frame/element ids and frame names,
so elements keep their identity across frames after a reload.
"""

import logging
from pathlib import Path
from typing import Sequence

import orjson

from drill_editor.drills.models import Frame

from .mapper import DrillRecord, DrillRecordError, frames_to_records

DRILL_FILE_SUFFIX = ".drill.json"

logger = logging.getLogger(__name__)


def save_drill_file(
    path: Path,
    frames: Sequence[Frame],
    title: str,
    description: str = "",
) -> Path:
    """Write a drill to a local file.

    The ``.drill.json`` suffix is appended when missing.
    """
    path = Path(path)
    if not path.name.endswith(DRILL_FILE_SUFFIX):
        path = path.with_name(path.name + DRILL_FILE_SUFFIX)

    record = {
        "title": title,
        "description": description,
        "frames": frames_to_records(frames, include_ids=True),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(record, option=orjson.OPT_INDENT_2))
    logger.info(f"Saved drill '{title}' with {len(frames)} frames to {path}")
    return path


def load_drill_file(path: Path) -> DrillRecord:
    """Read a drill from a local file.

    Raises:
        DrillRecordError: If the file is not valid JSON or not a drill record
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        raw = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise DrillRecordError(f"Invalid JSON in {path}: {e}") from e

    record = DrillRecord.from_dict(raw)
    logger.info(f"Loaded drill '{record.title}' with {len(record.frames)} frames from {path}")
    return record
