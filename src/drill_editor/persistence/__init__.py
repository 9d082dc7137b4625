"""
Persisted drill records: mapping, change detection and local files.
"""

from .diff import frames_differ
from .files import DRILL_FILE_SUFFIX, load_drill_file, save_drill_file
from .mapper import (
    DrillRecord,
    DrillRecordError,
    build_save_payload,
    denormalize,
    element_to_record,
    normalize,
    record_to_frames,
)

__all__ = [
    "frames_differ",
    "DRILL_FILE_SUFFIX",
    "load_drill_file",
    "save_drill_file",
    "DrillRecord",
    "DrillRecordError",
    "build_save_payload",
    "denormalize",
    "element_to_record",
    "normalize",
    "record_to_frames",
]
