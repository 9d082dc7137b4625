"""
Animation and document export.
"""

from .encoders import AnimationEncoder, GifEncoder
from .interpolation import STEPS, SampleFrame, build_sample_sequence, interpolate_elements
from .pdf import PdfExporter
from .service import (
    AnimationArtifact,
    AnimationExportService,
    ExportError,
    ExportInProgressError,
)

__all__ = [
    "AnimationEncoder",
    "GifEncoder",
    "STEPS",
    "SampleFrame",
    "build_sample_sequence",
    "interpolate_elements",
    "PdfExporter",
    "AnimationArtifact",
    "AnimationExportService",
    "ExportError",
    "ExportInProgressError",
]
