"""
drill-editor: Animated training drill editor

Place players, equipment, movement lines and text on a pitch, build a
drill frame by frame and export it as an animation or a printable PDF.
"""

__version__ = "0.1.0"
__author__ = "drill-editor Contributors"

# Core imports
from .drills import DrillDocument, Toolbox
from .session import DrillEditorSession
from .utils.logging_config import setup_logging

__all__ = [
    "DrillDocument",
    "Toolbox",
    "DrillEditorSession",
    "setup_logging",
]
