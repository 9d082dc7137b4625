"""
Canvas interaction: hit-testing, selection and transform handling.
"""

from .engine import DragMode, SelectionEngine, TransformHandle
from .geometry import Bounds, element_bounds, hit_test

__all__ = [
    "DragMode",
    "SelectionEngine",
    "TransformHandle",
    "Bounds",
    "element_bounds",
    "hit_test",
]
