"""
Raster rendering of drill frames.
"""

from .painter import DrillRenderer
from .images import png_bytes, qimage_to_pil, to_base64

__all__ = ["DrillRenderer", "png_bytes", "qimage_to_pil", "to_base64"]
