"""Conversion between Qt images and Pillow images."""

import base64
import io

from PIL import Image
from PIL.ImageQt import fromqimage
from PySide6.QtGui import QImage


def qimage_to_pil(image: QImage) -> Image.Image:
    """Convert a rendered QImage to an RGB Pillow image."""
    return fromqimage(image).convert("RGB")


def png_bytes(image: Image.Image) -> bytes:
    """Encode a Pillow image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_base64(data: bytes) -> str:
    """Base64 text without a data URL prefix, as the backend expects."""
    return base64.b64encode(data).decode("ascii")
