"""Tests for frame rendering."""

import io

from PIL import Image
from PySide6.QtGui import QImage

from drill_editor.drills.models import Element, ElementKind
from drill_editor.rendering.images import png_bytes, qimage_to_pil, to_base64
from drill_editor.rendering.painter import PITCH_COLOR, PITCH_STRIPE_COLOR, DrillRenderer


def _size(image: QImage) -> tuple[int, int]:
    return (image.width(), image.height())


def _cone(x: float, y: float, color: str, size: float = 2.0) -> Element:
    return Element(
        id="cone-1", kind=ElementKind.EQUIPMENT, subtype="cone", x=x, y=y, color=color, size=size
    )


class TestDrillRenderer:
    """Test rendering of frames to images."""

    def test_output_size_follows_width_and_ratio(self) -> None:
        renderer = DrillRenderer()

        assert _size(renderer.render([], 900)) == (900, 600)
        assert _size(renderer.render([], 900, 2)) == (1800, 1200)
        assert _size(renderer.render([], 300)) == (300, 200)

    def test_empty_frame_shows_pitch(self) -> None:
        image = DrillRenderer().render([])
        assert image.pixelColor(5, 5).name() == PITCH_STRIPE_COLOR

    def test_element_painted_at_anchor(self) -> None:
        image = DrillRenderer().render([_cone(300, 150, "#ff0000")])
        assert image.pixelColor(300, 165).name() == "#ff0000"

    def test_scaled_output_keeps_layout(self) -> None:
        image = DrillRenderer().render([_cone(300, 150, "#0000ff")], 900, 2)
        assert image.pixelColor(600, 330).name() == "#0000ff"

    def test_without_pitch(self) -> None:
        image = DrillRenderer(show_pitch=False).render([])
        assert image.pixelColor(5, 5).name() == PITCH_COLOR


class TestImageConversion:
    """Test Qt to Pillow conversion helpers."""

    def test_qimage_to_pil(self) -> None:
        image = qimage_to_pil(DrillRenderer().render([], 300))
        assert image.mode == "RGB"
        assert image.size == (300, 200)

    def test_png_bytes(self) -> None:
        source = QImage(20, 10, QImage.Format.Format_RGB32)
        source.fill(0xFF00FF)
        data = png_bytes(qimage_to_pil(source))

        decoded = Image.open(io.BytesIO(data))
        assert decoded.format == "PNG"
        assert decoded.getpixel((0, 0)) == (255, 0, 255)

    def test_base64_has_no_prefix(self) -> None:
        assert to_base64(b"GIF89a") == "R0lGODlh"
