"""Static multi-page document export."""

import io
import logging
import textwrap
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont
from PySide6.QtGui import QTextDocumentFragment

from drill_editor.drills.models import CANVAS_HEIGHT, CANVAS_WIDTH, Frame
from drill_editor.rendering.images import qimage_to_pil
from drill_editor.rendering.painter import DrillRenderer

# PDF points per inch
POINTS_PER_INCH = 72

COVER_BACKGROUND = (248, 250, 252)
COVER_BAND = (30, 64, 175)
COVER_STRIPE = (59, 130, 246)
COVER_TITLE = (255, 255, 255)
COVER_TEXT = (51, 65, 85)
COVER_MUTED = (100, 116, 139)

# Cover layout in canvas units, scaled by the pixel ratio
BAND_HEIGHT = 170
STRIPE_HEIGHT = 24
MARGIN = 48
DESCRIPTION_WRAP = 90
DESCRIPTION_MAX_LINES = 16


def plain_text(description: str) -> str:
    """Collapse a (possibly HTML) description to a single line of text."""
    if not description:
        return ""
    text = QTextDocumentFragment.fromHtml(description).toPlainText()
    return " ".join(text.split())


class PdfExporter:
    """Renders one page per frame into a fixed 900x600 pt document.

    Pages are rasterized at ``pixel_ratio`` times the canvas size and
    embedded at a matching resolution, so the page size never depends on
    the raster density. When a title is given, a cover page with the
    title and description precedes the frames.
    """

    def __init__(self, renderer: DrillRenderer, pixel_ratio: int = 2):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.renderer = renderer
        self.pixel_ratio = pixel_ratio

    def cover_page(self, title: str, description: str, frame_count: int) -> Image.Image:
        """Header page in the frame page size."""
        ratio = self.pixel_ratio
        page = Image.new("RGB", (CANVAS_WIDTH * ratio, CANVAS_HEIGHT * ratio), COVER_BACKGROUND)
        draw = ImageDraw.Draw(page)

        draw.rectangle((0, 0, page.width, BAND_HEIGHT * ratio), fill=COVER_BAND)
        draw.rectangle(
            (0, BAND_HEIGHT * ratio, page.width, (BAND_HEIGHT + STRIPE_HEIGHT) * ratio),
            fill=COVER_STRIPE,
        )

        title_font = ImageFont.load_default(size=32 * ratio)
        body_font = ImageFont.load_default(size=14 * ratio)
        draw.text((MARGIN * ratio, 60 * ratio), title, font=title_font, fill=COVER_TITLE)
        draw.text(
            (MARGIN * ratio, 112 * ratio),
            f"{frame_count} frame{'s' if frame_count != 1 else ''}",
            font=body_font,
            fill=COVER_TITLE,
        )

        lines = textwrap.wrap(plain_text(description), DESCRIPTION_WRAP)
        if len(lines) > DESCRIPTION_MAX_LINES:
            lines = lines[:DESCRIPTION_MAX_LINES]
            lines[-1] = lines[-1].rstrip(".") + "..."
        top = (BAND_HEIGHT + STRIPE_HEIGHT + 32) * ratio
        if not lines:
            draw.text((MARGIN * ratio, top), "No description", font=body_font, fill=COVER_MUTED)
        for index, line in enumerate(lines):
            draw.text(
                (MARGIN * ratio, top + index * 22 * ratio), line, font=body_font, fill=COVER_TEXT
            )
        return page

    def export(self, frames: Sequence[Frame], title: str = "", description: str = "") -> bytes:
        """Render frames in order and assemble them as PDF bytes.

        Args:
            frames: Frames to render, one page each
            title: Drill title; adds a cover page when set
            description: Drill description shown on the cover (HTML allowed)
        """
        if not frames:
            raise ValueError("At least one frame is required")

        pages = [
            qimage_to_pil(
                self.renderer.render(frame.elements, CANVAS_WIDTH, self.pixel_ratio)
            )
            for frame in frames
        ]
        if title:
            pages.insert(0, self.cover_page(title, description, len(frames)))

        buffer = io.BytesIO()
        pages[0].save(
            buffer,
            format="PDF",
            save_all=True,
            append_images=pages[1:],
            resolution=float(POINTS_PER_INCH * self.pixel_ratio),
        )
        self.logger.info(f"Exported {len(pages)} pages to PDF")
        return buffer.getvalue()

    def write(
        self, frames: Sequence[Frame], path: Path, title: str = "", description: str = ""
    ) -> Path:
        """Export frames to a file and return its path."""
        path = Path(path)
        path.write_bytes(self.export(frames, title, description))
        return path
