"""Animation encoders."""

import io
import logging
from typing import Protocol, Sequence

from PIL import Image


class AnimationEncoder(Protocol):
    """Turns a sequence of images with per-image durations into a file."""

    def encode(self, images: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        ...


class GifEncoder:
    """Looping GIF encoder backed by Pillow.

    Each image is quantized to its own adaptive palette, which keeps the
    flat pitch and team colours exact without a global palette pass.
    """

    def __init__(self, colors: int = 256, loop: int = 0):
        """Initialize the encoder.

        Args:
            colors: Palette entries per frame (2-256)
            loop: GIF loop count; 0 repeats forever
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.colors = max(2, min(256, colors))
        self.loop = loop

    def encode(self, images: Sequence[Image.Image], durations_ms: Sequence[int]) -> bytes:
        if not images:
            raise ValueError("Cannot encode an animation without images")
        if len(images) != len(durations_ms):
            raise ValueError(
                f"Got {len(images)} images but {len(durations_ms)} durations"
            )

        frames = [
            image.convert("RGB").quantize(colors=self.colors, dither=Image.Dither.NONE)
            for image in images
        ]

        buffer = io.BytesIO()
        frames[0].save(
            buffer,
            format="GIF",
            save_all=True,
            append_images=frames[1:],
            duration=list(durations_ms),
            loop=self.loop,
            disposal=1,
        )
        data = buffer.getvalue()
        self.logger.debug(f"Encoded {len(frames)} frames into {len(data)} bytes of GIF")
        return data
