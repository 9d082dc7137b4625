"""
Animation export service.

Orchestrates the animation pipeline for a DrillDocument:
    * Snapshot the frames on the calling (GUI) thread
    * Tween, render and encode on a single background worker
    * Cache the encoded artifact keyed on (revision, speed, width)
    * Drop results of exports started before the last invalidate()
    * Reject new requests while the worker is busy, even after a timeout
    * Render the thumbnail and the static PDF synchronously

The document is never mutated by an export.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from drill_editor.drills.models import CANVAS_WIDTH, Frame
from drill_editor.rendering.images import png_bytes, qimage_to_pil, to_base64
from drill_editor.rendering.painter import DrillRenderer

from .encoders import AnimationEncoder, GifEncoder
from .interpolation import STEPS, build_sample_sequence
from .pdf import PdfExporter

if TYPE_CHECKING:
    from drill_editor.drills.document import DrillDocument
    from drill_editor.settings.editor import EditorSettings


class ExportError(Exception):
    """Raised when an animation cannot be produced."""
    pass


class ExportInProgressError(ExportError):
    """Raised when an export is requested while another one is running."""
    pass


CacheKey = tuple[int, str, int]


@dataclass(frozen=True)
class AnimationArtifact:
    """Encoded animation and the document state it was produced from."""

    data: bytes
    revision: int
    speed: str
    width: int
    sample_count: int

    @property
    def key(self) -> CacheKey:
        return (self.revision, self.speed, self.width)

    def to_base64(self) -> str:
        return to_base64(self.data)


class AnimationExportService:
    """Produces and caches drill animations, thumbnails and PDFs."""

    def __init__(
        self,
        settings: "EditorSettings",
        renderer: Optional[DrillRenderer] = None,
        encoder: Optional[AnimationEncoder] = None,
    ):
        """Initialize the service.

        Args:
            settings: Editor settings providing speed, width, timeout and pixel ratio
            renderer: Frame renderer (a default DrillRenderer when omitted)
            encoder: Animation encoder (a looping GifEncoder when omitted)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.renderer = renderer or DrillRenderer()
        self.encoder: AnimationEncoder = encoder or GifEncoder(loop=0)

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="drill-export")
        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._cache: Optional[AnimationArtifact] = None
        # Bumped by invalidate(); workers only cache results of their own generation
        self._generation = 0

    # === CACHE ===

    def _key_for(self, document: "DrillDocument", speed: Optional[str], width: Optional[int]) -> CacheKey:
        return (
            document.revision,
            speed or self.settings.speed_preset,
            width or self.settings.export_width,
        )

    def cached_artifact(
        self,
        document: "DrillDocument",
        speed: Optional[str] = None,
        width: Optional[int] = None,
    ) -> Optional[AnimationArtifact]:
        """Cached animation if it still matches the document state."""
        key = self._key_for(document, speed, width)
        with self._lock:
            if self._cache is not None and self._cache.key == key:
                return self._cache
        return None

    def invalidate(self) -> None:
        """Drop the cached animation and disown exports still running."""
        with self._lock:
            self._generation += 1
            if self._cache is not None:
                self.logger.debug("Animation cache invalidated")
            self._cache = None

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return self._pending is not None and not self._pending.done()

    # === ANIMATION ===

    def request_animation(
        self,
        document: "DrillDocument",
        speed: Optional[str] = None,
        width: Optional[int] = None,
    ) -> Optional["Future[AnimationArtifact]"]:
        """Start producing the animation of a document.

        Returns:
            A Future resolving to the artifact (already done on cache hit),
            or None if another export is still running
        """
        revision, speed, width = self._key_for(document, speed, width)

        cached = self.cached_artifact(document, speed, width)
        if cached is not None:
            self.logger.debug(f"Animation cache hit for revision {revision}")
            done: Future = Future()
            done.set_result(cached)
            return done

        with self._lock:
            if self._pending is not None and not self._pending.done():
                self.logger.warning("Animation export already in progress, request ignored")
                return None

            delay_ms = self.settings.SPEED_PRESETS.get(
                speed, self.settings.SPEED_PRESETS["regular"]
            )
            frames = document.snapshot()
            future = self._executor.submit(
                self._produce, frames, revision, speed, width, delay_ms, self._generation
            )
            self._pending = future

        self.logger.info(
            f"Animation export started: {len(frames)} keyframes, {speed} ({delay_ms}ms), {width}px"
        )
        return future

    def ensure_animation(
        self,
        document: "DrillDocument",
        timeout: Optional[float] = None,
    ) -> AnimationArtifact:
        """Return the animation of a document, producing it if needed.

        Blocks until the artifact is ready.

        Raises:
            ExportInProgressError: If another export is running
            ExportError: If rendering or encoding fails or times out
        """
        future = self.request_animation(document)
        if future is None:
            raise ExportInProgressError("An animation export is already running")

        limit = timeout if timeout is not None else self.settings.export_timeout_s
        try:
            return future.result(timeout=limit)
        except FutureTimeoutError:
            # The worker cannot be interrupted; is_busy stays true until it finishes
            raise ExportError(f"Animation generation timed out after {limit}s") from None
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(f"Failed to create drill animation: {e}") from e

    def _produce(
        self,
        frames: Sequence[Frame],
        revision: int,
        speed: str,
        width: int,
        delay_ms: int,
        generation: int,
    ) -> AnimationArtifact:
        """Worker body: tween, render and encode a frame snapshot."""
        samples = build_sample_sequence(frames, delay_ms, STEPS)
        images = [
            qimage_to_pil(self.renderer.render(sample.elements, width))
            for sample in samples
        ]
        data = self.encoder.encode(images, [sample.duration_ms for sample in samples])

        artifact = AnimationArtifact(
            data=data,
            revision=revision,
            speed=speed,
            width=width,
            sample_count=len(samples),
        )
        with self._lock:
            stale = generation != self._generation
            if not stale:
                self._cache = artifact
        if stale:
            self.logger.debug(
                f"Discarding animation of revision {revision}, cache was invalidated meanwhile"
            )
        self.logger.info(f"Animation export finished: {len(samples)} samples, {len(data)} bytes")
        return artifact

    # === STATIC OUTPUTS ===

    def render_thumbnail(self, document: "DrillDocument") -> str:
        """Base64 PNG of the first frame at the configured pixel ratio."""
        image = self.renderer.render(
            document.frames[0].elements,
            CANVAS_WIDTH,
            self.settings.thumbnail_pixel_ratio,
        )
        return to_base64(png_bytes(qimage_to_pil(image)))

    def export_document(self, document: "DrillDocument") -> bytes:
        """Static PDF: a title cover page, then one page per frame."""
        exporter = PdfExporter(self.renderer, self.settings.thumbnail_pixel_ratio)
        return exporter.export(document.snapshot(), document.title, document.description)

    def shutdown(self, wait: bool = False) -> None:
        """Stop the worker; a running export is abandoned unless wait is set."""
        self._executor.shutdown(wait=wait, cancel_futures=True)
