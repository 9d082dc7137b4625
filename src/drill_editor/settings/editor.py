"""
Editor-related settings for drill-editor.
"""

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class EditorSettings:
    """Manages editor, playback and export settings."""

    # Per-keyframe delay in milliseconds for each animation speed preset
    SPEED_PRESETS: dict[str, int] = {"slow": 1200, "regular": 800, "fast": 400}

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    @property
    def speed_preset(self) -> str:
        """Get animation speed preset name (slow, regular, fast)."""
        return self._get_str("editor/speed_preset", "regular")

    @speed_preset.setter
    def speed_preset(self, value: str) -> None:
        """Set animation speed preset name."""
        if value not in self.SPEED_PRESETS:
            logger.warning(
                f"Invalid speed preset: {value}, keeping current: {self.speed_preset}"
            )
            return
        self.settings.setValue("editor/speed_preset", value)
        self.settings.sync()

    @property
    def keyframe_delay_ms(self) -> int:
        """Get per-keyframe delay for the current speed preset."""
        return self.SPEED_PRESETS.get(self.speed_preset, self.SPEED_PRESETS["regular"])

    @property
    def playback_interval_ms(self) -> int:
        """Get frame playback interval in milliseconds (100-10000 ms)."""
        value = self._get_int("editor/playback_interval_ms", 2000)
        return max(100, min(10000, value))

    @playback_interval_ms.setter
    def playback_interval_ms(self, value: int) -> None:
        """Set frame playback interval in milliseconds (100-10000 ms)."""
        validated = max(100, min(10000, value))
        self.settings.setValue("editor/playback_interval_ms", validated)
        self.settings.sync()

    @property
    def export_width(self) -> int:
        """Get exported animation width in pixels (100-1800 px)."""
        value = self._get_int("editor/export_width", 900)
        return max(100, min(1800, value))

    @export_width.setter
    def export_width(self, value: int) -> None:
        """Set exported animation width in pixels (100-1800 px)."""
        validated = max(100, min(1800, value))
        self.settings.setValue("editor/export_width", validated)
        self.settings.sync()

    @property
    def export_timeout_s(self) -> int:
        """Get maximum time to wait for an animation export, in seconds."""
        value = self._get_int("editor/export_timeout_s", 60)
        return max(5, min(600, value))

    @export_timeout_s.setter
    def export_timeout_s(self, value: int) -> None:
        """Set maximum time to wait for an animation export, in seconds."""
        self.settings.setValue("editor/export_timeout_s", max(5, min(600, value)))
        self.settings.sync()

    @property
    def thumbnail_pixel_ratio(self) -> int:
        """Get pixel ratio used for thumbnails and document pages (1-4)."""
        value = self._get_int("editor/thumbnail_pixel_ratio", 2)
        return max(1, min(4, value))

    @thumbnail_pixel_ratio.setter
    def thumbnail_pixel_ratio(self, value: int) -> None:
        """Set pixel ratio used for thumbnails and document pages (1-4)."""
        self.settings.setValue("editor/thumbnail_pixel_ratio", max(1, min(4, value)))
        self.settings.sync()
