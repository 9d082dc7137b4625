"""
Settings migration system for drill-editor.

Each step upgrades a profile by one version; steps run in order until the
profile reaches ConfigVersion.CURRENT.
"""

import logging
from typing import TYPE_CHECKING, Callable

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


def _speed_for_delay(delay_ms: int) -> str:
    if delay_ms >= 1000:
        return "slow"
    if delay_ms <= 600:
        return "fast"
    return "regular"


class SettingsMigrator:
    """Brings stored settings up to the current configuration version."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings
        self._steps: dict[str, tuple[str, Callable[[], None]]] = {
            ConfigVersion.V1_0.value: (ConfigVersion.V1_1.value, self._gif_delay_to_speed_preset),
            ConfigVersion.V1_1.value: (ConfigVersion.V1_2.value, self._rename_backend_keys),
        }

    def ensure_version(self) -> None:
        """Stamp a new profile, or migrate an older one."""
        stored = str(self.settings.value("app/version", "") or "")

        if not stored:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
            return

        if stored != ConfigVersion.CURRENT.value:
            self.migrate(stored)

    def migrate(self, from_version: str) -> str:
        """Apply every step from from_version onwards. Returns the reached version."""
        version = from_version
        while version in self._steps:
            target, step = self._steps[version]
            logger.info(f"Migrating configuration from {version} to {target}")
            step()
            version = target

        if version != ConfigVersion.CURRENT.value:
            logger.warning(f"No migration path from {version}, keeping stored values")

        self.settings.setValue("app/version", version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        return version

    def _gif_delay_to_speed_preset(self) -> None:
        """1.0 stored a raw per-keyframe delay instead of a speed preset."""
        old_delay = self.settings.value("editor/gif_delay", None)
        if old_delay is None:
            return
        try:
            delay = int(str(old_delay))
        except ValueError:
            delay = 800

        preset = _speed_for_delay(delay)
        self.settings.setValue("editor/speed_preset", preset)
        self.settings.remove("editor/gif_delay")
        logger.info(f"Migrated GIF delay {delay}ms to speed preset '{preset}'")

    def _rename_backend_keys(self) -> None:
        """1.1 kept the server under "api/url" and the poll rate in seconds."""
        url = self.settings.value("api/url", None)
        if url:
            self.settings.setValue("backend/base_url", str(url))
        poll_s = self.settings.value("api/poll_seconds", None)
        if poll_s is not None:
            try:
                self.settings.setValue(
                    "backend/transcode_poll_interval_ms", int(float(str(poll_s)) * 1000)
                )
            except ValueError:
                logger.warning(f"Dropping unreadable poll interval {poll_s!r}")
        self.settings.remove("api")
