"""
Logging settings for drill-editor.

Console output is meant for development; the CSV log file lives in the
per-user data directory so exports and backend calls can be traced after
the fact.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, cast

from PySide6.QtCore import QStandardPaths

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "drill_editor.csv"

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Rotation limits for the log file
MIN_LOG_SIZE_MB, MAX_LOG_SIZE_MB = 1, 100
MAX_LOG_BACKUPS = 20


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


class LoggingSettings:
    """Console and file logging options."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _level(self, key: str, default: str) -> str:
        value = str(self.settings.value(key, default) or default).upper()
        return value if value in VALID_LEVELS else default

    def _set_level(self, key: str, value: str) -> None:
        level = value.upper()
        if level not in VALID_LEVELS:
            logger.warning(f"Invalid log level {value!r} for {key}, ignored")
            return
        self.settings.setValue(key, level)
        self.settings.sync()

    def _int(self, key: str, default: int, low: int, high: int) -> int:
        try:
            value = int(cast(str | int, self.settings.value(key, default)))
        except (TypeError, ValueError):
            value = default
        return max(low, min(high, value))

    def _set(self, key: str, value: object) -> None:
        self.settings.setValue(key, value)
        self.settings.sync()

    # === CONSOLE ===

    @property
    def console_logging(self) -> bool:
        return _as_bool(self.settings.value("logging/console_enabled"), True)

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._set("logging/console_enabled", value)

    @property
    def console_log_level(self) -> str:
        return self._level("logging/console_level", "INFO")

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._set_level("logging/console_level", value)

    @property
    def console_use_colors(self) -> bool:
        return _as_bool(self.settings.value("logging/console_use_colors"), True)

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._set("logging/console_use_colors", value)

    # === FILE ===

    @property
    def file_logging(self) -> bool:
        return _as_bool(self.settings.value("logging/file_enabled"), False)

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._set("logging/file_enabled", value)

    @property
    def max_file_size_mb(self) -> int:
        """Size at which the log file is rotated (1-100 MB)."""
        return self._int("logging/max_file_size_mb", 10, MIN_LOG_SIZE_MB, MAX_LOG_SIZE_MB)

    @max_file_size_mb.setter
    def max_file_size_mb(self, value: int) -> None:
        self._set("logging/max_file_size_mb", max(MIN_LOG_SIZE_MB, min(MAX_LOG_SIZE_MB, value)))

    @property
    def backup_count(self) -> int:
        """Rotated log files kept next to the current one (0-20)."""
        return self._int("logging/backup_count", 5, 0, MAX_LOG_BACKUPS)

    @backup_count.setter
    def backup_count(self, value: int) -> None:
        self._set("logging/backup_count", max(0, min(MAX_LOG_BACKUPS, value)))

    # === THIRD-PARTY ===

    @property
    def library_log_level(self) -> str:
        """Level applied to Pillow, urllib3 and requests loggers."""
        return self._level("logging/library_level", "INFO")

    @library_log_level.setter
    def library_log_level(self, value: str) -> None:
        self._set_level("logging/library_level", value)

    @property
    def log_file_path(self) -> Path:
        """Log file inside the per-user application data directory."""
        base = QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        )
        root = Path(base) if base else Path.home() / ".drill_editor"
        return root / "logs" / LOG_FILE_NAME
