"""
Core settings management for drill-editor.
"""

import logging

from PySide6.QtCore import QSettings

from .backend import BackendSettings
from .editor import EditorSettings
from .logging import LoggingSettings
from .migration import SettingsMigrator
from .toolbox import ToolboxSettings
from .types import ConfigVersion, ValidationResult
from .ui import UISettings
from .validation import SettingsValidator

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Typed access to the persisted configuration of one profile.

    Values live in QSettings under ``<profile>/<subsystem>/<key>``; each
    subsystem object (editor, backend, toolbox, logging, ui) reads and
    writes its own keys and clamps values to their valid range.
    """

    ORGANIZATION = "drill_editor"
    APPLICATION = "drill_editor"

    def __init__(self, profile: str = "default"):
        """Open (and if needed migrate) a settings profile.

        Args:
            profile: Settings profile name; tests use throwaway profiles
        """
        self.settings = QSettings(self.ORGANIZATION, self.APPLICATION)
        self.profile = profile
        self.settings.beginGroup(profile)

        self.editor = EditorSettings(self.settings)
        self.backend = BackendSettings(self.settings)
        self.toolbox = ToolboxSettings(self.settings)
        self.logging = LoggingSettings(self.settings)
        self.ui = UISettings(self.settings)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._migrator.ensure_version()

        logger.debug(
            f"Settings profile '{profile}' loaded from {self.settings.fileName()}"
        )

    @property
    def is_first_run(self) -> bool:
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Configuration version stored in this profile."""
        return str(self.settings.value("app/version", ConfigVersion.CURRENT.value))

    def validate(self) -> ValidationResult:
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Where QSettings stores this profile, for diagnostics."""
        return self.settings.fileName()

    def reset_to_defaults(self) -> None:
        """Drop every stored value of this profile."""
        logger.warning(f"Resetting settings profile '{self.profile}' to defaults")
        self.settings.remove("")
        self._migrator.ensure_version()
        self.settings.sync()
