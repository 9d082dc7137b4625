"""
Toolbox preset settings for drill-editor.
"""

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

# Default preset per numbered team
DEFAULT_TEAM_PRESETS: dict[str, dict[str, str | float]] = {
    "team1": {"color": "#ef4444", "size": 1.0},
    "team2": {"color": "#3b82f6", "size": 1.0},
}

MIN_PRESET_SIZE = 0.5
MAX_PRESET_SIZE = 3.0


class ToolboxSettings:
    """Manages per-team toolbox presets."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_float(self, key: str, default: float = 0.0) -> float:
        """Type-safe float retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return float(cast(str | float, value))
        except (ValueError, TypeError):
            return default

    @staticmethod
    def _check_team(team: str) -> None:
        if team not in DEFAULT_TEAM_PRESETS:
            raise ValueError(f"Unknown team preset: {team}")

    @property
    def active_team(self) -> str:
        """Get the team whose preset feeds non-player toolbox items."""
        value = self._get_str("toolbox/active_team", "team1")
        return value if value in DEFAULT_TEAM_PRESETS else "team1"

    @active_team.setter
    def active_team(self, value: str) -> None:
        """Set the active team preset."""
        self._check_team(value)
        self.settings.setValue("toolbox/active_team", value)
        self.settings.sync()

    def get_team_color(self, team: str) -> str:
        """Get preset color for a team."""
        self._check_team(team)
        default = str(DEFAULT_TEAM_PRESETS[team]["color"])
        return self._get_str(f"toolbox/{team}/color", default)

    def set_team_color(self, team: str, color: str) -> None:
        """Set preset color for a team."""
        self._check_team(team)
        self.settings.setValue(f"toolbox/{team}/color", color)
        self.settings.sync()

    def get_team_size(self, team: str) -> float:
        """Get preset size multiplier for a team (0.5-3.0)."""
        self._check_team(team)
        default = float(DEFAULT_TEAM_PRESETS[team]["size"])
        value = self._get_float(f"toolbox/{team}/size", default)
        return max(MIN_PRESET_SIZE, min(MAX_PRESET_SIZE, value))

    def set_team_size(self, team: str, size: float) -> None:
        """Set preset size multiplier for a team (0.5-3.0)."""
        self._check_team(team)
        validated = max(MIN_PRESET_SIZE, min(MAX_PRESET_SIZE, size))
        if validated != size:
            logger.warning(f"Preset size {size} clamped to {validated}")
        self.settings.setValue(f"toolbox/{team}/size", validated)
        self.settings.sync()
