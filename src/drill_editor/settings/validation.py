"""
Settings validation system for drill-editor.
"""

import logging
import re
from typing import TYPE_CHECKING, List
from urllib.parse import urlparse

from .toolbox import DEFAULT_TEAM_PRESETS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

# Polling longer than this is almost certainly a misconfiguration
MAX_POLLING_MS = 60 * 60 * 1000


class SettingsValidator:
    """Checks a settings profile before the editor starts."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        errors: List[str] = []
        warnings: List[str] = []

        self._check_backend(errors, warnings)
        self._check_editor(errors, warnings)
        self._check_toolbox(errors, warnings)

        if errors:
            logger.debug(f"Settings validation found {len(errors)} error(s)")
        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def _check_backend(self, errors: List[str], warnings: List[str]) -> None:
        backend = self.settings.backend
        if not backend.base_url:
            warnings.append("Backend URL not set, only local drill files are available")
        else:
            parsed = urlparse(backend.base_url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(f"Backend URL is not a valid http(s) URL: {backend.base_url}")

        interval = backend.transcode_poll_interval_ms
        attempts = backend.transcode_max_attempts
        if interval * attempts > MAX_POLLING_MS:
            warnings.append(
                f"Transcode polling may run for over an hour "
                f"({attempts} attempts every {interval}ms)"
            )

    def _check_editor(self, errors: List[str], warnings: List[str]) -> None:
        editor = self.settings.editor
        if editor.speed_preset not in editor.SPEED_PRESETS:
            errors.append(f"Unknown animation speed preset: {editor.speed_preset}")

    def _check_toolbox(self, errors: List[str], warnings: List[str]) -> None:
        toolbox = self.settings.toolbox
        for team in DEFAULT_TEAM_PRESETS:
            color = toolbox.get_team_color(team)
            if not HEX_COLOR.match(color):
                warnings.append(f"Preset colour of {team} is not #rrggbb: {color}")
