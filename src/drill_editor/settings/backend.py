"""
Backend connection settings for drill-editor.
"""

from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class BackendSettings:
    """Manages drill backend and transcode polling settings."""

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
    def base_url(self) -> str:
        """Get backend base URL (empty when not configured)."""
        return self._get_str("backend/base_url", "").rstrip("/")

    @base_url.setter
    def base_url(self, value: str) -> None:
        """Set backend base URL."""
        self.settings.setValue("backend/base_url", value.strip())
        self.settings.sync()

    @property
    def request_timeout_s(self) -> int:
        """Get HTTP request timeout in seconds."""
        return max(1, self._get_int("backend/request_timeout_s", 30))

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        """Set HTTP request timeout in seconds."""
        self.settings.setValue("backend/request_timeout_s", max(1, value))
        self.settings.sync()

    @property
    def transcode_poll_interval_ms(self) -> int:
        """Get transcode status polling interval in milliseconds."""
        value = self._get_int("backend/transcode_poll_interval_ms", 10000)
        return max(1000, value)

    @transcode_poll_interval_ms.setter
    def transcode_poll_interval_ms(self, value: int) -> None:
        """Set transcode status polling interval in milliseconds."""
        self.settings.setValue("backend/transcode_poll_interval_ms", max(1000, value))
        self.settings.sync()

    @property
    def transcode_max_attempts(self) -> int:
        """Get maximum number of transcode status polls before giving up."""
        return max(1, self._get_int("backend/transcode_max_attempts", 60))

    @transcode_max_attempts.setter
    def transcode_max_attempts(self, value: int) -> None:
        """Set maximum number of transcode status polls before giving up."""
        self.settings.setValue("backend/transcode_max_attempts", max(1, value))
        self.settings.sync()
