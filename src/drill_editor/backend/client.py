"""
Drill backend client.

DrillBackend is the interface the editor session talks to; HttpDrillBackend
implements it over HTTP with requests. Payloads are serialized with orjson.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol

import orjson
import requests

from drill_editor.persistence.mapper import extract_transcode_status
from drill_editor.settings.types import ConfigError

if TYPE_CHECKING:
    from drill_editor.settings.backend import BackendSettings


class BackendError(Exception):
    """Raised on transport failures and unsuccessful HTTP responses."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DrillBackend(Protocol):
    """Storage collaborator for drills."""

    def fetch_drill(self, drill_id: str) -> dict[str, Any]:
        ...

    def create_drill(self, payload: dict[str, Any]) -> dict[str, Any]:
        ...

    def update_drill(self, drill_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        ...

    def fetch_transcode_status(self, drill_id: str) -> Optional[str]:
        ...

    def download(self, url: str) -> bytes:
        ...


class HttpDrillBackend:
    """DrillBackend over the drills REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. "https://example.org"
            timeout: Per-request timeout in seconds
            session: Optional preconfigured requests session (auth headers etc.)
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    @classmethod
    def from_settings(cls, settings: "BackendSettings") -> "HttpDrillBackend":
        """Create a client from backend settings.

        Raises:
            ConfigError: If no base URL is configured
        """
        if not settings.base_url:
            raise ConfigError("Backend base URL is not configured")
        return cls(settings.base_url, timeout=settings.request_timeout_s)

    def _request(self, method: str, path: str, payload: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {}
        body = None
        if payload is not None:
            headers["Content-Type"] = "application/json"
            body = orjson.dumps(payload)

        self.logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, data=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        try:
            data = orjson.loads(response.content) if response.content else {}
        except orjson.JSONDecodeError:
            data = {}

        if not response.ok:
            message = ""
            if isinstance(data, dict):
                message = str(data.get("error") or data.get("message") or "")
            message = message or response.reason or "Request failed"
            self.logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise BackendError(message, status_code=response.status_code)

        if not isinstance(data, dict):
            raise BackendError(f"{method} {path} returned an unexpected body", response.status_code)
        return data

    def fetch_drill(self, drill_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/drills/{drill_id}")

    def create_drill(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/drills", payload)

    def update_drill(self, drill_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/drills/{drill_id}", payload)

    def fetch_transcode_status(self, drill_id: str) -> Optional[str]:
        """Current animationVideoStatus of a drill."""
        return extract_transcode_status(self.fetch_drill(drill_id))

    def download(self, url: str) -> bytes:
        """Fetch a stored media file (video, GIF or thumbnail).

        Relative URLs are resolved against the backend root.
        """
        if not url.startswith(("http://", "https://")):
            url = f"{self.base_url}/{url.lstrip('/')}"

        self.logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendError(f"Download of {url} failed: {e}") from e
        if not response.ok:
            raise BackendError(
                f"Download of {url} failed: {response.reason or 'Request failed'}",
                status_code=response.status_code,
            )
        return response.content
