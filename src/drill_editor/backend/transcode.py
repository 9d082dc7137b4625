"""Polling of the server-side video transcode status."""

import logging
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .client import BackendError

if TYPE_CHECKING:
    from .client import DrillBackend

PENDING = "pending"


class TranscodeStatusPoller(QObject):
    """Polls a drill's transcode status until it leaves ``pending``.

    Stops on any other status (``status_resolved`` carries "" when the
    server reports none), after ``max_attempts`` polls (emitting
    ``timed_out``) or on ``cancel()``. Backend errors count as attempts.
    """

    status_resolved = Signal(str)
    timed_out = Signal()

    def __init__(
        self,
        backend: "DrillBackend",
        interval_ms: int = 10000,
        max_attempts: int = 60,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.backend = backend
        self.max_attempts = max_attempts
        self.attempts = 0
        self.drill_id: Optional[str] = None
        self.last_status: Optional[str] = None

        self.timer = QTimer(self)
        self.timer.setSingleShot(False)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.poll_now)

    @property
    def is_active(self) -> bool:
        return self.timer.isActive()

    def start(self, drill_id: str) -> None:
        """Begin polling a drill, restarting the attempt count."""
        self.drill_id = drill_id
        self.attempts = 0
        self.last_status = PENDING
        self.timer.start()
        self.logger.info(f"Polling transcode status of drill {drill_id}")

    def cancel(self) -> None:
        if self.timer.isActive():
            self.timer.stop()
            self.logger.debug(f"Transcode polling of drill {self.drill_id} cancelled")

    def poll_now(self) -> None:
        """Query the status once and apply the stop conditions."""
        if self.drill_id is None:
            return
        self.attempts += 1

        try:
            status = self.backend.fetch_transcode_status(self.drill_id)
        except BackendError as e:
            self.logger.warning(f"Transcode status poll failed: {e}")
            status = PENDING

        self.last_status = status
        if status != PENDING:
            # A missing status means no video is being produced
            self.timer.stop()
            self.logger.info(f"Transcode of drill {self.drill_id} finished: {status}")
            self.status_resolved.emit(status or "")
            return

        if self.attempts >= self.max_attempts:
            self.timer.stop()
            self.logger.warning(
                f"Transcode of drill {self.drill_id} still pending after {self.attempts} polls"
            )
            self.timed_out.emit()
