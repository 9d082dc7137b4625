"""
Window and dialog state remembered between sessions.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any

from PySide6.QtCore import QByteArray
from PySide6.QtWidgets import QMainWindow

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

MAX_RECENT_DRILLS = 10


def _as_bytes(value: Any) -> QByteArray | None:
    if isinstance(value, bytes):
        return QByteArray(value)
    if isinstance(value, QByteArray) and not value.isEmpty():
        return value
    return None


class UISettings:
    """Main window layout, last used folder and recently opened drills."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    # === MAIN WINDOW ===

    def save_window_geometry(self, window: QMainWindow) -> None:
        """Store geometry and dock/toolbar layout of the main window."""
        self.settings.setValue("ui/window_geometry", window.saveGeometry())
        self.settings.setValue("ui/window_state", window.saveState())
        self.settings.sync()

    def restore_window_geometry(self, window: QMainWindow) -> bool:
        """Restore the stored layout. Returns True if a geometry was applied."""
        geometry = _as_bytes(self.settings.value("ui/window_geometry"))
        state = _as_bytes(self.settings.value("ui/window_state"))

        restored = geometry is not None and window.restoreGeometry(geometry)
        if state is not None:
            window.restoreState(state)
        return restored

    # === FILE DIALOGS ===

    @property
    def last_directory(self) -> Path:
        """Folder last used for opening, saving or exporting a drill."""
        value = self.settings.value("ui/last_directory", "")
        path = Path(str(value)) if value else Path.home()
        return path if path.is_dir() else Path.home()

    @last_directory.setter
    def last_directory(self, value: Path) -> None:
        self.settings.setValue("ui/last_directory", str(value))
        self.settings.sync()

    def remember_file(self, file_path: Path) -> None:
        """Remember the folder of a chosen file."""
        self.last_directory = Path(file_path).parent

    # === RECENT DRILLS ===

    @property
    def recent_drill_ids(self) -> list[str]:
        """Backend drill ids opened or saved recently, newest first."""
        value = self.settings.value("ui/recent_drill_ids", [])
        if isinstance(value, str):
            value = [value] if value else []
        return [str(item) for item in (value or [])][:MAX_RECENT_DRILLS]

    def add_recent_drill(self, drill_id: str) -> None:
        recent = [drill_id] + [item for item in self.recent_drill_ids if item != drill_id]
        self.settings.setValue("ui/recent_drill_ids", recent[:MAX_RECENT_DRILLS])
        self.settings.sync()
