"""
About dialog for drill-editor.
"""

from typing import Optional

import PIL
import PySide6
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMessageBox, QWidget


def show_about_dialog(
    version: str,
    backend_url: Optional[str] = None,
    parent: Optional[QWidget] = None,
) -> None:
    """
    Show application, backend and library versions.

    Args:
        version: Application version string
        backend_url: Configured drill backend, None when working locally
        parent: Parent widget
    """
    storage = backend_url or "local drill files only"
    libraries = f"PySide6 {PySide6.__version__}, Pillow {PIL.__version__}"

    box = QMessageBox(parent)
    box.setWindowTitle("About Drill Editor")
    box.setTextFormat(Qt.TextFormat.RichText)
    box.setText(
        f"<h3>Drill Editor {version}</h3>"
        "<p>Lay out players, equipment and runs on a pitch, step the drill "
        "through keyframes and export it as a looping animation or a PDF.</p>"
        f"<p><b>Storage:</b> {storage}<br>"
        f"<b>Built with:</b> {libraries}</p>"
    )
    box.setStandardButtons(QMessageBox.StandardButton.Ok)
    box.exec()
