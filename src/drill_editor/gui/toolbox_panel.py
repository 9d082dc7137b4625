"""
Toolbox panel: draggable drill items and team presets.
"""

import logging
from typing import Optional

import qtawesome as qta  # type: ignore
from PySide6.QtCore import QMimeData, QSize, Qt
from PySide6.QtGui import QColor, QDrag, QMouseEvent, QPalette
from PySide6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QLabel,
    QPushButton,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from drill_editor.drills.models import ElementKind
from drill_editor.drills.toolbox import COLOR_PALETTE, SIZE_STEP, Toolbox, ToolboxItem
from drill_editor.settings.toolbox import DEFAULT_TEAM_PRESETS, MAX_PRESET_SIZE, MIN_PRESET_SIZE

from .canvas import TOOLBOX_MIME_TYPE

SECTION_TITLES: dict[ElementKind, str] = {
    ElementKind.PLAYER: "Players",
    ElementKind.EQUIPMENT: "Equipment",
    ElementKind.MOVEMENT: "Movement",
    ElementKind.TEXT: "Text",
}


class ToolboxItemButton(QToolButton):
    """Button that starts a drag carrying its item's kind/subtype."""

    def __init__(self, item: ToolboxItem, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.item = item
        self.setText(item.label)
        self.setToolTip(f"Drag onto the canvas to add: {item.label}")
        self.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
        self.setIconSize(QSize(24, 24))
        self.setMinimumWidth(72)
        self._setup_icon()

    def _setup_icon(self) -> None:
        """Setup item icon respecting current palette."""
        try:
            icon_color = self.palette().color(QPalette.ColorRole.WindowText)
            self.setIcon(qta.icon(self.item.icon, color=icon_color))  # type: ignore[arg-type]
        except Exception as e:
            self.logger.warning(f"Failed to load icon {self.item.icon}: {e}")

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if not event.buttons() & Qt.MouseButton.LeftButton:
            return
        mime = QMimeData()
        mime.setData(
            TOOLBOX_MIME_TYPE,
            f"{self.item.kind.value}/{self.item.subtype}".encode("utf-8"),
        )
        drag = QDrag(self)
        drag.setMimeData(mime)
        drag.setPixmap(self.icon().pixmap(QSize(24, 24)))
        drag.exec(Qt.DropAction.CopyAction)


class ToolboxPanel(QWidget):
    """Catalog of drill items plus the team preset editor."""

    def __init__(self, toolbox: Toolbox, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.toolbox = toolbox
        self.settings = toolbox.settings

        self._setup_ui()
        self._load_presets()

        self.logger.debug("ToolboxPanel initialized")

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        for kind, title in SECTION_TITLES.items():
            group = QGroupBox(title)
            grid = QGridLayout(group)
            items = [item for item in self.toolbox.items if item.kind is kind]
            for index, item in enumerate(items):
                grid.addWidget(ToolboxItemButton(item, group), index // 3, index % 3)
            layout.addWidget(group)

        presets = QGroupBox("Team Preset")
        form = QFormLayout(presets)

        self.team_combo = QComboBox()
        for team in DEFAULT_TEAM_PRESETS:
            self.team_combo.addItem(team.replace("team", "Team "), team)
        self.team_combo.currentIndexChanged.connect(self._on_team_changed)
        form.addRow("Team:", self.team_combo)

        self.size_spin = QDoubleSpinBox()
        self.size_spin.setRange(MIN_PRESET_SIZE, MAX_PRESET_SIZE)
        self.size_spin.setSingleStep(SIZE_STEP)
        self.size_spin.setDecimals(1)
        self.size_spin.valueChanged.connect(self._on_size_changed)
        form.addRow("Size:", self.size_spin)

        palette = QWidget()
        palette_grid = QGridLayout(palette)
        palette_grid.setSpacing(2)
        palette_grid.setContentsMargins(0, 0, 0, 0)
        for index, color in enumerate(COLOR_PALETTE):
            swatch = QPushButton()
            swatch.setFixedSize(18, 18)
            swatch.setToolTip(color)
            swatch.setStyleSheet(f"background-color: {color}; border: 1px solid #6b7280;")
            swatch.clicked.connect(lambda _checked=False, c=color: self._on_color_picked(c))
            palette_grid.addWidget(swatch, index // 10, index % 10)
        form.addRow("Color:", palette)

        self.preview_label = QLabel()
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setFixedSize(32, 32)
        form.addRow("Preview:", self.preview_label)

        layout.addWidget(presets)
        layout.addStretch(1)

    @property
    def current_team(self) -> str:
        return str(self.team_combo.currentData())

    def _load_presets(self) -> None:
        index = self.team_combo.findData(self.settings.active_team)
        self.team_combo.setCurrentIndex(max(0, index))
        self._refresh_preset_widgets()

    def _refresh_preset_widgets(self) -> None:
        team = self.current_team
        self.size_spin.blockSignals(True)
        self.size_spin.setValue(self.settings.get_team_size(team))
        self.size_spin.blockSignals(False)
        self.update_preview()

    def update_preview(self, label: str = "") -> None:
        """Show the active preset colour with the next player number."""
        color = QColor(self.settings.get_team_color(self.current_team))
        self.preview_label.setText(label)
        self.preview_label.setStyleSheet(
            f"background-color: {color.name()}; color: white; font-weight: bold;"
            "border-radius: 16px;"
        )

    def _on_team_changed(self, _index: int) -> None:
        self.settings.active_team = self.current_team
        self._refresh_preset_widgets()

    def _on_size_changed(self, value: float) -> None:
        self.settings.set_team_size(self.current_team, value)

    def _on_color_picked(self, color: str) -> None:
        self.settings.set_team_color(self.current_team, color)
        self.update_preview(self.preview_label.text())
