"""
Dialog components for drill-editor GUI.
"""

from .about_dialog import show_about_dialog
from .animation_preview_dialog import AnimationPreviewDialog
from .logging_settings_dialog import LoggingSettingsDialog
from .editor_settings_dialog import EditorSettingsDialog
from .backend_settings_dialog import BackendSettingsDialog

__all__ = [
    "show_about_dialog",
    "AnimationPreviewDialog",
    "LoggingSettingsDialog",
    "EditorSettingsDialog",
    "BackendSettingsDialog",
]
