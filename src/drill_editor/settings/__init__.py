"""
Settings package for drill-editor.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from drill_editor.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .editor import EditorSettings
from .backend import BackendSettings
from .toolbox import ToolboxSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "EditorSettings",
    "BackendSettings",
    "ToolboxSettings",
]
