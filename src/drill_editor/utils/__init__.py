"""Utility helpers for drill-editor."""
