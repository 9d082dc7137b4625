"""GUI components for drill-editor."""
