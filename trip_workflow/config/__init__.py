"""Runtime configuration helpers."""

from trip_workflow.config.settings import EditorSettings, resolve_editor_settings

__all__ = [
    "EditorSettings",
    "resolve_editor_settings",
]
