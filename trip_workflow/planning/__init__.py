"""Node positioning for the workflow canvas."""

from trip_workflow.planning.layout import auto_layout, grid_layout

__all__ = ["auto_layout", "grid_layout"]
