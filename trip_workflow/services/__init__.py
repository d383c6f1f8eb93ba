"""Service layer public exports."""

from trip_workflow.services.formatting import format_cost, format_duration

__all__ = ["format_cost", "format_duration"]
