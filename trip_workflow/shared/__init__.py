"""Shared cross-layer types and exceptions."""

from trip_workflow.shared.exceptions import ExternalServiceError

__all__ = ["ExternalServiceError"]
