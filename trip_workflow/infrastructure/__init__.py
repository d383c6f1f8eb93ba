"""Infrastructure services and cross-cutting utilities."""

from trip_workflow.infrastructure.config import env_flag, get_env
from trip_workflow.infrastructure.logging import StructuredLogger, get_logger

__all__ = [
    "StructuredLogger",
    "env_flag",
    "get_env",
    "get_logger",
]
