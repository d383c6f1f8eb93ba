"""Editor tuning resolved from the environment."""

from __future__ import annotations

from pydantic import BaseModel, Field

from trip_workflow.infrastructure.config import get_env


def _env_float(name: str, default: float) -> float:
    raw = get_env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = get_env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _is_configured(value: str | None) -> bool:
    return bool(value and value.strip())


class EditorSettings(BaseModel):
    cost_outlier_multiplier: float = Field(default=3.0, gt=0)
    cost_outlier_min_samples: int = Field(default=3, ge=1)
    max_distance_km: float = Field(default=10.0, ge=0)
    max_day_minutes: int = Field(default=600, ge=0)
    history_limit: int | None = Field(default=None)
    reference_lat: float = 28.6139
    reference_lng: float = 77.2090
    coordinate_jitter: float = Field(default=0.1, ge=0)
    itinerary_service_url: str | None = None
    itinerary_service_timeout: float = Field(default=10.0, gt=0)


def resolve_editor_settings() -> EditorSettings:
    history_limit = _env_int("WORKFLOW_HISTORY_LIMIT", 0)
    service_url = get_env("ITINERARY_SERVICE_URL")
    timeout = _env_float("ITINERARY_SERVICE_TIMEOUT", 10.0)
    multiplier = _env_float("WORKFLOW_COST_OUTLIER_MULTIPLIER", 3.0)
    return EditorSettings(
        cost_outlier_multiplier=multiplier if multiplier > 0 else 3.0,
        cost_outlier_min_samples=max(1, _env_int("WORKFLOW_COST_OUTLIER_MIN_SAMPLES", 3)),
        max_distance_km=max(0.0, _env_float("WORKFLOW_MAX_DISTANCE_KM", 10.0)),
        max_day_minutes=max(0, _env_int("WORKFLOW_MAX_DAY_MINUTES", 600)),
        history_limit=history_limit if history_limit > 0 else None,
        reference_lat=_env_float("WORKFLOW_REFERENCE_LAT", 28.6139),
        reference_lng=_env_float("WORKFLOW_REFERENCE_LNG", 77.2090),
        coordinate_jitter=max(0.0, _env_float("WORKFLOW_COORDINATE_JITTER", 0.1)),
        itinerary_service_url=service_url.strip() if _is_configured(service_url) else None,
        itinerary_service_timeout=timeout if timeout > 0 else 10.0,
    )


__all__ = [
    "EditorSettings",
    "resolve_editor_settings",
]
