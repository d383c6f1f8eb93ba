"""pytest fixtures: keep editor settings and the session store isolated per test."""

import io

import pytest

from trip_workflow.infrastructure.logging import StructuredLogger


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Defaults only; no real itinerary service is ever contacted."""
    for name in (
        "ITINERARY_SERVICE_URL",
        "ITINERARY_SERVICE_TIMEOUT",
        "WORKFLOW_HISTORY_LIMIT",
        "WORKFLOW_COST_OUTLIER_MULTIPLIER",
        "WORKFLOW_COST_OUTLIER_MIN_SAMPLES",
        "WORKFLOW_MAX_DISTANCE_KM",
        "WORKFLOW_MAX_DAY_MINUTES",
        "WORKFLOW_REFERENCE_LAT",
        "WORKFLOW_REFERENCE_LNG",
        "WORKFLOW_COORDINATE_JITTER",
        "SESSION_TTL_SECONDS",
        "SESSION_MAX_SESSIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def log_output():
    return io.StringIO()


@pytest.fixture
def quiet_logger(log_output):
    return StructuredLogger(trace_id="test", output=log_output)
