"""Apply delivery sink tests (no network: httpx.MockTransport)."""

import httpx
import pytest

from trip_workflow.adapters import apply_sink
from trip_workflow.adapters.apply_sink import HttpApplySink, RecordingApplySink
from trip_workflow.shared.exceptions import ExternalServiceError

URL = "http://itinerary.test/apply"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(apply_sink.time, "sleep", lambda seconds: None)


def test_posts_payload_and_returns_json():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"saved": True})

    sink = HttpApplySink(URL, client=_client(handler))
    assert sink({"itinerary": {"days": []}}) == {"saved": True}
    assert seen[0].method == "POST"
    assert seen[0].url == URL


def test_empty_body_is_empty_dict():
    sink = HttpApplySink(URL, client=_client(lambda request: httpx.Response(204)))
    assert sink({"itinerary": {}}) == {}


def test_server_error_is_retried_then_raised():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(503)

    sink = HttpApplySink(URL, max_retries=2, client=_client(handler))
    with pytest.raises(ExternalServiceError) as exc_info:
        sink({"itinerary": {}})
    assert len(calls) == 3
    assert exc_info.value.service == "itinerary-service"
    assert "503" in str(exc_info.value)


def test_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(422, json={"detail": "bad"})

    sink = HttpApplySink(URL, max_retries=3, client=_client(handler))
    with pytest.raises(ExternalServiceError):
        sink({"itinerary": {}})
    assert len(calls) == 1


def test_recovers_after_transient_failure():
    responses = iter([httpx.Response(500), httpx.Response(200, json=[1, 2])])
    sink = HttpApplySink(URL, max_retries=1, client=_client(lambda request: next(responses)))
    assert sink({"itinerary": {}}) == {"result": [1, 2]}


def test_recording_sink():
    sink = RecordingApplySink()
    assert sink({"a": 1}) == {"stored": 1}
    assert sink({"b": 2}) == {"stored": 2}
    assert sink.payloads == [{"a": 1}, {"b": 2}]
