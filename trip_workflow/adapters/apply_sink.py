"""Delivery targets for a reconciled schedule ("Apply").

The editor core hands the payload to a plain callable; the sinks here are the
concrete callables the API wires in.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from trip_workflow.shared.exceptions import ExternalServiceError

_logger = logging.getLogger("trip-workflow.apply")


class HttpApplySink:
    """POSTs the reconciled itinerary to the itinerary service."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        max_retries: int = 1,
        client: Optional[httpx.Client] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._max_retries = max_retries
        self._client = client

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self._url, json=payload, timeout=self._timeout)
        return httpx.post(self._url, json=payload, timeout=self._timeout)

    def __call__(self, payload: dict[str, Any]) -> dict[str, Any]:
        last_error: Optional[ExternalServiceError] = None

        for attempt in range(1, self._max_retries + 2):
            try:
                resp = self._post(payload)
                resp.raise_for_status()
                if not resp.content:
                    return {}
                body = resp.json()
                return body if isinstance(body, dict) else {"result": body}
            except httpx.HTTPStatusError as e:
                last_error = ExternalServiceError("itinerary-service", f"HTTP {e.response.status_code}")
                if e.response.status_code < 500:
                    break
            except httpx.TimeoutException:
                last_error = ExternalServiceError(
                    "itinerary-service", f"timed out after {self._timeout}s (attempt {attempt})"
                )
            except httpx.HTTPError as e:
                last_error = ExternalServiceError("itinerary-service", f"request failed: {e}")
            except ValueError:
                last_error = ExternalServiceError("itinerary-service", "response was not JSON")
                break

            if attempt <= self._max_retries:
                time.sleep(0.5 * attempt)

        _logger.warning("Apply delivery failed: %s", last_error)
        raise last_error  # type: ignore[misc]


class RecordingApplySink:
    """Keeps applied payloads in memory; used when no service URL is configured."""

    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []

    def __call__(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.payloads.append(payload)
        return {"stored": len(self.payloads)}


__all__ = ["HttpApplySink", "RecordingApplySink"]
