"""Structured editor event log: one JSON object per line."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


class StructuredLogger:
    """Writes editor events as JSON lines tagged with a trace id."""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(line + "\n")
            self._output.flush()
        except Exception as exc:
            # Last-resort fallback to avoid silent logger failures.
            try:
                fallback = {
                    "event": "logger_internal_error",
                    "trace_id": self.trace_id,
                    "timestamp": time.time(),
                    "error": str(exc),
                }
                sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
                sys.stderr.flush()
            except Exception:
                return

    def event(self, name: str, **extra: Any) -> None:
        self._emit({"event": name, **extra})

    def mutation(self, operation: str, *, day_number: int, **extra: Any) -> None:
        self._emit({"event": "mutation", "operation": operation, "day_number": day_number, **extra})

    def noop(self, operation: str, reason: str, **extra: Any) -> None:
        self._emit({"event": "noop", "operation": operation, "reason": reason, **extra})

    def error(self, component: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "component": component, "error": error, **extra})


_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger
