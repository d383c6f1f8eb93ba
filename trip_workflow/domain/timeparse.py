"""Clock-time helpers shared by validators, layout and reconciliation."""

from __future__ import annotations

import re

from trip_workflow.domain.constants import ALWAYS_OPEN

_HHMM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value: str | None) -> int | None:
    if not value:
        return None
    match = _HHMM_PATTERN.match(str(value).strip())
    if not match:
        return None
    hh, mm = int(match.group(1)), int(match.group(2))
    if hh > 23 or mm > 59:
        return None
    return hh * 60 + mm


def format_hhmm(minutes: int) -> str:
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def start_minutes(value: str | None) -> int:
    """Sort key for a node start; unparseable values sort last."""
    parsed = parse_hhmm(value)
    return MINUTES_PER_DAY if parsed is None else parsed


def parse_open_window(open_time: str | None, close_time: str | None) -> tuple[int, int] | None:
    if not open_time or not close_time:
        return None
    if str(open_time).strip().lower() in ALWAYS_OPEN or str(close_time).strip().lower() in ALWAYS_OPEN:
        return None
    start = parse_hhmm(open_time)
    end = parse_hhmm(close_time)
    if start is None or end is None:
        return None
    if end <= start:
        end += MINUTES_PER_DAY
    return start, end


def split_hours_range(value: str | None) -> tuple[str, str] | None:
    """Split an "HH:MM - HH:MM" display string into its two ends."""
    if not value:
        return None
    text = str(value).strip()
    if text.lower() in ALWAYS_OPEN:
        return text, text
    if "-" not in text:
        return None
    left, right = text.split("-", 1)
    left, right = left.strip(), right.strip()
    if parse_hhmm(left) is None or parse_hhmm(right) is None:
        return None
    return left, right


__all__ = ["MINUTES_PER_DAY", "format_hhmm", "parse_hhmm", "parse_open_window", "split_hours_range", "start_minutes"]
