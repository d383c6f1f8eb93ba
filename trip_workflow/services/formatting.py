"""Display formatting for durations and costs."""

from __future__ import annotations


def format_duration(minutes: int | float) -> str:
    total = max(0, int(round(minutes)))
    hours, mins = divmod(total, 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"


def format_cost(amount: float, symbol: str = "") -> str:
    sign = "-" if amount < 0 else ""
    value = abs(float(amount))
    text = f"{value:,.0f}" if value.is_integer() else f"{value:,.2f}"
    return f"{sign}{symbol}{text}"


__all__ = ["format_cost", "format_duration"]
