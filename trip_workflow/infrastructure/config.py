"""Infrastructure configuration helpers."""

from __future__ import annotations

import os

_TRUTHY = {"1", "true", "yes", "on"}


def get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_flag(name: str, default: bool = False) -> bool:
    value = get_env(name)
    if value is None:
        return default
    return value.lower() in _TRUTHY


__all__ = ["env_flag", "get_env"]
