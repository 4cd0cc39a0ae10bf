"""Helpers that format bound values consistently in log output."""

from __future__ import annotations

from typing import Any


def dump_env(key: str, value: Any) -> str:
    """Format one environment variable as ``ENV: KEY = [value]``."""
    return f"ENV: {key} = [{value}]"
