"""Shared test fixtures."""

from __future__ import annotations

import pytest
from pathlib import Path


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Write a small .env file with a comment, a quoted value and a bare key."""
    path = tmp_path / ".env"
    path.write_text(
        "# service settings\n"
        "APP_NAME=from-file\n"
        'APP_GREETING="hello world"\n'
        "APP_DB_PORT=5432\n"
        "APP_BARE\n"
    )
    return path
