"""Load the CLI's own configuration from environment variables."""

from __future__ import annotations

from collections.abc import Mapping

from envbind.binding.binder import bind
from envbind.models.config import CliConfig
from envbind.sources.environ import EnvSource

_ENV_PREFIX = "ENVBIND"


def load_cli_config(source: EnvSource | Mapping[str, str] | None = None) -> CliConfig:
    """Build CliConfig from env vars (prefixed ENVBIND_) with defaults."""
    cfg = CliConfig()
    bind(_ENV_PREFIX, cfg, source=source)
    return cfg
