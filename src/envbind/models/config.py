"""Configuration models."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

from envbind.models.tags import Tag


class CliConfig(BaseModel):
    """Settings for the ``envbind`` command itself.

    Loaded from ``ENVBIND_*`` environment variables by the package's own
    binder, see :func:`envbind.config.bootstrap.load_cli_config`.
    """

    log_level: Annotated[str, Tag(default="WARNING")] = Field(
        default="WARNING",
        description="Root log level for the CLI process.",
    )
    env_file: str | None = Field(
        default=None,
        description="Default .env file read by `envbind check` when --env-file is not given.",
    )
