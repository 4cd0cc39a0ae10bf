"""Environment sources the binder reads from.

The binder only ever calls ``lookup(key)``; it never writes. Swapping the
live process environment for a mapping makes binding deterministic in
tests.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from dotenv import dotenv_values


@runtime_checkable
class EnvSource(Protocol):
    def lookup(self, key: str) -> str | None:
        """Return the value stored under exactly *key*, or ``None``."""
        ...


class OsEnvironSource:
    """Reads ``os.environ`` at lookup time."""

    def lookup(self, key: str) -> str | None:
        return os.environ.get(key)


class MappingSource:
    """In-memory source backed by a plain mapping."""

    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values = dict(values)

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)


class DotenvSource:
    """Values from a ``.env`` file, with the real environment taking precedence.

    Keys declared without a value (``FOO`` on its own line) count as absent.
    """

    def __init__(self, path: str | Path, *, fallback: EnvSource | None = None) -> None:
        self.path = Path(path)
        self._file = MappingSource(dotenv_values(self.path))
        self._fallback = fallback if fallback is not None else OsEnvironSource()

    def lookup(self, key: str) -> str | None:
        value = self._fallback.lookup(key)
        if value is not None:
            return value
        return self._file.lookup(key)


def as_source(source: EnvSource | Mapping[str, str] | None) -> EnvSource:
    if source is None:
        return OsEnvironSource()
    if isinstance(source, EnvSource):
        return source
    return MappingSource(source)
