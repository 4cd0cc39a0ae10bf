"""Tests for environment sources and the dump helper."""

from __future__ import annotations

from pathlib import Path

import pytest

from envbind.dump import dump_env
from envbind.sources.environ import (
    DotenvSource,
    EnvSource,
    MappingSource,
    OsEnvironSource,
    as_source,
)


class TestOsEnvironSource:
    def test_reads_live_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        source = OsEnvironSource()
        monkeypatch.setenv("ENVBIND_TEST_KEY", "v1")
        assert source.lookup("ENVBIND_TEST_KEY") == "v1"
        monkeypatch.setenv("ENVBIND_TEST_KEY", "v2")
        assert source.lookup("ENVBIND_TEST_KEY") == "v2"

    def test_missing_and_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVBIND_TEST_KEY", raising=False)
        assert OsEnvironSource().lookup("ENVBIND_TEST_KEY") is None
        monkeypatch.setenv("ENVBIND_TEST_KEY", "")
        assert OsEnvironSource().lookup("ENVBIND_TEST_KEY") == ""


class TestMappingSource:
    def test_exact_match_only(self) -> None:
        source = MappingSource({"APP_NAME": "x"})
        assert source.lookup("APP_NAME") == "x"
        assert source.lookup("app_name") is None

    def test_copies_input(self) -> None:
        values = {"A": "1"}
        source = MappingSource(values)
        values["A"] = "2"
        assert source.lookup("A") == "1"


class TestDotenvSource:
    def test_file_values(self, env_file: Path) -> None:
        source = DotenvSource(env_file, fallback=MappingSource({}))
        assert source.lookup("APP_NAME") == "from-file"
        assert source.lookup("APP_GREETING") == "hello world"

    def test_bare_key_is_absent(self, env_file: Path) -> None:
        source = DotenvSource(env_file, fallback=MappingSource({}))
        assert source.lookup("APP_BARE") is None

    def test_real_environment_wins(self, env_file: Path) -> None:
        source = DotenvSource(env_file, fallback=MappingSource({"APP_NAME": "from-env"}))
        assert source.lookup("APP_NAME") == "from-env"
        assert source.lookup("APP_DB_PORT") == "5432"

    def test_default_fallback_is_os_environ(self, env_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_NAME", "live")
        assert DotenvSource(env_file).lookup("APP_NAME") == "live"


class TestAsSource:
    def test_none_is_os_environ(self) -> None:
        assert isinstance(as_source(None), OsEnvironSource)

    def test_source_passes_through(self) -> None:
        source = MappingSource({})
        assert as_source(source) is source

    def test_mapping_is_wrapped(self) -> None:
        source = as_source({"A": "1"})
        assert isinstance(source, EnvSource)
        assert source.lookup("A") == "1"


def test_dump_env() -> None:
    assert dump_env("EV_PORT", "8080") == "ENV: EV_PORT = [8080]"
    assert dump_env("EV_EMPTY", "") == "ENV: EV_EMPTY = []"
