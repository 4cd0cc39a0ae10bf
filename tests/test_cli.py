"""Tests for the envbind command and its bootstrap configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import pytest
from pydantic import BaseModel

from envbind.cli.main import describe, load_record, main
from envbind.config.bootstrap import load_cli_config
from envbind.models.config import CliConfig
from envbind.models.tags import Tag

_RECORD = f"{__name__}:AppConfig"
_MODEL_RECORD = f"{__name__}:ApiSettings"


@dataclass
class AppConfig:
    name: str = ""
    greeting: Annotated[str, Tag(default="hi")] = ""
    db_port: Annotated[int, Tag(require=True)] = 0
    token: Annotated[str, Tag(alias="LEGACY_TOKEN")] = ""


class ApiSettings(BaseModel):
    url: str
    retries: int = 3


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("ENVBIND_LOG_LEVEL", "ENVBIND_ENV_FILE", "APP_NAME", "APP_GREETING",
                "APP_DB_PORT", "APP_TOKEN", "LEGACY_TOKEN"):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Bootstrap config
# ---------------------------------------------------------------------------


class TestLoadCliConfig:
    def test_defaults(self) -> None:
        cfg = load_cli_config(source={})
        assert cfg.log_level == "WARNING"
        assert cfg.env_file is None

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVBIND_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ENVBIND_ENV_FILE", "/tmp/app.env")
        cfg = load_cli_config()
        assert cfg.log_level == "DEBUG"
        assert cfg.env_file == "/tmp/app.env"


# ---------------------------------------------------------------------------
# Record loading and describe
# ---------------------------------------------------------------------------


class TestLoadRecord:
    def test_dataclass(self) -> None:
        assert isinstance(load_record(_RECORD), AppConfig)

    def test_pydantic_model(self) -> None:
        assert isinstance(load_record("envbind.models.config:CliConfig"), CliConfig)

    @pytest.mark.parametrize("path", ["no_colon", ":AppConfig", f"{__name__}:"])
    def test_malformed_path(self, path: str) -> None:
        with pytest.raises(ValueError):
            load_record(path)


class TestDescribe:
    def test_lines(self) -> None:
        lines = describe(AppConfig(), "app")
        assert lines == [
            "APP_NAME  str",
            "APP_GREETING  str  default='hi'",
            "APP_DB_PORT  int  required",
            "APP_LEGACY_TOKEN  str  alias=LEGACY_TOKEN",
        ]


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_describe_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["describe", _RECORD, "--prefix", "app"]) == 0
        out = capsys.readouterr().out
        assert "APP_DB_PORT  int  required" in out

    def test_check_with_env_file(self, env_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["check", _RECORD, "--prefix", "app", "--env-file", str(env_file)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "ENV: APP_NAME = [from-file] (env)",
            "ENV: APP_GREETING = [hello world] (env)",
            "ENV: APP_DB_PORT = [5432] (env)",
            "ENV: APP_LEGACY_TOKEN = [] (unset)",
        ]

    def test_check_env_file_from_config(
        self, env_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("ENVBIND_ENV_FILE", str(env_file))
        monkeypatch.setenv("LEGACY_TOKEN", "t0k")
        assert main(["check", _RECORD, "--prefix", "app"]) == 0
        out = capsys.readouterr().out
        assert "ENV: APP_LEGACY_TOKEN = [t0k] (alias)" in out

    def test_check_failure_exits_nonzero(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("APP_DB_PORT", "bogus")
        assert main(["check", _RECORD, "--prefix", "app"]) == 1
        err = capsys.readouterr().err
        assert "APP_DB_PORT" in err
        assert "'bogus'" in err

    def test_check_missing_required(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["check", _RECORD, "--prefix", "app"]) == 1
        assert "required key APP_DB_PORT missing value" in capsys.readouterr().err

    def test_check_pydantic_record_with_required_field(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("API_URL", "https://example.org")
        monkeypatch.delenv("API_RETRIES", raising=False)
        assert main(["check", _MODEL_RECORD, "--prefix", "api"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "ENV: API_URL = [https://example.org] (env)",
            "ENV: API_RETRIES = [3] (unset)",
        ]

    def test_unknown_record(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["describe", "envbind.nope:Missing", "--prefix", "app"])
        assert exc_info.value.code == 2
