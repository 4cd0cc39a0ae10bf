"""Command-line entry point — inspect and check environment bindings.

Usage:
    envbind describe myapp.settings:Settings --prefix myapp
    envbind check myapp.settings:Settings --prefix myapp --env-file .env
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Any

from envbind.binding.binder import bind_fields, resolve
from envbind.binding.coerce import allocate, type_name
from envbind.binding.introspect import gather_fields
from envbind.config.bootstrap import load_cli_config
from envbind.dump import dump_env
from envbind.errors import BindError
from envbind.sources.environ import DotenvSource, EnvSource, OsEnvironSource

logger = logging.getLogger(__name__)


def load_record(path: str) -> Any:
    """Import ``module:Class`` and return a fresh instance of the record."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"expected 'module:Class', got {path!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return allocate(obj)


def describe(target: Any, prefix: str) -> list[str]:
    lines = []
    for info in gather_fields(prefix, target):
        parts = [info.key, type_name(info.annotation)]
        if info.alias:
            parts.append(f"alias={info.alias}")
        if info.tags.has_default:
            parts.append(f"default={info.tags.default!r}")
        if info.tags.required:
            parts.append("required")
        lines.append("  ".join(parts))
    return lines


def check(target: Any, prefix: str, source: EnvSource) -> list[str]:
    infos = gather_fields(prefix, target)
    bind_fields(infos, source)
    return [f"{dump_env(info.key, info.get())} ({resolve(info, source).origin})" for info in infos]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envbind", description="Inspect environment bindings of a config record")
    sub = parser.add_subparsers(dest="command", required=True)

    p_describe = sub.add_parser("describe", help="List the environment keys a record reads")
    p_describe.add_argument("record", help="Record class as module:Class")
    p_describe.add_argument("--prefix", required=True, help="Environment key prefix")

    p_check = sub.add_parser("check", help="Bind a record and show the resulting values")
    p_check.add_argument("record", help="Record class as module:Class")
    p_check.add_argument("--prefix", required=True, help="Environment key prefix")
    p_check.add_argument("--env-file", default=None, help=".env file consulted after the real environment")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    cfg = load_cli_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        target = load_record(args.record)
    except (ImportError, AttributeError, TypeError, ValueError) as e:
        parser.error(f"cannot load record {args.record!r}: {e}")

    try:
        if args.command == "describe":
            lines = describe(target, args.prefix)
        else:
            env_file = args.env_file or cfg.env_file
            source: EnvSource = DotenvSource(env_file) if env_file else OsEnvironSource()
            lines = check(target, args.prefix, source)
    except BindError as e:
        logger.debug("Binding %s failed", args.record, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
