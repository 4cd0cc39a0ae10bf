"""Resolve each described field from the environment and assign it.

Binding is a single pass: the first failing field aborts the call and
fields assigned before it keep their new values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from envbind.binding.coerce import coerce, type_name
from envbind.binding.introspect import gather_fields
from envbind.dump import dump_env
from envbind.errors import MissingRequired, ParseError
from envbind.models.descriptor import FieldDescriptor
from envbind.sources.environ import EnvSource, as_source

logger = logging.getLogger(__name__)

# Where a resolved value came from.
ORIGIN_KEY = "env"
ORIGIN_ALIAS = "alias"
ORIGIN_DEFAULT = "default"
ORIGIN_UNSET = "unset"


@dataclass(frozen=True)
class Resolution:
    value: str | None
    origin: str

    @property
    def found(self) -> bool:
        return self.origin != ORIGIN_UNSET


def resolve(info: FieldDescriptor, source: EnvSource) -> Resolution:
    """Apply the key, alias, default lookup order for one field."""
    value = source.lookup(info.key)
    if value is not None:
        return Resolution(value, ORIGIN_KEY)
    if info.alias:
        value = source.lookup(info.alias)
        if value is not None:
            return Resolution(value, ORIGIN_ALIAS)
    if info.tags.has_default:
        return Resolution(info.tags.default, ORIGIN_DEFAULT)
    return Resolution(None, ORIGIN_UNSET)


def bind_fields(infos: list[FieldDescriptor], source: EnvSource) -> None:
    for info in infos:
        res = resolve(info, source)
        if not res.found:
            if info.tags.required:
                raise MissingRequired(info.key, info.name)
            logger.debug("No value for %s, leaving %s unchanged", info.key, info.name)
            continue

        logger.debug("%s (%s)", dump_env(info.key, res.value), res.origin)
        try:
            value = coerce(res.value, info.annotation, info.get())
        except Exception as e:
            raise ParseError(
                key=info.key,
                field_name=info.name,
                type_name=type_name(info.annotation),
                value=res.value,
                cause=e,
            ) from e
        info.set(value)


def bind(prefix: str, target: Any, *, source: EnvSource | Mapping[str, str] | None = None) -> None:
    """Populate *target* in place from environment variables named ``PREFIX_FIELD``.

    *source* defaults to the live process environment; a mapping or any
    object with a ``lookup(key)`` method can be supplied instead.
    Raises a :class:`~envbind.errors.BindError` subclass on the first failure.
    """
    infos = gather_fields(prefix, target)
    bind_fields(infos, as_source(source))
    logger.debug("Bound %d field(s) for prefix %s", len(infos), prefix.upper())
