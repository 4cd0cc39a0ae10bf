"""Walk a record's fields and derive one environment key per field."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterator
from typing import Annotated, Any, get_type_hints

from pydantic import BaseModel

from envbind.binding.coerce import (
    allocate,
    has_capability,
    is_record_type,
    optional_inner,
    unwrap_annotated,
)
from envbind.errors import InvalidPrefix, InvalidTarget, UnsupportedStruct
from envbind.models.descriptor import FieldDescriptor
from envbind.models.tags import Tag

logger = logging.getLogger(__name__)


def gather_fields(prefix: str, target: Any) -> list[FieldDescriptor]:
    """Describe every bindable field of *target*, in declaration order.

    Unset ``Optional[Record]`` fields are allocated in place so their own
    fields can be bound; those inner fields use the outer field's key as
    their prefix.
    """
    if not prefix:
        raise InvalidPrefix()
    if not is_mutable_record(target):
        raise InvalidTarget(target)

    infos: list[FieldDescriptor] = []
    _walk(prefix, target, infos, (type(target),))
    return infos


def is_mutable_record(obj: Any) -> bool:
    if isinstance(obj, type):
        return False
    cls = type(obj)
    if dataclasses.is_dataclass(cls):
        return not cls.__dataclass_params__.frozen
    if isinstance(obj, BaseModel):
        return not cls.model_config.get("frozen", False)
    return False


def _record_fields(record: Any) -> Iterator[tuple[str, Any, Tag]]:
    cls = type(record)
    if isinstance(record, BaseModel):
        for name, info in cls.model_fields.items():
            annotation = info.annotation
            # pydantic moves top-level Annotated extras into info.metadata
            if info.metadata:
                annotation = Annotated[(annotation, *info.metadata)]
            yield name, annotation, Tag()
        return

    hints = get_type_hints(cls, include_extras=True)
    for f in dataclasses.fields(cls):
        yield f.name, hints.get(f.name, f.type), Tag.from_mapping(f.metadata)


def _walk(prefix: str, record: Any, infos: list[FieldDescriptor], path: tuple[type, ...]) -> None:
    for name, annotation, tags in _record_fields(record):
        base, extras = unwrap_annotated(annotation)
        for extra in extras:
            if isinstance(extra, Tag):
                tags = tags.merged(extra)

        if name.startswith("_") or tags.ignored:
            continue

        alias = tags.alias.upper() if tags.alias else None
        info = FieldDescriptor(
            name=name,
            key=f"{prefix}_{alias or name}".upper(),
            alias=alias,
            owner=record,
            annotation=annotation,
            tags=tags,
        )

        inner = optional_inner(base)
        if inner is not None and is_record_type(inner):
            nested = getattr(record, name, None)
            if nested is None:
                if inner in path:
                    logger.debug("Not expanding recursive field %s (%s)", name, inner.__name__)
                    continue
                nested = _allocate_nested(inner, name)
                setattr(record, name, nested)
                logger.debug("Allocated %s for field %s", inner.__name__, name)
            if has_capability(inner):
                infos.append(info)
            elif not is_mutable_record(nested):
                raise UnsupportedStruct(name, f"nested record is not mutable: {name}")
            else:
                _walk(info.key, nested, infos, path + (inner,))
            continue

        infos.append(info)
        if is_record_type(base) and not has_capability(base):
            raise UnsupportedStruct(name)


def _allocate_nested(tp: type, name: str) -> Any:
    try:
        return allocate(tp)
    except TypeError as e:
        raise UnsupportedStruct(name, f"cannot allocate {tp.__name__} for field {name}: {e}") from e
