"""Bind environment variables to dataclass and pydantic model fields."""

from __future__ import annotations

from envbind.binding.binder import bind
from envbind.binding.coerce import Setter, TextUnmarshaler, coerce
from envbind.binding.introspect import gather_fields
from envbind.errors import (
    BindError,
    InvalidMapItem,
    InvalidPrefix,
    InvalidTarget,
    MissingRequired,
    ParseError,
    UnsupportedStruct,
)
from envbind.models.descriptor import FieldDescriptor
from envbind.models.tags import Tag
from envbind.models.types import (
    Bits,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
)
from envbind.sources.environ import DotenvSource, EnvSource, MappingSource, OsEnvironSource

__all__ = [
    "BindError",
    "Bits",
    "DotenvSource",
    "EnvSource",
    "FieldDescriptor",
    "Float32",
    "Float64",
    "InvalidMapItem",
    "InvalidPrefix",
    "InvalidTarget",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "MappingSource",
    "MissingRequired",
    "OsEnvironSource",
    "ParseError",
    "Setter",
    "Tag",
    "TextUnmarshaler",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "UnsupportedStruct",
    "bind",
    "coerce",
    "gather_fields",
]
