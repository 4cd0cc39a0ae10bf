"""Errors raised while binding environment variables to a record."""

from __future__ import annotations


class BindError(Exception):
    """Base class for every binding failure."""


class InvalidPrefix(BindError):
    def __init__(self) -> None:
        super().__init__("a prefix must be provided")


class InvalidTarget(BindError):
    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(
            f"target must be a mutable dataclass or pydantic model instance, got {type(target).__name__}"
        )


class UnsupportedStruct(BindError):
    """A nested record field has no way of being built from one string."""

    def __init__(self, field_name: str, reason: str | None = None) -> None:
        self.field_name = field_name
        super().__init__(
            reason or f"record types require a set or unmarshal_text method: {field_name}"
        )


class MissingRequired(BindError):
    def __init__(self, key: str, field_name: str) -> None:
        self.key = key
        self.field_name = field_name
        super().__init__(f"required key {key} missing value")


class InvalidMapItem(BindError, ValueError):
    """A mapping item does not split into exactly one key and one value."""

    def __init__(self, item: str) -> None:
        self.item = item
        super().__init__(f"invalid map item: {item!r}")


class ParseError(BindError):
    """A resolved value could not be converted to the field's type."""

    def __init__(
        self,
        key: str,
        field_name: str,
        type_name: str,
        value: str,
        cause: BaseException,
    ) -> None:
        self.key = key
        self.field_name = field_name
        self.type_name = type_name
        self.value = value
        self.cause = cause
        super().__init__(
            f"assigning {key} to {field_name}: converting '{value}' to type {type_name}. details: {cause}"
        )
