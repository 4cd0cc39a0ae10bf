"""Field descriptors produced by the introspector."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from envbind.binding.coerce import MISSING
from envbind.models.tags import Tag


@dataclass
class FieldDescriptor:
    """One bindable field and where its value lives."""

    name: str          # declared field name
    key: str           # PREFIX_NAME, uppercased
    alias: str | None  # uppercased alias, tried verbatim as a fallback key
    owner: Any         # record instance holding the field
    annotation: Any    # declared type, Annotated extras preserved
    tags: Tag

    def get(self) -> Any:
        """Current value, or ``MISSING`` when the attribute was never set."""
        return getattr(self.owner, self.name, MISSING)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.name, value)
