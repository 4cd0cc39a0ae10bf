"""Per-field binding annotations."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from envbind.binding.literals import is_true

# Annotation keys understood by the binder. Anything else (e.g. ``desc``)
# is kept on the tag and ignored.
A_ALIAS = "alias"
A_DEFAULT = "default"
A_REQUIRE = "require"
A_IGNORE = "ignore"

RECOGNIZED_KEYS: tuple[str, ...] = (A_ALIAS, A_DEFAULT, A_REQUIRE, A_IGNORE)


class Tag(Mapping[str, str]):
    """Immutable, string-keyed annotation set attached to a record field.

    Used as ``Annotated[int, Tag(default="8080")]`` on dataclasses and
    pydantic models alike, or built from a dataclass ``field(metadata=...)``
    mapping with :meth:`from_mapping`. Boolean values are stored as
    ``"true"``/``"false"``.
    """

    __slots__ = ("_attrs",)

    def __init__(self, **attrs: str | bool) -> None:
        self._attrs: dict[str, str] = {
            k: ("true" if v else "false") if isinstance(v, bool) else str(v)
            for k, v in attrs.items()
        }

    @classmethod
    def from_mapping(cls, metadata: Mapping[str, Any]) -> Tag:
        """Pick the recognized keys out of a dataclass field's metadata."""
        return cls(**{k: metadata[k] for k in RECOGNIZED_KEYS if k in metadata})

    def __getitem__(self, key: str) -> str:
        return self._attrs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __hash__(self) -> int:
        return hash(frozenset(self._attrs.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v!r}" for k, v in self._attrs.items())
        return f"Tag({inner})"

    def merged(self, other: Mapping[str, str]) -> Tag:
        """Return a new tag where the attributes of *other* win."""
        return Tag(**{**self._attrs, **other})

    @property
    def alias(self) -> str | None:
        return self.get(A_ALIAS) or None

    @property
    def default(self) -> str | None:
        return self.get(A_DEFAULT)

    @property
    def has_default(self) -> bool:
        return A_DEFAULT in self._attrs

    @property
    def required(self) -> bool:
        return is_true(self.get(A_REQUIRE))

    @property
    def ignored(self) -> bool:
        return is_true(self.get(A_IGNORE))
