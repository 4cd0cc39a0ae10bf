"""Fixed-width numeric aliases.

Python integers and floats are unbounded/double precision. Fields that must
honour a narrower range are declared with one of the aliases below, which are
plain ``int``/``float`` annotated with a :class:`Bits` marker. Pydantic and
dataclasses ignore the marker; the coercion engine range-checks against it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated


@dataclass(frozen=True)
class Bits:
    """Bit width (and signedness) of a numeric field."""

    size: int
    signed: bool = True

    def int_range(self) -> tuple[int, int]:
        if self.signed:
            return -(1 << (self.size - 1)), (1 << (self.size - 1)) - 1
        return 0, (1 << self.size) - 1


Int8 = Annotated[int, Bits(8)]
Int16 = Annotated[int, Bits(16)]
Int32 = Annotated[int, Bits(32)]
Int64 = Annotated[int, Bits(64)]

Uint = Annotated[int, Bits(64, signed=False)]
Uint8 = Annotated[int, Bits(8, signed=False)]
Uint16 = Annotated[int, Bits(16, signed=False)]
Uint32 = Annotated[int, Bits(32, signed=False)]
Uint64 = Annotated[int, Bits(64, signed=False)]

Float32 = Annotated[float, Bits(32)]
Float64 = Annotated[float, Bits(64)]
