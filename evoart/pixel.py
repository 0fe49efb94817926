"""RGBA pixel value."""

from __future__ import annotations

from dataclasses import dataclass, fields

_CHANNEL_MAX = 255


@dataclass(frozen=True)
class Pixel:
    """An 8-bit RGBA colour, packed as four bytes in r, g, b, a order."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or not 0 <= value <= _CHANNEL_MAX:
                raise ValueError(f"channel {f.name} must be an int in 0..255, got {value!r}")

    def __bytes__(self) -> bytes:
        return bytes((self.r, self.g, self.b, self.a))

    @classmethod
    def from_bytes(cls, data: bytes) -> Pixel:
        """Build a pixel from exactly four RGBA bytes."""
        if len(data) != 4:
            raise ValueError(f"a pixel needs 4 bytes, got {len(data)}")
        return cls(*data)