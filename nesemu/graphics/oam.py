"""Object Attribute Memory: the PPU's table of 64 sprites."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from nesemu.memory import Memory

SPRITE_COUNT = 64
BYTES_PER_SPRITE = 4


@dataclass(frozen=True)
class OamSprite:
    x: int
    y: int
    tile: int
    attributes: int


class Oam(Memory):
    """64 sprites of 4 bytes each: Y, tile, attributes, X."""

    def __init__(self) -> None:
        self._memory = bytearray(SPRITE_COUNT * BYTES_PER_SPRITE)

    def read_sprite(self, sprite: int) -> OamSprite:
        """Return sprite number ``sprite`` (0 to 63)."""
        if not 0 <= sprite < SPRITE_COUNT:
            raise ValueError("OAM only contains 64 sprites of 4 bytes each")
        base = sprite * BYTES_PER_SPRITE
        y, tile, attributes, x = self._memory[base : base + BYTES_PER_SPRITE]
        return OamSprite(x=x, y=y, tile=tile, attributes=attributes)

    def __iter__(self) -> Iterator[OamSprite]:
        return (self.read_sprite(n) for n in range(SPRITE_COUNT))

    def __str__(self) -> str:
        return "".join(f"{sprite!r}\n" for sprite in self)

    def read(self, address: int) -> int:
        return self._memory[address]

    def write(self, address: int, data: int) -> None:
        self._memory[address] = data & 0xFF

    def size(self) -> int:
        return len(self._memory)