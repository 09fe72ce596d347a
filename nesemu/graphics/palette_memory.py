"""Palette RAM with the backdrop mirrors of the sprite palettes."""

from __future__ import annotations

from nesemu.hardware import PALETTE_MEMORY_SIZE
from nesemu.memory import Memory

# Entry 0 of each sprite palette mirrors entry 0 of the matching background palette
_MIRRORS = {0x10: 0x00, 0x14: 0x04, 0x18: 0x08, 0x1C: 0x0C}


class PaletteMemory(Memory):
    """The 32 bytes of palette memory seen by the PPU."""

    def __init__(self) -> None:
        self._memory = bytearray(PALETTE_MEMORY_SIZE)

    def read(self, address: int) -> int:
        return self._memory[_MIRRORS.get(address, address)]

    def write(self, address: int, data: int) -> None:
        self._memory[_MIRRORS.get(address, address)] = data & 0xFF

    def size(self) -> int:
        return PALETTE_MEMORY_SIZE