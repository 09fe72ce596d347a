"""Addresses into the PPU pattern tables."""

from __future__ import annotations


def _shift(mask: int) -> int:
    return (mask & -mask).bit_length() - 1


class PatternTableAddress:
    """Address of one bit plane row of a tile in a pattern table.

    The column inside the tile is chosen by the caller.
    """

    PATTERN_TABLE = 0b0001_0000_0000_0000
    """Selects the left (0) or right (1) pattern table."""
    TILE_NUMBER = 0b0000_1111_1111_0000
    BIT_PLANE = 0b0000_0000_0000_1000
    FINE_Y_OFFSET = 0b0000_0000_0000_0111
    """Row number inside a tile."""

    def __init__(self, pattern_table: int) -> None:
        self._value = 0
        self.set(self.PATTERN_TABLE, pattern_table)

    def set(self, group: int, value: int) -> None:
        """Store ``value`` in the bit field selected by ``group``."""
        self._value = (self._value & ~group & 0xFFFF) | ((value << _shift(group)) & group)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"PatternTableAddress(0x{self._value:04X})"