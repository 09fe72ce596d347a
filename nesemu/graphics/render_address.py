"""The PPU's internal VRAM address registers (loopy ``v`` and ``t``)."""

from __future__ import annotations


def _shift(mask: int) -> int:
    return (mask & -mask).bit_length() - 1


class RenderAddress:
    """15-bit VRAM address kept by the PPU while rendering.

    Used for reading and writing PPU memory through PPUDATA.
    """

    FINE_Y_SCROLL = 0b0111_0000_0000_0000
    NAMETABLES_SELECT = 0b0000_1100_0000_0000
    VERTICAL_NAMETABLE = 0b0000_1000_0000_0000
    HORIZONTAL_NAMETABLE = 0b0000_0100_0000_0000
    COARSE_Y_SCROLL = 0b0000_0011_1110_0000
    COARSE_X_SCROLL = 0b0000_0000_0001_1111

    def __init__(self, value: int = 0) -> None:
        self._value = value & 0xFFFF

    def value(self) -> int:
        return self._value

    def get(self, group: int) -> int:
        """Return the bit field selected by ``group``."""
        return (self._value & group) >> _shift(group)

    def set(self, group: int, value: int) -> None:
        """Store ``value`` in the bit field selected by ``group``."""
        self._value = (self._value & ~group & 0xFFFF) | ((value << _shift(group)) & group)

    def _toggle(self, group: int) -> None:
        self._value ^= group

    def _increment(self, group: int) -> None:
        self.set(group, self.get(group) + 1)

    def increment_x(self) -> None:
        """Move to the next tile horizontally, switching nametable at the edge."""
        if self.get(self.COARSE_X_SCROLL) == 31:
            self.set(self.COARSE_X_SCROLL, 0)
            self._toggle(self.HORIZONTAL_NAMETABLE)
        else:
            self._increment(self.COARSE_X_SCROLL)

    def increment_y(self) -> None:
        """Move to the next pixel row, carrying into coarse Y and nametable."""
        if self.get(self.FINE_Y_SCROLL) != 7:
            self._increment(self.FINE_Y_SCROLL)
            return
        self.set(self.FINE_Y_SCROLL, 0)
        coarse_y = self.get(self.COARSE_Y_SCROLL)
        if coarse_y == 29:
            self.set(self.COARSE_Y_SCROLL, 0)
            self._toggle(self.VERTICAL_NAMETABLE)
        elif coarse_y == 31:
            self.set(self.COARSE_Y_SCROLL, 0)
        else:
            self._increment(self.COARSE_Y_SCROLL)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RenderAddress):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"RenderAddress(0b{self._value:015b})"