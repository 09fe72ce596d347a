"""Pixels and screen frames produced by the PPU."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterator

from nesemu.hardware import SCREEN_HEIGHT, SCREEN_WIDTH


@dataclass(frozen=True)
class Pixel:
    """An RGB colour with components between 0.0 and 1.0."""

    red: float
    green: float
    blue: float

    BLACK: ClassVar[Pixel]
    RED: ClassVar[Pixel]
    GREEN: ClassVar[Pixel]
    BLUE: ClassVar[Pixel]
    WHITE: ClassVar[Pixel]

    @classmethod
    def from_rgb_bytes(cls, red: int, green: int, blue: int) -> Pixel:
        """Build a pixel from 8-bit colour components."""
        return cls(red / 255, green / 255, blue / 255)


Pixel.BLACK = Pixel(0.0, 0.0, 0.0)
Pixel.RED = Pixel(1.0, 0.0, 0.0)
Pixel.GREEN = Pixel(0.0, 1.0, 0.0)
Pixel.BLUE = Pixel(0.0, 0.0, 1.0)
Pixel.WHITE = Pixel(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class FramePixel:
    """Position of a pixel in a frame."""

    row: int
    col: int


class Frame:
    """A screen-sized grid of pixels, indexed by row then column."""

    def __init__(self, color: Pixel = Pixel.BLACK) -> None:
        self.inner: list[list[Pixel]] = [
            [color] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)
        ]

    @classmethod
    def black(cls) -> Frame:
        return cls(Pixel.BLACK)

    def set_pixel(self, pixel: Pixel, position: FramePixel) -> None:
        self.inner[position.row][position.col] = pixel

    def __getitem__(self, row: int) -> list[Pixel]:
        return self.inner[row]

    def __len__(self) -> int:
        return len(self.inner)

    def __iter__(self) -> Iterator[list[Pixel]]:
        return iter(self.inner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return self.inner == other.inner