"""The PPU's shift registers, sprite selection and pixel multiplexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from nesemu.graphics.frame import Pixel
from nesemu.graphics.oam import Oam, OamSprite
from nesemu.graphics.palette import pixel_from_color
from nesemu.graphics.pattern_table import PatternTableAddress
from nesemu.graphics.ppu_registers import PpuRegisters
from nesemu.hardware import PALETTE_MEMORY_START, SCREEN_HEIGHT, SCREEN_WIDTH

MAX_SCANLINE_SPRITES = 8
SPRITE_HEIGHT = 8
SPRITE_WIDTH = 8

EMPTY_SPRITE = OamSprite(x=0xFF, y=0xFF, tile=0xFF, attributes=0xFF)
"""Placeholder for an unused slot; its Y coordinate lies off screen."""


class _Readable(Protocol):
    def read(self, address: int) -> int: ...


def _bit(value: int, n: int) -> int:
    return (value >> n) & 1


def _empty_sprites() -> list[OamSprite]:
    return [EMPTY_SPRITE] * MAX_SCANLINE_SPRITES


@dataclass
class Buffers:
    """Latches holding the data fetched for the next background tile."""

    next_tile_number: int = 0
    next_attributes: int = 0
    next_bit_plane_high: int = 0
    next_bit_plane_low: int = 0


@dataclass
class Shifters:
    """16-bit background shift registers.

    The high byte feeds the pixels being drawn; the low byte holds the next tile.
    """

    pattern_low: int = 0
    pattern_high: int = 0
    attributes_low: int = 0
    attributes_high: int = 0


@dataclass
class PixelProducer:
    """Combines background shifters and scanline sprites into pixels."""

    buffers: Buffers = field(default_factory=Buffers)
    shifters: Shifters = field(default_factory=Shifters)
    sprites: list[OamSprite] = field(default_factory=_empty_sprites)

    def load_shifters(self) -> None:
        """Load the latched tile data into the low byte of the shifters."""
        s, b = self.shifters, self.buffers
        s.pattern_low = (s.pattern_low & 0xFF00) | (b.next_bit_plane_low & 0xFF)
        s.pattern_high = (s.pattern_high & 0xFF00) | (b.next_bit_plane_high & 0xFF)
        s.attributes_low = (s.attributes_low & 0xFF00) | (
            0xFF if _bit(b.next_attributes, 0) else 0x00
        )
        s.attributes_high = (s.attributes_high & 0xFF00) | (
            0xFF if _bit(b.next_attributes, 1) else 0x00
        )

    def update_shifters(self) -> None:
        """Shift every background register one pixel to the left."""
        s = self.shifters
        s.pattern_low = (s.pattern_low << 1) & 0xFFFF
        s.pattern_high = (s.pattern_high << 1) & 0xFFFF
        s.attributes_low = (s.attributes_low << 1) & 0xFFFF
        s.attributes_high = (s.attributes_high << 1) & 0xFFFF

    def clear_sprites(self) -> None:
        """Empty every scanline sprite slot."""
        self.sprites = _empty_sprites()

    def prepare_scanline_sprites(self, oam: Oam, scan_line: int) -> int | None:
        """Select up to 8 sprites from ``oam`` that cover ``scan_line``.

        Returns how many were selected, or None when ``scan_line`` is not
        visible, in which case the sprite slots are left untouched.
        """
        if scan_line >= SCREEN_HEIGHT:
            return None

        selected = [
            sprite
            for sprite in oam
            if 0 <= scan_line - sprite.y < SPRITE_HEIGHT
        ][:MAX_SCANLINE_SPRITES]
        self.sprites = selected + [EMPTY_SPRITE] * (MAX_SCANLINE_SPRITES - len(selected))
        return len(selected)

    def _sprite_bit_plane(
        self,
        sprite: OamSprite,
        col: int,
        row: int,
        registers: PpuRegisters,
        bus: _Readable,
    ) -> int:
        # sprites are drawn one scanline below their Y coordinate
        y = row - 1 - sprite.y
        if _bit(sprite.attributes, 7):
            y = 7 - y

        address = PatternTableAddress(registers.sprite_pattern_table())
        address.set(PatternTableAddress.TILE_NUMBER, sprite.tile)
        address.set(PatternTableAddress.FINE_Y_OFFSET, y)
        address.set(PatternTableAddress.BIT_PLANE, 0)
        low = bus.read(int(address))
        address.set(PatternTableAddress.BIT_PLANE, 1)
        high = bus.read(int(address))

        x = 7 - (col - sprite.x)
        if _bit(sprite.attributes, 6):
            x = 7 - x

        return (_bit(high, x) << 1) | _bit(low, x)

    def produce_pixel(
        self,
        col: int,
        row: int,
        registers: PpuRegisters,
        fine_x: int,
        bus: _Readable,
    ) -> Pixel | None:
        """Compute the pixel at (``col``, ``row``), or None when off screen.

        May set the sprite 0 hit flag in ``registers``.
        """
        if col >= SCREEN_WIDTH or row >= SCREEN_HEIGHT:
            return None

        background_palette = 0
        background_bit_plane = 0
        if registers.background_rendering_enabled():
            bit = 15 - fine_x
            s = self.shifters
            background_palette = (_bit(s.attributes_high, bit) << 1) | _bit(
                s.attributes_low, bit
            )
            background_bit_plane = (_bit(s.pattern_high, bit) << 1) | _bit(
                s.pattern_low, bit
            )

        sprite_palette = 0
        sprite_bit_plane = 0
        priority = 0  # 0: in front of background, 1: behind it
        sprite_number = 0xFF
        if registers.sprite_rendering_enabled():
            for index, sprite in enumerate(self.sprites):
                if sprite.y == 0xFF:
                    break
                if not sprite.x <= col < sprite.x + SPRITE_WIDTH:
                    continue

                sprite_number = index
                sprite_palette = (sprite.attributes & 0b11) + 4
                priority = _bit(sprite.attributes, 5)
                sprite_bit_plane = self._sprite_bit_plane(sprite, col, row, registers, bus)
                if sprite_bit_plane:
                    break

        sprite_offset = (sprite_palette << 2) | sprite_bit_plane
        background_offset = (background_palette << 2) | background_bit_plane

        if background_bit_plane == 0 and sprite_bit_plane == 0:
            palette_offset = 0
        elif background_bit_plane == 0:
            palette_offset = sprite_offset
        elif sprite_bit_plane == 0:
            palette_offset = background_offset
        else:
            if sprite_number == 0:
                clipped = col <= 7 and registers.left_side_clipping_window_enabled()
                if not (clipped or col == 255):
                    registers.set_sprite_0_hit(True)
            palette_offset = sprite_offset if priority == 0 else background_offset

        return pixel_from_color(bus.read(PALETTE_MEMORY_START + palette_offset))