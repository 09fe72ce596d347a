"""PPU control, mask and status registers and their bit fields."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class PpuCtrl(enum.IntFlag):
    NMI_ENABLE = 0b1000_0000
    """Generate an NMI at the start of vertical blank."""
    SPRITE_SIZE = 0b0010_0000
    """0: 8x8 pixels; 1: 8x16 pixels."""
    BACKGROUND_PATTERN_TABLE = 0b0001_0000
    SPRITE_PATTERN_TABLE = 0b0000_1000
    VRAM_ADDRESS_INCREMENT = 0b0000_0100
    """0: add 1 going across; 1: add 32 going down."""
    BASE_NAMETABLE_ADDRESS = 0b0000_0011


class PpuMask(enum.IntFlag):
    SHOW_BACKGROUND_IN_LEFTMOST_8_PIXELS = 0b0000_0010
    SHOW_SPRITES_IN_LEFTMOST_8_PIXELS = 0b0000_0100
    BACKGROUND_RENDERING_ENABLE = 0b0000_1000
    SPRITE_RENDERING_ENABLED = 0b0001_0000


class PpuStatus(enum.IntFlag):
    VERTICAL_BLANK = 0b1000_0000
    SPRITE_0_HIT = 0b0100_0000
    SPRITE_OVERFLOW = 0b0010_0000


@dataclass
class PpuRegisters:
    """The PPU's memory-mapped registers."""

    ctrl: PpuCtrl = field(default_factory=lambda: PpuCtrl(0))
    mask: PpuMask = field(default_factory=lambda: PpuMask(0))
    status: PpuStatus = field(default_factory=lambda: PpuStatus(0))
    oam_addr: int = 0
    data_buffer: int = 0

    def reset(self) -> None:
        self.ctrl = PpuCtrl(0)
        self.mask = PpuMask(0)
        self.status = PpuStatus(0)
        self.oam_addr = 0
        self.data_buffer = 0

    # PPUCTRL

    def nmi_enabled(self) -> bool:
        return PpuCtrl.NMI_ENABLE in self.ctrl

    def sprite_size(self) -> int:
        return 16 if PpuCtrl.SPRITE_SIZE in self.ctrl else 8

    def background_pattern_table(self) -> int:
        return 1 if PpuCtrl.BACKGROUND_PATTERN_TABLE in self.ctrl else 0

    def sprite_pattern_table(self) -> int:
        return 1 if PpuCtrl.SPRITE_PATTERN_TABLE in self.ctrl else 0

    def vram_address_increment(self) -> int:
        return 32 if PpuCtrl.VRAM_ADDRESS_INCREMENT in self.ctrl else 1

    # PPUMASK

    def left_side_clipping_window_enabled(self) -> bool:
        return (
            PpuMask.SHOW_BACKGROUND_IN_LEFTMOST_8_PIXELS not in self.mask
            or PpuMask.SHOW_SPRITES_IN_LEFTMOST_8_PIXELS not in self.mask
        )

    def rendering_enabled(self) -> bool:
        return self.background_rendering_enabled() or self.sprite_rendering_enabled()

    def background_rendering_enabled(self) -> bool:
        return PpuMask.BACKGROUND_RENDERING_ENABLE in self.mask

    def sprite_rendering_enabled(self) -> bool:
        return PpuMask.SPRITE_RENDERING_ENABLED in self.mask

    # PPUSTATUS

    def _set_status(self, flag: PpuStatus, value: bool) -> None:
        self.status = self.status | flag if value else self.status & ~flag

    def set_sprite_overflow(self, value: bool) -> None:
        self._set_status(PpuStatus.SPRITE_OVERFLOW, value)

    def set_sprite_0_hit(self, value: bool) -> None:
        self._set_status(PpuStatus.SPRITE_0_HIT, value)

    def set_vertical_blank(self) -> None:
        self._set_status(PpuStatus.VERTICAL_BLANK, True)

    def unset_vertical_blank(self) -> None:
        self._set_status(PpuStatus.VERTICAL_BLANK, False)