"""The Picture Processing Unit (2C02).

The PPU registers ($2000-$2007) are mirrored up to $3FFF because the chip
does not decode every address line. Background scrolling follows the loopy
design: two 15-bit VRAM address registers (``v`` and ``t``), a 3-bit fine X
scroll and a first/second write toggle.
"""

from __future__ import annotations

import enum
import functools
import logging
import operator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from nesemu.errors import NesInternalError
from nesemu.events import Event, SharedEventBus
from nesemu.graphics.frame import Frame, FramePixel
from nesemu.graphics.oam import Oam
from nesemu.graphics.palette import pixel_from_color
from nesemu.graphics.pattern_table import PatternTableAddress
from nesemu.graphics.pixel_producer import PixelProducer
from nesemu.graphics.ppu_registers import PpuCtrl, PpuMask, PpuRegisters
from nesemu.graphics.render_address import RenderAddress
from nesemu.hardware import (
    OAMADDR,
    OAMDATA,
    PALETTE_MEMORY_START,
    PPUADDR,
    PPUCTRL,
    PPUDATA,
    PPUMASK,
    PPUSCROLL,
    PPUSTATUS,
    PPU_REGISTERS_START,
)
from nesemu.memory import Memory

logger = logging.getLogger(__name__)

LAST_VISIBLE_SCANLINE = 239
POST_RENDER_SCANLINE = 240
VERTICAL_BLANK_SCANLINE = 241
LAST_VERTICAL_BLANK_SCANLINE = 260
PRE_RENDER_SCANLINE = 261
LAST_CYCLE = 340

_CTRL_BITS = functools.reduce(operator.or_, (f.value for f in PpuCtrl.__members__.values()))
_MASK_BITS = functools.reduce(operator.or_, (f.value for f in PpuMask.__members__.values()))


class GraphicsBus(Protocol):
    def read(self, address: int) -> int: ...

    def write(self, address: int, data: int) -> None: ...


class WriteToggle(enum.Enum):
    """First or second write of a two-write register."""

    FIRST = enum.auto()
    SECOND = enum.auto()


class FrameParity(enum.Enum):
    ODD = enum.auto()
    EVEN = enum.auto()

    def reversed(self) -> FrameParity:
        return FrameParity.EVEN if self is FrameParity.ODD else FrameParity.ODD


@dataclass
class PpuInternalRegisters:
    """The loopy registers used while rendering and scrolling."""

    vram_addr: RenderAddress = field(default_factory=RenderAddress)
    """Current VRAM address (v)."""
    temp_vram_addr: RenderAddress = field(default_factory=RenderAddress)
    """Temporary VRAM address (t): the top left onscreen tile."""
    fine_x_scroll: int = 0
    write_toggle: WriteToggle = WriteToggle.FIRST

    def transfer_x(self) -> None:
        """Copy the horizontal bits of t into v."""
        logger.debug(
            "Move X temp vram to vram: %016b -> %016b",
            self.temp_vram_addr.value(),
            self.vram_addr.value(),
        )
        for group in (RenderAddress.HORIZONTAL_NAMETABLE, RenderAddress.COARSE_X_SCROLL):
            self.vram_addr.set(group, self.temp_vram_addr.get(group))

    def transfer_y(self) -> None:
        """Copy the vertical bits of t into v."""
        logger.debug(
            "Move Y temp vram to vram: %016b -> %016b",
            self.temp_vram_addr.value(),
            self.vram_addr.value(),
        )
        for group in (
            RenderAddress.VERTICAL_NAMETABLE,
            RenderAddress.COARSE_Y_SCROLL,
            RenderAddress.FINE_Y_SCROLL,
        ):
            self.vram_addr.set(group, self.temp_vram_addr.get(group))

    def reset(self) -> None:
        self.vram_addr = RenderAddress(0)
        self.temp_vram_addr = RenderAddress(0)
        self.fine_x_scroll = 0
        self.write_toggle = WriteToggle.FIRST


class Ppu(Memory):
    """The PPU, attached to the main bus through its eight registers."""

    def __init__(self, bus: GraphicsBus, event_bus: SharedEventBus) -> None:
        self.bus = bus
        self.event_bus = event_bus
        self.frame = Frame.black()
        self.frame_parity = FrameParity.ODD
        self.registers = PpuRegisters()
        self.internal = PpuInternalRegisters()
        self.oam = Oam()
        self.cycle = 0
        self.scan_line = 0
        self.pixel_producer = PixelProducer()
        self._suppress_vertical_blank = False

    # Clocking

    def clock(self) -> None:
        """Advance the PPU by one dot."""
        if self.scan_line == 0 and self.cycle == 0:
            if self.registers.rendering_enabled() and self.frame_parity is FrameParity.ODD:
                # odd frame cycle skip
                self.cycle = 1

        if self.scan_line <= LAST_VISIBLE_SCANLINE or self.scan_line == PRE_RENDER_SCANLINE:
            self._rendering_scanline_cycle()
        elif self.scan_line == POST_RENDER_SCANLINE:
            pass
        elif self.scan_line == VERTICAL_BLANK_SCANLINE and self.cycle == 1:
            self._begin_vertical_blank()
        elif VERTICAL_BLANK_SCANLINE <= self.scan_line <= LAST_VERTICAL_BLANK_SCANLINE:
            pass
        else:
            raise NesInternalError(f"PPU scanline is {self.scan_line}!")

        self._render_pixel()

        self.cycle += 1
        if self.cycle > LAST_CYCLE:
            self.cycle = 0
            self._prepare_scanline_sprites()
            self.scan_line += 1
            if self.scan_line > PRE_RENDER_SCANLINE:
                self.scan_line = 0
                self.event_bus.emit(Event.FRAME_READY)
                self.frame_parity = self.frame_parity.reversed()

    def _rendering_scanline_cycle(self) -> None:
        if self.scan_line == PRE_RENDER_SCANLINE and self.cycle == 1:
            self.registers.unset_vertical_blank()
            self.registers.set_sprite_overflow(False)
            self.registers.set_sprite_0_hit(False)
            self.pixel_producer.clear_sprites()

        cycle = self.cycle
        if 1 <= cycle <= 256 or 321 <= cycle <= 336:
            self._fetch_cycle()
        elif cycle == 257:
            self.pixel_producer.load_shifters()
            if self.registers.rendering_enabled():
                self.internal.transfer_x()
        elif 280 <= cycle <= 304 and self.scan_line == PRE_RENDER_SCANLINE:
            if self.registers.rendering_enabled():
                self.internal.transfer_y()
        elif cycle in (338, 340):
            # unused nametable fetches
            self.pixel_producer.buffers.next_tile_number = self._nametable_fetch()

    def _fetch_cycle(self) -> None:
        # Each memory access takes two cycles; four accesses fill a tile in 8
        if self.registers.background_rendering_enabled():
            self.pixel_producer.update_shifters()

        buffers = self.pixel_producer.buffers
        step = (self.cycle - 1) % 8
        if step == 1:
            buffers.next_tile_number = self._nametable_fetch()
        elif step == 2:
            attributes = self._attributes_fetch()
            vram_addr = self.internal.vram_addr
            if vram_addr.get(RenderAddress.COARSE_Y_SCROLL) & 0x02:
                attributes >>= 4
            if vram_addr.get(RenderAddress.COARSE_X_SCROLL) & 0x02:
                attributes >>= 2
            buffers.next_attributes = attributes & 0x03
        elif step == 6:
            high, low = self._fetch_pattern_planes(buffers.next_tile_number)
            buffers.next_bit_plane_high = high
            buffers.next_bit_plane_low = low
        elif step == 7:
            self.pixel_producer.load_shifters()
            if self.registers.rendering_enabled():
                self.internal.vram_addr.increment_x()

        if self.cycle == 256 and self.registers.rendering_enabled():
            self.internal.vram_addr.increment_y()

    def _begin_vertical_blank(self) -> None:
        if not self._suppress_vertical_blank:
            self.registers.set_vertical_blank()
            if self.registers.nmi_enabled():
                self.event_bus.emit(Event.NMI)
        self._suppress_vertical_blank = False

    def _nametable_fetch(self) -> int:
        # fine Y lives in the high bits of v; only the low 12 select the tile
        address = 0x2000 | (self.internal.vram_addr.value() & 0x0FFF)
        return self.bus.read(address)

    def _attributes_fetch(self) -> int:
        v = self.internal.vram_addr.value()
        address = 0x23C0 | (v & 0x0C00) | ((v >> 4) & 0x38) | ((v >> 2) & 0x07)
        return self.bus.read(address)

    def _fetch_pattern_planes(self, tile_number: int) -> tuple[int, int]:
        fine_y = self.internal.vram_addr.get(RenderAddress.FINE_Y_SCROLL)
        address = PatternTableAddress(self.registers.background_pattern_table())
        address.set(PatternTableAddress.TILE_NUMBER, tile_number)
        address.set(PatternTableAddress.FINE_Y_OFFSET, fine_y)
        address.set(PatternTableAddress.BIT_PLANE, 0)
        low = self.bus.read(int(address))
        address.set(PatternTableAddress.BIT_PLANE, 1)
        high = self.bus.read(int(address))
        return high, low

    def _render_pixel(self) -> None:
        if self.registers.sprite_size() == 16:
            raise NesInternalError("8x16 sprites are not supported")
        col, row = self.cycle, self.scan_line
        pixel = self.pixel_producer.produce_pixel(
            col, row, self.registers, self.internal.fine_x_scroll, self.bus
        )
        if pixel is not None:
            self.frame.set_pixel(pixel, FramePixel(row=row, col=col))

    def _prepare_scanline_sprites(self) -> None:
        count = self.pixel_producer.prepare_scanline_sprites(self.oam, self.scan_line)
        if count is not None:
            self.registers.set_sprite_overflow(count > 8)

    # Frames, OAM and debugging helpers

    def take_frame(self) -> Frame:
        """Return the frame being drawn and start a new black one."""
        frame, self.frame = self.frame, Frame.black()
        return frame

    def oam_dma_write(self, address: int, data: int) -> None:
        self.oam.write(address & 0xFF, data)

    def dump_oam(self, path: str | Path) -> None:
        """Write a description of every OAM sprite to ``path``."""
        Path(path).write_text(str(self.oam))

    def render_nametable(self) -> Frame:
        """Draw the nametable selected in PPUCTRL, ignoring scroll and sprites."""
        screen = Frame.black()
        pattern_table_address = 0x1000 * self.registers.background_pattern_table()
        nametable_address = 0x2000 + 0x400 * (int(self.registers.ctrl) & 0b11)
        attribute_table_address = nametable_address + 960

        for row in range(30):
            for col in range(32):
                tile_number = self.bus.read(nametable_address + row * 32 + col)
                tile_base = pattern_table_address + tile_number * 16
                bit_planes = [self.bus.read(tile_base + i) for i in range(16)]

                attributes = self.bus.read(attribute_table_address + row // 4 * 8 + col // 4)
                shift = (2 if col % 4 >= 2 else 0) + (4 if row % 4 >= 2 else 0)
                palette_number = (attributes >> shift) & 0b11

                for x in range(8):
                    for y in range(8):
                        pattern = (((bit_planes[y + 8] >> x) & 1) << 1) | (
                            (bit_planes[y] >> x) & 1
                        )
                        color = self.bus.read(
                            PALETTE_MEMORY_START + ((palette_number << 2) | pattern)
                        )
                        screen.set_pixel(
                            pixel_from_color(color),
                            FramePixel(row=row * 8 + y, col=col * 8 + (7 - x)),
                        )
        return screen

    # Registers as seen from the main bus

    def read(self, address: int) -> int:
        address = (address & 0b0111) + PPU_REGISTERS_START
        if address == PPUCTRL:
            data = self.registers.data_buffer & 0x1F
        elif address == PPUSTATUS:
            data = self._read_status()
        elif address == OAMDATA:
            data = self.oam.read(self.registers.oam_addr)
        elif address == PPUDATA:
            data = self._read_data()
        else:
            raise ValueError(f"PPU register ${address:04X} is not readable")
        logger.log(5, "PPU read from: %04X <- %02X", address, data)
        return data

    def _read_status(self) -> int:
        self.internal.write_toggle = WriteToggle.FIRST
        # the 5 low bits reflect stale PPU bus contents
        status = (int(self.registers.status) & 0xE0) | (self.registers.data_buffer & 0x1F)
        self.registers.unset_vertical_blank()

        # reading one clock before vertical blank suppresses it
        self._suppress_vertical_blank = (
            self.scan_line == VERTICAL_BLANK_SCANLINE and self.cycle == 0
        )
        # reading at the vertical blank clock or shortly after sees the flag set
        if self.scan_line == VERTICAL_BLANK_SCANLINE and self.cycle in (1, 2, 3):
            self.event_bus.mark_as_processed(Event.NMI)
            return status | 0b1000_0000
        return status

    def _read_data(self) -> int:
        data = self.registers.data_buffer
        vram_address = self.internal.vram_addr.value()
        vram_data = self.bus.read(vram_address)
        self.registers.data_buffer = vram_data
        if vram_address >= PALETTE_MEMORY_START:
            # palettes are available without the one-read delay
            data = vram_data
        self._increment_vram_address(vram_address)
        return data

    def _increment_vram_address(self, vram_address: int) -> None:
        increment = self.registers.vram_address_increment()
        self.internal.vram_addr = RenderAddress(vram_address + increment)

    def write(self, address: int, data: int) -> None:
        address += PPU_REGISTERS_START
        logger.log(5, "PPU write to: %04X -> %02X", address, data)
        internal = self.internal

        if address == PPUCTRL:
            internal.temp_vram_addr.set(RenderAddress.NAMETABLES_SELECT, data & 0b11)
            self.registers.ctrl = PpuCtrl(data & _CTRL_BITS)
        elif address == PPUMASK:
            self.registers.mask = PpuMask(data & _MASK_BITS)
        elif address == OAMADDR:
            self.registers.oam_addr = data & 0xFF
        elif address == OAMDATA:
            oam_addr = self.registers.oam_addr
            self.oam.write(oam_addr, data)
            self.registers.oam_addr = (oam_addr + 1) & 0xFF
        elif address == PPUSCROLL:
            if internal.write_toggle is WriteToggle.FIRST:
                internal.temp_vram_addr.set(RenderAddress.COARSE_X_SCROLL, data >> 3)
                internal.fine_x_scroll = data & 0b111
                internal.write_toggle = WriteToggle.SECOND
            else:
                internal.temp_vram_addr.set(RenderAddress.FINE_Y_SCROLL, data & 0b111)
                internal.temp_vram_addr.set(RenderAddress.COARSE_Y_SCROLL, data >> 3)
                internal.write_toggle = WriteToggle.FIRST
        elif address == PPUADDR:
            temp = internal.temp_vram_addr.value()
            if internal.write_toggle is WriteToggle.FIRST:
                value = (temp & 0b1100_0000_1111_1111) | ((data & 0b0011_1111) << 8)
                internal.temp_vram_addr = RenderAddress(value & 0b0011_1111_1111_1111)
                internal.write_toggle = WriteToggle.SECOND
            else:
                value = (temp & 0xFF00) | (data & 0xFF)
                internal.temp_vram_addr = RenderAddress(value)
                internal.vram_addr = RenderAddress(value)
                internal.write_toggle = WriteToggle.FIRST
        elif address == PPUDATA:
            vram_address = internal.vram_addr.value()
            self.bus.write(vram_address, data)
            self._increment_vram_address(vram_address)
        else:
            raise ValueError(f"PPU register ${address:04X} is not writable")

    def size(self) -> int:
        mirrors = (0x3FFF - 0x2008 + 1) // 8
        return (0x2007 - 0x2000 + 1) * mirrors