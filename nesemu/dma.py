"""OAM DMA: copying a page of CPU memory into the PPU sprite table."""

from __future__ import annotations

import enum
import logging
from typing import Protocol

from nesemu.memory import Memory

logger = logging.getLogger(__name__)


class _ReadableBus(Protocol):
    def read(self, address: int) -> int: ...


class _OamTarget(Protocol):
    def oam_dma_write(self, address: int, data: int) -> None: ...


class DmaCycle(enum.Enum):
    READ = enum.auto()
    WRITE = enum.auto()


class DmaController(Memory):
    """Tracks an OAM DMA transfer, alternating read and write cycles."""

    def __init__(self) -> None:
        self.cycle = DmaCycle.READ
        self._transfer = False
        # a dummy cycle is spent synchronising before the transfer
        self._dummy = True
        self._page = 0
        self._addr = 0
        self._data = 0

    def clock(self) -> None:
        self.cycle = DmaCycle.WRITE if self.cycle is DmaCycle.READ else DmaCycle.READ

    def is_oam_dma_active(self) -> bool:
        return self._transfer

    def oam_dma_transfer(self, main_bus: _ReadableBus, ppu: _OamTarget) -> None:
        """Perform the work of the current DMA cycle."""
        if self._dummy:
            if self.cycle is DmaCycle.WRITE:
                self._dummy = False
        elif self.cycle is DmaCycle.READ:
            self._data = main_bus.read((self._page << 8) | self._addr)
        else:
            self._oam_write(ppu)

    def _oam_write(self, ppu: _OamTarget) -> None:
        ppu.oam_dma_write(self._addr, self._data)
        self._addr = (self._addr + 1) & 0xFF
        # wrapping around means all 256 bytes were copied
        finished = self._addr == 0
        self._transfer = not finished
        if finished:
            logger.debug("OAM DMA finished")
            self._dummy = True

    def read(self, address: int) -> int:
        raise ValueError("OAM DMA is a write only memory position!")

    def write(self, address: int, data: int) -> None:
        logger.debug("OAM DMA starts for page: $%02X", data)
        self._transfer = True
        self._dummy = True
        self._page = data & 0xFF
        self._addr = 0

    def size(self) -> int:
        return 1