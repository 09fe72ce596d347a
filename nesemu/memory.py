"""Memory and bus interfaces shared by every addressable device."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from nesemu.errors import MemoryAccessError


@dataclass(frozen=True)
class AddressRange:
    """Inclusive range of bus addresses."""

    start: int
    end: int

    def __contains__(self, address: object) -> bool:
        return isinstance(address, int) and self.start <= address <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1


class Memory(ABC):
    """A device that can be read from and written to byte by byte."""

    @abstractmethod
    def read(self, address: int) -> int:
        """Read a byte from ``address``."""

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """Write a byte of ``data`` to ``address``."""

    @abstractmethod
    def size(self) -> int:
        """Memory size in bytes."""

    def _check_bounds(self, address: int) -> None:
        size = self.size()
        if address > size & 0xFFFF:
            raise MemoryAccessError(address, size)

    def try_read(self, address: int) -> int:
        """Read a byte, raising MemoryAccessError when out of bounds."""
        self._check_bounds(address)
        return self.read(address)

    def try_write(self, address: int, data: int) -> None:
        """Write a byte, raising MemoryAccessError when out of bounds."""
        self._check_bounds(address)
        self.write(address, data)


class Bus(ABC):
    """An address space with devices attached to address ranges."""

    @abstractmethod
    def attach(self, device_id: str, device: Memory, addr_range: AddressRange) -> None:
        """Attach ``device`` under ``device_id`` at ``addr_range``."""

    @abstractmethod
    def detach(self, device_id: str) -> None:
        """Detach a device from the bus."""

    @abstractmethod
    def read(self, address: int) -> int:
        """Read a byte from the device attached at ``address``."""

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """Write a byte to the device attached at ``address``."""