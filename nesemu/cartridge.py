"""Game cartridges loaded from iNES files."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from nesemu.hardware import CHR_MEMORY_SIZE

logger = logging.getLogger(__name__)

HEADER_SIZE = 16
TRAINER_SIZE = 512
INES_MAGIC = b"NES\x1a"
PRG_ROM_UNIT = 16 * 1024
CHR_ROM_UNIT = 8 * 1024
PRG_RAM_UNIT = 8 * 1024

_SUPPORTED_MAPPERS = {0}
_MAPPER_0_PRG_SIZES = (16384, 32768)


class Mirroring(enum.Enum):
    HORIZONTAL = enum.auto()
    VERTICAL = enum.auto()


@dataclass(frozen=True)
class CartridgeHeader:
    """The fields of an iNES header; flags 8 to 10 are ignored."""

    pgr_rom_size: int
    chr_rom_size: int
    mirroring: Mirroring
    chr_ram: bool
    trainer: bool
    """A 512-byte trainer precedes the PGR data."""
    mapper: int
    pgr_ram_size: int

    @classmethod
    def parse(cls, header: bytes) -> CartridgeHeader:
        """Parse the 16-byte iNES header."""
        if len(header) != HEADER_SIZE:
            raise ValueError(f"iNES header must be {HEADER_SIZE} bytes long")
        if header[:4] != INES_MAGIC:
            raise ValueError("Invalid iNES header")

        flags6, flags7 = header[6], header[7]
        mapper = (flags7 & 0xF0) | ((flags6 & 0xF0) >> 4)
        logger.debug("Cartridge mapper: %d", mapper)

        return cls(
            pgr_rom_size=header[4] * PRG_ROM_UNIT,
            chr_rom_size=header[5] * CHR_ROM_UNIT,
            mirroring=Mirroring.VERTICAL if flags6 & 0x01 else Mirroring.HORIZONTAL,
            chr_ram=header[5] == 0,
            trainer=bool(flags6 & 0x04),
            mapper=mapper,
            pgr_ram_size=header[8] * PRG_RAM_UNIT if header[8] else PRG_RAM_UNIT,
        )


class Cartridge:
    """A game read from an iNES file (NES 2.0 is not supported)."""

    def __init__(self, path: str | Path) -> None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Game {str(path)!r} not found. Make sure the path is correct"
            )
        if path.is_dir():
            raise IsADirectoryError(f"Expected a .nes file, not a directory: {path}")

        self._name = path.name
        contents = path.read_bytes()
        self.header = CartridgeHeader.parse(contents[:HEADER_SIZE])
        logger.debug("Header: %s", self.header)

        self._check_mapper()

        offset = HEADER_SIZE
        # trainer content is ignored
        if self.header.trainer:
            self._take(contents, offset, TRAINER_SIZE)
            offset += TRAINER_SIZE

        self.program_memory = self._take(contents, offset, self.header.pgr_rom_size)
        offset += self.header.pgr_rom_size

        chr_data = self._take(contents, offset, self.header.chr_rom_size)
        offset += self.header.chr_rom_size
        if self.header.chr_ram:
            self.character_memory = bytearray(CHR_MEMORY_SIZE)
            self.character_memory[: len(chr_data)] = chr_data
        else:
            self.character_memory = bytearray(chr_data)

        if len(contents) > offset:
            raise ValueError("This cartridge has more memory than expected!")

        self.program_ram = bytearray(self.header.pgr_ram_size)

    def _check_mapper(self) -> None:
        mapper = self.header.mapper
        if mapper not in _SUPPORTED_MAPPERS:
            raise NotImplementedError(f"Mapper {mapper} not implemented")
        if self.header.pgr_rom_size not in _MAPPER_0_PRG_SIZES:
            raise ValueError(
                f"Unexpected PGR ROM capacity: {self.header.pgr_rom_size}"
            )

    @staticmethod
    def _take(contents: bytes, offset: int, length: int) -> bytes:
        chunk = contents[offset : offset + length]
        if len(chunk) != length:
            raise ValueError("iNES file is truncated")
        return chunk

    def mirroring(self) -> Mirroring:
        return self.header.mirroring

    def __str__(self) -> str:
        return self._name