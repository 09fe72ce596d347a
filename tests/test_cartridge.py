import pytest

from nesemu.cartridge import Cartridge, CartridgeHeader, Mirroring


def header_bytes(prg=1, chr_=1, flags6=0, flags7=0, prg_ram=0):
    return b"NES\x1a" + bytes([prg, chr_, flags6, flags7, prg_ram]) + bytes(7)


def write_rom(tmp_path, header, body, name="game.nes"):
    path = tmp_path / name
    path.write_bytes(header + body)
    return path


def test_parse_sizes():
    header = CartridgeHeader.parse(header_bytes(prg=2, chr_=1))
    assert header.pgr_rom_size == 2 * 16 * 1024
    assert header.chr_rom_size == 8 * 1024
    assert header.chr_ram is False
    assert header.pgr_ram_size == 8 * 1024


def test_parse_chr_ram_and_prg_ram():
    header = CartridgeHeader.parse(header_bytes(chr_=0, prg_ram=2))
    assert header.chr_ram is True
    assert header.chr_rom_size == 0
    assert header.pgr_ram_size == 2 * 8 * 1024


def test_parse_flags():
    header = CartridgeHeader.parse(header_bytes(flags6=0x05))
    assert header.mirroring is Mirroring.VERTICAL
    assert header.trainer is True
    assert CartridgeHeader.parse(header_bytes()).mirroring is Mirroring.HORIZONTAL


def test_parse_mapper_number():
    header = CartridgeHeader.parse(header_bytes(flags6=0x10, flags7=0x20))
    assert header.mapper == 0x21


def test_parse_invalid_magic():
    with pytest.raises(ValueError):
        CartridgeHeader.parse(b"XES\x1a" + bytes(12))


def test_load_cartridge(tmp_path):
    prg = bytes(i & 0xFF for i in range(16 * 1024))
    chr_ = bytes([7]) * (8 * 1024)
    path = write_rom(tmp_path, header_bytes(flags6=0x01), prg + chr_)
    cartridge = Cartridge(path)
    assert str(cartridge) == "game.nes"
    assert cartridge.mirroring() is Mirroring.VERTICAL
    assert bytes(cartridge.program_memory) == prg
    assert bytes(cartridge.character_memory) == chr_


def test_load_with_trainer(tmp_path):
    prg = bytes([1]) * (16 * 1024)
    chr_ = bytes([2]) * (8 * 1024)
    path = write_rom(tmp_path, header_bytes(flags6=0x04), bytes(512) + prg + chr_)
    cartridge = Cartridge(path)
    assert bytes(cartridge.program_memory) == prg


def test_chr_ram_cartridge(tmp_path):
    path = write_rom(tmp_path, header_bytes(chr_=0), bytes(16 * 1024))
    cartridge = Cartridge(path)
    assert len(cartridge.character_memory) == 0x2000


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Cartridge(tmp_path / "missing.nes")


def test_trailing_data(tmp_path):
    path = write_rom(tmp_path, header_bytes(), bytes(16 * 1024 + 8 * 1024 + 1))
    with pytest.raises(ValueError):
        Cartridge(path)


def test_truncated_file(tmp_path):
    path = write_rom(tmp_path, header_bytes(), bytes(100))
    with pytest.raises(ValueError):
        Cartridge(path)


def test_unsupported_mapper(tmp_path):
    path = write_rom(tmp_path, header_bytes(flags6=0x10), bytes(16 * 1024 + 8 * 1024))
    with pytest.raises(NotImplementedError):
        Cartridge(path)