from nesemu import hardware as hw
from nesemu.memory import AddressRange


def test_ppu_registers_are_consecutive_from_start():
    registers = [
        hw.PPUCTRL,
        hw.PPUMASK,
        hw.PPUSTATUS,
        hw.OAMADDR,
        hw.OAMDATA,
        hw.PPUSCROLL,
        hw.PPUADDR,
        hw.PPUDATA,
    ]
    assert registers == list(range(hw.PPU_REGISTERS_START, hw.PPU_REGISTERS_START + 8))
    region = AddressRange(hw.PPU_REGISTERS_START, hw.PPU_REGISTERS_END)
    assert all(r in region for r in registers)
    assert len(region) == 0x2000


def test_oam_dma_inside_apu_and_io_registers():
    region = AddressRange(hw.APU_AND_IO_REGISTERS_START, hw.APU_AND_IO_REGISTERS_END)
    assert hw.OAMDMA == hw.OAM_DMA
    assert hw.OAM_DMA in region
    assert len(region) == hw.APU_AND_IO_REGISTERS_SIZE


def test_main_bus_regions_are_ordered_and_disjoint():
    regions = [
        AddressRange(hw.RAM_START, hw.RAM_END),
        AddressRange(hw.PPU_REGISTERS_START, hw.PPU_REGISTERS_END),
        AddressRange(hw.APU_AND_IO_REGISTERS_START, hw.APU_AND_IO_REGISTERS_END),
        AddressRange(hw.CONTROLLER_PORT_1, hw.CONTROLLER_PORT_2),
        AddressRange(hw.CARTRIDGE_EXPANSION_ROM_START, hw.CARTRIDGE_EXPANSION_ROM_END),
        AddressRange(hw.CARTRIDGE_RAM_START, hw.CARTRIDGE_RAM_END),
        AddressRange(hw.CARTRIDGE_ROM_START, hw.CARTRIDGE_ROM_END),
    ]
    for current, following in zip(regions, regions[1:]):
        assert current.end < following.start
        assert following.start not in current
        assert current.end not in following
    assert 0xFFFF in regions[-1]


def test_graphics_bus_regions_are_contiguous():
    chr_region = AddressRange(hw.CHR_MEMORY_START, hw.CHR_MEMORY_END)
    nametables = AddressRange(hw.NAMETABLES_START, hw.NAMETABLES_END)
    unused = AddressRange(
        hw.CARTRIDGE_WEIRD_UNUSED_REGION_START, hw.CARTRIDGE_WEIRD_UNUSED_REGION_END
    )
    assert len(chr_region) == hw.CHR_MEMORY_SIZE
    assert chr_region.end + 1 == nametables.start
    assert nametables.end + 1 == unused.start
    assert unused.end + 1 == hw.PALETTE_MEMORY_START


def test_palette_mirrors_fill_region():
    palette = AddressRange(hw.PALETTE_MEMORY_START, hw.PALETTE_MEMORY_END)
    mirrored = AddressRange(hw.PALETTE_MEMORY_START, hw.PALETTE_MEMORY_MIRRORS_END)
    assert len(palette) == hw.PALETTE_MEMORY_SIZE
    assert len(mirrored) == hw.PALETTE_MEMORY_SIZE * (hw.PALETTE_MIRRORS + 1)


def test_ram_size_and_screen_size():
    ram = AddressRange(hw.RAM_START, hw.RAM_END)
    assert len(ram) == hw.RAM_SIZE == 0x2000
    assert (hw.SCREEN_WIDTH, hw.SCREEN_HEIGHT) == (256, 240)