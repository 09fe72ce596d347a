"""NES hardware constants: memory maps of both buses and screen size."""

# Main bus: CPU address space

# 2 kB RAM mirrored 3 times
RAM_START = 0x0000
RAM_END = 0x1FFF
RAM_SIZE = RAM_END - RAM_START + 1
RAM_MIRRORS = 3

# PPU registers: 8 registers mirrored 1023 times
PPU_REGISTERS_START = 0x2000
PPU_REGISTERS_END = 0x3FFF

PPUCTRL = 0x2000
PPUMASK = 0x2001
PPUSTATUS = 0x2002
OAMADDR = 0x2003
OAMDATA = 0x2004
PPUSCROLL = 0x2005
PPUADDR = 0x2006
PPUDATA = 0x2007
OAMDMA = 0x4014

APU_AND_IO_REGISTERS_START = 0x4000
APU_AND_IO_REGISTERS_END = 0x4015
APU_AND_IO_REGISTERS_SIZE = APU_AND_IO_REGISTERS_END - APU_AND_IO_REGISTERS_START + 1

OAM_DMA = 0x4014

CONTROLLER_PORT_1 = 0x4016
CONTROLLER_PORT_2 = 0x4017

# Cartridge PGR ROM and RAM space
CARTRIDGE_EXPANSION_ROM_START = 0x4020
CARTRIDGE_EXPANSION_ROM_END = 0x5FFF
CARTRIDGE_EXPANSION_ROM_SIZE = CARTRIDGE_EXPANSION_ROM_END - CARTRIDGE_EXPANSION_ROM_START + 1

CARTRIDGE_RAM_START = 0x6000
CARTRIDGE_RAM_END = 0x7FFF

CARTRIDGE_ROM_START = 0x8000
CARTRIDGE_ROM_END = 0xFFFF

# Graphics bus: PPU address space

# Pattern tables (CHR memory, supplied by the cartridge)
PATTERN_TABLES_START = 0x0000
PATTERN_TABLES_END = 0x1FFF
CHR_MEMORY_START = PATTERN_TABLES_START
CHR_MEMORY_END = PATTERN_TABLES_END
CHR_MEMORY_SIZE = CHR_MEMORY_END - CHR_MEMORY_START + 1

# Nametables (VRAM)
NAMETABLES_START = 0x2000
NAMETABLES_END = 0x2FFF

CARTRIDGE_WEIRD_UNUSED_REGION_START = 0x3000
CARTRIDGE_WEIRD_UNUSED_REGION_END = 0x3EFF

# Palettes
PALETTE_MEMORY_START = 0x3F00
PALETTE_MEMORY_END = 0x3F1F
PALETTE_MEMORY_SIZE = PALETTE_MEMORY_END - PALETTE_MEMORY_START + 1
PALETTE_MIRRORS = 7
PALETTE_MEMORY_MIRRORS_END = 0x3FFF

# Screen
SCREEN_HEIGHT = 240
SCREEN_WIDTH = 256