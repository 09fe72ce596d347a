"""Components of a NES emulator: PPU, OAM DMA, controllers, cartridges and events."""

__version__ = "0.62.1"