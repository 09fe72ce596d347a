# nesemu

Components of a Nintendo Entertainment System emulator, written in plain
Python with no runtime dependencies.

## Modules

- `nesemu.cartridge`: `Cartridge` reads an iNES file. It parses the 16-byte
  header with `CartridgeHeader.parse`. The loaded data is in
  `program_memory`, `character_memory` and `program_ram`. The nametable
  `Mirroring` comes from `mirroring()`. Only mapper 0 with 16 kB or 32 kB of
  PGR ROM is accepted.
- `nesemu.graphics.ppu`: `Ppu` emulates the 2C02 picture processing unit.
  It covers:
  - the loopy scrolling registers (`PpuInternalRegisters`)
  - background tile fetching
  - sprite evaluation
  - sprite 0 hit
  - vertical blank and NMI signalling through the event bus

  Each `clock()` advances it one dot. `take_frame()` returns the `Frame`
  being drawn. `read` and `write` expose the eight PPU registers, as offsets
  from `$2000`. `render_nametable()` draws the selected nametable for
  debugging, and `dump_oam(path)` writes the sprite table to a file.
- `nesemu.graphics.pixel_producer`: `PixelProducer` holds the background
  shifters and the scanline sprites, and combines them into pixels.
- `nesemu.graphics.frame`: `Frame`, `Pixel` and `FramePixel`.
- `nesemu.graphics.palette`: `pixel_from_color` maps a NES colour index to
  its NTSC RGB value.
- `nesemu.graphics.palette_memory`, `nesemu.graphics.oam`,
  `nesemu.graphics.pattern_table`, `nesemu.graphics.render_address` and
  `nesemu.graphics.ppu_registers`: `PaletteMemory`, `Oam`,
  `PatternTableAddress`, `RenderAddress` and `PpuRegisters`, the pieces the
  PPU is built from.
- `nesemu.dma`: `DmaController` copies a 256-byte page from a bus into the
  PPU's OAM. It alternates read and write cycles.
- `nesemu.controller`: `Controllers` emulates both joypad ports. It takes
  key events from a `KeyboardListener`, and `ControllerButtons` maps keys to
  buttons.
- `nesemu.events`:
  - `SharedEventBus` carries `Event` flags between components.
  - `KeyboardChannel` hands out a `KeyboardPublisher` and a
    `KeyboardListener`.
- `nesemu.memory`: the `Memory` and `Bus` interfaces and `AddressRange`.
- `nesemu.metrics`: `Collector` measures clock speed and frames per second.
- `nesemu.hardware`: address-space and screen constants.
- `nesemu.errors`: the exceptions.

## Example

The PPU reads and writes through any object with `read(address)` and
`write(address, data)` methods:

```python
from nesemu.events import Event, SharedEventBus
from nesemu.graphics.palette import pixel_from_color
from nesemu.graphics.ppu import Ppu
from nesemu.hardware import PPUADDR, PPUDATA, PPU_REGISTERS_START


class FlatBus:
    def __init__(self):
        self.memory = bytearray(0x4000)

    def read(self, address):
        return self.memory[address & 0x3FFF]

    def write(self, address, data):
        self.memory[address & 0x3FFF] = data


events = SharedEventBus()
ppu = Ppu(FlatBus(), events)

# set the backdrop colour at $3F00
ppu.write(PPUADDR - PPU_REGISTERS_START, 0x3F)
ppu.write(PPUADDR - PPU_REGISTERS_START, 0x00)
ppu.write(PPUDATA - PPU_REGISTERS_START, 0x21)

while not events.emitted(Event.FRAME_READY):
    ppu.clock()
frame = ppu.take_frame()
assert frame[0][0] == pixel_from_color(0x21)
```

## What it does not do

- There is no CPU, and no main or graphics bus implementation.
- There is no window, no sound, and no command to run a game.
- A `Cartridge` holds its memories but does not attach them to any bus.
- Mappers other than 0 and the NES 2.0 format are not supported.
- 8x16 sprites raise `NesInternalError`.

## Running the tests

```
pip install -e .[test]
pytest
```