# dmgcore

Building blocks for an emulator of the original monochrome handheld console.
Each hardware piece is modelled on its own, so it can be used and tested
separately:

- `dmgcore.registers` – CPU register set (`RegisterSet`, `Register8`,
  `Register16`, `DualRegister`, `FlagRegister`, `Flag`, `RegisterKind`).
- `dmgcore.interrupts` – interrupt enable and flag registers (`Interrupts`,
  `InterruptEnable`, `InterruptFlag`, `Interrupt`).
- `dmgcore.timer` – DIV/TIMA/TMA/TAC timer (`TimerSystem`, `TimerState`,
  `create_timer`), raising the timer interrupt when TIMA overflows.
- `dmgcore.joypad` – the P1 button register (`Joypad`, `Button`).
- `dmgcore.vram` – tile data and the two tile maps (`VideoRam`, `TileRegion`,
  `Tile`, `random_tile`), including `VideoRam.line_colors` for one scrolled
  screen line.
- `dmgcore.oam` – the sprite attribute table (`ObjectAttributeMemory`,
  `Sprite`, `SpriteSlice`, `sprite_flags`, `create_sprite`).
- `dmgcore.mbc` – cartridge bank controllers (`Mbc1`, `Mbc3`, `create_mbc`,
  `UnsupportedCartridgeError`). `create_mbc` knows only cartridge type
  `0x13`; any other type raises `UnsupportedCartridgeError`.
- `dmgcore.ioregs` – a simple I/O register file (`IORegisterFile`) holding
  the LCD registers, IE and IF.
- `dmgcore.mmu` – the 16-bit address map tying the devices together (`Mmu`).
  Echo RAM mirrors work RAM; 16-bit accesses to the I/O area read 0 and are
  otherwise ignored.
- `dmgcore.ppu_registers` – the LCD registers as the PPU decodes them
  (`PpuState`, `LcdControl`, `LcdStatus`).
- `dmgcore.ppu` – mode timing, LY/STAT updates and scanline rendering of
  background, window and sprites (`Ppu`, `palette_map`, `render_sprite`).

## Installation

```
pip install dmgcore
```

No third-party dependencies are needed.

## Examples

Wiring up the memory map:

```python
from dmgcore.ioregs import IORegisterFile
from dmgcore.mbc import Mbc1
from dmgcore.mmu import Mmu
from dmgcore.oam import ObjectAttributeMemory
from dmgcore.vram import VideoRam

io = IORegisterFile()
mmu = Mmu(VideoRam(), io, ObjectAttributeMemory(), Mbc1(64 << 10, 16 << 10))
mmu.write(0xC000, 10)
assert mmu.read(0xC000) == 10
mmu.write(0xFF42, 7)          # SCY
assert io.scy == 7
mmu.write16(0xFF80, 0x1234)   # high RAM
assert mmu.read16(0xFF80) == 0x1234
```

Registers pair up the way the CPU sees them:

```python
from dmgcore.registers import Flag, RegisterSet

regs = RegisterSet()
regs.bc.write16(0x1714)
assert regs.b.read() == 0x17 and regs.c.read() == 0x14
regs.f.set(Flag.Z, True)
assert regs.f.get(Flag.Z)
```

The timer ticks TIMA on falling edges of the divider and reloads it from TMA
on overflow:

```python
from dmgcore.interrupts import Interrupt, InterruptFlag
from dmgcore.timer import TimerState, TimerSystem

flags = InterruptFlag()
state = TimerState(div=15, tima=255, tma=150, timer_enable=True, clock_select=1)
TimerSystem(flags, state).update(24)
assert (state.div, state.tima) == (39, 151)
assert flags.is_set(Interrupt.TIMER)
```

The PPU fills caller-supplied line buffers and calls `draw` once per frame,
when v-blank begins:

```python
from dmgcore.interrupts import Interrupts
from dmgcore.oam import ObjectAttributeMemory
from dmgcore.ppu import Ppu
from dmgcore.vram import VideoRam

lines = [[0] * 160 for _ in range(144)]
frames = []
ppu = Ppu(ObjectAttributeMemory(), VideoRam(), Interrupts(), lines,
          lambda: frames.append(1))
ppu.write(0xFF40, 0x91)       # LCD, unsigned tile data, background on
for _ in range(200_000):
    ppu.update(4)
assert frames
```

## What this package does not do

There is no CPU instruction decoder or executor, no sound unit, no serial
port, no OAM DMA, and no screen or keyboard handling: the line buffers the
PPU fills and the `Joypad` button state are left for the caller to display
and drive. There is no command to run; the package is used as a library.

## Running the tests

```
pip install -e .[test]
pytest
```