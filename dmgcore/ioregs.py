"""Memory-mapped I/O registers: interrupts, joypad and the LCD registers."""

from __future__ import annotations

from dataclasses import dataclass

from dmgcore.interrupts import InterruptEnable, InterruptFlag
from dmgcore.joypad import Joypad

JOYPAD_ADDRESS = 0xFF00

SERIAL_DATA_ADDRESS = 0xFF01
SERIAL_CONTROL_ADDRESS = 0xFF02

DIV_ADDRESS = 0xFF04
TIMER_COUNTER_ADDRESS = 0xFF05
TIMER_MODULO_ADDRESS = 0xFF06
TIMER_CONTROL_ADDRESS = 0xFF07

IF_ADDRESS = 0xFF0F

LCDC_ADDRESS = 0xFF40
STAT_ADDRESS = 0xFF41
SCY_ADDRESS = 0xFF42
SCX_ADDRESS = 0xFF43
LY_ADDRESS = 0xFF44
LYC_ADDRESS = 0xFF45
DMA_ADDRESS = 0xFF46
BGP_ADDRESS = 0xFF47
OBP0_ADDRESS = 0xFF48
OBP1_ADDRESS = 0xFF49
WY_ADDRESS = 0xFF4A
WX_ADDRESS = 0xFF4B

IE_ADDRESS = 0xFFFF

# LCD registers that are plain bytes, keyed by address.
_BYTE_REGISTERS = {
    SCY_ADDRESS: "scy",
    SCX_ADDRESS: "scx",
    LY_ADDRESS: "ly",
    LYC_ADDRESS: "lyc",
    BGP_ADDRESS: "bgp",
    OBP0_ADDRESS: "obp0",
    OBP1_ADDRESS: "obp1",
    WY_ADDRESS: "wy",
    WX_ADDRESS: "wx",
}


@dataclass
class LcdControl:
    """The LCDC register (0xFF40) kept as a raw byte."""

    value: int = 0

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    @property
    def lcd_enabled(self) -> bool:
        return bool(self.value & 0x80)

    @property
    def window_tile_map(self) -> int:
        return (self.value >> 6) & 1

    @property
    def window_enabled(self) -> bool:
        return bool(self.value & 0x20)

    @property
    def unsigned_tile_data(self) -> bool:
        """True when window and background tiles are addressed unsigned."""
        return bool(self.value & 0x10)

    @property
    def background_tile_map(self) -> int:
        return (self.value >> 3) & 1

    @property
    def tall_sprites(self) -> bool:
        """True when sprites are 8x16 rather than 8x8."""
        return bool(self.value & 0x04)

    @property
    def sprites_enabled(self) -> bool:
        return bool(self.value & 0x02)

    @property
    def background_enabled(self) -> bool:
        return bool(self.value & 0x01)


@dataclass
class LcdStatus:
    """The STAT register (0xFF41) kept as a raw byte.

    Bits 0-1 hold the PPU mode, bit 2 the LY == LYC coincidence, bits 3-5
    enable the interrupt on entering modes 0-2 and bit 6 the one on LY == LYC.
    """

    value: int = 0

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    def get_bit(self, bit: int) -> bool:
        return bool(self.value & (1 << bit))

    def set_bit(self, bit: int, value: bool) -> None:
        if value:
            self.value |= 1 << bit
        else:
            self.value &= ~(1 << bit) & 0xFF

    @property
    def mode(self) -> int:
        return self.value & 3

    @mode.setter
    def mode(self, mode: int) -> None:
        self.value = (self.value & ~3 & 0xFF) | (mode & 3)

    def mode_interrupt_enabled(self, mode: int) -> bool:
        return self.get_bit(mode + 3)

    def set_mode_interrupt_enabled(self, mode: int, value: bool) -> None:
        self.set_bit(mode + 3, value)

    @property
    def ly_equal_lyc(self) -> bool:
        return self.get_bit(2)

    @ly_equal_lyc.setter
    def ly_equal_lyc(self, value: bool) -> None:
        self.set_bit(2, value)

    @property
    def ly_equal_lyc_interrupt_enabled(self) -> bool:
        return self.get_bit(6)

    @ly_equal_lyc_interrupt_enabled.setter
    def ly_equal_lyc_interrupt_enabled(self, value: bool) -> None:
        self.set_bit(6, value)


class IORegisterFile:
    """A simple I/O register bank holding the LCD and interrupt registers.

    Reads serve only the LCD registers; writes also reach IF and IE.
    """

    def __init__(self) -> None:
        self.obp0 = 0
        self.obp1 = 0
        self.bgp = 0
        self.scx = 0
        self.scy = 0
        self.wx = 0
        self.wy = 0
        self.ly = 0
        self.lyc = 0
        self.stat = LcdStatus()
        self.lcdc = LcdControl()
        self.interrupt_enable = InterruptEnable()
        self.interrupt_flag = InterruptFlag()
        self.joypad = Joypad(None, 0)

    def read(self, address: int) -> int:
        if address == LCDC_ADDRESS:
            return self.lcdc.value
        if address == STAT_ADDRESS:
            return self.stat.value
        name = _BYTE_REGISTERS.get(address)
        if name is not None:
            return getattr(self, name)
        return 0

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address == IF_ADDRESS:
            self.interrupt_flag.write(value)
        elif LCDC_ADDRESS <= address <= WX_ADDRESS:
            self._write_lcd(address, value)
        elif address == IE_ADDRESS:
            self.interrupt_enable.write(value)

    def _write_lcd(self, address: int, value: int) -> None:
        if address == LCDC_ADDRESS:
            self.lcdc.write(value)
        elif address == STAT_ADDRESS:
            self.stat.write(value)
        else:
            name = _BYTE_REGISTERS.get(address)
            if name is not None:
                setattr(self, name, value)