"""LCD registers as the PPU keeps them: decoded LCDC and STAT plus plain bytes."""

from __future__ import annotations

from dataclasses import dataclass, field

from dmgcore.ioregs import (
    BGP_ADDRESS,
    LCDC_ADDRESS,
    LY_ADDRESS,
    LYC_ADDRESS,
    OBP0_ADDRESS,
    OBP1_ADDRESS,
    SCX_ADDRESS,
    SCY_ADDRESS,
    STAT_ADDRESS,
    WX_ADDRESS,
    WY_ADDRESS,
)

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
    """The LCDC register (0xFF40) decoded into its fields."""

    lcd_enabled: bool = False
    window_tile_map: int = 0
    window_enabled: bool = False
    unsigned_tile_data: bool = False
    background_tile_map: int = 0
    tall_sprites: bool = False
    sprites_enabled: bool = False
    background_enabled: bool = False

    def read(self) -> int:
        value = 0
        if self.lcd_enabled:
            value |= 1 << 7
        if self.window_tile_map == 1:
            value |= 1 << 6
        if self.window_enabled:
            value |= 1 << 5
        if self.unsigned_tile_data:
            value |= 1 << 4
        if self.background_tile_map == 1:
            value |= 1 << 3
        if self.tall_sprites:
            value |= 1 << 2
        if self.sprites_enabled:
            value |= 1 << 1
        if self.background_enabled:
            value |= 1
        return value

    def write(self, value: int) -> None:
        value &= 0xFF
        self.lcd_enabled = (value >> 7) != 0
        self.window_tile_map = (value >> 6) & 1
        self.window_enabled = bool((value >> 5) & 1)
        self.unsigned_tile_data = bool((value >> 4) & 1)
        self.background_tile_map = (value >> 3) & 1
        self.tall_sprites = bool((value >> 2) & 1)
        # Sprites count as enabled when any bit above bit 0 is set.
        self.sprites_enabled = (value >> 1) != 0
        self.background_enabled = bool(value & 1)


@dataclass
class LcdStatus:
    """The STAT register (0xFF41) decoded into its fields."""

    ly_equal_lyc_interrupt_enabled: bool = False
    mode_interrupts: list[bool] = field(default_factory=lambda: [False] * 3)
    ly_equal_lyc: bool = False
    mode: int = 0

    def mode_interrupt_enabled(self, mode: int) -> bool:
        return self.mode_interrupts[mode]

    def set_mode_interrupt_enabled(self, mode: int, value: bool) -> None:
        self.mode_interrupts[mode] = value

    def read(self) -> int:
        value = 0
        if self.ly_equal_lyc_interrupt_enabled:
            value |= 1 << 6
        for mode, enabled in enumerate(self.mode_interrupts):
            if enabled:
                value |= 1 << (mode + 3)
        if self.ly_equal_lyc:
            value |= 1 << 2
        return value | (self.mode & 3)

    def write(self, value: int) -> None:
        value &= 0xFF
        self.ly_equal_lyc_interrupt_enabled = bool((value >> 6) & 1)
        self.mode_interrupts = [bool((value >> (mode + 3)) & 1) for mode in range(3)]
        self.ly_equal_lyc = bool((value >> 2) & 1)
        self.mode = value & 3


@dataclass
class PpuState:
    """All LCD registers (0xFF40-0xFF4B) addressable by memory address."""

    obp0: int = 0
    obp1: int = 0
    bgp: int = 0
    scx: int = 0
    scy: int = 0
    wx: int = 0
    wy: int = 0
    ly: int = 0
    lyc: int = 0
    stat: LcdStatus = field(default_factory=LcdStatus)
    lcdc: LcdControl = field(default_factory=LcdControl)

    def read(self, address: int) -> int:
        if address == LCDC_ADDRESS:
            return self.lcdc.read()
        if address == STAT_ADDRESS:
            return self.stat.read()
        name = _BYTE_REGISTERS.get(address)
        if name is not None:
            return getattr(self, name)
        return 0

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address == LCDC_ADDRESS:
            self.lcdc.write(value)
        elif address == STAT_ADDRESS:
            self.stat.write(value)
        else:
            name = _BYTE_REGISTERS.get(address)
            if name is not None:
                setattr(self, name, value)