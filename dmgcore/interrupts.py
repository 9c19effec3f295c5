"""Interrupt enable (IE) and interrupt flag (IF) registers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class Interrupt(IntEnum):
    """Interrupt sources, valued by their bit position in IE and IF."""

    VBLANK = 0
    STAT = 1
    TIMER = 2
    SERIAL = 3
    JOYPAD = 4

    @property
    def mask(self) -> int:
        return 1 << self.value


@dataclass
class InterruptEnable:
    """The IE register (0xFFFF): one enable bit per interrupt source."""

    value: int = 0

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    def enabled(self, interrupt: Interrupt) -> bool:
        return bool(self.value & Interrupt(interrupt).mask)


@dataclass
class InterruptFlag:
    """The IF register (0xFF0F): one request bit per interrupt source."""

    value: int = 0

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    def set(self, interrupt: Interrupt, value: bool) -> None:
        mask = Interrupt(interrupt).mask
        if value:
            self.value |= mask
        else:
            self.value &= ~mask & 0xFF

    def is_set(self, interrupt: Interrupt) -> bool:
        return bool(self.value & Interrupt(interrupt).mask)


@dataclass
class Interrupts:
    """The pair of interrupt registers shared by the hardware units."""

    enable: InterruptEnable = field(default_factory=InterruptEnable)
    flag: InterruptFlag = field(default_factory=InterruptFlag)