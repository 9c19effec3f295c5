"""CPU register file: 8-bit, 16-bit, paired registers and the flag register."""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol


class Flag(IntEnum):
    """Bit positions of the CPU flags inside F."""

    C = 4
    H = 5
    N = 6
    Z = 7


class RegisterKind(IntEnum):
    REG8 = 0
    REG16 = 1
    DUAL = 2


class _ByteRegister(Protocol):
    def read(self) -> int: ...

    def write(self, value: int) -> None: ...


def _check_range(value: int, limit: int) -> int:
    if not 0 <= value <= limit:
        raise ValueError(f"value {value} out of range 0..{limit:#x}")
    return value


class FlagRegister:
    """The F register, addressed either as a byte or flag by flag."""

    def __init__(self) -> None:
        self.value = 0

    def get(self, flag: Flag) -> bool:
        return bool(self.value & (1 << flag))

    def set(self, flag: Flag, value: bool) -> None:
        if value:
            self.value |= 1 << flag
        else:
            self.value &= ~(1 << flag) & 0xFF

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    def clear(self) -> None:
        self.value = 0


class Register8:
    """A single 8-bit register."""

    kind = RegisterKind.REG8

    def __init__(self) -> None:
        self.value = 0

    def read(self) -> int:
        return self.value

    def write(self, value: int) -> None:
        self.value = value & 0xFF

    def read16(self) -> int:
        """High-page address formed from the register (as used by C)."""
        return self.value + 0xFF00

    def write16(self, value: int) -> None:
        """Check a 16-bit word; an 8-bit register keeps its contents."""
        _check_range(value, 0xFFFF)


class Register16:
    """A single 16-bit register such as SP or PC."""

    kind = RegisterKind.REG16

    def __init__(self) -> None:
        self.value = 0

    def read(self) -> int:
        return 0

    def write(self, value: int) -> None:
        """Check a byte; a 16-bit register keeps its contents."""
        _check_range(value, 0xFF)

    def read16(self) -> int:
        return self.value

    def write16(self, value: int) -> None:
        self.value = value & 0xFFFF


class DualRegister:
    """Two 8-bit registers viewed as one 16-bit value."""

    kind = RegisterKind.DUAL

    def __init__(self, upper: _ByteRegister, lower: _ByteRegister) -> None:
        self.upper = upper
        self.lower = lower

    def read(self) -> int:
        return 0

    def write(self, value: int) -> None:
        """Check a byte; a register pair keeps its contents."""
        _check_range(value, 0xFF)

    def read16(self) -> int:
        return (self.upper.read() << 8) | self.lower.read()

    def write16(self, value: int) -> None:
        self.upper.write((value >> 8) & 0xFF)
        self.lower.write(value & 0xFF)


class RegisterSet:
    """All CPU registers together with the interrupt and halt state."""

    def __init__(self) -> None:
        self.a = Register8()
        self.b = Register8()
        self.c = Register8()
        self.d = Register8()
        self.e = Register8()
        self.h = Register8()
        self.l = Register8()
        self.f = FlagRegister()
        self.sp = Register16()
        self.pc = Register16()
        self.bc = DualRegister(self.b, self.c)
        self.de = DualRegister(self.d, self.e)
        self.hl = DualRegister(self.h, self.l)
        self.af = DualRegister(self.a, self.f)
        self.ime = True
        self.halting = False
        self.stopping = False
        self.delay_enable_interrupt = False