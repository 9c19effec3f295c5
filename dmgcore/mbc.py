"""Cartridge memory bank controllers."""

from __future__ import annotations

EXT_RAM_START_ADDRESS = 0xA000
EXT_RAM_END_ADDRESS = 0xBFFF

_ROM_BANK_SHIFT = 14
_RAM_BANK_SHIFT = 13


class UnsupportedCartridgeError(ValueError):
    """Raised for a cartridge type with no bank controller."""


def _ram_offset(address: int) -> int:
    offset = address - EXT_RAM_START_ADDRESS
    if offset < 0:
        raise IndexError(f"address {address:#06x} is not in external RAM")
    return offset


def _check_word(name: str, value: int) -> None:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} {value} is not a 16-bit value")


class Mbc1:
    """MBC1: ROM banking with optional RAM banking mode."""

    def __init__(self, rom_size: int, ram_size: int) -> None:
        self.rom = bytearray(rom_size)
        self.ext_ram = bytearray(ram_size)
        self.lower_bits = 0
        self.upper_bits = 0
        self.ram_bank_mode = False
        self.ext_ram_enabled = False

    def read(self, address: int) -> int:
        if address < 0x4000:
            return self.rom[address]
        if address < 0x8000:
            if self.ram_bank_mode:
                return self.rom[address]
            bank = ((self.upper_bits << 5) | self.lower_bits) & 0xFF or 1
            return self.rom[(bank << _ROM_BANK_SHIFT) + address - 0x4000]
        if not self.ext_ram_enabled:
            return 0
        return self.ext_ram[self._ram_index(address)]

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address < 0x2000:
            self.ext_ram_enabled = value == 0x0A
        elif address < 0x4000:
            self.lower_bits = value & 31
        elif address < 0x6000:
            self.upper_bits = value & 3
        elif address < 0x8000:
            self.ram_bank_mode = value == 0x01
        elif self.ext_ram_enabled:
            self.ext_ram[self._ram_index(address)] = value

    def _ram_index(self, address: int) -> int:
        offset = _ram_offset(address)
        if not self.ram_bank_mode:
            return offset
        return ((self.upper_bits & 3) << _RAM_BANK_SHIFT) + offset

    def read16(self, address: int) -> int:
        return (self.read((address + 1) & 0xFFFF) << 8) | self.read(address)

    def write16(self, address: int, value: int) -> None:
        self.write(address, value & 0xFF)
        self.write((address + 1) & 0xFFFF, (value >> 8) & 0xFF)


class Mbc3:
    """MBC3 variant for cartridge type 0x13 (ROM, RAM and battery)."""

    def __init__(self, ram_size: int, rom: bytes | bytearray) -> None:
        self.rom = rom if isinstance(rom, bytearray) else bytearray(rom)
        self.ext_ram = bytearray(ram_size)
        self.rom_bank = 1
        self.ram_bank = 0

    def read(self, address: int) -> int:
        if address < 0x4000:
            return self.rom[address]
        if address < 0x8000:
            index = (address - 0x4000 + (self.rom_bank << _ROM_BANK_SHIFT)) & 0xFFFF
            return self.rom[index]
        index = (_ram_offset(address) + (self.ram_bank << _RAM_BANK_SHIFT)) & 0xFFFF
        return self.ext_ram[index]

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if 0x2000 <= address < 0x4000:
            self.rom_bank = (value & 0x80) or 1
        elif 0x4000 <= address < 0x6000:
            self.ram_bank = value

    def read16(self, address: int) -> int:
        return (self.read((address + 1) & 0xFFFF) << 8) | self.read(address)

    def write16(self, address: int, value: int) -> None:
        """Check the operands; this controller leaves its state unchanged."""
        _check_word("address", address)
        _check_word("value", value)


def create_mbc(mbc_type: int, rom: bytes | bytearray, ram_size: int) -> Mbc3:
    """Build the bank controller for a cartridge type byte."""
    if mbc_type == 0x13:
        return Mbc3(ram_size, rom)
    raise UnsupportedCartridgeError(f"unsupported cartridge type {mbc_type:#04x}")