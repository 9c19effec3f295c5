"""Memory management unit: routes the 16-bit address space to its devices."""

from __future__ import annotations

from typing import Protocol

ROM_START_ADDRESS = 0x0000
VRAM_START_ADDRESS = 0x8000
EXT_RAM_START_ADDRESS = 0xA000
WRAM_START_ADDRESS = 0xC000
ECHO_RAM_START_ADDRESS = 0xE000
OAM_START_ADDRESS = 0xFE00
OAM_END_ADDRESS = 0xFEA0
IO_REGISTER_START_ADDRESS = 0xFF00
HRAM_START_ADDRESS = 0xFF80

WRAM_SIZE = 8192
HRAM_SIZE = 127


class _ByteDevice(Protocol):
    def read(self, address: int) -> int: ...

    def write(self, address: int, value: int) -> None: ...


class _WordDevice(_ByteDevice, Protocol):
    def read16(self, address: int) -> int: ...

    def write16(self, address: int, value: int) -> None: ...


class Mmu:
    """Dispatches reads and writes to the cartridge, VRAM, WRAM, OAM, I/O and HRAM.

    VRAM and OAM receive offsets from their region start; the cartridge and
    the I/O registers receive full addresses. Echo RAM mirrors WRAM.
    """

    def __init__(
        self,
        vram: _WordDevice,
        io_registers: _ByteDevice,
        oam: _WordDevice,
        mbc: _WordDevice,
    ) -> None:
        self.vram = vram
        self.io_registers = io_registers
        self.oam = oam
        self.mbc = mbc
        self.wram = bytearray(WRAM_SIZE)
        self.hram = bytearray(HRAM_SIZE)

    def read(self, address: int) -> int:
        if address < VRAM_START_ADDRESS:
            return self.mbc.read(address)
        if address < EXT_RAM_START_ADDRESS:
            return self.vram.read(address - VRAM_START_ADDRESS)
        if address < WRAM_START_ADDRESS:
            return self.mbc.read(address)
        if address < ECHO_RAM_START_ADDRESS:
            return self.wram[address - WRAM_START_ADDRESS]
        if address < OAM_START_ADDRESS:
            return self.wram[address - ECHO_RAM_START_ADDRESS]
        if address < OAM_END_ADDRESS:
            return self.oam.read(address - OAM_START_ADDRESS)
        if address < HRAM_START_ADDRESS:
            return self.io_registers.read(address)
        return self.hram[address - HRAM_START_ADDRESS]

    def read16(self, address: int) -> int:
        """Little-endian word read; the I/O area always reads as 0."""
        if address < VRAM_START_ADDRESS:
            return self.mbc.read16(address)
        if address < EXT_RAM_START_ADDRESS:
            return self.vram.read16(address - VRAM_START_ADDRESS)
        if address < WRAM_START_ADDRESS:
            return self.mbc.read16(address)
        if address < ECHO_RAM_START_ADDRESS:
            return self._word(self.wram, address - WRAM_START_ADDRESS)
        if address < OAM_START_ADDRESS:
            return self._word(self.wram, address - ECHO_RAM_START_ADDRESS)
        if address < OAM_END_ADDRESS:
            return self.oam.read16(address - OAM_START_ADDRESS)
        if address < HRAM_START_ADDRESS:
            return 0
        return self._word(self.hram, address - HRAM_START_ADDRESS)

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address < VRAM_START_ADDRESS:
            self.mbc.write(address, value)
        elif address < EXT_RAM_START_ADDRESS:
            self.vram.write(address - VRAM_START_ADDRESS, value)
        elif address < WRAM_START_ADDRESS:
            self.mbc.write(address, value)
        elif address < ECHO_RAM_START_ADDRESS:
            self.wram[address - WRAM_START_ADDRESS] = value
        elif address < OAM_START_ADDRESS:
            self.wram[address - ECHO_RAM_START_ADDRESS] = value
        elif address < OAM_END_ADDRESS:
            self.oam.write(address - OAM_START_ADDRESS, value)
        elif address < HRAM_START_ADDRESS:
            self.io_registers.write(address, value)
        else:
            self.hram[address - HRAM_START_ADDRESS] = value

    def write16(self, address: int, value: int) -> None:
        """Little-endian word write; writes to the I/O area are ignored."""
        value &= 0xFFFF
        if address < VRAM_START_ADDRESS:
            self.mbc.write16(address, value)
        elif address < EXT_RAM_START_ADDRESS:
            self.vram.write16(address - VRAM_START_ADDRESS, value)
        elif address < WRAM_START_ADDRESS:
            self.mbc.write16(address, value)
        elif address < ECHO_RAM_START_ADDRESS:
            self._store_word(self.wram, address - WRAM_START_ADDRESS, value)
        elif address < OAM_START_ADDRESS:
            self._store_word(self.wram, address - ECHO_RAM_START_ADDRESS, value)
        elif address < OAM_END_ADDRESS:
            self.oam.write16(address - OAM_START_ADDRESS, value)
        elif address >= HRAM_START_ADDRESS:
            self._store_word(self.hram, address - HRAM_START_ADDRESS, value)

    @staticmethod
    def _word(memory: bytearray, index: int) -> int:
        return (memory[index + 1] << 8) | memory[index]

    @staticmethod
    def _store_word(memory: bytearray, index: int, value: int) -> None:
        memory[index] = value & 0xFF
        memory[index + 1] = (value >> 8) & 0xFF