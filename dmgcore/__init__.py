"""Hardware components for a monochrome handheld console emulator: registers, memory map, bank controllers, timer, joypad and PPU."""

__version__ = "0.1.0"