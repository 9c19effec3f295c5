"""Joypad register (P1, 0xFF00)."""

from __future__ import annotations

from enum import IntEnum

from dmgcore.interrupts import InterruptFlag

JOYPAD_ADDRESS = 0xFF00

MODE_ACTION = 0
MODE_DIRECT = 1

STATE_PRESS = 0
STATE_DEPRESS = 1

_SELECT_DIRECT = 0x20


class Button(IntEnum):
    """Buttons, valued by their bit in the internal state byte.

    The low nibble holds the action buttons, the high nibble the d-pad.
    """

    A = 0
    B = 1
    SELECT = 2
    START = 3
    RIGHT = 4
    LEFT = 5
    UP = 6
    DOWN = 7


class Joypad:
    """Button state with the active-low read-out of the P1 register.

    A cleared bit means the button is held down.
    """

    def __init__(
        self,
        interrupt_flag: InterruptFlag | None = None,
        button_states: int = 0xFF,
    ) -> None:
        self.interrupt_flag = interrupt_flag
        self.button_states = button_states & 0xFF
        self.mode = MODE_ACTION

    def read(self, address: int = JOYPAD_ADDRESS) -> int:
        if self.mode == MODE_DIRECT:
            return ((self.button_states >> 4) & 0x0F) | 0x10 | 0xC0
        return (self.button_states & 0x0F) | 0x20 | 0xC0

    def write(self, address: int, value: int) -> None:
        self.mode = MODE_DIRECT if value == _SELECT_DIRECT else MODE_ACTION

    def set_button_state(self, button: Button, pressed: bool) -> None:
        mask = 1 << Button(button)
        if pressed:
            self.button_states &= ~mask & 0xFF
        else:
            self.button_states |= mask

    def set_state(self, button: Button, state: int) -> None:
        """Set a button from a raw state: STATE_PRESS (0) or anything else."""
        self.set_button_state(button, state == STATE_PRESS)