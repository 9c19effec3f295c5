"""Divider and programmable timer (0xFF04-0xFF07)."""

from __future__ import annotations

from dataclasses import dataclass

from dmgcore.interrupts import Interrupt, InterruptFlag

DIV_ADDRESS = 0xFF04
TIMER_COUNTER_ADDRESS = 0xFF05
TIMER_MODULO_ADDRESS = 0xFF06
TIMER_CONTROL_ADDRESS = 0xFF07

# Divider bit whose falling edge ticks TIMA, per clock select value:
# 00 -> 4096 Hz, 01 -> 262144 Hz, 10 -> 65536 Hz, 11 -> 16384 Hz.
_TICK_BITS = (9, 3, 5, 7)
_TICK_MASKS = (1023, 15, 63, 255)


@dataclass
class TimerState:
    div: int = 0
    tima: int = 0
    tma: int = 0
    timer_enable: bool = False
    clock_select: int = 0


class TimerSystem:
    """DIV, TIMA, TMA and TAC, raising the timer interrupt on overflow."""

    def __init__(
        self, interrupt_flag: InterruptFlag, state: TimerState | None = None
    ) -> None:
        self.interrupt_flag = interrupt_flag
        self.state = state if state is not None else TimerState()

    def write(self, address: int, value: int) -> None:
        value &= 0xFF
        if address == DIV_ADDRESS:
            self.reset_div()
        elif address == TIMER_COUNTER_ADDRESS:
            self.state.tima = value
        elif address == TIMER_MODULO_ADDRESS:
            self.state.tma = value
        elif address == TIMER_CONTROL_ADDRESS:
            if value & 0x04:
                self.state.timer_enable = True
            self.state.clock_select = value & 3

    def read(self, address: int) -> int:
        if address == DIV_ADDRESS:
            return (self.state.div >> 8) & 0xFF
        if address == TIMER_COUNTER_ADDRESS:
            return self.state.tima
        if address == TIMER_MODULO_ADDRESS:
            return self.state.tma
        if address == TIMER_CONTROL_ADDRESS:
            enable = 0x04 if self.state.timer_enable else 0
            return enable | (self.state.clock_select & 3)
        return 0

    def read16(self, address: int) -> int:
        return (self.read((address + 1) & 0xFFFF) << 8) | self.read(address)

    def write16(self, address: int, value: int) -> None:
        self.write(address, value & 0xFF)
        self.write((address + 1) & 0xFFFF, (value >> 8) & 0xFF)

    def update(self, cycles: int) -> None:
        """Advance the divider by ``cycles`` and tick TIMA as needed."""
        cycles &= 0xFFFF
        state = self.state
        if not state.timer_enable:
            state.div = (state.div + cycles) & 0xFFFF
            return
        select = state.clock_select
        period_shift = _TICK_BITS[select] + 1
        to_edge = (1 << period_shift) - (state.div & _TICK_MASKS[select])
        if to_edge > cycles:
            state.div = (state.div + cycles) & 0xFFFF
            return
        state.div = (state.div + to_edge) & 0xFFFF
        cycles -= to_edge
        ticks = ((cycles >> period_shift) + 1) & 0xFF
        self._increment(ticks)
        state.div = (state.div + cycles) & 0xFFFF

    def _increment(self, ticks: int) -> None:
        state = self.state
        for _ in range(ticks):
            state.tima = (state.tima + 1) & 0xFF
            if state.tima == 0:
                self.interrupt_flag.set(Interrupt.TIMER, True)
                state.tima = state.tma

    def reset_div(self) -> None:
        self.state.div = 0


def create_timer(interrupt_flag: InterruptFlag) -> TimerSystem:
    return TimerSystem(interrupt_flag, TimerState())