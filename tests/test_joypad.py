import pytest

from dmgcore.interrupts import InterruptFlag
from dmgcore.joypad import (
    JOYPAD_ADDRESS,
    MODE_ACTION,
    MODE_DIRECT,
    STATE_DEPRESS,
    STATE_PRESS,
    Button,
    Joypad,
)

ACTION = [Button.A, Button.B, Button.SELECT, Button.START]
DIRECTION = [Button.RIGHT, Button.LEFT, Button.UP, Button.DOWN]


def select_direct(pad):
    pad.write(JOYPAD_ADDRESS, 0x20)


def select_action(pad):
    pad.write(JOYPAD_ADDRESS, 0x10)


def test_nothing_pressed_reads_all_ones_in_low_nibble():
    pad = Joypad(InterruptFlag())
    assert pad.read(JOYPAD_ADDRESS) & 0x0F == 0x0F
    select_direct(pad)
    assert pad.read(JOYPAD_ADDRESS) & 0x0F == 0x0F


def test_mode_selection():
    pad = Joypad()
    assert pad.mode == MODE_ACTION
    select_direct(pad)
    assert pad.mode == MODE_DIRECT
    select_action(pad)
    assert pad.mode == MODE_ACTION
    select_direct(pad)
    pad.write(JOYPAD_ADDRESS, 0x30)
    assert pad.mode == MODE_ACTION


def test_upper_bits_always_set():
    pad = Joypad()
    assert pad.read() & 0xC0 == 0xC0
    select_direct(pad)
    assert pad.read() & 0xC0 == 0xC0


@pytest.mark.parametrize("bit, button", list(enumerate(ACTION)))
def test_action_press_clears_bit(bit, button):
    pad = Joypad()
    select_action(pad)
    pad.set_button_state(button, True)
    assert pad.read() & 0x0F == 0x0F & ~(1 << bit)
    pad.set_button_state(button, False)
    assert pad.read() & 0x0F == 0x0F


@pytest.mark.parametrize("bit, button", list(enumerate(DIRECTION)))
def test_direction_press_clears_bit(bit, button):
    pad = Joypad()
    select_direct(pad)
    pad.set_button_state(button, True)
    assert pad.read() & 0x0F == 0x0F & ~(1 << bit)


def test_direction_press_not_visible_in_action_mode():
    pad = Joypad()
    pad.set_button_state(Button.UP, True)
    select_action(pad)
    assert pad.read() & 0x0F == 0x0F
    select_direct(pad)
    assert pad.read() & 0x0F != 0x0F


def test_select_line_bits_differ_between_modes():
    pad = Joypad()
    select_direct(pad)
    direct = pad.read()
    select_action(pad)
    action = pad.read()
    assert direct & 0x30 == 0x10
    assert action & 0x30 == 0x20


def test_press_twice_and_release_twice_are_idempotent():
    pad = Joypad()
    pad.set_button_state(Button.A, True)
    pad.set_button_state(Button.A, True)
    once = pad.button_states
    pad.set_button_state(Button.A, False)
    pad.set_button_state(Button.A, False)
    assert once == 0xFF & ~1
    assert pad.button_states == 0xFF


def test_set_state_raw_values():
    pad = Joypad(button_states=0)
    pad.set_state(Button.START, STATE_DEPRESS)
    assert pad.button_states == 1 << 3
    pad.set_state(Button.START, STATE_PRESS)
    assert pad.button_states == 0


def test_initial_states_from_argument():
    pad = Joypad(button_states=0)
    assert pad.read() & 0x0F == 0