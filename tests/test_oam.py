import pytest

from dmgcore.oam import (
    ObjectAttributeMemory,
    Sprite,
    SpriteSlice,
    create_sprite,
    sprite_flags,
)


def test_sprite_flags():
    sprite = create_sprite(0, 0, 0, (1 << 7) | (1 << 6))
    assert sprite.above is True
    assert sprite.flip_y is True
    assert sprite.flip_x is False
    assert sprite.palette is False


def test_sprite_flags_builder():
    assert sprite_flags(True, False, False, False) == 0x80
    assert sprite_flags(False, True, True, True) == 0x70
    assert sprite_flags(False, False, False, False) == 0


@pytest.mark.parametrize(
    "x, y, line, height16, expected",
    [
        (17, 23, 13, False, SpriteSlice(0, 6, 0, 9, 8)),
        (5, 9, 0, False, SpriteSlice(0, 7, 3, 0, 5)),
        (162, 10, 0, False, SpriteSlice(0, 6, 0, 154, 6)),
        (165, 150, 143, True, SpriteSlice(1, 1, 0, 157, 3)),
    ],
)
def test_sprite_check_visible(x, y, line, height16, expected):
    assert create_sprite(x, y, 0, 0).check(line, height16) == expected


@pytest.mark.parametrize(
    "x, y, line, height16",
    [
        (0, 30, 20, False),
        (168, 30, 20, False),
        (20, 16, 8, False),
        (20, 30, 13, False),
        (20, 16, 16, True),
    ],
)
def test_sprite_check_invisible(x, y, line, height16):
    assert create_sprite(x, y, 0, 0).check(line, height16) is None


def test_oam_bytes_form_sprite():
    oam = ObjectAttributeMemory()
    x, y, tile_number, flags = 8, 17, 1, 1 << 7
    index = 18
    oam.write(index << 2, y)
    oam.write((index << 2) | 1, x)
    oam.write((index << 2) | 2, tile_number)
    oam.write((index << 2) | 3, flags)
    sprite = oam.sprite(index)
    assert sprite.screen_x == x - 8
    assert sprite.screen_y == y - 16
    assert sprite.tile_number == tile_number
    assert sprite.flip_x is False
    assert sprite.flip_y is False
    assert sprite.above is True
    assert sprite.palette is False


def test_set_sprite_copies_data():
    oam = ObjectAttributeMemory()
    sprite = create_sprite(10, 20, 1, 0)
    oam.set_sprite(1, sprite)
    sprite.data[0] = 99
    assert oam.read(4) == 20
    assert oam.read(5) == 10
    assert oam.read(6) == 1
    assert oam.read(7) == 0


def test_oam_read16_write16():
    oam = ObjectAttributeMemory()
    oam.write16(8, 0xABCD)
    assert oam.read16(8) == 0xABCD
    assert oam.sprite(2) == Sprite(0xCD, 0xAB, 0, 0)


def test_sprite_str():
    assert str(create_sprite(1, 2, 3, 4)) == "[y: 2, x: 1, tile_num: 3, flag: 4]"