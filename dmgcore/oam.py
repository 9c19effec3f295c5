"""Object attribute memory: 40 sprites of 4 bytes each (0xFE00-0xFE9F)."""

from __future__ import annotations

from dataclasses import dataclass

SPRITE_COUNT = 40
SPRITE_SIZE = 4

_ABOVE = 1 << 7
_FLIP_Y = 1 << 6
_FLIP_X = 1 << 5
_PALETTE = 1 << 4


@dataclass(frozen=True)
class SpriteSlice:
    """The part of a sprite that falls on one screen line."""

    tile_number: int
    row: int
    start_col: int
    start_x: int
    size: int


class Sprite:
    """One OAM entry: Y, X, tile number and attribute flags."""

    __slots__ = ("data",)

    def __init__(
        self, y: int = 0, x: int = 0, tile_number: int = 0, flags: int = 0
    ) -> None:
        self.data = bytearray(
            (y & 0xFF, x & 0xFF, tile_number & 0xFF, flags & 0xFF)
        )

    @property
    def screen_y(self) -> int:
        return self.data[0] - 16

    @property
    def screen_x(self) -> int:
        return self.data[1] - 8

    @property
    def tile_number(self) -> int:
        return self.data[2]

    @property
    def flags(self) -> int:
        return self.data[3]

    @property
    def above(self) -> bool:
        return bool(self.data[3] & _ABOVE)

    @property
    def flip_y(self) -> bool:
        return bool(self.data[3] & _FLIP_Y)

    @property
    def flip_x(self) -> bool:
        return bool(self.data[3] & _FLIP_X)

    @property
    def palette(self) -> bool:
        """True when the sprite uses OBP1 rather than OBP0."""
        return bool(self.data[3] & _PALETTE)

    def check(self, line: int, height16: bool) -> SpriteSlice | None:
        """Describe what the sprite shows on ``line``, or None if nothing."""
        py, px = self.screen_y, self.screen_x
        if px > 159 or px < -7:
            return None
        height = 16 if height16 else 8
        if line < py or line > py + height - 1:
            return None
        tile_number = self.data[2]
        row = line - py
        if row > 7:
            row &= 7
            tile_number = (tile_number + 1) & 0xFF
        if px >= 0:
            start_x, start_col = px, 0
        else:
            start_x, start_col = 0, -px
        end_x = min(px + 7, 159)
        return SpriteSlice(tile_number, row, start_col, start_x, end_x - start_x + 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sprite):
            return NotImplemented
        return self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        y, x, tile, flags = self.data
        return f"[y: {y}, x: {x}, tile_num: {tile}, flag: {flags}]"


class ObjectAttributeMemory:
    """The 40 sprites addressed byte by byte from offset 0."""

    def __init__(self) -> None:
        self.sprites = [Sprite() for _ in range(SPRITE_COUNT)]

    def sprite(self, index: int) -> Sprite:
        return self.sprites[index]

    def set_sprite(self, index: int, sprite: Sprite) -> None:
        self.sprites[index].data[:] = sprite.data

    def read(self, offset: int) -> int:
        return self.sprites[offset >> 2].data[offset & 3]

    def write(self, offset: int, value: int) -> None:
        self.sprites[(offset & 0xFF) >> 2].data[offset & 3] = value & 0xFF

    def read16(self, offset: int) -> int:
        return (self.read(offset + 1) << 8) | self.read(offset)

    def write16(self, offset: int, value: int) -> None:
        self.write(offset, value & 0xFF)
        self.write(offset + 1, (value >> 8) & 0xFF)


def sprite_flags(above: bool, flip_y: bool, flip_x: bool, palette: bool) -> int:
    """Build a sprite attribute byte."""
    flags = 0
    if above:
        flags |= _ABOVE
    if flip_y:
        flags |= _FLIP_Y
    if flip_x:
        flags |= _FLIP_X
    if palette:
        flags |= _PALETTE
    return flags


def create_sprite(x: int, y: int, tile_number: int, flags: int) -> Sprite:
    return Sprite(y, x, tile_number, flags)