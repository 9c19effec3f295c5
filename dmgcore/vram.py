"""Video RAM: tile data (0x8000-0x97FF) and two background tile maps."""

from __future__ import annotations

import random
from collections.abc import Iterable

TILE_DATA_REGION_SIZE = 6 * 1024
TILE_MAP_REGION_SIZE = 2048
SINGLE_TILE_MAP_SIZE = 1024
TILE_SIZE = 16
TILE_COUNT = 384
SCREEN_WIDTH = 160

_REVERSED_BITS = bytes(int(f"{b:08b}"[::-1], 2) for b in range(256))


class Tile:
    """An 8x8 tile of 2-bit colours stored as 8 pairs of bit-plane bytes.

    Bit ``c`` of a row's two bytes holds the colour of column ``c``.
    """

    __slots__ = ("data",)

    def __init__(self, data: Iterable[int] | None = None) -> None:
        self.data = bytearray(TILE_SIZE)
        if data is not None:
            self.set_raw(data)

    def read(self, offset: int) -> int:
        return self.data[offset]

    def write(self, offset: int, value: int) -> None:
        self.data[offset] = value & 0xFF

    def read16(self, offset: int) -> int:
        return (self.data[offset + 1] << 8) | self.data[offset]

    def write16(self, offset: int, value: int) -> None:
        self.data[offset] = value & 0xFF
        self.data[offset + 1] = (value >> 8) & 0xFF

    @property
    def raw(self) -> bytes:
        return bytes(self.data)

    def set_raw(self, data: Iterable[int]) -> None:
        """Copy up to 16 bytes into the tile, leaving the rest untouched."""
        chunk = bytes(data)[:TILE_SIZE]
        self.data[: len(chunk)] = chunk

    def flip_x(self) -> Tile:
        return Tile(_REVERSED_BITS[b] for b in self.data)

    def flip_y(self) -> Tile:
        flipped = Tile()
        for row in range(8):
            source = 7 - row
            flipped.data[2 * row : 2 * row + 2] = self.data[2 * source : 2 * source + 2]
        return flipped

    def flip_xy(self) -> Tile:
        return self.flip_y().flip_x()

    def row_colors(self, row: int) -> list[int]:
        return self.row_colors_range(row, 0, 8)

    def row_colors_range(self, row: int, start_col: int, size: int) -> list[int]:
        """Colours of ``size`` columns of ``row`` starting at ``start_col``."""
        low = self.data[row << 1]
        high = self.data[(row << 1) | 1]
        return [
            (((high >> col) & 1) << 1) | ((low >> col) & 1)
            for col in range(start_col, start_col + size)
        ]

    def set_color(self, row: int, col: int, value: int) -> None:
        """Set one pixel; values outside 0-3 leave the tile unchanged."""
        if value not in range(4):
            return
        mask = 1 << col
        for plane, bit in ((row << 1, value & 1), ((row << 1) | 1, value >> 1)):
            if bit:
                self.data[plane] |= mask
            else:
                self.data[plane] &= ~mask & 0xFF

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(color) for color in self.row_colors(row)) for row in range(8)
        )

    def __repr__(self) -> str:
        return f"Tile({self.data.hex()})"


def random_tile(rng: random.Random | None = None) -> Tile:
    """A tile filled with random bytes."""
    source = rng if rng is not None else random
    return Tile(source.getrandbits(8) for _ in range(TILE_SIZE))


class TileRegion:
    """The 384 tiles of the tile data area."""

    def __init__(self) -> None:
        self.tiles = [Tile() for _ in range(TILE_COUNT)]

    def read(self, offset: int) -> int:
        return self.tiles[offset >> 4].data[offset & 15]

    def write(self, offset: int, value: int) -> None:
        self.tiles[offset >> 4].write(offset & 15, value)

    def read16(self, offset: int) -> int:
        return 0

    @staticmethod
    def _position(index: int, unsigned: bool) -> int:
        index &= 0xFF
        if unsigned or index >= 0x80:
            return index
        return index + 256

    def tile(self, index: int, unsigned: bool) -> Tile:
        """Look up a tile by number, addressed unsigned from 0x8000 or signed from 0x9000."""
        return self.tiles[self._position(index, unsigned)]

    def set_tile(self, index: int, unsigned: bool, tile: Tile) -> None:
        self.tiles[self._position(index, unsigned)].set_raw(tile.data)


class VideoRam:
    """Tile data followed by two 32x32 tile maps."""

    def __init__(self) -> None:
        self.tiles = TileRegion()
        self.tile_maps = (
            bytearray(SINGLE_TILE_MAP_SIZE),
            bytearray(SINGLE_TILE_MAP_SIZE),
        )

    def read(self, offset: int) -> int:
        if offset < TILE_DATA_REGION_SIZE:
            return self.tiles.read(offset)
        pos = offset - TILE_DATA_REGION_SIZE
        return self.tile_maps[pos >> 10][pos & 1023]

    def write(self, offset: int, value: int) -> None:
        if offset < TILE_DATA_REGION_SIZE:
            self.tiles.write(offset, value)
            return
        pos = offset - TILE_DATA_REGION_SIZE
        self.tile_maps[pos >> 10][pos & 1023] = value & 0xFF

    def read16(self, offset: int) -> int:
        return (self.read(offset + 1) << 8) | self.read(offset)

    def write16(self, offset: int, value: int) -> None:
        self.write(offset, value & 0xFF)
        self.write(offset + 1, (value >> 8) & 0xFF)

    def tile_number(self, map_selector: int, row: int, col: int) -> int:
        return self.tile_maps[map_selector][(row << 5) | col]

    def set_tile_number(
        self, map_selector: int, row: int, col: int, tile_number: int
    ) -> None:
        self.tile_maps[map_selector][(row << 5) | col] = tile_number & 0xFF

    def line_colors(
        self, map_selector: int, line: int, scx: int, scy: int, unsigned: bool
    ) -> list[int]:
        """The 160 colour indices of screen ``line`` of a scrolled tile map."""
        y = (scy + line) & 0xFF
        map_row = (y >> 3) << 5
        tile_row = y & 7
        tile_map = self.tile_maps[map_selector]
        end_x = scx + SCREEN_WIDTH - 1
        colors: list[int] = []

        def span(start_x: int, size: int) -> None:
            start_x &= 0xFF
            tile = self.tiles.tile(tile_map[map_row | (start_x >> 3)], unsigned)
            colors.extend(tile.row_colors_range(tile_row, start_x & 7, size))

        span(scx, 8 - (scx & 7))
        mark = end_x & ~7
        for x in range(scx + 8 - (scx & 7), mark, 8):
            span(x, 8)
        span(mark, end_x - mark + 1)
        return colors