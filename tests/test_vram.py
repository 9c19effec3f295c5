import random

import pytest

from dmgcore.vram import (
    TILE_DATA_REGION_SIZE,
    Tile,
    TileRegion,
    VideoRam,
    random_tile,
)


def _random_grid(rng):
    return [[rng.randrange(4) for _ in range(8)] for _ in range(8)]


def _grid_to_tile(grid):
    tile = Tile()
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            tile.set_color(r, c, value)
    return tile


@pytest.fixture
def grid():
    return _random_grid(random.Random(1234))


def test_set_color_reads_back(grid):
    tile = _grid_to_tile(grid)
    assert [tile.row_colors(r) for r in range(8)] == grid


def test_flip_x(grid):
    expected = _grid_to_tile([list(reversed(row)) for row in grid])
    assert _grid_to_tile(grid).flip_x() == expected


def test_flip_y(grid):
    expected = _grid_to_tile(list(reversed(grid)))
    assert _grid_to_tile(grid).flip_y() == expected


def test_flip_xy(grid):
    expected = _grid_to_tile([list(reversed(row)) for row in reversed(grid)])
    assert _grid_to_tile(grid).flip_xy() == expected


def test_row_colors_from_bit_planes():
    tile = Tile()
    tile.write(0, 0b00000101)
    tile.write(1, 0b00000110)
    assert tile.row_colors(0) == [1, 2, 3, 0, 0, 0, 0, 0]
    assert tile.row_colors_range(0, 1, 3) == [2, 3, 0]


def test_set_color_ignores_invalid_value():
    tile = Tile()
    tile.set_color(0, 0, 3)
    tile.set_color(0, 0, 7)
    assert tile.row_colors(0)[0] == 3


def test_tile_read16_write16_round_trip():
    tile = Tile()
    tile.write16(4, 0xBEEF)
    assert tile.read16(4) == 0xBEEF
    assert tile.read(4) == 0xEF
    assert tile.read(5) == 0xBE


def test_set_raw_copies_prefix():
    tile = Tile(range(16))
    tile.set_raw([9, 9])
    assert tile.raw == bytes([9, 9]) + bytes(range(2, 16))


def test_random_tile_is_deterministic_with_seed():
    tile = random_tile(random.Random(5))
    assert len(tile.raw) == 16
    assert [tile.read(i) for i in range(16)] == list(tile.raw)
    assert random_tile(random.Random(5)).raw == tile.raw
    rng = random.Random(5)
    distinct = {random_tile(rng).raw for _ in range(10)}
    assert len(distinct) > 1


def test_tile_region_signed_and_unsigned_indexing():
    region = TileRegion()
    tile = Tile(range(16))
    region.set_tile(0, False, tile)
    assert region.tiles[256] == tile
    region.set_tile(250, False, tile)
    assert region.tiles[250] == tile
    assert region.tile(250, True) is region.tiles[250]
    assert region.read(256 * 16 + 3) == 3


def test_vram_tile_data_write_is_visible_as_signed_tile():
    vram = VideoRam()
    tile = random_tile(random.Random(7))
    tile_index = 383
    for i in range(16):
        vram.write((tile_index << 4) + i, tile.data[i])
    assert vram.tiles.tile(tile_index - 256, False) == tile


def test_vram_tile_map_write():
    vram = VideoRam()
    cell = (2 << 5) | 14
    vram.write((6 << 10) + (1 << 10) + cell, 2)
    assert vram.tile_maps[1][cell] == 2
    assert vram.tile_number(1, 2, 14) == 2


def test_vram_set_tile_number_reads_through_memory():
    vram = VideoRam()
    vram.set_tile_number(0, 1, 2, 250)
    assert vram.read(TILE_DATA_REGION_SIZE + (1 << 5) + 2) == 250


def test_vram_read16_write16_round_trip():
    vram = VideoRam()
    vram.write16(0x10, 0x1234)
    assert vram.read16(0x10) == 0x1234
    assert vram.read(0x10) == 0x34


def _background(vram, map_selector, unsigned):
    colors = [[0] * 256 for _ in range(256)]
    for i in range(1024):
        top, left = (i >> 5) << 3, (i & 31) << 3
        tile = vram.tiles.tile(vram.tile_maps[map_selector][i], unsigned)
        for r in range(8):
            colors[top + r][left : left + 8] = tile.row_colors_range(r, 0, 8)
    return colors


@pytest.mark.parametrize(
    "line, scx, scy, unsigned",
    [(143, 159, 12, False), (0, 0, 0, True), (77, 8, 250, False), (10, 250, 3, True)],
)
def test_line_colors_match_background(line, scx, scy, unsigned):
    rng = random.Random(42)
    vram = VideoRam()
    for tile in vram.tiles.tiles:
        tile.set_raw(rng.getrandbits(8) for _ in range(16))
    for tile_map in vram.tile_maps:
        tile_map[:] = bytes(rng.getrandbits(8) for _ in range(1024))
    background = _background(vram, 0, unsigned)
    line_colors = vram.line_colors(0, line, scx, scy, unsigned)
    row = background[(line + scy) & 255]
    assert line_colors == [row[(i + scx) & 255] for i in range(160)]