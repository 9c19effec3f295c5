"""Pixel processing unit: mode timing, LY/STAT updates and line rendering."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence, Sequence

from dmgcore.interrupts import Interrupt, Interrupts
from dmgcore.oam import ObjectAttributeMemory, Sprite
from dmgcore.ppu_registers import PpuState
from dmgcore.vram import TileRegion, VideoRam

SCREEN_WIDTH = 160
SCREEN_HEIGHT = 144
MAX_SPRITES_PER_LINE = 10
SPRITE_COUNT = 40

_HBLANK_CYCLES = 204
_LINE_CYCLES = 456
_OAM_SCAN_CYCLES = 80
_TRANSFER_CYCLES = 172
_LAST_LINE = 154


def palette_map(palette: int) -> list[int]:
    """Split a palette byte into the shades for colour indices 0-3."""
    return [(palette >> (2 * index)) & 3 for index in range(4)]


def _fill_transparent(colors: MutableSequence[int], fallback: Sequence[int]) -> None:
    """Replace every colour 0 in ``colors`` with the matching fallback colour."""
    for x, color in enumerate(colors):
        if color == 0:
            colors[x] = fallback[x]


def render_sprite(
    sprite: Sprite,
    line: int,
    height16: bool,
    palette: Sequence[int],
    line_colors: MutableSequence[int],
    tiles: TileRegion,
) -> int:
    """Draw the part of ``sprite`` on ``line`` into free pixels of ``line_colors``.

    Returns 1 when the sprite touches the line, else 0.
    """
    part = sprite.check(line, height16)
    if part is None:
        return 0
    tile = tiles.tile(part.tile_number, True)
    if sprite.flip_x and sprite.flip_y:
        tile = tile.flip_xy()
    elif sprite.flip_x:
        tile = tile.flip_x()
    elif sprite.flip_y:
        tile = tile.flip_y()
    row_colors = tile.row_colors(part.row)
    for j in range(part.size):
        x = part.start_x + j
        if line_colors[x] != 0:
            continue
        line_colors[x] = palette[row_colors[part.start_col + j]]
    return 1


class Ppu:
    """Steps through OAM scan, transfer, h-blank and v-blank, filling line buffers.

    ``draw`` is called once per frame, when v-blank begins.
    """

    def __init__(
        self,
        oam: ObjectAttributeMemory,
        vram: VideoRam,
        interrupts: Interrupts,
        line_buffers: Sequence[MutableSequence[int]],
        draw: Callable[[], None],
    ) -> None:
        self.oam = oam
        self.vram = vram
        self.interrupts = interrupts
        self.line_buffers = line_buffers
        self.draw = draw
        self.state = PpuState()
        self.cycle_count = 0
        self.mode = 2
        self.ly = 0

    def read(self, address: int) -> int:
        return self.state.read(address)

    def write(self, address: int, value: int) -> None:
        self.state.write(address, value)

    def update(self, cycles: int) -> None:
        """Advance by ``cycles`` and take at most one mode step."""
        self.cycle_count = (self.cycle_count + cycles) & 0xFFFF
        step = {
            0: self._hblank,
            1: self._vblank,
            2: self._oam_scan,
            3: self._transfer,
        }.get(self.mode)
        if step is not None:
            step()

    def _set_ly(self, ly: int) -> None:
        state = self.state
        state.ly = ly
        state.stat.ly_equal_lyc = state.lyc == ly
        if (
            self.interrupts.enable.enabled(Interrupt.STAT)
            and state.stat.ly_equal_lyc_interrupt_enabled
        ):
            self.interrupts.flag.set(Interrupt.STAT, True)

    def _enter_mode(self, mode: int) -> None:
        self.mode = mode
        self.state.stat.mode = mode
        if mode == 0:
            if self.interrupts.enable.enabled(Interrupt.VBLANK):
                self.interrupts.flag.set(Interrupt.VBLANK, True)
            return
        if (
            mode < 3
            and self.interrupts.enable.enabled(Interrupt.STAT)
            and self.state.stat.mode_interrupt_enabled(mode)
        ):
            self.interrupts.flag.set(Interrupt.STAT, True)

    def _hblank(self) -> None:
        if self.cycle_count < _HBLANK_CYCLES:
            return
        self.cycle_count = 0
        self.ly += 1
        self._set_ly(self.ly)
        if self.ly < SCREEN_HEIGHT:
            self._enter_mode(2)
            return
        self.draw()
        self._enter_mode(1)

    def _vblank(self) -> None:
        if self.cycle_count < _LINE_CYCLES:
            return
        self.cycle_count = 0
        self.ly += 1
        if self.ly < _LAST_LINE:
            self._set_ly(self.ly)
            return
        self.ly = 0
        self._set_ly(0)
        self._enter_mode(2)

    def _oam_scan(self) -> None:
        if self.cycle_count < _OAM_SCAN_CYCLES:
            return
        self.cycle_count = 0
        self._enter_mode(3)

    def _transfer(self) -> None:
        if self.cycle_count < _TRANSFER_CYCLES:
            return
        self.cycle_count = 0
        self._render_line(self.line_buffers[self.ly])
        self._enter_mode(0)

    def _render_line(self, line_buffer: MutableSequence[int]) -> None:
        lcdc = self.state.lcdc
        colors = [0] * SCREEN_WIDTH
        if lcdc.window_enabled:
            colors = self._window_line()
            if lcdc.background_enabled:
                _fill_transparent(colors, self._background_line())
        elif lcdc.background_enabled:
            colors = self._background_line()
        if lcdc.sprites_enabled:
            sprite_colors = self._sprite_line()
            _fill_transparent(sprite_colors, colors)
            colors = sprite_colors
        line_buffer[:SCREEN_WIDTH] = colors

    def _window_line(self) -> list[int]:
        state = self.state
        line_colors = [0] * SCREEN_WIDTH
        if state.wy > state.ly:
            return line_colors
        colors = self.vram.line_colors(
            state.lcdc.window_tile_map,
            (state.ly - state.wy) & 0xFF,
            0,
            0,
            state.lcdc.unsigned_tile_data,
        )
        start = (state.wx - 7) & 0xFF
        shades = palette_map(state.bgp)
        for x in range(start, SCREEN_WIDTH):
            line_colors[x] = shades[colors[x - start]]
        return line_colors

    def _background_line(self) -> list[int]:
        state = self.state
        colors = self.vram.line_colors(
            state.lcdc.background_tile_map,
            state.ly,
            state.scx,
            state.scy,
            state.lcdc.unsigned_tile_data,
        )
        shades = palette_map(state.bgp)
        return [shades[color] for color in colors]

    def _sprite_line(self) -> list[int]:
        state = self.state
        line_colors = [0] * SCREEN_WIDTH
        palettes = (palette_map(state.obp0), palette_map(state.obp1))
        tiles = self.vram.tiles
        drawn = 0
        for index in range(SPRITE_COUNT):
            if drawn >= MAX_SPRITES_PER_LINE:
                break
            sprite = self.oam.sprite(index)
            if not sprite.above:
                continue
            drawn += render_sprite(
                sprite,
                state.ly,
                state.lcdc.tall_sprites,
                palettes[1 if sprite.palette else 0],
                line_colors,
                tiles,
            )
        return line_colors