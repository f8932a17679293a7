"""The tileset panel from which tiles are picked."""

from __future__ import annotations

from typing import Sequence

from mapedit.attributes import WHITE, Color
from mapedit.resource import Tilesheet
from mapedit.tilemap import TEXTURE_SIZE, TileData, TileMap

MAX_TILE_X = 10
MAX_TILE_Y = 20

Vec2 = tuple[float, float]

_TILESET_POS = (11.0, 369.0)


class Tileset:
    """A tilesheet laid out as a grid together with the current selection."""

    def __init__(
        self,
        tilesheets: Sequence[Tilesheet],
        selection_color: tuple[int, int, int] = (255, 255, 255),
    ) -> None:
        self.map = TileMap(_TILESET_POS)
        self.map.can_render = True
        self.selected_tile = 0
        self._place(tilesheets[0])
        red, green, blue = selection_color
        self.selection_color = Color(red, green, blue, 150)
        self.selection_pos: Vec2 = (
            self.map.pos[0],
            self.map.pos[1] + (MAX_TILE_Y - 1) * TEXTURE_SIZE,
        )
        self.selection_size: Vec2 = (float(TEXTURE_SIZE), float(TEXTURE_SIZE))
        self.select_start: Vec2 = (0.0, float(MAX_TILE_Y - 1))
        self.select_size: Vec2 = (1.0, 1.0)

    def _place(self, sheet: Tilesheet) -> None:
        for tile in sheet.tiles:
            if tile.tex_id > 0:
                x = tile.x // TEXTURE_SIZE
                y = MAX_TILE_Y - tile.y // TEXTURE_SIZE - 1
                self.map.set_tile(x, y, 0, TileData(tile.tex_id, WHITE))

    def set_selection(self, start: Sequence[float], end: Sequence[float]) -> Vec2:
        """Select the rectangle between two tile positions and return its size."""
        low = (float(min(start[0], end[0])), float(min(start[1], end[1])))
        high = (float(max(start[0], end[0])), float(max(start[1], end[1])))
        self.select_start = low
        self.select_size = (high[0] - low[0] + 1.0, high[1] - low[1] + 1.0)
        self.selection_pos = (
            self.map.pos[0] + low[0] * TEXTURE_SIZE,
            self.map.pos[1] + low[1] * TEXTURE_SIZE,
        )
        self.selection_size = (
            self.select_size[0] * TEXTURE_SIZE,
            self.select_size[1] * TEXTURE_SIZE,
        )
        return self.select_size

    def change_tileset(self, tilesheets: Sequence[Tilesheet], index: int) -> None:
        """Show another tilesheet; showing the current one again does nothing."""
        if self.selected_tile == index:
            return
        sheet = tilesheets[index]
        self.selected_tile = index
        for x in range(MAX_TILE_X):
            for y in range(MAX_TILE_Y):
                self.map.set_tile(x, y, 0, TileData())
        self._place(sheet)


def in_tileset(screen_pos: Sequence[float], tileset: Tileset) -> bool:
    """Whether a screen position lies over the tileset grid."""
    left, bottom = tileset.map.pos
    return (
        left <= screen_pos[0] <= left + MAX_TILE_X * TEXTURE_SIZE
        and bottom <= screen_pos[1] <= bottom + MAX_TILE_Y * TEXTURE_SIZE
    )


def get_tileset_pos(screen_pos: Sequence[float], tileset: Tileset) -> Vec2:
    """Tile coordinates under a screen position."""
    left, bottom = tileset.map.pos
    return (
        float((screen_pos[0] - left) // TEXTURE_SIZE),
        float((screen_pos[1] - bottom) // TEXTURE_SIZE),
    )