"""Layered tile grid and direction-block tiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from mapedit.attributes import WHITE, Color

MAP_SIZE = 32
MAP_LAYERS = 9
TEXTURE_SIZE = 20

# Direction bits: B0 = Down, B1 = Up, B2 = Left, B3 = Right.
_BIT_DOWN = 0b0001
_BIT_UP = 0b0010
_BIT_LEFT = 0b0100
_BIT_RIGHT = 0b1000
# Visible flags are ordered Up, Left, Down, Right.
_VISIBLE_BITS = (_BIT_UP, _BIT_LEFT, _BIT_DOWN, _BIT_RIGHT)


def tile_index(x: int, y: int) -> int:
    """Flat index of a tile in a 32-wide map."""
    return x + y * MAP_SIZE


@dataclass(frozen=True)
class TileData:
    """A tile's texture id and tint; id 0 is an empty tile."""

    id: int = 0
    color: Color = WHITE


class TileMap:
    """A 32 by 32 grid of tiles with nine layers."""

    def __init__(self, pos: tuple[float, float] = (0.0, 0.0)) -> None:
        self.pos = pos
        self.can_render = False
        self._tiles = [[TileData()] * (MAP_SIZE * MAP_SIZE) for _ in range(MAP_LAYERS)]

    @staticmethod
    def _check(x: int, y: int, layer: int) -> None:
        if not (0 <= x < MAP_SIZE and 0 <= y < MAP_SIZE and 0 <= layer < MAP_LAYERS):
            raise IndexError(f"tile ({x}, {y}, {layer}) is outside the map")

    def get_tile(self, x: int, y: int, layer: int) -> TileData:
        self._check(x, y, layer)
        return self._tiles[layer][tile_index(x, y)]

    def set_tile(self, x: int, y: int, layer: int, tile: TileData) -> None:
        self._check(x, y, layer)
        self._tiles[layer][tile_index(x, y)] = tile

    def clear(self) -> None:
        """Reset every tile on every layer to empty."""
        for layer in self._tiles:
            layer[:] = [TileData()] * len(layer)


@dataclass
class DirBlockTile:
    """Which directions are blocked on a tile, as bits and as visible arrows."""

    dir_data: int = 0
    visible: list[bool] = field(default_factory=lambda: [False] * 4)

    def set_visible(self, dir_visible: Sequence[bool]) -> None:
        """Set the arrows (Up, Left, Down, Right) and derive the bits."""
        flags = [bool(v) for v in dir_visible]
        if len(flags) != 4:
            raise ValueError("expected four direction flags")
        self.dir_data = sum(bit for bit, on in zip(_VISIBLE_BITS, flags) if on)
        self.visible = flags

    def set_data(self, dir_data: int) -> None:
        """Set the bits and derive which arrows are visible."""
        self.dir_data = dir_data
        self.visible = [bool(dir_data & bit) for bit in _VISIBLE_BITS]