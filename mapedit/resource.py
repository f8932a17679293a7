"""Tilesheets and other editor resources found on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import product
from typing import Iterable, Union

from mapedit.tilemap import TEXTURE_SIZE

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class SheetTile:
    """One tile of a sheet: its texture id and pixel position in the sheet."""

    tex_id: int
    x: int
    y: int


@dataclass
class Tilesheet:
    """A named sheet of tiles."""

    name: str
    tiles: list[SheetTile] = field(default_factory=list)

    @classmethod
    def from_grid(cls, name: str, columns: int, rows: int, start_id: int = 1) -> "Tilesheet":
        """A sheet of columns by rows tiles with consecutive ids, row by row."""
        if columns < 0 or rows < 0:
            raise ValueError("a tilesheet cannot have a negative size")
        if start_id < 0:
            raise ValueError("texture ids cannot be negative")
        tiles = [
            SheetTile(start_id + offset, col * TEXTURE_SIZE, row * TEXTURE_SIZE)
            for offset, (row, col) in enumerate(product(range(rows), range(columns)))
        ]
        return cls(name, tiles)


def list_audio(directory: PathLike = "./audio") -> list[str]:
    """Names of the entries in the audio directory, empty if it cannot be read."""
    try:
        with os.scandir(directory) as entries:
            return sorted(entry.name for entry in entries)
    except OSError:
        return []


def tile_locations(tilesheets: Iterable[Tilesheet]) -> dict[int, tuple[int, int, int]]:
    """Map each non-empty texture id to its (x, y, sheet index)."""
    locations: dict[int, tuple[int, int, int]] = {}
    for sheet_index, sheet in enumerate(tilesheets):
        for tile in sheet.tiles:
            if tile.tex_id > 0:
                locations[tile.tex_id] = (tile.x, tile.y, sheet_index)
    return locations