"""The editable map view: the centre map, its linked neighbours and overlays."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from mapedit.attributes import TRANSPARENT, WHITE, Color, MapAttribute
from mapedit.recording import RecordType, Records
from mapedit.tilemap import MAP_SIZE, TEXTURE_SIZE, DirBlockTile, TileData, TileMap, tile_index
from mapedit.zones import ZoneMap

Vec2 = tuple[float, float]

_LINK_COLOR = Color(0, 0, 0, 130)

# Screen position of each view: the centre map first, then the eight linked maps
# (top left, top, top right, left, right, bottom left, bottom, bottom right).
_VIEW_POSITIONS: tuple[Vec2, ...] = (
    (257.0, 77.0),
    (215.0, 719.0),
    (257.0, 719.0),
    (899.0, 719.0),
    (215.0, 77.0),
    (899.0, 77.0),
    (215.0, 35.0),
    (257.0, 35.0),
    (899.0, 35.0),
)

# Size in tiles of the selectable overlay on each linked map, same order as above.
_LINK_SIZES: tuple[tuple[int, int], ...] = (
    (2, 2),
    (32, 2),
    (2, 2),
    (2, 32),
    (2, 32),
    (2, 2),
    (32, 2),
    (2, 2),
)

# Neighbour offsets in the order they are visited: down, up, left, right.
_NEIGHBOURS = ((0.0, -1.0), (0.0, 1.0), (-1.0, 0.0), (1.0, 0.0))


@dataclass
class _Overlay:
    pos: Vec2
    size: Vec2
    color: Color

    def contains(self, point: Sequence[float]) -> bool:
        x, y = point
        return (
            self.pos[0] <= x <= self.pos[0] + self.size[0]
            and self.pos[1] <= y <= self.pos[1] + self.size[1]
        )


def _as_pos(pos: Sequence[float]) -> Vec2:
    x, y = pos
    return (float(x), float(y))


def _in_bounds(pos: Vec2) -> bool:
    return 0.0 <= pos[0] < MAP_SIZE and 0.0 <= pos[1] < MAP_SIZE


def _tile(pos: Sequence[float]) -> int:
    x, y = _as_pos(pos)
    if not _in_bounds((x, y)):
        raise IndexError(f"position ({x}, {y}) is outside the map")
    return tile_index(int(x), int(y))


def _coord(value: float) -> int:
    return max(int(value), 0)


class MapView:
    """The centre map being edited, with attributes, zones and undo history."""

    def __init__(self, selection_color: tuple[int, int, int] = (255, 255, 255)) -> None:
        self.maps: list[TileMap] = []
        for pos in _VIEW_POSITIONS:
            view = TileMap(pos)
            view.can_render = True
            self.maps.append(view)

        self.link_map_selection = [
            _Overlay(
                self.maps[index + 1].pos,
                (float(w * TEXTURE_SIZE), float(h * TEXTURE_SIZE)),
                _LINK_COLOR,
            )
            for index, (w, h) in enumerate(_LINK_SIZES)
        ]

        red, green, blue = selection_color
        self.selection_preview = _Overlay(
            self.maps[0].pos,
            (float(TEXTURE_SIZE), float(TEXTURE_SIZE)),
            Color(red, green, blue, 150),
        )
        self._preview_pos: Vec2 = (0.0, 0.0)
        self._preview_size: Vec2 = (1.0, 1.0)

        self.attributes: list[MapAttribute] = [MapAttribute()] * (MAP_SIZE * MAP_SIZE)
        self.zones = ZoneMap()
        self.map_dir_block = [DirBlockTile() for _ in range(MAP_SIZE * MAP_SIZE)]
        self.fixed_weather = 0
        self.music: Optional[str] = None
        self.record = Records()

    # Linked maps

    def hover_linked_selection(self, pos: Sequence[float]) -> Optional[int]:
        """Highlight the linked map under a screen position and return its index."""
        result = None
        for index, overlay in enumerate(self.link_map_selection):
            if overlay.contains(pos):
                overlay.color = TRANSPARENT
                result = index
            else:
                overlay.color = _LINK_COLOR
        return result

    # Attributes

    def _record_attribute(self, pos: Sequence[float], tile: int) -> None:
        last = self.attributes[tile]
        x, y = _as_pos(pos)
        self.record.push_undo(
            (x, y, 0.0), RecordType.ATTRIBUTE, last.number(), last.record_data()
        )

    def set_attribute(self, pos: Sequence[float], attribute: MapAttribute) -> None:
        """Set a tile's attribute, recording the previous one."""
        tile = _tile(pos)
        self._record_attribute(pos, tile)
        self.attributes[tile] = attribute

    def get_attribute(self, pos: Sequence[float]) -> MapAttribute:
        return self.attributes[_tile(pos)]

    def set_attribute_fill(self, pos: Sequence[float], attribute: MapAttribute) -> None:
        """Flood an attribute over the connected area sharing the start tile's attribute."""
        start = _as_pos(pos)
        start_tile = _tile(start)
        compare = self.attributes[start_tile]
        if compare == attribute:
            return
        pending = [start]
        while pending:
            current = pending.pop()
            # Every step records against the start tile, so only its old value is kept.
            self._record_attribute(start, start_tile)
            self.attributes[_tile(current)] = attribute
            for dx, dy in _NEIGHBOURS:
                neighbour = (current[0] + dx, current[1] + dy)
                if _in_bounds(neighbour) and self.attributes[_tile(neighbour)] == compare:
                    pending.append(neighbour)

    def set_dir_block(self, pos: Sequence[float], dir_visible: Sequence[bool]) -> None:
        """Set the blocked directions (Up, Left, Down, Right) of a tile."""
        self.map_dir_block[_tile(pos)].set_visible(dir_visible)

    # Tiles

    def _record_tile(self, x: int, y: int, layer: int) -> None:
        last = self.maps[0].get_tile(x, y, layer).id
        self.record.push_undo((float(x), float(y), float(layer)), RecordType.LAYER, last, [])

    def set_tile_group(
        self,
        pos: Sequence[float],
        layer: int,
        tileset: TileMap,
        start: Sequence[float],
        size: Sequence[float],
    ) -> None:
        """Copy a block of non-empty tiles from the tileset onto the map."""
        px, py = _coord(pos[0]), _coord(pos[1])
        sx, sy = _coord(start[0]), _coord(start[1])
        for x in range(_coord(size[0])):
            for y in range(_coord(size[1])):
                tile = tileset.get_tile(sx + x, sy + y, 0)
                if tile.id > 0 and px + x < MAP_SIZE and py + y < MAP_SIZE:
                    self._record_tile(px + x, py + y, layer)
                    self.maps[0].set_tile(px + x, py + y, layer, tile)

    def delete_tile_group(self, pos: Sequence[float], layer: int, size: Sequence[float]) -> None:
        """Empty a block of tiles on one layer."""
        px, py = _coord(pos[0]), _coord(pos[1])
        for x in range(_coord(size[0])):
            for y in range(_coord(size[1])):
                tx, ty = px + x, py + y
                if tx < MAP_SIZE and ty < MAP_SIZE and self.maps[0].get_tile(tx, ty, layer).id > 0:
                    self._record_tile(tx, ty, layer)
                    self.maps[0].set_tile(tx, ty, layer, TileData())

    def get_tile_data(self, pos: Sequence[float]) -> TileData:
        """The tile on the bottom layer at a map position."""
        return self.maps[0].get_tile(int(pos[0]), int(pos[1]), 0)

    def set_tile_fill(
        self,
        pos: Sequence[float],
        layer: int,
        tileset: TileMap,
        tileset_pos: Sequence[float],
    ) -> None:
        """Flood a tileset tile over the connected area sharing the start tile's id."""
        tile = tileset.get_tile(int(tileset_pos[0]), int(tileset_pos[1]), 0)
        if tile.id == 0:
            return
        start = _as_pos(pos)
        _tile(start)
        compare = self.maps[0].get_tile(int(start[0]), int(start[1]), layer).id
        if compare == tile.id:
            return
        pending = [start]
        while pending:
            current = pending.pop()
            cx, cy = int(current[0]), int(current[1])
            self._record_tile(cx, cy, layer)
            self.maps[0].set_tile(cx, cy, layer, tile)
            for dx, dy in _NEIGHBOURS:
                neighbour = (current[0] + dx, current[1] + dy)
                if (
                    _in_bounds(neighbour)
                    and self.maps[0].get_tile(int(neighbour[0]), int(neighbour[1]), layer).id
                    == compare
                ):
                    pending.append(neighbour)

    # Zones

    def update_map_zone(self, zone_index: int) -> list[Color]:
        """Show only the given zone's tiles and return every tile's colour."""
        return self.zones.colors(zone_index)

    def add_map_zone(self, zone_index: int, pos: Sequence[float]) -> None:
        self.zones.add(zone_index, pos, self.record)

    def set_zone_fill(self, pos: Sequence[float], zone_index: int) -> None:
        self.zones.fill(zone_index, pos, self.record)

    def delete_map_zone(self, zone_index: int, pos: Sequence[float]) -> None:
        self.zones.delete(zone_index, pos, self.record)

    # Selection preview

    def hover_selection_preview(self, pos: Sequence[float]) -> None:
        """Move the selection preview to a map position inside the map."""
        pos = _as_pos(pos)
        if self._preview_pos != pos and pos[0] < MAP_SIZE and pos[1] < MAP_SIZE:
            self._preview_pos = pos
            left, bottom = self.maps[0].pos
            self.selection_preview.pos = (
                left + pos[0] * TEXTURE_SIZE,
                bottom + pos[1] * TEXTURE_SIZE,
            )
            self._adjust_selection_preview()

    def change_selection_preview_size(self, size: Sequence[float]) -> None:
        self._preview_size = _as_pos(size)
        self._adjust_selection_preview()

    def _adjust_selection_preview(self) -> None:
        # Keep the preview from reaching past the map's edge.
        px, py = self._preview_pos
        width = min(px + self._preview_size[0], float(MAP_SIZE)) - px
        height = min(py + self._preview_size[1], float(MAP_SIZE)) - py
        self.selection_preview.size = (width * TEXTURE_SIZE, height * TEXTURE_SIZE)

    def clear_map(self, index: int) -> None:
        """Empty every tile of one of the nine views."""
        self.maps[index].clear()

    # Undo and redo

    def apply_change(self, is_undo: bool) -> None:
        """Undo or redo the most recent record, recording the opposite change."""
        stack = self.record.undo if is_undo else self.record.redo
        if not stack:
            return
        change = self.record.pop_undo() if is_undo else self.record.pop_redo()
        if change is None:
            return
        if is_undo:
            self.record.begin_redo()
            push = self.record.push_redo
        else:
            self.record.begin_undo()
            push = self.record.push_undo

        for data in change.changes.values():
            x, y, z = data.pos
            if data.record_type is RecordType.LAYER:
                tx, ty, layer = int(x), int(y), int(z)
                last = self.maps[0].get_tile(tx, ty, layer).id
                push(data.pos, RecordType.LAYER, last, [])
                self.maps[0].set_tile(tx, ty, layer, TileData(data.value & 0xFFFFFFFF, WHITE))
            elif data.record_type is RecordType.ATTRIBUTE:
                tile = _tile((x, y))
                last = self.attributes[tile]
                push(data.pos, RecordType.ATTRIBUTE, last.number(), last.record_data())
                self.attributes[tile] = MapAttribute.from_record(
                    data.value & 0xFFFFFFFF, data.data
                )
            else:
                zone_index = int(z)
                exists = 1 if self.zones.contains(zone_index, (x, y)) else 0
                push(data.pos, RecordType.ZONE, exists, [])
                if data.value > 0:
                    self.zones.add(zone_index, (x, y))
                else:
                    self.zones.delete(zone_index, (x, y))
        self.record.stop_record()


def in_map(screen_pos: Sequence[float], mapview: MapView) -> bool:
    """Whether a screen position lies over the centre map."""
    left, bottom = mapview.maps[0].pos
    extent = MAP_SIZE * TEXTURE_SIZE
    return (
        left <= screen_pos[0] <= left + extent
        and bottom <= screen_pos[1] <= bottom + extent
    )


def get_map_pos(screen_pos: Sequence[float], mapview: MapView) -> Vec2:
    """Tile coordinates of the centre map under a screen position."""
    left, bottom = mapview.maps[0].pos
    return (
        float((screen_pos[0] - left) // TEXTURE_SIZE),
        float((screen_pos[1] - bottom) // TEXTURE_SIZE),
    )