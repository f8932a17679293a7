"""The set of loaded maps and how they move between disk and the map view."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from mapedit.attributes import WHITE
from mapedit.mapdata import (
    ZONE_COUNT,
    Direction,
    MapData,
    PathLike,
    Weather,
    load_file,
    map_exists,
    map_key,
)
from mapedit.mapview import MapView
from mapedit.tilemap import MAP_LAYERS, MAP_SIZE, TileData, tile_index

_U64_MASK = (1 << 64) - 1

# For each linked view: the map offset, the size in tiles that is shown and the
# tile of the linked map where that area starts.
_LINKS: tuple[tuple[tuple[int, int], tuple[int, int], tuple[int, int]], ...] = (
    ((-1, 1), (2, 2), (30, 0)),  # top left
    ((0, 1), (32, 2), (0, 0)),  # top
    ((1, 1), (2, 2), (0, 0)),  # top right
    ((-1, 0), (2, 32), (30, 0)),  # left
    ((1, 0), (2, 32), (0, 0)),  # right
    ((-1, -1), (2, 2), (30, 30)),  # bottom left
    ((0, -1), (32, 2), (0, 30)),  # bottom
    ((1, -1), (2, 2), (0, 30)),  # bottom right
)


class EditorData:
    """Maps loaded by the editor, keyed by position, and which of them changed."""

    def __init__(self, directory: PathLike = "./data/maps") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.x = 0
        self.y = 0
        self.group = 0
        self.current_index = map_key(0, 0, 0)
        self.maps: dict[str, MapData] = {
            self.current_index: load_file(self.directory, 0, 0, 0)
        }
        self.did_map_change: dict[str, bool] = {self.current_index: False}

    def _is_current(self, mapdata: MapData) -> bool:
        pos = mapdata.position
        return (
            pos.x == self.x
            and pos.y == self.y
            and (pos.group & _U64_MASK) == self.group
        )

    def _switch_to_current(self) -> None:
        key = map_key(self.x, self.y, self.group)
        self.current_index = key
        if key not in self.maps:
            self.maps[key] = load_file(self.directory, self.x, self.y, self.group)
            self.did_map_change[key] = False

    def init_map(self, x: int, y: int, group: int) -> None:
        """Make the map at a position the centre map, loading it if needed."""
        self.x = x
        self.y = y
        self.group = group
        self._switch_to_current()

    def move_map(self, direction: Direction) -> Optional[str]:
        """Move the centre map one step.

        An unchanged map that is left is dropped; the key of a changed one is
        returned so its edits can be kept.
        """
        dx, dy = direction.offset
        self.x += dx
        self.y += dy

        kept_key = None
        changed = self.did_map_change.get(self.current_index)
        if changed is not None:
            if changed:
                kept_key = self.current_index
            else:
                self.did_map_change.pop(self.current_index, None)
                self.maps.pop(self.current_index, None)

        self._switch_to_current()
        return kept_key

    def save_map_data(
        self, mapview: MapView, old_map_key: Optional[str], save_json: bool
    ) -> None:
        """Copy the view into a loaded map.

        With no old key the current map is also written to disk and marked
        unchanged; with one, the copy is only kept in memory.
        """
        should_save = old_map_key is None
        key = self.current_index if old_map_key is None else old_map_key
        mapdata = self.maps.get(key)
        if mapdata is None:
            return

        centre = mapview.maps[0]
        for x in range(MAP_SIZE):
            for y in range(MAP_SIZE):
                tile = tile_index(x, y)
                for layer in range(MAP_LAYERS):
                    mapdata.tiles[layer][tile] = centre.get_tile(x, y, layer).id
                mapdata.attributes[tile] = mapview.attributes[tile]
                mapdata.dir_block[tile] = mapview.map_dir_block[tile].dir_data

        for zone in range(ZONE_COUNT):
            mapdata.zonespawns[zone] = [
                (int(px), int(py)) for px, py in mapview.zones.positions(zone)
            ]
            setting = mapview.zones.settings[zone]
            mapdata.zones[zone] = (setting.max_npc, tuple(setting.npc_id))
        mapdata.weather = Weather.NONE
        mapdata.music = mapview.music

        if should_save:
            if save_json:
                mapdata.save_json(self.directory)
            mapdata.save_binary(self.directory)
            if self.current_index in self.did_map_change:
                self.did_map_change[self.current_index] = False

    def save_all_maps(self, mapview: MapView, save_json: bool) -> None:
        """Write every changed map; all but the current one are then unloaded."""
        changed = [key for key, flag in self.did_map_change.items() if flag]
        for key in changed:
            should_remove = True
            mapdata = self.maps.get(key)
            if mapdata is not None:
                if self._is_current(mapdata):
                    should_remove = False
                    self.did_map_change[key] = False
                    self.save_map_data(mapview, None, save_json)
                else:
                    if save_json:
                        mapdata.save_json(self.directory)
                    mapdata.save_binary(self.directory)
            if should_remove:
                self.maps.pop(key, None)
                self.did_map_change.pop(key, None)

    def reset_all_maps(self) -> None:
        """Discard unsaved changes: reload the current map, unload the others."""
        changed = [key for key, flag in self.did_map_change.items() if flag]
        for key in changed:
            mapdata = self.maps.get(key)
            if mapdata is None:
                continue
            if self._is_current(mapdata):
                self.did_map_change[key] = False
                self.maps[key] = load_file(self.directory, self.x, self.y, self.group)
            else:
                self.maps.pop(key, None)
                self.did_map_change.pop(key, None)

    def load_map_data(self, mapview: MapView) -> None:
        """Fill the view's centre map from the current map data."""
        mapview.clear_map(0)
        mapdata = self.maps.get(self.current_index)
        if mapdata is None:
            return

        centre = mapview.maps[0]
        for x in range(MAP_SIZE):
            for y in range(MAP_SIZE):
                tile = tile_index(x, y)
                for layer in range(MAP_LAYERS):
                    tile_id = mapdata.tiles[layer][tile]
                    if tile_id > 0:
                        centre.set_tile(x, y, layer, TileData(tile_id, WHITE))
                mapview.attributes[tile] = mapdata.attributes[tile]
                mapview.map_dir_block[tile].set_data(mapdata.dir_block[tile])

        for zone in range(ZONE_COUNT):
            mapview.zones.set_positions(
                zone, [(float(px), float(py)) for px, py in mapdata.zonespawns[zone]]
            )
            max_npc, npcs = mapdata.zones[zone]
            setting = mapview.zones.settings[zone]
            setting.max_npc = max_npc
            setting.npc_id = list(npcs)
        mapview.fixed_weather = 0
        mapview.music = mapdata.music

    def load_link_maps(self, mapview: MapView) -> None:
        """Show the edges of the eight surrounding maps that exist on disk."""
        for link, ((dx, dy), (width, height), (start_x, start_y)) in enumerate(_LINKS):
            view = mapview.maps[link + 1]
            view.clear()
            x, y = self.x + dx, self.y + dy
            if not map_exists(self.directory, x, y, self.group):
                continue
            key = map_key(x, y, self.group)
            mapdata = self.maps.get(key)
            if mapdata is None:
                mapdata = load_file(self.directory, x, y, self.group)
            for tx in range(width):
                for ty in range(height):
                    tile = tile_index(start_x + tx, start_y + ty)
                    for layer in range(MAP_LAYERS):
                        tile_id = mapdata.tiles[layer][tile]
                        if tile_id > 0:
                            view.set_tile(tx, ty, layer, TileData(tile_id, WHITE))

    def set_map_change(self, mapview: MapView) -> None:
        """Mark the current map as changed, which drops the redo history."""
        if self.current_index in self.did_map_change:
            self.did_map_change[self.current_index] = True
            mapview.record.clear_redo()

    def got_changes(self) -> bool:
        """Whether any loaded map has unsaved changes."""
        return any(self.did_map_change.values())

    def did_change(self, x: int, y: int, group: int) -> bool:
        """Whether the map at a position is loaded and has unsaved changes."""
        return self.did_map_change.get(map_key(x, y, group), False)