# mapedit

This package is the editing model of a 2D tile map editor. It does not include a graphics layer. It covers the following:

- layered 32×32 tile maps with nine layers (`TileMap`, `TileData`)
- tile attributes: blocked, NPC-blocked, warps, signs, item spawns, storage and shops (`MapAttribute`)
- blocked directions per tile (`DirBlockTile`)
- five NPC spawn zones per map (`ZoneMap`, `MapZoneSetting`)
- a tileset panel and its rectangular selection (`Tileset`)
- undo/redo history (`Records`)
- map files in a little-endian binary format, plus a JSON form (`MapData`)
- the set of loaded maps, their unsaved changes and the edges of the eight neighbouring maps (`EditorData`)

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `mapedit.attributes` | `MapAttribute`, `AttributeKind`, `WarpData`, `ItemSpawnData`, `InsertValue`, `InsertKind`, `Color`, `attribute_name` |
| `mapedit.recording` | `Records`, `Record`, `ChangeData`, `RecordType` |
| `mapedit.tilemap` | `TileMap`, `TileData`, `DirBlockTile`, `tile_index` |
| `mapedit.mapdata` | `MapData`, `MapPosition`, `Weather`, `Direction`, `MapFileError`, `load_file`, `create_file`, `map_exists`, `map_key`, `direction_from_link` |
| `mapedit.resource` | `Tilesheet`, `SheetTile`, `list_audio`, `tile_locations` |
| `mapedit.zones` | `ZoneMap`, `MapZoneSetting`, `zone_color` |
| `mapedit.tileset` | `Tileset`, `in_tileset`, `get_tileset_pos` |
| `mapedit.mapview` | `MapView`, `in_map`, `get_map_pos` |
| `mapedit.editor` | `EditorData` |

## Example

```python
from mapedit.editor import EditorData
from mapedit.mapview import MapView
from mapedit.resource import Tilesheet
from mapedit.tileset import Tileset

editor = EditorData("maps")          # creates the directory and loads or creates map 0_0_0
view = MapView()
editor.load_map_data(view)
editor.load_link_maps(view)

tileset = Tileset([Tilesheet.from_grid("tile_0.png", 10, 20)])

view.record.begin_undo()
view.set_tile_fill((5, 5), 0, tileset.map, (0, 19))
view.record.stop_record()
editor.set_map_change(view)

view.apply_change(is_undo=True)      # revert the fill
view.apply_change(is_undo=False)     # apply it again

editor.save_map_data(view, None, save_json=False)
```

## Map files

Each map is stored as `<x>_<y>_<group>.bin` in a directory you choose. `EditorData` uses `./data/maps` by default and creates the directory if it is missing.

- `load_file(directory, x, y, group)` reads a map. If the file does not exist, it writes a blank map to disk first and returns that map.
- `create_file` never overwrites an existing file.
- `MapData.save_binary` creates the file or replaces it.
- `MapData.save_json` writes pretty-printed JSON to `<x>_<y>_<group>.json`. That file must already exist.

Errors when opening, writing or decoding a file raise `MapFileError`.

## Undo and redo

Changes are kept only while a record is open:

1. Call `view.record.begin_undo()` before an edit.
2. Make the edit.
3. Call `view.record.stop_record()` after it.

Inside one record, only the first change at each position is kept.

Each `MapView` operation stores what it overwrote:

- `set_tile_group`
- `delete_tile_group`
- `set_tile_fill`
- `set_attribute`
- zone additions, deletions and fills

The exception is `set_attribute_fill`. It records only the previous attribute of the tile the fill started from.

`MapView.apply_change(is_undo=True)` reverts the last undo record and records the opposite change as a redo record. `apply_change(is_undo=False)` does the reverse. `EditorData.set_map_change` marks the current map as changed and clears the redo history.

Once a stack holds 500 records, no further changes are stored on it.

## What this package does not do

The package has no window, rendering, input handling or command-line program. The screen geometry of the views and overlays is kept as plain coordinates and colours, for a front end to draw.

It does not load images or configuration files. A tilesheet is described with `Tilesheet` and `SheetTile`, for example through `Tilesheet.from_grid`. `list_audio` only lists the names of the files in a directory.