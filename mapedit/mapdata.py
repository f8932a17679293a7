"""Map files: their contents and how they are stored on disk."""

from __future__ import annotations

import enum
import json
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from mapedit.attributes import AttributeKind, ItemSpawnData, MapAttribute, WarpData
from mapedit.tilemap import MAP_LAYERS, MAP_SIZE

TILE_COUNT = MAP_SIZE * MAP_SIZE
ZONE_COUNT = 5
ZONE_NPC_SLOTS = 5

PathLike = Union[str, "os.PathLike[str]"]
ZoneEntry = tuple[int, tuple[Optional[int], ...]]


class MapFileError(Exception):
    """A map file could not be read, written or decoded."""


class Direction(enum.Enum):
    """Directions a map can be moved in; the value is its (x, y) offset."""

    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)
    NORTH_EAST = (1, 1)
    NORTH_WEST = (-1, 1)
    SOUTH_EAST = (1, -1)
    SOUTH_WEST = (-1, -1)

    @property
    def offset(self) -> tuple[int, int]:
        return self.value


class Weather(enum.IntEnum):
    """Fixed weather of a map."""

    NONE = 0
    RAIN = 1
    SNOW = 2
    SUNNY = 3
    STORM = 4
    BLIZZARD = 5
    HEAT = 6
    HAIL = 7
    SAND_STORM = 8
    WINDY = 9

    @property
    def json_name(self) -> str:
        return _WEATHER_NAMES[self]


_WEATHER_NAMES = (
    "None",
    "Rain",
    "Snow",
    "Sunny",
    "Storm",
    "Blizzard",
    "Heat",
    "Hail",
    "SandStorm",
    "Windy",
)

_UNIT_ATTRIBUTE_NAMES = {
    AttributeKind.WALKABLE: "Walkable",
    AttributeKind.BLOCKED: "Blocked",
    AttributeKind.NPC_BLOCKED: "NpcBlocked",
    AttributeKind.STORAGE: "Storage",
    AttributeKind.COUNT: "Count",
}


def _to_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def map_key(x: int, y: int, group: int) -> str:
    """Key and file stem of the map at a position."""
    return f"{x}_{y}_{group}"


def _bin_path(directory: PathLike, x: int, y: int, group: int) -> Path:
    return Path(directory) / f"{map_key(x, y, group)}.bin"


@dataclass
class MapPosition:
    """Where a map sits in the world."""

    x: int
    y: int
    group: int


class _Writer:
    def __init__(self) -> None:
        self.buffer = bytearray()

    def pack(self, fmt: str, *values: int) -> None:
        try:
            self.buffer += struct.pack("<" + fmt, *values)
        except struct.error as exc:
            raise ValueError(f"value out of range: {exc}") from exc

    def length(self, count: int) -> None:
        self.pack("I", count)

    def string(self, text: str) -> None:
        raw = text.encode("utf-8")
        self.length(len(raw))
        self.buffer += raw


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise MapFileError("unexpected end of map data")
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def unpack(self, fmt: str) -> tuple:
        fmt = "<" + fmt
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def length(self) -> int:
        return self.unpack("I")[0]

    def string(self) -> str:
        raw = self.take(self.length())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MapFileError("invalid UTF-8 in map data") from exc

    def flag(self) -> bool:
        return self.unpack("B")[0] != 0


def _write_attribute(writer: _Writer, attribute: MapAttribute) -> None:
    kind = attribute.kind
    writer.pack("I", int(kind))
    if kind is AttributeKind.WARP:
        warp = attribute.data
        writer.pack("iiQII", warp.map_x, warp.map_y, warp.map_group, warp.tile_x, warp.tile_y)
    elif kind is AttributeKind.SIGN:
        writer.string(attribute.data)
    elif kind is AttributeKind.ITEM_SPAWN:
        item = attribute.data
        writer.pack("IHQ", item.index, item.amount, item.timer)
    elif kind is AttributeKind.SHOP:
        writer.pack("H", attribute.data)


def _read_attribute(reader: _Reader) -> MapAttribute:
    tag = reader.unpack("I")[0]
    try:
        kind = AttributeKind(tag)
    except ValueError as exc:
        raise MapFileError(f"invalid attribute tag {tag}") from exc
    if kind is AttributeKind.WARP:
        return MapAttribute(kind, WarpData(*reader.unpack("iiQII")))
    if kind is AttributeKind.SIGN:
        return MapAttribute(kind, reader.string())
    if kind is AttributeKind.ITEM_SPAWN:
        return MapAttribute(kind, ItemSpawnData(*reader.unpack("IHQ")))
    if kind is AttributeKind.SHOP:
        return MapAttribute(kind, reader.unpack("H")[0])
    return MapAttribute(kind)


def _attribute_json(attribute: MapAttribute):
    kind = attribute.kind
    if kind is AttributeKind.WARP:
        warp = attribute.data
        return {
            "Warp": {
                "map_x": warp.map_x,
                "map_y": warp.map_y,
                "map_group": warp.map_group,
                "tile_x": warp.tile_x,
                "tile_y": warp.tile_y,
            }
        }
    if kind is AttributeKind.SIGN:
        return {"Sign": attribute.data}
    if kind is AttributeKind.ITEM_SPAWN:
        item = attribute.data
        return {"ItemSpawn": {"index": item.index, "amount": item.amount, "timer": item.timer}}
    if kind is AttributeKind.SHOP:
        return {"Shop": attribute.data}
    return _UNIT_ATTRIBUTE_NAMES[kind]


@dataclass
class MapData:
    """Everything stored in one map file."""

    position: MapPosition
    tiles: list[list[int]]
    dir_block: list[int]
    attributes: list[MapAttribute]
    zonespawns: list[list[tuple[int, int]]]
    zones: list[ZoneEntry]
    music: Optional[str] = None
    weather: Weather = Weather.NONE

    @classmethod
    def blank(cls, x: int, y: int, group: int) -> "MapData":
        """An empty map at the given position."""
        return cls(
            position=MapPosition(x, y, _to_i32(group)),
            tiles=[[0] * TILE_COUNT for _ in range(MAP_LAYERS)],
            dir_block=[0] * TILE_COUNT,
            attributes=[MapAttribute()] * TILE_COUNT,
            zonespawns=[[] for _ in range(ZONE_COUNT)],
            zones=[(0, (None,) * ZONE_NPC_SLOTS) for _ in range(ZONE_COUNT)],
        )

    def _check_fixed(self) -> None:
        if len(self.zonespawns) != ZONE_COUNT or len(self.zones) != ZONE_COUNT:
            raise ValueError(f"a map has exactly {ZONE_COUNT} zones")
        if any(len(npcs) != ZONE_NPC_SLOTS for _, npcs in self.zones):
            raise ValueError(f"a zone has exactly {ZONE_NPC_SLOTS} npc slots")

    def _json_dict(self) -> dict:
        pos = self.position
        return {
            "position": {"x": pos.x, "y": pos.y, "group": pos.group},
            "tile": [{"id": list(layer)} for layer in self.tiles],
            "dir_block": list(self.dir_block),
            "attribute": [_attribute_json(a) for a in self.attributes],
            "zonespawns": [[list(spot) for spot in spawns] for spawns in self.zonespawns],
            "zones": [[max_npc, list(npcs)] for max_npc, npcs in self.zones],
            "music": self.music,
            "weather": self.weather.json_name,
        }

    def to_json(self) -> str:
        """The map as pretty-printed JSON."""
        self._check_fixed()
        return json.dumps(self._json_dict(), indent=2, ensure_ascii=False)

    def to_bytes(self) -> bytes:
        """The map in its little-endian binary file format."""
        self._check_fixed()
        writer = _Writer()
        pos = self.position
        writer.pack("iii", pos.x, pos.y, pos.group)
        writer.length(len(self.tiles))
        for layer in self.tiles:
            writer.length(len(layer))
            writer.pack(f"{len(layer)}I", *layer)
        writer.length(len(self.dir_block))
        writer.pack(f"{len(self.dir_block)}B", *self.dir_block)
        writer.length(len(self.attributes))
        for attribute in self.attributes:
            _write_attribute(writer, attribute)
        for spawns in self.zonespawns:
            writer.length(len(spawns))
            for spot_x, spot_y in spawns:
                writer.pack("HH", spot_x, spot_y)
        for max_npc, npcs in self.zones:
            writer.pack("Q", max_npc)
            for npc in npcs:
                if npc is None:
                    writer.pack("B", 0)
                else:
                    writer.pack("BQ", 1, npc)
        if self.music is None:
            writer.pack("B", 0)
        else:
            writer.pack("B", 1)
            writer.string(self.music)
        writer.pack("I", int(self.weather))
        return bytes(writer.buffer)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MapData":
        """Decode a map from its binary file format."""
        reader = _Reader(data)
        x, y, group = reader.unpack("iii")
        tiles = []
        for _ in range(reader.length()):
            count = reader.length()
            tiles.append(list(reader.unpack(f"{count}I")))
        dir_count = reader.length()
        dir_block = list(reader.unpack(f"{dir_count}B"))
        attributes = [_read_attribute(reader) for _ in range(reader.length())]
        zonespawns = []
        for _ in range(ZONE_COUNT):
            spots = []
            for _ in range(reader.length()):
                spots.append(reader.unpack("HH"))
            zonespawns.append(spots)
        zones = []
        for _ in range(ZONE_COUNT):
            max_npc = reader.unpack("Q")[0]
            npcs = tuple(
                reader.unpack("Q")[0] if reader.flag() else None
                for _ in range(ZONE_NPC_SLOTS)
            )
            zones.append((max_npc, npcs))
        music = reader.string() if reader.flag() else None
        weather_tag = reader.unpack("I")[0]
        try:
            weather = Weather(weather_tag)
        except ValueError as exc:
            raise MapFileError(f"invalid weather tag {weather_tag}") from exc
        return cls(
            position=MapPosition(x, y, group),
            tiles=tiles,
            dir_block=dir_block,
            attributes=attributes,
            zonespawns=zonespawns,
            zones=zones,
            music=music,
            weather=weather,
        )

    def save_json(self, directory: PathLike) -> None:
        """Overwrite the map's JSON file; the file must already exist."""
        pos = self.position
        path = Path(directory) / f"{map_key(pos.x, pos.y, pos.group)}.json"
        text = self.to_json()
        try:
            with open(path, "r+", encoding="utf-8") as handle:
                handle.truncate()
                handle.write(text)
        except OSError as exc:
            raise MapFileError(f"failed to open {path}: {exc}") from exc

    def save_binary(self, directory: PathLike) -> None:
        """Write the map's binary file, creating or replacing it."""
        pos = self.position
        path = _bin_path(directory, pos.x, pos.y, pos.group)
        payload = self.to_bytes()
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise MapFileError(f"failed to write {path}: {exc}") from exc


def map_exists(directory: PathLike, x: int, y: int, group: int) -> bool:
    """Whether the binary file of a map is present."""
    return _bin_path(directory, x, y, group).exists()


def create_file(directory: PathLike, x: int, y: int, group: int, data: MapData) -> None:
    """Write a new map file; an existing file is left untouched."""
    path = _bin_path(directory, x, y, group)
    payload = data.to_bytes()
    try:
        with open(path, "xb") as handle:
            handle.write(payload)
    except FileExistsError:
        return
    except OSError as exc:
        raise MapFileError(f"failed to open {path}: {exc}") from exc


def load_file(directory: PathLike, x: int, y: int, group: int) -> MapData:
    """Load a map, creating a blank one on disk if it does not exist."""
    if not map_exists(directory, x, y, group):
        data = MapData.blank(x, y, group)
        create_file(directory, x, y, group, data)
        return data
    try:
        raw = _bin_path(directory, x, y, group).read_bytes()
    except OSError:
        return MapData.blank(x, y, group)
    return MapData.from_bytes(raw)


_LINK_DIRECTIONS = {
    1: Direction.NORTH,
    2: Direction.NORTH_EAST,
    3: Direction.WEST,
    4: Direction.EAST,
    5: Direction.SOUTH_WEST,
    6: Direction.SOUTH,
    7: Direction.SOUTH_EAST,
}


def direction_from_link(index: int) -> Direction:
    """Direction of a linked map view; any other index is north-west."""
    return _LINK_DIRECTIONS.get(index, Direction.NORTH_WEST)