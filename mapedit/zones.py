"""NPC spawn zones painted onto the map."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from mapedit.attributes import TRANSPARENT, Color
from mapedit.recording import Records, RecordType
from mapedit.tilemap import MAP_SIZE, tile_index

ZONE_COUNT = 5
ZONE_NPC_SLOTS = 5

Vec2 = tuple[float, float]

_ZONE_COLORS = {
    1: Color(200, 40, 40, 140),
    2: Color(40, 200, 40, 140),
    3: Color(150, 40, 150, 140),
    4: Color(40, 150, 150, 140),
}
_DEFAULT_ZONE_COLOR = Color(40, 40, 200, 140)

# Neighbour offsets in the order they are visited: down, up, left, right.
_NEIGHBOURS = ((0.0, -1.0), (0.0, 1.0), (-1.0, 0.0), (1.0, 0.0))


def zone_color(zone_index: int) -> Color:
    """Overlay colour of a zone; unknown indices share zone 0's colour."""
    return _ZONE_COLORS.get(zone_index, _DEFAULT_ZONE_COLOR)


@dataclass
class MapZoneSetting:
    """How many NPCs a zone holds and which ones may spawn there."""

    max_npc: int = 0
    npc_id: list[Optional[int]] = field(default_factory=lambda: [None] * ZONE_NPC_SLOTS)


def _as_pos(pos: Sequence[float]) -> Vec2:
    x, y = pos
    return (float(x), float(y))


def _in_bounds(pos: Vec2) -> bool:
    return 0.0 <= pos[0] < MAP_SIZE and 0.0 <= pos[1] < MAP_SIZE


class ZoneMap:
    """The five zones of a map and the overlay colour of every tile."""

    def __init__(self) -> None:
        self._zones: list[dict[Vec2, None]] = [{} for _ in range(ZONE_COUNT)]
        self.settings = [MapZoneSetting() for _ in range(ZONE_COUNT)]
        self.tile_colors: list[Color] = [TRANSPARENT] * (MAP_SIZE * MAP_SIZE)

    def _zone(self, zone_index: int) -> dict[Vec2, None]:
        if not 0 <= zone_index < ZONE_COUNT:
            raise IndexError(f"zone {zone_index} does not exist")
        return self._zones[zone_index]

    @staticmethod
    def _tile(pos: Vec2) -> int:
        if not _in_bounds(pos):
            raise IndexError(f"position {pos} is outside the map")
        return tile_index(int(pos[0]), int(pos[1]))

    def positions(self, zone_index: int) -> list[Vec2]:
        """Positions of a zone in the order they were added."""
        return list(self._zone(zone_index))

    def set_positions(self, zone_index: int, positions: Sequence[Sequence[float]]) -> None:
        """Replace a zone's positions without recording or recolouring."""
        zone = self._zone(zone_index)
        zone.clear()
        for pos in positions:
            zone[_as_pos(pos)] = None

    def contains(self, zone_index: int, pos: Sequence[float]) -> bool:
        """Whether a position belongs to a zone."""
        return _as_pos(pos) in self._zone(zone_index)

    def _record(self, record: Optional[Records], zone_index: int, pos: Vec2) -> None:
        if record is None:
            return
        exists = 1 if pos in self._zone(zone_index) else 0
        record.push_undo((pos[0], pos[1], float(zone_index)), RecordType.ZONE, exists, [])

    def _paint(self, zone_index: int, pos: Vec2) -> None:
        self.tile_colors[self._tile(pos)] = zone_color(zone_index)
        self._zone(zone_index).setdefault(pos, None)

    def add(self, zone_index: int, pos: Sequence[float], record: Optional[Records] = None) -> None:
        """Add a position to a zone, recording its previous membership."""
        pos = _as_pos(pos)
        self._tile(pos)
        self._record(record, zone_index, pos)
        self._paint(zone_index, pos)

    def delete(self, zone_index: int, pos: Sequence[float], record: Optional[Records] = None) -> None:
        """Remove a position from a zone, recording its previous membership."""
        pos = _as_pos(pos)
        tile = self._tile(pos)
        self._record(record, zone_index, pos)
        self.tile_colors[tile] = TRANSPARENT
        self._zone(zone_index).pop(pos, None)

    def fill(self, zone_index: int, pos: Sequence[float], record: Optional[Records] = None) -> None:
        """Flood the zone over the connected area not yet in it."""
        start = _as_pos(pos)
        zone = self._zone(zone_index)
        if start in zone:
            return
        self._tile(start)
        pending = [start]
        while pending:
            current = pending.pop()
            self._record(record, zone_index, current)
            self._paint(zone_index, current)
            for dx, dy in _NEIGHBOURS:
                neighbour = (current[0] + dx, current[1] + dy)
                if _in_bounds(neighbour) and neighbour not in zone:
                    pending.append(neighbour)

    def colors(self, zone_index: int) -> list[Color]:
        """Show only the given zone: recolour every tile and return the colours."""
        color = zone_color(zone_index)
        self.tile_colors = [TRANSPARENT] * (MAP_SIZE * MAP_SIZE)
        for pos in self._zone(zone_index):
            self.tile_colors[self._tile(pos)] = color
        return list(self.tile_colors)