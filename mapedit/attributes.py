"""Tile attributes of a map and the values used to record them."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence, Union

MAX_ATTRIBUTE = 8


def _wrap_unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _wrap_signed(value: int, bits: int) -> int:
    value = _wrap_unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


TRANSPARENT = Color(0, 0, 0, 0)
WHITE = Color(255, 255, 255, 255)


@dataclass(frozen=True)
class WarpData:
    """Destination of a warp tile."""

    map_x: int = 0
    map_y: int = 0
    map_group: int = 0
    tile_x: int = 0
    tile_y: int = 0


@dataclass(frozen=True)
class ItemSpawnData:
    """An item that spawns on a tile."""

    index: int = 0
    amount: int = 0
    timer: int = 0


class AttributeKind(enum.IntEnum):
    """The kinds of attribute a tile can carry."""

    WALKABLE = 0
    BLOCKED = 1
    NPC_BLOCKED = 2
    WARP = 3
    SIGN = 4
    ITEM_SPAWN = 5
    STORAGE = 6
    SHOP = 7
    COUNT = 8


class InsertKind(enum.Enum):
    """Type tag of a recorded value."""

    INT = "int"
    UINT = "uint"
    STR = "str"
    BOOL = "bool"


@dataclass(frozen=True)
class InsertValue:
    """A tagged value stored alongside a recorded change."""

    kind: InsertKind
    value: Union[int, str, bool]

    def as_int(self) -> int:
        """The value if it is a signed integer, otherwise 0."""
        return int(self.value) if self.kind is InsertKind.INT else 0

    def as_uint(self) -> int:
        """The value if it is an unsigned integer, otherwise 0."""
        return int(self.value) if self.kind is InsertKind.UINT else 0

    def as_str(self) -> str:
        """The value if it is a string, otherwise an empty string."""
        return str(self.value) if self.kind is InsertKind.STR else ""


_NAMES = {
    0: "Walkable",
    1: "Blocked",
    2: "NpcBlocked",
    3: "Warp",
    4: "Sign",
    5: "Item",
    6: "Storage",
    7: "Shop",
}

_LABELS = {
    AttributeKind.BLOCKED: "B",
    AttributeKind.NPC_BLOCKED: "N",
    AttributeKind.WARP: "W",
    AttributeKind.SIGN: "S",
    AttributeKind.ITEM_SPAWN: "I",
    AttributeKind.STORAGE: "S",
    AttributeKind.SHOP: "S",
}

_COLORS = {
    AttributeKind.BLOCKED: Color(200, 10, 10, 100),
    AttributeKind.NPC_BLOCKED: Color(200, 50, 10, 100),
    AttributeKind.WARP: Color(10, 10, 200, 100),
    AttributeKind.SIGN: Color(10, 200, 10, 100),
    AttributeKind.ITEM_SPAWN: Color(180, 180, 180, 100),
    AttributeKind.STORAGE: Color(160, 170, 20, 255),
    AttributeKind.SHOP: Color(200, 50, 100, 255),
}

_PAYLOAD_TYPES = {
    AttributeKind.WARP: WarpData,
    AttributeKind.SIGN: str,
    AttributeKind.ITEM_SPAWN: ItemSpawnData,
    AttributeKind.SHOP: int,
}


def attribute_name(number: int) -> str:
    """Display name of an attribute number, empty if unknown."""
    return _NAMES.get(number, "")


@dataclass(frozen=True)
class MapAttribute:
    """An attribute together with the payload its kind requires."""

    kind: AttributeKind = AttributeKind.WALKABLE
    data: Union[WarpData, ItemSpawnData, str, int, None] = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES.get(self.kind)
        if expected is None:
            if self.data is not None:
                raise TypeError(f"{self.kind.name} carries no data")
        elif not isinstance(self.data, expected) or isinstance(self.data, bool):
            raise TypeError(
                f"{self.kind.name} requires {expected.__name__} data, "
                f"got {type(self.data).__name__}"
            )

    def number(self) -> int:
        """The attribute's number as stored in records."""
        if self.kind is AttributeKind.COUNT:
            return 0
        return int(self.kind)

    def map_label(self) -> str:
        """Short label drawn on the map tile."""
        return _LABELS.get(self.kind, "")

    def color(self) -> Color:
        """Overlay colour used when drawing the tile."""
        return _COLORS.get(self.kind, TRANSPARENT)

    def record_data(self) -> list[InsertValue]:
        """The payload flattened into values for an undo record."""
        if self.kind is AttributeKind.WARP:
            warp = self.data
            return [
                InsertValue(InsertKind.INT, warp.map_x),
                InsertValue(InsertKind.INT, warp.map_y),
                InsertValue(InsertKind.UINT, warp.map_group),
                InsertValue(InsertKind.UINT, warp.tile_x),
                InsertValue(InsertKind.UINT, warp.tile_y),
            ]
        if self.kind is AttributeKind.SIGN:
            return [InsertValue(InsertKind.STR, self.data)]
        if self.kind is AttributeKind.ITEM_SPAWN:
            item = self.data
            return [
                InsertValue(InsertKind.UINT, item.index),
                InsertValue(InsertKind.UINT, item.amount),
                InsertValue(InsertKind.UINT, item.timer),
            ]
        if self.kind is AttributeKind.SHOP:
            return [InsertValue(InsertKind.UINT, self.data)]
        return []

    @classmethod
    def from_record(cls, number: int, data: Sequence[InsertValue]) -> "MapAttribute":
        """Rebuild an attribute from its number and recorded values."""
        if number == 1:
            return cls(AttributeKind.BLOCKED)
        if number == 2:
            return cls(AttributeKind.NPC_BLOCKED)
        if number == 3:
            return cls(
                AttributeKind.WARP,
                WarpData(
                    map_x=_wrap_signed(data[0].as_int(), 32),
                    map_y=_wrap_signed(data[1].as_int(), 32),
                    map_group=_wrap_unsigned(data[2].as_uint(), 64),
                    tile_x=_wrap_unsigned(data[3].as_uint(), 32),
                    tile_y=_wrap_unsigned(data[4].as_uint(), 32),
                ),
            )
        if number == 4:
            return cls(AttributeKind.SIGN, data[0].as_str())
        if number == 5:
            # The timer is read from the amount slot, as records always have.
            return cls(
                AttributeKind.ITEM_SPAWN,
                ItemSpawnData(
                    index=_wrap_unsigned(data[0].as_uint(), 32),
                    amount=_wrap_unsigned(data[1].as_uint(), 16),
                    timer=_wrap_unsigned(data[1].as_uint(), 64),
                ),
            )
        if number == 6:
            return cls(AttributeKind.STORAGE)
        if number == 7:
            return cls(AttributeKind.SHOP, _wrap_unsigned(data[0].as_uint(), 16))
        return cls(AttributeKind.WALKABLE)

    @classmethod
    def plain(cls, number: int) -> "MapAttribute":
        """An attribute of the given number with an empty payload."""
        payloads = {
            3: WarpData(),
            4: "",
            5: ItemSpawnData(),
            7: 0,
        }
        if number in (1, 2, 3, 4, 5, 6, 7):
            return cls(AttributeKind(number), payloads.get(number))
        return cls(AttributeKind.WALKABLE)