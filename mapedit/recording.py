"""Undo and redo history for map edits."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from mapedit.attributes import InsertValue

MAX_CHANGE = 500

Vec3 = tuple[float, float, float]


class RecordType(enum.Enum):
    """What a recorded change applies to."""

    LAYER = "layer"
    ATTRIBUTE = "attribute"
    ZONE = "zone"


@dataclass
class ChangeData:
    """The previous state of one position."""

    record_type: RecordType
    pos: Vec3
    value: int
    data: list[InsertValue] = field(default_factory=list)


@dataclass
class Record:
    """All changes made by one edit, keyed by position."""

    changes: dict[str, ChangeData] = field(default_factory=dict)


def _fmt(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _key(pos: Vec3) -> str:
    return "_".join(_fmt(v) for v in pos)


def _as_vec3(pos: Sequence[float]) -> Vec3:
    x, y, z = pos
    return (float(x), float(y), float(z))


class Records:
    """Undo and redo stacks; changes are only kept while a record is open."""

    def __init__(self) -> None:
        self._in_record = False
        self.undo: list[Record] = []
        self.redo: list[Record] = []
        self._last_index: Optional[int] = None

    @property
    def in_record(self) -> bool:
        return self._in_record

    def _begin(self, stack: list[Record]) -> None:
        if self._in_record:
            return
        self._in_record = True
        self._last_index = len(stack)
        stack.append(Record())

    def _push(
        self,
        stack: list[Record],
        pos: Sequence[float],
        record_type: RecordType,
        value: int,
        data: Sequence[InsertValue],
    ) -> None:
        if not self._in_record or len(stack) >= MAX_CHANGE:
            return
        if self._last_index is None:
            return
        pos = _as_vec3(pos)
        changes = stack[self._last_index].changes
        key = _key(pos)
        if key not in changes:
            changes[key] = ChangeData(record_type, pos, value, list(data))

    def begin_undo(self) -> None:
        """Open a new undo record unless one is already open."""
        self._begin(self.undo)

    def push_undo(self, pos, record_type, value, data) -> None:
        """Store a change in the open undo record; the first per position wins."""
        self._push(self.undo, pos, record_type, value, data)

    def pop_undo(self) -> Optional[Record]:
        return self.undo.pop() if self.undo else None

    def begin_redo(self) -> None:
        """Open a new redo record unless one is already open."""
        self._begin(self.redo)

    def push_redo(self, pos, record_type, value, data) -> None:
        """Store a change in the open redo record; the first per position wins."""
        self._push(self.redo, pos, record_type, value, data)

    def pop_redo(self) -> Optional[Record]:
        return self.redo.pop() if self.redo else None

    def clear_redo(self) -> None:
        self.redo.clear()

    def stop_record(self) -> None:
        """Close the open record."""
        if not self._in_record:
            return
        self._in_record = False
        self._last_index = None