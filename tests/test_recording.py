from mapedit.attributes import InsertKind, InsertValue
from mapedit.recording import MAX_CHANGE, RecordType, Records


def test_push_without_record_is_ignored():
    records = Records()
    records.push_undo((1, 2, 0), RecordType.LAYER, 5, [])
    assert records.undo == []


def test_record_and_pop():
    records = Records()
    records.begin_undo()
    records.push_undo((1, 2, 0), RecordType.LAYER, 5, [])
    records.stop_record()
    record = records.pop_undo()
    assert len(record.changes) == 1
    change = next(iter(record.changes.values()))
    assert change.pos == (1.0, 2.0, 0.0)
    assert change.value == 5
    assert change.record_type is RecordType.LAYER
    assert records.undo == []


def test_first_change_per_position_is_kept():
    records = Records()
    records.begin_undo()
    records.push_undo((3, 3, 1), RecordType.LAYER, 7, [])
    records.push_undo((3, 3, 1), RecordType.LAYER, 9, [])
    records.push_undo((3, 4, 1), RecordType.LAYER, 9, [])
    records.stop_record()
    values = [c.value for c in records.pop_undo().changes.values()]
    assert values == [7, 9]


def test_begin_twice_opens_one_record():
    records = Records()
    records.begin_undo()
    records.begin_undo()
    assert len(records.undo) == 1
    records.begin_redo()
    assert records.redo == []


def test_data_is_kept():
    records = Records()
    records.begin_redo()
    data = [InsertValue(InsertKind.STR, "sign text")]
    records.push_redo((0, 0, 0), RecordType.ATTRIBUTE, 4, data)
    records.stop_record()
    change = next(iter(records.pop_redo().changes.values()))
    assert change.data == data


def test_pop_empty_returns_none():
    records = Records()
    assert records.pop_undo() is None
    assert records.pop_redo() is None


def test_clear_redo():
    records = Records()
    records.begin_redo()
    records.stop_record()
    records.clear_redo()
    assert records.redo == []


def test_stop_record_closes():
    records = Records()
    records.begin_undo()
    records.stop_record()
    assert not records.in_record
    records.push_undo((0, 0, 0), RecordType.ZONE, 1, [])
    assert records.undo[0].changes == {}


def test_limit_ignores_changes_when_full():
    records = Records()
    for _ in range(MAX_CHANGE):
        records.begin_undo()
        records.stop_record()
    records.begin_undo()
    records.push_undo((0, 0, 0), RecordType.LAYER, 1, [])
    records.stop_record()
    assert len(records.undo) == MAX_CHANGE + 1
    assert records.undo[-1].changes == {}