import pytest

from mapedit.attributes import TRANSPARENT, Color
from mapedit.recording import Records, RecordType
from mapedit.tilemap import tile_index
from mapedit.zones import MapZoneSetting, ZoneMap, zone_color


def test_zone_colors_from_source():
    assert zone_color(1) == Color(200, 40, 40, 140)
    assert zone_color(2) == Color(40, 200, 40, 140)
    assert zone_color(3) == Color(150, 40, 150, 140)
    assert zone_color(4) == Color(40, 150, 150, 140)
    assert zone_color(0) == Color(40, 40, 200, 140)
    assert zone_color(9) == zone_color(0)


def test_setting_defaults():
    setting = MapZoneSetting()
    assert setting.max_npc == 0
    assert setting.npc_id == [None] * 5


def test_add_and_contains():
    zones = ZoneMap()
    zones.add(2, (3, 4))
    assert zones.contains(2, (3, 4))
    assert not zones.contains(1, (3, 4))
    assert zones.tile_colors[tile_index(3, 4)] == zone_color(2)


def test_add_twice_keeps_one_entry():
    zones = ZoneMap()
    zones.add(0, (1, 1))
    zones.add(0, (1.0, 1.0))
    assert zones.positions(0) == [(1.0, 1.0)]


def test_delete_removes_and_clears_color():
    zones = ZoneMap()
    zones.add(1, (5, 6))
    zones.delete(1, (5, 6))
    assert not zones.contains(1, (5, 6))
    assert zones.tile_colors[tile_index(5, 6)] == TRANSPARENT


def test_add_records_previous_membership():
    zones = ZoneMap()
    record = Records()
    record.begin_undo()
    zones.add(0, (3, 4), record)
    zones.add(0, (3, 4), record)
    record.stop_record()
    changes = record.undo[-1].changes
    assert list(changes) == ["3_4_0"]
    change = changes["3_4_0"]
    assert change.record_type is RecordType.ZONE
    assert change.value == 0


def test_delete_records_existing_membership():
    zones = ZoneMap()
    zones.add(3, (2, 2))
    record = Records()
    record.begin_undo()
    zones.delete(3, (2, 2), record)
    change = record.undo[-1].changes["2_2_3"]
    assert change.value == 1
    assert change.pos == (2.0, 2.0, 3.0)


def test_fill_empty_map_covers_everything():
    zones = ZoneMap()
    zones.fill(0, (10, 10))
    assert len(zones.positions(0)) == 32 * 32
    assert all(color == zone_color(0) for color in zones.tile_colors)


def test_fill_stops_at_existing_zone_tiles():
    zones = ZoneMap()
    for y in range(32):
        zones.add(1, (5, y))
    zones.fill(1, (0, 0))
    assert all(zones.contains(1, (x, y)) for x in range(6) for y in range(32))
    assert not any(zones.contains(1, (x, y)) for x in range(6, 32) for y in range(32))


def test_fill_on_existing_position_does_nothing():
    zones = ZoneMap()
    zones.add(0, (4, 4))
    record = Records()
    record.begin_undo()
    zones.fill(0, (4, 4), record)
    assert zones.positions(0) == [(4.0, 4.0)]
    assert record.undo[-1].changes == {}


def test_fill_records_every_painted_tile():
    zones = ZoneMap()
    for y in range(32):
        zones.add(2, (1, y))
    record = Records()
    record.begin_undo()
    zones.fill(2, (0, 0), record)
    changes = record.undo[-1].changes
    assert len(changes) == len([p for p in zones.positions(2) if p[0] == 0.0])
    assert all(change.value == 0 for change in changes.values())


def test_colors_show_only_selected_zone():
    zones = ZoneMap()
    zones.add(0, (0, 0))
    zones.add(1, (1, 0))
    shown = zones.colors(1)
    assert len(shown) == 1024
    assert shown[tile_index(1, 0)] == zone_color(1)
    assert shown[tile_index(0, 0)] == TRANSPARENT
    assert zones.tile_colors == shown


def test_out_of_map_position_raises():
    zones = ZoneMap()
    with pytest.raises(IndexError):
        zones.add(0, (32, 0))
    with pytest.raises(IndexError):
        zones.delete(0, (-1, 0))


def test_unknown_zone_raises():
    zones = ZoneMap()
    with pytest.raises(IndexError):
        zones.add(5, (0, 0))
    with pytest.raises(IndexError):
        zones.contains(-1, (0, 0))


def test_set_positions_replaces_zone():
    zones = ZoneMap()
    zones.add(4, (9, 9))
    zones.set_positions(4, [(1, 2), (3, 4)])
    assert zones.positions(4) == [(1.0, 2.0), (3.0, 4.0)]