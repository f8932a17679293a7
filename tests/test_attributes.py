import pytest

from mapedit.attributes import (
    AttributeKind,
    Color,
    InsertKind,
    InsertValue,
    ItemSpawnData,
    MapAttribute,
    WarpData,
    attribute_name,
)


def test_attribute_names_follow_source():
    assert attribute_name(3) == "Warp"
    assert attribute_name(5) == "Item"
    assert attribute_name(42) == ""


def test_map_labels():
    assert MapAttribute(AttributeKind.BLOCKED).map_label() == "B"
    assert MapAttribute(AttributeKind.WARP, WarpData()).map_label() == "W"
    assert MapAttribute().map_label() == ""


def test_colors():
    assert MapAttribute(AttributeKind.BLOCKED).color() == Color(200, 10, 10, 100)
    assert MapAttribute(AttributeKind.SHOP, 1).color() == Color(200, 50, 100, 255)
    assert MapAttribute().color() == Color(0, 0, 0, 0)


@pytest.mark.parametrize("number", range(8))
def test_plain_number_round_trip(number):
    assert MapAttribute.plain(number).number() == number


def test_plain_unknown_is_walkable():
    assert MapAttribute.plain(99) == MapAttribute()


def test_count_has_number_zero():
    assert MapAttribute(AttributeKind.COUNT).number() == MapAttribute().number()


@pytest.mark.parametrize(
    "attribute",
    [
        MapAttribute(),
        MapAttribute(AttributeKind.BLOCKED),
        MapAttribute(AttributeKind.NPC_BLOCKED),
        MapAttribute(AttributeKind.WARP, WarpData(-3, 7, 2, 10, 31)),
        MapAttribute(AttributeKind.SIGN, "hello there"),
        MapAttribute(AttributeKind.STORAGE),
        MapAttribute(AttributeKind.SHOP, 12),
    ],
)
def test_record_round_trip(attribute):
    rebuilt = MapAttribute.from_record(attribute.number(), attribute.record_data())
    assert rebuilt == attribute


def test_item_spawn_timer_taken_from_amount_slot():
    attribute = MapAttribute(AttributeKind.ITEM_SPAWN, ItemSpawnData(3, 4, 99))
    rebuilt = MapAttribute.from_record(attribute.number(), attribute.record_data())
    assert rebuilt.data.index == 3
    assert rebuilt.data.amount == 4
    assert rebuilt.data.timer == 4


def test_from_record_missing_data_raises():
    with pytest.raises(IndexError):
        MapAttribute.from_record(4, [])


def test_from_record_wraps_values():
    data = [InsertValue(InsertKind.UINT, 70000)]
    rebuilt = MapAttribute.from_record(7, data)
    assert rebuilt.data == 70000 & 0xFFFF


def test_insert_value_accessors():
    signed = InsertValue(InsertKind.INT, -5)
    assert signed.as_int() == -5
    assert signed.as_uint() == 0
    assert signed.as_str() == ""
    text = InsertValue(InsertKind.STR, "abc")
    assert text.as_str() == "abc"
    assert text.as_int() == 0


def test_payload_validated():
    with pytest.raises(TypeError):
        MapAttribute(AttributeKind.WARP)
    with pytest.raises(TypeError):
        MapAttribute(AttributeKind.BLOCKED, "x")