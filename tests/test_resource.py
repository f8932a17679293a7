import pytest

from mapedit.resource import SheetTile, Tilesheet, list_audio, tile_locations
from mapedit.tilemap import TEXTURE_SIZE


def test_from_grid_layout():
    sheet = Tilesheet.from_grid("tile_0.png", 3, 2)
    assert sheet.name == "tile_0.png"
    assert len(sheet.tiles) == 3 * 2
    assert [t.tex_id for t in sheet.tiles] == list(range(1, 7))
    assert sheet.tiles[0] == SheetTile(1, 0, 0)
    assert sheet.tiles[4] == SheetTile(5, TEXTURE_SIZE, TEXTURE_SIZE)


def test_from_grid_start_id():
    sheet = Tilesheet.from_grid("tile_1.png", 2, 2, start_id=10)
    assert [t.tex_id for t in sheet.tiles] == [10, 11, 12, 13]


def test_from_grid_negative_size_raises():
    with pytest.raises(ValueError):
        Tilesheet.from_grid("bad", -1, 2)


def test_tile_locations_across_sheets():
    sheets = [
        Tilesheet.from_grid("a", 2, 1, start_id=1),
        Tilesheet.from_grid("b", 1, 1, start_id=3),
    ]
    assert tile_locations(sheets) == {
        1: (0, 0, 0),
        2: (TEXTURE_SIZE, 0, 0),
        3: (0, 0, 1),
    }


def test_tile_locations_skips_empty_tiles():
    sheet = Tilesheet("x", [SheetTile(0, 0, 0), SheetTile(5, 20, 40)])
    assert tile_locations([sheet]) == {5: (20, 40, 0)}


def test_tile_locations_later_sheet_wins():
    sheets = [
        Tilesheet("a", [SheetTile(4, 0, 0)]),
        Tilesheet("b", [SheetTile(4, 60, 80)]),
    ]
    assert tile_locations(sheets) == {4: (60, 80, 1)}


def test_list_audio_names(tmp_path):
    (tmp_path / "b.ogg").write_bytes(b"")
    (tmp_path / "a.wav").write_bytes(b"")
    assert list_audio(tmp_path) == ["a.wav", "b.ogg"]


def test_list_audio_missing_directory(tmp_path):
    assert list_audio(tmp_path / "missing") == []