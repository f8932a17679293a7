import pytest

from mapedit.resource import SheetTile, Tilesheet
from mapedit.tilemap import TEXTURE_SIZE
from mapedit.tileset import (
    MAX_TILE_X,
    MAX_TILE_Y,
    Tileset,
    get_tileset_pos,
    in_tileset,
)


@pytest.fixture
def sheets():
    return [
        Tilesheet.from_grid("tile_0.png", MAX_TILE_X, MAX_TILE_Y, 1),
        Tilesheet("tile_1.png", [SheetTile(500, 0, 0), SheetTile(0, TEXTURE_SIZE, 0)]),
    ]


def test_tiles_are_flipped_vertically(sheets):
    tileset = Tileset(sheets)
    assert tileset.map.get_tile(0, MAX_TILE_Y - 1, 0).id == 1
    assert tileset.map.get_tile(1, MAX_TILE_Y - 1, 0).id == 2
    last = sheets[0].tiles[-1]
    assert tileset.map.get_tile(MAX_TILE_X - 1, 0, 0).id == last.tex_id


def test_initial_selection(sheets):
    tileset = Tileset(sheets, (10, 20, 30))
    assert tileset.select_start == (0.0, float(MAX_TILE_Y - 1))
    assert tileset.select_size == (1.0, 1.0)
    assert tileset.selection_color.a == 150
    assert (tileset.selection_color.r, tileset.selection_color.g, tileset.selection_color.b) == (10, 20, 30)
    assert tileset.map.pos == (11.0, 369.0)
    assert tileset.map.can_render


def test_set_selection_orders_corners(sheets):
    tileset = Tileset(sheets)
    size = tileset.set_selection((3, 5), (1, 2))
    assert tileset.select_start == (1.0, 2.0)
    assert size == tileset.select_size
    assert tileset.set_selection((1, 2), (3, 5)) == size
    assert tileset.selection_size == (size[0] * TEXTURE_SIZE, size[1] * TEXTURE_SIZE)
    assert tileset.selection_pos == (11.0 + 1 * TEXTURE_SIZE, 369.0 + 2 * TEXTURE_SIZE)


def test_single_tile_selection_has_unit_size(sheets):
    tileset = Tileset(sheets)
    assert tileset.set_selection((4, 4), (4, 4)) == (1.0, 1.0)


def test_change_tileset_replaces_tiles(sheets):
    tileset = Tileset(sheets)
    tileset.change_tileset(sheets, 1)
    assert tileset.selected_tile == 1
    assert tileset.map.get_tile(0, MAX_TILE_Y - 1, 0).id == 500
    assert tileset.map.get_tile(1, MAX_TILE_Y - 1, 0).id == 0
    assert tileset.map.get_tile(5, 5, 0).id == 0


def test_change_to_current_tileset_is_noop(sheets):
    tileset = Tileset(sheets)
    tileset.change_tileset([sheets[1]], 0)
    assert tileset.map.get_tile(0, MAX_TILE_Y - 1, 0).id == 1


def test_change_to_missing_tileset_raises(sheets):
    tileset = Tileset(sheets)
    with pytest.raises(IndexError):
        tileset.change_tileset(sheets, 7)
    assert tileset.selected_tile == 0


def test_in_tileset_bounds(sheets):
    tileset = Tileset(sheets)
    right = 11.0 + MAX_TILE_X * TEXTURE_SIZE
    top = 369.0 + MAX_TILE_Y * TEXTURE_SIZE
    assert in_tileset((11.0, 369.0), tileset)
    assert in_tileset((right, top), tileset)
    assert not in_tileset((right + 1, 400.0), tileset)
    assert not in_tileset((20.0, 368.0), tileset)


def test_get_tileset_pos_floors(sheets):
    tileset = Tileset(sheets)
    pos = get_tileset_pos((11.0 + TEXTURE_SIZE + 5, 369.0 + 2 * TEXTURE_SIZE + 19), tileset)
    assert pos == (1.0, 2.0)
    assert get_tileset_pos((10.0, 368.0), tileset) == (-1.0, -1.0)


def test_empty_sheet_list_raises():
    with pytest.raises(IndexError):
        Tileset([])