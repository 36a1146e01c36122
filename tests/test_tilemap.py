import pytest

from scenekit.graphics import Canvas, Texture, TextureRegistry
from scenekit.tilemap import TILE_HEIGHT, TILE_WIDTH, TileMap, load_tile_map

TEXTURE = Texture("tiles.png", 48, 32)
GRID = [[1, 2, 3], [4, 5, 6]]


def make_map(tiles, tileset_columns=3, total=6):
    tile_map = TileMap(TEXTURE, len(tiles), len(tiles[0]), 2, tileset_columns, total, tiles)
    tile_map.add_tiles()
    return tile_map


def test_add_tiles_cuts_tileset_grid():
    tile_map = make_map([[1]])
    assert [s.id for s in tile_map.sprites] == list(range(6))
    assert all(s.right - s.left == TILE_WIDTH for s in tile_map.sprites)
    assert all(s.bottom - s.top == TILE_HEIGHT for s in tile_map.sprites)
    assert all(s.texture is TEXTURE for s in tile_map.sprites)
    assert (tile_map.sprites[0].left, tile_map.sprites[0].top) == (0, 0)
    assert (tile_map.sprites[4].left, tile_map.sprites[4].top) == (TILE_WIDTH, TILE_HEIGHT)


def test_add_tiles_twice_does_not_duplicate():
    tile_map = make_map([[1]])
    tile_map.add_tiles()
    assert len(tile_map.sprites) == 6


def test_size_in_pixels():
    tile_map = make_map(GRID)
    assert tile_map.width == 3 * TILE_WIDTH
    assert tile_map.height == 2 * TILE_HEIGHT


def test_visible_tiles_first_row():
    tile_map = make_map(GRID)
    seen = [(s.id, x, y) for s, x, y in tile_map.visible_tiles(0, 0, 2 * TILE_WIDTH, TILE_HEIGHT)]
    assert seen == [(0, 0.0, 0.0), (1, float(TILE_WIDTH), 0.0)]


def test_visible_tiles_partial_columns_round_outwards():
    tile_map = make_map(GRID)
    seen = [s.id for s, _, _ in tile_map.visible_tiles(TILE_WIDTH / 2, 0, TILE_WIDTH, TILE_HEIGHT)]
    assert seen == [0, 1]


def test_visible_tiles_clamped_to_map():
    tile_map = make_map(GRID)
    seen = [s.id for s, _, _ in tile_map.visible_tiles(0, 0, 10 * TILE_WIDTH, 10 * TILE_HEIGHT)]
    assert seen == [n - 1 for row in GRID for n in row]


def test_tile_outside_tileset_raises():
    tile_map = make_map([[0]])
    with pytest.raises(IndexError):
        list(tile_map.visible_tiles(0, 0, TILE_WIDTH, TILE_HEIGHT))


def test_render_draws_each_visible_tile():
    tile_map = make_map(GRID)
    canvas = Canvas()
    tile_map.render(canvas, 0, 0, 3 * TILE_WIDTH, 2 * TILE_HEIGHT)
    assert len(canvas.commands) == 6
    assert all(cmd[0] == "sprite" for cmd in canvas.commands)
    assert canvas.commands[-1][1] is tile_map.sprites[5]
    assert canvas.commands[-1][2:] == (2.0 * TILE_WIDTH, 1.0 * TILE_HEIGHT)


def test_load_tile_map(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("7 2 3 2 3 6\n1 2 3\n4 5 6\n", encoding="utf-8")
    textures = TextureRegistry()
    textures.add(7, TEXTURE)
    tile_map = load_tile_map(path, textures)
    assert tile_map.texture is TEXTURE
    assert tile_map.tiles == GRID
    assert (tile_map.rows, tile_map.columns) == (2, 3)
    assert len(tile_map.sprites) == 6


def test_load_tile_map_unknown_texture(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("7 1 1 1 1 1\n1\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_tile_map(path, TextureRegistry())


def test_load_tile_map_truncated(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("7 2 3 2 3 6\n1 2\n", encoding="utf-8")
    textures = TextureRegistry()
    textures.add(7, TEXTURE)
    with pytest.raises(ValueError):
        load_tile_map(path, textures)