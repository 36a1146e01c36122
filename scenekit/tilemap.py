"""Tile maps cut from a single tileset texture."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from os import PathLike
from typing import TYPE_CHECKING

from scenekit.graphics import Sprite

if TYPE_CHECKING:
    from scenekit.graphics import Canvas, Texture, TextureRegistry

__all__ = ["TILE_WIDTH", "TILE_HEIGHT", "TileMap", "load_tile_map"]

TILE_WIDTH = 16
TILE_HEIGHT = 16


class TileMap:
    """A grid of tile numbers drawn with sprites cut from a tileset.

    Tile numbers in ``tiles`` start at 1; tile number ``n`` is drawn with the
    ``n - 1``-th cell of the tileset, counted row by row.
    """

    def __init__(
        self,
        texture: Texture | None,
        rows: int,
        columns: int,
        tileset_rows: int,
        tileset_columns: int,
        total_tiles: int,
        tiles: Sequence[Sequence[int]],
    ) -> None:
        self.texture = texture
        self.rows = rows
        self.columns = columns
        self.tileset_rows = tileset_rows
        self.tileset_columns = tileset_columns
        self.total_tiles = total_tiles
        self.tiles = [list(row) for row in tiles]
        self.sprites: list[Sprite] = []

    @property
    def width(self) -> int:
        """Map width in pixels."""
        return self.columns * TILE_WIDTH

    @property
    def height(self) -> int:
        """Map height in pixels."""
        return self.rows * TILE_HEIGHT

    def add_tiles(self) -> None:
        """Cut one sprite per tileset cell."""
        self.sprites = []
        for tile_id in range(self.total_tiles):
            left = tile_id % self.tileset_columns * TILE_WIDTH
            top = tile_id // self.tileset_columns * TILE_HEIGHT
            self.sprites.append(
                Sprite(tile_id, left, top, left + TILE_WIDTH, top + TILE_HEIGHT, self.texture)
            )

    def visible_tiles(
        self, cam_x: float, cam_y: float, width: int, height: int
    ) -> Iterator[tuple[Sprite, float, float]]:
        """Yield (sprite, x, y) for every tile the camera view touches."""
        begin_row = max(0, math.floor(cam_y / TILE_HEIGHT))
        end_row = min(self.rows, math.ceil((cam_y + height) / TILE_HEIGHT))
        begin_col = max(0, math.floor(cam_x / TILE_WIDTH))
        end_col = min(self.columns, math.ceil((cam_x + width) / TILE_WIDTH))

        for row in range(begin_row, end_row):
            for col in range(begin_col, end_col):
                index = self.tiles[row][col] - 1
                if not 0 <= index < len(self.sprites):
                    raise IndexError(
                        f"tile {self.tiles[row][col]} at row {row}, column {col} "
                        "is not in the tileset"
                    )
                yield self.sprites[index], float(col * TILE_WIDTH), float(row * TILE_HEIGHT)

    def render(
        self, canvas: Canvas, cam_x: float, cam_y: float, width: int, height: int
    ) -> None:
        for sprite, x, y in self.visible_tiles(cam_x, cam_y, width, height):
            sprite.draw(canvas, x, y)


def load_tile_map(path: str | PathLike[str], textures: TextureRegistry) -> TileMap:
    """Read a tile map file and cut its tiles.

    The file holds whitespace-separated integers: texture id, map rows, map
    columns, tileset rows, tileset columns, tile count, then the map itself
    row by row.
    """
    with open(path, encoding="utf-8") as f:
        numbers = [int(token) for token in f.read().split()]
    if len(numbers) < 6:
        raise ValueError(f"{path}: tile map header is incomplete")
    texture_id, rows, columns, tileset_rows, tileset_columns, total_tiles = numbers[:6]
    cells = numbers[6:]
    if len(cells) < rows * columns:
        raise ValueError(f"{path}: expected {rows * columns} tiles, found {len(cells)}")
    tiles = [cells[row * columns:(row + 1) * columns] for row in range(rows)]

    tile_map = TileMap(
        textures.get(texture_id),
        rows,
        columns,
        tileset_rows,
        tileset_columns,
        total_tiles,
        tiles,
    )
    tile_map.add_tiles()
    return tile_map