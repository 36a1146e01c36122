"""Static scenery: bricks, solid blocks, coins, platforms and portals."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from scenekit.collision import process
from scenekit.gameobject import BBOX_ALPHA, BLOCKS_FROM_ABOVE, GameObject
from scenekit.graphics import AnimationRegistry, SpriteRegistry

if TYPE_CHECKING:
    from scenekit.collision import CollisionEvent
    from scenekit.graphics import Canvas

__all__ = [
    "ID_ANI_BRICK",
    "BRICK_BBOX_WIDTH",
    "BRICK_BBOX_HEIGHT",
    "ID_ANI_COIN",
    "COIN_BBOX_WIDTH",
    "COIN_BBOX_HEIGHT",
    "ID_ANI_PORTAL",
    "MOVING_PLATFORM_SPEED",
    "MOVING_PLATFORM_TOP",
    "MOVING_PLATFORM_BOTTOM",
    "Brick",
    "SolidBlock",
    "Coin",
    "ColorBox",
    "Platform",
    "MovingPlatform",
    "Portal",
]

ID_ANI_BRICK = 10000
BRICK_BBOX_WIDTH = 16
BRICK_BBOX_HEIGHT = 16

ID_ANI_COIN = 11000
COIN_BBOX_WIDTH = 10
COIN_BBOX_HEIGHT = 16

ID_ANI_PORTAL = 20000

MOVING_PLATFORM_SPEED = 0.05
MOVING_PLATFORM_TOP = 10
MOVING_PLATFORM_BOTTOM = 50


def _centred_box(
    x: float, y: float, width: int, height: int
) -> tuple[float, float, float, float]:
    """Box of whole-number size centred on (x, y), halves truncated."""
    left = x - int(width / 2)
    top = y - int(height / 2)
    return left, top, left + width, top + height


class Brick(GameObject):
    """A solid 16x16 brick."""

    def __init__(
        self, x: float, y: float, *, animations: AnimationRegistry | None = None
    ) -> None:
        super().__init__(x, y)
        self.animations = animations if animations is not None else AnimationRegistry()

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _centred_box(self.x, self.y, BRICK_BBOX_WIDTH, BRICK_BBOX_HEIGHT)

    def render(self, canvas: Canvas) -> None:
        self.animations.get(ID_ANI_BRICK).render(canvas, self.x, self.y)


class SolidBlock(GameObject):
    """An invisible solid block of any size, drawn as its bounding box."""

    def __init__(self, x: float, y: float, width: int, height: int) -> None:
        super().__init__(x, y)
        self.width = width
        self.height = height

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _centred_box(self.x, self.y, self.width, self.height)

    def render(self, canvas: Canvas) -> None:
        self.render_bounding_box(canvas)

    def is_blocking(self) -> int:
        return 1

    def is_collidable(self) -> bool:
        return False


class Coin(GameObject):
    """A coin the player can pass through and collect."""

    def __init__(
        self, x: float, y: float, *, animations: AnimationRegistry | None = None
    ) -> None:
        super().__init__(x, y)
        self.animations = animations if animations is not None else AnimationRegistry()

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _centred_box(self.x, self.y, COIN_BBOX_WIDTH, COIN_BBOX_HEIGHT)

    def render(self, canvas: Canvas) -> None:
        self.animations.get(ID_ANI_COIN).render(canvas, self.x, self.y)

    def is_blocking(self) -> int:
        return 0


class ColorBox(GameObject):
    """An invisible box that can only be landed on from above."""

    def __init__(self, x: float, y: float, width: int, height: int) -> None:
        super().__init__(x, y)
        self.width = width
        self.height = height

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _centred_box(self.x, self.y, self.width, self.height)

    def render(self, canvas: Canvas) -> None:
        """The box is part of the background art; nothing is drawn."""

    def is_blocking(self) -> int:
        return BLOCKS_FROM_ABOVE

    def is_collidable(self) -> bool:
        return False


def _row_box(
    x: float, y: float, cell_width: float, cell_height: float, length: int
) -> tuple[float, float, float, float]:
    left = x - cell_width / 2
    top = y - cell_height / 2
    return left, top, left + cell_width * length, top + cell_height


def _draw_row(
    canvas: Canvas,
    sprites: SpriteRegistry,
    x: float,
    y: float,
    cell_width: float,
    length: int,
    begin: int,
    middle: int,
    end: int,
) -> None:
    if length <= 0:
        return
    xx = x
    sprites.get(begin).draw(canvas, xx, y)
    xx += cell_width
    for _ in range(1, length - 1):
        sprites.get(middle).draw(canvas, xx, y)
        xx += cell_width
    if length > 1:
        sprites.get(end).draw(canvas, xx, y)


class Platform(GameObject):
    """A row of ``length`` cells drawn from begin, middle and end sprites.

    (x, y) is the centre of the first cell.
    """

    def __init__(
        self,
        x: float,
        y: float,
        cell_width: float,
        cell_height: float,
        length: int,
        sprite_begin: int,
        sprite_middle: int,
        sprite_end: int,
        *,
        sprites: SpriteRegistry | None = None,
    ) -> None:
        super().__init__(x, y)
        self.cell_width = float(cell_width)
        self.cell_height = float(cell_height)
        self.length = length
        self.sprite_begin = sprite_begin
        self.sprite_middle = sprite_middle
        self.sprite_end = sprite_end
        self.sprites = sprites if sprites is not None else SpriteRegistry()

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _row_box(self.x, self.y, self.cell_width, self.cell_height, self.length)

    def render(self, canvas: Canvas) -> None:
        _draw_row(
            canvas, self.sprites, self.x, self.y, self.cell_width, self.length,
            self.sprite_begin, self.sprite_middle, self.sprite_end,
        )

    def render_bounding_box(self, canvas: Canvas) -> None:
        left, top, right, bottom = self.bounding_box()
        width = int(right) - int(left)
        height = int(bottom) - int(top)
        xx = self.x - self.cell_width / 2 + int(width / 2)
        canvas.draw_box(
            xx - canvas.cam_x, self.y - canvas.cam_y, width - 1, height - 1, BBOX_ALPHA
        )


class MovingPlatform(Platform):
    """A platform that moves up and down between two heights."""

    def __init__(
        self,
        x: float,
        y: float,
        cell_width: float,
        cell_height: float,
        length: int,
        sprite_begin: int,
        sprite_middle: int,
        sprite_end: int,
        move_y: int,
        *,
        sprites: SpriteRegistry | None = None,
    ) -> None:
        super().__init__(
            x, y, cell_width, cell_height, length,
            sprite_begin, sprite_middle, sprite_end, sprites=sprites,
        )
        self.vy = move_y * MOVING_PLATFORM_SPEED

    def bounding_box(self) -> tuple[float, float, float, float]:
        return _row_box(self.x, self.y, self.cell_width, self.cell_height, self.length)

    def render(self, canvas: Canvas) -> None:
        _draw_row(
            canvas, self.sprites, self.x, self.y, self.cell_width, self.length,
            self.sprite_begin, self.sprite_middle, self.sprite_end,
        )

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        process(self, dt, co_objects)

    def on_no_collision(self, dt: int) -> None:
        self.y += self.vy * dt
        if self.y >= MOVING_PLATFORM_BOTTOM or self.y <= MOVING_PLATFORM_TOP:
            self.vy = -self.vy

    def on_collision_with(self, event: CollisionEvent) -> None:
        if not event.obj.is_blocking():
            return
        if isinstance(event.obj, MovingPlatform):
            return
        if event.ny != 0:
            self.vy = -self.vy


class Portal(GameObject):
    """An area that sends the player to another scene."""

    def __init__(
        self,
        left: float,
        top: float,
        right: float,
        bottom: float,
        scene_id: int,
        *,
        animations: AnimationRegistry | None = None,
    ) -> None:
        super().__init__(left, top)
        self.scene_id = scene_id
        self.width = right - left
        self.height = bottom - top
        self.animations = animations if animations is not None else AnimationRegistry()

    def bounding_box(self) -> tuple[float, float, float, float]:
        return (
            self.x - self.width / 2,
            self.y - self.height / 2,
            self.x + self.width / 2,
            self.y + self.height / 2,
        )

    def render(self, canvas: Canvas) -> None:
        self.animations.get(ID_ANI_PORTAL).render(canvas, self.x, self.y)
        self.render_bounding_box(canvas)

    def render_bounding_box(self, canvas: Canvas) -> None:
        left, top, right, bottom = self.bounding_box()
        width = int(right) - int(left)
        height = int(bottom) - int(top)
        canvas.draw_box(
            self.x - canvas.cam_x, self.y - canvas.cam_y, width - 1, height - 1, BBOX_ALPHA
        )

    def is_blocking(self) -> int:
        return 0