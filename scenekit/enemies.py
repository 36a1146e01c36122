"""Enemies: Goombas, Koopas and piranha plants."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING

from scenekit.collision import process
from scenekit.gameobject import GameObject
from scenekit.graphics import AnimationRegistry
from scenekit.utils import monotonic_ms

if TYPE_CHECKING:
    from scenekit.collision import CollisionEvent
    from scenekit.graphics import Canvas

__all__ = [
    "GOOMBA_GRAVITY",
    "GOOMBA_WALKING_SPEED",
    "GOOMBA_BBOX_WIDTH",
    "GOOMBA_BBOX_HEIGHT",
    "GOOMBA_BBOX_HEIGHT_DIE",
    "GOOMBA_DIE_TIMEOUT",
    "ID_ANI_GOOMBA_WALKING",
    "ID_ANI_GOOMBA_DIE",
    "KOOPA_GRAVITY",
    "KOOPA_WALKING_SPEED",
    "KOOPA_BBOX_WIDTH",
    "KOOPA_BBOX_HEIGHT",
    "KOOPA_BBOX_HEIGHT_SHELL",
    "KOOPA_DIE_TIMEOUT",
    "ID_ANI_KOOPA_WALKING",
    "ID_ANI_KOOPA_SHELL",
    "PLANT_GRAVITY",
    "PLANT_WALKING_SPEED",
    "PLANT_BBOX_WIDTH",
    "PLANT_BBOX_HEIGHT",
    "PLANT_BBOX_HEIGHT_DIE",
    "PLANT_DIE_TIMEOUT",
    "PLANT_LOWEST_Y",
    "PLANT_HIGHEST_Y",
    "ID_ANI_PLANT_WALKING",
    "ID_ANI_PLANT_DIE",
    "GoombaState",
    "Goomba",
    "KoopaState",
    "Koopa",
    "PlantState",
    "Plant",
]

GOOMBA_GRAVITY = 0.002
GOOMBA_WALKING_SPEED = 0.05
GOOMBA_BBOX_WIDTH = 16
GOOMBA_BBOX_HEIGHT = 14
GOOMBA_BBOX_HEIGHT_DIE = 7
GOOMBA_DIE_TIMEOUT = 5000
ID_ANI_GOOMBA_WALKING = 5000
ID_ANI_GOOMBA_DIE = 5001

KOOPA_GRAVITY = 0.002
KOOPA_WALKING_SPEED = 0.05
KOOPA_BBOX_WIDTH = 18
KOOPA_BBOX_HEIGHT = 24
KOOPA_BBOX_HEIGHT_SHELL = 14
KOOPA_DIE_TIMEOUT = 2000
KOOPA_SHELL_RISE = 5
ID_ANI_KOOPA_WALKING = 6000
ID_ANI_KOOPA_SHELL = 6001

PLANT_GRAVITY = 0.002
PLANT_WALKING_SPEED = 0.02
PLANT_BBOX_WIDTH = 17
PLANT_BBOX_HEIGHT = 22
PLANT_BBOX_HEIGHT_DIE = 7
PLANT_DIE_TIMEOUT = 5000
PLANT_LOWEST_Y = 369
PLANT_HIGHEST_Y = PLANT_LOWEST_Y - 22
ID_ANI_PLANT_WALKING = 7000
ID_ANI_PLANT_DIE = 7001


class GoombaState(IntEnum):
    WALKING = 100
    DIE = 200


class KoopaState(IntEnum):
    WALKING = 100
    SHELL = 200


class PlantState(IntEnum):
    WALKING = 100
    DIE = 200


def _box(x: float, y: float, width: int, height: int) -> tuple[float, float, float, float]:
    left = x - width // 2
    top = y - height // 2
    return left, top, left + width, top + height


class _Enemy(GameObject):
    """Shared behaviour: collidable, non-blocking, timed state changes."""

    def __init__(
        self,
        x: float,
        y: float,
        gravity: float,
        animations: AnimationRegistry | None,
        clock: Callable[[], int],
    ) -> None:
        super().__init__(x, y)
        self.ax = 0.0
        self.ay = gravity
        self.die_start: int | None = None
        self.animations = animations if animations is not None else AnimationRegistry()
        self._clock = clock

    def _expired(self, timeout: int) -> bool:
        return self.die_start is not None and self._clock() - self.die_start > timeout

    def _react(self, event: CollisionEvent) -> None:
        if not event.obj.is_blocking():
            return
        if event.ny != 0:
            self.vy = 0.0
        elif event.nx != 0:
            self.vx = -self.vx

    def _draw(self, canvas: Canvas, animation_id: int) -> None:
        self.animations.get(animation_id).render(canvas, self.x, self.y)

    def is_collidable(self) -> bool:
        return True

    def is_blocking(self) -> int:
        return 0

    def on_no_collision(self, dt: int) -> None:
        self.x += self.vx * dt
        self.y += self.vy * dt


class Goomba(_Enemy):
    """Walks left, turns at walls, and is removed a while after dying."""

    def __init__(
        self,
        x: float,
        y: float,
        *,
        animations: AnimationRegistry | None = None,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        super().__init__(x, y, GOOMBA_GRAVITY, animations, clock)
        self.set_state(GoombaState.WALKING)

    def bounding_box(self) -> tuple[float, float, float, float]:
        height = GOOMBA_BBOX_HEIGHT_DIE if self.state == GoombaState.DIE else GOOMBA_BBOX_HEIGHT
        return _box(self.x, self.y, GOOMBA_BBOX_WIDTH, height)

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        self.vy += self.ay * dt
        self.vx += self.ax * dt
        if self.state == GoombaState.DIE and self._expired(GOOMBA_DIE_TIMEOUT):
            self.is_deleted = True
            return
        process(self, dt, co_objects)

    def render(self, canvas: Canvas) -> None:
        die = self.state == GoombaState.DIE
        self._draw(canvas, ID_ANI_GOOMBA_DIE if die else ID_ANI_GOOMBA_WALKING)

    def set_state(self, state: int) -> None:
        super().set_state(state)
        if state == GoombaState.DIE:
            self.die_start = self._clock()
            self.y += (GOOMBA_BBOX_HEIGHT - GOOMBA_BBOX_HEIGHT_DIE) // 2
            self.vx = self.vy = self.ay = 0.0
        elif state == GoombaState.WALKING:
            self.vx = -GOOMBA_WALKING_SPEED

    def is_collidable(self) -> bool:
        return True

    def is_blocking(self) -> int:
        return 0

    def on_no_collision(self, dt: int) -> None:
        super().on_no_collision(dt)

    def on_collision_with(self, event: CollisionEvent) -> None:
        if not isinstance(event.obj, Goomba):
            self._react(event)


class Koopa(_Enemy):
    """Walks left; when stomped hides in its shell, then walks out again."""

    def __init__(
        self,
        x: float,
        y: float,
        *,
        animations: AnimationRegistry | None = None,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        super().__init__(x, y, KOOPA_GRAVITY, animations, clock)
        self.set_state(KoopaState.WALKING)

    def bounding_box(self) -> tuple[float, float, float, float]:
        height = KOOPA_BBOX_HEIGHT_SHELL if self.state == KoopaState.SHELL else KOOPA_BBOX_HEIGHT
        return _box(self.x, self.y, KOOPA_BBOX_WIDTH, height)

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        self.vy += self.ay * dt
        self.vx += self.ax * dt
        if self.state == KoopaState.SHELL and self._expired(KOOPA_DIE_TIMEOUT):
            self.y -= KOOPA_SHELL_RISE
            self.state = KoopaState.WALKING
            self.vx = -KOOPA_WALKING_SPEED
            return
        process(self, dt, co_objects)

    def render(self, canvas: Canvas) -> None:
        shell = self.state == KoopaState.SHELL
        self._draw(canvas, ID_ANI_KOOPA_SHELL if shell else ID_ANI_KOOPA_WALKING)

    def set_state(self, state: int) -> None:
        super().set_state(state)
        if state == KoopaState.SHELL:
            self.die_start = self._clock()
            self.y += (KOOPA_BBOX_HEIGHT - KOOPA_BBOX_HEIGHT_SHELL) // 2
            self.vx = self.vy = self.ay = 0.0
        elif state == KoopaState.WALKING:
            self.vx = -KOOPA_WALKING_SPEED

    def is_collidable(self) -> bool:
        return True

    def is_blocking(self) -> int:
        return 0

    def on_no_collision(self, dt: int) -> None:
        super().on_no_collision(dt)

    def on_collision_with(self, event: CollisionEvent) -> None:
        if not isinstance(event.obj, Koopa):
            self._react(event)


class Plant(_Enemy):
    """Rises and sinks between two fixed heights."""

    def __init__(
        self,
        x: float,
        y: float,
        *,
        animations: AnimationRegistry | None = None,
        clock: Callable[[], int] = monotonic_ms,
    ) -> None:
        super().__init__(x, y, PLANT_GRAVITY, animations, clock)
        self.set_state(PlantState.WALKING)

    def bounding_box(self) -> tuple[float, float, float, float]:
        height = PLANT_BBOX_HEIGHT_DIE if self.state == PlantState.DIE else PLANT_BBOX_HEIGHT
        return _box(self.x, self.y, PLANT_BBOX_WIDTH, height)

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        if self.state == PlantState.DIE and self._expired(PLANT_DIE_TIMEOUT):
            self.is_deleted = True
            return
        self.vx = 0.0
        if self.vy > 0 and self.y > PLANT_LOWEST_Y:
            self.y = float(PLANT_LOWEST_Y)
            self.vy = -self.vy
        if self.vy < 0 and self.y < PLANT_HIGHEST_Y:
            self.y = float(PLANT_HIGHEST_Y)
            self.vy = -self.vy
        process(self, dt, co_objects)

    def render(self, canvas: Canvas) -> None:
        die = self.state == PlantState.DIE
        self._draw(canvas, ID_ANI_PLANT_DIE if die else ID_ANI_PLANT_WALKING)

    def set_state(self, state: int) -> None:
        super().set_state(state)
        if state == PlantState.DIE:
            self.die_start = self._clock()
            self.y += (PLANT_BBOX_HEIGHT - PLANT_BBOX_HEIGHT_DIE) // 2
            self.vx = self.vy = self.ay = 0.0
        elif state == PlantState.WALKING:
            self.vy = -PLANT_WALKING_SPEED

    def is_collidable(self) -> bool:
        return True

    def is_blocking(self) -> int:
        return 0

    def on_no_collision(self, dt: int) -> None:
        super().on_no_collision(dt)

    def on_collision_with(self, event: CollisionEvent) -> None:
        if not isinstance(event.obj, Plant):
            self._react(event)