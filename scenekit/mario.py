"""The player character."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from scenekit.blocks import Coin, Portal
from scenekit.collision import process
from scenekit.enemies import Goomba, GoombaState, Koopa, KoopaState
from scenekit.gameobject import GameObject
from scenekit.graphics import AnimationRegistry
from scenekit.utils import monotonic_ms

if TYPE_CHECKING:
    from scenekit.collision import CollisionEvent
    from scenekit.graphics import Canvas

__all__ = [
    "MARIO_WALKING_SPEED",
    "MARIO_RUNNING_SPEED",
    "MARIO_ACCEL_WALK_X",
    "MARIO_ACCEL_RUN_X",
    "MARIO_JUMP_SPEED_Y",
    "MARIO_JUMP_RUN_SPEED_Y",
    "MARIO_GRAVITY",
    "MARIO_JUMP_DEFLECT_SPEED",
    "MARIO_BIG_BBOX_WIDTH",
    "MARIO_BIG_BBOX_HEIGHT",
    "MARIO_BIG_SITTING_BBOX_WIDTH",
    "MARIO_BIG_SITTING_BBOX_HEIGHT",
    "MARIO_SIT_HEIGHT_ADJUST",
    "MARIO_TAIL_BBOX_WIDTH",
    "MARIO_TAIL_BBOX_HEIGHT",
    "MARIO_TAIL_SITTING_BBOX_WIDTH",
    "MARIO_TAIL_SITTING_BBOX_HEIGHT",
    "MARIO_SMALL_BBOX_WIDTH",
    "MARIO_SMALL_BBOX_HEIGHT",
    "MARIO_UNTOUCHABLE_TIME",
    "MARIO_MIN_X",
    "ID_ANI_MARIO_DIE",
    "ID_ANI_MARIO_IDLE_RIGHT",
    "ID_ANI_MARIO_IDLE_LEFT",
    "ID_ANI_MARIO_WALKING_RIGHT",
    "ID_ANI_MARIO_WALKING_LEFT",
    "ID_ANI_MARIO_RUNNING_RIGHT",
    "ID_ANI_MARIO_RUNNING_LEFT",
    "ID_ANI_MARIO_JUMP_WALK_RIGHT",
    "ID_ANI_MARIO_JUMP_WALK_LEFT",
    "ID_ANI_MARIO_JUMP_RUN_RIGHT",
    "ID_ANI_MARIO_JUMP_RUN_LEFT",
    "ID_ANI_MARIO_SIT_RIGHT",
    "ID_ANI_MARIO_SIT_LEFT",
    "ID_ANI_MARIO_BRACE_RIGHT",
    "ID_ANI_MARIO_BRACE_LEFT",
    "ID_ANI_MARIO_SMALL_IDLE_RIGHT",
    "ID_ANI_MARIO_SMALL_IDLE_LEFT",
    "ID_ANI_MARIO_SMALL_WALKING_RIGHT",
    "ID_ANI_MARIO_SMALL_WALKING_LEFT",
    "ID_ANI_MARIO_SMALL_RUNNING_RIGHT",
    "ID_ANI_MARIO_SMALL_RUNNING_LEFT",
    "ID_ANI_MARIO_SMALL_BRACE_RIGHT",
    "ID_ANI_MARIO_SMALL_BRACE_LEFT",
    "ID_ANI_MARIO_SMALL_JUMP_WALK_RIGHT",
    "ID_ANI_MARIO_SMALL_JUMP_WALK_LEFT",
    "ID_ANI_MARIO_SMALL_JUMP_RUN_RIGHT",
    "ID_ANI_MARIO_SMALL_JUMP_RUN_LEFT",
    "ID_ANI_MARIO_TAIL_IDLE_RIGHT",
    "ID_ANI_MARIO_TAIL_IDLE_LEFT",
    "ID_ANI_MARIO_TAIL_WALKING_RIGHT",
    "ID_ANI_MARIO_TAIL_WALKING_LEFT",
    "ID_ANI_MARIO_TAIL_RUNNING_RIGHT",
    "ID_ANI_MARIO_TAIL_RUNNING_LEFT",
    "ID_ANI_MARIO_TAIL_JUMP_WALK_RIGHT",
    "ID_ANI_MARIO_TAIL_JUMP_WALK_LEFT",
    "ID_ANI_MARIO_TAIL_JUMP_RUN_RIGHT",
    "ID_ANI_MARIO_TAIL_JUMP_RUN_LEFT",
    "ID_ANI_MARIO_TAIL_SIT_RIGHT",
    "ID_ANI_MARIO_TAIL_SIT_LEFT",
    "ID_ANI_MARIO_TAIL_BRACE_RIGHT",
    "ID_ANI_MARIO_TAIL_BRACE_LEFT",
    "MarioState",
    "MarioLevel",
    "Mario",
]

log = logging.getLogger(__name__)

MARIO_WALKING_SPEED = 0.1
MARIO_RUNNING_SPEED = 0.2
MARIO_ACCEL_WALK_X = 0.0005
MARIO_ACCEL_RUN_X = 0.0007
MARIO_JUMP_SPEED_Y = 0.5
MARIO_JUMP_RUN_SPEED_Y = 0.6
MARIO_GRAVITY = 0.002
MARIO_JUMP_DEFLECT_SPEED = 0.4

MARIO_BIG_BBOX_WIDTH = 14
MARIO_BIG_BBOX_HEIGHT = 24
MARIO_BIG_SITTING_BBOX_WIDTH = 14
MARIO_BIG_SITTING_BBOX_HEIGHT = 16
MARIO_SIT_HEIGHT_ADJUST = (MARIO_BIG_BBOX_HEIGHT - MARIO_BIG_SITTING_BBOX_HEIGHT) // 2
MARIO_TAIL_BBOX_WIDTH = 21
MARIO_TAIL_BBOX_HEIGHT = 24
MARIO_TAIL_SITTING_BBOX_WIDTH = 21
MARIO_TAIL_SITTING_BBOX_HEIGHT = 16
MARIO_SMALL_BBOX_WIDTH = 13
MARIO_SMALL_BBOX_HEIGHT = 12

MARIO_UNTOUCHABLE_TIME = 2500
MARIO_MIN_X = 12

ID_ANI_MARIO_IDLE_RIGHT = 400
ID_ANI_MARIO_IDLE_LEFT = 401
ID_ANI_MARIO_WALKING_RIGHT = 500
ID_ANI_MARIO_WALKING_LEFT = 501
ID_ANI_MARIO_RUNNING_RIGHT = 600
ID_ANI_MARIO_RUNNING_LEFT = 601
ID_ANI_MARIO_JUMP_WALK_RIGHT = 700
ID_ANI_MARIO_JUMP_WALK_LEFT = 701
ID_ANI_MARIO_JUMP_RUN_RIGHT = 800
ID_ANI_MARIO_JUMP_RUN_LEFT = 801
ID_ANI_MARIO_SIT_RIGHT = 900
ID_ANI_MARIO_SIT_LEFT = 901
ID_ANI_MARIO_BRACE_RIGHT = 1000
ID_ANI_MARIO_BRACE_LEFT = 1001
ID_ANI_MARIO_DIE = 999

ID_ANI_MARIO_SMALL_IDLE_RIGHT = 1100
ID_ANI_MARIO_SMALL_IDLE_LEFT = 1102
ID_ANI_MARIO_SMALL_WALKING_RIGHT = 1200
ID_ANI_MARIO_SMALL_WALKING_LEFT = 1201
ID_ANI_MARIO_SMALL_RUNNING_RIGHT = 1300
ID_ANI_MARIO_SMALL_RUNNING_LEFT = 1301
ID_ANI_MARIO_SMALL_BRACE_RIGHT = 1400
ID_ANI_MARIO_SMALL_BRACE_LEFT = 1401
ID_ANI_MARIO_SMALL_JUMP_WALK_RIGHT = 1500
ID_ANI_MARIO_SMALL_JUMP_WALK_LEFT = 1501
ID_ANI_MARIO_SMALL_JUMP_RUN_RIGHT = 1600
ID_ANI_MARIO_SMALL_JUMP_RUN_LEFT = 1601

ID_ANI_MARIO_TAIL_IDLE_RIGHT = 1700
ID_ANI_MARIO_TAIL_IDLE_LEFT = 1701
ID_ANI_MARIO_TAIL_WALKING_RIGHT = 1800
ID_ANI_MARIO_TAIL_WALKING_LEFT = 1801
ID_ANI_MARIO_TAIL_RUNNING_RIGHT = 1900
ID_ANI_MARIO_TAIL_RUNNING_LEFT = 1901
ID_ANI_MARIO_TAIL_JUMP_WALK_RIGHT = 2000
ID_ANI_MARIO_TAIL_JUMP_WALK_LEFT = 2001
ID_ANI_MARIO_TAIL_JUMP_RUN_RIGHT = 2100
ID_ANI_MARIO_TAIL_JUMP_RUN_LEFT = 2101
ID_ANI_MARIO_TAIL_SIT_RIGHT = 2200
ID_ANI_MARIO_TAIL_SIT_LEFT = 2201
ID_ANI_MARIO_TAIL_BRACE_RIGHT = 2300
ID_ANI_MARIO_TAIL_BRACE_LEFT = 2301


class MarioState(IntEnum):
    DIE = -10
    IDLE = 0
    WALKING_RIGHT = 100
    WALKING_LEFT = 200
    JUMP = 300
    RELEASE_JUMP = 301
    RUNNING_RIGHT = 400
    RUNNING_LEFT = 500
    SIT = 600
    SIT_RELEASE = 601


class MarioLevel(IntEnum):
    SMALL = 1
    BIG = 2
    TAIL = 3


@dataclass(frozen=True)
class _AnimationSet:
    """Animation ids for one level, each as (right, left)."""

    idle: tuple[int, int]
    walking: tuple[int, int]
    running: tuple[int, int]
    jump_walk: tuple[int, int]
    jump_run: tuple[int, int]
    sit: tuple[int, int]
    brace: tuple[int, int]


_ANIMATION_SETS = {
    MarioLevel.SMALL: _AnimationSet(
        idle=(ID_ANI_MARIO_SMALL_IDLE_RIGHT, ID_ANI_MARIO_SMALL_IDLE_LEFT),
        walking=(ID_ANI_MARIO_SMALL_WALKING_RIGHT, ID_ANI_MARIO_SMALL_WALKING_LEFT),
        running=(ID_ANI_MARIO_SMALL_RUNNING_RIGHT, ID_ANI_MARIO_SMALL_RUNNING_LEFT),
        jump_walk=(ID_ANI_MARIO_SMALL_JUMP_WALK_RIGHT, ID_ANI_MARIO_SMALL_JUMP_WALK_LEFT),
        jump_run=(ID_ANI_MARIO_SMALL_JUMP_RUN_RIGHT, ID_ANI_MARIO_SMALL_JUMP_RUN_LEFT),
        sit=(ID_ANI_MARIO_SIT_RIGHT, ID_ANI_MARIO_SIT_LEFT),
        brace=(ID_ANI_MARIO_SMALL_BRACE_RIGHT, ID_ANI_MARIO_SMALL_BRACE_LEFT),
    ),
    MarioLevel.BIG: _AnimationSet(
        idle=(ID_ANI_MARIO_IDLE_RIGHT, ID_ANI_MARIO_IDLE_LEFT),
        walking=(ID_ANI_MARIO_WALKING_RIGHT, ID_ANI_MARIO_WALKING_LEFT),
        running=(ID_ANI_MARIO_RUNNING_RIGHT, ID_ANI_MARIO_RUNNING_LEFT),
        jump_walk=(ID_ANI_MARIO_JUMP_WALK_RIGHT, ID_ANI_MARIO_JUMP_WALK_LEFT),
        jump_run=(ID_ANI_MARIO_JUMP_RUN_RIGHT, ID_ANI_MARIO_JUMP_RUN_LEFT),
        sit=(ID_ANI_MARIO_SIT_RIGHT, ID_ANI_MARIO_SIT_LEFT),
        brace=(ID_ANI_MARIO_BRACE_RIGHT, ID_ANI_MARIO_BRACE_LEFT),
    ),
    MarioLevel.TAIL: _AnimationSet(
        idle=(ID_ANI_MARIO_TAIL_IDLE_RIGHT, ID_ANI_MARIO_TAIL_IDLE_LEFT),
        walking=(ID_ANI_MARIO_TAIL_WALKING_RIGHT, ID_ANI_MARIO_TAIL_WALKING_LEFT),
        running=(ID_ANI_MARIO_TAIL_RUNNING_RIGHT, ID_ANI_MARIO_TAIL_RUNNING_LEFT),
        jump_walk=(ID_ANI_MARIO_TAIL_JUMP_WALK_RIGHT, ID_ANI_MARIO_TAIL_JUMP_WALK_LEFT),
        jump_run=(ID_ANI_MARIO_TAIL_JUMP_RUN_RIGHT, ID_ANI_MARIO_TAIL_JUMP_RUN_LEFT),
        sit=(ID_ANI_MARIO_TAIL_SIT_RIGHT, ID_ANI_MARIO_TAIL_SIT_LEFT),
        brace=(ID_ANI_MARIO_TAIL_BRACE_RIGHT, ID_ANI_MARIO_TAIL_BRACE_LEFT),
    ),
}

_BBOX_SIZES = {
    # level: ((width, height) standing, (width, height) sitting)
    MarioLevel.SMALL: (
        (MARIO_SMALL_BBOX_WIDTH, MARIO_SMALL_BBOX_HEIGHT),
        (MARIO_SMALL_BBOX_WIDTH, MARIO_SMALL_BBOX_HEIGHT),
    ),
    MarioLevel.BIG: (
        (MARIO_BIG_BBOX_WIDTH, MARIO_BIG_BBOX_HEIGHT),
        (MARIO_BIG_SITTING_BBOX_WIDTH, MARIO_BIG_SITTING_BBOX_HEIGHT),
    ),
    MarioLevel.TAIL: (
        (MARIO_TAIL_BBOX_WIDTH, MARIO_TAIL_BBOX_HEIGHT),
        (MARIO_TAIL_SITTING_BBOX_WIDTH, MARIO_TAIL_SITTING_BBOX_HEIGHT),
    ),
}


class Mario(GameObject):
    """The player: walks, runs, jumps, sits, stomps enemies and grabs coins.

    ``on_portal`` is called with the target scene id when a portal is touched;
    the id is also kept in ``next_scene_id``.
    """

    def __init__(
        self,
        x: float,
        y: float,
        *,
        animations: AnimationRegistry | None = None,
        clock: Callable[[], int] = monotonic_ms,
        on_portal: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(x, y)
        self.is_sitting = False
        self.max_vx = 0.0
        self.ax = 0.0
        self.ay = MARIO_GRAVITY
        self.level = MarioLevel.BIG
        self.untouchable = 0
        self.untouchable_start: int | None = None
        self.is_on_platform = False
        self.coin = 0
        self.next_scene_id: int | None = None
        self.animations = animations if animations is not None else AnimationRegistry()
        self.on_portal = on_portal
        self._clock = clock

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        if self.x - MARIO_MIN_X < 0:
            self.x = float(MARIO_MIN_X)
        self.vy += self.ay * dt
        self.vx += self.ax * dt
        if abs(self.vx) > abs(self.max_vx):
            self.vx = self.max_vx

        if (
            self.untouchable_start is None
            or self._clock() - self.untouchable_start > MARIO_UNTOUCHABLE_TIME
        ):
            self.untouchable_start = None
            self.untouchable = 0

        self.is_on_platform = False
        process(self, dt, co_objects)

    def on_no_collision(self, dt: int) -> None:
        self.x += self.vx * dt
        self.y += self.vy * dt

    def on_collision_with(self, event: CollisionEvent) -> None:
        obj = event.obj
        if event.ny != 0 and obj.is_blocking():
            self.vy = 0.0
            if event.ny < 0:
                self.is_on_platform = True
        elif event.nx != 0 and obj.is_blocking():
            self.vx = 0.0

        if isinstance(obj, Goomba):
            self._hit_enemy(event, obj, GoombaState.DIE)
        elif isinstance(obj, Coin):
            obj.delete()
            self.coin += 1
        elif isinstance(obj, Koopa):
            self._hit_enemy(event, obj, KoopaState.SHELL)
        elif isinstance(obj, Portal):
            self.next_scene_id = obj.scene_id
            if self.on_portal is not None:
                self.on_portal(obj.scene_id)

    def _hit_enemy(self, event: CollisionEvent, enemy: GameObject, beaten: int) -> None:
        """Stomp the enemy from above, or get hurt by it from any other side."""
        if event.ny < 0:
            if enemy.state != beaten:
                enemy.set_state(beaten)
                self.vy = -MARIO_JUMP_DEFLECT_SPEED
        elif self.untouchable == 0 and enemy.state != beaten:
            if self.level > MarioLevel.SMALL:
                self.level = MarioLevel(self.level - 1)
                self.start_untouchable()
            else:
                log.info("Mario dies")
                self.set_state(MarioState.DIE)

    def animation_id(self) -> int:
        """Id of the animation that matches the current state and level."""
        if self.state == MarioState.DIE:
            return ID_ANI_MARIO_DIE
        ids = _ANIMATION_SETS[MarioLevel(self.level)]
        right = 0 if self.nx >= 0 else 1
        if not self.is_on_platform:
            pair = ids.jump_run if abs(self.ax) == MARIO_ACCEL_RUN_X else ids.jump_walk
            return pair[right]
        facing = 0 if self.nx > 0 else 1
        if self.is_sitting:
            return ids.sit[facing]
        if self.vx == 0:
            return ids.idle[facing]
        if self.vx > 0:
            if self.ax < 0:
                return ids.brace[0]
            if self.ax == MARIO_ACCEL_RUN_X:
                return ids.running[0]
            if self.ax == MARIO_ACCEL_WALK_X:
                return ids.walking[0]
        else:
            if self.ax > 0:
                return ids.brace[1]
            if self.ax == -MARIO_ACCEL_RUN_X:
                return ids.running[1]
            if self.ax == -MARIO_ACCEL_WALK_X:
                return ids.walking[1]
        return ids.idle[0]

    def render(self, canvas: Canvas) -> None:
        self.animations.get(self.animation_id()).render(canvas, self.x, self.y)
        canvas.title = f"Coins: {self.coin}"

    def set_state(self, state: int) -> None:
        if self.state == MarioState.DIE:
            return

        if state == MarioState.RUNNING_RIGHT:
            if not self.is_sitting:
                self.max_vx, self.ax, self.nx = MARIO_RUNNING_SPEED, MARIO_ACCEL_RUN_X, 1
        elif state == MarioState.RUNNING_LEFT:
            if not self.is_sitting:
                self.max_vx, self.ax, self.nx = -MARIO_RUNNING_SPEED, -MARIO_ACCEL_RUN_X, -1
        elif state == MarioState.WALKING_RIGHT:
            if not self.is_sitting:
                self.max_vx, self.ax, self.nx = MARIO_WALKING_SPEED, MARIO_ACCEL_WALK_X, 1
        elif state == MarioState.WALKING_LEFT:
            if not self.is_sitting:
                self.max_vx, self.ax, self.nx = -MARIO_WALKING_SPEED, -MARIO_ACCEL_WALK_X, -1
        elif state == MarioState.JUMP:
            if not self.is_sitting and self.is_on_platform:
                if abs(self.vx) == MARIO_RUNNING_SPEED:
                    self.vy = -MARIO_JUMP_RUN_SPEED_Y
                else:
                    self.vy = -MARIO_JUMP_SPEED_Y
        elif state == MarioState.RELEASE_JUMP:
            if self.vy < 0:
                self.vy += MARIO_JUMP_SPEED_Y / 2
        elif state == MarioState.SIT:
            if self.is_on_platform and self.level != MarioLevel.SMALL:
                state = MarioState.IDLE
                self.is_sitting = True
                self.vx = self.vy = 0.0
                self.y += MARIO_SIT_HEIGHT_ADJUST
        elif state == MarioState.SIT_RELEASE:
            if self.is_sitting:
                self.is_sitting = False
                state = MarioState.IDLE
                self.y -= MARIO_SIT_HEIGHT_ADJUST
        elif state == MarioState.IDLE:
            self.ax = self.vx = 0.0
        elif state == MarioState.DIE:
            self.vy = -MARIO_JUMP_DEFLECT_SPEED
            self.vx = self.ax = 0.0

        super().set_state(state)

    def set_level(self, level: int) -> None:
        """Change level, lifting a small Mario so he does not sink into the floor."""
        new_level = MarioLevel(level)
        if self.level == MarioLevel.SMALL:
            self.y -= (MARIO_BIG_BBOX_HEIGHT - MARIO_SMALL_BBOX_HEIGHT) // 2
        self.level = new_level

    def start_untouchable(self) -> None:
        self.untouchable = 1
        self.untouchable_start = self._clock()

    def bounding_box(self) -> tuple[float, float, float, float]:
        standing, sitting = _BBOX_SIZES[MarioLevel(self.level)]
        width, height = sitting if self.is_sitting and self.level != MarioLevel.SMALL else standing
        left = self.x - width // 2
        top = self.y - height // 2
        return left, top, left + width, top + height

    def is_collidable(self) -> bool:
        return self.state != MarioState.DIE

    def is_blocking(self) -> int:
        return int(self.state != MarioState.DIE and self.untouchable == 0)