"""Swept AABB collision detection and response."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from scenekit.gameobject import BLOCKS_FROM_ABOVE

if TYPE_CHECKING:
    from scenekit.gameobject import GameObject

__all__ = [
    "BLOCK_PUSH_FACTOR",
    "CollisionEvent",
    "swept_aabb",
    "sweep",
    "scan",
    "filter_events",
    "process",
]

BLOCK_PUSH_FACTOR = 0.4


@dataclass
class CollisionEvent:
    """A potential hit of ``src_obj`` against ``obj`` during one move.

    ``dx`` and ``dy`` are the movement relative to ``obj``.
    """

    t: float
    nx: float
    ny: float
    dx: float = 0.0
    dy: float = 0.0
    obj: GameObject | None = None
    src_obj: GameObject | None = None
    is_deleted: bool = False

    def was_collided(self) -> bool:
        return 0.0 <= self.t <= 1.0


def swept_aabb(
    ml: float, mt: float, mr: float, mb: float,
    dx: float, dy: float,
    sl: float, st: float, sr: float, sb: float,
) -> tuple[float, float, float]:
    """Sweep a moving box by (dx, dy) against a static box.

    Returns (t, nx, ny): the fraction of the move at first contact and the
    contact normal, or (-1.0, 0.0, 0.0) when the boxes do not meet.
    """
    miss = (-1.0, 0.0, 0.0)

    bl = ml if dx > 0 else ml + dx
    bt = mt if dy > 0 else mt + dy
    br = mr + dx if dx > 0 else mr
    bb = mb + dy if dy > 0 else mb
    if br < sl or bl > sr or bb < st or bt > sb:
        return miss

    if dx == 0 and dy == 0:
        return miss

    if dx == 0:
        tx_entry, tx_exit = -9999999.0, 99999999.0
    elif dx > 0:
        tx_entry, tx_exit = (sl - mr) / dx, (sr - ml) / dx
    else:
        tx_entry, tx_exit = (sr - ml) / dx, (sl - mr) / dx

    if dy == 0:
        ty_entry, ty_exit = -99999999999.0, 99999999999.0
    elif dy > 0:
        ty_entry, ty_exit = (st - mb) / dy, (sb - mt) / dy
    else:
        ty_entry, ty_exit = (sb - mt) / dy, (st - mb) / dy

    if (tx_entry < 0.0 and ty_entry < 0.0) or tx_entry > 1.0 or ty_entry > 1.0:
        return miss

    t_entry = max(tx_entry, ty_entry)
    t_exit = min(tx_exit, ty_exit)
    if t_entry > t_exit:
        return miss

    if tx_entry > ty_entry:
        return t_entry, (-1.0 if dx > 0 else 1.0), 0.0
    return t_entry, 0.0, (-1.0 if dy > 0 else 1.0)


def sweep(src: GameObject, dt: int, dest: GameObject) -> CollisionEvent:
    """Sweep ``src`` against ``dest`` over ``dt``, both possibly moving."""
    dx = src.vx * dt - dest.vx * dt
    dy = src.vy * dt - dest.vy * dt
    t, nx, ny = swept_aabb(*src.bounding_box(), dx, dy, *dest.bounding_box())
    return CollisionEvent(t, nx, ny, dx, dy, obj=dest, src_obj=src)


def scan(
    src: GameObject, dt: int, dests: Iterable[GameObject] | None
) -> list[CollisionEvent]:
    """Return the events for every object in ``dests`` that ``src`` hits."""
    events = (sweep(src, dt, dest) for dest in dests or ())
    return [event for event in events if event.was_collided()]


def filter_events(
    events: Iterable[CollisionEvent],
    filter_block: bool = True,
    filter_x: bool = True,
    filter_y: bool = True,
) -> tuple[CollisionEvent | None, CollisionEvent | None]:
    """Pick the earliest hit on each axis.

    With ``filter_block`` set, only blocking objects count. Objects that block
    from above count only when hit from above. Returns (col_x, col_y).
    """
    min_tx = min_ty = 1.0
    col_x: CollisionEvent | None = None
    col_y: CollisionEvent | None = None

    for event in events:
        if event.is_deleted or event.obj.is_deleted:
            continue
        blocking = event.obj.is_blocking()
        if filter_block and not blocking:
            continue
        if not event.ny < 0 and blocking == BLOCKS_FROM_ABOVE:
            continue
        if filter_x and event.t < min_tx and event.nx != 0:
            min_tx, col_x = event.t, event
        if filter_y and event.t < min_ty and event.ny != 0:
            min_ty, col_y = event.t, event

    return col_x, col_y


def process(
    src: GameObject, dt: int, co_objects: Sequence[GameObject] | None
) -> None:
    """Move ``src`` for ``dt`` against ``co_objects``, resolving blocking hits.

    Blocking hits stop the object just short of the obstacle; every hit,
    blocking or not, is reported through ``src.on_collision_with``.
    """
    events = scan(src, dt, co_objects) if src.is_collidable() else []

    if not events:
        src.on_no_collision(dt)
    else:
        col_x, col_y = filter_events(events)
        x, y = src.x, src.y
        dx = src.vx * dt
        dy = src.vy * dt

        if col_x is not None and col_y is not None:
            if col_y.t < col_x.t:
                y += col_y.t * dy + col_y.ny * BLOCK_PUSH_FACTOR
                src.x, src.y = x, y
                src.on_collision_with(col_y)

                col_x.is_deleted = True
                events.append(sweep(src, dt, col_x.obj))
                col_x_other, _ = filter_events(events, True, True, False)
                if col_x_other is not None:
                    x += col_x_other.t * dx + col_x_other.nx * BLOCK_PUSH_FACTOR
                    src.on_collision_with(col_x_other)
                else:
                    x += dx
            else:
                x += col_x.t * dx + col_x.nx * BLOCK_PUSH_FACTOR
                src.x, src.y = x, y
                src.on_collision_with(col_x)

                col_y.is_deleted = True
                events.append(sweep(src, dt, col_y.obj))
                _, col_y_other = filter_events(events, True, False, True)
                if col_y_other is not None:
                    y += col_y_other.t * dy + col_y_other.ny * BLOCK_PUSH_FACTOR
                    src.on_collision_with(col_y_other)
                else:
                    y += dy
        elif col_x is not None:
            x += col_x.t * dx + col_x.nx * BLOCK_PUSH_FACTOR
            y += dy
            src.on_collision_with(col_x)
        elif col_y is not None:
            x += dx
            y += col_y.t * dy + col_y.ny * BLOCK_PUSH_FACTOR
            src.on_collision_with(col_y)
        else:
            x += dx
            y += dy

        src.x, src.y = x, y

    for event in events:
        if event.is_deleted or event.obj.is_blocking():
            continue
        src.on_collision_with(event)