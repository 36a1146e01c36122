"""Base class for everything that lives in a scene."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scenekit.collision import CollisionEvent
    from scenekit.graphics import Canvas

__all__ = ["GameObject", "BBOX_ALPHA", "BLOCKS_FROM_ABOVE"]

BBOX_ALPHA = 0.25
BLOCKS_FROM_ABOVE = 2
"""Value of ``is_blocking`` for objects that only block from above."""


class GameObject(ABC):
    """A positioned, moving object with a bounding box.

    ``is_blocking`` returns 0 (pass through), 1 (solid) or
    ``BLOCKS_FROM_ABOVE`` (solid only when landed on).
    """

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.vx = 0.0
        self.vy = 0.0
        self.nx = 1
        self.state = -1
        self.is_deleted = False

    @abstractmethod
    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return (left, top, right, bottom)."""

    def update(self, dt: int, co_objects: Sequence[GameObject] | None = None) -> None:
        """Advance the object by ``dt`` milliseconds."""

    @abstractmethod
    def render(self, canvas: Canvas) -> None:
        """Draw the object."""

    def render_bounding_box(self, canvas: Canvas) -> None:
        """Draw the bounding box as a translucent box in screen space."""
        left, top, right, bottom = self.bounding_box()
        width = int(right) - int(left)
        height = int(bottom) - int(top)
        canvas.draw_box(
            self.x - canvas.cam_x, self.y - canvas.cam_y, width, height, BBOX_ALPHA
        )

    def set_state(self, state: int) -> None:
        self.state = state

    def delete(self) -> None:
        self.is_deleted = True

    def is_collidable(self) -> bool:
        """Whether the object looks for collisions while moving."""
        return False

    def is_blocking(self) -> int:
        return 1

    def on_no_collision(self, dt: int) -> None:
        """Called when a move found nothing to hit."""

    def on_collision_with(self, event: CollisionEvent) -> None:
        """Called for each collision found during a move."""