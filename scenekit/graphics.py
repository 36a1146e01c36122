"""Textures, sprites, animations and the registries that hold them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from scenekit.utils import monotonic_ms

__all__ = [
    "Texture",
    "TextureRegistry",
    "Sprite",
    "SpriteRegistry",
    "AnimationFrame",
    "Animation",
    "AnimationRegistry",
    "Canvas",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Texture:
    """An image source; width and height are -1 when unknown."""

    path: str
    width: int = -1
    height: int = -1


class TextureRegistry:
    """Textures by numeric id."""

    def __init__(self) -> None:
        self._textures: dict[int, Texture] = {}

    def add(self, texture_id: int, texture: Texture) -> None:
        self._textures[texture_id] = texture

    def get(self, texture_id: int) -> Texture:
        try:
            return self._textures[texture_id]
        except KeyError:
            raise KeyError(f"texture id {texture_id} not found") from None

    def clear(self) -> None:
        self._textures.clear()

    def __contains__(self, texture_id: object) -> bool:
        return texture_id in self._textures

    def __len__(self) -> int:
        return len(self._textures)


@dataclass(frozen=True)
class Sprite:
    """A rectangle cut out of a texture."""

    id: int
    left: int
    top: int
    right: int
    bottom: int
    texture: Texture | None = None

    def draw(self, canvas: Canvas, x: float, y: float) -> None:
        """Draw the sprite centred at (x, y)."""
        canvas.draw_sprite(self, x, y)


class SpriteRegistry:
    """Sprites by numeric id."""

    def __init__(self) -> None:
        self._sprites: dict[int, Sprite] = {}

    def add(
        self,
        sprite_id: int,
        left: int,
        top: int,
        right: int,
        bottom: int,
        texture: Texture | None,
    ) -> Sprite:
        sprite = Sprite(sprite_id, left, top, right, bottom, texture)
        self._sprites[sprite_id] = sprite
        return sprite

    def get(self, sprite_id: int) -> Sprite:
        try:
            return self._sprites[sprite_id]
        except KeyError:
            raise KeyError(f"sprite id {sprite_id} not found") from None

    def clear(self) -> None:
        self._sprites.clear()

    def __contains__(self, sprite_id: object) -> bool:
        return sprite_id in self._sprites

    def __len__(self) -> int:
        return len(self._sprites)


@dataclass(frozen=True)
class AnimationFrame:
    """One sprite shown for ``time`` milliseconds."""

    sprite: Sprite
    time: int


class Animation:
    """A looping sequence of frames driven by a millisecond clock."""

    def __init__(
        self, default_time: int = 100, clock: Callable[[], int] = monotonic_ms
    ) -> None:
        self.default_time = default_time
        self.frames: list[AnimationFrame] = []
        self.current_frame = -1
        self.last_frame_time = -1
        self._clock = clock

    def add(self, sprite: Sprite, time: int = 0) -> None:
        """Append a frame; a time of 0 means the default frame time."""
        if sprite is None:
            raise ValueError("animation frame needs a sprite")
        self.frames.append(AnimationFrame(sprite, time or self.default_time))

    def advance(self, now: int) -> AnimationFrame:
        """Move to the frame due at ``now`` and return it."""
        if not self.frames:
            raise ValueError("animation has no frames")
        if self.current_frame == -1:
            self.current_frame = 0
            self.last_frame_time = now
        elif now - self.last_frame_time > self.frames[self.current_frame].time:
            self.current_frame = (self.current_frame + 1) % len(self.frames)
            self.last_frame_time = now
        return self.frames[self.current_frame]

    def render(self, canvas: Canvas, x: float, y: float) -> None:
        self.advance(self._clock()).sprite.draw(canvas, x, y)


class AnimationRegistry:
    """Animations by numeric id."""

    def __init__(self) -> None:
        self._animations: dict[int, Animation] = {}

    def add(self, animation_id: int, animation: Animation) -> None:
        if animation_id in self._animations:
            log.warning("Animation %d already exists", animation_id)
        self._animations[animation_id] = animation

    def get(self, animation_id: int) -> Animation:
        try:
            return self._animations[animation_id]
        except KeyError:
            raise KeyError(f"animation id {animation_id} not found") from None

    def clear(self) -> None:
        self._animations.clear()

    def __contains__(self, animation_id: object) -> bool:
        return animation_id in self._animations

    def __len__(self) -> int:
        return len(self._animations)


@dataclass
class Canvas:
    """A render target that records draw calls in order.

    A display backend can subclass it and override the two draw methods.
    """

    cam_x: float = 0.0
    cam_y: float = 0.0
    title: str = ""
    commands: list[tuple[Any, ...]] = field(default_factory=list)

    def draw_sprite(self, sprite: Sprite, x: float, y: float) -> None:
        self.commands.append(("sprite", sprite, x, y))

    def draw_box(
        self, x: float, y: float, width: int, height: int, alpha: float
    ) -> None:
        self.commands.append(("box", x, y, width, height, alpha))