"""Scenes: loading objects, assets and maps from files, and running them."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from os import PathLike
from pathlib import Path
from typing import TYPE_CHECKING

from scenekit.blocks import Brick, Coin, ColorBox, MovingPlatform, Platform, Portal, SolidBlock
from scenekit.controls import KeyEventHandler, PlayerKeyHandler
from scenekit.enemies import Goomba, Koopa, Plant
from scenekit.gameobject import GameObject
from scenekit.graphics import Animation, AnimationRegistry, SpriteRegistry, TextureRegistry
from scenekit.mario import Mario
from scenekit.tilemap import TileMap, load_tile_map
from scenekit.utils import monotonic_ms, split

if TYPE_CHECKING:
    from scenekit.graphics import Canvas

__all__ = [
    "ID_TEX_MARIO",
    "ID_TEX_ENEMY",
    "ID_TEX_MISC",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "CAMERA_OFFSET_X",
    "CAMERA_OFFSET_Y",
    "ObjectType",
    "Camera",
    "Assets",
    "Scene",
    "PlayScene",
]

log = logging.getLogger(__name__)

ID_TEX_MARIO = 0
ID_TEX_ENEMY = 10
ID_TEX_MISC = 20

SCREEN_WIDTH = 320
SCREEN_HEIGHT = 240

CAMERA_OFFSET_X = 12
CAMERA_OFFSET_Y = 7


class ObjectType(IntEnum):
    """Object kinds as numbered in scene files."""

    MARIO = 0
    BRICK = 1
    GOOMBA = 2
    KOOPA = 3
    COIN = 4
    PLATFORM = 5
    MOVING_PLATFORM = 6
    PLANT = 7
    PORTAL = 50
    COLOR_BOX = 51
    SOLID_BLOCK = 100


_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_int(text: str) -> int:
    """Leading integer of ``text``, or 0 if there is none."""
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _to_float(text: str) -> float:
    """Leading number of ``text``, or 0.0 if there is none."""
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class Camera:
    """The view onto the scene, in world coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT

    def follow(
        self,
        target_x: float,
        target_y: float,
        world_width: int | None = None,
        world_height: int | None = None,
    ) -> None:
        """Centre on a target, kept inside the world where its size is known."""
        x = target_x - CAMERA_OFFSET_X - self.width // 2
        y = target_y - CAMERA_OFFSET_Y - self.height // 2
        if x < 0:
            x = 0
        if world_width is not None and x + self.width > world_width:
            x = world_width - self.width
        if y < 0:
            y = 0
        if world_height is not None and y + self.height > world_height:
            y = world_height - self.height
        self.x, self.y = float(x), float(y)


@dataclass
class Assets:
    """The texture, sprite and animation registries a scene draws from."""

    textures: TextureRegistry = field(default_factory=TextureRegistry)
    sprites: SpriteRegistry = field(default_factory=SpriteRegistry)
    animations: AnimationRegistry = field(default_factory=AnimationRegistry)


class Scene(ABC):
    """A scene read from a file, with its own keyboard handler."""

    def __init__(self, scene_id: int, file_path: str | PathLike[str]) -> None:
        self.scene_id = scene_id
        self.file_path = Path(file_path)
        self.key_handler: KeyEventHandler | None = None

    @abstractmethod
    def load(self) -> None:
        """Read the scene file."""

    @abstractmethod
    def unload(self) -> None:
        """Drop everything the scene created."""

    @abstractmethod
    def update(self, dt: int) -> None:
        """Advance the scene by ``dt`` milliseconds."""

    @abstractmethod
    def render(self, canvas: Canvas) -> None:
        """Draw the scene."""


class PlayScene(Scene):
    """A level with a player, objects and a tile map.

    The scene file has ``[ASSETS]``, ``[OBJECTS]`` and ``[TILEMAP]`` sections
    of tab-separated lines; lines starting with ``#`` are comments. Relative
    paths are taken from the scene file's directory. Textures are expected
    to be in ``assets.textures`` already.
    """

    def __init__(
        self,
        scene_id: int,
        file_path: str | PathLike[str],
        *,
        assets: Assets | None = None,
        camera: Camera | None = None,
        clock: Callable[[], int] = monotonic_ms,
        on_portal: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(scene_id, file_path)
        self.assets = assets if assets is not None else Assets()
        self.camera = camera if camera is not None else Camera()
        self.clock = clock
        self.on_portal = on_portal
        self.player: Mario | None = None
        self.tile_map: TileMap | None = None
        self.objects: list[GameObject] = []
        self.key_handler = PlayerKeyHandler(self)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.file_path.parent / candidate

    def load(self) -> None:
        log.info("Start loading scene from %s", self.file_path)
        sections: dict[str, Callable[[str], None]] = {
            "[ASSETS]": self._parse_assets,
            "[OBJECTS]": self._parse_object,
            "[TILEMAP]": self._parse_tile_map,
        }
        section: Callable[[str], None] | None = None
        with open(self.file_path, encoding="utf-8") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if line.startswith("#"):
                    continue
                if line in sections:
                    section = sections[line]
                    continue
                if line.startswith("["):
                    section = None
                    continue
                if section is not None:
                    section(line)
        log.info("Done loading scene %s", self.file_path)

    def load_assets(self, path: str | PathLike[str]) -> None:
        """Read ``[SPRITES]`` and ``[ANIMATIONS]`` from an asset file."""
        log.info("Start loading assets from %s", path)
        sections: dict[str, Callable[[str], None]] = {
            "[SPRITES]": self._parse_sprite,
            "[ANIMATIONS]": self._parse_animation,
        }
        section: Callable[[str], None] | None = None
        with open(path, encoding="utf-8") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if line.startswith("#"):
                    continue
                if line in sections:
                    section = sections[line]
                    continue
                if line.startswith("["):
                    section = None
                    continue
                if section is not None:
                    section(line)
        log.info("Done loading assets from %s", path)

    def _parse_assets(self, line: str) -> None:
        path = split(line)[0]
        if path:
            self.load_assets(self._resolve(path))

    def _parse_tile_map(self, line: str) -> None:
        if line:
            self.tile_map = load_tile_map(self._resolve(line), self.assets.textures)

    def _parse_sprite(self, line: str) -> None:
        tokens = split(line)
        if len(tokens) < 6:
            return
        sprite_id, left, top, right, bottom, texture_id = (_to_int(t) for t in tokens[:6])
        if texture_id not in self.assets.textures:
            log.error("Texture ID %d not found", texture_id)
            return
        self.assets.sprites.add(
            sprite_id, left, top, right, bottom, self.assets.textures.get(texture_id)
        )

    def _parse_animation(self, line: str) -> None:
        tokens = split(line)
        if len(tokens) < 3:
            return
        animation = Animation(clock=self.clock)
        for sprite_token, time_token in zip(tokens[1::2], tokens[2::2]):
            sprite_id = _to_int(sprite_token)
            if sprite_id not in self.assets.sprites:
                log.error("Sprite ID %d not found", sprite_id)
                continue
            animation.add(self.assets.sprites.get(sprite_id), _to_int(time_token))
        self.assets.animations.add(_to_int(tokens[0]), animation)

    def _parse_object(self, line: str) -> None:
        tokens = split(line)
        if len(tokens) < 3:
            return
        raw_type = _to_int(tokens[0])
        try:
            object_type = ObjectType(raw_type)
        except ValueError:
            log.error("Invalid object type: %d", raw_type)
            return
        x = _to_float(tokens[1])
        y = _to_float(tokens[2])

        def field_at(index: int) -> str:
            try:
                return tokens[index]
            except IndexError:
                raise ValueError(f"object line {line!r} is missing field {index}") from None

        animations = self.assets.animations
        sprites = self.assets.sprites
        obj: GameObject
        if object_type is ObjectType.MARIO:
            if self.player is not None:
                log.error("Mario object was created before")
                return
            obj = self.player = Mario(
                x, y, animations=animations, clock=self.clock, on_portal=self.on_portal
            )
            log.info("Player object has been created")
        elif object_type is ObjectType.GOOMBA:
            obj = Goomba(x, y, animations=animations, clock=self.clock)
        elif object_type is ObjectType.BRICK:
            obj = Brick(x, y, animations=animations)
        elif object_type is ObjectType.COIN:
            obj = Coin(x, y, animations=animations)
        elif object_type is ObjectType.KOOPA:
            obj = Koopa(x, y, animations=animations, clock=self.clock)
        elif object_type is ObjectType.PLANT:
            obj = Plant(x, y, animations=animations, clock=self.clock)
        elif object_type is ObjectType.SOLID_BLOCK:
            obj = SolidBlock(x, y, _to_int(field_at(3)), _to_int(field_at(4)))
        elif object_type is ObjectType.COLOR_BOX:
            obj = ColorBox(x, y, _to_int(field_at(3)), _to_int(field_at(4)))
        elif object_type in (ObjectType.PLATFORM, ObjectType.MOVING_PLATFORM):
            args = (
                x,
                y,
                _to_float(field_at(3)),
                _to_float(field_at(4)),
                _to_int(field_at(5)),
                _to_int(field_at(6)),
                _to_int(field_at(7)),
                _to_int(field_at(8)),
            )
            if object_type is ObjectType.PLATFORM:
                obj = Platform(*args, sprites=sprites)
            else:
                obj = MovingPlatform(*args, _to_int(field_at(9)), sprites=sprites)
        else:
            obj = Portal(
                x,
                y,
                _to_float(field_at(3)),
                _to_float(field_at(4)),
                _to_int(field_at(5)),
                animations=animations,
            )

        obj.x, obj.y = x, y
        self.objects.append(obj)

    def update(self, dt: int) -> None:
        # The player is the first object, so it is left out of the list it collides with.
        co_objects = self.objects[1:]
        for obj in list(self.objects):
            obj.update(dt, co_objects)

        if self.player is None:
            return

        if self.tile_map is not None:
            self.camera.follow(
                self.player.x, self.player.y, self.tile_map.width, self.tile_map.height
            )
        else:
            self.camera.follow(self.player.x, self.player.y)

        self.purge_deleted_objects()

    def render(self, canvas: Canvas) -> None:
        canvas.cam_x, canvas.cam_y = self.camera.x, self.camera.y
        if self.tile_map is not None:
            self.tile_map.render(
                canvas, self.camera.x, self.camera.y, self.camera.width, self.camera.height
            )
        for obj in self.objects:
            obj.render(canvas)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def unload(self) -> None:
        self.objects.clear()
        self.player = None
        log.info("Scene %d unloaded", self.scene_id)

    def purge_deleted_objects(self) -> None:
        self.objects = [obj for obj in self.objects if not obj.is_deleted]