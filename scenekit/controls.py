"""Keyboard handling for the player."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum
from typing import Any

from scenekit.mario import Mario, MarioLevel, MarioState

__all__ = ["Key", "KeyEventHandler", "PlayerKeyHandler"]


class Key(IntEnum):
    """Keyboard scan codes the game reacts to."""

    ZERO = 0x0B
    ONE = 0x02
    TWO = 0x03
    THREE = 0x04
    A = 0x1E
    S = 0x1F
    R = 0x13
    LEFT = 0xCB
    RIGHT = 0xCD
    DOWN = 0xD0


class KeyEventHandler(ABC):
    """Receives key presses, releases and the held-key state each frame."""

    @abstractmethod
    def key_state(self, is_key_down: Callable[[int], bool]) -> None:
        """Called once per frame with a query for keys held down."""

    @abstractmethod
    def on_key_down(self, key: int) -> None:
        """Called when a key is pressed."""

    @abstractmethod
    def on_key_up(self, key: int) -> None:
        """Called when a key is released."""


class PlayerKeyHandler(KeyEventHandler):
    """Drives the player of ``scene`` (any object with a ``player``)."""

    def __init__(self, scene: Any) -> None:
        self.scene = scene

    @property
    def player(self) -> Mario | None:
        return getattr(self.scene, "player", None)

    def on_key_down(self, key: int) -> None:
        mario = self.player
        if mario is None:
            return
        if key == Key.DOWN:
            mario.set_state(MarioState.SIT)
        elif key == Key.S:
            mario.set_state(MarioState.JUMP)
        elif key == Key.ONE:
            mario.set_level(MarioLevel.SMALL)
        elif key == Key.TWO:
            mario.set_level(MarioLevel.BIG)
        elif key == Key.THREE:
            mario.set_level(MarioLevel.TAIL)
        elif key == Key.ZERO:
            mario.set_state(MarioState.DIE)

    def on_key_up(self, key: int) -> None:
        mario = self.player
        if mario is None:
            return
        if key == Key.S:
            mario.set_state(MarioState.RELEASE_JUMP)
        elif key == Key.DOWN:
            mario.set_state(MarioState.SIT_RELEASE)

    def key_state(self, is_key_down: Callable[[int], bool]) -> None:
        mario = self.player
        if mario is None:
            return
        running = is_key_down(Key.A)
        if is_key_down(Key.RIGHT):
            mario.set_state(MarioState.RUNNING_RIGHT if running else MarioState.WALKING_RIGHT)
        elif is_key_down(Key.LEFT):
            mario.set_state(MarioState.RUNNING_LEFT if running else MarioState.WALKING_LEFT)
        else:
            mario.set_state(MarioState.IDLE)