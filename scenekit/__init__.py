"""Game state for 2D side-scrolling games: sprites, collisions, enemies, player and scenes."""

__version__ = "0.1.0"

__all__ = [
    "blocks",
    "collision",
    "controls",
    "enemies",
    "gameobject",
    "graphics",
    "mario",
    "scene",
    "tilemap",
    "utils",
]