# scenekit

scenekit keeps the game state of a 2D side-scrolling game. It reads levels from
text files, moves the objects, resolves collisions and follows the player with
a camera. It does not draw anything itself. Rendering goes to a `Canvas`, which
records each draw call. You can subclass it to draw on a real screen.

It needs nothing outside the standard library.

## Modules

### `scenekit.utils`

- `split(line, delimiter="\t")` splits a scene-file line and keeps empty
  fields.
- `monotonic_ms()` is the millisecond clock that animations and timers use by
  default.

### `scenekit.graphics`

- `Texture` and `Sprite` are frozen dataclasses. A texture is a path plus a
  size. A sprite is a rectangle cut out of a texture.
- `AnimationFrame` and `Animation` describe animations. An animation is a list
  of frames that loops. A frame added with a time of 0 uses the animation's
  `default_time`, which is 100 ms. `advance(now)` returns the frame that is due
  at that time.
- `TextureRegistry`, `SpriteRegistry` and `AnimationRegistry` map numeric ids
  to objects. Their `get` raises `KeyError` for an unknown id.
- `Canvas` records `("sprite", sprite, x, y)` and `("box", x, y, w, h, alpha)`
  tuples in `commands`. It also holds `cam_x`, `cam_y` and a `title`.

### `scenekit.gameobject`

`GameObject` is the abstract base class for scene objects. Each object has:

- a position, a speed, a facing `nx`, a `state` and an `is_deleted` flag;
- `bounding_box()`;
- `render(canvas)`;
- `is_collidable()` and `is_blocking()`;
- `on_no_collision` and `on_collision_with` callbacks.

`is_blocking()` returns one of three values:

- 0: other objects pass through it.
- 1: it is solid.
- `BLOCKS_FROM_ABOVE` (2): it is solid only when landed on from above.

### `scenekit.collision`

- `swept_aabb(...)` returns `(t, nx, ny)`, or `(-1.0, 0.0, 0.0)` on a miss.
- `sweep` and `scan` build `CollisionEvent`s between moving objects.
- `filter_events` picks the earliest blocking hit on each axis.
- `process(src, dt, co_objects)` moves an object through one frame. A blocking
  hit stops it just short of the obstacle. Every hit, blocking or not, is
  reported to the object.

### `scenekit.blocks`

- `Brick` is a 16×16 solid block.
- `SolidBlock` is an invisible solid block of any size.
- `ColorBox` is a one-way platform that blocks only from above.
- `Coin` can be passed through.
- `Platform` is a row of cells drawn with begin, middle and end sprites.
- `MovingPlatform` is a platform that moves up and down between y = 10 and
  y = 50.
- `Portal` carries a target `scene_id`.

### `scenekit.enemies`

- `Goomba` walks left and turns at walls. Once in the `GoombaState.DIE` state
  it is deleted after 5 s.
- `Koopa` walks left. Stomped, it goes into `KoopaState.SHELL`, and after 2 s
  it walks out again.
- `Plant` rises and sinks between two fixed heights.

### `scenekit.mario`

`Mario` is the player. Its states are listed in `MarioState`. It covers:

- walking and running, with acceleration up to a top speed;
- jumping, with a higher jump when running;
- sitting, with a lower bounding box;
- changing level with `set_level` (`MarioLevel.SMALL`, `BIG`, `TAIL`).

What happens on contact:

| Contact | Result |
|---|---|
| Goomba or Koopa, stomped from above | Mario defeats it and bounces. |
| Goomba or Koopa, from the side | Mario drops a level and is untouchable for 2.5 s. A small Mario dies instead. |
| Coin | The coin is deleted and Mario's `coin` count goes up. |
| Portal | `next_scene_id` is set and the `on_portal` callback is called. |

`animation_id()` returns the animation id that matches the current state and
level. `render` also writes `Coins: N` to `canvas.title`.

### `scenekit.controls`

- `Key` holds the keyboard scan codes.
- `KeyEventHandler` is the input interface. It has three methods:
  - `key_state(is_key_down)`;
  - `on_key_down(key)`;
  - `on_key_up(key)`.
- `PlayerKeyHandler` maps keys onto the scene's player:

| Key | Action |
|---|---|
| Left / Right | Walk |
| Left / Right while A is held | Run |
| S | Jump. Releasing S cuts the jump short. |
| Down | Sit. Releasing Down stands up again. |
| 1 / 2 / 3 | Change level |
| 0 | Die |

### `scenekit.tilemap`

- `TileMap` holds a grid of tile numbers. Numbers start at 1 and index the
  cells of the tileset row by row.
- `visible_tiles` yields only the tiles the camera sees.
- `load_tile_map(path, textures)` reads a file of whitespace-separated
  integers. It starts with six header values:
  1. texture id
  2. map rows
  3. map columns
  4. tileset rows
  5. tileset columns
  6. tile count

  The map follows, row by row.

### `scenekit.scene`

- `Scene` is the abstract scene.
- `PlayScene` is a level.
- `Camera` follows the player and is clamped to the tile map when there is one.
- `Assets` groups the three registries.
- `ObjectType` numbers the object kinds used in scene files.

## Scene files

A scene file is plain text. Lines starting with `#` are comments. Sections
start with `[ASSETS]`, `[OBJECTS]` or `[TILEMAP]`. Fields are separated by tabs.
Relative paths are taken from the scene file's directory.

```
# comment
[ASSETS]
mario-assets.txt
[OBJECTS]
0	120	10
1	200	150
[TILEMAP]
world-1-1.txt
```

An asset file has two kinds of section:

- `[SPRITES]` lines: `id left top right bottom texture_id`.
- `[ANIMATIONS]` lines: `id`, then `sprite_id frame_time` pairs.

Sprites whose texture id is not registered are skipped, and so are animation
frames whose sprite id is not registered. An error is logged for each.

Object lines start with `type x y`. Some types need more fields:

| type | object | extra fields |
|---|---|---|
| 0 | `Mario` | — |
| 1 | `Brick` | — |
| 2 | `Goomba` | — |
| 3 | `Koopa` | — |
| 4 | `Coin` | — |
| 5 | `Platform` | cell_width cell_height length sprite_begin sprite_middle sprite_end |
| 6 | `MovingPlatform` | as 5, then move_y |
| 7 | `Plant` | — |
| 50 | `Portal` | right bottom scene_id |
| 51 | `ColorBox` | width height |
| 100 | `SolidBlock` | width height |

The loader handles bad object lines as follows:

- Lines with fewer than three fields are skipped.
- Unknown types are logged and skipped.
- A second Mario is logged and skipped.
- A missing extra field raises `ValueError`.

The player should be the first object. `update` leaves the first object out of
the list that objects collide with.

## A frame

```python
from scenekit.graphics import Canvas, Texture
from scenekit.scene import PlayScene

scene = PlayScene(1, "levels/world-1.txt")
scene.assets.textures.add(0, Texture("mario.png"))   # textures must be registered first
scene.load()

held = set()
canvas = Canvas()
scene.key_handler.key_state(lambda key: key in held)
scene.update(16)          # milliseconds since the last frame
scene.render(canvas)      # canvas.commands now lists what to draw
```

`update` runs every object, moves the camera and drops deleted objects.
`render` sets the canvas camera, then draws the tile map and the objects in
order.

## What it does not do

- It opens no window and decodes no images. A `Texture` is only a path and a
  size, and a display layer has to turn `Canvas` calls into pixels.
- It reads no keyboard. You pass key codes and an `is_key_down` query to
  `PlayerKeyHandler` yourself.
- It has no game loop, no frame timing and no command to run.
- It keeps no list of scenes and does not switch between them. Touching a
  portal only records `next_scene_id` and calls `on_portal`. Loading the next
  scene is up to the caller.