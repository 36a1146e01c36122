import pytest

from scenekit.blocks import (
    BRICK_BBOX_HEIGHT,
    BRICK_BBOX_WIDTH,
    COIN_BBOX_HEIGHT,
    COIN_BBOX_WIDTH,
    ID_ANI_BRICK,
    ID_ANI_COIN,
    ID_ANI_PORTAL,
    MOVING_PLATFORM_BOTTOM,
    MOVING_PLATFORM_SPEED,
    Brick,
    Coin,
    ColorBox,
    MovingPlatform,
    Platform,
    Portal,
    SolidBlock,
)
from scenekit.collision import CollisionEvent
from scenekit.gameobject import BBOX_ALPHA, BLOCKS_FROM_ABOVE
from scenekit.graphics import Animation, AnimationRegistry, Canvas, SpriteRegistry


def _animations(*ids):
    sprites = SpriteRegistry()
    animations = AnimationRegistry()
    for ani_id in ids:
        animation = Animation(clock=lambda: 0)
        animation.add(sprites.add(ani_id, 0, 0, 16, 16, None))
        animations.add(ani_id, animation)
    return animations


def _sprites():
    sprites = SpriteRegistry()
    for sprite_id in (1, 2, 3):
        sprites.add(sprite_id, 0, 0, 16, 16, None)
    return sprites


def test_brick_bounding_box_is_centred():
    left, top, right, bottom = Brick(40.0, 60.0).bounding_box()
    assert right - left == BRICK_BBOX_WIDTH
    assert bottom - top == BRICK_BBOX_HEIGHT
    assert (left + right) / 2 == 40.0
    assert (top + bottom) / 2 == 60.0


def test_brick_renders_its_animation():
    canvas = Canvas()
    Brick(5.0, 7.0, animations=_animations(ID_ANI_BRICK)).render(canvas)
    kind, sprite, x, y = canvas.commands[0]
    assert (kind, sprite.id, x, y) == ("sprite", ID_ANI_BRICK, 5.0, 7.0)


def test_brick_render_without_animation_raises():
    with pytest.raises(KeyError):
        Brick(0.0, 0.0).render(Canvas())


def test_solid_block_box_and_flags():
    block = SolidBlock(100.0, 50.0, 32, 8)
    left, top, right, bottom = block.bounding_box()
    assert right - left == 32
    assert bottom - top == 8
    assert block.is_blocking() == 1
    assert block.is_collidable() is False


def test_solid_block_renders_translucent_box():
    canvas = Canvas()
    SolidBlock(100.0, 50.0, 32, 8).render(canvas)
    assert len(canvas.commands) == 1
    kind, x, y, width, height, alpha = canvas.commands[0]
    assert (kind, x, y, width, height, alpha) == ("box", 100.0, 50.0, 32, 8, BBOX_ALPHA)


def test_coin_passes_through_and_renders():
    coin = Coin(10.0, 20.0, animations=_animations(ID_ANI_COIN))
    left, top, right, bottom = coin.bounding_box()
    assert right - left == COIN_BBOX_WIDTH
    assert bottom - top == COIN_BBOX_HEIGHT
    assert coin.is_blocking() == 0
    canvas = Canvas()
    coin.render(canvas)
    assert canvas.commands[0][1].id == ID_ANI_COIN


def test_color_box_blocks_only_from_above_and_draws_nothing():
    box = ColorBox(0.0, 0.0, 48, 16)
    canvas = Canvas()
    box.render(canvas)
    assert canvas.commands == []
    assert box.is_blocking() == BLOCKS_FROM_ABOVE
    assert box.is_collidable() is False
    left, top, right, bottom = box.bounding_box()
    assert (right - left, bottom - top) == (48, 16)


def test_platform_bounding_box_spans_all_cells():
    platform = Platform(8.0, 100.0, 16, 16, 5, 1, 2, 3)
    left, top, right, bottom = platform.bounding_box()
    assert left == 8.0 - 16 / 2
    assert right - left == 16 * 5
    assert bottom - top == 16


def test_platform_render_draws_begin_middle_end():
    canvas = Canvas()
    Platform(0.0, 10.0, 16, 16, 4, 1, 2, 3, sprites=_sprites()).render(canvas)
    drawn = [(cmd[1].id, cmd[2], cmd[3]) for cmd in canvas.commands]
    assert drawn == [(1, 0.0, 10.0), (2, 16.0, 10.0), (2, 32.0, 10.0), (3, 48.0, 10.0)]


def test_platform_of_one_cell_draws_only_begin():
    canvas = Canvas()
    Platform(0.0, 0.0, 16, 16, 1, 1, 2, 3, sprites=_sprites()).render(canvas)
    assert [cmd[1].id for cmd in canvas.commands] == [1]


def test_empty_platform_draws_nothing():
    canvas = Canvas()
    Platform(0.0, 0.0, 16, 16, 0, 1, 2, 3, sprites=_sprites()).render(canvas)
    assert canvas.commands == []


def test_platform_bounding_box_drawing_uses_camera():
    canvas = Canvas(cam_x=10.0, cam_y=5.0)
    Platform(8.0, 100.0, 16, 16, 3, 1, 2, 3).render_bounding_box(canvas)
    kind, x, y, width, height, alpha = canvas.commands[0]
    assert kind == "box"
    assert width == 47
    assert y == 100.0 - 5.0
    assert alpha == BBOX_ALPHA


def test_moving_platform_speed_from_direction():
    platform = MovingPlatform(0.0, 30.0, 16, 16, 3, 1, 2, 3, 1)
    assert platform.vy == pytest.approx(MOVING_PLATFORM_SPEED)


def test_moving_platform_reverses_at_bottom():
    platform = MovingPlatform(0.0, 49.0, 16, 16, 3, 1, 2, 3, 1)
    platform.update(20, [])
    assert platform.y == pytest.approx(MOVING_PLATFORM_BOTTOM)
    assert platform.vy == pytest.approx(-MOVING_PLATFORM_SPEED)


def test_moving_platform_moves_freely_between_bounds():
    platform = MovingPlatform(0.0, 30.0, 16, 16, 3, 1, 2, 3, -1)
    platform.update(20, None)
    assert platform.y < 30.0
    assert platform.vy == pytest.approx(-MOVING_PLATFORM_SPEED)


def test_moving_platform_bounces_off_blocking_object():
    platform = MovingPlatform(0.0, 30.0, 16, 16, 3, 1, 2, 3, 1)
    platform.on_collision_with(CollisionEvent(0.5, 0.0, -1.0, obj=Brick(0.0, 60.0)))
    assert platform.vy == pytest.approx(-MOVING_PLATFORM_SPEED)


def test_moving_platform_ignores_other_platforms_and_coins():
    platform = MovingPlatform(0.0, 30.0, 16, 16, 3, 1, 2, 3, 1)
    other = MovingPlatform(0.0, 60.0, 16, 16, 3, 1, 2, 3, 1)
    platform.on_collision_with(CollisionEvent(0.5, 0.0, -1.0, obj=other))
    platform.on_collision_with(CollisionEvent(0.5, 0.0, -1.0, obj=Coin(0.0, 60.0)))
    assert platform.vy == pytest.approx(MOVING_PLATFORM_SPEED)


def test_portal_keeps_target_scene_and_size():
    portal = Portal(100.0, 50.0, 132.0, 66.0, 2)
    assert portal.scene_id == 2
    assert portal.is_blocking() == 0
    left, top, right, bottom = portal.bounding_box()
    assert (right - left, bottom - top) == (32.0, 16.0)
    assert (left + right) / 2 == 100.0


def test_portal_render_draws_animation_then_box():
    canvas = Canvas()
    Portal(100.0, 50.0, 132.0, 66.0, 2, animations=_animations(ID_ANI_PORTAL)).render(canvas)
    assert [cmd[0] for cmd in canvas.commands] == ["sprite", "box"]
    assert canvas.commands[0][1].id == ID_ANI_PORTAL