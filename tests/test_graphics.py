import logging

import pytest

from scenekit.graphics import (
    Animation,
    AnimationFrame,
    AnimationRegistry,
    Canvas,
    Sprite,
    SpriteRegistry,
    Texture,
    TextureRegistry,
)


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def make_sprite(sprite_id):
    return Sprite(sprite_id, 0, 0, 16, 16, Texture("tiles.png"))


def test_texture_defaults_to_unknown_size():
    tex = Texture("mario.png")
    assert (tex.width, tex.height) == (-1, -1)


def test_texture_registry_round_trip_and_clear():
    reg = TextureRegistry()
    tex = Texture("enemies.png", 32, 48)
    reg.add(10, tex)
    assert reg.get(10) is tex
    assert 10 in reg
    reg.clear()
    assert len(reg) == 0
    with pytest.raises(KeyError):
        reg.get(10)


def test_texture_registry_missing_id_raises():
    with pytest.raises(KeyError):
        TextureRegistry().get(99)


def test_sprite_registry_add_then_get():
    reg = SpriteRegistry()
    tex = Texture("misc.png")
    added = reg.add(20001, 1, 2, 17, 18, tex)
    fetched = reg.get(20001)
    assert fetched is added
    assert (fetched.left, fetched.top, fetched.right, fetched.bottom) == (1, 2, 17, 18)
    assert fetched.texture is tex


def test_sprite_registry_add_replaces_and_clear_empties():
    reg = SpriteRegistry()
    reg.add(5, 0, 0, 1, 1, None)
    reg.add(5, 3, 3, 4, 4, None)
    assert reg.get(5).left == 3
    reg.clear()
    with pytest.raises(KeyError):
        reg.get(5)


def test_sprite_draw_records_on_canvas():
    canvas = Canvas()
    sprite = make_sprite(1)
    sprite.draw(canvas, 12.5, 40.0)
    assert canvas.commands == [("sprite", sprite, 12.5, 40.0)]


def test_canvas_draw_box_records_arguments():
    canvas = Canvas()
    canvas.draw_box(3.0, 4.0, 16, 8, 0.25)
    assert canvas.commands == [("box", 3.0, 4.0, 16, 8, 0.25)]


def test_animation_zero_time_uses_default():
    ani = Animation()
    ani.add(make_sprite(1))
    ani.add(make_sprite(2), 0)
    assert [f.time for f in ani.frames] == [100, 100]


def test_animation_custom_default_and_explicit_time():
    ani = Animation(default_time=40)
    ani.add(make_sprite(1))
    ani.add(make_sprite(2), 75)
    assert ani.frames == [AnimationFrame(make_sprite(1), 40), AnimationFrame(make_sprite(2), 75)]


def test_animation_add_requires_sprite():
    with pytest.raises(ValueError):
        Animation().add(None, 10)


def test_animation_advance_without_frames_raises():
    with pytest.raises(ValueError):
        Animation().advance(0)


def test_animation_advances_only_after_frame_time_and_wraps():
    a, b = make_sprite(1), make_sprite(2)
    ani = Animation()
    ani.add(a, 100)
    ani.add(b, 50)
    assert ani.advance(1000).sprite is a
    assert ani.advance(1100).sprite is a
    assert ani.advance(1101).sprite is b
    assert ani.advance(1151).sprite is b
    assert ani.advance(1152).sprite is a
    assert ani.current_frame == 0


def test_animation_render_uses_clock_and_draws_current_frame():
    clock = FakeClock(500)
    a, b = make_sprite(1), make_sprite(2)
    ani = Animation(clock=clock)
    ani.add(a, 10)
    ani.add(b, 10)
    canvas = Canvas()
    ani.render(canvas, 5.0, 6.0)
    clock.now = 520
    ani.render(canvas, 5.0, 6.0)
    assert canvas.commands == [("sprite", a, 5.0, 6.0), ("sprite", b, 5.0, 6.0)]


def test_animation_registry_warns_on_duplicate_and_replaces(caplog):
    reg = AnimationRegistry()
    first, second = Animation(), Animation()
    reg.add(400, first)
    with caplog.at_level(logging.WARNING):
        reg.add(400, second)
    assert reg.get(400) is second
    assert any("400" in r.getMessage() for r in caplog.records)


def test_animation_registry_missing_and_clear():
    reg = AnimationRegistry()
    reg.add(1, Animation())
    reg.clear()
    assert len(reg) == 0
    with pytest.raises(KeyError):
        reg.get(1)