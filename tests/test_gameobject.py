import pytest

from scenekit.gameobject import BBOX_ALPHA, GameObject
from scenekit.graphics import Canvas


class Box(GameObject):
    def __init__(self, x=0.0, y=0.0, box=None):
        super().__init__(x, y)
        self.box = box or (x - 8, y - 8, x + 8, y + 8)
        self.rendered = 0

    def bounding_box(self):
        return self.box

    def render(self, canvas):
        self.rendered += 1


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        GameObject()


def test_defaults():
    obj = Box(3, 4)
    GameObject.update(obj, 0, None)
    assert (obj.x, obj.y) == (3.0, 4.0)
    assert (obj.vx, obj.vy) == (0.0, 0.0)
    assert obj.nx == 1
    assert obj.state == -1
    assert obj.is_deleted is False


def test_default_collision_flags():
    obj = Box()
    assert GameObject.is_collidable(obj) is False
    assert GameObject.is_blocking(obj) == 1


def test_set_state_and_delete():
    obj = Box()
    GameObject.set_state(obj, 100)
    GameObject.delete(obj)
    assert obj.state == 100
    assert obj.is_deleted is True


def test_default_hooks_leave_object_unchanged():
    obj = Box(1, 2)
    obj.vx, obj.vy = 5.0, 6.0
    GameObject.update(obj, 16, [])
    GameObject.on_no_collision(obj, 16)
    GameObject.on_collision_with(obj, None)
    assert (obj.x, obj.y, obj.vx, obj.vy) == (1.0, 2.0, 5.0, 6.0)


def test_render_bounding_box_offsets_by_camera():
    obj = Box(50, 60)
    canvas = Canvas(cam_x=10, cam_y=20)
    obj.render_bounding_box(canvas)
    assert canvas.commands == [("box", 40.0, 40.0, 16, 16, BBOX_ALPHA)]


def test_render_bounding_box_truncates_edges_separately():
    obj = Box(0, 0, box=(10.7, 2.9, 20.2, 9.1))
    canvas = Canvas()
    obj.render_bounding_box(canvas)
    _, _, _, width, height, _ = canvas.commands[0]
    assert (width, height) == (10, 7)