import pytest

from trajectory.camera import GroundCamera
from trajectory.collisions import TargetZone
from trajectory.constants import GROUND_Y_OFFSET, PIXELS_PER_METER, PROJECTILE_COLOR, PROJECTILE_HIT_COLOR
from trajectory.data_models import Projectile
from trajectory.rendering import (
    draw_ground,
    draw_path,
    draw_projectile,
    draw_scene,
    draw_target,
    marker_interval,
)


def _camera(w=1100, h=600):
    cam = GroundCamera()
    cam.set_viewport_size(w, h)
    return cam


def test_world_to_screen_mapping():
    cam = _camera(h=600)
    assert cam.world_to_screen((0.0, 0.0)) == (0.0, 600 - GROUND_Y_OFFSET)
    assert cam.world_to_screen((10.0, 2.0)) == (10.0 * PIXELS_PER_METER, 600 - GROUND_Y_OFFSET - 2.0 * PIXELS_PER_METER)


def test_screen_to_world_inverts_mapping():
    cam = _camera()
    world = (37.5, 12.25)
    assert tuple(cam.screen_to_world(cam.world_to_screen(world))) == pytest.approx(world)


@pytest.mark.parametrize("width,expected", [(30, 10), (110, 20), (300, 50)])
def test_marker_interval(width, expected):
    assert marker_interval(width) == expected


def test_ground_markers_are_labelled(surface):
    draw_ground(surface, _camera(w=1100))
    labels = [c[1] for c in surface.of_kind("text")]
    assert labels == ["20m", "40m", "60m", "80m", "100m"]


def test_target_rect_spans_ground_to_top(surface):
    cam = _camera(h=600)
    draw_target(surface, cam, TargetZone(100.0, 10.0))
    (_, rect, _, _), = surface.of_kind("rect")
    x, y, w, h = rect
    assert x == pytest.approx(950.0)
    assert w == pytest.approx(100.0)
    assert y + h == pytest.approx(cam.ground_y)
    assert h == pytest.approx(200.0)


def test_projectile_color_reflects_hit(surface):
    cam = _camera()
    p = Projectile(position=(10.0, 5.0), velocity=(0.0, 0.0))
    draw_projectile(surface, cam, p)
    p.hit_target = True
    draw_projectile(surface, cam, p)
    colors = [c[3] for c in surface.of_kind("circle")]
    assert colors == [PROJECTILE_COLOR, PROJECTILE_HIT_COLOR]


def test_short_path_is_not_drawn(surface):
    draw_path(surface, _camera(), Projectile(position=(0.0, 0.0), velocity=(1.0, 1.0)))
    assert not surface.of_kind("polyline")


def test_scene_draw_order(surface):
    p = Projectile(position=(0.0, 0.0), velocity=(1.0, 1.0))
    p.path.append((10.0, 10.0))
    draw_scene(surface, _camera(), TargetZone(50.0, 10.0), p, [(0.0, 0.0), (5.0, 5.0), (10.0, 0.0)])
    kinds = [c[0] for c in surface.calls]
    assert kinds[0] == "clear"
    assert kinds[-1] == "circle"
    assert kinds.count("polyline") == 2
