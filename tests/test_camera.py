import pytest

from raytracer.camera import Camera
from raytracer.vector import Vector3D


def test_defaults():
    cam = Camera()
    assert cam.position == Vector3D()
    assert cam.rotation == Vector3D()
    assert cam.field_of_view == 90.0
    assert (cam.width, cam.height) == (800, 600)


def test_center_pixel_looks_forward():
    cam = Camera(width=3, height=3)
    ray = cam.generate_ray(1, 1)
    assert tuple(ray.direction) == pytest.approx((0.0, 1.0, 0.0))


def test_ray_starts_at_camera_position():
    pos = Vector3D(4, -7, 2)
    cam = Camera(position=pos, width=10, height=8)
    assert cam.generate_ray(3, 5).origin == pos


def test_rays_are_unit_length():
    cam = Camera(width=16, height=9, field_of_view=60)
    for x, y in [(0, 0), (15, 8), (7, 4), (0, 8)]:
        assert cam.generate_ray(x, y).direction.length() == pytest.approx(1.0)


def test_top_left_corner_points_left_and_up():
    cam = Camera(width=2, height=2, field_of_view=90)
    d = cam.generate_ray(0, 0).direction
    s = 1 / 3 ** 0.5
    assert tuple(d) == pytest.approx((-s, s, s))


def test_horizontal_symmetry():
    cam = Camera(width=11, height=7, field_of_view=70)
    left = cam.generate_ray(0, 3).direction
    right = cam.generate_ray(10, 3).direction
    assert left.x == pytest.approx(-right.x)
    assert left.y == pytest.approx(right.y)
    assert left.z == pytest.approx(right.z)


def test_vertical_symmetry():
    cam = Camera(width=5, height=9)
    top = cam.generate_ray(2, 0).direction
    bottom = cam.generate_ray(2, 8).direction
    assert top.z == pytest.approx(-bottom.z)
    assert top.z > 0


def test_wider_field_of_view_spreads_rays():
    narrow = Camera(width=5, height=5, field_of_view=30).generate_ray(0, 2)
    wide = Camera(width=5, height=5, field_of_view=120).generate_ray(0, 2)
    assert abs(wide.direction.x) > abs(narrow.direction.x)