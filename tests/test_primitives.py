import math

import pytest

from raytracer.color import RED, Color
from raytracer.material import Material
from raytracer.primitives import Cylinder, HitInfo, Plane, Sphere
from raytracer.ray import Ray
from raytracer.vector import Vector3D


def _vec_close(a, b):
    return all(math.isclose(p, q, abs_tol=1e-9) for p, q in zip(a, b))


# Sphere


def test_sphere_hit_lies_on_surface_and_on_ray():
    center = Vector3D(1, 2, 10)
    sphere = Sphere(center, 2.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0.1, 0.2, 1))
    hit = sphere.intersect(ray, 0.001, 1000.0)
    assert isinstance(hit, HitInfo)
    assert (hit.point - center).length() == pytest.approx(2.0)
    assert _vec_close(hit.point, ray.point_at(hit.distance))


def test_sphere_normal_is_unit_and_faces_outside_ray():
    sphere = Sphere(Vector3D(0, 0, 5), 1.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0, 0, 1))
    hit = sphere.intersect(ray, 0.001, 1000.0)
    assert hit.normal.length() == pytest.approx(1.0)
    assert hit.normal.dot(ray.direction) < 0


def test_sphere_takes_nearer_root():
    sphere = Sphere(Vector3D(0, 0, 5), 1.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0, 0, 1))
    hit = sphere.intersect(ray, 0.001, 1000.0)
    assert hit.point.z < sphere.center.z


def test_sphere_from_inside_uses_far_root():
    sphere = Sphere(Vector3D(0, 0, 0), 3.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(1, 0, 0))
    hit = sphere.intersect(ray, 0.001, 1000.0)
    assert hit.distance == pytest.approx(sphere.radius)
    assert hit.normal.dot(ray.direction) > 0


def test_sphere_miss_when_pointing_away():
    sphere = Sphere(Vector3D(0, 0, 5), 1.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0, 0, -1))
    assert sphere.intersect(ray, 0.001, 1000.0) is None


def test_sphere_miss_when_beyond_max_dist():
    sphere = Sphere(Vector3D(0, 0, 50), 1.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0, 0, 1))
    assert sphere.intersect(ray, 0.001, 10.0) is None


def test_sphere_hit_carries_material():
    material = Material(RED, 0.2, 0.8)
    sphere = Sphere(Vector3D(0, 0, 5), 1.0, material)
    hit = sphere.intersect(Ray(Vector3D(), Vector3D(0, 0, 1)), 0.001, 1000.0)
    assert hit.material == material


def test_sphere_negative_radius_becomes_zero():
    assert Sphere(Vector3D(), -4.0).radius == 0.0
    sphere = Sphere(Vector3D(), 2.0)
    sphere.radius = -1.0
    assert sphere.radius == 0.0


def test_sphere_clone_is_independent():
    sphere = Sphere(Vector3D(1, 2, 3), 2.0)
    copy = sphere.clone()
    assert copy == sphere
    copy.material = Material(Color(1, 2, 3))
    assert sphere.material == Material()


# Plane


@pytest.mark.parametrize(
    "axis, normal",
    [
        ("x", Vector3D(1, 0, 0)),
        ("X", Vector3D(1, 0, 0)),
        ("y", Vector3D(0, 1, 0)),
        ("Z", Vector3D(0, 0, 1)),
    ],
)
def test_plane_from_axis(axis, normal):
    plane = Plane.from_axis(axis, -3.0)
    assert plane.normal == normal
    assert plane.distance == -3.0


def test_plane_from_invalid_axis_raises():
    with pytest.raises(ValueError):
        Plane.from_axis("w", 1.0)


def test_plane_normal_is_normalised():
    plane = Plane(Vector3D(0, 0, 5), 2.0)
    assert plane.normal == Vector3D(0, 0, 1)
    plane.normal = Vector3D(3, 0, 0)
    assert plane.normal == Vector3D(1, 0, 0)


def test_plane_hit_lies_on_plane():
    plane = Plane(Vector3D(1, 1, 1), 4.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(1, 2, 3))
    hit = plane.intersect(ray, 0.001, 1000.0)
    assert plane.normal.dot(hit.point) == pytest.approx(plane.distance)
    assert _vec_close(hit.point, ray.point_at(hit.distance))


@pytest.mark.parametrize("start, direction", [(10, -1), (-10, 1)])
def test_plane_normal_faces_ray(start, direction):
    plane = Plane.from_axis("z", 0.0)
    ray = Ray(Vector3D(0, 0, start), Vector3D(0, 0, direction))
    hit = plane.intersect(ray, 0.001, 1000.0)
    assert hit.normal.dot(ray.direction) < 0


def test_plane_parallel_ray_misses():
    plane = Plane.from_axis("z", 0.0)
    ray = Ray(Vector3D(0, 0, 1), Vector3D(1, 0, 0))
    assert plane.intersect(ray, 0.001, 1000.0) is None


def test_plane_behind_ray_misses():
    plane = Plane.from_axis("y", -5.0)
    ray = Ray(Vector3D(0, 0, 0), Vector3D(0, 1, 0))
    assert plane.intersect(ray, 0.001, 1000.0) is None


def test_plane_clone_equals_original():
    plane = Plane.from_axis("x", 2.0, Material(RED))
    assert plane.clone() == plane


# Cylinder


def test_cylinder_side_hit():
    cylinder = Cylinder(Vector3D(0, 0, 0), 2.0, 10.0)
    ray = Ray(Vector3D(-20, 5, 0), Vector3D(1, 0, 0))
    hit = cylinder.intersect(ray, 0.001, 1000.0)
    dx = hit.point.x - cylinder.position.x
    dz = hit.point.z - cylinder.position.z
    assert dx * dx + dz * dz == pytest.approx(cylinder.radius**2)
    assert hit.normal.y == 0.0
    assert hit.normal.dot(ray.direction) < 0


def test_cylinder_top_cap_hit():
    cylinder = Cylinder(Vector3D(1, 2, 3), 2.0, 4.0)
    ray = Ray(Vector3D(1, 20, 3), Vector3D(0, -1, 0))
    hit = cylinder.intersect(ray, 0.001, 1000.0)
    assert hit.normal == Vector3D(0, 1, 0)
    assert hit.point.y == pytest.approx(cylinder.position.y + cylinder.height)


def test_cylinder_bottom_cap_hit():
    cylinder = Cylinder(Vector3D(1, 2, 3), 2.0, 4.0)
    ray = Ray(Vector3D(1.5, -20, 3), Vector3D(0, 1, 0))
    hit = cylinder.intersect(ray, 0.001, 1000.0)
    assert hit.normal == Vector3D(0, -1, 0)
    assert hit.point.y == pytest.approx(cylinder.position.y)


def test_cylinder_miss_above_height():
    cylinder = Cylinder(Vector3D(0, 0, 0), 2.0, 10.0)
    ray = Ray(Vector3D(-20, 15, 0), Vector3D(1, 0, 0))
    assert cylinder.intersect(ray, 0.001, 1000.0) is None


def test_cylinder_parallel_outside_radius_misses():
    cylinder = Cylinder(Vector3D(0, 0, 0), 2.0, 10.0)
    ray = Ray(Vector3D(5, -20, 0), Vector3D(0, 1, 0))
    assert cylinder.intersect(ray, 0.001, 1000.0) is None


def test_cylinder_clone_is_independent():
    cylinder = Cylinder(Vector3D(0, 0, 0), 2.0, 10.0, Material(RED))
    copy = cylinder.clone()
    assert copy == cylinder
    copy.material = Material()
    assert cylinder.material == Material(RED)