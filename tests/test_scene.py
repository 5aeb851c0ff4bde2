import pytest

from raytracer.camera import Camera
from raytracer.color import BLUE, RED
from raytracer.lights import AmbientLight, DirectionalLight
from raytracer.material import Material
from raytracer.primitives import Sphere
from raytracer.ray import Ray
from raytracer.scene import Scene
from raytracer.vector import Vector3D


def _forward_ray():
    return Ray(Vector3D(0, 0, 0), Vector3D(0, 0, 1))


def test_empty_scene_has_no_hit():
    assert Scene().intersect(_forward_ray(), 0.001, 1000.0) is None


@pytest.mark.parametrize("near_first", [True, False])
def test_intersect_returns_closest(near_first):
    near = Sphere(Vector3D(0, 0, 5), 1.0, Material(RED))
    far = Sphere(Vector3D(0, 0, 20), 1.0, Material(BLUE))
    scene = Scene()
    for primitive in (near, far) if near_first else (far, near):
        scene.add_primitive(primitive)
    hit = scene.intersect(_forward_ray(), 0.001, 1000.0)
    assert hit.material == near.material
    assert hit == near.intersect(_forward_ray(), 0.001, 1000.0)


def test_intersect_respects_max_dist():
    scene = Scene()
    scene.add_primitive(Sphere(Vector3D(0, 0, 50), 1.0))
    assert scene.intersect(_forward_ray(), 0.001, 10.0) is None


def test_clear_keeps_camera():
    camera = Camera(width=64, height=48)
    scene = Scene(camera=camera)
    scene.add_primitive(Sphere())
    scene.add_light(AmbientLight())
    scene.clear()
    assert scene.primitives == []
    assert scene.lights == []
    assert scene.camera is camera


def test_add_light_keeps_order():
    scene = Scene()
    first, second = AmbientLight(0.3), DirectionalLight()
    scene.add_light(first)
    scene.add_light(second)
    assert scene.lights == [first, second]


def test_ambient_light_casts_no_shadow():
    scene = Scene()
    scene.add_primitive(Sphere(Vector3D(0, 0, 5), 1.0))
    assert scene.is_in_shadow(Vector3D(), AmbientLight()) is False


def test_directional_light_blocked():
    scene = Scene()
    scene.add_primitive(Sphere(Vector3D(0, 0, 5), 1.0))
    light = DirectionalLight(Vector3D(0, 0, -1))
    assert scene.is_in_shadow(Vector3D(), light) is True


def test_directional_light_unblocked():
    scene = Scene()
    scene.add_primitive(Sphere(Vector3D(0, 0, -5), 1.0))
    light = DirectionalLight(Vector3D(0, 0, -1))
    assert scene.is_in_shadow(Vector3D(), light) is False


def test_blocker_beyond_max_dist_casts_no_shadow():
    scene = Scene()
    scene.add_primitive(Sphere(Vector3D(0, 0, 50), 1.0))
    light = DirectionalLight(Vector3D(0, 0, -1))
    assert scene.is_in_shadow(Vector3D(), light, 10.0) is False
    assert scene.is_in_shadow(Vector3D(), light) is True