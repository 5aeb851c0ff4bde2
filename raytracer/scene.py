"""A scene: a camera, primitives and lights."""

from __future__ import annotations

from dataclasses import dataclass, field

from raytracer.camera import Camera
from raytracer.lights import Light
from raytracer.primitives import HitInfo, Primitive
from raytracer.ray import Ray
from raytracer.vector import Vector3D

_SHADOW_EPSILON = 0.001


@dataclass
class Scene:
    """Everything to be rendered."""

    camera: Camera = field(default_factory=Camera)
    primitives: list[Primitive] = field(default_factory=list)
    lights: list[Light] = field(default_factory=list)

    def add_primitive(self, primitive: Primitive) -> None:
        """Add a primitive to the scene."""
        self.primitives.append(primitive)

    def add_light(self, light: Light) -> None:
        """Add a light to the scene."""
        self.lights.append(light)

    def clear(self) -> None:
        """Remove all primitives and lights; the camera is kept."""
        self.primitives.clear()
        self.lights.clear()

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        """Return the closest hit among all primitives, or None."""
        closest_hit: HitInfo | None = None
        closest = max_dist
        for primitive in self.primitives:
            hit = primitive.intersect(ray, min_dist, closest)
            if hit is not None:
                closest = hit.distance
                closest_hit = hit
        return closest_hit

    def is_in_shadow(self, point: Vector3D, light: Light, max_dist: float = 1000.0) -> bool:
        """Tell whether something blocks ``light`` from reaching ``point``."""
        if light.is_ambient:
            return False
        shadow_ray = Ray(point, light.direction_from(point))
        return self.intersect(shadow_ray, _SHADOW_EPSILON, max_dist) is not None