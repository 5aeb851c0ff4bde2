"""Pinhole camera looking along +Y with +Z up."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raytracer.ray import Ray
from raytracer.vector import Vector3D

_LOOK = Vector3D(0, 1, 0)
_RIGHT = Vector3D(1, 0, 0)
_UP = Vector3D(0, 0, 1)


@dataclass
class Camera:
    """Camera position, rotation, field of view in degrees and resolution."""

    position: Vector3D = field(default_factory=Vector3D)
    rotation: Vector3D = field(default_factory=Vector3D)
    field_of_view: float = 90.0
    width: int = 800
    height: int = 600

    def generate_ray(self, x: int, y: int) -> Ray:
        """Return the primary ray through pixel ``(x, y)``."""
        aspect_ratio = self.width / self.height
        theta = math.radians(self.field_of_view)
        viewport_height = 2.0 * math.tan(theta / 2.0)
        viewport_width = aspect_ratio * viewport_height
        u = x / (self.width - 1)
        v = 1.0 - y / (self.height - 1)
        direction = (
            _LOOK
            + (u - 0.5) * viewport_width * _RIGHT
            + (v - 0.5) * viewport_height * _UP
        )
        return Ray(self.position, direction.normalize())