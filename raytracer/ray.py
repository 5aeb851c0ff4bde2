"""Rays with a normalised direction."""

from __future__ import annotations

from dataclasses import dataclass, field

from raytracer.vector import Vector3D


@dataclass(frozen=True)
class Ray:
    """A half-line from ``origin``; ``direction`` is normalised on creation."""

    origin: Vector3D = field(default_factory=Vector3D)
    direction: Vector3D = field(default_factory=lambda: Vector3D(0, 0, 1))

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())

    def point_at(self, t: float) -> Vector3D:
        """Return the point at parameter ``t`` along the ray."""
        return self.origin + self.direction * t