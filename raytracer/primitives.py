"""Geometric primitives and ray intersection."""

from __future__ import annotations

import dataclasses
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from raytracer.material import Material
from raytracer.ray import Ray
from raytracer.vector import Vector3D

_PARALLEL_EPSILON = 1e-8


@dataclass(frozen=True)
class HitInfo:
    """Where a ray met a surface, the surface normal there and its material."""

    distance: float
    point: Vector3D
    normal: Vector3D
    material: Material


class Primitive(ABC):
    """A surface that a ray can hit."""

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        """Return the hit within ``[min_dist, max_dist]``, or None."""

    @abstractmethod
    def clone(self) -> Primitive:
        """Return an equal, independent copy."""


@dataclass
class Sphere(Primitive):
    """A sphere; a negative radius is stored as zero."""

    center: Vector3D = field(default_factory=Vector3D)
    radius: float = 1.0
    material: Material = field(default_factory=Material)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "radius":
            value = float(value) if value > 0 else 0.0
        object.__setattr__(self, name, value)

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None
        root = math.sqrt(discriminant)
        t = (-b - root) / (2.0 * a)
        if t < min_dist or t > max_dist:
            t = (-b + root) / (2.0 * a)
            if t < min_dist or t > max_dist:
                return None
        point = ray.point_at(t)
        normal = ((point - self.center) / self.radius).normalize()
        return HitInfo(t, point, normal, self.material)

    def clone(self) -> Sphere:
        return dataclasses.replace(self)


@dataclass
class Plane(Primitive):
    """The plane of points p with ``normal . p == distance``; the normal is normalised."""

    normal: Vector3D = field(default_factory=lambda: Vector3D(0, 0, 1))
    distance: float = 0.0
    material: Material = field(default_factory=Material)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "normal":
            value = value.normalize()
        object.__setattr__(self, name, value)

    @classmethod
    def from_axis(cls, axis: str, position: float, material: Material | None = None) -> Plane:
        """Build a plane perpendicular to axis ``X``, ``Y`` or ``Z`` (either case).

        Raises ValueError for any other axis.
        """
        normals = {
            "x": Vector3D(1, 0, 0),
            "y": Vector3D(0, 1, 0),
            "z": Vector3D(0, 0, 1),
        }
        key = axis[:1].lower() if len(axis) == 1 else ""
        if key not in normals:
            raise ValueError("Invalid axis. Must be 'X', 'Y', or 'Z'")
        return cls(normals[key], position, material if material is not None else Material())

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        denom = self.normal.dot(ray.direction)
        if abs(denom) < _PARALLEL_EPSILON:
            return None
        t = (self.distance - self.normal.dot(ray.origin)) / denom
        if t < min_dist or t > max_dist:
            return None
        normal = -self.normal if denom > 0 else self.normal
        return HitInfo(t, ray.point_at(t), normal, self.material)

    def clone(self) -> Plane:
        return dataclasses.replace(self)


@dataclass
class Cylinder(Primitive):
    """A capped cylinder along +Y, from ``position.y`` to ``position.y + height``."""

    position: Vector3D
    radius: float
    height: float
    material: Material = field(default_factory=Material)

    def _cap_hit(
        self, ray: Ray, y: float, normal: Vector3D, min_dist: float, closest: float
    ) -> HitInfo | None:
        if abs(ray.direction.y) <= _PARALLEL_EPSILON:
            return None
        t = (y - ray.origin.y) / ray.direction.y
        if not (min_dist <= t < closest):
            return None
        point = ray.origin + ray.direction * t
        dx = point.x - self.position.x
        dz = point.z - self.position.z
        if dx * dx + dz * dz > self.radius * self.radius:
            return None
        return HitInfo(t, point, normal, self.material)

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        closest_hit: HitInfo | None = None
        closest = max_dist
        ox = ray.origin.x - self.position.x
        oz = ray.origin.z - self.position.z
        dx = ray.direction.x
        dz = ray.direction.z
        a = dx * dx + dz * dz
        b = 2.0 * (ox * dx + oz * dz)
        c = ox * ox + oz * oz - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c

        if discriminant >= 0.0 and a > _PARALLEL_EPSILON:
            root = math.sqrt(discriminant)
            for t in ((-b - root) / (2.0 * a), (-b + root) / (2.0 * a)):
                if not (min_dist <= t < closest):
                    continue
                point = ray.origin + ray.direction * t
                if self.position.y <= point.y <= self.position.y + self.height:
                    radial = Vector3D(
                        point.x - self.position.x, 0.0, point.z - self.position.z
                    )
                    closest = t
                    closest_hit = HitInfo(t, point, radial.normalize(), self.material)

        caps = (
            (self.position.y, Vector3D(0, -1, 0)),
            (self.position.y + self.height, Vector3D(0, 1, 0)),
        )
        for y, normal in caps:
            hit = self._cap_hit(ray, y, normal, min_dist, closest)
            if hit is not None:
                closest = hit.distance
                closest_hit = hit
        return closest_hit

    def clone(self) -> Cylinder:
        return dataclasses.replace(self)