"""Loadable primitives: an axis-aligned box, a chair built from boxes and a cone."""

from __future__ import annotations

import dataclasses
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from raytracer.color import Color
from raytracer.material import Material
from raytracer.primitives import HitInfo, Primitive
from raytracer.ray import Ray
from raytracer.vector import Vector3D

__all__ = [
    "Box",
    "Chair",
    "Cone",
    "PluginError",
    "create_chair",
    "create_cone",
    "load_plugin",
]


class PluginError(RuntimeError):
    """Raised when a plugin cannot be loaded or fails to build its primitive."""


def _div(a: float, b: float) -> float:
    """Divide as IEEE 754 floats do, giving inf or nan instead of raising."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _slab(low: float, high: float, origin: float, direction: float) -> tuple[float, float]:
    inverse = _div(1.0, direction)
    t0 = (low - origin) * inverse
    t1 = (high - origin) * inverse
    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass
class Box(Primitive):
    """An axis-aligned box between two opposite corners."""

    min_corner: Vector3D
    max_corner: Vector3D
    material: Material = field(default_factory=Material)

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        origin = ray.origin
        direction = ray.direction
        tmin, tmax = _slab(self.min_corner.x, self.max_corner.x, origin.x, direction.x)
        tymin, tymax = _slab(self.min_corner.y, self.max_corner.y, origin.y, direction.y)
        if tmin > tymax or tymin > tmax:
            return None
        if tymin > tmin:
            tmin = tymin
        if tymax < tmax:
            tmax = tymax
        tzmin, tzmax = _slab(self.min_corner.z, self.max_corner.z, origin.z, direction.z)
        if tmin > tzmax or tzmin > tmax:
            return None
        if tzmin > tmin:
            tmin = tzmin

        t = tmin
        if t < min_dist or t > max_dist:
            return None

        point = origin + direction * t
        center = (self.min_corner + self.max_corner) * 0.5
        offset = point - center
        size = self.max_corner - self.min_corner
        rx = _div(abs(offset.x), size.x)
        ry = _div(abs(offset.y), size.y)
        rz = _div(abs(offset.z), size.z)
        if rx > ry and rx > rz:
            normal = Vector3D(1 if offset.x > 0 else -1, 0, 0)
        elif ry > rz:
            normal = Vector3D(0, 1 if offset.y > 0 else -1, 0)
        else:
            normal = Vector3D(0, 0, 1 if offset.z > 0 else -1)
        return HitInfo(t, point, normal, self.material)

    def clone(self) -> Box:
        return dataclasses.replace(self)


_WOOD = Material(Color(139, 69, 19), 0.3, 0.6)
_CHAIR_BOXES = (
    ((-20, -20, 0), (20, 20, 5)),
    ((-20, 17, 5), (20, 22, 40)),
    ((-18, -18, -30), (-13, -13, 0)),
    ((13, -18, -30), (18, -13, 0)),
    ((-18, 13, -30), (-13, 18, 0)),
    ((13, 13, -30), (18, 18, 0)),
)


class Chair(Primitive):
    """A wooden chair: seat, backrest and four legs, each a box."""

    def __init__(self, parts: Iterable[Primitive] | None = None) -> None:
        if parts is None:
            self.parts: list[Primitive] = [
                Box(Vector3D(*low), Vector3D(*high), _WOOD) for low, high in _CHAIR_BOXES
            ]
        else:
            self.parts = list(parts)

    def __repr__(self) -> str:
        return f"Chair(parts={self.parts!r})"

    @property
    def material(self) -> Material:  # type: ignore[override]
        """The first part's material, or the default material if there are no parts."""
        if not self.parts:
            return Material()
        return self.parts[0].material

    @material.setter
    def material(self, material: Material) -> None:
        for part in self.parts:
            part.material = material

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        closest_hit: HitInfo | None = None
        closest = max_dist
        for part in self.parts:
            hit = part.intersect(ray, min_dist, closest)
            if hit is not None:
                closest = hit.distance
                closest_hit = hit
        return closest_hit

    def clone(self) -> Chair:
        return Chair(part.clone() for part in self.parts)


@dataclass
class Cone(Primitive):
    """A cone with its base circle at ``apex`` and its tip ``height`` along Z.

    When ``inverted`` the tip points towards -Z instead of +Z.
    """

    apex: Vector3D
    height: float
    radius: float
    material: Material = field(default_factory=Material)
    inverted: bool = False

    def intersect(self, ray: Ray, min_dist: float, max_dist: float) -> HitInfo | None:
        sign = -1.0 if self.inverted else 1.0
        tip = self.apex + Vector3D(0, 0, self.height * sign)
        v = ray.direction
        u = ray.origin - tip
        k = _div(self.radius, self.height)
        k2 = k * k
        a = v.x * v.x + v.y * v.y - k2 * v.z * v.z
        b = 2.0 * (u.x * v.x + u.y * v.y - k2 * u.z * v.z)
        c = u.x * u.x + u.y * u.y - k2 * u.z * u.z
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return None

        root = math.sqrt(discriminant)
        for t in (_div(-b - root, 2.0 * a), _div(-b + root, 2.0 * a)):
            if not (min_dist <= t <= max_dist):
                continue
            point = ray.origin + v * t
            z_diff = (point.z - self.apex.z) * sign
            if not (0.0 <= z_diff <= self.height):
                continue
            expected = self.radius * (1.0 - _div(z_diff, self.height))
            dx = point.x - self.apex.x
            dy = point.y - self.apex.y
            if dx * dx + dy * dy > expected * expected + 1e-6:
                continue
            radial = Vector3D(dx, dy, 0)
            if radial.length() > 1e-6:
                angle = math.atan(_div(self.radius, self.height))
                axial = Vector3D(0, 0, sign)
                normal = (
                    radial.normalize() * math.cos(angle) + axial * math.sin(angle)
                ).normalize()
            else:
                normal = Vector3D(0, 0, sign)
            return HitInfo(t, point, normal, self.material)
        return None

    def clone(self) -> Cone:
        return dataclasses.replace(self)


def create_chair(config: Mapping[str, Any] | None = None) -> Chair:
    """Build the chair; it takes no settings from ``config``."""
    return Chair()


def create_cone(config: Mapping[str, Any]) -> Cone:
    """Build a cone from ``position``, ``color``, ``height``, ``radius`` and ``inverted``.

    Raises KeyError if a position or colour group lacks a component.
    """
    position = Vector3D(0.0, 0.0, 0.0)
    height = 50.0
    radius = 20.0
    inverted = False
    color = Color(128, 0, 255)

    if "position" in config:
        pos = config["position"]
        position = Vector3D(float(pos["x"]), float(pos["y"]), float(pos["z"]))
    if "color" in config:
        col = config["color"]
        color = Color(int(col["r"]), int(col["g"]), int(col["b"]))
    if "height" in config:
        height = float(config["height"])
    if "radius" in config:
        radius = float(config["radius"])
    if "inverted" in config:
        inverted = bool(config["inverted"])
    return Cone(position, height, radius, Material(color, 0.5, 0.5), inverted)


_PLUGINS: dict[str, Callable[[Mapping[str, Any]], Primitive]] = {
    "chair": create_chair,
    "cone": create_cone,
}


def load_plugin(path: str | os.PathLike[str], config: Mapping[str, Any]) -> Primitive:
    """Create the primitive of the plugin that ``path`` names.

    The plugin is chosen by the file name's stem without any ``plugin_``
    prefix, so ``build/plugins/plugin_cone.so`` selects the cone.
    Raises PluginError if the plugin is unknown or cannot build its primitive.
    """
    stem = Path(path).stem
    name = stem[len("plugin_"):] if stem.startswith("plugin_") else stem
    creator = _PLUGINS.get(name)
    if creator is None:
        raise PluginError(f"cannot load plugin {os.fspath(path)!r}: unknown plugin {stem!r}")
    try:
        return creator(config)
    except (KeyError, TypeError, ValueError) as exc:
        raise PluginError(
            f"plugin {os.fspath(path)!r} failed to create a primitive: {exc}"
        ) from exc