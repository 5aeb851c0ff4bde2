"""Light sources."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from raytracer.color import WHITE, Color
from raytracer.vector import Vector3D


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


class Light(ABC):
    """A light source seen from a surface point."""

    is_ambient: ClassVar[bool] = False
    color: Color

    @abstractmethod
    def direction_from(self, point: Vector3D) -> Vector3D:
        """Return the unit direction from ``point`` towards the light."""

    @abstractmethod
    def intensity_at(self, point: Vector3D) -> float:
        """Return the light intensity reaching ``point``."""

    @abstractmethod
    def clone(self) -> Light:
        """Return an equal, independent copy."""


@dataclass(frozen=True)
class AmbientLight(Light):
    """Uniform light with no direction; intensity is clamped to [0, 1]."""

    is_ambient: ClassVar[bool] = True

    intensity: float = 1.0
    color: Color = WHITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "intensity", _clamp_unit(self.intensity))

    def direction_from(self, point: Vector3D) -> Vector3D:
        return Vector3D(0, 0, 0)

    def intensity_at(self, point: Vector3D) -> float:
        return self.intensity

    def clone(self) -> AmbientLight:
        return dataclasses.replace(self)


@dataclass(frozen=True)
class DirectionalLight(Light):
    """Parallel light travelling along ``direction``, which is normalised."""

    is_ambient: ClassVar[bool] = False

    direction: Vector3D = Vector3D(0, 0, -1)
    intensity: float = 1.0
    color: Color = WHITE

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalize())
        object.__setattr__(self, "intensity", _clamp_unit(self.intensity))

    def direction_from(self, point: Vector3D) -> Vector3D:
        return -self.direction.normalize()

    def intensity_at(self, point: Vector3D) -> float:
        return self.intensity

    def clone(self) -> DirectionalLight:
        return dataclasses.replace(self)