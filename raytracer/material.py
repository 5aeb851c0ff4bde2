"""Surface materials."""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.color import WHITE, Color


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class Material:
    """Surface colour with ambient and diffuse coefficients clamped to [0, 1]."""

    color: Color = WHITE
    ambient: float = 0.5
    diffuse: float = 0.5

    def __post_init__(self) -> None:
        object.__setattr__(self, "ambient", _clamp_unit(self.ambient))
        object.__setattr__(self, "diffuse", _clamp_unit(self.diffuse))