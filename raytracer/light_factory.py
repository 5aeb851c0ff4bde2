"""Building lights from configuration settings."""

from __future__ import annotations

from numbers import Real
from typing import Any, Mapping

from raytracer.color import WHITE, Color
from raytracer.lights import AmbientLight, DirectionalLight, Light
from raytracer.vector import Vector3D

__all__ = [
    "create_ambient_light",
    "create_color",
    "create_directional_light",
    "create_light",
]


def _number(config: Mapping[str, Any], key: str) -> float:
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"setting {key!r} must be a number, not {type(value).__name__}")
    return value


def create_light(config: Mapping[str, Any], kind: str) -> Light:
    """Build a light of ``kind`` (``ambient`` or ``directional``) from ``config``.

    Raises ValueError for an unknown kind or a bad configuration.
    """
    builders = {
        "ambient": create_ambient_light,
        "directional": create_directional_light,
    }
    builder = builders.get(kind)
    if builder is None:
        raise ValueError(f"Unknown light type: {kind}")
    try:
        return builder(config)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Error creating light: {exc}") from exc


def create_ambient_light(config: Mapping[str, Any]) -> AmbientLight:
    """Build an ambient light from optional ``intensity`` and ``color``."""
    intensity = 1.0
    color = WHITE
    if "intensity" in config:
        intensity = float(_number(config, "intensity"))
    if "color" in config:
        color = create_color(config["color"])
    return AmbientLight(intensity, color)


def create_directional_light(config: Mapping[str, Any]) -> DirectionalLight:
    """Build a directional light from ``x``, ``y``, ``z`` and optional settings.

    Raises ValueError if a direction component is missing or the direction is zero.
    """
    if any(axis not in config for axis in ("x", "y", "z")):
        raise ValueError("Missing direction coordinates for directional light")
    direction = Vector3D(_number(config, "x"), _number(config, "y"), _number(config, "z"))
    intensity = 1.0
    if "intensity" in config:
        intensity = float(_number(config, "intensity"))
    color = WHITE
    if "color" in config:
        color = create_color(config["color"])
    return DirectionalLight(direction, intensity, color)


def create_color(config: Mapping[str, Any]) -> Color:
    """Build a colour from ``r``, ``g`` and ``b``, each defaulting to 255."""
    r, g, b = (
        int(_number(config, channel)) if channel in config else 255
        for channel in ("r", "g", "b")
    )
    return Color(r, g, b)