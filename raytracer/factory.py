"""Building primitives and materials from configuration settings."""

from __future__ import annotations

import functools
import logging
from numbers import Real
from typing import Any, Callable, Iterable, Mapping

from raytracer.color import WHITE, Color
from raytracer.material import Material
from raytracer.plugins import load_plugin
from raytracer.primitives import Cylinder, Plane, Primitive, Sphere
from raytracer.vector import Vector3D

__all__ = ["Creator", "PrimitiveFactory", "create_material", "default_factory"]

logger = logging.getLogger(__name__)

Creator = Callable[[Mapping[str, Any]], Primitive]


def _number(config: Mapping[str, Any], key: str) -> float:
    """Return the numeric setting ``key``; raise KeyError or TypeError otherwise."""
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"setting {key!r} must be a number, not {type(value).__name__}")
    return value


def _require(config: Mapping[str, Any], keys: Iterable[str], what: str) -> None:
    keys = tuple(keys)
    if any(key not in config for key in keys):
        raise ValueError(f"{what} requires {', '.join(keys)} parameters")


def create_material(config: Mapping[str, Any]) -> Material:
    """Build a material from ``color``, ``ambient`` and ``diffuse`` settings.

    Colour channels are clamped to 0..255 and coefficients to [0, 1].  A colour
    lacking a channel leaves white; a badly typed setting keeps the defaults for
    it and everything after it.
    """
    color = WHITE
    ambient = 0.5
    diffuse = 0.5
    try:
        if "color" in config:
            col = config["color"]
            if not all(channel in col for channel in ("r", "g", "b")):
                logger.warning("Color requires r, g, b values. Using white.")
            else:
                r, g, b = (
                    max(0, min(255, int(_number(col, channel))))
                    for channel in ("r", "g", "b")
                )
                color = Color(r, g, b)
        if "ambient" in config:
            ambient = max(0.0, min(1.0, float(_number(config, "ambient"))))
        if "diffuse" in config:
            diffuse = max(0.0, min(1.0, float(_number(config, "diffuse"))))
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Error parsing material: %s. Using defaults.", exc)
    return Material(color, ambient, diffuse)


def _material_of(config: Mapping[str, Any]) -> Material:
    return create_material(config) if "color" in config else Material()


def _create_sphere(config: Mapping[str, Any]) -> Primitive:
    _require(config, ("x", "y", "z", "r"), "Sphere")
    center = Vector3D(_number(config, "x"), _number(config, "y"), _number(config, "z"))
    return Sphere(center, float(_number(config, "r")), _material_of(config))


def _create_plane(config: Mapping[str, Any]) -> Primitive:
    _require(config, ("axis", "position"), "Plane")
    axis = config["axis"]
    if not isinstance(axis, str):
        raise TypeError("setting 'axis' must be a string")
    position = float(_number(config, "position"))
    if not axis:
        raise ValueError("Plane axis cannot be empty")
    return Plane.from_axis(axis[0], position, _material_of(config))


def _create_cylinder(config: Mapping[str, Any]) -> Primitive:
    _require(config, ("x", "y", "z", "r", "h"), "Cylinder")
    position = Vector3D(_number(config, "x"), _number(config, "y"), _number(config, "z"))
    return Cylinder(
        position,
        float(_number(config, "r")),
        float(_number(config, "h")),
        _material_of(config),
    )


class PrimitiveFactory:
    """A registry of named primitive creators."""

    def __init__(self) -> None:
        self._creators: dict[str, Creator] = {}

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._creators

    @property
    def types(self) -> list[str]:
        """Registered type names, in registration order."""
        return list(self._creators)

    def register(self, type_name: str, creator: Creator) -> None:
        """Register ``creator`` under ``type_name``, replacing any earlier one.

        Raises ValueError for an empty name or a creator that is not callable.
        """
        if not type_name:
            raise ValueError("Cannot register empty type name")
        if not callable(creator):
            raise ValueError(f"Cannot register null creator for type '{type_name}'")
        self._creators[type_name] = creator
        logger.info("PrimitiveFactory: Registered type '%s'", type_name)

    def create(self, type_name: str, config: Mapping[str, Any]) -> Primitive:
        """Build a primitive of ``type_name`` from ``config``.

        Raises ValueError if the type is unknown or its creator fails.
        """
        creator = self._creators.get(type_name)
        if creator is None:
            available = " ".join(f"'{name}'" for name in self._creators)
            raise ValueError(f"Unknown type '{type_name}'. Available types: {available}")
        try:
            primitive = creator(config)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Exception creating '{type_name}': {exc}") from exc
        if primitive is None:
            raise ValueError(f"Creator for type '{type_name}' returned null")
        return primitive

    def create_primitive(self, config: Mapping[str, Any]) -> Primitive:
        """Build a primitive, from a plugin or from a type given or guessed.

        A ``plugin`` setting loads that plugin; otherwise ``type`` names the
        type, or it is guessed: ``r`` with ``h`` is a cylinder, ``r`` alone a
        sphere, ``axis`` or ``normal`` with ``distance`` a plane.
        Raises ValueError if no primitive can be built and PluginError if the
        plugin fails.
        """
        if "plugin" in config:
            path = config["plugin"]
            if not isinstance(path, str):
                raise ValueError("setting 'plugin' must be a string")
            return load_plugin(path, config)
        if "type" in config:
            type_name = config["type"]
            if not isinstance(type_name, str):
                raise ValueError("setting 'type' must be a string")
        elif "r" in config:
            type_name = "cylinder" if "h" in config else "sphere"
        elif "axis" in config or ("normal" in config and "distance" in config):
            type_name = "plane"
        else:
            raise ValueError("Could not determine primitive type")
        return self.create(type_name, config)


@functools.cache
def default_factory() -> PrimitiveFactory:
    """Return the shared factory with sphere, plane and cylinder registered."""
    factory = PrimitiveFactory()
    factory.register("sphere", _create_sphere)
    factory.register("plane", _create_plane)
    factory.register("cylinder", _create_cylinder)
    return factory