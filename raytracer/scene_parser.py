"""Building a scene from a parsed configuration or a scene file."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any, Iterable

from raytracer.camera import Camera
from raytracer.factory import default_factory
from raytracer.libconfig import ConfigParseError, load
from raytracer.light_factory import create_directional_light
from raytracer.lights import AmbientLight
from raytracer.plugins import PluginError
from raytracer.scene import Scene
from raytracer.vector import Vector3D

__all__ = ["SceneParseError", "parse_file", "parse_scene"]

_PRIMITIVE_SECTIONS = (
    ("spheres", "sphere"),
    ("planes", "plane"),
    ("cylinders", "cylinder"),
)


class SceneParseError(ValueError):
    """Raised when a scene description cannot be turned into a scene."""


def _members(value: Any) -> Mapping[str, Any]:
    """Return the settings of a group; anything else has no members."""
    return value if isinstance(value, Mapping) else {}


def _elements(value: Any) -> Iterable[Any]:
    """Return the elements of a list, array or group; a scalar has none."""
    if isinstance(value, Mapping):
        return value.values()
    if isinstance(value, Sequence) and not isinstance(value, str):
        return value
    return ()


def _number(config: Mapping[str, Any], key: str) -> float:
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"setting {key!r} must be a number, not {type(value).__name__}")
    return float(value)


def _integer(config: Mapping[str, Any], key: str) -> int:
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"setting {key!r} must be an integer, not {type(value).__name__}")
    return value


def _vector(config: Any) -> Vector3D:
    return Vector3D(_number(config, "x"), _number(config, "y"), _number(config, "z"))


def _parse_camera(config: Mapping[str, Any], scene: Scene) -> None:
    camera = Camera()
    try:
        if "resolution" in config:
            resolution = config["resolution"]
            camera.width = _integer(resolution, "width")
            camera.height = _integer(resolution, "height")
        if "position" in config:
            camera.position = _vector(config["position"])
        if "rotation" in config:
            camera.rotation = _vector(config["rotation"])
        if "fieldOfView" in config:
            camera.field_of_view = _number(config, "fieldOfView")
    except KeyError as exc:
        raise SceneParseError(f"Required camera setting not found: {exc.args[0]}") from exc
    except TypeError as exc:
        raise SceneParseError(f"Type mismatch in camera setting: {exc}") from exc
    scene.camera = camera


def _parse_primitives(config: Mapping[str, Any], scene: Scene) -> None:
    factory = default_factory()
    for section, kind in _PRIMITIVE_SECTIONS:
        if section not in config:
            continue
        for index, item in enumerate(_elements(config[section])):
            try:
                primitive = factory.create(kind, item)
            except ValueError as exc:
                raise SceneParseError(
                    f"Failed to create {kind} at index {index}: {exc}"
                ) from exc
            scene.add_primitive(primitive)
    if "plugins" in config:
        _parse_plugin_primitives(config["plugins"], scene)


def _parse_plugin_primitives(config: Any, scene: Scene) -> None:
    if not isinstance(config, list):
        raise SceneParseError("Plugins must be a list")
    factory = default_factory()
    for index, item in enumerate(config):
        try:
            primitive = factory.create_primitive(item)
        except (KeyError, TypeError, ValueError, PluginError) as exc:
            raise SceneParseError(
                f"Failed to create plugin primitive at index {index}: {exc}"
            ) from exc
        scene.add_primitive(primitive)


def _parse_lights(config: Mapping[str, Any], scene: Scene) -> None:
    if "ambient" in config:
        try:
            intensity = _number(config, "ambient")
        except TypeError as exc:
            raise SceneParseError(f"Error parsing ambient light: {exc}") from exc
        scene.add_light(AmbientLight(intensity))
    if "directional" in config:
        lights = config["directional"]
        if not isinstance(lights, list):
            raise SceneParseError("Directional lights must be a list")
        for index, item in enumerate(lights):
            try:
                light = create_directional_light(item)
            except (KeyError, TypeError, ValueError) as exc:
                raise SceneParseError(
                    f"Failed to create directional light at index {index}: {exc}"
                ) from exc
            scene.add_light(light)
    # Point lights are accepted in the format but not rendered.


def parse_scene(config: Mapping[str, Any]) -> Scene:
    """Build a scene from parsed settings with camera, primitives and lights sections.

    Raises SceneParseError if a section is missing or holds bad settings.
    """
    scene = Scene()
    sections = (
        ("camera", _parse_camera),
        ("primitives", _parse_primitives),
        ("lights", _parse_lights),
    )
    for name, parse in sections:
        if name not in config:
            raise SceneParseError(f"No {name} section found in scene file")
        parse(_members(config[name]), scene)
    return scene


def parse_file(filename: str | os.PathLike[str]) -> Scene:
    """Read the scene file ``filename`` and build its scene.

    Raises SceneParseError if the file cannot be read, is malformed or
    describes an invalid scene.
    """
    name = os.fspath(filename)
    try:
        config = load(filename)
    except ConfigParseError as exc:
        raise SceneParseError(
            f"Parse error in scene file {name} at line {exc.line}: {exc.error}"
        ) from exc
    except UnicodeDecodeError as exc:
        raise SceneParseError(f"Error parsing scene file: {exc}") from exc
    except OSError as exc:
        raise SceneParseError(f"Error opening scene file: {name}") from exc
    return parse_scene(config)