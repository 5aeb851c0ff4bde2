"""Command line entry point: render a scene file to a PPM image."""

from __future__ import annotations

import os
import sys
import time
from typing import Sequence

from raytracer.plugins import PluginError
from raytracer.ppm import write_ppm
from raytracer.progress import ProgressObserver
from raytracer.renderer import Raytracer
from raytracer.scene_parser import SceneParseError, parse_file

__all__ = ["main"]

_PROGRAM = "raytracer"
_FAILURE = 84


def _print_usage() -> None:
    print(f"USAGE: {_PROGRAM} <SCENE_FILE>")
    print("SCENE_FILE: scene configuration")


def _output_path(filename: str) -> str:
    dot = filename.rfind(".")
    stem = filename if dot == -1 else filename[:dot]
    return stem + ".ppm"


def main(argv: Sequence[str] | None = None) -> int:
    """Render the scene file named in ``argv`` and return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Error: Invalid number of arguments", file=sys.stderr)
        _print_usage()
        return _FAILURE
    filename = args[0]

    try:
        scene = parse_file(filename)
    except SceneParseError as exc:
        print(f"Scene Parser Error: {exc}", file=sys.stderr)
        print("Error: Failed to parse scene file", file=sys.stderr)
        return _FAILURE
    except (PluginError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _FAILURE

    raytracer = Raytracer(stream=sys.stdout)
    raytracer.register_observer(ProgressObserver("Rendering"))
    print(f"Rendering scene with {os.cpu_count() or 0} threads...")
    print("Rendering scene...")
    start = time.perf_counter()
    try:
        image = raytracer.render(scene)
    except (ValueError, ZeroDivisionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return _FAILURE
    duration_ms = int((time.perf_counter() - start) * 1000)
    print(f"Rendering completed in {duration_ms / 1000.0} seconds")

    output = _output_path(filename)
    print(f"Writing image to {output}...")
    try:
        write_ppm(output, image, scene.camera.width, scene.camera.height)
    except (OSError, ValueError):
        print("Error: Failed to write output file", file=sys.stderr)
        return _FAILURE
    print(f"Image saved to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())