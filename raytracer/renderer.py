"""Rendering a scene into a list of pixel colours."""

from __future__ import annotations

import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TextIO

from raytracer.color import BLACK, Color
from raytracer.primitives import HitInfo
from raytracer.progress import Observer
from raytracer.ray import Ray
from raytracer.scene import Scene

__all__ = ["MAX_DEPTH", "MAX_DIST", "MIN_DIST", "TILE_SIZE", "Raytracer"]

MAX_DEPTH = 5
MIN_DIST = 0.001
MAX_DIST = 1000.0
TILE_SIZE = 32
_MIN_PROGRESS_STEP = 0.005


def _default_thread_count() -> int:
    return os.cpu_count() or 4


class Raytracer:
    """Renders scenes tile by tile on several threads and reports progress.

    When ``stream`` is given, a short report of each render is written to it.
    """

    def __init__(self, num_threads: int | None = None, stream: TextIO | None = None) -> None:
        self._observers: list[Observer] = []
        self._progress = 0.0
        self._cancelled = threading.Event()
        self._progress_lock = threading.Lock()
        self._stream = stream
        self._stream_lock = threading.Lock()
        self.num_threads = num_threads or 0

    @property
    def num_threads(self) -> int:
        """Number of rendering threads; zero or less selects the CPU count."""
        return self._num_threads

    @num_threads.setter
    def num_threads(self, value: int) -> None:
        self._num_threads = value if value > 0 else _default_thread_count()

    @property
    def progress(self) -> float:
        """Fraction of the current or last render that is done."""
        return self._progress

    def _report(self, text: str) -> None:
        if self._stream is not None:
            with self._stream_lock:
                self._stream.write(text + "\n")
                self._stream.flush()

    def render(self, scene: Scene) -> list[Color]:
        """Render ``scene`` and return its pixels row by row, top row first."""
        camera = scene.camera
        width, height = camera.width, camera.height
        total_pixels = width * height
        image = [BLACK] * max(total_pixels, 0)
        self._progress = 0.0
        self._cancelled.clear()
        tiles_x = -(-width // TILE_SIZE)
        tiles_y = -(-height // TILE_SIZE)
        total_tiles = tiles_x * tiles_y
        counter_lock = threading.Lock()
        next_tile = 0
        pixels_done = 0

        self._report("\n=== Raytracer Render Start ===")
        self._report(f"Resolution: {width}x{height} ({total_pixels} pixels)")
        self._report(
            f"Tiles: {tiles_x}x{tiles_y} ({total_tiles} tiles of {TILE_SIZE}x{TILE_SIZE})"
        )
        self._report(f"Threads: {self.num_threads}")
        self._report("===========================\n")

        def render_tiles() -> int:
            nonlocal next_tile, pixels_done
            name = threading.current_thread().name
            self._report(f"Thread {name} started")
            processed = 0
            while True:
                with counter_lock:
                    index = next_tile
                    next_tile += 1
                if index >= total_tiles or self._cancelled.is_set():
                    self._report(f"Thread {name} finished (processed {processed} tiles)")
                    return processed
                tile_y, tile_x = divmod(index, tiles_x)
                start_x = tile_x * TILE_SIZE
                start_y = tile_y * TILE_SIZE
                end_x = min(start_x + TILE_SIZE, width)
                end_y = min(start_y + TILE_SIZE, height)
                for y in range(start_y, end_y):
                    for x in range(start_x, end_x):
                        image[y * width + x] = self.trace_ray(camera.generate_ray(x, y), scene)
                processed += 1
                with counter_lock:
                    done = pixels_done
                    pixels_done += (end_x - start_x) * (end_y - start_y)
                new_progress = done / total_pixels
                if new_progress - self._progress >= _MIN_PROGRESS_STEP:
                    with self._progress_lock:
                        if new_progress - self._progress >= _MIN_PROGRESS_STEP:
                            self._progress = new_progress
                            self._notify(new_progress)

        self._report(f"Starting {self.num_threads} rendering threads...")
        start = time.perf_counter()
        with ThreadPoolExecutor(
            max_workers=self.num_threads, thread_name_prefix="render"
        ) as pool:
            futures = [pool.submit(render_tiles) for _ in range(self.num_threads)]
            for future in futures:
                future.result()
        duration_ms = int((time.perf_counter() - start) * 1000)

        if self._progress < 1.0:
            self._progress = 1.0
            self._notify(1.0)
        self._report("\nAll threads completed")
        self._report(f"Render time: {duration_ms / 1000.0} seconds")
        self._report(
            f"Average speed: {total_pixels * 1000 // max(duration_ms, 1)} pixels/second"
        )
        self._report("===============================")
        return image

    def register_observer(self, observer: Observer | None) -> None:
        """Add ``observer`` to those told of progress; None is ignored."""
        if observer is not None:
            self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        """Stop telling ``observer`` of progress, if it was registered."""
        if observer in self._observers:
            self._observers.remove(observer)

    def cancel(self) -> None:
        """Ask the render in progress to stop after the tiles being drawn."""
        self._cancelled.set()

    def _notify(self, progress: float) -> None:
        for observer in list(self._observers):
            observer.update(progress)

    def trace_ray(self, ray: Ray, scene: Scene, depth: int = 0) -> Color:
        """Return the colour seen along ``ray``; black past the depth limit or on a miss."""
        if depth > MAX_DEPTH:
            return BLACK
        hit = scene.intersect(ray, MIN_DIST, MAX_DIST)
        if hit is None:
            return BLACK
        return self.calculate_lighting(hit, scene)

    def calculate_lighting(self, hit: HitInfo, scene: Scene) -> Color:
        """Return the ambient plus diffuse colour of ``hit`` under the scene's lights."""
        material = hit.material
        surface = material.color
        normal = hit.normal.normalize()
        result = BLACK
        for light in scene.lights:
            light_color = light.color
            intensity = light.intensity_at(hit.point)
            if light.is_ambient:
                factor = intensity * material.ambient
            else:
                direction = light.direction_from(hit.point)
                cos_angle = max(0.0, normal.dot(direction))
                factor = intensity * cos_angle * material.diffuse
            result = result + surface * light_color * factor
        return result