"""Progress reporting for long renders."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from typing import Callable, TextIO

__all__ = ["Observer", "ProgressObserver"]

_BAR_WIDTH = 40
_MIN_STEP = 0.005


class Observer(ABC):
    """Receives progress updates as a fraction between 0 and 1."""

    @abstractmethod
    def update(self, progress: float) -> None:
        """Report that ``progress`` of the work is done."""


class ProgressObserver(Observer):
    """Draws a progress bar with elapsed time and an estimate of time left."""

    def __init__(
        self,
        name: str = "Render",
        stream: TextIO | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.name = name
        self._stream = stream if stream is not None else sys.stdout
        self._clock = clock
        self._last_progress = 0.0
        self._start = clock()

    def update(self, progress: float) -> None:
        """Redraw the bar unless progress moved by less than half a percent."""
        if progress - self._last_progress < _MIN_STEP and progress < 1.0:
            return
        self._last_progress = progress
        elapsed = int((self._clock() - self._start) * 1000) / 1000.0
        remaining = elapsed / progress - elapsed if progress else 0.0

        pos = int(_BAR_WIDTH * progress)
        bar = "".join(
            "=" if i < pos else ">" if i == pos else " " for i in range(_BAR_WIDTH)
        )
        text = f"\r{self.name}: [{bar}] {progress * 100.0:.1f}% | {elapsed:.1f}s"
        if 0.05 < progress < 1.0:
            text += f" | ETA: {remaining:.1f}s"
        if progress >= 1.0:
            text += " | Done!\n"
        self._stream.write(text)
        self._stream.flush()