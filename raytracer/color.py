"""RGB colours with 8-bit channels."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Iterator


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Color:
    """An immutable RGB colour.

    Channels are stored as 8-bit values; integers outside 0..255 wrap
    around as an unsigned byte does.
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", int(self.r) & 0xFF)
        object.__setattr__(self, "g", int(self.g) & 0xFF)
        object.__setattr__(self, "b", int(self.b) & 0xFF)

    @classmethod
    def from_floats(cls, r: float, g: float, b: float) -> Color:
        """Build a colour from floats, clamped to 0..255 and truncated."""
        return cls(
            int(_clamp(r, 0.0, 255.0)),
            int(_clamp(g, 0.0, 255.0)),
            int(_clamp(b, 0.0, 255.0)),
        )

    def __iter__(self) -> Iterator[int]:
        yield self.r
        yield self.g
        yield self.b

    def __add__(self, other: object) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            min(self.r + other.r, 255),
            min(self.g + other.g, 255),
            min(self.b + other.b, 255),
        )

    def __mul__(self, other: object) -> Color:
        if isinstance(other, Color):
            return Color(
                self.r * other.r // 255,
                self.g * other.g // 255,
                self.b * other.b // 255,
            )
        if isinstance(other, Real):
            scalar = _clamp(float(other), 0.0, 1.0)
            return Color(
                int(self.r * scalar),
                int(self.g * scalar),
                int(self.b * scalar),
            )
        return NotImplemented

    def __rmul__(self, other: object) -> Color:
        if isinstance(other, Real):
            return self * other
        return NotImplemented


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)