"""Validated RGB pixels and their normalized network encoding."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .colors import RGB, Color
from .core.types import Array

CHANNEL_MAX = 255


class InvalidPixel(ValueError):
    """A channel value is not an integer in ``[0, 255]``."""


def clamp_channel(value: int) -> int:
    return int(max(0, min(CHANNEL_MAX, value)))


def _check_channel(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidPixel(f"{name} channel must be an integer, got {value!r}")
    if not 0 <= value <= CHANNEL_MAX:
        raise InvalidPixel(f"{name} channel must be within [0, {CHANNEL_MAX}], got {value}")
    return int(value)


@dataclass(frozen=True)
class Pixel:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            object.__setattr__(self, name, _check_channel(name, getattr(self, name)))

    @classmethod
    def from_color(cls, color: Color) -> "Pixel":
        return cls(*color.rgb)

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Pixel":
        red, green, blue = rng.integers(0, CHANNEL_MAX + 1, size=3)
        return cls(int(red), int(green), int(blue))

    @property
    def rgb(self) -> RGB:
        return (self.red, self.green, self.blue)

    @property
    def color(self) -> Color:
        return Color.from_rgb(*self.rgb)

    def normalized(self) -> Array:
        """Channels scaled to ``[0, 1]`` as the network's input vector."""

        return np.asarray(self.rgb, dtype=np.float64) / CHANNEL_MAX

    def __str__(self) -> str:
        return f"({self.red}, {self.green}, {self.blue}) = {self.color.label}"


__all__ = ["CHANNEL_MAX", "InvalidPixel", "Pixel", "clamp_channel"]
