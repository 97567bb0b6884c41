"""Reference color taxonomy used to label pixels."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

RGB = Tuple[int, int, int]


class Color(Enum):
    """Named colors with their canonical RGB triples."""

    RED = (255, 0, 0)
    GREEN = (0, 255, 0)
    BLUE = (0, 0, 255)
    YELLOW = (255, 255, 0)
    CYAN = (0, 255, 255)
    PURPLE = (255, 0, 255)
    BLACK = (0, 0, 0)
    WHITE = (255, 255, 255)
    UNDEFINED = (128, 128, 128)

    @property
    def rgb(self) -> RGB:
        return self.value

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def palette(cls) -> Dict[str, "Color"]:
        """Return the eight defined colors keyed by label, in declaration order."""

        return {color.label: color for color in cls if color is not cls.UNDEFINED}

    @classmethod
    def from_label(cls, label: str) -> "Color":
        try:
            return cls[label.strip().upper()]
        except KeyError as exc:
            raise KeyError(f"Unknown color: {label!r}") from exc

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        """Bucket an RGB triple by simple per-channel thresholds."""

        high_r, high_g, high_b = red > 200, green > 200, blue > 200
        low_r, low_g, low_b = red < 100, green < 100, blue < 100
        if high_r and low_g and low_b:
            return cls.RED
        if low_r and high_g and low_b:
            return cls.GREEN
        if low_r and low_g and high_b:
            return cls.BLUE
        if high_r and high_g and low_b:
            return cls.YELLOW
        if low_r and high_g and high_b:
            return cls.CYAN
        if high_r and low_g and high_b:
            return cls.PURPLE
        if red < 50 and green < 50 and blue < 50:
            return cls.BLACK
        if high_r and high_g and high_b:
            return cls.WHITE
        return cls.UNDEFINED


__all__ = ["RGB", "Color"]
