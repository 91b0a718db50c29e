"""
Pixel value model

A pixel is either a direct RGB triple (linear intensities 0-255) or an HSV
triple (hue 0-1 wrapping, saturation and value 0-1). Both normalize their
components on construction, so anything holding one can hand it straight to
the output channel.
"""

import math
from dataclasses import dataclass
from typing import Tuple, Union

from models.enums import ColorModel


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class RGB:
    """
    Linear RGB intensities in [0, 255].

    Examples:
        RGB(255, 0, 0)          # red
        RGB(300, -4, 12.5)      # normalized to (255, 0, 12.5)
    """
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    model = ColorModel.RGB

    def __post_init__(self):
        object.__setattr__(self, "r", _clamp(float(self.r), 0.0, 255.0))
        object.__setattr__(self, "g", _clamp(float(self.g), 0.0, 255.0))
        object.__setattr__(self, "b", _clamp(float(self.b), 0.0, 255.0))

    @classmethod
    def black(cls) -> "RGB":
        return cls(0, 0, 0)

    def to_rgb(self) -> "RGB":
        return self

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_bytes_tuple(self) -> Tuple[int, int, int]:
        """Integer intensities, rounded half up."""
        return (
            int(math.floor(self.r + 0.5)),
            int(math.floor(self.g + 0.5)),
            int(math.floor(self.b + 0.5)),
        )


@dataclass(frozen=True)
class HSV:
    """
    Hue/saturation/value pixel.

    Hue wraps modulo 1.0 (1.25 -> 0.25, -0.1 -> 0.9); saturation and value
    clamp to [0, 1].
    """
    h: float = 0.0
    s: float = 0.0
    v: float = 0.0

    model = ColorModel.HSV

    def __post_init__(self):
        object.__setattr__(self, "h", float(self.h) % 1.0)
        object.__setattr__(self, "s", _clamp(float(self.s), 0.0, 1.0))
        object.__setattr__(self, "v", _clamp(float(self.v), 0.0, 1.0))

    @classmethod
    def off(cls) -> "HSV":
        return cls(0, 0, 0)

    def to_rgb(self) -> RGB:
        from utils.colors import hsv_to_rgb
        return RGB(*hsv_to_rgb(self.h, self.s, self.v))

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.h, self.s, self.v)


PixelValue = Union[RGB, HSV]
