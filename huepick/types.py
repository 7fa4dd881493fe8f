"""Core value types for huepick - toolkit-agnostic."""

from __future__ import annotations

import enum
import numbers
from dataclasses import dataclass

from huepick import defaults
from huepick.errors import ColorRangeError, InvalidOrientationError


def check_range(name: str, value: int, maximum: int) -> None:
    """Raise ColorRangeError unless *value* is an integer with ``0 <= value <= maximum``."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ColorRangeError(f"{name}={value!r} must be an integer")
    if not 0 <= value <= maximum:
        raise ColorRangeError(f"{name}={value!r} must be in the range [0, {maximum}]")


class Orientation(enum.Enum):
    """Axis a gradient track runs along."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SliderMode(enum.Enum):
    """Numeric domain shown by a color slider."""

    CHANNEL = "channel"  # 0..255
    DEGREES = "degrees"  # 0..360
    TOTAL = "total"      # 0..100

    @property
    def maximum(self) -> int:
        if self is SliderMode.CHANNEL:
            return defaults.RGB_MAX
        if self is SliderMode.DEGREES:
            return defaults.HUE_MAX
        if self is SliderMode.TOTAL:
            return defaults.SATURATION_MAX
        raise InvalidOrientationError(f"Unknown slider mode: {self!r}")


class Channel(enum.Enum):
    """Sliders kept in sync by the picker."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ALPHA = "alpha"
    HUE = "hue"
    SATURATION = "saturation"
    VALUE = "value"

    @property
    def mode(self) -> SliderMode:
        if self is Channel.HUE:
            return SliderMode.DEGREES
        if self in (Channel.SATURATION, Channel.VALUE):
            return SliderMode.TOTAL
        return SliderMode.CHANNEL


RGB_CHANNELS: tuple[Channel, ...] = (Channel.RED, Channel.GREEN, Channel.BLUE)
HSV_CHANNELS: tuple[Channel, ...] = (Channel.HUE, Channel.SATURATION, Channel.VALUE)


@dataclass(frozen=True)
class RgbColor:
    """8-bit RGB triple."""

    r: int
    g: int
    b: int

    def __post_init__(self):
        check_range("r", self.r, defaults.RGB_MAX)
        check_range("g", self.g, defaults.RGB_MAX)
        check_range("b", self.b, defaults.RGB_MAX)

    @classmethod
    def from_hsv(cls, hsv: HsvColor) -> RgbColor:
        return hsv.to_rgb()

    def to_hsv(self) -> HsvColor:
        from huepick.colorspace import rgb_to_hsv
        return rgb_to_hsv(self)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"({self.r}, {self.g}, {self.b})"


@dataclass(frozen=True)
class HsvColor:
    """Hue in degrees [0, 360], saturation and value in percent [0, 100]."""

    hue: int
    saturation: int
    value: int

    def __post_init__(self):
        check_range("hue", self.hue, defaults.HUE_MAX)
        check_range("saturation", self.saturation, defaults.SATURATION_MAX)
        check_range("value", self.value, defaults.VALUE_MAX)

    @classmethod
    def from_rgb(cls, rgb: RgbColor) -> HsvColor:
        return rgb.to_hsv()

    def to_rgb(self, *, round_channels: bool = False) -> RgbColor:
        from huepick.colorspace import hsv_to_rgb
        return hsv_to_rgb(self, round_channels=round_channels)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.hue, self.saturation, self.value)

    def __str__(self) -> str:
        return f"({self.hue}, {self.saturation}, {self.value})"


@dataclass(frozen=True)
class Rgba:
    """RGB color with straight (non-premultiplied) alpha, used as a gradient stop."""

    r: int
    g: int
    b: int
    a: int = defaults.ALPHA_MAX

    def __post_init__(self):
        check_range("r", self.r, defaults.RGB_MAX)
        check_range("g", self.g, defaults.RGB_MAX)
        check_range("b", self.b, defaults.RGB_MAX)
        check_range("a", self.a, defaults.ALPHA_MAX)

    @classmethod
    def from_rgb(cls, rgb: RgbColor, alpha: int = defaults.ALPHA_MAX) -> Rgba:
        return cls(rgb.r, rgb.g, rgb.b, alpha)

    @property
    def rgb(self) -> RgbColor:
        return RgbColor(self.r, self.g, self.b)

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)
