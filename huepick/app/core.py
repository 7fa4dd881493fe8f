"""Toolkit-neutral picker state: settings, the anchor color and its derived view."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from functools import lru_cache
from typing import Mapping, Optional

import numpy as np

from huepick import defaults
from huepick.colorspace import hsv_ramp, hsv_to_rgb, rgb_to_hsv
from huepick.types import Channel, HsvColor, Rgba, RgbColor, check_range


@dataclass
class PickerSettings:
    """User-configurable picker parameters."""

    initial_color: RgbColor = field(default_factory=lambda: RgbColor(*defaults.DEFAULT_COLOR))
    initial_alpha: int = defaults.DEFAULT_ALPHA
    backdrop: RgbColor = field(default_factory=lambda: RgbColor(*defaults.DEFAULT_BACKDROP))
    round_channels: bool = defaults.DEFAULT_ROUND_CHANNELS  # HSV -> RGB rounding instead of truncation
    wheel_tesselation: int = defaults.WHEEL_TESSELATION
    wheel_keeps_value: bool = defaults.WHEEL_KEEPS_VALUE  # False: a wheel grab sets value 100


@dataclass(frozen=True)
class AnchorColor:
    """The single authoritative picker color.

    Carries both representations so that hue survives achromatic colors,
    but is only ever built from one of them, with the other derived.
    """

    rgb: RgbColor
    hsv: HsvColor
    alpha: int

    def __post_init__(self):
        check_range("alpha", self.alpha, defaults.ALPHA_MAX)

    @classmethod
    def from_rgb(cls, rgb: RgbColor, alpha: int = defaults.ALPHA_MAX) -> AnchorColor:
        return cls(rgb=rgb, hsv=rgb_to_hsv(rgb), alpha=alpha)

    @classmethod
    def from_hsv(
        cls,
        hsv: HsvColor,
        alpha: int = defaults.ALPHA_MAX,
        *,
        round_channels: bool = False,
    ) -> AnchorColor:
        return cls(rgb=hsv_to_rgb(hsv, round_channels=round_channels), hsv=hsv, alpha=alpha)

    def with_alpha(self, alpha: int) -> AnchorColor:
        return replace(self, alpha=alpha)

    @property
    def rgba(self) -> Rgba:
        return Rgba.from_rgb(self.rgb, self.alpha)


@dataclass(frozen=True)
class SliderState:
    """Everything a slider displays: its value and the colors of its gradient."""

    value: int
    min_color: RgbColor
    max_color: RgbColor
    custom_gradient: Optional[tuple[Rgba, ...]] = None


@dataclass(frozen=True)
class PickerView:
    """State of every dependent control for one anchor color."""

    sliders: Mapping[Channel, SliderState]  # Read-only
    wheel: HsvColor

    def __getitem__(self, channel: Channel) -> SliderState:
        return self.sliders[channel]


def _stops(rgb: np.ndarray) -> tuple[Rgba, ...]:
    return tuple(Rgba(int(r), int(g), int(b)) for r, g, b in rgb)


@lru_cache(maxsize=2)
def hue_gradient(round_channels: bool = False) -> tuple[Rgba, ...]:
    """Full hue ramp at saturation 100 / value 100, one stop per degree (361 stops)."""
    return _stops(hsv_ramp(np.arange(defaults.HUE_MAX + 1), 100, 100, round_channels=round_channels))


def saturation_gradient(hue: int, value: int, round_channels: bool = False) -> tuple[Rgba, ...]:
    """Saturation ramp 0..100 at fixed hue and value (101 stops)."""
    return _stops(hsv_ramp(hue, np.arange(defaults.SATURATION_MAX + 1), value, round_channels=round_channels))


def derive_view(anchor: AnchorColor, settings: Optional[PickerSettings] = None) -> PickerView:
    """Compute all control states from the anchor.

    Order is fixed: RGB group, alpha, HSV group, wheel.
    """
    rounding = settings.round_channels if settings is not None else defaults.DEFAULT_ROUND_CHANNELS
    r, g, b = anchor.rgb.as_tuple()
    h, s, v = anchor.hsv.as_tuple()

    sliders = {
        Channel.RED: SliderState(r, RgbColor(0, g, b), RgbColor(255, g, b)),
        Channel.GREEN: SliderState(g, RgbColor(r, 0, b), RgbColor(r, 255, b)),
        Channel.BLUE: SliderState(b, RgbColor(r, g, 0), RgbColor(r, g, 255)),
        Channel.ALPHA: SliderState(anchor.alpha, RgbColor(*defaults.ALPHA_MIN_COLOR), anchor.rgb),
        Channel.HUE: SliderState(
            h,
            HsvColor(0, 100, 100).to_rgb(round_channels=rounding),
            HsvColor(defaults.HUE_MAX, 100, 100).to_rgb(round_channels=rounding),
            hue_gradient(rounding),
        ),
        Channel.SATURATION: SliderState(
            s,
            HsvColor(h, 0, v).to_rgb(round_channels=rounding),
            HsvColor(h, 100, v).to_rgb(round_channels=rounding),
            saturation_gradient(h, v, rounding),
        ),
        Channel.VALUE: SliderState(
            v,
            HsvColor(h, s, 0).to_rgb(round_channels=rounding),
            HsvColor(h, s, 100).to_rgb(round_channels=rounding),
        ),
    }
    return PickerView(sliders=MappingProxyType(sliders), wheel=anchor.hsv)
