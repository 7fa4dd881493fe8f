"""Color slider model: a numeric value shown over a one-handle gradient track.

The numeric value lives in the mode's domain (0-255, 0-360 or 0-100) while
the track handle always lives in [0, 255]. Programmatic writes update the
handle silently; drags on the track update the numeric value and notify.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from huepick import defaults
from huepick.errors import ColorRangeError
from huepick.gradient import GradientTrack, gradient_color, render_ramp
from huepick.types import Orientation, Rgba, RgbColor, SliderMode, check_range

logger = logging.getLogger(__name__)

SliderCallback = Callable[["ColorSlider"], None]


class ColorSlider:
    """Numeric value + gradient track + the colors its gradient is drawn with."""

    def __init__(
        self,
        mode: SliderMode = SliderMode.CHANNEL,
        orientation: Orientation = Orientation.VERTICAL,
        name: str = "",
    ) -> None:
        self.mode = mode
        self.name = name
        self.track = GradientTrack(count=1, orientation=orientation)
        self.track.subscribe(self._on_track_changed)

        self._value = 0
        self._min_color = RgbColor(0, 0, 0)
        self._max_color = RgbColor(255, 255, 255)
        self._custom_gradient: Optional[tuple[Rgba, ...]] = None
        self._subscribers: list[SliderCallback] = []

        self.track.set(0, self._to_track(self._value), notify=False)

    def __repr__(self) -> str:
        return f"ColorSlider({self.name!r}, mode={self.mode.value}, value={self._value})"

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @property
    def maximum(self) -> int:
        return self.mode.maximum

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, value: int, *, notify: bool = True) -> bool:
        """Set the numeric value. Returns whether it changed."""
        check_range(self.name or "value", value, self.maximum)
        if value == self._value:
            return False
        self._value = value
        self.track.set(0, self._to_track(value), notify=False)
        if notify:
            self._notify()
        return True

    def _to_track(self, value: int) -> int:
        return value * defaults.TRACK_MAX_VALUE // self.maximum

    def _from_track(self, track_value: int) -> int:
        return track_value * self.maximum // defaults.TRACK_MAX_VALUE

    def _on_track_changed(self, track: GradientTrack, index: int) -> None:
        value = self._from_track(track.get(index))
        if value != self._value:
            self._value = value
            self._notify()

    # ------------------------------------------------------------------
    # Drag (forwarded to the track)
    # ------------------------------------------------------------------

    def press(self, pos: int, length: int) -> None:
        self.track.press(pos, length)

    def move(self, pos: int, length: int) -> None:
        self.track.move(pos, length)

    def release(self, pos: int, length: int) -> None:
        self.track.release(pos, length)

    # ------------------------------------------------------------------
    # Gradient
    # ------------------------------------------------------------------

    @property
    def min_color(self) -> RgbColor:
        return self._min_color

    @min_color.setter
    def min_color(self, color: RgbColor) -> None:
        self._min_color = color

    @property
    def max_color(self) -> RgbColor:
        return self._max_color

    @max_color.setter
    def max_color(self, color: RgbColor) -> None:
        self._max_color = color

    @property
    def custom_gradient(self) -> Optional[tuple[Rgba, ...]]:
        return self._custom_gradient

    @custom_gradient.setter
    def custom_gradient(self, stops: Optional[Sequence[Rgba]]) -> None:
        if stops is None:
            self._custom_gradient = None
            return
        stops = tuple(stops)
        for stop in stops:
            if not isinstance(stop, Rgba):
                raise ColorRangeError(f"Gradient stop must be Rgba, got {stop!r}")
        self._custom_gradient = stops

    def color_at(self, t: float, backdrop: RgbColor = RgbColor(*defaults.DEFAULT_BACKDROP)) -> RgbColor:
        return gradient_color(t, self._custom_gradient, self._min_color, self._max_color, backdrop)

    def render(self, length: int, backdrop: RgbColor = RgbColor(*defaults.DEFAULT_BACKDROP)) -> np.ndarray:
        """Gradient strip of *length* pixels, minimum end first."""
        return render_ramp(length, self._custom_gradient, self._min_color, self._max_color, backdrop)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: SliderCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: SliderCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _notify(self) -> None:
        for cb in list(self._subscribers):
            try:
                cb(self)
            except Exception:
                logger.warning("Slider subscriber %r raised for %s", cb, self.name, exc_info=True)
