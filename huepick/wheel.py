"""Polar hue/saturation wheel model.

Hue runs clockwise on screen from the +x axis (y grows
downward), saturation grows from the centre (0) to the rim (100). The
caller supplies the widget size and pointer position; painting is left to
the toolkit.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from huepick import defaults
from huepick.types import HsvColor, RgbColor

logger = logging.getLogger(__name__)

WheelCallback = Callable[["ColorWheel"], None]


def ring_colors(tesselation: int = defaults.WHEEL_TESSELATION) -> list[RgbColor]:
    """Fully saturated rim colors at ``tesselation`` evenly spaced hues."""
    return [
        HsvColor(i * defaults.HUE_MAX // tesselation, 100, 100).to_rgb()
        for i in range(tesselation)
    ]


class ColorWheel:
    """Holds the wheel's HSV color and converts pointer positions to it."""

    def __init__(
        self,
        color: HsvColor = HsvColor(0, 0, 0),
        *,
        keeps_value: bool = defaults.WHEEL_KEEPS_VALUE,
    ) -> None:
        self._color = color
        self.keeps_value = keeps_value
        self._tracking = False
        self._subscribers: list[WheelCallback] = []

    @property
    def color(self) -> HsvColor:
        return self._color

    def set_color(self, color: HsvColor, *, notify: bool = True) -> bool:
        """Replace the color; notifies only when it differs."""
        if color == self._color:
            return False
        self._color = color
        if notify:
            self._notify()
        return True

    @property
    def tracking(self) -> bool:
        return self._tracking

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def color_at(self, x: int, y: int, width: int, height: int) -> HsvColor:
        """Hue/saturation under ``(x, y)``.

        Value is carried over from the current color when ``keeps_value`` is
        set, otherwise it is full (100).
        """
        cx = x - width // 2
        cy = y - height // 2

        theta = math.atan2(cy, cx)
        if theta < 0:
            theta += 2 * math.pi

        distance = math.sqrt(cx * cx + cy * cy)
        hue = min(defaults.HUE_MAX, int(theta / (2 * math.pi) * defaults.HUE_MAX))
        saturation = int(min(100.0, distance / (width / 2) * 100)) if width > 0 else 0
        value = self._color.value if self.keeps_value else defaults.VALUE_MAX
        return HsvColor(hue, saturation, value)

    def marker_position(self, width: int, height: int) -> tuple[int, int]:
        """Pixel position of the color marker inside a ``width`` x ``height`` widget."""
        radius = min(width / 2, height / 2)
        theta = self._color.hue / defaults.HUE_MAX * 2 * math.pi
        s = self._color.saturation / 100
        x = s * (radius - 1) * math.cos(theta) + radius
        y = s * (radius - 1) * math.sin(theta) + radius
        return int(x), int(y)

    # ------------------------------------------------------------------
    # Drag protocol
    # ------------------------------------------------------------------

    def grab(self, x: int, y: int, width: int, height: int) -> HsvColor:
        """Pick the color under the pointer and make it current."""
        self.set_color(self.color_at(x, y, width, height))
        return self._color

    def press(self) -> None:
        self._tracking = True

    def move(self, x: int, y: int, width: int, height: int) -> None:
        if self._tracking:
            self.grab(x, y, width, height)

    def release(self, x: int, y: int, width: int, height: int) -> None:
        if self._tracking:
            self.grab(x, y, width, height)
            self._tracking = False

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: WheelCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: WheelCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _notify(self) -> None:
        for cb in list(self._subscribers):
            try:
                cb(self)
            except Exception:
                logger.warning("Wheel subscriber %r raised", cb, exc_info=True)
