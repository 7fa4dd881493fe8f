"""N-stop gradient compositing along a 1-D axis.

Stops are straight-alpha colors spread evenly over t in [0, 1]. Between two
neighbouring stops, channels are blended weighted by each stop's own alpha
so that a transparent stop does not bleed its (meaningless) color into the
ramp. The blended color is then composited "over" an opaque backdrop.

With fewer than two stops the ramp is a plain two-color lerp between a
min and max color.

All functions take t with 0 at the minimum end of the track.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from huepick import defaults
from huepick.errors import ColorRangeError
from huepick.types import Rgba, RgbColor

_MAX = defaults.RGB_MAX


def _check_t(t: float) -> None:
    if not 0.0 <= t <= 1.0:
        raise ColorRangeError(f"t={t!r} must be in the range [0, 1]")


def _to_byte(x: float) -> int:
    return max(0, min(_MAX, int(round(x * _MAX))))


def color_at(t: float, stops: Sequence[Rgba]) -> Rgba:
    """Alpha-weighted color at fractional position *t* of an N-stop gradient (N >= 2)."""
    _check_t(t)
    n = len(stops)
    if n < 2:
        raise ColorRangeError(f"Need at least 2 stops, got {n}")

    index = t * (n - 1)
    left = int(math.floor(index))
    right = min(n - 1, int(math.ceil(index)))
    w = 1.0 - (index - left)

    c1 = stops[left]
    c2 = stops[right]
    a1, r1, g1, b1 = c1.a / _MAX, c1.r / _MAX, c1.g / _MAX, c1.b / _MAX
    a2, r2, g2, b2 = c2.a / _MAX, c2.r / _MAX, c2.g / _MAX, c2.b / _MAX

    at = (w * a1) + ((1.0 - w) * a2)
    if at == 0.0:
        return Rgba(0, 0, 0, 0)

    rt = ((w * a1 * r1) + ((1.0 - w) * a2 * r2)) / at
    gt = ((w * a1 * g1) + ((1.0 - w) * a2 * g2)) / at
    bt = ((w * a1 * b1) + ((1.0 - w) * a2 * b2)) / at

    return Rgba(_to_byte(rt), _to_byte(gt), _to_byte(bt), _to_byte(at))


def lerp_color(t: float, min_color: RgbColor, max_color: RgbColor) -> RgbColor:
    """Plain two-color linear interpolation, rounded to the nearest channel value."""
    _check_t(t)
    return RgbColor(
        int(round(min_color.r + t * (max_color.r - min_color.r))),
        int(round(min_color.g + t * (max_color.g - min_color.g))),
        int(round(min_color.b + t * (max_color.b - min_color.b))),
    )


def composite_over(color: Rgba, backdrop: RgbColor) -> RgbColor:
    """Standard "over" compositing onto an opaque backdrop (integer math)."""
    a = color.a
    return RgbColor(
        (color.r * a + backdrop.r * (_MAX - a)) // _MAX,
        (color.g * a + backdrop.g * (_MAX - a)) // _MAX,
        (color.b * a + backdrop.b * (_MAX - a)) // _MAX,
    )


def gradient_color(
    t: float,
    stops: Optional[Sequence[Rgba]],
    min_color: RgbColor,
    max_color: RgbColor,
    backdrop: RgbColor = RgbColor(*defaults.DEFAULT_BACKDROP),
) -> RgbColor:
    """Displayed color at *t*: custom stops when there are at least two, else min/max lerp."""
    if stops is not None and len(stops) >= 2:
        return composite_over(color_at(t, stops), backdrop)
    return lerp_color(t, min_color, max_color)


def render_ramp(
    length: int,
    stops: Optional[Sequence[Rgba]] = None,
    min_color: RgbColor = RgbColor(0, 0, 0),
    max_color: RgbColor = RgbColor(255, 255, 255),
    backdrop: RgbColor = RgbColor(*defaults.DEFAULT_BACKDROP),
) -> np.ndarray:
    """Evaluate ``gradient_color`` at ``t = i / (length - 1)`` for every pixel.

    Returns:
        uint8 array of shape (length, 3), index 0 at the minimum end.
    """
    if length < 1:
        raise ColorRangeError(f"Ramp length {length} must be at least 1")
    t = np.arange(length) / (length - 1) if length > 1 else np.zeros(1)

    if stops is None or len(stops) < 2:
        lo = np.array(min_color.as_tuple(), dtype=np.float64)
        hi = np.array(max_color.as_tuple(), dtype=np.float64)
        rgb = lo[None, :] + t[:, None] * (hi - lo)[None, :]
        return np.rint(rgb).astype(np.uint8)

    n = len(stops)
    table = np.array([s.as_tuple() for s in stops], dtype=np.float64) / _MAX  # (n, 4) rgba

    index = t * (n - 1)
    left = np.floor(index).astype(np.int64)
    right = np.minimum(n - 1, np.ceil(index).astype(np.int64))
    w = 1.0 - (index - left)

    c1 = table[left]
    c2 = table[right]
    a1, a2 = c1[:, 3], c2[:, 3]

    at = (w * a1) + ((1.0 - w) * a2)
    transparent = at == 0.0
    safe_at = np.where(transparent, 1.0, at)

    channels = []
    for k in range(3):
        ct = ((w * a1 * c1[:, k]) + ((1.0 - w) * a2 * c2[:, k])) / safe_at
        channels.append(np.where(transparent, 0.0, ct))

    def to_byte(x):
        return np.clip(np.rint(x * _MAX), 0, _MAX).astype(np.int64)

    ap = np.where(transparent, 0, to_byte(at))
    back = np.array(backdrop.as_tuple(), dtype=np.int64)
    out = np.stack(
        [(to_byte(channels[k]) * ap + back[k] * (_MAX - ap)) // _MAX for k in range(3)],
        axis=-1,
    )
    return out.astype(np.uint8)
