"""RGB <-> HSV conversions on integer grids.

RGB channels live in [0, 255]; HSV uses hue degrees [0, 360] and
saturation/value percentages [0, 100]. Both directions truncate to the
integer grid, so round trips are only approximately stable. Canonical
colors (black, white, primaries, secondaries) land exactly.
"""

import math

import numpy as np

from huepick import defaults
from huepick.types import HsvColor, RgbColor


def _scale(x: float, round_channels: bool) -> int:
    if round_channels:
        return int(round(x * defaults.RGB_MAX))
    return int(x * defaults.RGB_MAX)


def hsv_to_rgb(hsv: HsvColor, *, round_channels: bool = False) -> RgbColor:
    """HSV -> RGB via the six 60-degree hue sectors.

    Args:
        hsv: Source color.
        round_channels: Round to the nearest channel value instead of
            truncating. Truncation is the compatible default; rounding
            removes the downward bias (HSV (120, 50, 50) gives
            (63, 127, 63) truncated and (64, 128, 64) rounded).
    """
    h = float(hsv.hue % 360)
    s = hsv.saturation / 100
    v = hsv.value / 100

    if s == 0.0:
        # Gray: hue is undefined
        r = g = b = v
    else:
        sector_pos = h / 60
        sector = int(math.floor(sector_pos))
        frac = sector_pos - sector

        p = v * (1 - s)
        q = v * (1 - (s * frac))
        t = v * (1 - (s * (1 - frac)))

        if sector == 0:
            r, g, b = v, t, p
        elif sector == 1:
            r, g, b = q, v, p
        elif sector == 2:
            r, g, b = p, v, t
        elif sector == 3:
            r, g, b = p, q, v
        elif sector == 4:
            r, g, b = t, p, v
        else:
            r, g, b = v, p, q

    return RgbColor(
        _scale(r, round_channels),
        _scale(g, round_channels),
        _scale(b, round_channels),
    )


def rgb_to_hsv(rgb: RgbColor) -> HsvColor:
    """RGB -> HSV. Achromatic colors (max == 0 or max == min) get hue 0, saturation 0."""
    r = rgb.r / defaults.RGB_MAX
    g = rgb.g / defaults.RGB_MAX
    b = rgb.b / defaults.RGB_MAX

    lo = min(r, g, b)
    hi = max(r, g, b)
    v = hi
    delta = hi - lo

    if hi == 0.0 or delta == 0.0:
        h = 0.0
        s = 0.0
    else:
        s = delta / hi
        if r == hi:
            # Between yellow and magenta
            h = (g - b) / delta
        elif g == hi:
            # Between cyan and yellow
            h = 2 + (b - r) / delta
        else:
            # Between magenta and cyan
            h = 4 + (r - g) / delta

    h *= 60
    if h < 0:
        h += 360

    return HsvColor(int(h), int(s * 100), int(v * 100))


def rgb_to_hsv_tuple(r: int, g: int, b: int) -> tuple[int, int, int]:
    """Range-checked scalar form of ``rgb_to_hsv``."""
    return rgb_to_hsv(RgbColor(r, g, b)).as_tuple()


def hsv_to_rgb_tuple(h: int, s: int, v: int, *, round_channels: bool = False) -> tuple[int, int, int]:
    """Range-checked scalar form of ``hsv_to_rgb``."""
    return hsv_to_rgb(HsvColor(h, s, v), round_channels=round_channels).as_tuple()


# === Vectorised ramps ===

def hsv_ramp(hues, saturations, values, *, round_channels: bool = False) -> np.ndarray:
    """Convert arrays of integer HSV triples to an (N, 3) uint8 RGB array.

    Broadcasts like numpy; performs the same float64 operations as
    ``hsv_to_rgb`` so results agree element-wise. Inputs are assumed
    already range-checked.
    """
    h_in, s_in, v_in = np.broadcast_arrays(
        np.asarray(hues), np.asarray(saturations), np.asarray(values)
    )
    h = np.mod(h_in, 360).astype(np.float64)
    s = s_in / 100
    v = v_in / 100

    sector_pos = h / 60
    sector = np.floor(sector_pos).astype(np.int64)
    frac = sector_pos - sector

    p = v * (1 - s)
    q = v * (1 - (s * frac))
    t = v * (1 - (s * (1 - frac)))

    # Rows indexed by sector: (r, g, b) picks among (v, t, p, q)
    r = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [v, q, p, p, t], v)
    g = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [t, v, v, q, p], p)
    b = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [p, p, t, v, v], q)

    gray = s == 0.0
    r = np.where(gray, v, r)
    g = np.where(gray, v, g)
    b = np.where(gray, v, b)

    rgb = np.stack([r, g, b], axis=-1) * defaults.RGB_MAX
    rgb = np.round(rgb) if round_channels else np.trunc(rgb)
    return rgb.astype(np.uint8)
