"""RGB <-> HSV color space conversions.

This module provides:
- Exact integer-grid conversions between RgbColor and HsvColor
- Range-checked tuple forms for toolkit callers
- A vectorised numpy ramp builder for large custom gradients

Example:
    from huepick.colorspace import hsv_to_rgb
    from huepick.types import HsvColor

    rgb = hsv_to_rgb(HsvColor(120, 100, 100))  # RgbColor(0, 255, 0)
"""

from .hsv import (
    hsv_to_rgb,
    rgb_to_hsv,
    hsv_to_rgb_tuple,
    rgb_to_hsv_tuple,
    hsv_ramp,
)

__all__ = [
    'hsv_to_rgb',
    'rgb_to_hsv',
    'hsv_to_rgb_tuple',
    'rgb_to_hsv_tuple',
    'hsv_ramp',
]
