"""Gradient tracks and multi-stop gradient compositing.

- GradientTrack: ordered draggable handles on a [0, 255] axis
- color_at / render_ramp: alpha-weighted N-stop gradients over a backdrop
"""

from .track import GradientTrack, position_to_value, value_to_position
from .compositor import (
    color_at,
    lerp_color,
    composite_over,
    gradient_color,
    render_ramp,
)

__all__ = [
    'GradientTrack',
    'position_to_value',
    'value_to_position',
    'color_at',
    'lerp_color',
    'composite_over',
    'gradient_color',
    'render_ramp',
]
