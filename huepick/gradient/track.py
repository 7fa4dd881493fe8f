"""Multi-handle gradient track.

A track holds 0-16 ordered integer handles in [0, 255] along one axis.
Handles never cross or touch: ``set`` clamps a new value into the open
interval between its neighbours. Pixel positions map to values through a
fixed marker inset so that handle triangles stay fully visible at both
ends of the axis.

Drag protocol:
    Idle --press--> Dragging(nearest handle) --move--> ... --release--> Idle

While idle, pointer motion only moves the highlight.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from huepick import defaults
from huepick.errors import ColorRangeError, InvalidOrientationError
from huepick.types import Orientation

logger = logging.getLogger(__name__)

TrackCallback = Callable[["GradientTrack", int], None]


def _div_trunc(num: int, den: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(num) // abs(den)
    return q if (num >= 0) == (den > 0) else -q


def _span(length: int) -> int:
    span = length - defaults.MARKER_SIZE
    if span <= 0:
        raise ColorRangeError(
            f"Axis length {length} must exceed the marker size {defaults.MARKER_SIZE}"
        )
    return span


def _check_orientation(orientation: Orientation) -> None:
    if not isinstance(orientation, Orientation):
        raise InvalidOrientationError(f"Unknown orientation: {orientation!r}")


def position_to_value(pos: int, length: int, orientation: Orientation) -> int:
    """Map a pixel coordinate along the axis to a track value.

    Vertical tracks grow upward (later position = lower value); horizontal
    tracks grow to the right. The result is not clamped: positions past the
    marker inset map outside [0, 255].
    """
    _check_orientation(orientation)
    span = _span(length)
    val = _div_trunc((span - (pos - defaults.MARKER_HALF_LENGTH)) * defaults.TRACK_MAX_VALUE, span)
    if orientation is Orientation.HORIZONTAL:
        val = defaults.TRACK_MAX_VALUE - val
    return val


def value_to_position(value: int, length: int, orientation: Orientation) -> int:
    """Inverse of ``position_to_value``: pixel centre of a handle at *value*."""
    _check_orientation(orientation)
    span = _span(length)
    if orientation is Orientation.HORIZONTAL:
        value = defaults.TRACK_MAX_VALUE - value
    return defaults.MARKER_HALF_LENGTH + (span - _div_trunc(value * span, defaults.TRACK_MAX_VALUE))


class GradientTrack:
    """Ordered handle set with neighbour clamping and drag tracking."""

    def __init__(self, count: int = 1, orientation: Orientation = Orientation.VERTICAL) -> None:
        _check_orientation(orientation)
        self.orientation = orientation
        self._values: list[int] = []
        self._subscribers: list[TrackCallback] = []
        self._tracking: Optional[int] = None
        self._highlight: Optional[int] = None
        self.resize(count)

    # ------------------------------------------------------------------
    # Handles
    # ------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def values(self) -> tuple[int, ...]:
        return tuple(self._values)

    def resize(self, count: int) -> None:
        """Replace all handles with *count* evenly distributed ones."""
        if not 0 <= count <= defaults.MAX_HANDLES:
            raise ColorRangeError(
                f"Handle count {count} must be between 0 and {defaults.MAX_HANDLES}"
            )
        if count > 1:
            self._values = [i * defaults.TRACK_MAX_VALUE // (count - 1) for i in range(count)]
        elif count == 1:
            self._values = [defaults.SINGLE_HANDLE_VALUE]
        else:
            self._values = []
        self._tracking = None
        self._highlight = None
        self._notify(0)

    def get(self, index: int) -> int:
        self._check_index(index)
        return self._values[index]

    def set(self, index: int, value: int, *, notify: bool = True) -> bool:
        """Move handle *index* towards *value*, clamped strictly between its neighbours.

        Returns whether the handle moved.
        """
        self._check_index(index)
        lo = self._values[index - 1] if index > 0 else -1
        hi = self._values[index + 1] if index + 1 < len(self._values) else defaults.TRACK_MAX_VALUE + 1
        clamped = max(lo + 1, min(value, hi - 1))

        if clamped == self._values[index]:
            return False
        self._values[index] = clamped
        if notify:
            self._notify(index)
        return True

    def nearest_handle(self, pos: int, length: int) -> Optional[int]:
        """Index of the handle closest to *pos*; first match wins ties, None when empty."""
        target = position_to_value(pos, length, self.orientation)
        best_index = None
        best_distance = None
        for i, v in enumerate(self._values):
            distance = abs(v - target)
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_index = i
        return best_index

    def marker_span(self, index: int, length: int) -> tuple[int, int]:
        """Pixel extent ``(start, end)`` covered by a handle marker along the axis."""
        center = value_to_position(self.get(index), length, self.orientation)
        return center - defaults.MARKER_HALF_LENGTH, center + defaults.MARKER_HALF_LENGTH

    # ------------------------------------------------------------------
    # Drag protocol
    # ------------------------------------------------------------------

    @property
    def tracking(self) -> Optional[int]:
        """Handle being dragged, or None while idle."""
        return self._tracking

    @property
    def highlight(self) -> Optional[int]:
        return self._highlight

    def press(self, pos: int, length: int) -> None:
        self._tracking = self.nearest_handle(pos, length)
        self.move(pos, length)

    def move(self, pos: int, length: int) -> None:
        if self._tracking is not None:
            self.set(self._tracking, position_to_value(pos, length, self.orientation))
        else:
            self._highlight = self.nearest_handle(pos, length)

    def release(self, pos: int, length: int) -> None:
        self.move(pos, length)
        self._tracking = None

    def leave(self) -> None:
        self._highlight = None

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: TrackCallback) -> None:
        """Register *callback* as ``(track, index)`` for value changes."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: TrackCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise ColorRangeError(
                f"Handle index {index} out of bounds for {len(self._values)} handles"
            )

    def _notify(self, index: int) -> None:
        for cb in list(self._subscribers):
            try:
                cb(self, index)
            except Exception:
                logger.warning("Track subscriber %r raised for handle %d", cb, index, exc_info=True)
