"""Tests for the multi-handle gradient track."""

import logging
import math
import random

import pytest

from huepick import defaults
from huepick.errors import ColorRangeError, InvalidOrientationError
from huepick.gradient import GradientTrack, position_to_value, value_to_position
from huepick.types import Orientation

# With length 262 the usable span is exactly 255 pixels, so a vertical
# position maps to ``258 - value``.
EXACT_LENGTH = 262


def exact_pos(value: int) -> int:
    return 258 - value


@pytest.fixture
def track():
    return GradientTrack(count=3)


@pytest.fixture
def events(track):
    seen = []
    track.subscribe(lambda t, index: seen.append(index))
    return seen


class TestResize:
    """Handle creation and even distribution."""

    @pytest.mark.parametrize("count", range(2, 17))
    def test_even_distribution(self, count):
        track = GradientTrack(count=count)
        values = track.values
        assert len(values) == count
        assert values[0] == 0
        assert values[-1] == 255
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_single_handle_sits_mid_track(self):
        assert GradientTrack(count=1).values == (128,)

    def test_zero_handles(self):
        assert GradientTrack(count=0).values == ()

    def test_three_handles(self, track):
        assert track.values == (0, 127, 255)

    @pytest.mark.parametrize("count", [-1, 17, 100])
    def test_count_out_of_range(self, count):
        with pytest.raises(ColorRangeError):
            GradientTrack(count=count)

    def test_resize_notifies(self, track, events):
        track.resize(5)
        assert events == [0]
        assert track.count == 5


class TestSetValue:
    """Neighbour clamping keeps handles strictly ordered."""

    def test_clamps_below_upper_neighbour(self, track):
        track.set(1, 300)
        assert track.get(1) == 254

    def test_clamps_above_lower_neighbour(self, track):
        track.set(1, -5)
        assert track.get(1) == 1

    def test_first_handle_bounded_by_next(self, track):
        track.set(0, 200)
        assert track.get(0) == 126

    def test_last_handle_bounded_by_previous(self, track):
        track.set(2, 0)
        assert track.get(2) == 128

    def test_extremities_clamp_to_track(self):
        track = GradientTrack(count=1)
        track.set(0, 999)
        assert track.get(0) == 255
        track.set(0, -999)
        assert track.get(0) == 0

    def test_no_change_is_silent(self, track, events):
        assert track.set(1, 127) is False
        assert track.set(1, 255) is True
        assert track.set(1, 260) is False  # Clamps to the same 254
        assert events == [1]

    def test_silent_write(self, track, events):
        track.set(1, 100, notify=False)
        assert track.get(1) == 100
        assert events == []

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_index_out_of_range(self, track, index):
        with pytest.raises(ColorRangeError):
            track.set(index, 10)
        with pytest.raises(ColorRangeError):
            track.get(index)

    def test_random_updates_preserve_order(self):
        rng = random.Random(1234)
        for count in range(1, 17):
            track = GradientTrack(count=count)
            for _ in range(300):
                track.set(rng.randrange(count), rng.randint(-50, 300))
                values = track.values
                assert all(0 <= v <= 255 for v in values)
                assert all(a < b for a, b in zip(values, values[1:]))


class TestPositionMapping:
    """Pixel <-> value mapping with the marker inset."""

    def test_vertical_ends(self):
        assert position_to_value(3, 300, Orientation.VERTICAL) == 255
        assert position_to_value(296, 300, Orientation.VERTICAL) == 0

    def test_horizontal_ends(self):
        assert position_to_value(3, 300, Orientation.HORIZONTAL) == 0
        assert position_to_value(296, 300, Orientation.HORIZONTAL) == 255

    def test_value_to_position_ends(self):
        assert value_to_position(255, 300, Orientation.VERTICAL) == 3
        assert value_to_position(0, 300, Orientation.VERTICAL) == 296
        assert value_to_position(0, 300, Orientation.HORIZONTAL) == 3
        assert value_to_position(255, 300, Orientation.HORIZONTAL) == 296

    def test_exact_span(self):
        for value in range(256):
            assert value_to_position(value, EXACT_LENGTH, Orientation.VERTICAL) == exact_pos(value)
            assert position_to_value(exact_pos(value), EXACT_LENGTH, Orientation.VERTICAL) == value

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("length", [40, 150, 262])
    def test_position_roundtrip_within_one_pixel(self, orientation, length):
        for pos in range(3, length - 3):
            value = position_to_value(pos, length, orientation)
            assert abs(value_to_position(value, length, orientation) - pos) <= 1

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("length", [263, 300, 700])
    def test_position_roundtrip_on_long_axis(self, orientation, length):
        """Spans longer than 255 pixels share values, so the error grows with span/255."""
        bound = math.ceil((length - defaults.MARKER_SIZE) / 255)
        for pos in range(3, length - 3):
            value = position_to_value(pos, length, orientation)
            assert abs(value_to_position(value, length, orientation) - pos) <= bound

    @pytest.mark.parametrize("orientation", list(Orientation))
    @pytest.mark.parametrize("length", [262, 300, 700])
    def test_value_roundtrip_within_one_unit(self, orientation, length):
        for value in range(256):
            pos = value_to_position(value, length, orientation)
            assert abs(position_to_value(pos, length, orientation) - value) <= 1

    def test_outside_track_is_not_clamped(self):
        assert position_to_value(0, EXACT_LENGTH, Orientation.VERTICAL) == 258
        assert position_to_value(EXACT_LENGTH, EXACT_LENGTH, Orientation.VERTICAL) == -4

    def test_axis_too_short(self):
        with pytest.raises(ColorRangeError):
            position_to_value(0, defaults.MARKER_SIZE, Orientation.VERTICAL)

    def test_unknown_orientation(self):
        with pytest.raises(InvalidOrientationError):
            position_to_value(0, 100, "vertical")
        with pytest.raises(InvalidOrientationError):
            GradientTrack(count=1, orientation="sideways")


class TestNearestHandle:
    """Hit-testing picks the closest handle, first on ties."""

    def test_empty_track(self):
        assert GradientTrack(count=0).nearest_handle(50, EXACT_LENGTH) is None

    def test_closest(self, track):
        assert track.nearest_handle(exact_pos(10), EXACT_LENGTH) == 0
        assert track.nearest_handle(exact_pos(140), EXACT_LENGTH) == 1
        assert track.nearest_handle(exact_pos(250), EXACT_LENGTH) == 2

    def test_tie_goes_to_first(self, track):
        track.set(1, 100)
        assert track.nearest_handle(exact_pos(50), EXACT_LENGTH) == 0

    def test_marker_span(self, track):
        assert track.marker_span(1, EXACT_LENGTH) == (exact_pos(127) - 3, exact_pos(127) + 3)


class TestDrag:
    """Press / move / release state machine."""

    def test_drag_clamps_against_neighbour(self, track):
        track.set(1, 128)
        track.press(exact_pos(128), EXACT_LENGTH)
        assert track.tracking == 1

        track.move(exact_pos(255), EXACT_LENGTH)
        assert track.get(1) == 254

        track.release(exact_pos(255), EXACT_LENGTH)
        assert track.get(1) == 254
        assert track.tracking is None
        assert track.values == (0, 254, 255)

    def test_press_applies_position(self, track):
        track.press(exact_pos(110), EXACT_LENGTH)
        assert track.tracking == 1
        assert track.get(1) == 110

    def test_release_applies_final_position(self, track):
        track.press(exact_pos(127), EXACT_LENGTH)
        track.release(exact_pos(90), EXACT_LENGTH)
        assert track.get(1) == 90
        assert track.tracking is None

    def test_idle_move_only_highlights(self, track, events):
        track.move(exact_pos(240), EXACT_LENGTH)
        assert track.highlight == 2
        assert track.values == (0, 127, 255)
        assert events == []

        track.leave()
        assert track.highlight is None

    def test_press_on_empty_track(self):
        track = GradientTrack(count=0)
        track.press(50, EXACT_LENGTH)
        assert track.tracking is None


class TestNotifications:
    """Subscriber failures are isolated."""

    def test_raising_subscriber_is_logged(self, track, caplog):
        def boom(t, index):
            raise RuntimeError("boom")

        seen = []
        track.subscribe(boom)
        track.subscribe(lambda t, index: seen.append(index))

        with caplog.at_level(logging.WARNING, logger="huepick.gradient.track"):
            track.set(1, 50)

        assert seen == [1]
        assert "raised" in caplog.text

    def test_unsubscribe(self, track):
        seen = []

        def listener(t, index):
            seen.append(index)

        track.subscribe(listener)
        track.unsubscribe(listener)
        track.unsubscribe(listener)  # Unknown callbacks are ignored
        track.set(1, 50)
        assert seen == []
