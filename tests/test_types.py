"""Tests for huepick.types value objects."""

import numpy as np
import pytest

from huepick.errors import ColorRangeError, HuepickError
from huepick.types import Channel, HsvColor, Rgba, RgbColor, SliderMode


class TestRgbColor:

    def test_fields(self):
        c = RgbColor(1, 2, 3)
        assert c.as_tuple() == (1, 2, 3)
        assert str(c) == "(1, 2, 3)"

    def test_structural_equality(self):
        assert RgbColor(1, 2, 3) == RgbColor(1, 2, 3)
        assert RgbColor(1, 2, 3) != RgbColor(3, 2, 1)
        assert len({RgbColor(1, 2, 3), RgbColor(1, 2, 3)}) == 1

    def test_immutable(self):
        c = RgbColor(1, 2, 3)
        with pytest.raises(AttributeError):
            c.r = 5

    @pytest.mark.parametrize("rgb", [(-1, 0, 0), (0, 256, 0), (0, 0, 1000)])
    def test_out_of_range(self, rgb):
        with pytest.raises(ColorRangeError):
            RgbColor(*rgb)

    @pytest.mark.parametrize("rgb", [(12.7, 0, 0), (0, 1.0, 0), (0, 0, True), (0, "5", 0)])
    def test_non_integer_channels_rejected(self, rgb):
        with pytest.raises(ColorRangeError):
            RgbColor(*rgb)

    def test_numpy_integers_accepted(self):
        assert RgbColor(np.int64(3), np.uint8(4), 5).as_tuple() == (3, 4, 5)

    def test_hsv_helpers(self):
        assert RgbColor(0, 0, 255).to_hsv() == HsvColor(240, 100, 100)
        assert RgbColor.from_hsv(HsvColor(60, 100, 100)) == RgbColor(255, 255, 0)


class TestHsvColor:

    def test_bounds_inclusive(self):
        HsvColor(360, 100, 100)
        HsvColor(0, 0, 0)

    @pytest.mark.parametrize("hsv", [(361, 0, 0), (0, 101, 0), (0, 0, -1)])
    def test_out_of_range(self, hsv):
        with pytest.raises(ColorRangeError):
            HsvColor(*hsv)

    def test_equality(self):
        assert HsvColor(10, 20, 30) == HsvColor(10, 20, 30)
        assert HsvColor(10, 20, 30) != HsvColor(10, 20, 31)

    def test_rgb_helpers(self):
        assert HsvColor(120, 50, 50).to_rgb() == RgbColor(63, 127, 63)
        assert HsvColor(120, 50, 50).to_rgb(round_channels=True) == RgbColor(64, 128, 64)
        assert HsvColor.from_rgb(RgbColor(255, 0, 0)) == HsvColor(0, 100, 100)


class TestRgba:

    def test_default_alpha_opaque(self):
        assert Rgba(1, 2, 3).a == 255

    def test_from_rgb(self):
        stop = Rgba.from_rgb(RgbColor(9, 8, 7), 100)
        assert stop.as_tuple() == (9, 8, 7, 100)
        assert stop.rgb == RgbColor(9, 8, 7)

    def test_alpha_out_of_range(self):
        with pytest.raises(ColorRangeError):
            Rgba(0, 0, 0, 256)

    def test_bool_alpha_rejected(self):
        with pytest.raises(ColorRangeError):
            Rgba(0, 0, 0, False)

    def test_errors_share_base(self):
        with pytest.raises(HuepickError):
            Rgba(0, 0, -1)


class TestEnums:

    def test_slider_mode_maximum(self):
        assert SliderMode.CHANNEL.maximum == 255
        assert SliderMode.DEGREES.maximum == 360
        assert SliderMode.TOTAL.maximum == 100

    def test_channel_modes(self):
        assert Channel.HUE.mode is SliderMode.DEGREES
        assert Channel.SATURATION.mode is SliderMode.TOTAL
        assert Channel.VALUE.mode is SliderMode.TOTAL
        assert Channel.ALPHA.mode is SliderMode.CHANNEL
        assert Channel.RED.mode is SliderMode.CHANNEL
