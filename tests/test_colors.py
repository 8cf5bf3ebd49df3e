import math

import pytest

from fractalnet.colors import color_palette


def test_get_correct_color():
    assert color_palette(0.5) == (0, 188, 188)


def test_red_channel_is_full_at_zero():
    assert color_palette(0.0)[0] == 255


@pytest.mark.parametrize("t", [i / 20 for i in range(-20, 41)])
def test_channels_stay_in_byte_range(t):
    assert all(0 <= channel <= 255 for channel in color_palette(t))


@pytest.mark.parametrize("t", [math.nan, math.inf, -math.inf])
def test_non_finite_intensity_is_black(t):
    assert color_palette(t) == (0, 0, 0)