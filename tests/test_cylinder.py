import math

import numpy as np
import pytest

from color_path.cylinder import (
    clamp01,
    from_position,
    normalize_color,
    positions_to_colors,
    to_position,
    wrap_hue,
)


def test_primary_axes():
    assert to_position((0, 1, 0.25)) == pytest.approx((1.0, 0.5, 0.25))
    assert to_position((90, 1, 0.25)) == pytest.approx((0.5, 1.0, 0.25))
    assert to_position((180, 0.5, 0.0)) == pytest.approx((0.25, 0.5, 0.0))


def test_grey_sits_on_axis():
    x, y, z = to_position((123, 0, 0.6))
    assert (x, y) == pytest.approx((0.5, 0.5))
    assert z == 0.6


def test_inverted_height():
    assert to_position((10, 0.3, 0.2), inverted_lightness=True)[2] == pytest.approx(0.8)
    assert from_position((0.5, 0.5, 0.8), inverted_lightness=True)[2] == pytest.approx(0.2)


def test_hue_wraps_instead_of_failing():
    assert to_position((370, 0.7, 0.5)) == pytest.approx(to_position((10, 0.7, 0.5)))
    assert to_position((-90, 0.7, 0.5)) == pytest.approx(to_position((270, 0.7, 0.5)))
    assert wrap_hue(720) == 0.0
    assert wrap_hue(-1e-17) == 0.0
    assert 0.0 <= wrap_hue(-0.5) < 360.0


@pytest.mark.parametrize("inverted", [False, True])
@pytest.mark.parametrize("color", [(0, 0.5, 0.5), (45.5, 1.0, 0.1), (300, 0.25, 0.9), (179.9, 0.8, 0.0)])
def test_color_round_trip(color, inverted):
    back = from_position(to_position(color, inverted), inverted)
    assert back == pytest.approx(color, abs=1e-9)


def test_position_round_trip():
    p = (0.3, 0.65, 0.4)
    assert to_position(from_position(p)) == pytest.approx(p, abs=1e-12)


def test_clamp_puts_point_on_rim():
    h, s, l = from_position((1.5, 0.5, 1.4), clamp=True)
    assert (h, s, l) == pytest.approx((0.0, 1.0, 1.0))
    _, s, l = from_position((1.5, 0.5, 1.4))
    assert s == pytest.approx(2.0)
    assert l == pytest.approx(1.4)


def test_normalize_color():
    assert normalize_color((-30, 1.2, -0.1)) == (330.0, 1.0, 0.0)


def test_vectorised_inverse_matches_scalar():
    pts = np.array([[0.2, 0.7, 0.3], [0.9, 0.5, 1.0], [0.5, 0.1, 0.0]])
    got = positions_to_colors(pts, inverted_lightness=True)
    for row, p in zip(got, pts):
        assert np.allclose(row, from_position(p, inverted_lightness=True), atol=1e-12)
    assert np.all((got[:, 0] >= 0) & (got[:, 0] < 360))
    assert math.isclose(got[1, 1], 0.8)


def test_non_finite_inputs_are_pinned():
    assert wrap_hue(float("nan")) == 0.0
    assert wrap_hue(float("inf")) == 0.0
    assert clamp01(float("nan")) == 0.0
    assert clamp01(float("inf")) == 1.0
    assert clamp01(float("-inf")) == 0.0
    assert normalize_color((float("nan"), float("nan"), 0.5)) == (0.0, 0.0, 0.5)


def test_vectorised_inverse_stays_inside_rim():
    got = positions_to_colors(np.array([[1.0 + 1e-9, 0.5, 0.5], [0.5, -0.2, 1.2]]))
    assert np.allclose(got[:, 1], 1.0)
    assert np.allclose(got[:, 2], [0.5, 1.0])
