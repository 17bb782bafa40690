"""Tests for the two-axis palette mapper."""

import numpy as np
import pytest

from emotion_painter.core.palette import PALETTES, lerp_color, map_color, remap, to_drawable


def _expected(start: str, end: str, blend: float, luma: float) -> np.ndarray:
    dark = lerp_color(np.asarray(PALETTES[start][0]), np.asarray(PALETTES[end][0]), blend)
    light = lerp_color(np.asarray(PALETTES[start][1]), np.asarray(PALETTES[end][1]), blend)
    return lerp_color(dark, light, luma / 255.0)


class TestRemap:
    def test_endpoints(self):
        assert remap(0.0, 0.0, 1.0, 10.0, 100.0) == pytest.approx(10.0)
        assert remap(1.0, 0.0, 1.0, 10.0, 100.0) == pytest.approx(100.0)

    def test_inverted_source(self):
        assert remap(-1.0, -1.0, 0.0, 15.0, 70.0) == pytest.approx(15.0)
        assert remap(0.0, -1.0, 0.0, 15.0, 70.0) == pytest.approx(70.0)

    def test_extrapolates(self):
        assert remap(2.0, 0.0, 1.0, 0.0, 10.0) == pytest.approx(20.0)


class TestMapColor:
    def test_calm_dark_is_peaceful_dark(self):
        color = map_color(0.0, 0.0, 42.0)
        assert color == pytest.approx((9.0, 13.0, 72.0, 42.0))

    def test_calm_light_is_peaceful_light(self):
        color = map_color(0.0, 255.0, 42.0)
        assert color == pytest.approx((225.0, 114.0, 55.0, 42.0))

    def test_alpha_passthrough(self):
        assert map_color(0.6, 100.0, 33.0)[3] == 33.0

    def test_max_turbulence_mid_luma(self):
        """Turbulence 1 lands on the turbulent pair, luma 128 blends it near halfway."""
        color = map_color(1.0, 128.0, 15.0)
        dark = np.asarray(PALETTES["turbulent"][0])
        light = np.asarray(PALETTES["turbulent"][1])
        expected = dark + (light - dark) * (128.0 / 255.0)
        assert color[:3] == pytest.approx(tuple(expected))
        assert color[3] == 15.0

    def test_low_regime_uses_peaceful_to_neutral(self):
        color = map_color(0.1, 60.0, 50.0)
        assert color[:3] == pytest.approx(tuple(_expected("peaceful", "neutral", 0.1, 60.0)))

    def test_high_regime_uses_neutral_to_turbulent(self):
        color = map_color(0.6, 200.0, 50.0)
        assert color[:3] == pytest.approx(tuple(_expected("neutral", "turbulent", 0.6, 200.0)))

    def test_regime_boundary_jump_is_preserved(self):
        """
        At 0.25 the colour is 25% peaceful→neutral; just above it is 25%
        neutral→turbulent. The two do not meet.
        """
        at = np.asarray(map_color(0.25, 128.0, 50.0)[:3])
        above = np.asarray(map_color(0.25 + 1e-9, 128.0, 50.0)[:3])
        np.testing.assert_allclose(at, _expected("peaceful", "neutral", 0.25, 128.0))
        np.testing.assert_allclose(above, _expected("neutral", "turbulent", 0.25, 128.0), atol=1e-6)
        assert np.abs(at - above).max() > 10

    def test_extrapolates_past_turbulent(self):
        color = map_color(1.5, 0.0, 15.0)
        # neutral dark (81, 81, 107) pushed 150% toward turbulent dark (27, 60, 90)
        assert color[:3] == pytest.approx((0.0, 49.5, 81.5))

    def test_clamp_blend(self):
        clamped = map_color(1.5, 0.0, 15.0, clamp_blend=True)
        assert clamped == pytest.approx(map_color(1.0, 0.0, 15.0))

    def test_negative_turbulence_extrapolates_below_peaceful(self):
        color = map_color(-1.0, 255.0, 70.0)
        # peaceful light (225, 114, 55) pushed away from neutral light (202, 156, 99)
        assert color[:3] == pytest.approx((248.0, 72.0, 11.0))


class TestToDrawable:
    def test_rounds_and_clips(self):
        assert to_drawable((-3.2, 12.6, 300.0, 70.4)) == (0, 13, 255, 70)
