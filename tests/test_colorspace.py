# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Tests for luminance, contrast, lightness and visual weight math."""

import numpy as np
import pytest

from designlens.schema import RGBColor
from designlens.measure.colorspace import (
    contrast_ratio,
    is_gray,
    lightness,
    lightness_array,
    luminance_map,
    relative_luminance,
    saturation_array,
    srgb_to_linear,
    visual_weight_map,
)


class TestSRGBToLinear:

    def test_linear_segment_below_threshold(self):
        """Values at or below 0.03928 use the linear segment."""
        linear = srgb_to_linear(np.array([0.03928]))
        assert float(linear[0]) == pytest.approx(0.03928 / 12.92, abs=1e-12)

    def test_gamma_segment_above_threshold(self):
        linear = srgb_to_linear(np.array([0.5]))
        assert float(linear[0]) == pytest.approx(((0.5 + 0.055) / 1.055) ** 2.4, abs=1e-12)

    def test_endpoints(self):
        np.testing.assert_allclose(srgb_to_linear(np.array([0.0, 1.0])), [0.0, 1.0], atol=1e-12)


class TestRelativeLuminance:

    def test_black_is_zero(self):
        assert relative_luminance((0, 0, 0)) == pytest.approx(0.0, abs=1e-12)

    def test_white_is_one(self):
        assert relative_luminance((255, 255, 255)) == pytest.approx(1.0, abs=1e-9)

    def test_primaries_match_channel_weights(self):
        assert relative_luminance((255, 0, 0)) == pytest.approx(0.2126, abs=1e-9)
        assert relative_luminance((0, 255, 0)) == pytest.approx(0.7152, abs=1e-9)
        assert relative_luminance((0, 0, 255)) == pytest.approx(0.0722, abs=1e-9)

    def test_accepts_rgbcolor(self):
        assert relative_luminance(RGBColor(255, 0, 0)) == pytest.approx(0.2126, abs=1e-9)

    def test_map_matches_scalar(self):
        pixels = np.array([[[255, 0, 0], [12, 200, 90]]], dtype=np.uint8)
        lum = luminance_map(pixels)
        assert lum.shape == (1, 2)
        assert lum[0, 1] == pytest.approx(relative_luminance((12, 200, 90)))

    def test_map_ignores_alpha(self):
        rgba = np.array([[[0, 255, 0, 0]]], dtype=np.uint8)
        assert luminance_map(rgba)[0, 0] == pytest.approx(0.7152, abs=1e-9)


class TestContrastRatio:

    def test_black_on_white_is_21(self):
        assert contrast_ratio((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0, abs=1e-6)

    def test_identical_colors_is_one(self):
        assert contrast_ratio((120, 40, 200), (120, 40, 200)) == pytest.approx(1.0)

    @pytest.mark.parametrize("a, b", [
        ((255, 0, 0), (0, 0, 255)),
        ((51, 51, 51), (255, 234, 167)),
        ((0, 0, 0), (78, 205, 196)),
    ])
    def test_symmetric_and_at_least_one(self, a, b):
        ab = contrast_ratio(a, b)
        ba = contrast_ratio(b, a)
        assert ab == ba
        assert ab >= 1.0

    def test_red_on_black(self):
        # (0.2126 + 0.05) / 0.05
        assert contrast_ratio((255, 0, 0), (0, 0, 0)) == pytest.approx(5.252, abs=1e-3)


class TestLightness:

    def test_extremes(self):
        assert lightness((0, 0, 0)) == 0.0
        assert lightness((255, 255, 255)) == pytest.approx(100.0)

    def test_pure_red_is_fifty(self):
        assert lightness((255, 0, 0)) == pytest.approx(50.0)

    def test_array_matches_scalar(self):
        pixels = np.array([[10, 200, 30], [255, 107, 107]], dtype=np.uint8)
        arr = lightness_array(pixels)
        assert arr[0] == pytest.approx(lightness((10, 200, 30)))
        assert arr[1] == pytest.approx(lightness((255, 107, 107)))


class TestSaturationAndWeight:

    def test_black_has_zero_saturation(self):
        assert saturation_array(np.array([0, 0, 0], dtype=np.uint8)) == 0.0

    def test_pure_red_is_fully_saturated(self):
        assert saturation_array(np.array([255, 0, 0], dtype=np.uint8)) == pytest.approx(1.0)

    def test_gray_has_zero_saturation(self):
        assert saturation_array(np.array([128, 128, 128], dtype=np.uint8)) == pytest.approx(0.0)

    def test_white_weight_is_luminance(self):
        weight = visual_weight_map(np.array([[255, 255, 255]], dtype=np.uint8))
        assert weight[0] == pytest.approx(1.0, abs=1e-9)

    def test_saturated_color_weight_doubles_luminance(self):
        weight = visual_weight_map(np.array([[255, 0, 0]], dtype=np.uint8))
        assert weight[0] == pytest.approx(0.2126 * 2, abs=1e-9)

    def test_black_weighs_nothing(self):
        weight = visual_weight_map(np.zeros((4, 4, 3), dtype=np.uint8))
        assert weight.sum() == 0.0


class TestIsGray:

    def test_near_gray(self):
        assert bool(is_gray(np.array([100, 110, 105], dtype=np.uint8)))

    def test_colored(self):
        assert not bool(is_gray(np.array([100, 130, 100], dtype=np.uint8)))

    def test_threshold_is_strict(self):
        """A channel delta of exactly the threshold is not gray."""
        assert not bool(is_gray(np.array([100, 120, 100], dtype=np.uint8), threshold=20))
        assert bool(is_gray(np.array([100, 119, 100], dtype=np.uint8), threshold=20))

    def test_no_uint8_wraparound(self):
        assert not bool(is_gray(np.array([0, 250, 0], dtype=np.uint8)))
