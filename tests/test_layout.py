# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Tests for layout balance, symmetry, grid alignment and hierarchy."""

import numpy as np
import pytest

from designlens.schema import QuadrantWeights
from designlens.measure.ingest import load_image
from designlens.measure.layout import (
    analyze_layout,
    balance,
    count_grid_lines,
    grid_alignment,
    round_half_up,
    symmetry,
    visual_hierarchy,
)
from designlens.measure.regions import quadrant_weights


def _solid_image(r, g, b, height=100, width=100):
    """Create a solid-color image."""
    return np.full((height, width, 3), [r, g, b], dtype=np.uint8)


EVEN = QuadrantWeights(1.0, 1.0, 1.0, 1.0)
EMPTY = QuadrantWeights()
ONE_CORNER = QuadrantWeights(1.0, 0.0, 0.0, 0.0)


class TestBalance:

    def test_even_is_perfect(self):
        assert balance(EVEN) == 100

    def test_no_weight_is_neutral(self):
        assert balance(EMPTY) == 50

    def test_left_heavy(self):
        # Horizontal 0, vertical 100
        assert balance(QuadrantWeights(1.0, 0.0, 1.0, 0.0)) == 50

    def test_single_corner(self):
        assert balance(ONE_CORNER) == 0

    def test_rounded_to_integer(self):
        value = balance(QuadrantWeights(3.0, 1.0, 2.0, 2.0))
        assert value == int(value)


class TestSymmetry:

    def test_even_is_perfect(self):
        assert symmetry(EVEN) == 100

    def test_empty_quadrants_are_symmetric(self):
        assert symmetry(EMPTY) == 100

    def test_single_corner(self):
        assert symmetry(ONE_CORNER) == 50

    def test_empty_top_left(self):
        assert symmetry(QuadrantWeights(0.0, 1.0, 1.0, 1.0)) == 50

    def test_partial(self):
        # Pairs score 75, 100, 75
        assert symmetry(QuadrantWeights(2.0, 1.0, 2.0, 1.0)) == 83


class TestVisualHierarchy:

    def test_even_is_perfect(self):
        assert visual_hierarchy(EVEN) == pytest.approx(100.0)

    def test_single_corner_is_zero(self):
        assert visual_hierarchy(ONE_CORNER) == pytest.approx(0.0)

    def test_no_weight_is_neutral(self):
        assert visual_hierarchy(EMPTY) == 50

    def test_top_half(self):
        # Shares (.5, .5, 0, 0): variance .0625
        assert visual_hierarchy(QuadrantWeights(1.0, 1.0, 0.0, 0.0)) == pytest.approx(100 * (1 - 1 / 3))

    def test_scale_invariant(self):
        small = QuadrantWeights(1.0, 2.0, 3.0, 4.0)
        large = QuadrantWeights(1000.0, 2000.0, 3000.0, 4000.0)
        assert visual_hierarchy(small) == pytest.approx(visual_hierarchy(large))


class TestGridLines:

    def test_run_must_exceed_fraction(self):
        edges = np.zeros((100, 30), dtype=bool)
        edges[20:30, 0] = True  # exactly 10% of the height
        assert count_grid_lines(edges) == 0
        edges[20:31, 0] = True
        assert count_grid_lines(edges) == 1

    def test_run_reaching_column_end_counts(self):
        edges = np.zeros((100, 30), dtype=bool)
        edges[85:, 10] = True
        assert count_grid_lines(edges) == 1

    def test_only_sampled_columns_count(self):
        edges = np.zeros((100, 30), dtype=bool)
        edges[:, 5] = True
        assert count_grid_lines(edges) == 0
        assert count_grid_lines(edges, spacing=5) == 1

    def test_broken_runs_do_not_add_up(self):
        edges = np.zeros((100, 10), dtype=bool)
        edges[0:8, 0] = True
        edges[9:17, 0] = True
        assert count_grid_lines(edges) == 0


class TestGridAlignment:

    def test_flat_is_base(self):
        assert grid_alignment(np.zeros((100, 100))) == (50.0, 0)

    def test_single_column_boundary(self):
        lum = np.zeros((100, 100))
        lum[:, 50:] = 255.0
        assert grid_alignment(lum) == (55.0, 1)

    def test_bonus_is_capped(self):
        lum = np.zeros((100, 100))
        for x in range(100):
            if (x // 5) % 2:
                lum[:, x] = 255.0
        score, lines = grid_alignment(lum)
        assert lines == 9
        assert score == 80.0

    def test_edge_threshold_is_strict(self):
        lum = np.zeros((100, 100))
        lum[:, 50:] = 30.0
        assert grid_alignment(lum, edge_threshold=30.0) == (50.0, 0)


class TestAnalyzeLayout:

    def test_uniform_image(self):
        raster = load_image(_solid_image(90, 160, 220))
        layout = analyze_layout(raster, quadrant_weights(raster))
        assert layout.balance == 100
        assert layout.symmetry == 100
        assert layout.grid_alignment == 50
        assert layout.grid_lines == 0
        assert layout.visual_hierarchy == pytest.approx(100.0)

    def test_red_left_blue_right(self):
        img = np.zeros((300, 400, 3), dtype=np.uint8)
        img[:, :200] = [255, 0, 0]
        img[:, 200:] = [0, 0, 255]
        raster = load_image(img)
        layout = analyze_layout(raster, quadrant_weights(raster))
        assert layout.balance < 100
        assert layout.symmetry < 100
        # Red/blue luminance differs by about 36 on the 0-255 scale
        assert layout.grid_lines == 1

    def test_scores_bounded_on_noise(self):
        pixels = np.random.default_rng(11).integers(0, 256, (90, 130, 3), dtype=np.uint8)
        raster = load_image(pixels)
        layout = analyze_layout(raster, quadrant_weights(raster))
        for value in (layout.balance, layout.symmetry, layout.grid_alignment, layout.visual_hierarchy):
            assert 0 <= value <= 100


class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(83.5) == 84

    def test_regular_rounding(self):
        assert round_half_up(83.33) == 83
        assert round_half_up(0.49) == 0
