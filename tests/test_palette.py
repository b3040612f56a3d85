# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Tests for fixed-palette quantization and palette building."""

import numpy as np
import pytest

from designlens.schema import BLACK, WHITE, RGBColor
from designlens.measure.palette import (
    DEFAULT_PALETTE,
    REFERENCE_PALETTE,
    ColorFrequencyTable,
    build_frequency_table,
    build_palette,
    nearest_reference,
    quantize,
)

RED = RGBColor(255, 0, 0)
GREEN = RGBColor(0, 255, 0)
BLUE = RGBColor(0, 0, 255)


def _samples(*rgbs):
    return np.array(rgbs, dtype=np.uint8).reshape(-1, 3)


class TestReferencePalette:

    def test_thirty_distinct_entries(self):
        assert len(REFERENCE_PALETTE) == 30
        assert len(set(REFERENCE_PALETTE)) == 30

    def test_declaration_order(self):
        assert REFERENCE_PALETTE[0].hex == "#FF0000"
        assert REFERENCE_PALETTE[6].hex == "#FF6B6B"
        assert REFERENCE_PALETTE[24].hex == "#000000"
        assert REFERENCE_PALETTE[-1].hex == "#CCCCCC"


class TestQuantize:

    def test_entries_map_to_themselves(self):
        colors = np.array([c.rgb for c in REFERENCE_PALETTE], dtype=np.uint8)
        np.testing.assert_array_equal(quantize(colors), np.arange(30))

    def test_nearest_entry(self):
        assert nearest_reference((250, 5, 5)) == RED
        assert nearest_reference((70, 180, 210)).hex == "#45B7D1"
        assert nearest_reference((10, 10, 10)) == BLACK

    def test_empty_input(self):
        assert quantize(np.empty((0, 3), dtype=np.uint8)).shape == (0,)


class TestFrequencyTable:

    def test_counts(self):
        table = build_frequency_table(_samples(
            (255, 0, 0), (250, 3, 3), (254, 1, 0),
            (0, 0, 255), (0, 0, 250),
            (0, 255, 0),
        ))
        assert table[RED] == 3
        assert table[BLUE] == 2
        assert table[GREEN] == 1
        assert len(table) == 3
        assert table.total == 6

    def test_ranking_descending_count(self):
        table = build_frequency_table(_samples(
            (0, 0, 255), (0, 0, 255), (0, 0, 255), (255, 0, 0),
        ))
        assert table.top() == (BLUE, RED)

    def test_ties_follow_declaration_order(self):
        # BLACK is declared after BLUE, BLUE after RED
        table = ColorFrequencyTable({BLACK: 5, BLUE: 5, RED: 5})
        assert table.top() == (RED, BLUE, BLACK)
        assert list(table) == [RED, BLUE, BLACK]

    def test_top_n(self):
        table = ColorFrequencyTable({c: 100 - i for i, c in enumerate(REFERENCE_PALETTE)})
        assert table.top(10) == REFERENCE_PALETTE[:10]
        assert table.top(0) == ()

    def test_read_only(self):
        table = ColorFrequencyTable({RED: 1})
        with pytest.raises(TypeError):
            table[RED] = 2

    def test_unhit_colors_absent(self):
        table = build_frequency_table(_samples((255, 0, 0)))
        assert BLUE not in table
        assert table.ranked() == ((RED, 1),)

    def test_empty(self):
        table = build_frequency_table(np.empty((0, 3), dtype=np.uint8))
        assert len(table) == 0
        assert table.top() == ()


class TestBuildPalette:

    def test_sorted_by_lightness_descending(self):
        assert build_palette((BLACK, WHITE, RED)) == (WHITE, RED, BLACK)

    def test_equal_lightness_keeps_rank_order(self):
        # Pure primaries all have lightness 50
        assert build_palette((BLUE, RED, GREEN)) == (BLUE, RED, GREEN)

    def test_duplicates_dropped(self):
        assert build_palette((RED, RED, WHITE)) == (WHITE, RED)

    def test_capped(self):
        palette = build_palette(REFERENCE_PALETTE[:20])
        assert len(palette) == 12
        lightness = [c.lightness for c in palette]
        assert lightness == sorted(lightness, reverse=True)

    def test_custom_cap(self):
        assert len(build_palette(REFERENCE_PALETTE, cap=5)) == 5

    def test_empty_uses_default_palette(self):
        palette = build_palette(())
        assert set(palette) == set(DEFAULT_PALETTE)
        assert [c.hex for c in palette] == [
            "#FFFFFF", "#FF6B6B", "#007BFF", "#6C757D", "#333333",
        ]
