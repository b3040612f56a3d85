# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Tests for schema validation and serialization."""

import json

import pytest

from designlens.schema import (
    BLACK,
    SCHEMA_VERSION,
    WHITE,
    ColorCount,
    ContrastMeasurement,
    DesignMetrics,
    DominantColorSet,
    ImageContrast,
    ImageInfo,
    LayoutMeasurement,
    QuadrantWeights,
    RGBColor,
    ScoreWeights,
    SubScores,
    TextPresence,
)

RED = RGBColor(255, 0, 0)
BLUE = RGBColor(0, 0, 255)


def _roles():
    return DominantColorSet(
        background=WHITE, text=BLACK, primary=RED, secondary=BLUE,
        accent=RGBColor.from_hex("#FF6B6B"),
    )


def _metrics(**overrides):
    fields = dict(
        palette=(WHITE, RED, BLACK),
        dominant_colors=_roles(),
        contrasts=(ContrastMeasurement("text/background", BLACK, WHITE, 21.0),),
        contrast_ratio=21.0,
        layout=LayoutMeasurement(
            quadrants=QuadrantWeights(1.0, 2.0, 3.0, 4.0),
            balance=80.0, symmetry=60.0, grid_alignment=55.0,
            visual_hierarchy=70.0, grid_lines=1,
        ),
        text=TextPresence(region_count=3, region_pixels=120, coverage=0.012,
                          largest_region=60, edge_pixels=150),
        scores=SubScores(73.0, 75.0, 65.0, 70.0, 55.0),
        overall_score=68,
        image=ImageInfo(width=100, height=80, source_width=100, source_height=80,
                        sample_count=3200, mime_type="image/png"),
    )
    fields.update(overrides)
    return DesignMetrics(**fields)


class TestRGBColor:

    def test_hex_is_uppercase(self):
        assert RGBColor(171, 205, 239).hex == "#ABCDEF"

    def test_from_hex_variants(self):
        assert RGBColor.from_hex("#abcdef") == RGBColor(171, 205, 239)
        assert RGBColor.from_hex("ABCDEF") == RGBColor(171, 205, 239)

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            RGBColor.from_hex("#12345")

    def test_channel_range(self):
        with pytest.raises(ValueError):
            RGBColor(256, 0, 0)
        with pytest.raises(ValueError):
            RGBColor(0, -1, 0)

    def test_complement(self):
        assert RGBColor(255, 107, 107).complement() == RGBColor(0, 148, 148)

    def test_derived_values(self):
        assert WHITE.lightness == pytest.approx(100.0)
        assert BLACK.luminance == pytest.approx(0.0)
        assert str(RED) == "#FF0000"

    def test_hashable(self):
        assert len({RED, RGBColor(255, 0, 0), BLUE}) == 2


class TestDominantColorSet:

    def test_background_and_text_must_differ(self):
        with pytest.raises(ValueError):
            DominantColorSet(WHITE, WHITE, RED, BLUE, RED)

    def test_items_in_role_order(self):
        assert [role for role, _ in _roles().items()] == [
            "background", "text", "primary", "secondary", "accent",
        ]

    def test_dict_roundtrip(self):
        roles = _roles()
        assert roles.to_dict()["background"] == "#FFFFFF"
        assert DominantColorSet.from_dict(roles.to_dict()) == roles


class TestContrastMeasurement:

    def test_ratio_below_one_rejected(self):
        with pytest.raises(ValueError):
            ContrastMeasurement("x", BLACK, WHITE, 0.9)

    def test_wcag_flags(self):
        aa = ContrastMeasurement("x", BLACK, WHITE, 4.5)
        assert aa.passes_aa and aa.passes_aa_large and not aa.passes_aaa
        large = ContrastMeasurement("x", BLACK, WHITE, 3.0)
        assert large.passes_aa_large and not large.passes_aa
        assert ContrastMeasurement("x", BLACK, WHITE, 7.0).passes_aaa


class TestQuadrantWeights:

    def test_derived_sums(self):
        q = QuadrantWeights(1.0, 2.0, 3.0, 4.0)
        assert (q.left, q.right, q.top, q.bottom, q.total) == (4.0, 6.0, 3.0, 7.0, 10.0)

    def test_defaults_to_zero(self):
        assert QuadrantWeights().as_tuple() == (0.0, 0.0, 0.0, 0.0)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            QuadrantWeights(top_left=-1.0)

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            QuadrantWeights(top_right=float("nan"))


class TestScores:

    def test_layout_scores_validated(self):
        with pytest.raises(ValueError):
            LayoutMeasurement(QuadrantWeights(), balance=101.0, symmetry=50.0,
                              grid_alignment=50.0, visual_hierarchy=50.0)

    def test_sub_scores_validated(self):
        with pytest.raises(ValueError):
            SubScores(50.0, 50.0, float("nan"), 50.0, 50.0)

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError):
            ScoreWeights(0.5, 0.5, 0.5, 0.0, 0.0)

    def test_negative_weights_rejected(self):
        with pytest.raises(ValueError):
            ScoreWeights(-0.1, 0.35, 0.30, 0.25, 0.20)

    def test_equal_weights(self):
        w = ScoreWeights.equal()
        assert set(w.to_dict().values()) == {0.2}

    def test_text_presence_validated(self):
        with pytest.raises(ValueError):
            TextPresence(coverage=1.5)
        with pytest.raises(ValueError):
            TextPresence(region_count=-1)


class TestImageContrast:

    def test_ratios_bounded(self):
        with pytest.raises(ValueError):
            ImageContrast(0.5, 4.5, 1.3)
        with pytest.raises(ValueError):
            ImageContrast(2.0, 22.0, 6.0)

    def test_counts_non_negative(self):
        with pytest.raises(ValueError):
            ImageContrast(2.0, 4.5, 2.5, sample_pairs=-1)

    def test_color_count_positive(self):
        with pytest.raises(ValueError):
            ColorCount(RED, 0)
        assert ColorCount(RED, 3).to_dict() == {"color": "#FF0000", "count": 3}


class TestDesignMetrics:

    def test_palette_required(self):
        with pytest.raises(ValueError):
            _metrics(palette=())

    def test_palette_capped(self):
        palette = tuple(RGBColor(i, 0, 0) for i in range(13))
        with pytest.raises(ValueError):
            _metrics(palette=palette)

    def test_palette_distinct(self):
        with pytest.raises(ValueError):
            _metrics(palette=(WHITE, WHITE))

    def test_overall_range(self):
        with pytest.raises(ValueError):
            _metrics(overall_score=101)

    def test_text_contrast_lookup(self):
        assert _metrics().text_contrast.ratio == 21.0

    def test_optional_fields_omitted(self):
        data = _metrics().to_dict()
        assert "seed" not in data
        assert "image_hash" not in data
        assert data["version"] == SCHEMA_VERSION

    def test_optional_fields_present(self):
        data = _metrics(seed=7, image_hash="sha256:0123456789abcdef").to_dict()
        assert data["seed"] == 7
        assert data["image_hash"] == "sha256:0123456789abcdef"

    def test_json_roundtrip(self):
        m = _metrics(seed=7)
        restored = DesignMetrics.from_json(m.to_json())
        assert restored == m

    def test_json_is_plain(self):
        data = json.loads(_metrics().to_json())
        assert data["palette"] == ["#FFFFFF", "#FF0000", "#000000"]
        assert data["dominant_colors"]["text"] == "#000000"
        assert data["layout"]["quadrants"]["bottom_right"] == 4.0
        assert data["text"]["scope"] == "edge_density_proxy"

    def test_image_contrast_and_distribution_roundtrip(self):
        m = _metrics(
            image_contrast=ImageContrast(3.2, 12.5, 5.06, sample_pairs=100, text_windows=14),
            color_distribution=(ColorCount(WHITE, 900), ColorCount(RED, 120)),
        )
        data = json.loads(m.to_json())
        assert data["image_contrast"]["text_windows"] == 14
        assert data["color_distribution"] == [
            {"color": "#FFFFFF", "count": 900},
            {"color": "#FF0000", "count": 120},
        ]
        assert DesignMetrics.from_json(m.to_json()) == m

    def test_image_contrast_omitted_when_absent(self):
        data = _metrics().to_dict()
        assert "image_contrast" not in data
        assert data["color_distribution"] == []

    def test_distribution_must_be_ranked(self):
        with pytest.raises(ValueError):
            _metrics(color_distribution=(ColorCount(RED, 1), ColorCount(WHITE, 5)))

    def test_immutable(self):
        m = _metrics()
        with pytest.raises(AttributeError):
            m.overall_score = 10
