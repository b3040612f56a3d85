# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Schema definitions for design metrics.

All types in this module are immutable (frozen dataclasses).
Once metrics are produced, they are a fact and cannot be altered.
"""

from designlens.schema.design_metrics import (
    BLACK,
    SCHEMA_VERSION,
    WCAG_AA,
    WCAG_AA_LARGE,
    WCAG_AAA,
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

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Core color type
    "RGBColor",
    "WHITE",
    "BLACK",
    # Dominant roles and contrast
    "DominantColorSet",
    "ContrastMeasurement",
    "WCAG_AA",
    "WCAG_AA_LARGE",
    "WCAG_AAA",
    # Layout
    "QuadrantWeights",
    "LayoutMeasurement",
    # Image-level contrast and color counts
    "ImageContrast",
    "ColorCount",
    # Text presence (edge-density proxy)
    "TextPresence",
    # Scores
    "SubScores",
    "ScoreWeights",
    # Image metadata
    "ImageInfo",
    # Top-level container
    "DesignMetrics",
]
