# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
DesignLens -- Visual metric extraction for design critique.

Turns a screenshot or mockup into objective, structured metrics (palette,
dominant colors, WCAG contrast, layout balance, text presence, scores)
that a critique writer or language model can consume.

Quick start::

    from designlens import analyze

    m = analyze("landing.png", seed=7)
    m.overall_score    # 0-100
    m.to_prompt()      # Human-readable for critique prompts
    m.to_json()        # Full JSON record
"""

from __future__ import annotations

__version__ = "1.0.0"

from designlens.measure import (
    AnalysisConfig,
    IngestionError,
    RasterImage,
    analyze,
    load_image,
)
from designlens.schema import (
    ContrastMeasurement,
    DesignMetrics,
    DominantColorSet,
    LayoutMeasurement,
    RGBColor,
    ScoreWeights,
    SubScores,
)

__all__ = [
    # Core API
    "analyze",
    "load_image",
    "AnalysisConfig",
    "DesignMetrics",
    # Errors
    "IngestionError",
    # Types (commonly needed)
    "RasterImage",
    "RGBColor",
    "DominantColorSet",
    "ContrastMeasurement",
    "LayoutMeasurement",
    "SubScores",
    "ScoreWeights",
    # Version
    "__version__",
]
