# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Sub-scores and the weighted overall score.

Every function here is total: degenerate input (empty palette, no weight,
NaN) maps to a documented neutral value instead of an error, so a complete
metric record can always be produced once ingestion has succeeded.

Sub-scores:
    text_readability  contrast of text on background, plus text presence
    color             palette size and pairwise contrast harmony
    layout            mean of balance, symmetry and grid alignment
    visual_hierarchy  quadrant-share variance score
    spacing           grid alignment
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import Mapping, Optional, Union

from designlens.schema import (
    LayoutMeasurement,
    RGBColor,
    ScoreWeights,
    SubScores,
    TextPresence,
)
from designlens.measure.colorspace import contrast_ratio
from designlens.measure.layout import NEUTRAL_SCORE, round_half_up

DEFAULT_WEIGHTS = ScoreWeights()

# Share of readability that comes from text/background contrast
_CONTRAST_SHARE = 0.7
_PRESENCE_SHARE = 0.3

# Presence component when no text-like region was found
_NO_TEXT_PRESENCE = 10.0

# Palette pairs whose contrast falls inside this open range count as
# harmonious: distinguishable without clashing
_HARMONY_RANGE = (2.0, 8.0)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _finite_or_neutral(value: Optional[float]) -> float:
    if value is None:
        return NEUTRAL_SCORE
    try:
        value = float(value)
    except (TypeError, ValueError):
        return NEUTRAL_SCORE
    return value if math.isfinite(value) else NEUTRAL_SCORE


def text_presence_component(presence: TextPresence) -> float:
    """10 without text regions, else 30 + 2 per region, capped at 100."""
    if presence.region_count == 0:
        return _NO_TEXT_PRESENCE
    return min(100.0, 30.0 + 2.0 * presence.region_count)


def text_readability_score(contrast: float, presence: TextPresence) -> float:
    """
    Readability from text/background contrast and text presence.

    The contrast part maps ratio r to clamp(8r + 30, 40, 100): anything at
    or below 1.25:1 floors at 40, and 8.75:1 or better saturates at 100.
    """
    contrast_part = _clamp(contrast * 8.0 + 30.0, 40.0, 100.0)
    score = _CONTRAST_SHARE * contrast_part + _PRESENCE_SHARE * text_presence_component(presence)
    return _clamp(score)


def harmony_bonus(palette: tuple[RGBColor, ...]) -> float:
    """5 points per palette pair with contrast inside (2, 8), capped at 20."""
    low, high = _HARMONY_RANGE
    pairs = sum(
        1 for a, b in combinations(palette, 2)
        if low < contrast_ratio(a, b) < high
    )
    return min(5.0 * pairs, 20.0)


def color_score(palette: tuple[RGBColor, ...]) -> float:
    """
    Palette richness and harmony.

    Fewer than three colors score a flat 40. Otherwise the score is
    50 + min(5 per color, 30) + harmony bonus, capped at 100.
    """
    if len(palette) < 3:
        return 40.0
    return min(100.0, 50.0 + min(5.0 * len(palette), 30.0) + harmony_bonus(palette))


def layout_score(layout: LayoutMeasurement) -> float:
    """Mean of balance, symmetry and grid alignment."""
    return (layout.balance + layout.symmetry + layout.grid_alignment) / 3


def spacing_score(layout: LayoutMeasurement) -> float:
    """Spacing is read off grid alignment."""
    return layout.grid_alignment


def compute_sub_scores(
    *,
    contrast: float,
    presence: TextPresence,
    palette: tuple[RGBColor, ...],
    layout: LayoutMeasurement,
) -> SubScores:
    """All five sub-scores for one analysis."""
    return SubScores(
        text_readability=text_readability_score(contrast, presence),
        color=color_score(palette),
        layout=layout_score(layout),
        visual_hierarchy=layout.visual_hierarchy,
        spacing=spacing_score(layout),
    )


def aggregate(
    scores: Union[SubScores, Mapping[str, Optional[float]], None],
    weights: Optional[ScoreWeights] = DEFAULT_WEIGHTS,
) -> int:
    """
    Weighted overall score.

    Accepts a SubScores record or a plain mapping keyed by sub-score name.
    Missing or non-finite entries count as 50. The result is rounded to the
    nearest integer and clamped to [0, 100]; this function never raises.
    Anything other than a ScoreWeights record falls back to DEFAULT_WEIGHTS.
    """
    if not isinstance(weights, ScoreWeights):
        weights = DEFAULT_WEIGHTS

    if isinstance(scores, SubScores):
        values = dict(scores.items())
    elif isinstance(scores, Mapping):
        values = dict(scores)
    else:
        values = {}

    total = 0.0
    for name, weight in weights.to_dict().items():
        total += weight * _clamp(_finite_or_neutral(values.get(name)))
    return int(_clamp(round_half_up(total)))
