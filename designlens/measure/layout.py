# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Layout balance, symmetry, alignment and hierarchy.

Balance, symmetry and hierarchy are pure functions of the four quadrant
weights. Grid alignment looks at the raster itself: it samples vertical
lines and checks for long runs of edge pixels, which is what column
boundaries and aligned content edges produce.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from designlens.schema import LayoutMeasurement, QuadrantWeights
from designlens.measure.ingest import RasterImage
from designlens.measure.text import edge_map, luminance_255

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0

# Variance of the four quadrant shares when one quadrant holds all weight:
# shares (1, 0, 0, 0), mean 0.25 → ((0.75)² + 3 × (0.25)²) / 4
MAX_SHARE_VARIANCE = 0.1875


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def balance(quadrants: QuadrantWeights) -> float:
    """
    Horizontal and vertical weight balance, averaged.

    Each axis scores 100 - |a - b| / total * 100. Returns 50 for an image
    with no visual weight at all.
    """
    total = quadrants.total
    if total <= 0:
        return NEUTRAL_SCORE
    horizontal = 100.0 - abs(quadrants.left - quadrants.right) / total * 100.0
    vertical = 100.0 - abs(quadrants.top - quadrants.bottom) / total * 100.0
    return float(round_half_up(_clamp((horizontal + vertical) / 2)))


def _pair_symmetry(a: float, b: float) -> float:
    peak = max(a, b)
    if peak <= 0:
        return 100.0
    return 100.0 - abs(a - b) / peak * 50.0


def symmetry(quadrants: QuadrantWeights) -> float:
    """
    Top-left quadrant compared against each of the other three.

    Each pair scores 100 - |a - b| / max(a, b) * 50, so the worst pair
    scores 50 and two empty quadrants count as perfectly symmetric.
    """
    tl = quadrants.top_left
    pairs = (
        _pair_symmetry(tl, quadrants.top_right),
        _pair_symmetry(tl, quadrants.bottom_left),
        _pair_symmetry(tl, quadrants.bottom_right),
    )
    return float(round_half_up(_clamp(sum(pairs) / len(pairs))))


def visual_hierarchy(quadrants: QuadrantWeights) -> float:
    """
    100 minus the normalized variance of quadrant weight shares.

    Even weight scores 100, everything in one quadrant scores 0. Returns
    50 for an image with no visual weight.
    """
    total = quadrants.total
    if total <= 0:
        return NEUTRAL_SCORE
    shares = np.array(quadrants.as_tuple(), dtype=np.float64) / total
    variance = float(shares.var())
    return _clamp(100.0 * (1.0 - variance / MAX_SHARE_VARIANCE))


def _longest_run(column: NDArray[np.bool_]) -> int:
    """Length of the longest run of True values (runs may touch either end)."""
    padded = np.concatenate(([False], column, [False])).astype(np.int8)
    steps = np.diff(padded)
    starts = np.flatnonzero(steps == 1)
    ends = np.flatnonzero(steps == -1)
    if len(starts) == 0:
        return 0
    return int((ends - starts).max())


def count_grid_lines(
    edges: NDArray[np.bool_],
    *,
    spacing: int = 10,
    run_fraction: float = 0.1,
) -> int:
    """
    Count sampled vertical lines that carry a long edge run.

    Lines are sampled at x = 0, spacing, 2 * spacing, ... A line qualifies
    when its longest run of edge pixels is longer than run_fraction × height.
    """
    height = edges.shape[0]
    min_run = run_fraction * height
    return sum(
        1 for x in range(0, edges.shape[1], spacing)
        if _longest_run(edges[:, x]) > min_run
    )


def grid_alignment(
    luminance: NDArray[np.float64],
    *,
    spacing: int = 10,
    edge_threshold: float = 30.0,
    run_fraction: float = 0.1,
    line_bonus: float = 5.0,
    bonus_cap: float = 30.0,
) -> tuple[float, int]:
    """
    Alignment score from vertical edge runs.

    Args:
        luminance: (H, W) luminance on a 0-255 scale
        spacing: Distance between sampled vertical lines, in pixels
        edge_threshold: Neighbor luminance delta that marks an edge
        run_fraction: Minimum run length as a fraction of image height
        line_bonus: Points per qualifying line
        bonus_cap: Maximum total bonus

    Returns:
        (score, qualifying_line_count) with score = 50 + capped bonus
    """
    edges = edge_map(luminance, edge_threshold)
    lines = count_grid_lines(edges, spacing=spacing, run_fraction=run_fraction)
    bonus = min(lines * line_bonus, bonus_cap)
    return _clamp(NEUTRAL_SCORE + bonus), lines


def analyze_layout(
    raster: RasterImage,
    quadrants: QuadrantWeights,
    *,
    grid_line_spacing: int = 10,
    grid_edge_threshold: float = 30.0,
    grid_run_fraction: float = 0.1,
    grid_line_bonus: float = 5.0,
    grid_bonus_cap: float = 30.0,
) -> LayoutMeasurement:
    """Compute every layout metric for one raster."""
    grid, lines = grid_alignment(
        luminance_255(raster),
        spacing=grid_line_spacing,
        edge_threshold=grid_edge_threshold,
        run_fraction=grid_run_fraction,
        line_bonus=grid_line_bonus,
        bonus_cap=grid_bonus_cap,
    )
    measurement = LayoutMeasurement(
        quadrants=quadrants,
        balance=balance(quadrants),
        symmetry=symmetry(quadrants),
        grid_alignment=grid,
        visual_hierarchy=visual_hierarchy(quadrants),
        grid_lines=lines,
    )
    logger.debug(
        "Layout: balance=%.0f symmetry=%.0f grid=%.0f (%d lines)",
        measurement.balance, measurement.symmetry, grid, lines,
    )
    return measurement
