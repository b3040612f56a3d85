# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Image-level luminance contrast.

Role contrast (roles.py) compares a handful of quantized colors. This
module looks at the pixels directly:

    overall  mean WCAG ratio of random pixel pairs, clamped to [1, 21]
    text     mean max/min ratio of small windows on a 20 px lattice,
             counting only windows above 3:1 (likely glyph strokes)
    element  0.8 * overall + 0.2 * text

Pixel pairs are drawn from the caller's generator, so a seeded analysis
reproduces the same estimate.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from designlens.schema import ImageContrast
from designlens.measure.colorspace import luminance_map
from designlens.measure.ingest import RasterImage

logger = logging.getLogger(__name__)


PAIR_SAMPLES = 100
PAIR_MARGIN = 10         # pairs avoid the last 10 px of each axis

WINDOW_STEP = 20
WINDOW_MARGIN = 10       # lattice starts and stops 10 px from the edges
WINDOW_RADIUS = 5        # windows are (2r + 1) px square
TEXT_WINDOW_MIN = 3.0
DEFAULT_TEXT_CONTRAST = 4.5

OVERALL_SHARE = 0.8


def _ratio(lighter: NDArray[np.float64], darker: NDArray[np.float64]) -> NDArray[np.float64]:
    return (lighter + 0.05) / (darker + 0.05)


def sample_pair_contrast(
    luminance: NDArray[np.float64],
    *,
    rng: np.random.Generator,
    pairs: int = PAIR_SAMPLES,
    margin: int = PAIR_MARGIN,
) -> NDArray[np.float64]:
    """
    Contrast ratios of random pixel pairs.

    Both points of a pair are drawn uniformly from
    [0, W - margin) x [0, H - margin). An axis shorter than ``margin`` is
    sampled at its first pixel.

    Args:
        luminance: (H, W) relative luminance map
        rng: Random generator
        pairs: Number of pairs to draw
        margin: Pixels excluded at the right and bottom edges

    Returns:
        (pairs,) array of ratios, each >= 1
    """
    height, width = luminance.shape
    span_x = max(1, width - margin)
    span_y = max(1, height - margin)

    u = rng.random((pairs, 4))
    xs = np.floor(u[:, 0::2] * span_x).astype(np.intp)
    ys = np.floor(u[:, 1::2] * span_y).astype(np.intp)

    first = luminance[ys[:, 0], xs[:, 0]]
    second = luminance[ys[:, 1], xs[:, 1]]
    return _ratio(np.maximum(first, second), np.minimum(first, second))


def overall_contrast(ratios: NDArray[np.float64]) -> float:
    """Mean pair ratio clamped to [1, 21]; 1.0 when nothing was sampled."""
    if len(ratios) == 0:
        return 1.0
    return float(min(21.0, max(1.0, float(np.mean(ratios)))))


def local_text_contrast(
    luminance: NDArray[np.float64],
    *,
    step: int = WINDOW_STEP,
    margin: int = WINDOW_MARGIN,
    radius: int = WINDOW_RADIUS,
    min_ratio: float = TEXT_WINDOW_MIN,
    default: float = DEFAULT_TEXT_CONTRAST,
) -> tuple[float, int]:
    """
    Mean contrast of high-contrast windows on a coarse lattice.

    Window centers run from ``margin`` up to (not including) the size minus
    ``margin`` in steps of ``step``. Each window's ratio is its brightest
    over its darkest luminance. Windows at or below ``min_ratio`` are
    ignored.

    Returns:
        (mean ratio of kept windows or ``default``, number of kept windows)
    """
    height, width = luminance.shape
    ys = np.arange(margin, height - margin, step)
    xs = np.arange(margin, width - margin, step)
    if ys.size == 0 or xs.size == 0:
        return default, 0

    size = 2 * radius + 1
    brightest = ndimage.maximum_filter(luminance, size=size, mode="nearest")
    darkest = ndimage.minimum_filter(luminance, size=size, mode="nearest")

    lattice = np.ix_(ys, xs)
    ratios = _ratio(brightest[lattice], darkest[lattice])
    kept = ratios[ratios > min_ratio]
    if kept.size == 0:
        return default, 0
    return min(21.0, float(kept.mean())), int(kept.size)


def measure_image_contrast(
    raster: RasterImage,
    *,
    rng: np.random.Generator,
    pairs: int = PAIR_SAMPLES,
) -> ImageContrast:
    """
    Pixel-level contrast summary of the working raster.

    Alpha is ignored; transparent pixels contribute their stored color.
    """
    luminance = luminance_map(raster.pixels)

    ratios = sample_pair_contrast(luminance, rng=rng, pairs=pairs)
    overall = overall_contrast(ratios)
    text, windows = local_text_contrast(luminance)
    element = OVERALL_SHARE * overall + (1.0 - OVERALL_SHARE) * text

    logger.debug(
        "Image contrast: overall %.2f from %d pairs, text %.2f from %d windows",
        overall, len(ratios), text, windows,
    )
    return ImageContrast(
        overall=overall,
        text=text,
        element=min(21.0, max(1.0, element)),
        sample_pairs=int(len(ratios)),
        text_windows=windows,
    )
