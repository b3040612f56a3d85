# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Main analysis API.

This is the primary entry point for DesignLens's measurement core.

Stages:
    ingest → sample → { color | layout | text | image contrast }
           → roles + role contrast → scores

The middle passes only read the raster and never depend on one another,
so they run on a small thread pool and are joined before role
assignment. The image-contrast pass is the only one that draws from the
generator after region sampling, which keeps seeded runs reproducible.
"""

from __future__ import annotations

import hashlib
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from designlens.schema import (
    ColorCount,
    DesignMetrics,
    ImageContrast,
    ImageInfo,
    LayoutMeasurement,
    RGBColor,
    TextPresence,
)
from designlens.measure.config import AnalysisConfig
from designlens.measure.contrast import measure_image_contrast
from designlens.measure.ingest import ImageSource, RasterImage, load_image
from designlens.measure.layout import analyze_layout
from designlens.measure.palette import build_frequency_table, build_palette
from designlens.measure.regions import RegionSamples, quadrant_weights, sample_regions
from designlens.measure.roles import assign_roles, measure_contrasts
from designlens.measure.scoring import aggregate, compute_sub_scores
from designlens.measure.text import detect_text_presence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ColorResult:
    top_colors: tuple[RGBColor, ...]
    palette: tuple[RGBColor, ...]
    distribution: tuple[ColorCount, ...]


def _color_pass(samples: RegionSamples, config: AnalysisConfig) -> _ColorResult:
    table = build_frequency_table(samples.colors)
    top_colors = table.top(config.top_n)
    palette = build_palette(top_colors, cap=config.palette_cap)
    logger.debug(
        "Color pass: %d samples, %d reference colors hit, palette of %d",
        samples.count, len(table), len(palette),
    )
    distribution = tuple(
        ColorCount(color, count) for color, count in table.ranked()[: config.distribution_size]
    )
    return _ColorResult(top_colors=top_colors, palette=palette, distribution=distribution)


def _layout_pass(raster: RasterImage, config: AnalysisConfig) -> LayoutMeasurement:
    quadrants = quadrant_weights(raster, stride=config.layout_stride)
    return analyze_layout(
        raster,
        quadrants,
        grid_line_spacing=config.grid_line_spacing,
        grid_edge_threshold=config.grid_edge_threshold,
        grid_run_fraction=config.grid_run_fraction,
        grid_line_bonus=config.grid_line_bonus,
        grid_bonus_cap=config.grid_bonus_cap,
    )


def _text_pass(raster: RasterImage, config: AnalysisConfig) -> TextPresence:
    return detect_text_presence(
        raster,
        edge_threshold=config.text_edge_threshold,
        min_pixels=config.min_region_pixels,
    )


def _contrast_pass(
    raster: RasterImage, rng: np.random.Generator, config: AnalysisConfig
) -> ImageContrast:
    return measure_image_contrast(raster, rng=rng, pairs=config.contrast_pairs)


def _make_rng(seed: Optional[int]) -> np.random.Generator:
    # numpy only takes non-negative seeds; wrap negatives into its range
    if seed is not None and seed < 0:
        seed %= 2**64
    return np.random.default_rng(seed)


def image_hash(raster: RasterImage) -> str:
    """Short SHA-256 digest of the working RGBA buffer."""
    return f"sha256:{hashlib.sha256(raster.pixels.tobytes()).hexdigest()[:16]}"


def analyze(
    image: Union[ImageSource, RasterImage],
    *,
    mime_type: Optional[str] = None,
    seed: Optional[int] = None,
    config: Optional[AnalysisConfig] = None,
    include_hash: bool = True,
) -> DesignMetrics:
    """
    Extract design metrics from an image.

    This is the primary API for DesignLens. It produces a DesignMetrics
    record containing:
    - Palette (up to 12 colors, light to dark)
    - Dominant role colors and their contrast against the background
    - Layout balance, symmetry, alignment and hierarchy
    - Edge-region text presence (a density proxy, not OCR)
    - Image-level contrast and the most frequent sampled colors
    - Five sub-scores and the weighted overall score

    Args:
        image: Encoded bytes, file path, binary file object, (H, W, 3|4)
            uint8 array, or a RasterImage from load_image()
        mime_type: Declared MIME type of an encoded payload
        seed: Sampling seed. The same image and seed always produce the
            same metrics. None draws fresh entropy. Negative seeds are
            wrapped modulo 2**64; the caller's value is recorded.
        config: Tunables (uses defaults if None)
        include_hash: Include a SHA-256 hash of the working raster

    Returns:
        DesignMetrics for the image

    Raises:
        IngestionError: The image could not be decoded

    Example:
        >>> from designlens import analyze
        >>> m = analyze("landing.png", seed=7)
        >>> m.overall_score
        74
        >>> m.dominant_colors.background.hex
        '#FFFFFF'
    """
    cfg = config or AnalysisConfig()
    started = time.perf_counter()

    raster = load_image(image, mime_type=mime_type, max_dimension=cfg.max_dimension)

    rng = _make_rng(seed)
    samples = sample_regions(
        raster,
        rng=rng,
        samples_per_region=cfg.samples_per_region,
        alpha_floor=cfg.alpha_floor,
        gray_threshold=cfg.gray_threshold,
    )
    logger.debug(
        "Sampled %d/%d colors from %dx%d raster (%s)",
        samples.count, samples.draws, raster.width, raster.height,
        ", ".join(f"{name}={n}" for name, n in samples.per_region),
    )

    if cfg.parallel:
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="designlens") as pool:
            color_future = pool.submit(_color_pass, samples, cfg)
            layout_future = pool.submit(_layout_pass, raster, cfg)
            text_future = pool.submit(_text_pass, raster, cfg)
            contrast_future = pool.submit(_contrast_pass, raster, rng, cfg)
            color = color_future.result()
            layout = layout_future.result()
            text = text_future.result()
            image_contrast = contrast_future.result()
    else:
        color = _color_pass(samples, cfg)
        layout = _layout_pass(raster, cfg)
        text = _text_pass(raster, cfg)
        image_contrast = _contrast_pass(raster, rng, cfg)

    dominant = assign_roles(
        color.top_colors,
        color.palette,
        min_contrast=cfg.min_text_contrast,
        background_min_lightness=cfg.background_min_lightness,
    )
    contrasts = measure_contrasts(dominant)
    text_contrast = contrasts[0].ratio

    scores = compute_sub_scores(
        contrast=text_contrast,
        presence=text,
        palette=color.palette,
        layout=layout,
    )
    overall = aggregate(scores, cfg.weights)

    metrics = DesignMetrics(
        palette=color.palette,
        dominant_colors=dominant,
        contrasts=contrasts,
        contrast_ratio=text_contrast,
        layout=layout,
        text=text,
        image_contrast=image_contrast,
        color_distribution=color.distribution,
        scores=scores,
        overall_score=overall,
        image=ImageInfo(
            width=raster.width,
            height=raster.height,
            source_width=raster.source_width,
            source_height=raster.source_height,
            sample_count=samples.count,
            mime_type=raster.mime_type,
        ),
        weights=cfg.weights,
        seed=seed,
        image_hash=image_hash(raster) if include_hash else None,
    )
    logger.debug(
        "Analysis finished in %.1f ms: overall=%d", (time.perf_counter() - started) * 1000, overall
    )
    return metrics
