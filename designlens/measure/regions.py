# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Stratified region sampling and quadrant visual-weight tallies.

Color samples are drawn at random from five fixed layout zones (header
corners, navigation strip, main content, footer, sidebar). Every zone gets
the same number of draws, so zones contribute comparably to the color
frequency table regardless of their area.

Quadrant weights are tallied separately on a fixed pixel lattice covering
the whole image, so a flat image always produces four equal quadrants.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from designlens.schema import QuadrantWeights
from designlens.measure.colorspace import is_gray, visual_weight_map
from designlens.measure.ingest import RasterImage


@dataclass(frozen=True, slots=True)
class SampleRegion:
    """
    A named sampling rectangle in fractional image coordinates.

    Attributes:
        name: Stable identifier (e.g. "top-left", "footer")
        x, y: Top-left corner as a fraction of width/height
        width, height: Extent as a fraction of width/height
    """
    name: str
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for attr in ("x", "y", "width", "height"):
            value = getattr(self, attr)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Region {attr} must be 0-1, got {value}")


# Fixed stratified sampling layout, in draw order.
# Regions overlap and do not cover the whole image.
#
#   ┌──────────┬─┬──────────┬───┬─────────┐
#   │ top-left │ │top-center│   │  right- │
#   ├──────────┘ └──────────┘   │ sidebar │
#   │       ┌────────────────┐  │         │
#   │       │     center     │  │         │
#   │       └────────────────┘  │         │
#   ├───────────────────────────┼─────────┤
#   │           footer                    │
#   └─────────────────────────────────────┘
SAMPLE_REGIONS: tuple[SampleRegion, ...] = (
    SampleRegion("top-left", 0.0, 0.0, 0.30, 0.20),
    SampleRegion("top-center", 0.35, 0.0, 0.30, 0.15),
    SampleRegion("center", 0.20, 0.30, 0.60, 0.40),
    SampleRegion("footer", 0.0, 0.80, 1.0, 0.20),
    SampleRegion("right-sidebar", 0.80, 0.0, 0.20, 1.0),
)


@dataclass(frozen=True, eq=False)
class RegionSamples:
    """
    Result of stratified sampling.

    Attributes:
        colors: (N, 3) uint8 RGB samples that survived alpha/gray filtering
        per_region: Survivor count per region name, in region order
        draws: Total coordinates drawn (including discarded ones)
    """
    colors: NDArray[np.uint8]
    per_region: tuple[tuple[str, int], ...]
    draws: int

    @property
    def count(self) -> int:
        return int(len(self.colors))


def sample_regions(
    raster: RasterImage,
    *,
    rng: np.random.Generator,
    samples_per_region: int = 800,
    alpha_floor: int = 128,
    gray_threshold: int = 20,
    regions: tuple[SampleRegion, ...] = SAMPLE_REGIONS,
) -> RegionSamples:
    """
    Draw uniform random pixels inside each sample region.

    Coordinates are floor(region.x * W + u * region.width * W) with u drawn
    from ``rng``. Pixels whose alpha is at or below ``alpha_floor`` and gray
    pixels (every pairwise channel delta below ``gray_threshold``) are
    skipped.

    Args:
        raster: Ingested image
        rng: Random generator; seed it for reproducible samples
        samples_per_region: Draws per region (identical for every region)
        alpha_floor: Pixels with alpha <= this are invisible
        gray_threshold: Channel-delta threshold for gray exclusion
        regions: Sampling layout

    Returns:
        RegionSamples with surviving RGB samples in draw order
    """
    height, width = raster.height, raster.width
    pixels = raster.pixels

    collected: list[NDArray[np.uint8]] = []
    per_region: list[tuple[str, int]] = []

    for region in regions:
        u = rng.random((samples_per_region, 2))
        xs = np.floor(region.x * width + u[:, 0] * region.width * width).astype(np.int64)
        ys = np.floor(region.y * height + u[:, 1] * region.height * height).astype(np.int64)

        inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
        drawn = pixels[ys[inside], xs[inside]]

        visible = drawn[:, 3] > alpha_floor
        keep = visible & ~is_gray(drawn[:, :3], gray_threshold)
        survivors = drawn[keep, :3]

        collected.append(survivors)
        per_region.append((region.name, int(len(survivors))))

    colors = (
        np.concatenate(collected, axis=0)
        if collected else np.empty((0, 3), dtype=np.uint8)
    )
    return RegionSamples(
        colors=colors,
        per_region=tuple(per_region),
        draws=samples_per_region * len(regions),
    )


def quadrant_weights(raster: RasterImage, stride: int = 2) -> QuadrantWeights:
    """
    Tally visual weight per image quadrant.

    Every pixel on a ``stride`` lattice contributes, gray or not. Each
    lattice pixel stands for its stride x stride cell, and its weight is
    spread over the quadrants by how much of that cell lies on each side
    of the midlines x = W / 2 and y = H / 2. Cells tile the image exactly,
    so a flat image gives four equal quadrants at any size.

    Args:
        raster: Ingested image
        stride: Lattice step in both directions

    Returns:
        QuadrantWeights (all zero for an all-black image)
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")

    lattice = raster.pixels[::stride, ::stride]
    weights = visual_weight_map(lattice)

    top, bottom = _split_cells(raster.height, stride)
    left, right = _split_cells(raster.width, stride)

    def tally(rows: NDArray[np.float64], cols: NDArray[np.float64]) -> float:
        return float(rows @ weights @ cols)

    return QuadrantWeights(
        top_left=tally(top, left),
        top_right=tally(top, right),
        bottom_left=tally(bottom, left),
        bottom_right=tally(bottom, right),
    )


def _split_cells(length: int, stride: int) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Per-cell extent before and after the midline length / 2."""
    starts = np.arange(0, length, stride, dtype=np.float64)
    ends = np.minimum(starts + stride, length)
    before = np.clip(np.minimum(ends, length / 2) - starts, 0.0, None)
    return before, (ends - starts) - before
