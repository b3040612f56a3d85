# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Edge-region text heuristic.

Flags pixels with a sharp local luminance change, then grows 8-connected
regions out of the flagged pixels. Dense clusters of small high-contrast
strokes are what rendered text looks like at this level of detail, so the
region statistics serve as a coarse "how much text is here" proxy.

No characters are recognized and no text content is produced. The only
properties claimed are determinism and boundedness.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from designlens.schema import TextPresence
from designlens.measure.colorspace import luminance_map
from designlens.measure.ingest import RasterImage

logger = logging.getLogger(__name__)

# 8-connectivity for region growth
_CONNECTIVITY = np.ones((3, 3), dtype=bool)


def luminance_255(raster: RasterImage) -> NDArray[np.float64]:
    """Relative luminance of every pixel, scaled to 0-255."""
    return luminance_map(raster.pixels) * 255.0


def edge_map(luminance: NDArray[np.float64], threshold: float) -> NDArray[np.bool_]:
    """
    Flag pixels whose luminance differs from any 8-neighbor by more than
    ``threshold``.

    Borders are handled by replicating the outermost row/column, so a
    border pixel is never flagged because of the image edge itself.

    Args:
        luminance: (H, W) luminance map on a 0-255 scale
        threshold: Minimum absolute difference to count as an edge

    Returns:
        (H, W) boolean edge mask
    """
    lum = np.asarray(luminance, dtype=np.float64)
    height, width = lum.shape
    padded = np.pad(lum, 1, mode="edge")

    max_diff = np.zeros_like(lum)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue
            neighbor = padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]
            np.maximum(max_diff, np.abs(lum - neighbor), out=max_diff)

    return max_diff > threshold


@dataclass(frozen=True, eq=False)
class TextRegionHypothesis:
    """
    One connected cluster of edge pixels.

    A hypothesis about where text might be, never decoded.

    Attributes:
        pixels: Flat (row-major) pixel indices, ascending
        bbox: (top, left, bottom, right), bottom/right exclusive
    """
    pixels: NDArray[np.intp]
    bbox: tuple[int, int, int, int]

    @property
    def size(self) -> int:
        return int(len(self.pixels))

    @property
    def first_index(self) -> int:
        return int(self.pixels[0])


def find_text_regions(
    edges: NDArray[np.bool_],
    min_pixels: int = 10,
) -> tuple[TextRegionHypothesis, ...]:
    """
    Group edge pixels into 8-connected regions.

    Regions smaller than ``min_pixels`` are discarded. The rest are ordered
    by size descending, ties by their first flat index.
    """
    edges = np.asarray(edges, dtype=bool)
    labels, count = ndimage.label(edges, structure=_CONNECTIVITY)
    if count == 0:
        return ()

    flat = labels.ravel()
    sizes = np.bincount(flat, minlength=count + 1)
    boxes = ndimage.find_objects(labels)

    # Group flat indices by label in one pass; stable sort keeps them ascending
    order = np.argsort(flat, kind="stable")
    bounds = np.concatenate(([0], np.cumsum(sizes)))

    regions: list[TextRegionHypothesis] = []
    for label in range(1, count + 1):
        if sizes[label] < min_pixels:
            continue
        members = order[bounds[label]:bounds[label + 1]]
        rows, cols = boxes[label - 1]
        regions.append(TextRegionHypothesis(
            pixels=members,
            bbox=(rows.start, cols.start, rows.stop, cols.stop),
        ))

    regions.sort(key=lambda r: (-r.size, r.first_index))
    return tuple(regions)


def summarize_regions(
    regions: tuple[TextRegionHypothesis, ...],
    *,
    image_pixels: int,
    edge_pixels: int,
) -> TextPresence:
    """Collapse region hypotheses into the reported TextPresence."""
    region_pixels = sum(r.size for r in regions)
    coverage = region_pixels / image_pixels if image_pixels else 0.0
    return TextPresence(
        region_count=len(regions),
        region_pixels=region_pixels,
        coverage=min(1.0, coverage),
        largest_region=regions[0].size if regions else 0,
        edge_pixels=edge_pixels,
    )


def detect_text_presence(
    raster: RasterImage,
    *,
    edge_threshold: float = 50.0,
    min_pixels: int = 10,
) -> TextPresence:
    """
    Run the edge-region heuristic over a raster.

    Args:
        raster: Ingested image
        edge_threshold: Luminance delta (0-255 scale) that marks an edge
        min_pixels: Smallest region kept

    Returns:
        TextPresence summary (zero counts for a flat image)
    """
    edges = edge_map(luminance_255(raster), edge_threshold)
    regions = find_text_regions(edges, min_pixels=min_pixels)
    presence = summarize_regions(
        regions,
        image_pixels=raster.width * raster.height,
        edge_pixels=int(edges.sum()),
    )
    logger.debug(
        "Text heuristic: %d edge pixels, %d regions",
        presence.edge_pixels, presence.region_count,
    )
    return presence
