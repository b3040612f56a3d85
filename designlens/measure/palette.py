# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Fixed-palette color quantization and palette building.

Samples are snapped to the nearest entry of a 30-color reference palette
(Euclidean distance in RGB). This is deliberately NOT clustering: the
reference palette is fixed, so counts are comparable across images and the
ranking is fully deterministic.

Pipeline:
1. quantize(samples)            → reference-palette indices
2. build_frequency_table(...)   → counts per reference color
3. table.top(n)                 → most frequent colors (ties: palette order)
4. build_palette(top)           → distinct colors, descending lightness
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

from designlens.schema import RGBColor


# Reference palette, in declaration order. Ties in distance and in
# frequency both resolve to the earlier entry.
REFERENCE_PALETTE: tuple[RGBColor, ...] = tuple(
    RGBColor.from_hex(h) for h in (
        # Primaries and secondaries
        "#FF0000", "#00FF00", "#0000FF", "#FFFF00", "#FF00FF", "#00FFFF",
        # Soft UI tones
        "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7", "#DDA0DD",
        "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9", "#F8C471", "#82E0AA",
        # Flat UI tones
        "#E74C3C", "#3498DB", "#2ECC71", "#F39C12", "#9B59B6", "#1ABC9C",
        # Neutrals
        "#000000", "#FFFFFF", "#333333", "#666666", "#999999", "#CCCCCC",
    )
)

# Used when no sample survived filtering (e.g. a grayscale image)
DEFAULT_PALETTE: tuple[RGBColor, ...] = tuple(
    RGBColor.from_hex(h) for h in ("#FFFFFF", "#333333", "#007BFF", "#6C757D", "#FF6B6B")
)

_REFERENCE_RGB = np.array([c.rgb for c in REFERENCE_PALETTE], dtype=np.int32)
_REFERENCE_INDEX = {c: i for i, c in enumerate(REFERENCE_PALETTE)}


def quantize(colors: NDArray[np.uint8]) -> NDArray[np.intp]:
    """
    Map RGB samples to their nearest reference-palette index.

    Args:
        colors: Array of shape (N, 3), uint8

    Returns:
        Array of shape (N,) with indices into REFERENCE_PALETTE
    """
    colors = np.asarray(colors)
    if colors.size == 0:
        return np.empty(0, dtype=np.intp)

    rgb = colors.reshape(-1, 3).astype(np.int32)
    # Squared distance ranks the same as Euclidean; argmin returns the
    # first minimum, which gives declaration-order tie breaking.
    dist = ((rgb[:, None, :] - _REFERENCE_RGB[None, :, :]) ** 2).sum(axis=2)
    return dist.argmin(axis=1)


def nearest_reference(rgb: tuple[int, int, int]) -> RGBColor:
    """Nearest reference-palette color for a single RGB triple."""
    idx = quantize(np.array([rgb], dtype=np.uint8))[0]
    return REFERENCE_PALETTE[int(idx)]


class ColorFrequencyTable(Mapping):
    """
    Read-only mapping of reference color → sample count.

    Only colors that were actually hit are present. Iteration and
    ``ranked()`` both follow the deterministic ranking: descending count,
    ties broken by reference-palette declaration order.
    """

    __slots__ = ("_counts", "_ranked")

    def __init__(self, counts: Mapping[RGBColor, int]):
        self._counts = {c: int(n) for c, n in counts.items() if n > 0}
        self._ranked = tuple(sorted(
            self._counts,
            key=lambda c: (-self._counts[c], _REFERENCE_INDEX.get(c, len(REFERENCE_PALETTE))),
        ))

    def __getitem__(self, color: RGBColor) -> int:
        return self._counts[color]

    def __iter__(self) -> Iterator[RGBColor]:
        return iter(self._ranked)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.hex}: {self._counts[c]}" for c in self._ranked)
        return f"ColorFrequencyTable({{{inner}}})"

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def ranked(self) -> tuple[tuple[RGBColor, int], ...]:
        """(color, count) pairs in ranking order."""
        return tuple((c, self._counts[c]) for c in self._ranked)

    def top(self, n: int = 10) -> tuple[RGBColor, ...]:
        """The ``n`` most frequent colors, in ranking order."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return self._ranked[:n]


def build_frequency_table(colors: NDArray[np.uint8]) -> ColorFrequencyTable:
    """Quantize samples and count hits per reference color."""
    indices = quantize(colors)
    counts = np.bincount(indices, minlength=len(REFERENCE_PALETTE))
    return ColorFrequencyTable({
        REFERENCE_PALETTE[i]: int(n) for i, n in enumerate(counts) if n
    })


def build_palette(top_colors: tuple[RGBColor, ...], cap: int = 12) -> tuple[RGBColor, ...]:
    """
    Turn ranked top colors into the reported palette.

    Duplicates are dropped (first occurrence wins), the rest is ordered by
    descending HSL lightness (stable, so equal lightness keeps rank order)
    and capped at ``cap`` entries.

    Empty input yields DEFAULT_PALETTE, ordered the same way.
    """
    source = tuple(dict.fromkeys(top_colors)) or DEFAULT_PALETTE
    ordered = sorted(source, key=lambda c: -c.lightness)
    return tuple(ordered[:cap])
