# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Dominant-role assignment and role contrast measurement.

Roles are picked from the ranked top colors:

    background  first top color lighter than the lightness floor
    text        the top color with the best contrast against background,
                replaced by black/white when that contrast is too low
    primary     \\
    secondary    > next unassigned top colors, synthesized when missing
    accent      /

Synthesized fills come from fixed module-level tables, so the same top
colors always produce the same roles.
"""

from __future__ import annotations

import logging
from typing import Optional

from designlens.schema import (
    BLACK,
    WHITE,
    ContrastMeasurement,
    DominantColorSet,
    RGBColor,
)
from designlens.measure.colorspace import contrast_ratio

logger = logging.getLogger(__name__)


VIBRANT_COLORS: tuple[RGBColor, ...] = tuple(
    RGBColor.from_hex(h) for h in (
        "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4",
        "#FFEAA7", "#DDA0DD", "#F7DC6F", "#BB8FCE",
    )
)

# Paired secondary for a synthesized or sampled primary
COMPLEMENT_PAIRS: dict[RGBColor, RGBColor] = {
    RGBColor.from_hex(a): RGBColor.from_hex(b) for a, b in (
        ("#FF6B6B", "#4ECDC4"),
        ("#4ECDC4", "#FF6B6B"),
        ("#45B7D1", "#FFEAA7"),
        ("#96CEB4", "#DDA0DD"),
        ("#FFEAA7", "#45B7D1"),
        ("#DDA0DD", "#96CEB4"),
    )
}

FALLBACK_ACCENT = RGBColor.from_hex("#FF6B6B")

# Relative-luminance window for a synthesized accent (exclusive)
ACCENT_LUMINANCE_RANGE = (0.3, 0.7)


def _pick_background(top_colors: tuple[RGBColor, ...], min_lightness: float) -> RGBColor:
    for color in top_colors:
        if color.lightness > min_lightness:
            return color
    if top_colors:
        return top_colors[0]
    return WHITE


def _pick_text(
    top_colors: tuple[RGBColor, ...],
    background: RGBColor,
    min_contrast: float,
) -> RGBColor:
    best: Optional[RGBColor] = None
    best_ratio = 0.0
    for color in top_colors:
        if color == background:
            continue
        ratio = contrast_ratio(color, background)
        if ratio > best_ratio:
            best, best_ratio = color, ratio

    if best is not None and best_ratio >= min_contrast:
        return best

    # Black or white, whichever sits farther from the background in
    # lightness. One of the two always reaches at least 4.58:1.
    bg_lightness = background.lightness
    preferred, other = (WHITE, BLACK) if 100.0 - bg_lightness > bg_lightness else (BLACK, WHITE)
    if contrast_ratio(preferred, background) >= min_contrast:
        chosen = preferred
    else:
        chosen = other
    logger.debug(
        "Text contrast %.2f below %.1f, using %s", best_ratio, min_contrast, chosen.hex
    )
    return chosen


def _synthesize_primary(background: RGBColor) -> RGBColor:
    # max() keeps the first of equal keys, so ties go to declaration order
    return max(VIBRANT_COLORS, key=lambda c: contrast_ratio(c, background))


def _synthesize_secondary(primary: RGBColor) -> RGBColor:
    return COMPLEMENT_PAIRS.get(primary) or primary.complement()


def _synthesize_accent(
    palette: tuple[RGBColor, ...],
    taken: tuple[RGBColor, ...],
) -> RGBColor:
    low, high = ACCENT_LUMINANCE_RANGE
    for color in palette:
        if color in taken:
            continue
        if low < color.luminance < high:
            return color
    for color in (FALLBACK_ACCENT, *VIBRANT_COLORS):
        if color not in taken:
            return color
    return FALLBACK_ACCENT


def assign_roles(
    top_colors: tuple[RGBColor, ...],
    palette: tuple[RGBColor, ...] = (),
    *,
    min_contrast: float = 3.0,
    background_min_lightness: float = 60.0,
) -> DominantColorSet:
    """
    Assign background, text, primary, secondary and accent.

    Args:
        top_colors: Ranked most-frequent colors (may be empty)
        palette: Reported palette, searched for a mid-luminance accent
        min_contrast: Floor for text/background contrast
        background_min_lightness: Lightness (0-100) a background must exceed

    Returns:
        DominantColorSet whose text/background contrast is >= min_contrast
    """
    top_colors = tuple(top_colors)

    background = _pick_background(top_colors, background_min_lightness)
    text = _pick_text(top_colors, background, min_contrast)

    remaining = [c for c in top_colors if c not in (background, text)]

    primary = remaining[0] if len(remaining) > 0 else _synthesize_primary(background)
    secondary = remaining[1] if len(remaining) > 1 else _synthesize_secondary(primary)
    accent = remaining[2] if len(remaining) > 2 else _synthesize_accent(
        palette, (background, text, primary, secondary)
    )

    return DominantColorSet(
        background=background,
        text=text,
        primary=primary,
        secondary=secondary,
        accent=accent,
    )


def measure_contrasts(dominant: DominantColorSet) -> tuple[ContrastMeasurement, ...]:
    """
    Contrast of every foreground role against the background.

    Order: text, primary, secondary, accent.
    """
    background = dominant.background
    measurements = []
    for role, color in dominant.items():
        if role == "background":
            continue
        measurements.append(ContrastMeasurement(
            label=f"{role}/background",
            foreground=color,
            background=background,
            ratio=contrast_ratio(color, background),
        ))
    return tuple(measurements)
