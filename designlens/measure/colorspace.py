# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Luminance, contrast and lightness math.

References:
- WCAG 2.x relative luminance:
  https://www.w3.org/TR/WCAG21/#dfn-relative-luminance
- WCAG 2.x contrast ratio:
  https://www.w3.org/TR/WCAG21/#dfn-contrast-ratio

The 0.03928 linearization threshold is the one published in WCAG 2.x
(sRGB itself uses 0.04045). The two differ only for channel values that
never occur in 8-bit input, but results must match the WCAG definition
exactly, so the WCAG constant is used.

Scalar helpers accept anything with three channels (tuple, RGBColor.rgb,
uint8 array). Array helpers operate on (..., 3) uint8 arrays.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Union

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from designlens.schema import RGBColor

RGBLike = Union[Sequence[int], NDArray[np.uint8], "RGBColor"]

# Luminance channel weights (Rec. 709 primaries)
_LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def _channels(rgb: RGBLike) -> tuple[int, int, int]:
    """Normalize a color-like value to an (r, g, b) int tuple."""
    if hasattr(rgb, "rgb"):
        return rgb.rgb
    r, g, b = (int(c) for c in rgb[:3])
    return r, g, b


# =============================================================================
# sRGB → Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB using the WCAG piecewise curve.

    - For values <= 0.03928: value / 12.92
    - For values >  0.03928: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb <= 0.03928,
        srgb / 12.92,
        np.power((srgb + 0.055) / 1.055, 2.4),
    )


# =============================================================================
# Relative Luminance & Contrast
# =============================================================================


def luminance_map(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    Relative luminance for every pixel.

    Args:
        pixels: Array of shape (..., 3) or (..., 4) with uint8 values.
            An alpha channel, if present, is ignored.

    Returns:
        Array of shape (...) with luminance in [0, 1]
    """
    rgb = np.asarray(pixels)[..., :3].astype(np.float64) / 255.0
    return srgb_to_linear(rgb) @ _LUMA_WEIGHTS


def relative_luminance(rgb: RGBLike) -> float:
    """
    WCAG relative luminance of a single color.

    >>> round(relative_luminance((255, 255, 255)), 3)
    1.0
    """
    return float(luminance_map(np.array(_channels(rgb), dtype=np.uint8)))


def contrast_ratio(a: RGBLike, b: RGBLike) -> float:
    """
    WCAG contrast ratio between two colors.

    (brighter + 0.05) / (darker + 0.05), so the result is symmetric and
    always within [1, 21].
    """
    la = relative_luminance(a)
    lb = relative_luminance(b)
    return (max(la, lb) + 0.05) / (min(la, lb) + 0.05)


# =============================================================================
# Lightness & Saturation
# =============================================================================


def lightness(rgb: RGBLike) -> float:
    """HSL lightness (max + min) / 2 of the normalized channels, scaled 0-100."""
    r, g, b = _channels(rgb)
    return (max(r, g, b) + min(r, g, b)) / 2 / 255 * 100


def lightness_array(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """Vectorized lightness (0-100) for (..., 3) pixels."""
    rgb = np.asarray(pixels)[..., :3].astype(np.float64)
    return (rgb.max(axis=-1) + rgb.min(axis=-1)) / 2 / 255 * 100


def saturation_array(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    HSV saturation (max - min) / max for (..., 3) pixels.

    Black pixels (max == 0) have saturation 0.
    """
    rgb = np.asarray(pixels)[..., :3].astype(np.float64) / 255.0
    cmax = rgb.max(axis=-1)
    cmin = rgb.min(axis=-1)
    safe = np.where(cmax == 0, 1.0, cmax)
    return np.where(cmax == 0, 0.0, (cmax - cmin) / safe)


def visual_weight_map(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    Per-pixel visual weight: luminance × (1 + saturation).

    Bright, saturated pixels draw the most attention; black pixels weigh
    nothing. Values lie in [0, 2].
    """
    return luminance_map(pixels) * (1.0 + saturation_array(pixels))


def is_gray(pixels: NDArray[np.uint8], threshold: int = 20) -> NDArray[np.bool_]:
    """
    True where every pairwise channel delta is below ``threshold``.

    Grays are noise for palette purposes but still count for layout math.
    """
    rgb = np.asarray(pixels)[..., :3].astype(np.int16)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return (
        (np.abs(r - g) < threshold)
        & (np.abs(r - b) < threshold)
        & (np.abs(g - b) < threshold)
    )
